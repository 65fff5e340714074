"""
Session Routes

POST /sessions - Start a dashboard session and get a JWT token
GET /sessions/me - Get the current session's identity
DELETE /sessions/me - Discard the session and all its state
GET /notifications - Drain pending notifications
"""

from fastapi import APIRouter, Depends

from app.core.auth import create_session_token, get_current_session
from app.services.session_service import DashboardSession, get_session_store
from app.schemas.schemas import (
    UserIdentity, SessionResponse, MessageResponse, NotificationListResponse
)

router = APIRouter(tags=["Sessions"])


@router.post("/sessions", response_model=SessionResponse, status_code=201)
async def start_session(identity: UserIdentity):
    """
    Start a dashboard session for a signed-in user.

    Sign-in is mocked: the identity is trusted as given.
    Include token in requests: Authorization: Bearer <token>
    """
    session = get_session_store().create(identity)
    return SessionResponse(
        access_token=create_session_token(session),
        session_id=session.session_id,
        portfolio_title=session.document.title,
    )


@router.get("/sessions/me", response_model=UserIdentity)
async def get_me(session: DashboardSession = Depends(get_current_session)):
    """Get current session's identity."""
    return session.identity


@router.delete("/sessions/me", response_model=MessageResponse)
async def end_session(session: DashboardSession = Depends(get_current_session)):
    """Discard the session. Document, transcript and notifications are dropped."""
    get_session_store().discard(session.session_id)
    return MessageResponse(message="Session ended")


@router.get("/notifications", response_model=NotificationListResponse)
async def get_notifications(session: DashboardSession = Depends(get_current_session)):
    """Return and clear pending notifications (shown as toasts)."""
    return NotificationListResponse(notifications=session.notifications.drain())
