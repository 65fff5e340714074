"""
Authentication Utility - JWT session tokens.

Provides:
- JWT token creation/verification for dashboard sessions
- FastAPI dependency resolving the bearer token to the caller's session

Sign-in itself is mocked: the identity supplied at session start is trusted
and nothing is checked against a user store.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import get_settings
from app.services.session_service import DashboardSession, get_session_store

# Bearer token extractor
bearer_scheme = HTTPBearer()


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def create_session_token(session: DashboardSession) -> str:
    return create_access_token(data={
        "sub": session.session_id,
        "name": session.identity.name,
        "email": session.identity.email,
        "role": session.identity.role.value,
    })


async def get_current_session(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> DashboardSession:
    """
    FastAPI dependency - Get the caller's dashboard session.

    Usage:
        @router.get("/protected")
        async def route(session: DashboardSession = Depends(get_current_session)):
            ...
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(credentials.credentials)
    if not payload:
        raise credentials_exception

    session_id = payload.get("sub")
    if not session_id:
        raise credentials_exception

    session = get_session_store().get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found. Start a new session.")

    return session


async def get_current_student(session: DashboardSession = Depends(get_current_session)) -> DashboardSession:
    """Dependency - Require the student role (portfolio builder is student-only)."""
    if session.identity.role.value != "student":
        raise HTTPException(status_code=403, detail="Students only")
    return session
