"""
Generation & Assistant Routes

POST /generation/{kind} - Run a content generation request
GET /generation/status - Current workflow status and last request
POST /assistant/messages - Send a message to the AI mentor
GET /assistant/messages - Get the chat transcript

Only one generation and one assistant reply may be in flight per session;
a second request while one is running gets 409.
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import Optional

from app.core.auth import get_current_student
from app.services.session_service import DashboardSession
from app.schemas.schemas import (
    GenerationKind, GenerationRequest, GenerationStatus,
    AssistantMessageRequest, TranscriptResponse
)

router = APIRouter(tags=["Generation"])


@router.post("/generation/{kind}", response_model=GenerationRequest)
async def generate(
    kind: GenerationKind,
    block_id: Optional[str] = Query(None, description="Write the result into this block"),
    field: str = Query("text", description="Target field when block_id is given"),
    session: DashboardSession = Depends(get_current_student)
):
    """
    Generate portfolio content from the current skills, projects and jobs.

    Intents:
    - portfolio-summary
    - skill-roadmap
    - project-ideas
    - resume-tips
    """
    if block_id:
        request = await session.generate_into_block(kind, block_id, field)
    else:
        request = await session.generate(kind)

    if request is None:
        raise HTTPException(status_code=409, detail="A generation request is already running")
    if request.status == GenerationStatus.failed:
        raise HTTPException(status_code=502, detail="AI content generation failed. Please try again.")
    return request


@router.get("/generation/status")
async def generation_status(session: DashboardSession = Depends(get_current_student)):
    workflow = session.generation
    return {
        "status": workflow.status.value,
        "last_request": workflow.last_request,
    }


@router.post("/assistant/messages", response_model=TranscriptResponse)
async def send_message(data: AssistantMessageRequest, session: DashboardSession = Depends(get_current_student)):
    """Send a message; the mentor reply is appended to the transcript."""
    if not data.text.strip():
        raise HTTPException(status_code=400, detail="Message is empty")
    if session.assistant.pending:
        raise HTTPException(status_code=409, detail="The AI mentor is still replying")

    reply = await session.ask(data.text)
    if reply is None:
        raise HTTPException(status_code=502, detail="AI mentor is temporarily unavailable. Please try again.")
    return TranscriptResponse(messages=session.assistant.transcript)


@router.get("/assistant/messages", response_model=TranscriptResponse)
async def get_transcript(session: DashboardSession = Depends(get_current_student)):
    return TranscriptResponse(
        messages=session.assistant.transcript,
        pending=session.assistant.pending,
    )
