"""
Search Routes

GET /search?q= - Filter projects, jobs and skills
GET /datasets - Full read-only datasets for the session
"""

from fastapi import APIRouter, Depends, Query

from app.core.auth import get_current_student
from app.services.session_service import DashboardSession
from app.schemas.schemas import SearchResponse, LiveState

router = APIRouter(tags=["Search"])


@router.get("/search", response_model=SearchResponse)
async def search(
    q: str = Query("", max_length=200, description="Case-insensitive substring"),
    session: DashboardSession = Depends(get_current_student)
):
    """
    Filter the three collections independently.

    - projects: title, description, tech
    - jobs: title, company, skills
    - skills: name, category

    Empty query returns everything.
    """
    results = session.search(q)
    return SearchResponse(query=q, **results)


@router.get("/datasets", response_model=LiveState)
async def datasets(session: DashboardSession = Depends(get_current_student)):
    """Live state snapshot: identity, skills, projects, jobs, block count, metrics."""
    return session.live_state()
