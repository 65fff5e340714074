"""
Portfolio Composition Engine - Main Application

FastAPI backend with:
- In-memory dashboard sessions (one portfolio document per session)
- Simulated or DeepSeek-backed content generation
- Rule-based AI mentor chat
- JWT session tokens (mock sign-in)

Run: uvicorn app.main:app --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import api_router
from app.core.config import get_settings
from app.core.logging import get_logger
from app.services.session_service import get_session_store

settings = get_settings()
logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Portfolio Composition Engine",
    description="""
    The student dashboard's portfolio builder.

    ## Features
    - **Sessions**: Start a dashboard session, get a bearer token
    - **Portfolio**: Add, edit, reorder and remove typed content blocks
    - **Images**: Upload images embedded as data URIs
    - **Generation**: Portfolio summary, skill roadmap, project ideas, resume tips
    - **Assistant**: AI mentor chat that reads your skills, projects and job matches
    - **Search**: Filter projects, jobs and skills

    ## State
    Everything is held in memory per session and dropped when the session ends.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Portfolio Composition Engine"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "generation_backend": settings.generation_backend,
        "active_sessions": len(get_session_store()),
    }
