"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from app.api.routes.session_routes import router as session_router
from app.api.routes.portfolio_routes import router as portfolio_router
from app.api.routes.generation_routes import router as generation_router
from app.api.routes.search_routes import router as search_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(session_router)
api_router.include_router(portfolio_router)
api_router.include_router(generation_router)
api_router.include_router(search_router)
