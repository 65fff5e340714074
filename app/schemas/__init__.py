"""
Schemas module - domain models and API contract (what client sends/receives).

Usage:
    from app.schemas.schemas import ContentBlock, BlockKind, LiveState
"""
