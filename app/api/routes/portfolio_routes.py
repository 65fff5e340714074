"""
Portfolio Routes

GET /portfolio/blocks - List blocks in order
POST /portfolio/blocks - Add a block (becomes selected)
GET /portfolio/blocks/{block_id} - Get one block
PATCH /portfolio/blocks/{block_id} - Merge content fields
DELETE /portfolio/blocks/{block_id} - Remove block (idempotent)
PUT /portfolio/blocks/{block_id}/select - Select block
PUT /portfolio/blocks/{block_id}/position - Move block
PUT /portfolio/blocks/{block_id}/arrays/{field} - Set/clear one array row
POST /portfolio/blocks/{block_id}/arrays/{field} - Open a new array row
POST /portfolio/blocks/{block_id}/image - Upload image (JPEG/PNG/GIF/WebP/SVG)
GET /portfolio/image/formats - Get supported image formats
PUT /portfolio/profile - Save profile form (validated)
POST /portfolio/save - Save draft
POST /portfolio/publish - Publish portfolio

Unknown block ids are silent no-ops for mutations, matching the document
model; only reads of a missing block return 404.
"""

from fastapi import APIRouter, HTTPException, Depends, UploadFile, File, Form, Query
from typing import List, Optional

from app.core.auth import get_current_student
from app.core.errors import TooLargeError, UnsupportedTypeError
from app.services.session_service import DashboardSession
from app.utils.image_upload import read_upload, get_supported_formats
from app.schemas.schemas import (
    BlockCreate, BlockUpdate, ContentBlock, BlockListResponse, ArrayFieldSet,
    ArrayFieldAppendResponse, ProfileSaveRequest, ValidationResponse, MessageResponse
)

router = APIRouter(prefix="/portfolio", tags=["Portfolio"])


def _block_list(session: DashboardSession) -> BlockListResponse:
    blocks = session.document.blocks()
    return BlockListResponse(
        title=session.document.title,
        blocks=blocks,
        selected_id=session.document.selected_id,
        total=len(blocks),
    )


@router.get("/blocks", response_model=BlockListResponse)
async def list_blocks(session: DashboardSession = Depends(get_current_student)):
    """List portfolio blocks ordered by position."""
    return _block_list(session)


@router.post("/blocks", response_model=ContentBlock, status_code=201)
async def add_block(data: BlockCreate, session: DashboardSession = Depends(get_current_student)):
    """Add a block with its kind's default content. The new block becomes selected."""
    return session.add_block(data.kind)


@router.get("/blocks/{block_id}", response_model=ContentBlock)
async def get_block(block_id: str, session: DashboardSession = Depends(get_current_student)):
    block = session.document.get_block(block_id)
    if block is None:
        raise HTTPException(status_code=404, detail="Block not found")
    return block


@router.patch("/blocks/{block_id}", response_model=BlockListResponse)
async def update_block(block_id: str, data: BlockUpdate, session: DashboardSession = Depends(get_current_student)):
    """Shallow-merge content fields. Fields not sent are untouched."""
    session.update_block(block_id, data.content)
    return _block_list(session)


@router.delete("/blocks/{block_id}", response_model=MessageResponse)
async def remove_block(block_id: str, session: DashboardSession = Depends(get_current_student)):
    """Remove a block. Removing an unknown or already-removed block is not an error."""
    removed = session.remove_block(block_id)
    return MessageResponse(message="Component removed successfully" if removed else "Nothing to remove")


@router.put("/blocks/{block_id}/select", response_model=BlockListResponse)
async def select_block(block_id: str, session: DashboardSession = Depends(get_current_student)):
    session.select_block(block_id)
    return _block_list(session)


@router.put("/blocks/{block_id}/position", response_model=BlockListResponse)
async def move_block(
    block_id: str,
    position: int = Query(..., ge=0),
    session: DashboardSession = Depends(get_current_student)
):
    session.move_block(block_id, position)
    return _block_list(session)


@router.put("/blocks/{block_id}/arrays/{field}", response_model=List[str])
async def set_array_field(
    block_id: str,
    field: str,
    data: ArrayFieldSet,
    session: DashboardSession = Depends(get_current_student)
):
    """
    Set one row of an array field. Sending a blank value for an existing row
    removes it.
    """
    rows = session.set_array_field(block_id, field, data.index, data.value)
    return rows or []


@router.post("/blocks/{block_id}/arrays/{field}", response_model=ArrayFieldAppendResponse)
async def append_array_field(block_id: str, field: str, session: DashboardSession = Depends(get_current_student)):
    """Open a blank row; fill it with PUT using the returned index."""
    index = session.append_array_field(block_id, field)
    if index is None:
        raise HTTPException(status_code=404, detail="Block not found or field is not a list")
    return ArrayFieldAppendResponse(index=index)


@router.post("/blocks/{block_id}/image", response_model=BlockListResponse)
async def upload_image(
    block_id: str,
    file: UploadFile = File(...),
    field: Optional[str] = Form(None),
    session: DashboardSession = Depends(get_current_student)
):
    """
    Upload an image into a block field (default `src`, `avatar` for testimonials).

    Max size: 10MB (5MB for avatars).
    """
    content, content_type = await read_upload(file)
    try:
        session.upload_image(block_id, content, content_type, field)
    except TooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except UnsupportedTypeError as e:
        raise HTTPException(status_code=415, detail=str(e))
    return _block_list(session)


@router.get("/image/formats")
async def image_formats():
    """Get supported image formats and size limits."""
    return get_supported_formats()


@router.put("/profile", response_model=ValidationResponse)
async def save_profile(data: ProfileSaveRequest, session: DashboardSession = Depends(get_current_student)):
    """Save profile form fields. Requires a valid email and a full name of 2+ characters."""
    result = session.save_profile(data.data)
    if not result.is_valid:
        raise HTTPException(status_code=400, detail=result.errors)
    return ValidationResponse(is_valid=True)


@router.post("/save", response_model=MessageResponse)
async def save_draft(session: DashboardSession = Depends(get_current_student)):
    session.save_draft()
    return MessageResponse(message="Changes saved successfully!")


@router.post("/publish", response_model=MessageResponse)
async def publish(session: DashboardSession = Depends(get_current_student)):
    session.publish()
    return MessageResponse(message="Portfolio published!")
