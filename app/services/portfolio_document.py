"""
Portfolio Document Model

An ordered, single-writer collection of content blocks.

RULES:
- Callers only ever get copies of blocks; every mutation goes through the
  operations below.
- Each operation runs under the document lock, so no operation observes a
  half-applied mutation from another.
- Operations that target an unknown block id are silent no-ops.
- Array fields never hold blank strings once an operation returns. Rows opened
  with append_array_field are tracked as pending until they receive a value.
"""

import threading
import uuid
from typing import Any, Dict, List, Optional, Tuple

from app.core.logging import get_logger
from app.schemas.schemas import BlockKind, ContentBlock
from app.services.block_registry import (
    DEFAULT_STYLE,
    array_fields,
    default_content,
    resolve_kind,
)

logger = get_logger(__name__)

SKILL_LEVEL_MIN = 0
SKILL_LEVEL_MAX = 100


def is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def prune_blanks(items: List[Any]) -> List[Any]:
    """Drop blank entries from an array field."""
    return [item for item in items if not is_blank(item)]


def clamp_level(value: Any, fallback: int) -> int:
    """Clamp a skill level to [0, 100]; non-numeric input keeps the fallback."""
    try:
        level = int(round(float(value)))
    except (TypeError, ValueError):
        return fallback
    return max(SKILL_LEVEL_MIN, min(SKILL_LEVEL_MAX, level))


class PortfolioDocument:
    """
    In-memory portfolio made of typed content blocks.

    Usage:
        doc = PortfolioDocument(title="Ada's Portfolio")
        block = doc.add_block("skill")
        doc.update_block(block.id, {"level": 95})
    """

    def __init__(self, title: str = "My Portfolio"):
        self.title = title
        self._blocks: Dict[str, ContentBlock] = {}
        self._selected_id: Optional[str] = None
        self._pending_rows: Dict[Tuple[str, str], int] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------

    def __len__(self) -> int:
        with self._lock:
            return len(self._blocks)

    @property
    def selected_id(self) -> Optional[str]:
        with self._lock:
            return self._selected_id

    def blocks(self) -> List[ContentBlock]:
        """All blocks, ordered by their `order`, as detached copies."""
        with self._lock:
            ordered = sorted(self._blocks.values(), key=lambda b: b.order)
            return [b.model_copy(deep=True) for b in ordered]

    def get_block(self, block_id: str) -> Optional[ContentBlock]:
        with self._lock:
            block = self._blocks.get(block_id)
            return block.model_copy(deep=True) if block else None

    def pending_rows(self, block_id: str, field: str) -> int:
        """Number of rows opened by append_array_field and not yet filled."""
        with self._lock:
            return self._pending_rows.get((block_id, field), 0)

    # ------------------------------------------------------------
    # Block lifecycle
    # ------------------------------------------------------------

    def add_block(self, kind) -> ContentBlock:
        """
        Create a block with the kind's default content, append it and select it.

        Raises:
            UnknownKindError: kind is not a registered block kind
        """
        block_kind = resolve_kind(kind)
        content = default_content(block_kind)

        with self._lock:
            block = ContentBlock(
                id=f"{block_kind.value}_{uuid.uuid4().hex}",
                kind=block_kind,
                content=content,
                style=dict(DEFAULT_STYLE),
                order=self._next_order(),
            )
            self._blocks[block.id] = block
            self._selected_id = block.id
            logger.debug(f"Added {block_kind.value} block {block.id} at order {block.order}")
            return block.model_copy(deep=True)

    def remove_block(self, block_id: str) -> bool:
        """Remove a block. Returns False (and does nothing) if the id is unknown."""
        with self._lock:
            if self._blocks.pop(block_id, None) is None:
                logger.debug(f"remove_block ignored unknown id {block_id}")
                return False
            if self._selected_id == block_id:
                self._selected_id = None
            for key in [k for k in self._pending_rows if k[0] == block_id]:
                del self._pending_rows[key]
            return True

    def select(self, block_id: Optional[str]) -> bool:
        """Select a block, or clear the selection with None."""
        with self._lock:
            if block_id is None:
                self._selected_id = None
                return True
            if block_id not in self._blocks:
                return False
            self._selected_id = block_id
            return True

    def move_block(self, block_id: str, position: int) -> bool:
        """Move a block to `position` in the current ordering and renumber orders."""
        with self._lock:
            if block_id not in self._blocks:
                return False
            ordered = [b for b in sorted(self._blocks.values(), key=lambda b: b.order) if b.id != block_id]
            position = max(0, min(position, len(ordered)))
            ordered.insert(position, self._blocks[block_id])
            for i, block in enumerate(ordered):
                block.order = i
            return True

    # ------------------------------------------------------------
    # Content mutation
    # ------------------------------------------------------------

    def update_block(self, block_id: str, partial_content: Dict[str, Any]) -> Optional[ContentBlock]:
        """
        Shallow-merge `partial_content` into a block's content.

        Keys not mentioned are left alone. Skill levels are clamped and array
        fields are pruned of blanks. Returns the updated block, or None for an
        unknown id.
        """
        with self._lock:
            block = self._blocks.get(block_id)
            if block is None:
                logger.debug(f"update_block ignored unknown id {block_id}")
                return None

            arrays = array_fields(block.kind)
            merged = dict(block.content)
            for key, value in partial_content.items():
                if key in arrays and isinstance(value, (list, tuple)):
                    value = prune_blanks(list(value))
                    self._pending_rows.pop((block_id, key), None)
                elif block.kind == BlockKind.skill and key == "level":
                    value = clamp_level(value, merged.get("level", SKILL_LEVEL_MIN))
                merged[key] = value
            block.content = merged
            return block.model_copy(deep=True)

    def set_array_field(self, block_id: str, field: str, index: int, value: str) -> Optional[List[Any]]:
        """
        Edit one row of an array field.

        A blank value at an existing index removes that row; any other write
        sets the row, or appends it when the index is past the end. Blank rows
        are then pruned from the whole array. Returns the new array, or None
        when the block is unknown or the field holds a non-array value.
        """
        with self._lock:
            block = self._blocks.get(block_id)
            if block is None:
                logger.debug(f"set_array_field ignored unknown id {block_id}")
                return None

            current = block.content.get(field)
            if current is not None and not isinstance(current, list):
                logger.debug(f"set_array_field ignored non-array field {field} on {block_id}")
                return None
            rows = list(current or [])

            if index < len(rows):
                if is_blank(value):
                    del rows[index]
                else:
                    rows[index] = value
            else:
                self._release_pending_row(block_id, field)
                rows.append(value)

            rows = prune_blanks(rows)
            block.content = {**block.content, field: rows}
            return list(rows)

    def append_array_field(self, block_id: str, field: str) -> Optional[int]:
        """
        Open a new blank row at the end of an array field for the caller to edit.

        Returns the index the caller should pass to set_array_field, or None
        for an unknown block.
        """
        with self._lock:
            block = self._blocks.get(block_id)
            if block is None:
                logger.debug(f"append_array_field ignored unknown id {block_id}")
                return None

            current = block.content.get(field)
            if current is not None and not isinstance(current, list):
                return None
            if current is None:
                block.content = {**block.content, field: []}
                current = []

            key = (block_id, field)
            index = len(current) + self._pending_rows.get(key, 0)
            self._pending_rows[key] = self._pending_rows.get(key, 0) + 1
            return index

    # ------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------

    def _next_order(self) -> int:
        # Block count, unless earlier removals left a higher order in use
        if not self._blocks:
            return 0
        highest = max(b.order for b in self._blocks.values())
        return max(len(self._blocks), highest + 1)

    def _release_pending_row(self, block_id: str, field: str) -> None:
        key = (block_id, field)
        remaining = self._pending_rows.get(key, 0) - 1
        if remaining > 0:
            self._pending_rows[key] = remaining
        else:
            self._pending_rows.pop(key, None)
