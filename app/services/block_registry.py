"""
Content-Block Schema Registry

Defines the fixed set of portfolio block kinds and the default content each
kind starts with. The registry is consulted once, when a block is created;
later edits never go back to it.
"""

import copy
from typing import Any, Dict, FrozenSet

from app.core.errors import UnknownKindError
from app.schemas.schemas import BlockKind


# ============================================================
# DEFAULT CONTENT BY KIND
# ============================================================

_DEFAULTS: Dict[BlockKind, Dict[str, Any]] = {
    BlockKind.text: {
        "text": "Your compelling content here...",
        "size": "medium",
        "align": "left",
        "style": "paragraph",
    },
    BlockKind.image: {
        "src": "",
        "alt": "Professional image",
        "width": "100%",
        "caption": "",
    },
    BlockKind.project: {
        "title": "Project Title",
        "description": "Detailed project description highlighting your role and achievements...",
        "tech": [],
        "link": "",
        "github": "",
        "demo": "",
        "features": [],
    },
    BlockKind.skill: {
        "skill": "Skill Name",
        "level": 80,
        "description": "",
    },
    BlockKind.contact: {
        "title": "Get In Touch",
        "methods": [],
    },
    BlockKind.education: {
        "degree": "Bachelor of Science",
        "field": "Computer Science",
        "university": "University Name",
        "year": "2024",
        "gpa": "",
        "honors": [],
    },
    BlockKind.experience: {
        "title": "Software Developer Intern",
        "company": "Company Name",
        "duration": "2023-2024",
        "description": "Detailed description of your responsibilities and achievements...",
        "achievements": [],
    },
    BlockKind.testimonial: {
        "quote": "Outstanding work and dedication to quality...",
        "author": "Client/Colleague Name",
        "position": "Title at Company",
        "avatar": "",
    },
    BlockKind.certificate: {
        "name": "Certificate Name",
        "issuer": "Issuing Organization",
        "date": "2024",
        "credentialId": "",
        "verifyUrl": "",
    },
}

ARRAY_FIELDS: Dict[BlockKind, FrozenSet[str]] = {
    BlockKind.project: frozenset({"tech", "features"}),
    BlockKind.contact: frozenset({"methods"}),
    BlockKind.education: frozenset({"honors"}),
    BlockKind.experience: frozenset({"achievements"}),
}

# Palette labels, used in user-facing notifications
BLOCK_LABELS: Dict[BlockKind, str] = {
    BlockKind.text: "Text Block",
    BlockKind.image: "Image",
    BlockKind.project: "Project Card",
    BlockKind.skill: "Skill Bar",
    BlockKind.contact: "Contact Form",
    BlockKind.education: "Education",
    BlockKind.experience: "Experience",
    BlockKind.testimonial: "Testimonial",
    BlockKind.certificate: "Certificate",
}

# Field that receives an uploaded image when the caller names none
DEFAULT_IMAGE_FIELD: Dict[BlockKind, str] = {
    BlockKind.testimonial: "avatar",
}

# Fields that take the stricter avatar upload ceiling
AVATAR_FIELDS: FrozenSet[str] = frozenset({"avatar"})

DEFAULT_STYLE: Dict[str, str] = {
    "padding": "16px",
    "margin": "8px",
    "backgroundColor": "transparent",
    "borderRadius": "8px",
}


def resolve_kind(kind) -> BlockKind:
    """Coerce a string or enum to a BlockKind, or raise UnknownKindError."""
    if isinstance(kind, BlockKind):
        return kind
    try:
        return BlockKind(kind)
    except ValueError:
        raise UnknownKindError(kind) from None


def default_content(kind) -> Dict[str, Any]:
    """
    Return a fresh default content mapping for a block kind.

    Raises:
        UnknownKindError: kind is not one of the registered block kinds
    """
    return copy.deepcopy(_DEFAULTS[resolve_kind(kind)])


def array_fields(kind) -> FrozenSet[str]:
    return ARRAY_FIELDS.get(resolve_kind(kind), frozenset())


def block_label(kind) -> str:
    return BLOCK_LABELS[resolve_kind(kind)]


def default_image_field(kind) -> str:
    return DEFAULT_IMAGE_FIELD.get(resolve_kind(kind), "src")
