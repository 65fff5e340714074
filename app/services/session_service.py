"""
Dashboard Session Service

One session per signed-in student. The session owns:
- the portfolio document (the only mutable shared state)
- the chat transcript (via the assistant engine)
- the generation workflow
- the notification feed
- read-only snapshots of skills, projects and job postings

Everything lives in memory and disappears when the session is discarded.
Save/publish are hand-offs to the persistence collaborator and never touch
the document.
"""

import threading
import time
import uuid
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from app.core.config import get_settings
from app.core.errors import ImageError
from app.core.logging import get_logger
from app.schemas.schemas import (
    ContentBlock,
    DashboardMetrics,
    GenerationRequest,
    GenerationStatus,
    JobPosting,
    LiveState,
    Project,
    Skill,
    UserIdentity,
)
from app.services.assistant_service import AssistantEngine
from app.services.block_registry import array_fields, block_label
from app.services.form_validation import PROFILE_RULES, ValidationResult, validate_form
from app.services.generation_service import ContentGenerator, GenerationWorkflow, build_generator
from app.services.notification_service import NotificationFeed
from app.services.portfolio_document import PortfolioDocument
from app.services.sample_data import sample_jobs, sample_metrics, sample_projects, sample_skills
from app.services.search_service import filter_collections
from app.utils.image_upload import ingest_image

logger = get_logger(__name__)

DEFAULT_SUBTITLE = "Aspiring Full Stack Developer"


class DashboardSession:
    """Single-user dashboard state exposed only through operation calls."""

    def __init__(
        self,
        identity: UserIdentity,
        skills: Optional[Sequence[Skill]] = None,
        projects: Optional[Sequence[Project]] = None,
        jobs: Optional[Sequence[JobPosting]] = None,
        metrics: Optional[DashboardMetrics] = None,
        generator: Optional[ContentGenerator] = None,
        mentor=None,
        session_id: Optional[str] = None,
    ):
        self.session_id = session_id or uuid.uuid4().hex
        self.identity = identity
        self.subtitle = DEFAULT_SUBTITLE

        # Immutable snapshots for the session's lifetime
        self.skills = tuple(sample_skills() if skills is None else skills)
        self.projects = tuple(sample_projects() if projects is None else projects)
        self.jobs = tuple(sample_jobs() if jobs is None else jobs)
        self.metrics = metrics or sample_metrics()

        self.notifications = NotificationFeed()
        self.document = PortfolioDocument(title=f"{identity.name}'s Portfolio")
        self.generation = GenerationWorkflow(generator or build_generator(), self.notifications)
        self.assistant = AssistantEngine(mentor, self.notifications)
        self.profile: Dict[str, Any] = {"fullName": identity.name, "email": identity.email}

    # ------------------------------------------------------------
    # Live state
    # ------------------------------------------------------------

    def live_state(self) -> LiveState:
        return LiveState(
            identity=self.identity,
            subtitle=self.subtitle,
            skills=list(self.skills),
            projects=list(self.projects),
            jobs=list(self.jobs),
            block_count=len(self.document),
            metrics=self.metrics,
        )

    # ------------------------------------------------------------
    # Document operations
    # ------------------------------------------------------------

    def add_block(self, kind) -> ContentBlock:
        block = self.document.add_block(kind)
        self.notifications.success(f"{block_label(block.kind)} added successfully!")
        return block

    def remove_block(self, block_id: str) -> bool:
        removed = self.document.remove_block(block_id)
        if removed:
            self.notifications.success("Component removed successfully")
        return removed

    def update_block(self, block_id: str, content: Mapping[str, Any]) -> Optional[ContentBlock]:
        return self.document.update_block(block_id, dict(content))

    def set_array_field(self, block_id: str, field: str, index: int, value: str) -> Optional[List[Any]]:
        return self.document.set_array_field(block_id, field, index, value)

    def append_array_field(self, block_id: str, field: str) -> Optional[int]:
        return self.document.append_array_field(block_id, field)

    def select_block(self, block_id: Optional[str]) -> bool:
        return self.document.select(block_id)

    def move_block(self, block_id: str, position: int) -> bool:
        return self.document.move_block(block_id, position)

    def upload_image(
        self,
        block_id: str,
        content: bytes,
        content_type: Optional[str],
        field: Optional[str] = None,
    ) -> Optional[str]:
        """
        Embed an uploaded image into a block.

        Rejections are surfaced as an error notification and re-raised for the
        caller; the document is left untouched.
        """
        try:
            data_uri = ingest_image(self.document, block_id, content, content_type, field)
        except ImageError as e:
            logger.info(f"Image rejected for {block_id}: {e}")
            self.notifications.error(str(e))
            raise
        if data_uri is not None:
            self.notifications.success("Image uploaded successfully!")
        return data_uri

    # ------------------------------------------------------------
    # Generation / assistant
    # ------------------------------------------------------------

    async def generate(self, kind) -> Optional[GenerationRequest]:
        return await self.generation.request(kind, self.live_state())

    async def generate_into_block(self, kind, block_id: str, field: str) -> Optional[GenerationRequest]:
        """Run a generation and write a successful result into a block field."""
        request = await self.generate(kind)
        if request is None or request.status != GenerationStatus.succeeded:
            return request

        block = self.document.get_block(block_id)
        if block is None:
            return request
        value = request.result
        if field not in array_fields(block.kind) and isinstance(value, list):
            value = "\n".join(value)
        self.document.update_block(block_id, {field: value})
        return request

    async def ask(self, text: str) -> Optional[str]:
        return await self.assistant.respond(text, self.live_state())

    # ------------------------------------------------------------
    # Search
    # ------------------------------------------------------------

    def search(self, query: str) -> Dict[str, list]:
        return filter_collections(query, self.projects, self.jobs, self.skills)

    # ------------------------------------------------------------
    # Profile / save / publish
    # ------------------------------------------------------------

    def save_profile(self, data: Mapping[str, Any], rules: Optional[Mapping[str, Any]] = None) -> ValidationResult:
        result = validate_form(data, PROFILE_RULES if rules is None else rules)
        if not result.is_valid:
            for error in result.errors:
                self.notifications.error(error)
            return result
        self.profile.update(data)
        self.notifications.success("Changes saved successfully!")
        return result

    def save_draft(self) -> None:
        """Hand-off to the persistence collaborator; no effect on the document."""
        logger.info(f"Draft save requested for session {self.session_id} ({len(self.document)} blocks)")
        self.notifications.success("Changes saved successfully!")

    def publish(self) -> None:
        """Hand-off to the publishing collaborator; no effect on the document."""
        logger.info(f"Publish requested for session {self.session_id}")
        self.notifications.success("Portfolio published!")


# ============================================================
# SESSION STORE
# ============================================================

class SessionStore:
    """
    In-memory registry of active dashboard sessions.

    A session expires `ttl_seconds` after it was created, matching the
    lifetime of its access token. Expired sessions are evicted on every
    store access.
    """

    def __init__(self, ttl_seconds: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds is None:
            ttl_seconds = get_settings().jwt_expire_minutes * 60
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: Dict[str, DashboardSession] = {}
        self._expires_at: Dict[str, float] = {}
        self._lock = threading.Lock()

    def _evict_expired(self) -> None:
        now = self._clock()
        expired = [sid for sid, deadline in self._expires_at.items() if deadline <= now]
        for sid in expired:
            self._sessions.pop(sid, None)
            del self._expires_at[sid]
        if expired:
            logger.info(f"Evicted {len(expired)} expired dashboard session(s)")

    def create(self, identity: UserIdentity, **kwargs) -> DashboardSession:
        session = DashboardSession(identity, **kwargs)
        with self._lock:
            self._evict_expired()
            self._sessions[session.session_id] = session
            self._expires_at[session.session_id] = self._clock() + self.ttl_seconds
        logger.info(f"Started dashboard session {session.session_id} for {identity.email}")
        return session

    def get(self, session_id: str) -> Optional[DashboardSession]:
        with self._lock:
            self._evict_expired()
            return self._sessions.get(session_id)

    def discard(self, session_id: str) -> bool:
        with self._lock:
            self._expires_at.pop(session_id, None)
            return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            self._evict_expired()
            return len(self._sessions)


# Singleton instance
_session_store: SessionStore = None


def get_session_store() -> SessionStore:
    """Get or create the session store (singleton pattern)"""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore()
    return _session_store
