"""
Generation Workflow - "AI" content synthesis for the portfolio builder.

PURPOSE:
Produce portfolio text (summary, skill roadmap, project ideas, resume tips)
from the current live state.

HOW IT WORKS:
1. A request is issued for a generation kind
2. If another request is still running, the new one is rejected (not queued)
3. The generator adapter produces the text after its latency window
4. The request ends `succeeded` or `failed`; the latch returns to idle

The workflow never writes into the document. Callers place the returned
text into a block with update_block.

GENERATORS:
- SimulatedGenerator: derives text locally after a simulated delay
- DeepSeekGenerator: drafts locally, then asks DeepSeek to polish the draft
"""

import asyncio
import random
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Union

from app.core.config import get_settings
from app.core.errors import GenerationFailure
from app.core.logging import get_logger
from app.schemas.schemas import GenerationKind, GenerationRequest, GenerationStatus, LiveState, Skill
from app.services.notification_service import NotificationFeed

logger = get_logger(__name__)

GeneratedContent = Union[str, List[str]]

GENERIC_RESULT = "AI content generated successfully!"
FAILURE_MESSAGE = "AI content generation failed. Please try again."
STRONG_SKILL_THRESHOLD = 70


# ============================================================
# SINGLE-FLIGHT LATCH
# ============================================================

class SingleFlight:
    """
    At most one holder at a time. A second acquire while held fails
    immediately instead of waiting.
    """

    def __init__(self):
        self._held = False

    @property
    def busy(self) -> bool:
        return self._held

    def try_acquire(self) -> bool:
        if self._held:
            return False
        self._held = True
        return True

    def release(self) -> None:
        self._held = False


# ============================================================
# DETERMINISTIC DERIVATIONS
# ============================================================

def prioritized_skills(skills: List[Skill]) -> List[Skill]:
    """Skills below target, largest gap first (ties keep dataset order)."""
    below = [s for s in skills if s.current < s.target]
    return sorted(below, key=lambda s: s.gap, reverse=True)


def strongest_skill(skills: List[Skill]) -> Optional[Skill]:
    return max(skills, key=lambda s: s.current) if skills else None


def weakest_skill(skills: List[Skill]) -> Optional[Skill]:
    return min(skills, key=lambda s: s.current) if skills else None


def portfolio_summary(state: LiveState) -> str:
    top_skills = ", ".join(s.skill for s in state.skills[:3]) or "modern web development"
    return (
        f"Dynamic {state.subtitle.lower()} with {len(state.skills)} core technical skills "
        f"and {len(state.projects)} projects completed. Specialized in {top_skills} "
        f"with proven track record in full-stack development. Currently maintaining a "
        f"{state.metrics.portfolio_score}/100 portfolio score with growing expertise "
        f"in modern web technologies."
    )


def skill_roadmap(state: LiveState) -> str:
    path = prioritized_skills(state.skills)[:3]
    if not path:
        return "Prioritized learning path: every skill is at or above its target."
    steps = ", ".join(f"{s.skill} ({s.current}% → {s.target}%)" for s in path)
    return f"Prioritized learning path: {steps}"


# Each idea slot has a few interchangeable phrasings
_IDEA_PHRASINGS = [
    ["{0} Dashboard with real-time analytics", "Real-time analytics dashboard built with {0}"],
    ["{1} API with microservices architecture", "Microservices backend exposing a {1} API"],
    ["Full-stack {0} + {1} application", "End-to-end {0} and {1} web platform"],
    ["Mobile app using React Native and {2}", "Offline-first React Native app backed by {2}"],
    ["AI-powered tool using {3}", "Machine-learning assistant written in {3}"],
]


def project_ideas(state: LiveState, rng: Optional[random.Random] = None) -> List[str]:
    """Five project ideas seeded by skills above 70%. Phrasing may vary between calls."""
    rng = rng or random.Random()
    strong = [s.skill for s in state.skills if s.current > STRONG_SKILL_THRESHOLD]
    first = strong[0] if strong else "React"
    second = strong[1] if len(strong) > 1 else first
    third = strong[2] if len(strong) > 2 else "Firebase"
    ai_language = "Python" if "Python" in strong else first
    names = (first, second, third, ai_language)
    return [rng.choice(options).format(*names) for options in _IDEA_PHRASINGS]


def resume_tips(state: LiveState) -> str:
    lead = state.skills[0].skill if state.skills else "core technical"
    return (
        f"Focus on quantifiable achievements, highlight your {lead} expertise, "
        f"and include metrics from your projects."
    )


def success_message(kind: str, state: LiveState) -> str:
    if kind == GenerationKind.portfolio_summary.value:
        return "AI generated a compelling portfolio summary!"
    if kind == GenerationKind.skill_roadmap.value:
        return f"AI created a learning roadmap focusing on {len(prioritized_skills(state.skills))} skills!"
    if kind == GenerationKind.project_ideas.value:
        return "AI suggested 5 personalized project ideas!"
    if kind == GenerationKind.resume_tips.value:
        return "AI analyzed your profile and provided resume optimization tips!"
    return GENERIC_RESULT


def derive_content(kind: str, state: LiveState, rng: Optional[random.Random] = None) -> GeneratedContent:
    """Build the generated content for a kind from live state."""
    derivations: Dict[str, Callable[[], GeneratedContent]] = {
        GenerationKind.portfolio_summary.value: lambda: portfolio_summary(state),
        GenerationKind.skill_roadmap.value: lambda: skill_roadmap(state),
        GenerationKind.project_ideas.value: lambda: project_ideas(state, rng),
        GenerationKind.resume_tips.value: lambda: resume_tips(state),
    }
    derive = derivations.get(kind)
    return derive() if derive else GENERIC_RESULT


# ============================================================
# GENERATOR ADAPTERS
# ============================================================

class ContentGenerator:
    """Adapter interface: generate(kind, state) -> text or list of ideas."""

    async def generate(self, kind: str, state: LiveState) -> GeneratedContent:
        raise NotImplementedError


class SimulatedGenerator(ContentGenerator):
    """Derives content locally after a random delay inside the latency window."""

    def __init__(self, latency_min: float = 1.5, latency_max: float = 2.5, rng: Optional[random.Random] = None):
        self.latency_min = latency_min
        self.latency_max = max(latency_min, latency_max)
        self.rng = rng or random.Random()

    async def generate(self, kind: str, state: LiveState) -> GeneratedContent:
        delay = self.rng.uniform(self.latency_min, self.latency_max)
        if delay > 0:
            await asyncio.sleep(delay)
        return derive_content(kind, state, self.rng)


class DeepSeekGenerator(ContentGenerator):
    """Drafts content locally and has DeepSeek rewrite it."""

    def __init__(self, client=None):
        if client is None:
            from app.services.deepseek_client import get_deepseek_client
            client = get_deepseek_client()
        self.client = client

    async def generate(self, kind: str, state: LiveState) -> GeneratedContent:
        draft = derive_content(kind, state)
        if kind == GenerationKind.project_ideas.value:
            facts = "Strong skills: " + ", ".join(
                s.skill for s in state.skills if s.current > STRONG_SKILL_THRESHOLD
            )
            ideas = await asyncio.to_thread(
                self.client.suggest_list, "Suggest 5 portfolio project ideas for this student.", facts
            )
            return ideas or draft
        if not isinstance(draft, str):
            return draft
        return await asyncio.to_thread(
            self.client.rewrite, "Polish this draft for a professional portfolio.", draft
        )


def build_generator(backend: Optional[str] = None) -> ContentGenerator:
    """Build the generator configured in settings."""
    settings = get_settings()
    backend = backend or settings.generation_backend
    if backend == "deepseek":
        return DeepSeekGenerator()
    if backend != "simulated":
        raise ValueError(f"Unknown generation backend: {backend!r}")
    return SimulatedGenerator(settings.generation_latency_min, settings.generation_latency_max)


# ============================================================
# WORKFLOW
# ============================================================

class GenerationWorkflow:
    """
    Single-flight state machine around a ContentGenerator.

    idle -> running -> {succeeded, failed} -> idle
    """

    def __init__(
        self,
        generator: ContentGenerator,
        notifications: Optional[NotificationFeed] = None,
        timeout: Optional[float] = None,
    ):
        self.generator = generator
        self.notifications = notifications if notifications is not None else NotificationFeed()
        self.timeout = timeout if timeout is not None else get_settings().generation_timeout_seconds
        self._latch = SingleFlight()
        self.current: Optional[GenerationRequest] = None
        self.last_request: Optional[GenerationRequest] = None

    @property
    def status(self) -> GenerationStatus:
        return GenerationStatus.running if self._latch.busy else GenerationStatus.idle

    @property
    def is_running(self) -> bool:
        return self._latch.busy

    async def request(self, kind, state: LiveState) -> Optional[GenerationRequest]:
        """
        Run one generation request.

        Returns:
            The finished request (succeeded or failed), or None if another
            request was already running and this one was rejected.
        """
        kind = kind.value if isinstance(kind, GenerationKind) else str(kind)
        if not self._latch.try_acquire():
            logger.info(f"Generation '{kind}' rejected: a request is already running")
            return None

        request = GenerationRequest(
            kind=kind,
            status=GenerationStatus.running,
            started_at=datetime.now(timezone.utc),
        )
        self.current = request
        self.notifications.info("AI is generating content...")

        try:
            result = await asyncio.wait_for(self.generator.generate(kind, state), timeout=self.timeout)
            if result is None:
                raise GenerationFailure(f"Generator returned no content for '{kind}'")
        except Exception as e:
            logger.warning(f"Generation '{kind}' failed: {e}", exc_info=True)
            request.status = GenerationStatus.failed
            request.error = str(e) or type(e).__name__
            self.notifications.error(FAILURE_MESSAGE)
        else:
            request.status = GenerationStatus.succeeded
            request.result = result
            self.notifications.success(success_message(kind, state))
        finally:
            request.finished_at = datetime.now(timezone.utc)
            self.current = None
            self.last_request = request
            self._latch.release()

        return request
