"""
Assistant Service - rule-based career mentor chat.

Matching is an ordered table of (predicate, responder) rules: the first rule
whose keywords appear in the message (case-insensitive) answers, otherwise a
clarification reply echoes the message back. Responders read the live state,
so replies change whenever skills, projects, jobs or the document change.

Only one reply may be pending at a time; messages sent while a reply is
pending are rejected.
"""

import asyncio
import random
from datetime import date, datetime, timezone
from typing import Callable, List, Optional, Sequence, Tuple

from app.core.config import get_settings
from app.core.errors import GenerationFailure
from app.core.logging import get_logger
from app.schemas.schemas import ChatMessage, ChatRole, LiveState, Project, ProjectStatus
from app.services.generation_service import (
    SingleFlight,
    prioritized_skills,
    strongest_skill,
    weakest_skill,
)
from app.services.notification_service import NotificationFeed

logger = get_logger(__name__)

UNAVAILABLE_MESSAGE = "AI mentor is temporarily unavailable. Please try again."

Predicate = Callable[[str], bool]
Responder = Callable[[str, LiveState, date], str]


def contains_any(*keywords: str) -> Predicate:
    """Predicate: lowered message contains at least one keyword."""
    return lambda text: any(k in text for k in keywords)


def contains_all(*predicates: Predicate) -> Predicate:
    return lambda text: all(p(text) for p in predicates)


def _greeting(state: LiveState) -> str:
    return f", {state.identity.name}" if state.identity else ""


def next_deadline(projects: Sequence[Project], today: date) -> Optional[Project]:
    """Project with the soonest deadline after today."""
    upcoming = [p for p in projects if p.deadline and p.deadline > today]
    return min(upcoming, key=lambda p: p.deadline) if upcoming else None


# ============================================================
# RESPONDERS
# ============================================================

def portfolio_improvement_reply(message: str, state: LiveState, today: date) -> str:
    lead = state.skills[0] if state.skills else None
    showcase = (
        f"3) Showcase your {lead.skill} skills more prominently since you're at {lead.current}%, "
        if lead else "3) Add a skills section with honest proficiency levels, "
    )
    return (
        f"Great question{_greeting(state)}! Based on your current portfolio score of "
        f"{state.metrics.portfolio_score}/100, I recommend: 1) Add more project details and screenshots, "
        f"2) Include testimonials from peers or mentors, {showcase}"
        f"4) Add a professional headshot. Would you like me to help you implement any of these suggestions?"
    )


def portfolio_reply(message: str, state: LiveState, today: date) -> str:
    strongest = strongest_skill(state.skills)
    highlight = (
        f" Your strongest skill ({strongest.skill}) should be highlighted prominently!"
        if strongest else ""
    )
    return (
        f"Your portfolio is looking good! You have {state.block_count} components added. "
        f"To make it stand out, consider adding a brief video introduction, more detailed project "
        f"case studies, and quantifiable achievements.{highlight}"
    )


def career_reply(message: str, state: LiveState, today: date) -> str:
    if not state.jobs:
        return (
            "You don't have any job matches yet. Add more skills and projects to your portfolio "
            "and I'll start matching you with openings."
        )
    top = max(state.jobs, key=lambda j: j.match)
    focus = next(iter(prioritized_skills(state.skills)), None)
    focus_step = (
        f"1) Complete your {focus.skill} learning (currently {focus.current}%), "
        if focus else "1) Keep your skills sharp with a new certification, "
    )
    return (
        f"Your career prospects look promising! You have {len(state.jobs)} job matches with your top "
        f"match being \"{top.title}\" at {top.company} ({top.match}% match). To improve your chances: "
        f"{focus_step}2) Build more projects showcasing full-stack skills, 3) Practice coding interviews. "
        f"Should I create a personalized action plan?"
    )


def skill_reply(message: str, state: LiveState, today: date) -> str:
    strongest = strongest_skill(state.skills)
    weakest = weakest_skill(state.skills)
    if strongest is None:
        return "You haven't tracked any skills yet. Add a few skills and I'll build you a learning roadmap."
    return (
        f"Your skill development is on track! Strongest: {strongest.skill} ({strongest.current}%), "
        f"Focus area: {weakest.skill} ({weakest.current}% - target: {weakest.target}%). Based on market "
        f"trends, I suggest prioritizing: 1) {weakest.skill} to reach your target, 2) Adding cloud skills "
        f"(AWS/Azure), 3) DevOps fundamentals. Want a detailed learning roadmap?"
    )


def project_reply(message: str, state: LiveState, today: date) -> str:
    if not state.projects:
        return (
            "You don't have any projects yet. A small full-stack app or an open-source contribution "
            "is a great place to start. What type of project interests you most?"
        )
    ongoing = [p for p in state.projects if p.status == ProjectStatus.ongoing]
    spotlight = ongoing[0] if ongoing else state.projects[0]
    return (
        f"You have {len(ongoing)} ongoing projects - great momentum! Your \"{spotlight.title}\" project "
        f"({spotlight.progress}% complete) is performing well with an AI score of {spotlight.ai_score}/100. "
        f"For your next project, consider: 1) A machine learning project to complement your Python skills, "
        f"2) A mobile app using React Native, 3) An open-source contribution. What type of project "
        f"interests you most?"
    )


def deadline_reply(message: str, state: LiveState, today: date) -> str:
    upcoming = next_deadline(state.projects, today)
    if upcoming is None:
        focus = next(iter(prioritized_skills(state.skills)), None)
        nudge = f" Consider working on that {focus.skill} proficiency!" if focus else ""
        return (
            "Good news! You're ahead of schedule on your current projects. This is a perfect time to start "
            f"planning your next project or dive deeper into learning new skills.{nudge}"
        )
    pace = "on track" if upcoming.progress > 75 else "behind schedule"
    effort = "3-4 hours daily" if upcoming.progress < 50 else "2-3 hours daily"
    return (
        f"Your next deadline is \"{upcoming.title}\" on {upcoming.deadline.isoformat()}. At "
        f"{upcoming.progress}% completion, you're {pace}. I recommend focusing {effort} to meet your "
        f"deadline. Need help breaking down the remaining tasks?"
    )


def help_reply(message: str, state: LiveState, today: date) -> str:
    return (
        "I'm here to help with everything related to your academic and professional growth! "
        "I can assist with: Study planning & skill development, Career guidance & job matching, "
        "Portfolio optimization, Project management & deadlines, Progress tracking & analytics, "
        "Personalized recommendations. What would you like to focus on today?"
    )


def fallback_reply(message: str, state: LiveState, today: date) -> str:
    return (
        f"I understand you're asking about \"{message}\". As your AI mentor, I'm here to help with "
        f"portfolio development, career planning, skill building, and project management. Could you be "
        f"more specific about what aspect you'd like assistance with? For example, ask about "
        f"\"improving my portfolio\" or \"career advice for frontend development.\""
    )


# Evaluated top to bottom, first match wins
RULES: List[Tuple[Predicate, Responder]] = [
    (contains_all(contains_any("portfolio"), contains_any("improve", "better")), portfolio_improvement_reply),
    (contains_any("portfolio"), portfolio_reply),
    (contains_any("career", "job"), career_reply),
    (contains_any("skill", "learn"), skill_reply),
    (contains_any("project"), project_reply),
    (contains_any("deadline", "time"), deadline_reply),
    (contains_any("help", "assist"), help_reply),
]


def compose_reply(
    message: str,
    state: LiveState,
    today: Optional[date] = None,
    rules: Sequence[Tuple[Predicate, Responder]] = RULES,
) -> str:
    """Pick the first matching rule and render its reply."""
    today = today or date.today()
    lowered = message.lower()
    for predicate, responder in rules:
        if predicate(lowered):
            return responder(message, state, today)
    return fallback_reply(message, state, today)


# ============================================================
# BACKEND ADAPTER + ENGINE
# ============================================================

class SimulatedMentor:
    """Answers with the rule table after a simulated thinking delay."""

    def __init__(self, latency_min: float = 1.5, latency_max: float = 1.5, today: Callable[[], date] = date.today):
        self.latency_min = latency_min
        self.latency_max = max(latency_min, latency_max)
        self.today = today

    async def reply(self, message: str, state: LiveState) -> str:
        delay = random.uniform(self.latency_min, self.latency_max)
        if delay > 0:
            await asyncio.sleep(delay)
        return compose_reply(message, state, self.today())


class AssistantEngine:
    """
    Chat transcript plus single-flight reply handling.

    The transcript is append-only for the session.
    """

    def __init__(self, mentor=None, notifications: Optional[NotificationFeed] = None, timeout: Optional[float] = None):
        settings = get_settings()
        self.mentor = mentor or SimulatedMentor(settings.assistant_latency_min, settings.assistant_latency_max)
        self.notifications = notifications if notifications is not None else NotificationFeed()
        self.timeout = timeout if timeout is not None else settings.generation_timeout_seconds
        self._latch = SingleFlight()
        self._transcript: List[ChatMessage] = []

    @property
    def pending(self) -> bool:
        return self._latch.busy

    @property
    def transcript(self) -> List[ChatMessage]:
        return [m.model_copy() for m in self._transcript]

    def _append(self, role: ChatRole, text: str) -> ChatMessage:
        message = ChatMessage(role=role, text=text, timestamp=datetime.now(timezone.utc))
        self._transcript.append(message)
        return message

    async def respond(self, user_text: str, state: LiveState) -> Optional[str]:
        """
        Record a user turn and the mentor's reply.

        Returns:
            The reply text, or None when the message was blank, rejected
            because a reply is pending, or the mentor call failed.
        """
        text = (user_text or "").strip()
        if not text:
            return None
        if not self._latch.try_acquire():
            logger.info("Assistant message rejected: a reply is already pending")
            return None

        try:
            self._append(ChatRole.user, text)
            try:
                reply = await asyncio.wait_for(self.mentor.reply(text, state), timeout=self.timeout)
                if not reply:
                    raise GenerationFailure("Mentor returned an empty reply")
            except Exception as e:
                logger.warning(f"Assistant reply failed: {e}", exc_info=True)
                self.notifications.error(UNAVAILABLE_MESSAGE)
                return None
            self._append(ChatRole.assistant, reply)
            return reply
        finally:
            self._latch.release()
