"""Tests for the generation workflow and its derivations."""

import asyncio
import random

import pytest

from app.core.errors import GenerationFailure
from app.schemas.schemas import GenerationStatus, LiveState, Skill
from app.services.generation_service import (
    ContentGenerator,
    GenerationWorkflow,
    SimulatedGenerator,
    derive_content,
    prioritized_skills,
    project_ideas,
    skill_roadmap,
)


class BlockingGenerator(ContentGenerator):
    """Holds every request until released."""

    def __init__(self):
        self.release = asyncio.Event()
        self.calls = 0

    async def generate(self, kind, state):
        self.calls += 1
        await self.release.wait()
        return f"result for {kind}"


class FailingGenerator(ContentGenerator):
    async def generate(self, kind, state):
        raise GenerationFailure("backend unavailable")


class HangingGenerator(ContentGenerator):
    async def generate(self, kind, state):
        await asyncio.sleep(10)
        return "too late"


@pytest.fixture
def instant_workflow(notifications):
    return GenerationWorkflow(SimulatedGenerator(0, 0, rng=random.Random(7)), notifications)


# ------------------------------------------------------------
# Derivations
# ------------------------------------------------------------

def test_roadmap_orders_by_gap(two_skills):
    text = skill_roadmap(LiveState(skills=two_skills))
    assert text.index("TypeScript") < text.index("React")
    assert "TypeScript (45% → 80%)" in text
    assert "React (85% → 95%)" in text


def test_roadmap_limits_to_three_and_skips_met_targets():
    skills = [
        Skill(skill="A", current=10, target=20),
        Skill(skill="B", current=10, target=60),
        Skill(skill="C", current=90, target=90),
        Skill(skill="D", current=0, target=30),
        Skill(skill="E", current=50, target=55),
    ]
    ordered = [s.skill for s in prioritized_skills(skills)]
    assert ordered == ["B", "D", "A", "E"]

    text = skill_roadmap(LiveState(skills=skills))
    assert "C (" not in text
    assert "E (" not in text


def test_roadmap_with_no_gaps():
    text = skill_roadmap(LiveState(skills=[Skill(skill="Go", current=90, target=80)]))
    assert "at or above" in text


def test_summary_uses_live_counts(live_state):
    text = derive_content("portfolio-summary", live_state)
    assert "6 core technical skills" in text
    assert "4 projects" in text
    assert "React, Python, JavaScript" in text
    assert "78/100" in text
    assert text.startswith("Dynamic aspiring full stack developer")


def test_summary_is_deterministic(live_state):
    assert derive_content("portfolio-summary", live_state) == derive_content("portfolio-summary", live_state)


def test_project_ideas_use_strong_skills(live_state):
    ideas = project_ideas(live_state, random.Random(1))
    assert len(ideas) == 5
    joined = " ".join(ideas)
    assert "React" in joined
    assert "Python" in joined
    assert "TypeScript" not in joined


def test_project_ideas_without_skills():
    ideas = project_ideas(LiveState(), random.Random(1))
    assert len(ideas) == 5
    assert all(idea for idea in ideas)


def test_resume_tips_and_unknown_kind(live_state):
    assert "React expertise" in derive_content("resume-tips", live_state)
    assert derive_content("cover-letter", live_state) == "AI content generated successfully!"


# ------------------------------------------------------------
# Workflow state machine
# ------------------------------------------------------------

@pytest.mark.asyncio
async def test_request_succeeds(instant_workflow, two_skills, notifications):
    request = await instant_workflow.request("skill-roadmap", LiveState(skills=two_skills))

    assert request.status == GenerationStatus.succeeded
    assert request.result.index("TypeScript") < request.result.index("React")
    assert instant_workflow.status == GenerationStatus.idle
    messages = [n.message for n in notifications.all()]
    assert messages == ["AI is generating content...", "AI created a learning roadmap focusing on 2 skills!"]


@pytest.mark.asyncio
async def test_second_request_rejected_while_running(notifications, live_state):
    generator = BlockingGenerator()
    workflow = GenerationWorkflow(generator, notifications)

    first = asyncio.create_task(workflow.request("portfolio-summary", live_state))
    await asyncio.sleep(0)
    assert workflow.status == GenerationStatus.running

    second = await workflow.request("resume-tips", live_state)
    assert second is None
    assert workflow.status == GenerationStatus.running

    generator.release.set()
    result = await first
    assert result.status == GenerationStatus.succeeded
    assert result.result == "result for portfolio-summary"
    assert generator.calls == 1
    assert workflow.status == GenerationStatus.idle


@pytest.mark.asyncio
async def test_failure_releases_latch(notifications, live_state):
    workflow = GenerationWorkflow(FailingGenerator(), notifications)

    request = await workflow.request("portfolio-summary", live_state)
    assert request.status == GenerationStatus.failed
    assert "backend unavailable" in request.error
    assert workflow.status == GenerationStatus.idle
    assert notifications.all()[-1].message == "AI content generation failed. Please try again."

    workflow.generator = SimulatedGenerator(0, 0)
    retry = await workflow.request("portfolio-summary", live_state)
    assert retry.status == GenerationStatus.succeeded


@pytest.mark.asyncio
async def test_timeout_resolves_to_failed(notifications, live_state):
    workflow = GenerationWorkflow(HangingGenerator(), notifications, timeout=0.01)

    request = await workflow.request("resume-tips", live_state)
    assert request.status == GenerationStatus.failed
    assert not workflow.is_running


@pytest.mark.asyncio
async def test_last_request_recorded(instant_workflow, live_state):
    await instant_workflow.request("resume-tips", live_state)
    assert instant_workflow.last_request.kind == "resume-tips"
    assert instant_workflow.last_request.finished_at is not None
