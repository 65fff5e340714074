"""Pytest configuration and fixtures."""

import os

# Zero latency for simulated AI calls; must be set before settings are cached
os.environ["GENERATION_LATENCY_MIN"] = "0"
os.environ["GENERATION_LATENCY_MAX"] = "0"
os.environ["ASSISTANT_LATENCY_MIN"] = "0"
os.environ["ASSISTANT_LATENCY_MAX"] = "0"
os.environ["GENERATION_BACKEND"] = "simulated"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import pytest

from app.core.config import get_settings

get_settings.cache_clear()

from app.schemas.schemas import JobPosting, LiveState, Project, Skill, UserIdentity
from app.services.notification_service import NotificationFeed
from app.services.portfolio_document import PortfolioDocument
from app.services.sample_data import sample_jobs, sample_projects, sample_skills
from app.services.session_service import DashboardSession


@pytest.fixture
def identity():
    return UserIdentity(name="Ada", email="ada@example.com", role="student")


@pytest.fixture
def document():
    return PortfolioDocument(title="Ada's Portfolio")


@pytest.fixture
def notifications():
    return NotificationFeed()


@pytest.fixture
def live_state(identity):
    return LiveState(
        identity=identity,
        skills=sample_skills(),
        projects=sample_projects(),
        jobs=sample_jobs(),
        block_count=2,
    )


@pytest.fixture
def session(identity):
    return DashboardSession(identity)


@pytest.fixture
def two_skills():
    return [
        Skill(skill="TypeScript", current=45, target=80),
        Skill(skill="React", current=85, target=95),
    ]


@pytest.fixture
def make_project():
    def _make(**overrides) -> Project:
        data = {"id": "p1", "title": "Untitled", "description": "", "tech": []}
        data.update(overrides)
        return Project(**data)
    return _make


@pytest.fixture
def make_job():
    def _make(**overrides) -> JobPosting:
        data = {"id": "j1", "title": "Developer", "company": "Acme", "match": 50, "skills": []}
        data.update(overrides)
        return JobPosting(**data)
    return _make
