"""Tests for the live search filter."""

import pytest

from app.services.sample_data import sample_jobs, sample_projects, sample_skills
from app.services.search_service import (
    filter_collections,
    job_fields,
    project_fields,
    skill_fields,
)


@pytest.fixture
def collections():
    return sample_projects(), sample_jobs(), sample_skills()


def test_empty_query_returns_everything(collections):
    projects, jobs, skills = collections
    result = filter_collections("", projects, jobs, skills)
    assert result == {"projects": projects, "jobs": jobs, "skills": skills}


def test_case_insensitive_match_across_fields(collections):
    result = filter_collections("REACT", *collections)

    assert {p.id for p in result["projects"]} == {"1", "3", "4"}
    assert {j.id for j in result["jobs"]} == {"1", "2", "4"}
    assert [s.skill for s in result["skills"]] == ["React"]


def test_category_match(collections):
    result = filter_collections("backend", *collections)
    assert [s.skill for s in result["skills"]] == ["Python", "Node.js"]
    assert result["projects"] == []


def test_company_match(collections):
    result = filter_collections("startup", *collections)
    assert [j.company for j in result["jobs"]] == ["StartupXYZ"]


def test_description_match(collections):
    result = filter_collections("offline sync", *collections)
    assert [p.title for p in result["projects"]] == ["Mobile Task Manager"]


def test_no_matches(collections):
    result = filter_collections("cobol", *collections)
    assert result == {"projects": [], "jobs": [], "skills": []}


@pytest.mark.parametrize("query", ["py", "script", "data", "intern", "o", "-"])
def test_filter_is_exact_partition(collections, query):
    projects, jobs, skills = collections
    result = filter_collections(query, projects, jobs, skills)
    q = query.lower()

    for items, fields, matched in [
        (projects, project_fields, result["projects"]),
        (jobs, job_fields, result["jobs"]),
        (skills, skill_fields, result["skills"]),
    ]:
        for item in items:
            hit = any(q in value.lower() for value in fields(item))
            assert (item in matched) == hit


def test_recomputation_is_idempotent(collections):
    assert filter_collections("node", *collections) == filter_collections("node", *collections)


def test_collections_filtered_independently(make_project, make_job):
    projects = [make_project(title="Kotlin app")]
    jobs = [make_job(title="Android Engineer", skills=["Kotlin"])]
    result = filter_collections("kotlin", projects, jobs, [])
    assert result == {"projects": projects, "jobs": jobs, "skills": []}
