"""
Search Service - live filter over projects, job postings and skills.

Pure and recomputed from scratch on every query. The three collections are
filtered independently.

Matched fields:
- projects: title, description, tech
- jobs: title, company, skills
- skills: name, category
"""

from typing import Dict, Iterable, List, Sequence

from app.schemas.schemas import JobPosting, Project, Skill


def _matches(query: str, values: Iterable[str]) -> bool:
    return any(query in (value or "").lower() for value in values)


def project_fields(project: Project) -> List[str]:
    return [project.title, project.description, *project.tech]


def job_fields(job: JobPosting) -> List[str]:
    return [job.title, job.company, *job.skills]


def skill_fields(skill: Skill) -> List[str]:
    return [skill.skill, skill.category.value]


def filter_collections(
    query: str,
    projects: Sequence[Project],
    jobs: Sequence[JobPosting],
    skills: Sequence[Skill],
) -> Dict[str, list]:
    """
    Case-insensitive substring filter.

    An empty query returns all three collections unfiltered.
    """
    if not query:
        return {"projects": list(projects), "jobs": list(jobs), "skills": list(skills)}

    q = query.lower()
    return {
        "projects": [p for p in projects if _matches(q, project_fields(p))],
        "jobs": [j for j in jobs if _matches(q, job_fields(j))],
        "skills": [s for s in skills if _matches(q, skill_fields(s))],
    }
