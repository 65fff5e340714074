"""
Sample datasets - default read-only skills, projects and job postings for a
new dashboard session (the analytics collaborator's mock data).
"""

from datetime import date
from typing import List

from app.schemas.schemas import DashboardMetrics, JobPosting, Project, Skill


def sample_skills() -> List[Skill]:
    return [
        Skill(skill="React", current=85, target=95, growth=15, trend=[70, 75, 78, 80, 82, 85], category="frontend"),
        Skill(skill="Python", current=78, target=90, growth=12, trend=[60, 65, 70, 73, 76, 78], category="backend"),
        Skill(skill="JavaScript", current=90, target=95, growth=8, trend=[80, 82, 85, 87, 88, 90], category="frontend"),
        Skill(skill="Node.js", current=70, target=85, growth=20, trend=[45, 50, 58, 62, 67, 70], category="backend"),
        Skill(skill="TypeScript", current=45, target=80, growth=35, trend=[10, 15, 25, 32, 38, 45], category="frontend"),
        Skill(skill="MongoDB", current=60, target=75, growth=18, trend=[30, 35, 42, 48, 55, 60], category="database"),
    ]


def sample_projects() -> List[Project]:
    return [
        Project(
            id="1", title="E-commerce Web App",
            description="Full-stack MERN application with payment integration and admin dashboard",
            status="ongoing", progress=75, tech=["React", "Node.js", "MongoDB", "Stripe", "JWT"],
            ai_score=88, deadline=date(2024, 2, 15), priority="high", commits=127, lines_of_code=5420,
        ),
        Project(
            id="2", title="AI Chatbot",
            description="Natural language processing chatbot using Python and TensorFlow",
            status="completed", progress=100, tech=["Python", "TensorFlow", "Flask", "NLP", "Docker"],
            ai_score=92, deadline=date(2024, 1, 20), priority="medium", commits=89, lines_of_code=3200,
        ),
        Project(
            id="3", title="Mobile Task Manager",
            description="React Native app for productivity management with offline sync",
            status="planned", progress=10, tech=["React Native", "Firebase", "Redux", "Async Storage"],
            ai_score=0, deadline=date(2024, 3, 30), priority="medium", commits=5, lines_of_code=150,
        ),
        Project(
            id="4", title="Data Visualization Dashboard",
            description="Interactive dashboard for sales analytics using D3.js",
            status="paused", progress=40, tech=["D3.js", "React", "Express", "PostgreSQL"],
            ai_score=75, deadline=date(2024, 4, 15), priority="low", commits=34, lines_of_code=1800,
        ),
    ]


def sample_jobs() -> List[JobPosting]:
    return [
        JobPosting(
            id="1", title="Frontend Developer Intern", company="TechCorp Inc.", match=92,
            location="Remote", type="internship", skills=["React", "JavaScript", "CSS", "Git"],
            salary="$15-20/hour", posted="2 days ago",
        ),
        JobPosting(
            id="2", title="Full Stack Developer", company="StartupXYZ", match=85,
            location="San Francisco, CA", type="full-time", skills=["React", "Node.js", "MongoDB", "AWS"],
            salary="$80,000-100,000", posted="1 week ago", applied=True,
        ),
        JobPosting(
            id="3", title="Python Developer Intern", company="DataTech Solutions", match=78,
            location="New York, NY", type="internship", skills=["Python", "Django", "PostgreSQL", "Docker"],
            salary="$18-25/hour", posted="3 days ago",
        ),
        JobPosting(
            id="4", title="React Developer", company="WebFlow Agency", match=88,
            location="Remote", type="contract", skills=["React", "TypeScript", "Next.js", "Tailwind"],
            salary="$40-60/hour", posted="5 days ago",
        ),
    ]


def sample_metrics() -> DashboardMetrics:
    return DashboardMetrics()
