"""
Pydantic Schemas - Domain models and Request/Response validation

All portfolio, dataset and API schemas in one file for simplicity.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Dict, Any, Union
from datetime import datetime, date
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "student"
    admin = "admin"


class BlockKind(str, Enum):
    text = "text"
    image = "image"
    project = "project"
    skill = "skill"
    contact = "contact"
    education = "education"
    experience = "experience"
    testimonial = "testimonial"
    certificate = "certificate"


class GenerationKind(str, Enum):
    portfolio_summary = "portfolio-summary"
    skill_roadmap = "skill-roadmap"
    project_ideas = "project-ideas"
    resume_tips = "resume-tips"


class GenerationStatus(str, Enum):
    idle = "idle"
    running = "running"
    succeeded = "succeeded"
    failed = "failed"


class ChatRole(str, Enum):
    user = "user"
    assistant = "assistant"


class NotificationLevel(str, Enum):
    success = "success"
    info = "info"
    error = "error"


class SkillCategory(str, Enum):
    frontend = "frontend"
    backend = "backend"
    database = "database"
    tools = "tools"
    soft_skills = "soft-skills"


class ProjectStatus(str, Enum):
    ongoing = "ongoing"
    completed = "completed"
    planned = "planned"
    paused = "paused"


class Priority(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


class JobType(str, Enum):
    full_time = "full-time"
    part_time = "part-time"
    internship = "internship"
    contract = "contract"


# ============================================================
# IDENTITY
# ============================================================

class UserIdentity(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    role: UserRole = UserRole.student


# ============================================================
# READ-ONLY DATASETS
# ============================================================

class Skill(BaseModel):
    skill: str
    current: int = Field(..., ge=0, le=100)
    target: int = Field(..., ge=0, le=100)
    growth: int = 0
    trend: List[int] = []
    category: SkillCategory = SkillCategory.tools

    @property
    def gap(self) -> int:
        return self.target - self.current


class Project(BaseModel):
    id: str
    title: str
    description: str = ""
    status: ProjectStatus = ProjectStatus.planned
    progress: int = Field(0, ge=0, le=100)
    tech: List[str] = []
    ai_score: int = 0
    deadline: Optional[date] = None
    priority: Priority = Priority.medium
    commits: int = 0
    lines_of_code: int = 0


class JobPosting(BaseModel):
    id: str
    title: str
    company: str
    match: int = Field(..., ge=0, le=100)
    location: Optional[str] = None
    type: JobType = JobType.full_time
    skills: List[str] = []
    salary: Optional[str] = None
    posted: Optional[str] = None
    applied: bool = False


class DashboardMetrics(BaseModel):
    portfolio_score: int = 78
    skills_learned: int = 12
    ongoing_projects: int = 3
    job_matches: int = 5
    weekly_progress: int = 85
    next_milestone: str = "Complete React certification"
    streak_days: int = 7
    certificates_earned: int = 3
    hours_learned: int = 45


class LiveState(BaseModel):
    """Snapshot read by the generation workflow and the assistant."""
    identity: Optional[UserIdentity] = None
    subtitle: str = "Aspiring Full Stack Developer"
    skills: List[Skill] = []
    projects: List[Project] = []
    jobs: List[JobPosting] = []
    block_count: int = 0
    metrics: DashboardMetrics = DashboardMetrics()


# ============================================================
# PORTFOLIO DOCUMENT
# ============================================================

class ContentBlock(BaseModel):
    id: str
    kind: BlockKind
    content: Dict[str, Any]
    style: Dict[str, Any] = {}
    order: int


class GenerationRequest(BaseModel):
    kind: str
    status: GenerationStatus = GenerationStatus.idle
    result: Optional[Union[str, List[str]]] = None
    error: Optional[str] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None


class ChatMessage(BaseModel):
    role: ChatRole
    text: str
    timestamp: datetime


class Notification(BaseModel):
    level: NotificationLevel
    message: str
    timestamp: datetime


# ============================================================
# SESSION SCHEMAS
# ============================================================

class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    session_id: str
    portfolio_title: str


# ============================================================
# PORTFOLIO SCHEMAS
# ============================================================

class BlockCreate(BaseModel):
    kind: BlockKind


class BlockUpdate(BaseModel):
    content: Dict[str, Any]


class ArrayFieldSet(BaseModel):
    index: int = Field(..., ge=0)
    value: str = ""


class ArrayFieldAppendResponse(BaseModel):
    index: int


class BlockListResponse(BaseModel):
    title: str
    blocks: List[ContentBlock]
    selected_id: Optional[str] = None
    total: int


class ProfileSaveRequest(BaseModel):
    data: Dict[str, Any]


class ValidationResponse(BaseModel):
    is_valid: bool
    errors: List[str] = []


# ============================================================
# GENERATION / ASSISTANT / SEARCH SCHEMAS
# ============================================================

class AssistantMessageRequest(BaseModel):
    text: str = Field(..., max_length=4000)


class TranscriptResponse(BaseModel):
    messages: List[ChatMessage]
    pending: bool = False


class SearchResponse(BaseModel):
    query: str
    projects: List[Project]
    jobs: List[JobPosting]
    skills: List[Skill]


class NotificationListResponse(BaseModel):
    notifications: List[Notification]


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
