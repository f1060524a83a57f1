"""
Pydantic Schemas - Records and Request/Response Validation

Domain records (Student, Job, Course, Application, Notification) and the API
contract, all in one file for simplicity.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Dict
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class ApplicationStatus(str, Enum):
    pending = "pending"
    admitted = "admitted"
    rejected = "rejected"
    waiting_list = "waiting_list"
    withdrawn = "withdrawn"


# Statuses that still hold a place in an institution's intake
ACTIVE_APPLICATION_STATUSES = (
    ApplicationStatus.pending,
    ApplicationStatus.admitted,
    ApplicationStatus.waiting_list,
)


class NotificationType(str, Enum):
    job_match = "job_match"


# ============================================================
# STUDENT PROFILE (MongoDB: students)
# ============================================================

class Certificate(BaseModel):
    name: str = ""
    issuer: Optional[str] = None
    issued_at: Optional[datetime] = None


class WorkExperience(BaseModel):
    company: Optional[str] = None
    role: Optional[str] = None
    duration_months: int = Field(0, ge=0)

    @field_validator("duration_months", mode="before")
    @classmethod
    def null_duration_is_zero(cls, v):
        return 0 if v is None else v


class Transcript(BaseModel):
    institution: Optional[str] = None
    program: Optional[str] = None
    file_url: Optional[str] = None


class Student(BaseModel):
    """Read-only view of a student profile document."""
    model_config = ConfigDict(populate_by_name=True)

    student_id: str = Field(..., alias="_id")
    full_name: Optional[str] = None
    qualifications: List[str] = []
    certificates: List[Certificate] = []
    work_experience: List[WorkExperience] = []
    transcripts: List[Transcript] = []

    # Profile management may store null for an empty list (or a null entry)
    @field_validator("qualifications", "certificates", "work_experience", "transcripts", mode="before")
    @classmethod
    def null_list_is_empty(cls, v):
        if v is None:
            return []
        if isinstance(v, list):
            return [item for item in v if item is not None]
        return v


# ============================================================
# JOB (MongoDB: jobs)
# ============================================================

class JobRequirements(BaseModel):
    # None or 0 means "no constraint"
    min_certificates: Optional[int] = Field(None, ge=0)
    min_experience: Optional[int] = Field(None, ge=0)  # months


class QualifiedStudent(BaseModel):
    student_id: str
    match_score: float


class Job(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(..., alias="_id")
    company_id: str
    title: str = ""
    description: Optional[str] = None
    requirements: JobRequirements = JobRequirements()
    qualifications: List[str] = []
    is_active: bool = True
    posted_at: Optional[datetime] = None
    qualified_candidates: int = 0
    qualified_students: List[QualifiedStudent] = []

    @field_validator("requirements", mode="before")
    @classmethod
    def null_requirements_are_unset(cls, v):
        return JobRequirements() if v is None else v

    @field_validator("qualifications", "qualified_students", mode="before")
    @classmethod
    def null_list_is_empty(cls, v):
        return [] if v is None else v


# ============================================================
# COURSE / APPLICATION (PostgreSQL)
# ============================================================

class Course(BaseModel):
    course_id: str
    institution_id: str
    name: str = ""
    requirements: List[str] = []
    total_seats: int = Field(..., gt=0)
    available_seats: int = Field(..., ge=0)


class Application(BaseModel):
    application_id: str
    student_id: str
    course_id: str
    institution_id: str
    status: ApplicationStatus = ApplicationStatus.pending
    notes: Optional[str] = None
    applied_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============================================================
# NOTIFICATION (MongoDB: notifications)
# ============================================================

class Notification(BaseModel):
    user_id: str
    type: NotificationType = NotificationType.job_match
    title: str
    message: str
    job_id: Optional[str] = None
    company_id: Optional[str] = None
    is_read: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)


# ============================================================
# MATCHING RESULTS
# ============================================================

class ScoreBreakdown(BaseModel):
    academic: float
    certificates: float
    experience: float
    qualifications: float

    @property
    def total(self) -> float:
        return self.academic + self.certificates + self.experience + self.qualifications


class MatchResult(BaseModel):
    job_id: str
    qualified_candidates: int
    qualified_students: List[QualifiedStudent]
    notifications_sent: int
    notifications_failed: int


class RankedCandidate(BaseModel):
    rank: int
    student_id: str
    match_score: float
    student: Optional[Student] = None


class JobMatch(BaseModel):
    job_id: str
    company_id: str
    title: str
    match_score: float
    reason: str


# ============================================================
# API REQUEST / RESPONSE SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = None
    requirements: JobRequirements = JobRequirements()
    qualifications: List[str] = []


class JobPostedResponse(BaseModel):
    job_id: str
    title: str
    qualified_candidates: int
    notifications_sent: int
    matching_completed: bool


class ApplicationCreate(BaseModel):
    course_id: str


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus
    notes: Optional[str] = None


class AdmissionStatsResponse(BaseModel):
    institution_id: str
    total_applications: int
    applications_by_status: Dict[str, int]
