"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.

The interview endpoints keep the camelCase wire format of the web client
(`jobId`, `questionsAsked`, `detailedFeedback`, ...) through field aliases;
Python code uses the snake_case names.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserType(str, Enum):
    student = "student"
    company = "company"


class AccountStatus(str, Enum):
    not_submitted = "not_submitted"
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class ReviewStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class JobType(str, Enum):
    full_time = "full-time"
    part_time = "part-time"
    internship = "internship"
    project_based = "project-based"


class WorkPreference(str, Enum):
    remote = "remote"
    onsite = "onsite"
    hybrid = "hybrid"


class NotificationType(str, Enum):
    application = "application"
    approval = "approval"
    rejection = "rejection"


class InterviewType(str, Enum):
    technical = "technical"
    hr = "hr"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    confirm_password: str
    user_type: UserType
    # Student accounts
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    faculty: Optional[str] = None
    # Company accounts
    company_name: Optional[str] = None
    website: Optional[str] = None

    @model_validator(mode="after")
    def check_account_fields(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        if self.user_type == UserType.student and not (self.first_name and self.last_name):
            raise ValueError("first_name and last_name are required for students")
        if self.user_type == UserType.company and not self.company_name:
            raise ValueError("company_name is required for companies")
        return self

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    user_type: str
    is_admin: bool = False

class UserResponse(BaseModel):
    user_id: str
    email: str
    user_type: str
    is_admin: bool
    status: str
    profile_completed: bool
    created_at: datetime


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class EducationEntry(BaseModel):
    university: str
    specialization: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

class ExperienceEntry(BaseModel):
    title: str
    company: str
    company_id: Optional[str] = None  # set when the employer has an account
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_present: bool = False

class StudentProfileUpdate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    faculty: Optional[str] = None
    bio: Optional[str] = None
    education: List[EducationEntry] = []
    experience: List[ExperienceEntry] = []
    skills: List[str] = []
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None
    work_preference: WorkPreference = WorkPreference.onsite

    @field_validator("skills")
    @classmethod
    def drop_blank_skills(cls, v: List[str]) -> List[str]:
        return [s.strip() for s in v if s and s.strip()]

class CompanyProfileUpdate(BaseModel):
    company_name: str = Field(..., min_length=2, max_length=200)
    industry: str = Field(..., min_length=1)
    company_size: str = Field(..., min_length=1)
    company_type: str = Field(..., min_length=1)
    website: Optional[str] = None
    tagline: Optional[str] = None
    description: Optional[str] = None
    verification: bool

    @field_validator("verification")
    @classmethod
    def must_confirm(cls, v: bool) -> bool:
        if not v:
            raise ValueError("The verification checkbox must be ticked")
        return v

class ProfileResponse(BaseModel):
    user_id: str
    email: Optional[str] = None
    user_type: str
    status: str
    profile_completed: bool = False
    # Student
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    faculty: Optional[str] = None
    bio: Optional[str] = None
    education: List[EducationEntry] = []
    experience: List[ExperienceEntry] = []
    skills: List[str] = []
    linkedin: Optional[str] = None
    github: Optional[str] = None
    work_preference: Optional[str] = None
    # Company
    company_name: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    company_type: Optional[str] = None
    tagline: Optional[str] = None
    description: Optional[str] = None
    # Shared
    website: Optional[str] = None
    announcements: List["AnnouncementResponse"] = []


# ============================================================
# ANNOUNCEMENT SCHEMAS
# ============================================================

class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    job_type: JobType
    requirements: str = Field(..., min_length=1)
    application_deadline: datetime
    salary: Optional[str] = None
    benefits: Optional[str] = None
    is_remote: bool = False

class AnnouncementUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    description: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[JobType] = None
    requirements: Optional[str] = None
    application_deadline: Optional[datetime] = None
    salary: Optional[str] = None
    benefits: Optional[str] = None
    is_remote: Optional[bool] = None

class AnnouncementResponse(BaseModel):
    id: str
    company_id: str
    company_name: str
    title: str
    description: str
    location: Optional[str] = None
    job_type: str
    requirements: Optional[str] = None
    application_deadline: Optional[datetime] = None
    salary: Optional[str] = None
    benefits: Optional[str] = None
    is_remote: bool = False
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(BaseModel):
    message: Optional[str] = None

class ApplicationResponse(BaseModel):
    id: str
    announcement_id: str
    announcement_title: str
    student_id: str
    student_name: str
    company_id: str
    message: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None


# ============================================================
# NOTIFICATION SCHEMAS
# ============================================================

class NotificationResponse(BaseModel):
    id: str
    user_id: str
    type: NotificationType
    message: str
    read: bool
    data: dict = {}
    created_at: datetime


# ============================================================
# REVIEW SCHEMAS
# ============================================================

class EligibleCompany(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    company_name: str = Field(alias="companyName")
    job_title: str = Field(alias="jobTitle")

class SubmitReviewRequest(BaseModel):
    """Fields are optional so the route can answer 401/400 like the web client expects."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(None, alias="userId")
    company_id: Optional[str] = Field(None, alias="companyId")
    rating: Optional[float] = None
    comment: Optional[str] = None

class ReviewResponse(BaseModel):
    id: str
    company_id: str
    student_id: str
    student_name: str
    rating: float
    comment: str
    created_at: datetime


# ============================================================
# CONTACT SCHEMAS
# ============================================================

class ContactRequest(BaseModel):
    name: str = ""
    email: str = ""
    message: str = ""


# ============================================================
# INTERVIEW SCHEMAS
# Shared by the server routes and the interview client library.
# ============================================================

class JobDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: Optional[str] = None
    company_name: Optional[str] = Field(None, alias="companyName")
    description: Optional[str] = None
    requirements: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[str] = Field(None, alias="jobType")
    salary: Optional[str] = None
    is_remote: Optional[bool] = Field(None, alias="isRemote")

class Question(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(..., min_length=1)
    expected_keywords: List[str] = Field(alias="expectedKeywords")
    difficulty: str

class AnswerAnalysis(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    strengths: List[str]
    weaknesses: List[str]
    score: int = Field(..., ge=0, le=100)
    detailed_feedback: str = Field(alias="detailedFeedback")
    suggestions: List[str]

    @field_validator("score", mode="before")
    @classmethod
    def round_score(cls, v):
        return round(v) if isinstance(v, float) else v

class FinalFeedback(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    overall_score: int = Field(..., ge=0, le=100, alias="overallScore")
    did_well: List[str] = Field(alias="didWell")
    future_recommendations: List[str] = Field(alias="futureRecommendations")

    @field_validator("overall_score", mode="before")
    @classmethod
    def round_score(cls, v):
        return round(v) if isinstance(v, float) else v

class GenerateQuestionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role: Optional[str] = None
    job_id: Optional[str] = Field(None, alias="jobId")
    interview_type: Optional[InterviewType] = Field(None, alias="interviewType")
    questions_asked: List[str] = Field(default_factory=list, alias="questionsAsked")

class AnalyzeAnswerRequest(BaseModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    role: Optional[str] = None

class AnsweredQuestion(BaseModel):
    question: str
    answer: str

class FinalFeedbackRequest(BaseModel):
    role: Optional[str] = None
    answers: List[AnsweredQuestion]


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    detail: str


ProfileResponse.model_rebuild()
