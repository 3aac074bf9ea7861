from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from jobboard.models.enums import ResumeStatus, ResumeVisibility
from jobboard.schemas.common import unique_in_order


class ExperienceEntry(BaseModel):
    title: str = Field(min_length=1)
    company: str | None = None
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    description: str | None = None


class EducationEntry(BaseModel):
    institution: str = Field(min_length=1)
    degree: str | None = None
    field_of_study: str | None = None
    start_date: str | None = None
    end_date: str | None = None


class CertificationEntry(BaseModel):
    name: str = Field(min_length=1)
    issuer: str | None = None
    issued_at: str | None = None
    url: str | None = None


class ResumeFilters(BaseModel):
    search: str | None = None
    location: str | None = None

    class Config:
        extra = "forbid"


class _ResumeFields(BaseModel):
    headline: str | None = Field(default=None, max_length=255)
    summary: str | None = None
    experience: list[ExperienceEntry] | None = None
    education: list[EducationEntry] | None = None
    skills: list[str] | None = None
    certifications: list[CertificationEntry] | None = None
    location: str | None = Field(default=None, max_length=255)
    phone_number: str | None = Field(default=None, max_length=50)
    linkedin_url: str | None = Field(default=None, max_length=500)
    portfolio_url: str | None = Field(default=None, max_length=500)
    photo_url: str | None = Field(default=None, max_length=1000)
    visibility: ResumeVisibility | None = None

    class Config:
        extra = "forbid"

    @field_validator("skills")
    @classmethod
    def _dedupe_skills(cls, value: list[str] | None) -> list[str] | None:
        return None if value is None else unique_in_order(value)


class ResumeCreate(_ResumeFields):
    status: ResumeStatus | None = None


class ResumePatch(_ResumeFields):
    status: ResumeStatus | None = None


class AdminResumePatch(ResumePatch):
    is_premium: bool | None = None


class ResumeOut(BaseModel):
    id: int
    user_id: int
    headline: str | None = None
    summary: str | None = None
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    certifications: list[CertificationEntry] = Field(default_factory=list)
    location: str | None = None
    phone_number: str | None = None
    linkedin_url: str | None = None
    portfolio_url: str | None = None
    photo_url: str | None = None
    visibility: ResumeVisibility
    status: ResumeStatus
    is_premium: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True

    @field_validator("experience", "education", "skills", "certifications", mode="before")
    @classmethod
    def _none_to_empty(cls, value: list | None) -> list:
        return value or []
