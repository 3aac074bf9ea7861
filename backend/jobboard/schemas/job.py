from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from jobboard.models.enums import ExperienceLevel, JobStatus, JobType
from jobboard.schemas.common import unique_in_order


class JobFilters(BaseModel):
    search: str | None = None
    location: str | None = None
    job_type: JobType | None = None

    class Config:
        extra = "forbid"


class JobCreate(BaseModel):
    company_id: int
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    location: str | None = Field(default=None, max_length=255)
    job_type: JobType
    experience_level: ExperienceLevel | None = None
    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)
    salary_currency: str = Field(default="USD", min_length=1, max_length=10)
    skills: list[str] = Field(default_factory=list)
    expires_at: datetime | None = None
    status: JobStatus | None = None

    class Config:
        extra = "forbid"

    @field_validator("skills")
    @classmethod
    def _dedupe_skills(cls, value: list[str]) -> list[str]:
        return unique_in_order(value)

    @model_validator(mode="after")
    def _salary_range(self) -> JobCreate:
        if self.salary_min is not None and self.salary_max is not None and self.salary_min > self.salary_max:
            raise ValueError("salary_min must not exceed salary_max")
        return self


class JobPatch(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    location: str | None = Field(default=None, max_length=255)
    job_type: JobType | None = None
    experience_level: ExperienceLevel | None = None
    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)
    salary_currency: str | None = Field(default=None, min_length=1, max_length=10)
    skills: list[str] | None = None
    expires_at: datetime | None = None
    status: JobStatus | None = None

    class Config:
        extra = "forbid"

    @field_validator("skills")
    @classmethod
    def _dedupe_skills(cls, value: list[str] | None) -> list[str] | None:
        return None if value is None else unique_in_order(value)


class AdminJobPatch(JobPatch):
    is_featured: bool | None = None


class JobOut(BaseModel):
    id: int
    company_id: int
    recruiter_id: int
    title: str
    description: str
    location: str | None = None
    job_type: JobType
    experience_level: ExperienceLevel | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    salary_currency: str | None = None
    skills: list[str] = Field(default_factory=list)
    status: JobStatus
    is_featured: bool
    expires_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True

    @field_validator("skills", mode="before")
    @classmethod
    def _none_skills(cls, value: list[str] | None) -> list[str]:
        return value or []
