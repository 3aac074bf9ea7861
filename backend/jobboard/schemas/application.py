from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from jobboard.models.enums import ApplicationStatus


class ApplicationCreate(BaseModel):
    job_id: int
    cover_letter: str | None = None

    class Config:
        extra = "forbid"


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus
    notes: str | None = None

    class Config:
        extra = "forbid"


class ApplicationOut(BaseModel):
    id: int
    job_id: int
    job_seeker_id: int
    resume_id: int
    cover_letter: str | None = None
    status: ApplicationStatus
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
