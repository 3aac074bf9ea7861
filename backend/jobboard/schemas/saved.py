from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from jobboard.schemas.job import JobFilters


class SavedJobOut(BaseModel):
    id: int
    user_id: int
    job_id: int
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class SavedSearchCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    search_params: JobFilters

    class Config:
        extra = "forbid"


class SavedSearchOut(BaseModel):
    id: int
    user_id: int
    name: str
    search_params: JobFilters
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class SavedCandidateIn(BaseModel):
    notes: str | None = None

    class Config:
        extra = "forbid"


class SavedCandidateOut(BaseModel):
    id: int
    recruiter_id: int
    candidate_id: int
    notes: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class SavedState(BaseModel):
    saved: bool
