from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.types import JSON

from jobboard.database import Base
from jobboard.models.enums import ExperienceLevel, JobStatus, JobType, enum_column_type


class Job(Base):
    __tablename__ = "jobs"
    __table_args__ = (
        Index("idx_job_status_featured", "status", "is_featured", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    recruiter_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(255))
    job_type = Column(enum_column_type(JobType, "job_type"), nullable=False)
    experience_level = Column(enum_column_type(ExperienceLevel, "experience_level"))
    salary_min = Column(Integer)
    salary_max = Column(Integer)
    salary_currency = Column(String(10), default="USD")
    skills = Column(JSON)
    status = Column(enum_column_type(JobStatus, "job_status"), default=JobStatus.PENDING_APPROVAL, nullable=False)
    is_featured = Column(Boolean, default=False, nullable=False)
    expires_at = Column(DateTime)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
