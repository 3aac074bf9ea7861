from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.types import JSON

from jobboard.database import Base
from jobboard.models.enums import ResumeStatus, ResumeVisibility, enum_column_type


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    headline = Column(String(255))
    summary = Column(Text)
    experience = Column(JSON)
    education = Column(JSON)
    skills = Column(JSON)
    certifications = Column(JSON)
    location = Column(String(255))
    phone_number = Column(String(50))
    linkedin_url = Column(String(500))
    portfolio_url = Column(String(500))
    photo_url = Column(String(1000))
    visibility = Column(
        enum_column_type(ResumeVisibility, "resume_visibility"),
        default=ResumeVisibility.PUBLIC,
        nullable=False,
    )
    status = Column(enum_column_type(ResumeStatus, "resume_status"), default=ResumeStatus.PENDING_APPROVAL, nullable=False)
    is_premium = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
