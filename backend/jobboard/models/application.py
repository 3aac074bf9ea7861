from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, UniqueConstraint, func

from jobboard.database import Base
from jobboard.models.enums import ApplicationStatus, enum_column_type


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("job_id", "job_seeker_id", name="uq_application_job_seeker"),)

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    job_seeker_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False)
    cover_letter = Column(Text)
    status = Column(
        enum_column_type(ApplicationStatus, "application_status"),
        default=ApplicationStatus.SUBMITTED,
        nullable=False,
    )
    notes = Column(Text)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
