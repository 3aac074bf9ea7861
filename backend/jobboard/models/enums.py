from __future__ import annotations

from enum import Enum

from sqlalchemy import Enum as SAEnum


class Role(str, Enum):
    JOB_SEEKER = "job_seeker"
    RECRUITER = "recruiter"
    ADMIN = "admin"


class JobType(str, Enum):
    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    CONTRACT = "contract"
    SEASONAL = "seasonal"
    INTERNSHIP = "internship"


class ExperienceLevel(str, Enum):
    ENTRY = "entry"
    INTERMEDIATE = "intermediate"
    SENIOR = "senior"
    EXPERT = "expert"


class JobStatus(str, Enum):
    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    ACTIVE = "active"
    INACTIVE = "inactive"
    REJECTED = "rejected"


class ResumeVisibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    RECRUITERS_ONLY = "recruiters_only"


class ResumeStatus(str, Enum):
    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    ACTIVE = "active"
    REJECTED = "rejected"


class ApplicationStatus(str, Enum):
    SUBMITTED = "submitted"
    REVIEWED = "reviewed"
    SHORTLISTED = "shortlisted"
    REJECTED = "rejected"
    ACCEPTED = "accepted"


def enum_column_type(enum_cls: type[Enum], name: str) -> SAEnum:
    # Persist the lowercase values rather than member names.
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        length=50,
        values_callable=lambda members: [member.value for member in members],
    )
