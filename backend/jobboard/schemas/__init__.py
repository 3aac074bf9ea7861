from jobboard.schemas.admin import UserRoleUpdate
from jobboard.schemas.application import ApplicationCreate, ApplicationOut, ApplicationStatusUpdate
from jobboard.schemas.auth import IdentityIn, SelfRoleUpdate, SessionOut, UserOut
from jobboard.schemas.common import Ack
from jobboard.schemas.company import CompanyCreate, CompanyOut, CompanyPatch
from jobboard.schemas.job import AdminJobPatch, JobCreate, JobFilters, JobOut, JobPatch
from jobboard.schemas.resume import AdminResumePatch, ResumeCreate, ResumeFilters, ResumeOut, ResumePatch
from jobboard.schemas.saved import (
    SavedCandidateIn,
    SavedCandidateOut,
    SavedJobOut,
    SavedSearchCreate,
    SavedSearchOut,
    SavedState,
)

__all__ = [
    "Ack",
    "IdentityIn",
    "SessionOut",
    "SelfRoleUpdate",
    "UserOut",
    "UserRoleUpdate",
    "CompanyCreate",
    "CompanyPatch",
    "CompanyOut",
    "JobFilters",
    "JobCreate",
    "JobPatch",
    "AdminJobPatch",
    "JobOut",
    "ResumeFilters",
    "ResumeCreate",
    "ResumePatch",
    "AdminResumePatch",
    "ResumeOut",
    "ApplicationCreate",
    "ApplicationStatusUpdate",
    "ApplicationOut",
    "SavedJobOut",
    "SavedSearchCreate",
    "SavedSearchOut",
    "SavedCandidateIn",
    "SavedCandidateOut",
    "SavedState",
]
