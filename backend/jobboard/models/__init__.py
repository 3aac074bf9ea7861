from jobboard.models.application import Application
from jobboard.models.company import Company
from jobboard.models.job import Job
from jobboard.models.resume import Resume
from jobboard.models.saved import SavedCandidate, SavedJob, SavedSearch
from jobboard.models.user import User

__all__ = ["User", "Company", "Job", "Resume", "Application", "SavedJob", "SavedSearch", "SavedCandidate"]
