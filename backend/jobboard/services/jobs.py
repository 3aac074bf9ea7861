from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from jobboard.errors import not_found
from jobboard.models.company import Company
from jobboard.models.job import Job
from jobboard.schemas.common import Ack
from jobboard.schemas.job import JobCreate, JobFilters, JobPatch
from jobboard.services import moderation, queries
from jobboard.services.companies import company_target
from jobboard.services.guard import Action, Caller, Target, require
from jobboard.services.patches import apply_patch, check_salary_range
from jobboard.services.storage import best_effort_list, storage_guard


logger = logging.getLogger(__name__)

REQUIRED_JOB_FIELDS = ("title", "description", "job_type", "salary_currency", "status", "is_featured")


def job_target(job: Job | None) -> Target:
    return Target.owned_by(job.recruiter_id) if job else Target.missing()


def load_job(db: Session, job_id: int) -> Job | None:
    with storage_guard(db):
        return db.get(Job, job_id)


def apply_job_changes(db: Session, caller: Caller, job: Job, changes: dict[str, Any]) -> Ack:
    """Validate and persist a job patch for a caller who already passed the guard."""
    previous_status = job.status
    if changes.get("status") is not None:
        changes["status"] = moderation.transition_job(caller.role, job.status, changes["status"])

    check_salary_range(
        changes.get("salary_min", job.salary_min),
        changes.get("salary_max", job.salary_max),
    )
    apply_patch(job, changes, required=REQUIRED_JOB_FIELDS)

    with storage_guard(db):
        db.add(job)
        db.commit()
    if job.status != previous_status:
        logger.info("Job %s moved %s -> %s by user %s", job.id, previous_status.value, job.status.value, caller.id)
    return Ack(id=job.id)


def create_job(db: Session, caller: Caller | None, payload: JobCreate) -> Ack:
    require(caller, Action.JOB_CREATE)
    with storage_guard(db):
        company = db.get(Company, payload.company_id)
    require(caller, Action.JOB_CREATE, company_target(company))

    data = payload.model_dump(exclude_none=True, exclude={"status"})
    job = Job(
        **data,
        recruiter_id=company.recruiter_id,
        status=moderation.initial_job_status(payload.status),
    )
    with storage_guard(db):
        db.add(job)
        db.commit()
        db.refresh(job)
    logger.info("Job %s created for company %s as %s", job.id, company.id, job.status.value)
    return Ack(id=job.id)


def update_job(db: Session, caller: Caller | None, job_id: int, payload: JobPatch) -> Ack:
    require(caller, Action.JOB_UPDATE)
    job = load_job(db, job_id)
    require(caller, Action.JOB_UPDATE, job_target(job))
    return apply_job_changes(db, caller, job, payload.model_dump(exclude_unset=True))


def get_job(db: Session, caller: Caller | None, job_id: int) -> Job:
    require(caller, Action.JOB_GET_BY_ID)
    job = load_job(db, job_id)
    if not job:
        raise not_found("Job not found")
    return job


def list_my_jobs(db: Session, caller: Caller | None) -> list[Job]:
    require(caller, Action.JOB_GET_MINE)
    return best_effort_list(
        db,
        lambda: db.query(Job).filter(Job.recruiter_id == caller.id).order_by(Job.created_at.desc(), Job.id.desc()).all(),
    )


def list_active_jobs(db: Session, caller: Caller | None, filters: JobFilters | None = None) -> list[Job]:
    require(caller, Action.JOB_GET_ACTIVE)
    return best_effort_list(db, lambda: queries.list_active_jobs(db, filters))


def list_all_jobs(db: Session, caller: Caller | None) -> list[Job]:
    require(caller, Action.JOB_GET_ALL)
    return best_effort_list(db, lambda: db.query(Job).order_by(Job.created_at.desc(), Job.id.desc()).all())
