"""Moderation and user management procedures, all gated to admins."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from jobboard.models.enums import JobStatus, ResumeStatus, Role
from jobboard.models.job import Job
from jobboard.models.resume import Resume
from jobboard.models.user import User
from jobboard.schemas.common import Ack
from jobboard.schemas.job import AdminJobPatch
from jobboard.schemas.resume import AdminResumePatch
from jobboard.services.guard import Action, Caller, Target, require
from jobboard.services.jobs import apply_job_changes, load_job
from jobboard.services.resumes import apply_resume_changes, load_resume
from jobboard.services.storage import best_effort_list, storage_guard


logger = logging.getLogger(__name__)


def _exists(record: object | None) -> Target:
    return Target.owned_by() if record is not None else Target.missing()


def list_users(db: Session, caller: Caller | None) -> list[User]:
    require(caller, Action.ADMIN_GET_USERS)
    return best_effort_list(db, lambda: db.query(User).order_by(User.created_at.desc(), User.id.desc()).all())


def update_user_role(db: Session, caller: Caller | None, user_id: int, role: Role) -> Ack:
    require(caller, Action.ADMIN_UPDATE_USER_ROLE)
    with storage_guard(db):
        user = db.get(User, user_id)
    require(caller, Action.ADMIN_UPDATE_USER_ROLE, _exists(user))

    if user.role != role:
        logger.info("User %s role %s -> %s by admin %s", user.id, user.role.value, role.value, caller.id)
        user.role = role
        with storage_guard(db):
            db.add(user)
            db.commit()
    return Ack(id=user.id)


def _moderate_job(db: Session, caller: Caller | None, action: Action, job_id: int, status: JobStatus) -> Ack:
    require(caller, action)
    job = load_job(db, job_id)
    require(caller, action, _exists(job))
    return apply_job_changes(db, caller, job, {"status": status})


def approve_job(db: Session, caller: Caller | None, job_id: int) -> Ack:
    return _moderate_job(db, caller, Action.ADMIN_APPROVE_JOB, job_id, JobStatus.ACTIVE)


def reject_job(db: Session, caller: Caller | None, job_id: int) -> Ack:
    return _moderate_job(db, caller, Action.ADMIN_REJECT_JOB, job_id, JobStatus.REJECTED)


def _moderate_resume(
    db: Session, caller: Caller | None, action: Action, resume_id: int, status: ResumeStatus
) -> Ack:
    require(caller, action)
    resume = load_resume(db, resume_id)
    require(caller, action, _exists(resume))
    return apply_resume_changes(db, caller, resume, {"status": status})


def approve_resume(db: Session, caller: Caller | None, resume_id: int) -> Ack:
    return _moderate_resume(db, caller, Action.ADMIN_APPROVE_RESUME, resume_id, ResumeStatus.ACTIVE)


def reject_resume(db: Session, caller: Caller | None, resume_id: int) -> Ack:
    return _moderate_resume(db, caller, Action.ADMIN_REJECT_RESUME, resume_id, ResumeStatus.REJECTED)


def update_job(db: Session, caller: Caller | None, job_id: int, payload: AdminJobPatch) -> Ack:
    require(caller, Action.ADMIN_UPDATE_JOB)
    job: Job | None = load_job(db, job_id)
    require(caller, Action.ADMIN_UPDATE_JOB, _exists(job))
    return apply_job_changes(db, caller, job, payload.model_dump(exclude_unset=True))


def update_resume(db: Session, caller: Caller | None, resume_id: int, payload: AdminResumePatch) -> Ack:
    require(caller, Action.ADMIN_UPDATE_RESUME)
    resume: Resume | None = load_resume(db, resume_id)
    require(caller, Action.ADMIN_UPDATE_RESUME, _exists(resume))
    return apply_resume_changes(db, caller, resume, payload.model_dump(exclude_unset=True))
