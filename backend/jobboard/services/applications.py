from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from jobboard.errors import bad_request, not_found
from jobboard.models.application import Application
from jobboard.models.enums import ApplicationStatus, JobStatus
from jobboard.schemas.application import ApplicationCreate, ApplicationStatusUpdate
from jobboard.schemas.common import Ack
from jobboard.services import moderation
from jobboard.services.guard import Action, Caller, require
from jobboard.services.jobs import job_target, load_job
from jobboard.services.resumes import find_resume_for_user
from jobboard.services.storage import best_effort_list, storage_guard


logger = logging.getLogger(__name__)

ALREADY_APPLIED = "Already applied to this job"


def create_application(db: Session, caller: Caller | None, payload: ApplicationCreate) -> Ack:
    require(caller, Action.APPLICATION_CREATE)

    resume = find_resume_for_user(db, caller.id)
    if not resume:
        raise bad_request("Please create a resume first")

    job = load_job(db, payload.job_id)
    if not job:
        raise not_found("Job not found")
    if job.status != JobStatus.ACTIVE:
        raise bad_request("This job is not accepting applications")

    with storage_guard(db):
        existing = (
            db.query(Application.id)
            .filter(Application.job_id == job.id, Application.job_seeker_id == caller.id)
            .first()
        )
    if existing:
        raise bad_request(ALREADY_APPLIED)

    application = Application(
        job_id=job.id,
        job_seeker_id=caller.id,
        resume_id=resume.id,
        cover_letter=payload.cover_letter,
        status=ApplicationStatus.SUBMITTED,
    )
    # The (job_id, job_seeker_id) constraint settles concurrent duplicates.
    with storage_guard(db, on_conflict=ALREADY_APPLIED):
        db.add(application)
        db.commit()
        db.refresh(application)
    logger.info("Application %s submitted for job %s by user %s", application.id, job.id, caller.id)
    return Ack(id=application.id)


def update_application_status(
    db: Session,
    caller: Caller | None,
    application_id: int,
    payload: ApplicationStatusUpdate,
) -> Ack:
    require(caller, Action.APPLICATION_UPDATE_STATUS)
    with storage_guard(db):
        application = db.get(Application, application_id)
    if not application:
        raise not_found("Application not found")

    job = load_job(db, application.job_id)
    require(caller, Action.APPLICATION_UPDATE_STATUS, job_target(job))

    application.status = moderation.transition_application(caller.role, application.status, payload.status)
    if "notes" in payload.model_fields_set:
        application.notes = payload.notes
    with storage_guard(db):
        db.add(application)
        db.commit()
    logger.info("Application %s set to %s by user %s", application.id, application.status.value, caller.id)
    return Ack(id=application.id)


def list_my_applications(db: Session, caller: Caller | None) -> list[Application]:
    require(caller, Action.APPLICATION_GET_MINE)
    return best_effort_list(
        db,
        lambda: db.query(Application)
        .filter(Application.job_seeker_id == caller.id)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .all(),
    )


def list_job_applications(db: Session, caller: Caller | None, job_id: int) -> list[Application]:
    require(caller, Action.APPLICATION_GET_BY_JOB)
    job = load_job(db, job_id)
    require(caller, Action.APPLICATION_GET_BY_JOB, job_target(job))
    return best_effort_list(
        db,
        lambda: db.query(Application)
        .filter(Application.job_id == job_id)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .all(),
    )
