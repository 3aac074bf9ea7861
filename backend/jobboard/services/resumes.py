from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from jobboard.errors import bad_request, not_found
from jobboard.models.enums import ResumeVisibility
from jobboard.models.resume import Resume
from jobboard.schemas.common import Ack
from jobboard.schemas.resume import ResumeCreate, ResumeFilters, ResumePatch
from jobboard.services import moderation, queries
from jobboard.services.guard import Action, Caller, Target, is_owner_or_admin, require
from jobboard.services.patches import apply_patch
from jobboard.services.storage import best_effort_list, storage_guard


logger = logging.getLogger(__name__)

RESUME_EXISTS = "Resume already exists"
REQUIRED_RESUME_FIELDS = ("visibility", "status", "is_premium")


def resume_target(resume: Resume | None) -> Target:
    return Target.owned_by(resume.user_id) if resume else Target.missing()


def load_resume(db: Session, resume_id: int) -> Resume | None:
    with storage_guard(db):
        return db.get(Resume, resume_id)


def find_resume_for_user(db: Session, user_id: int) -> Resume | None:
    with storage_guard(db):
        return db.query(Resume).filter(Resume.user_id == user_id).first()


def apply_resume_changes(db: Session, caller: Caller, resume: Resume, changes: dict[str, Any]) -> Ack:
    """Validate and persist a resume patch for a caller who already passed the guard."""
    previous_status = resume.status
    if changes.get("status") is not None:
        changes["status"] = moderation.transition_resume(caller.role, resume.status, changes["status"])

    apply_patch(resume, changes, required=REQUIRED_RESUME_FIELDS)
    with storage_guard(db):
        db.add(resume)
        db.commit()
    if resume.status != previous_status:
        logger.info(
            "Resume %s moved %s -> %s by user %s", resume.id, previous_status.value, resume.status.value, caller.id
        )
    return Ack(id=resume.id)


def create_resume(db: Session, caller: Caller | None, payload: ResumeCreate) -> Ack:
    require(caller, Action.RESUME_CREATE)
    if find_resume_for_user(db, caller.id):
        raise bad_request(RESUME_EXISTS)

    resume = Resume(
        **payload.model_dump(exclude_none=True, exclude={"status"}),
        user_id=caller.id,
        status=moderation.initial_resume_status(payload.status),
    )
    with storage_guard(db, on_conflict=RESUME_EXISTS):
        db.add(resume)
        db.commit()
        db.refresh(resume)
    logger.info("Resume %s created for user %s", resume.id, caller.id)
    return Ack(id=resume.id)


def update_resume(db: Session, caller: Caller | None, resume_id: int, payload: ResumePatch) -> Ack:
    require(caller, Action.RESUME_UPDATE)
    resume = load_resume(db, resume_id)
    require(caller, Action.RESUME_UPDATE, resume_target(resume))
    return apply_resume_changes(db, caller, resume, payload.model_dump(exclude_unset=True))


def get_my_resume(db: Session, caller: Caller | None) -> Resume | None:
    require(caller, Action.RESUME_GET_MINE)
    return find_resume_for_user(db, caller.id)


def get_resume(db: Session, caller: Caller | None, resume_id: int) -> Resume:
    require(caller, Action.RESUME_GET_BY_ID)
    resume = load_resume(db, resume_id)
    # Private resumes are reported as missing so their existence is not confirmed.
    if not resume or (resume.visibility == ResumeVisibility.PRIVATE and not is_owner_or_admin(caller, resume.user_id)):
        raise not_found("Resume not found")
    return resume


def list_public_resumes(db: Session, caller: Caller | None, filters: ResumeFilters | None = None) -> list[Resume]:
    require(caller, Action.RESUME_GET_PUBLIC)
    return best_effort_list(db, lambda: queries.list_public_resumes(db, filters))


def list_all_resumes(db: Session, caller: Caller | None) -> list[Resume]:
    require(caller, Action.RESUME_GET_ALL)
    return best_effort_list(
        db, lambda: db.query(Resume).order_by(Resume.created_at.desc(), Resume.id.desc()).all()
    )
