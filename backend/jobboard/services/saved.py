"""Bookmarks: saved jobs and searches for job seekers, saved candidates for recruiters."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from jobboard.errors import not_found
from jobboard.models.job import Job
from jobboard.models.saved import SavedCandidate, SavedJob, SavedSearch
from jobboard.models.user import User
from jobboard.schemas.common import Ack
from jobboard.schemas.job import JobFilters
from jobboard.schemas.saved import SavedCandidateIn, SavedSearchCreate, SavedState
from jobboard.services import queries
from jobboard.services.guard import Action, Caller, Target, require
from jobboard.services.storage import best_effort_list, storage_guard


logger = logging.getLogger(__name__)


def save_job(db: Session, caller: Caller | None, job_id: int) -> Ack:
    require(caller, Action.SAVED_JOB_SAVE)
    with storage_guard(db):
        job = db.get(Job, job_id)
        existing = db.query(SavedJob).filter(SavedJob.user_id == caller.id, SavedJob.job_id == job_id).first()
    if not job:
        raise not_found("Job not found")
    if existing:
        return Ack(id=existing.id)

    saved = SavedJob(user_id=caller.id, job_id=job_id)
    with storage_guard(db, on_conflict="Job already saved"):
        db.add(saved)
        db.commit()
        db.refresh(saved)
    return Ack(id=saved.id)


def unsave_job(db: Session, caller: Caller | None, job_id: int) -> Ack:
    require(caller, Action.SAVED_JOB_UNSAVE)
    with storage_guard(db):
        db.query(SavedJob).filter(SavedJob.user_id == caller.id, SavedJob.job_id == job_id).delete(
            synchronize_session=False
        )
        db.commit()
    return Ack()


def list_saved_jobs(db: Session, caller: Caller | None) -> list[SavedJob]:
    require(caller, Action.SAVED_JOB_GET_MINE)
    return best_effort_list(
        db,
        lambda: db.query(SavedJob)
        .filter(SavedJob.user_id == caller.id)
        .order_by(SavedJob.created_at.desc(), SavedJob.id.desc())
        .all(),
    )


def is_job_saved(db: Session, caller: Caller | None, job_id: int) -> SavedState:
    require(caller, Action.SAVED_JOB_CHECK)
    with storage_guard(db):
        row = db.query(SavedJob.id).filter(SavedJob.user_id == caller.id, SavedJob.job_id == job_id).first()
    return SavedState(saved=row is not None)


def _search_target(search: SavedSearch | None) -> Target:
    return Target.owned_by(search.user_id) if search else Target.missing()


def create_saved_search(db: Session, caller: Caller | None, payload: SavedSearchCreate) -> Ack:
    require(caller, Action.SAVED_SEARCH_CREATE)
    search = SavedSearch(
        user_id=caller.id,
        name=payload.name,
        search_params=payload.search_params.model_dump(mode="json", exclude_none=True),
    )
    with storage_guard(db):
        db.add(search)
        db.commit()
        db.refresh(search)
    return Ack(id=search.id)


def list_saved_searches(db: Session, caller: Caller | None) -> list[SavedSearch]:
    require(caller, Action.SAVED_SEARCH_GET_MINE)
    return best_effort_list(
        db,
        lambda: db.query(SavedSearch)
        .filter(SavedSearch.user_id == caller.id)
        .order_by(SavedSearch.created_at.desc(), SavedSearch.id.desc())
        .all(),
    )


def delete_saved_search(db: Session, caller: Caller | None, search_id: int) -> Ack:
    require(caller, Action.SAVED_SEARCH_DELETE)
    with storage_guard(db):
        search = db.get(SavedSearch, search_id)
    require(caller, Action.SAVED_SEARCH_DELETE, _search_target(search))

    with storage_guard(db):
        db.delete(search)
        db.commit()
    return Ack(id=search_id)


def run_saved_search(db: Session, caller: Caller | None, search_id: int) -> list[Job]:
    require(caller, Action.SAVED_SEARCH_RUN)
    with storage_guard(db):
        search = db.get(SavedSearch, search_id)
    require(caller, Action.SAVED_SEARCH_RUN, _search_target(search))

    filters = JobFilters(**(search.search_params or {}))
    return best_effort_list(db, lambda: queries.list_active_jobs(db, filters))


def save_candidate(db: Session, caller: Caller | None, candidate_id: int, payload: SavedCandidateIn) -> Ack:
    require(caller, Action.SAVED_CANDIDATE_SAVE)
    with storage_guard(db):
        candidate = db.get(User, candidate_id)
        saved = (
            db.query(SavedCandidate)
            .filter(SavedCandidate.recruiter_id == caller.id, SavedCandidate.candidate_id == candidate_id)
            .first()
        )
    if not candidate:
        raise not_found("Candidate not found")

    if saved is None:
        saved = SavedCandidate(recruiter_id=caller.id, candidate_id=candidate_id, notes=payload.notes)
    elif "notes" in payload.model_fields_set:
        saved.notes = payload.notes

    with storage_guard(db, on_conflict="Candidate already saved"):
        db.add(saved)
        db.commit()
        db.refresh(saved)
    return Ack(id=saved.id)


def unsave_candidate(db: Session, caller: Caller | None, candidate_id: int) -> Ack:
    require(caller, Action.SAVED_CANDIDATE_UNSAVE)
    with storage_guard(db):
        db.query(SavedCandidate).filter(
            SavedCandidate.recruiter_id == caller.id, SavedCandidate.candidate_id == candidate_id
        ).delete(synchronize_session=False)
        db.commit()
    return Ack()


def list_saved_candidates(db: Session, caller: Caller | None) -> list[SavedCandidate]:
    require(caller, Action.SAVED_CANDIDATE_GET_MINE)
    return best_effort_list(
        db,
        lambda: db.query(SavedCandidate)
        .filter(SavedCandidate.recruiter_id == caller.id)
        .order_by(SavedCandidate.created_at.desc(), SavedCandidate.id.desc())
        .all(),
    )


def is_candidate_saved(db: Session, caller: Caller | None, candidate_id: int) -> SavedState:
    require(caller, Action.SAVED_CANDIDATE_CHECK)
    with storage_guard(db):
        row = (
            db.query(SavedCandidate.id)
            .filter(SavedCandidate.recruiter_id == caller.id, SavedCandidate.candidate_id == candidate_id)
            .first()
        )
    return SavedState(saved=row is not None)
