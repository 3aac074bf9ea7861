from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.auth import get_caller
from jobboard.database import get_db
from jobboard.schemas.common import Ack
from jobboard.schemas.job import JobOut
from jobboard.schemas.saved import (
    SavedCandidateIn,
    SavedCandidateOut,
    SavedJobOut,
    SavedSearchCreate,
    SavedSearchOut,
    SavedState,
)
from jobboard.services import saved
from jobboard.services.guard import Caller


saved_jobs_router = APIRouter()
saved_searches_router = APIRouter()
saved_candidates_router = APIRouter()


@saved_jobs_router.get("", response_model=list[SavedJobOut])
def list_saved_jobs(db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return saved.list_saved_jobs(db, caller)


@saved_jobs_router.get("/{job_id}", response_model=SavedState)
def check_saved_job(job_id: int, db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return saved.is_job_saved(db, caller, job_id)


@saved_jobs_router.post("/{job_id}", response_model=Ack)
def save_job(job_id: int, db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)) -> Ack:
    return saved.save_job(db, caller, job_id)


@saved_jobs_router.delete("/{job_id}", response_model=Ack)
def unsave_job(job_id: int, db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)) -> Ack:
    return saved.unsave_job(db, caller, job_id)


@saved_searches_router.post("", response_model=Ack)
def create_saved_search(
    payload: SavedSearchCreate,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
) -> Ack:
    return saved.create_saved_search(db, caller, payload)


@saved_searches_router.get("", response_model=list[SavedSearchOut])
def list_saved_searches(db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return saved.list_saved_searches(db, caller)


@saved_searches_router.get("/{search_id}/jobs", response_model=list[JobOut])
def run_saved_search(search_id: int, db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return saved.run_saved_search(db, caller, search_id)


@saved_searches_router.delete("/{search_id}", response_model=Ack)
def delete_saved_search(
    search_id: int,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
) -> Ack:
    return saved.delete_saved_search(db, caller, search_id)


@saved_candidates_router.get("", response_model=list[SavedCandidateOut])
def list_saved_candidates(db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return saved.list_saved_candidates(db, caller)


@saved_candidates_router.get("/{candidate_id}", response_model=SavedState)
def check_saved_candidate(
    candidate_id: int,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
):
    return saved.is_candidate_saved(db, caller, candidate_id)


@saved_candidates_router.post("/{candidate_id}", response_model=Ack)
def save_candidate(
    candidate_id: int,
    payload: SavedCandidateIn | None = None,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
) -> Ack:
    return saved.save_candidate(db, caller, candidate_id, payload or SavedCandidateIn())


@saved_candidates_router.delete("/{candidate_id}", response_model=Ack)
def unsave_candidate(
    candidate_id: int,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
) -> Ack:
    return saved.unsave_candidate(db, caller, candidate_id)
