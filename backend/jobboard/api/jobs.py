from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobboard.auth import get_caller
from jobboard.database import get_db
from jobboard.models.enums import JobType
from jobboard.schemas.common import Ack
from jobboard.schemas.job import JobCreate, JobFilters, JobOut, JobPatch
from jobboard.services import jobs
from jobboard.services.guard import Caller


router = APIRouter()


@router.post("", response_model=Ack)
def create_job(
    payload: JobCreate,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
) -> Ack:
    return jobs.create_job(db, caller, payload)


@router.get("", response_model=list[JobOut])
def list_active_jobs(
    search: str | None = Query(default=None),
    location: str | None = Query(default=None),
    job_type: JobType | None = Query(default=None),
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
):
    filters = JobFilters(search=search, location=location, job_type=job_type)
    return jobs.list_active_jobs(db, caller, filters)


@router.get("/mine", response_model=list[JobOut])
def list_my_jobs(db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return jobs.list_my_jobs(db, caller)


@router.get("/all", response_model=list[JobOut])
def list_all_jobs(db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return jobs.list_all_jobs(db, caller)


@router.get("/{job_id}", response_model=JobOut)
def get_job(job_id: int, db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return jobs.get_job(db, caller, job_id)


@router.patch("/{job_id}", response_model=Ack)
def update_job(
    job_id: int,
    payload: JobPatch,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
) -> Ack:
    return jobs.update_job(db, caller, job_id, payload)
