from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobboard.auth import get_caller
from jobboard.database import get_db
from jobboard.schemas.common import Ack
from jobboard.schemas.resume import ResumeCreate, ResumeFilters, ResumeOut, ResumePatch
from jobboard.services import resumes
from jobboard.services.guard import Caller


router = APIRouter()


@router.post("", response_model=Ack)
def create_resume(
    payload: ResumeCreate,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
) -> Ack:
    return resumes.create_resume(db, caller, payload)


@router.get("", response_model=list[ResumeOut])
def list_public_resumes(
    search: str | None = Query(default=None),
    location: str | None = Query(default=None),
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
):
    return resumes.list_public_resumes(db, caller, ResumeFilters(search=search, location=location))


@router.get("/mine", response_model=ResumeOut | None)
def get_my_resume(db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return resumes.get_my_resume(db, caller)


@router.get("/all", response_model=list[ResumeOut])
def list_all_resumes(db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return resumes.list_all_resumes(db, caller)


@router.get("/{resume_id}", response_model=ResumeOut)
def get_resume(resume_id: int, db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return resumes.get_resume(db, caller, resume_id)


@router.patch("/{resume_id}", response_model=Ack)
def update_resume(
    resume_id: int,
    payload: ResumePatch,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
) -> Ack:
    return resumes.update_resume(db, caller, resume_id, payload)
