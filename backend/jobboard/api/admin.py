from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.auth import get_caller
from jobboard.database import get_db
from jobboard.schemas.admin import UserRoleUpdate
from jobboard.schemas.auth import UserOut
from jobboard.schemas.common import Ack
from jobboard.schemas.job import AdminJobPatch
from jobboard.schemas.resume import AdminResumePatch
from jobboard.services import admin
from jobboard.services.guard import Caller


router = APIRouter()


@router.get("/users", response_model=list[UserOut])
def list_users(db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return admin.list_users(db, caller)


@router.put("/users/{user_id}/role", response_model=Ack)
def update_user_role(
    user_id: int,
    payload: UserRoleUpdate,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
) -> Ack:
    return admin.update_user_role(db, caller, user_id, payload.role)


@router.post("/jobs/{job_id}/approve", response_model=Ack)
def approve_job(job_id: int, db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)) -> Ack:
    return admin.approve_job(db, caller, job_id)


@router.post("/jobs/{job_id}/reject", response_model=Ack)
def reject_job(job_id: int, db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)) -> Ack:
    return admin.reject_job(db, caller, job_id)


@router.patch("/jobs/{job_id}", response_model=Ack)
def update_job(
    job_id: int,
    payload: AdminJobPatch,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
) -> Ack:
    return admin.update_job(db, caller, job_id, payload)


@router.post("/resumes/{resume_id}/approve", response_model=Ack)
def approve_resume(resume_id: int, db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)) -> Ack:
    return admin.approve_resume(db, caller, resume_id)


@router.post("/resumes/{resume_id}/reject", response_model=Ack)
def reject_resume(resume_id: int, db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)) -> Ack:
    return admin.reject_resume(db, caller, resume_id)


@router.patch("/resumes/{resume_id}", response_model=Ack)
def update_resume(
    resume_id: int,
    payload: AdminResumePatch,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
) -> Ack:
    return admin.update_resume(db, caller, resume_id, payload)
