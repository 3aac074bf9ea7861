from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.auth import get_caller
from jobboard.database import get_db
from jobboard.schemas.application import ApplicationCreate, ApplicationOut, ApplicationStatusUpdate
from jobboard.schemas.common import Ack
from jobboard.services import applications
from jobboard.services.guard import Caller


router = APIRouter()


@router.post("", response_model=Ack)
def create_application(
    payload: ApplicationCreate,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
) -> Ack:
    return applications.create_application(db, caller, payload)


@router.get("/mine", response_model=list[ApplicationOut])
def list_my_applications(db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return applications.list_my_applications(db, caller)


@router.get("/by-job/{job_id}", response_model=list[ApplicationOut])
def list_job_applications(job_id: int, db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return applications.list_job_applications(db, caller, job_id)


@router.patch("/{application_id}/status", response_model=Ack)
def update_application_status(
    application_id: int,
    payload: ApplicationStatusUpdate,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
) -> Ack:
    return applications.update_application_status(db, caller, application_id, payload)
