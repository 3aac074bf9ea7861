from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.auth import get_caller
from jobboard.database import get_db
from jobboard.schemas.common import Ack
from jobboard.schemas.company import CompanyCreate, CompanyOut, CompanyPatch
from jobboard.services import companies
from jobboard.services.guard import Caller


router = APIRouter()


@router.post("", response_model=Ack)
def create_company(
    payload: CompanyCreate,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
) -> Ack:
    return companies.create_company(db, caller, payload)


@router.get("", response_model=list[CompanyOut])
def list_companies(db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return companies.list_companies(db, caller)


@router.get("/mine", response_model=list[CompanyOut])
def list_my_companies(db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return companies.list_my_companies(db, caller)


@router.get("/{company_id}", response_model=CompanyOut)
def get_company(company_id: int, db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return companies.get_company(db, caller, company_id)


@router.patch("/{company_id}", response_model=Ack)
def update_company(
    company_id: int,
    payload: CompanyPatch,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
) -> Ack:
    return companies.update_company(db, caller, company_id, payload)
