from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from jobboard.errors import not_found
from jobboard.models.company import Company
from jobboard.schemas.common import Ack
from jobboard.schemas.company import CompanyCreate, CompanyPatch
from jobboard.services.guard import Action, Caller, Target, require
from jobboard.services.patches import apply_patch
from jobboard.services.storage import best_effort_list, storage_guard


logger = logging.getLogger(__name__)


def company_target(company: Company | None) -> Target:
    return Target.owned_by(company.recruiter_id) if company else Target.missing()


def create_company(db: Session, caller: Caller | None, payload: CompanyCreate) -> Ack:
    require(caller, Action.COMPANY_CREATE)

    company = Company(**payload.model_dump(exclude_none=True), recruiter_id=caller.id)
    with storage_guard(db):
        db.add(company)
        db.commit()
        db.refresh(company)
    logger.info("Company %s created by user %s", company.id, caller.id)
    return Ack(id=company.id)


def update_company(db: Session, caller: Caller | None, company_id: int, payload: CompanyPatch) -> Ack:
    require(caller, Action.COMPANY_UPDATE)
    with storage_guard(db):
        company = db.get(Company, company_id)
    require(caller, Action.COMPANY_UPDATE, company_target(company))

    apply_patch(company, payload.model_dump(exclude_unset=True), required=("name",))
    with storage_guard(db):
        db.add(company)
        db.commit()
    return Ack(id=company.id)


def get_company(db: Session, caller: Caller | None, company_id: int) -> Company:
    require(caller, Action.COMPANY_GET_BY_ID)
    with storage_guard(db):
        company = db.get(Company, company_id)
    if not company:
        raise not_found("Company not found")
    return company


def list_my_companies(db: Session, caller: Caller | None) -> list[Company]:
    require(caller, Action.COMPANY_GET_MINE)
    return best_effort_list(
        db,
        lambda: db.query(Company)
        .filter(Company.recruiter_id == caller.id)
        .order_by(Company.created_at.desc(), Company.id.desc())
        .all(),
    )


def list_companies(db: Session, caller: Caller | None) -> list[Company]:
    require(caller, Action.COMPANY_GET_ALL)
    return best_effort_list(
        db,
        lambda: db.query(Company).order_by(Company.created_at.desc(), Company.id.desc()).all(),
    )
