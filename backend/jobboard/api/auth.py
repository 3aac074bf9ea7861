from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.auth import create_access_token, get_caller, get_settings, require_identity_backchannel
from jobboard.config import Settings
from jobboard.database import get_db
from jobboard.schemas.auth import IdentityIn, SelfRoleUpdate, SessionOut, UserOut
from jobboard.schemas.common import Ack
from jobboard.services import users
from jobboard.services.guard import Caller


router = APIRouter()


@router.post("/session", response_model=SessionOut, dependencies=[Depends(require_identity_backchannel)])
def open_session(
    payload: IdentityIn,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> SessionOut:
    user = users.upsert_user(db, payload, owner_open_id=settings.owner_open_id)
    token = create_access_token(user.id, settings.auth_secret, settings.auth_token_ttl_seconds)
    return SessionOut(access_token=token, user_id=user.id, role=user.role)


@router.get("/me", response_model=UserOut | None)
def me(db: Session = Depends(get_db), caller: Caller | None = Depends(get_caller)):
    return users.get_me(db, caller)


@router.post("/role", response_model=Ack)
def update_role(
    payload: SelfRoleUpdate,
    db: Session = Depends(get_db),
    caller: Caller | None = Depends(get_caller),
) -> Ack:
    return users.update_own_role(db, caller, payload)


@router.post("/logout", response_model=Ack)
def logout(caller: Caller | None = Depends(get_caller)) -> Ack:
    return users.logout(caller)
