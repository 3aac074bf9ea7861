from __future__ import annotations

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from jobboard.models.enums import Role
from jobboard.models.user import User
from jobboard.schemas.auth import IdentityIn, SelfRoleUpdate
from jobboard.schemas.common import Ack
from jobboard.services.guard import Action, Caller, require
from jobboard.services.storage import storage_guard


logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "email", "login_method")


def upsert_user(db: Session, identity: IdentityIn, owner_open_id: str = "") -> User:
    """Create or refresh the user behind a verified external identity.

    The configured owner identity is always stored as an admin.
    """
    is_owner = bool(owner_open_id) and identity.open_id == owner_open_id
    with storage_guard(db):
        user = db.query(User).filter(User.open_id == identity.open_id).first()

    if user is None:
        user = User(open_id=identity.open_id, role=Role.ADMIN if is_owner else Role.JOB_SEEKER)
        logger.info("Registering user for identity %s", identity.open_id)

    for key in PROFILE_FIELDS:
        if key in identity.model_fields_set:
            setattr(user, key, getattr(identity, key))
    if is_owner:
        user.role = Role.ADMIN
    user.last_signed_in = func.now()

    with storage_guard(db, on_conflict="Identity already registered"):
        db.add(user)
        db.commit()
        db.refresh(user)
    return user


def load_caller(db: Session, user_id: int) -> Caller | None:
    with storage_guard(db):
        user = db.get(User, user_id)
    if user is None:
        return None
    return Caller(id=user.id, role=Role(user.role))


def get_me(db: Session, caller: Caller | None) -> User | None:
    require(caller, Action.AUTH_ME)
    if caller is None:
        return None
    with storage_guard(db):
        return db.get(User, caller.id)


def logout(caller: Caller | None) -> Ack:
    """Acknowledge a sign-out.

    Bearer tokens are stateless and stay valid until they expire; clients drop
    theirs on sign-out.
    """
    require(caller, Action.AUTH_LOGOUT)
    if caller is not None:
        logger.info("User %s signed out", caller.id)
    return Ack()


def update_own_role(db: Session, caller: Caller | None, payload: SelfRoleUpdate) -> Ack:
    require(caller, Action.AUTH_UPDATE_ROLE)
    with storage_guard(db):
        user = db.get(User, caller.id)
        user.role = payload.role
        db.add(user)
        db.commit()
    return Ack(id=caller.id)
