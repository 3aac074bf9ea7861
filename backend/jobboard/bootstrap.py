from __future__ import annotations

import logging

from sqlalchemy import update
from sqlalchemy.engine import Engine

from jobboard.config import Settings
from jobboard.database import Base
from jobboard.models.enums import Role
from jobboard.models.user import User


logger = logging.getLogger(__name__)


def promote_owner(engine: Engine, owner_open_id: str) -> None:
    if not owner_open_id:
        return
    with engine.begin() as conn:
        result = conn.execute(
            update(User)
            .where(User.open_id == owner_open_id, User.role != Role.ADMIN)
            .values(role=Role.ADMIN)
        )
    if result.rowcount:
        logger.info("Promoted owner identity %s to admin", owner_open_id)


def run_startup_tasks(engine: Engine, settings: Settings) -> None:
    Base.metadata.create_all(bind=engine)
    promote_owner(engine, settings.owner_open_id)
