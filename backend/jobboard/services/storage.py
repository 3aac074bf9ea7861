from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session

from jobboard.errors import bad_request, storage_unavailable


logger = logging.getLogger(__name__)

T = TypeVar("T")


@contextmanager
def storage_guard(db: Session, on_conflict: str | None = None) -> Iterator[None]:
    """Map store failures inside the block to procedure errors.

    A uniqueness violation becomes ``BAD_REQUEST`` with ``on_conflict`` as the
    message; any other driver failure becomes ``STORAGE_UNAVAILABLE``. The
    session is rolled back before the error leaves the block.
    """
    try:
        yield
    except IntegrityError as exc:
        db.rollback()
        logger.info("Integrity violation: %s", exc.orig)
        raise bad_request(on_conflict or "Conflicts with an existing record") from exc
    except DBAPIError as exc:
        db.rollback()
        logger.error("Storage failure: %s", exc.orig)
        raise storage_unavailable() from exc


def best_effort_list(db: Session, loader: Callable[[], list[T]]) -> list[T]:
    try:
        return loader()
    except DBAPIError as exc:
        db.rollback()
        logger.warning("Listing degraded to empty result: %s", exc.orig)
        return []
