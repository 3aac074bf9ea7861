from __future__ import annotations

import json
from collections.abc import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool


Base = declarative_base()


def _json_serializer(value) -> str:
    # Keep non-ASCII text verbatim so substring search over JSON columns matches it.
    return json.dumps(value, ensure_ascii=False)


def build_engine(database_url: str) -> Engine:
    """Create the engine once at startup; callers own its lifetime."""
    if database_url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}, "json_serializer": _json_serializer}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True, json_serializer=_json_serializer)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db(request: Request) -> Iterator[Session]:
    session_factory: sessionmaker = request.app.state.session_factory
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
