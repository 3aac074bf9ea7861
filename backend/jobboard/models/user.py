from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from jobboard.database import Base
from jobboard.models.enums import Role, enum_column_type


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    open_id = Column(String(64), unique=True, nullable=False, index=True)
    name = Column(Text)
    email = Column(String(320))
    login_method = Column(String(64))
    role = Column(enum_column_type(Role, "user_role"), default=Role.JOB_SEEKER, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
    last_signed_in = Column(DateTime, server_default=func.now(), nullable=False)
