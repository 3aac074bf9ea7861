from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from jobboard.models.enums import Role


class IdentityIn(BaseModel):
    open_id: str = Field(min_length=1, max_length=64)
    name: str | None = None
    email: str | None = Field(default=None, max_length=320)
    login_method: str | None = Field(default=None, max_length=64)


class SessionOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    role: Role


class SelfRoleUpdate(BaseModel):
    role: Role

    @field_validator("role")
    @classmethod
    def _no_self_promotion(cls, value: Role) -> Role:
        if value == Role.ADMIN:
            raise ValueError("role must be job_seeker or recruiter")
        return value


class UserOut(BaseModel):
    id: int
    open_id: str
    name: str | None = None
    email: str | None = None
    login_method: str | None = None
    role: Role
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_signed_in: datetime | None = None

    class Config:
        from_attributes = True
