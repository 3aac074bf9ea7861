from __future__ import annotations

from pydantic import BaseModel

from jobboard.models.enums import Role


class UserRoleUpdate(BaseModel):
    role: Role

    class Config:
        extra = "forbid"
