from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


UserRole = Literal["admin", "caller"]


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    role: UserRole
