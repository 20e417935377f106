from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import Role


class CreateUserBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    mob_number: Optional[str] = Field(default=None, alias="mobNumber")
    username: str = Field(min_length=1)
    password: str = Field(min_length=6)
    role: Role
    device_token: Optional[str] = Field(default=None, alias="deviceToken")


class UserParams(BaseModel):
    user_id: int = Field(gt=0)


class DeviceTokenBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    device_token: Optional[str] = Field(alias="deviceToken")
