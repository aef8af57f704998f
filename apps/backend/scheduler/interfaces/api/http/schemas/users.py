"""
===============================================================================
TARJETA CRC — schemas/users.py
===============================================================================

Responsabilidades:
    - DTOs de administración de usuarios.
    - Nunca exponer password_hash en responses.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from scheduler.identity.users import User, UserRole


class CreateUserReq(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=3, max_length=255)
    password: str
    confirm_password: str
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    role: UserRole = UserRole.USER


class UpdateUserReq(BaseModel):
    username: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255)
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    password: str | None = None
    confirm_password: str | None = None


class UpdateUserRoleReq(BaseModel):
    role: UserRole


class UserRes(BaseModel):
    id: int
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    display_name: str
    role: UserRole
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, u: User) -> "UserRes":
        return cls(
            id=u.id,
            username=u.username,
            email=u.email,
            first_name=u.first_name,
            last_name=u.last_name,
            display_name=u.display_name,
            role=u.role,
            created_at=u.created_at,
            updated_at=u.updated_at,
        )


class UsersListRes(BaseModel):
    users: list[UserRes]
