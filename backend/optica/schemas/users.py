from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from ..domain import UserRecord
from .common import CamelModel, to_iso


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)


class UserResponse(CamelModel):
    id: str
    name: str
    email: str
    created_at: str
    updated_at: str

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=to_iso(user.created_at),
            updated_at=to_iso(user.updated_at),
        )


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int
    has_next: bool
    has_prev: bool
    next_page: Optional[str] = None
    prev_page: Optional[str] = None


class UsersResponse(BaseModel):
    users: list[UserResponse]
    pagination: Pagination


class PaginatedUsers(CamelModel):
    next_page: Optional[str] = None
    prev_page: Optional[str] = None
    count: int
    pages: int
    data: list[UserResponse]
