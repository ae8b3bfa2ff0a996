from dataclasses import replace
from typing import Any, Mapping, Optional

from ..domain import UserRecord
from ..models.base import new_id, utcnow
from .users_repository import UsersRepository


class InMemoryUsersRepository(UsersRepository):
    def __init__(self) -> None:
        self.users: list[UserRecord] = []

    async def create(self, values: Mapping[str, Any]) -> UserRecord:
        now = utcnow()
        user = UserRecord(id=new_id(), created_at=now, updated_at=now, **dict(values))
        self.users.append(user)
        return user

    async def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        return next((u for u in self.users if u.id == user_id), None)

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        return next((u for u in self.users if u.email == email), None)

    async def find_all(self, skip: int, take: int) -> tuple[list[UserRecord], int]:
        ordered = sorted(reversed(self.users), key=lambda u: u.created_at, reverse=True)
        return ordered[skip:skip + take], len(ordered)

    async def update(self, user_id: str, values: Mapping[str, Any]) -> UserRecord:
        index = self._index_of(user_id)
        updated = replace(self.users[index], **dict(values), updated_at=utcnow())
        self.users[index] = updated
        return updated

    async def delete(self, user_id: str) -> None:
        del self.users[self._index_of(user_id)]

    def _index_of(self, user_id: str) -> int:
        for index, user in enumerate(self.users):
            if user.id == user_id:
                return index
        raise LookupError(f"User with id {user_id} not found")
