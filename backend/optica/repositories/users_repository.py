from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from ..domain import UserRecord


class UsersRepository(ABC):
    @abstractmethod
    async def create(self, values: Mapping[str, Any]) -> UserRecord: ...

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[UserRecord]: ...

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[UserRecord]: ...

    @abstractmethod
    async def find_all(self, skip: int, take: int) -> tuple[list[UserRecord], int]:
        """One page of users (newest first) and the total row count."""

    @abstractmethod
    async def update(self, user_id: str, values: Mapping[str, Any]) -> UserRecord: ...

    @abstractmethod
    async def delete(self, user_id: str) -> None: ...
