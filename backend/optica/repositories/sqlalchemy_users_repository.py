from typing import Any, Mapping, Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..domain import UserRecord
from ..models import User
from .users_repository import UsersRepository


def to_user_record(row: User) -> UserRecord:
    return UserRecord(
        id=row.id,
        name=row.name,
        email=row.email,
        password=row.password,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SQLAlchemyUsersRepository(UsersRepository):
    def __init__(self, db: Session) -> None:
        self.db = db

    async def create(self, values: Mapping[str, Any]) -> UserRecord:
        return await run_in_threadpool(self._create, dict(values))

    def _create(self, values: dict[str, Any]) -> UserRecord:
        db_user = User(**values)
        self.db.add(db_user)
        self._commit()
        self.db.refresh(db_user)
        return to_user_record(db_user)

    async def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        return await run_in_threadpool(self._find_one, User.id == user_id)

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        return await run_in_threadpool(self._find_one, User.email == email)

    def _find_one(self, criterion) -> Optional[UserRecord]:
        row = self.db.query(User).filter(criterion).first()
        return to_user_record(row) if row is not None else None

    async def find_all(self, skip: int, take: int) -> tuple[list[UserRecord], int]:
        return await run_in_threadpool(self._find_all, skip, take)

    def _find_all(self, skip: int, take: int) -> tuple[list[UserRecord], int]:
        count = self.db.query(User).count()
        rows = (
            self.db.query(User)
            .order_by(User.created_at.desc())
            .offset(skip)
            .limit(take)
            .all()
        )
        return [to_user_record(r) for r in rows], count

    async def update(self, user_id: str, values: Mapping[str, Any]) -> UserRecord:
        return await run_in_threadpool(self._update, user_id, dict(values))

    def _update(self, user_id: str, values: dict[str, Any]) -> UserRecord:
        db_user = self.db.get(User, user_id)
        if db_user is None:
            raise LookupError(f"User with id {user_id} not found")
        for field, value in values.items():
            setattr(db_user, field, value)
        self._commit()
        self.db.refresh(db_user)
        return to_user_record(db_user)

    async def delete(self, user_id: str) -> None:
        await run_in_threadpool(self._delete, user_id)

    def _delete(self, user_id: str) -> None:
        db_user = self.db.get(User, user_id)
        if db_user is None:
            raise LookupError(f"User with id {user_id} not found")
        self.db.delete(db_user)
        self._commit()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
