from __future__ import annotations

import math
from typing import Any

from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext

from ..core.observability import EventLogger
from ..repositories.users_repository import UsersRepository
from ..schemas.users import PaginatedUsers, UserCreate, UserResponse, UserUpdate
from ..utils.auth import get_password_hash, normalize_email
from ..utils.errors import ConflictError, NotFoundError


class UsersService:
    def __init__(
        self, users_repository: UsersRepository, logger: EventLogger, pwd_context: CryptContext
    ) -> None:
        self.users_repository = users_repository
        self.logger = logger
        self.pwd_context = pwd_context

    async def _hash_password(self, password: str) -> str:
        # bcrypt is CPU bound; keep it off the event loop
        return await run_in_threadpool(get_password_hash, self.pwd_context, password)

    async def create_user(self, payload: UserCreate) -> UserResponse:
        email = normalize_email(payload.email)
        self.logger.info(
            "UsersService: create_user started",
            operation="create_user",
            input={"email": email, "name": payload.name},
        )
        try:
            if await self.users_repository.find_by_email(email) is not None:
                raise ConflictError("Email already exists", {"email": email, "field": "email"})

            user = await self.users_repository.create(
                {
                    "name": payload.name,
                    "email": email,
                    "password": await self._hash_password(payload.password),
                }
            )
        except Exception as exc:
            self.logger.error(
                "UsersService: create_user failed", operation="create_user", error=str(exc)
            )
            raise

        self.logger.info(
            "UsersService: create_user completed",
            operation="create_user",
            result={"user_id": user.id, "email": user.email},
        )
        return UserResponse.from_record(user)

    async def find_user_by_id(self, user_id: str) -> UserResponse:
        self.logger.info(
            "UsersService: find_user_by_id started",
            operation="find_user_by_id",
            input={"id": user_id},
        )
        user = await self.users_repository.find_by_id(user_id)
        if user is None:
            self.logger.error(
                "UsersService: find_user_by_id failed",
                operation="find_user_by_id",
                error="not found",
            )
            raise NotFoundError("User", user_id)

        self.logger.info(
            "UsersService: find_user_by_id completed",
            operation="find_user_by_id",
            result={"user_id": user.id, "email": user.email},
        )
        return UserResponse.from_record(user)

    async def find_all_users(self, page: int, take: int, base_url: str) -> PaginatedUsers:
        """One page of users plus links to its neighbours.

        ``page`` and ``take`` are expected to be >= 1 already; the router
        clamps whatever the client sent.
        """
        self.logger.info(
            "UsersService: find_all_users started",
            operation="find_all_users",
            input={"page": page, "take": take},
        )
        skip = (page - 1) * take
        users, count = await self.users_repository.find_all(skip, take)

        pages = math.ceil(count / take)
        prev_page = None if page == 1 or page > pages else f"{base_url}?page={page - 1}&limit={take}"
        next_page = None if page + 1 > pages else f"{base_url}?page={page + 1}&limit={take}"

        self.logger.info(
            "UsersService: find_all_users completed",
            operation="find_all_users",
            result={"count": count, "pages": pages, "current_page": page},
        )
        return PaginatedUsers(
            next_page=next_page,
            prev_page=prev_page,
            count=count,
            pages=pages,
            data=[UserResponse.from_record(u) for u in users],
        )

    async def update_user(self, user_id: str, payload: UserUpdate) -> UserResponse:
        fields = payload.model_dump(exclude_unset=True, exclude_none=True)
        self.logger.info(
            "UsersService: update_user started",
            operation="update_user",
            input={"id": user_id, "fields": sorted(fields)},
        )
        try:
            if await self.users_repository.find_by_id(user_id) is None:
                raise NotFoundError("User", user_id)

            changes: dict[str, Any] = {}
            if "name" in fields:
                changes["name"] = fields["name"]
            if "email" in fields:
                email = normalize_email(fields["email"])
                owner = await self.users_repository.find_by_email(email)
                if owner is not None and owner.id != user_id:
                    raise ConflictError("Email already taken", {"email": email, "field": "email"})
                changes["email"] = email
            if "password" in fields:
                changes["password"] = await self._hash_password(fields["password"])

            user = await self.users_repository.update(user_id, changes)
        except Exception as exc:
            self.logger.error(
                "UsersService: update_user failed", operation="update_user", error=str(exc)
            )
            raise

        self.logger.info(
            "UsersService: update_user completed",
            operation="update_user",
            result={"user_id": user.id, "email": user.email},
        )
        return UserResponse.from_record(user)

    async def delete_user(self, user_id: str) -> None:
        self.logger.info(
            "UsersService: delete_user started", operation="delete_user", input={"id": user_id}
        )
        try:
            if await self.users_repository.find_by_id(user_id) is None:
                raise NotFoundError("User", user_id)
            await self.users_repository.delete(user_id)
        except Exception as exc:
            self.logger.error(
                "UsersService: delete_user failed", operation="delete_user", error=str(exc)
            )
            raise

        self.logger.info(
            "UsersService: delete_user completed", operation="delete_user", result={"user_id": user_id}
        )
