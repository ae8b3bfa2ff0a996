import asyncio

import pytest

from optica.core.observability import NullEventLogger, RecordingEventLogger
from optica.repositories.in_memory_users_repository import InMemoryUsersRepository
from optica.schemas.users import UserCreate, UserUpdate
from optica.services.users_service import UsersService
from optica.utils.auth import make_pwd_context, verify_password
from optica.utils.errors import ConflictError, NotFoundError

BASE_URL = "http://testserver/api/v1/users"
PWD_CONTEXT = make_pwd_context(4)


def make_service(logger=None, pwd_context=PWD_CONTEXT):
    repo = InMemoryUsersRepository()
    return UsersService(repo, logger or NullEventLogger(), pwd_context), repo


def create(service, name="Ana", email="ana@example.com", password="secret1"):
    return asyncio.run(service.create_user(UserCreate(name=name, email=email, password=password)))


def test_create_user_hashes_password_and_normalizes_email():
    service, repo = make_service()

    user = create(service, email="Ana@Example.COM")

    assert user.email == "ana@example.com"
    stored = repo.users[0]
    assert stored.password != "secret1"
    assert verify_password(PWD_CONTEXT, "secret1", stored.password)
    assert "password" not in user.model_dump()


def test_create_user_uses_configured_bcrypt_rounds():
    service, repo = make_service(pwd_context=make_pwd_context(5))

    create(service)

    assert repo.users[0].password.startswith("$2b$05$")


def test_create_user_duplicate_email_conflicts():
    logger = RecordingEventLogger()
    service, _ = make_service(logger)
    create(service)

    with pytest.raises(ConflictError) as exc_info:
        create(service, name="Otra", email="ANA@example.com")
    assert exc_info.value.details == {"email": "ana@example.com", "field": "email"}
    assert "UsersService: create_user failed" in logger.messages()


def test_find_user_by_id():
    service, _ = make_service()
    user = create(service)

    found = asyncio.run(service.find_user_by_id(user.id))
    assert found == user

    with pytest.raises(NotFoundError) as exc_info:
        asyncio.run(service.find_user_by_id("missing"))
    assert exc_info.value.message == "User with id missing not found"


def test_find_all_users_pagination_links():
    service, _ = make_service()
    for i in range(5):
        create(service, name=f"User {i}", email=f"user{i}@example.com")

    first = asyncio.run(service.find_all_users(1, 2, BASE_URL))
    middle = asyncio.run(service.find_all_users(2, 2, BASE_URL))
    last = asyncio.run(service.find_all_users(3, 2, BASE_URL))

    assert (first.count, first.pages) == (5, 3)
    assert first.prev_page is None
    assert first.next_page == f"{BASE_URL}?page=2&limit=2"
    assert [u.name for u in first.data] == ["User 4", "User 3"]
    assert middle.prev_page == f"{BASE_URL}?page=1&limit=2"
    assert middle.next_page == f"{BASE_URL}?page=3&limit=2"
    assert len(last.data) == 1
    assert last.next_page is None


def test_find_all_users_past_the_end_has_no_links():
    service, _ = make_service()
    create(service)

    beyond = asyncio.run(service.find_all_users(4, 10, BASE_URL))

    assert beyond.data == []
    assert beyond.prev_page is None
    assert beyond.next_page is None


def test_find_all_users_empty():
    service, _ = make_service()

    result = asyncio.run(service.find_all_users(1, 10, BASE_URL))

    assert (result.count, result.pages, result.data) == (0, 0, [])


def test_update_user_rehashes_password():
    service, repo = make_service()
    user = create(service)

    updated = asyncio.run(
        service.update_user(user.id, UserUpdate(name="Ana María", password="another1"))
    )

    assert updated.name == "Ana María"
    assert verify_password(PWD_CONTEXT, "another1", repo.users[0].password)


def test_update_user_email_taken():
    service, _ = make_service()
    create(service)
    other = create(service, name="Bob", email="bob@example.com")

    with pytest.raises(ConflictError):
        asyncio.run(service.update_user(other.id, UserUpdate(email="ana@example.com")))


def test_update_user_missing():
    service, _ = make_service()

    with pytest.raises(NotFoundError):
        asyncio.run(service.update_user("missing", UserUpdate(name="x")))


def test_delete_user():
    service, repo = make_service()
    user = create(service)

    asyncio.run(service.delete_user(user.id))

    assert repo.users == []
    with pytest.raises(NotFoundError):
        asyncio.run(service.delete_user(user.id))
