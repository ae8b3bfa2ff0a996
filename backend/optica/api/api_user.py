from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from ..schemas.users import Pagination, UserCreate, UserResponse, UsersResponse, UserUpdate
from ..services.users_service import UsersService
from .dependencies import make_users_service

router = APIRouter(prefix="/users", tags=["users"])


def _parse_positive_int(raw: Optional[str]) -> Optional[int]:
    try:
        value = int(raw) if raw is not None else None
    except ValueError:
        return None
    return value if value is not None and value >= 1 else None


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, service: UsersService = Depends(make_users_service)):
    return await service.create_user(payload)


@router.get("", response_model=UsersResponse)
async def list_users(
    request: Request,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: UsersService = Depends(make_users_service),
):
    """Paginated users. Out-of-range ``page`` falls back to 1 and ``limit`` to the default size."""
    settings = request.app.state.settings
    page_number = _parse_positive_int(page) or 1
    take = _parse_positive_int(limit)
    if take is None or take > settings.MAX_PAGE_SIZE:
        take = settings.DEFAULT_PAGE_SIZE

    base_url = str(request.url.replace(query=""))
    result = await service.find_all_users(page_number, take, base_url)
    return UsersResponse(
        users=result.data,
        pagination=Pagination(
            page=page_number,
            limit=take,
            total=result.count,
            pages=result.pages,
            has_next=result.next_page is not None,
            has_prev=result.prev_page is not None,
            next_page=result.next_page,
            prev_page=result.prev_page,
        ),
    )


@router.get("/{id}", response_model=UserResponse)
async def get_user(id: UUID, service: UsersService = Depends(make_users_service)):
    return await service.find_user_by_id(str(id))


@router.put("/{id}", response_model=UserResponse)
async def update_user(
    id: UUID, payload: UserUpdate, service: UsersService = Depends(make_users_service)
):
    return await service.update_user(str(id), payload)


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(id: UUID, service: UsersService = Depends(make_users_service)):
    await service.delete_user(str(id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
