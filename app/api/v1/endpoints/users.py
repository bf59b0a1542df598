"""
API endpoints для работы с пользователями.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from app.api.deps import PageParams, get_user_service
from app.core.auth import get_current_user, require_admin
from app.db.models import User
from app.schemas.user import UserCreate, UserOut, UserUpdate
from app.services.pagination import build_pagination_headers
from app.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=List[UserOut], dependencies=[Depends(require_admin)])
def list_users(
    request: Request,
    response: Response,
    params: PageParams = Depends(),
    service: UserService = Depends(get_user_service),
):
    """Получить страницу пользователей (только для администраторов)."""
    page = service.list_users(params.page, params.size)
    response.headers.update(build_pagination_headers(page.meta, str(request.url)).as_dict())
    return page.items


@router.get("/me", response_model=UserOut)
def get_me(current_user: User = Depends(get_current_user)):
    """Получить профиль текущего пользователя."""
    return current_user


@router.get("/{user_id}", response_model=UserOut, dependencies=[Depends(require_admin)])
def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return service.get_user(user_id)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register_user(
    payload: UserCreate,
    request: Request,
    response: Response,
    service: UserService = Depends(get_user_service),
):
    """
    Зарегистрировать пользователя.

    Email приводится к нижнему регистру, пользователь получает роль
    ROLE_CLIENT.

    Raises:
        DuplicateEntryError: Если email уже занят
    """
    user = service.register(payload)
    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    return user


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    payload: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """
    Обновить профиль пользователя.

    Обновлять профиль может только его владелец.
    """
    return service.update(user_id, payload, requester=current_user)
