"""
API endpoint для входа в систему.
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_user_service
from app.schemas.user import LoginRequest, LoginResponse
from app.services.user_service import UserService

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, service: UserService = Depends(get_user_service)):
    """
    Вход в систему по email и паролю.

    Returns:
        LoginResponse: JWT токен и профиль пользователя

    Raises:
        AuthenticationError: Если email или пароль неверны
    """
    return service.authenticate(payload)
