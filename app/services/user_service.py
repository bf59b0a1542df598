"""
Сервис пользователей: регистрация, профиль и вход в систему.
"""

import logging
from datetime import timedelta
from sqlalchemy.orm import Session

from app.core.auth import AuthService
from app.core.config import settings
from app.core.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    DuplicateEntryError,
    NotFoundError,
)
from app.db.database import transaction
from app.db.models import ROLE_CLIENT, User
from app.db.repositories import RoleRepository, StorageFailure, UserRepository
from app.schemas.pagination import Page
from app.schemas.user import LoginRequest, LoginResponse, UserCreate, UserOut, UserUpdate
from app.services.conflicts import ensure_written, not_found

logger = logging.getLogger(__name__)


def normalize_email(raw_email: str) -> str:
    return raw_email.strip().lower()


class UserService:
    """
    Сервис операций над пользователями.

    Args:
        db: Сессия базы данных
    """

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.roles = RoleRepository(db)

    def get_user(self, user_id: int) -> User:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise not_found("User", user_id)
        return user

    def list_users(self, page: int, size: int) -> Page[User]:
        items, total = self.users.find_page(page, size)
        return Page.of(items, page, size, total)

    def register(self, data: UserCreate) -> User:
        """
        Зарегистрировать пользователя с ролью ROLE_CLIENT.

        Raises:
            DuplicateEntryError: Если email уже занят
        """
        email = normalize_email(data.email)

        with transaction(self.db):
            if self.users.find_by_email(email) is not None:
                raise DuplicateEntryError(f"Email already exists: {email}")

            client_role = self.roles.find_by_authority(ROLE_CLIENT)
            if client_role is None:
                raise NotFoundError("Role", ROLE_CLIENT)

            user = User(
                first_name=data.first_name,
                last_name=data.last_name,
                email=email,
                hashed_password=AuthService.get_password_hash(data.password),
            )
            user.roles = [client_role]

            result = self.users.save(user)
            if result.failure is StorageFailure.UNIQUE_VIOLATION:
                raise DuplicateEntryError(f"Email already exists: {email}")
            ensure_written(result, "User")

        logger.info(f"User registered: id={user.id} email={email}")
        return user

    def update(self, user_id: int, data: UserUpdate, requester: User) -> User:
        """
        Обновить профиль пользователя.

        Обновлять профиль может только его владелец. Новый email должен
        отличаться от текущего и не принадлежать другому пользователю.

        Args:
            user_id: ID обновляемого пользователя
            data: Новые данные профиля
            requester: Аутентифицированный пользователь

        Raises:
            NotFoundError: Если пользователя нет
            AccessDeniedError: Если запрашивающий не владелец профиля
            DuplicateEntryError: Если email совпадает с текущим или занят
        """
        with transaction(self.db):
            user = self.get_user(user_id)

            if user.email.lower() != requester.email.lower():
                raise AccessDeniedError("You are not allowed to update this user")

            email = normalize_email(data.email)
            if user.email.lower() == email:
                raise DuplicateEntryError("New email must be different from current")
            if self.users.exists_by_email_and_id_not(email, user_id):
                raise DuplicateEntryError(f"Email already exists: {email}")

            if data.first_name is not None:
                user.first_name = data.first_name
            if data.last_name is not None:
                user.last_name = data.last_name
            user.email = email

            result = self.users.save(user)
            if result.failure is StorageFailure.UNIQUE_VIOLATION:
                raise DuplicateEntryError(f"Email already exists: {email}")
            ensure_written(result, "User")

        logger.info(f"User updated: id={user.id}")
        return user

    def authenticate(self, data: LoginRequest) -> LoginResponse:
        """
        Проверить учетные данные и выдать JWT токен.

        Raises:
            AuthenticationError: Если email или пароль неверны
        """
        user = self.users.find_by_email(normalize_email(data.email))
        if user is None or not AuthService.verify_password(data.password, user.hashed_password):
            logger.warning(f"Failed login attempt for {data.email}")
            raise AuthenticationError("Invalid email or password")

        expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        token = AuthService.create_access_token(
            data={"sub": str(user.id), "username": user.email, "authorities": user.authorities},
            expires_delta=expires,
        )
        return LoginResponse(
            access_token=token,
            expires_in=int(expires.total_seconds()),
            user=UserOut.model_validate(user),
        )
