"""
Pydantic схемы для пользователей и аутентификации.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from .validators import require_text, validate_strong_password

# ==================== ПОЛЬЗОВАТЕЛИ ====================


class RoleOut(BaseModel):
    """Схема для вывода роли."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    authority: str


class UserCreate(BaseModel):
    """Схема регистрации пользователя."""

    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    email: EmailStr
    password: str = Field(..., description="Пароль (8-64 символа, сложный)")

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def not_blank(cls, value):
        if isinstance(value, str):
            return require_text(value)
        return value

    @field_validator("password")
    @classmethod
    def strong_password(cls, value: str) -> str:
        return validate_strong_password(value)


class UserUpdate(BaseModel):
    """
    Схема обновления профиля.

    Email обязателен и должен отличаться от текущего. Имя и фамилия,
    переданные как None, не изменяются.
    """

    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: EmailStr

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def not_blank(cls, value):
        if isinstance(value, str):
            return require_text(value)
        return value


class UserOut(BaseModel):
    """Схема для вывода пользователя."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    roles: List[RoleOut] = Field(default_factory=list)


# ==================== АУТЕНТИФИКАЦИЯ ====================


class LoginRequest(BaseModel):
    """Схема для входа в систему."""

    email: str = Field(..., description="Email пользователя")
    password: str = Field(..., description="Пароль")


class LoginResponse(BaseModel):
    """Схема ответа при входе в систему."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserOut
