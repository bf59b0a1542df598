"""
Модели пользователя и роли для системы аутентификации.
"""

from typing import List

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

ROLE_ADMIN = "ROLE_ADMIN"
ROLE_CLIENT = "ROLE_CLIENT"

user_role = Table(
    "user_role",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="RESTRICT"), primary_key=True),
)


class Role(Base):
    """Роль пользователя (ROLE_ADMIN, ROLE_CLIENT)."""

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    authority: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, authority='{self.authority}')>"


class User(TimestampMixin, Base):
    """Модель пользователя."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    roles: Mapped[List[Role]] = relationship(
        secondary=user_role, order_by=Role.id, lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"

    @property
    def authorities(self) -> list[str]:
        """Получить список ролей пользователя."""
        return [role.authority for role in self.roles]

    def has_role(self, authority: str) -> bool:
        """Проверить, есть ли у пользователя определенная роль."""
        return authority in self.authorities

    @property
    def is_admin(self) -> bool:
        return self.has_role(ROLE_ADMIN)
