"""
Модели базы данных.

Импортирует все модели для корректной работы SQLAlchemy.
"""

from .base import Base
from .category import Category
from .product import Product, product_category
from .user import ROLE_ADMIN, ROLE_CLIENT, Role, User, user_role

__all__ = [
    "Base",
    "Category",
    "Product",
    "product_category",
    "Role",
    "User",
    "user_role",
    "ROLE_ADMIN",
    "ROLE_CLIENT",
]
