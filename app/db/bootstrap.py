"""
Начальные данные базы: роли пользователей.
"""

import logging
from typing import Dict

from sqlalchemy.orm import Session

from app.db.models import ROLE_ADMIN, ROLE_CLIENT, Role
from app.db.repositories import RoleRepository

logger = logging.getLogger(__name__)

DEFAULT_ROLES = (ROLE_CLIENT, ROLE_ADMIN)


def ensure_roles(db: Session) -> Dict[str, Role]:
    """
    Создать недостающие роли.

    Args:
        db: Сессия базы данных (изменения не фиксируются)

    Returns:
        Dict[str, Role]: Роли по названию
    """
    roles = RoleRepository(db)
    result = {}
    for authority in DEFAULT_ROLES:
        role = roles.find_by_authority(authority)
        if role is None:
            role = Role(authority=authority)
            db.add(role)
            db.flush()
            logger.info(f"Role created: {authority}")
        result[authority] = role
    return result
