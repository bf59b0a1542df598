#!/usr/bin/env python3
"""
Скрипт для создания администратора в базе данных.

Использование:
    python scripts/create_admin.py --email admin@dscatalog.com --password 'Adm1n!pass'
"""

import argparse
import sys
from pathlib import Path

# Добавляем путь к модулю app
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.auth import AuthService
from app.db.bootstrap import ensure_roles
from app.db.database import SessionLocal, transaction
from app.db.models import ROLE_ADMIN, ROLE_CLIENT, User
from app.db.repositories import UserRepository
from app.schemas.validators import validate_strong_password


def create_admin(email: str, password: str, first_name: str, last_name: str) -> None:
    """Создает администратора или выдает роль ROLE_ADMIN существующему пользователю."""
    print("🔑 Создание администратора...")
    print("=" * 50)

    email = email.strip().lower()
    validate_strong_password(password)

    with SessionLocal() as db, transaction(db):
        roles = ensure_roles(db)
        user = UserRepository(db).find_by_email(email)

        if user is not None:
            print(f"✅ Пользователь уже существует: id={user.id}")
            if not user.has_role(ROLE_ADMIN):
                user.roles.append(roles[ROLE_ADMIN])
                print("✅ Выдана роль ROLE_ADMIN")
            user.hashed_password = AuthService.get_password_hash(password)
            print("✅ Пароль обновлен")
        else:
            user = User(
                first_name=first_name,
                last_name=last_name,
                email=email,
                hashed_password=AuthService.get_password_hash(password),
            )
            user.roles = [roles[ROLE_CLIENT], roles[ROLE_ADMIN]]
            db.add(user)
            db.flush()
            print(f"✅ Администратор создан: id={user.id}")

    print(f"   Email: {email}")
    print("=" * 50)


def main() -> None:
    parser = argparse.ArgumentParser(description="Создание администратора DSCatalog")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="DSCatalog")
    args = parser.parse_args()

    try:
        create_admin(args.email, args.password, args.first_name, args.last_name)
    except ValueError as e:
        print(f"❌ Некорректный пароль: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Ошибка создания администратора: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
