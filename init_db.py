#!/usr/bin/env python3
"""
Скрипт для инициализации базы данных
"""

import sys

from sqlalchemy import inspect

from app.db.bootstrap import ensure_roles
from app.db.database import SessionLocal, engine, transaction
from app.db.models import Base


def init_database() -> bool:
    """Создает все таблицы и роли пользователей."""
    print("🗄️ Инициализация базы данных...")

    try:
        Base.metadata.create_all(bind=engine)
        print("✅ Все таблицы созданы успешно!")

        with SessionLocal() as db, transaction(db):
            roles = ensure_roles(db)
        print(f"✅ Роли: {', '.join(roles)}")

        tables = inspect(engine).get_table_names()
        print(f"📋 Создано таблиц: {len(tables)}")
        for table in tables:
            print(f"  - {table}")

        return True

    except Exception as e:
        print(f"❌ Ошибка инициализации базы данных: {e}")
        return False


if __name__ == "__main__":
    success = init_database()
    if not success:
        sys.exit(1)
