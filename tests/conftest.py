"""
Фикстуры и настройка pytest.

Тесты работают с SQLite в памяти: одно соединение (StaticPool) на весь
процесс, схема создается и удаляется для каждого теста.
"""

import os
import tempfile
from datetime import datetime, timezone
from decimal import Decimal

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("STORAGE_PATH", tempfile.mkdtemp(prefix="dscatalog-uploads-"))

from typing import Dict, Iterable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.auth import AuthService
from app.db.bootstrap import ensure_roles
from app.db.database import configure_sqlite, get_db
from app.db.models import ROLE_ADMIN, ROLE_CLIENT, Base, Category, Product, User
from app.main import app
from app.services.storage_service import LocalStorageProvider, get_storage

TEST_PASSWORD = "Str0ng!Pass"

engine = configure_sqlite(
    create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
)
TestingSessionLocal = sessionmaker(
    bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
)


@pytest.fixture
def db_session() -> Session:
    """Свежая схема и сессия для каждого теста."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    ensure_roles(session)
    session.commit()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def client(db_session, storage_dir) -> TestClient:
    """TestClient, работающий с тестовой сессией и локальным хранилищем."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: LocalStorageProvider(str(storage_dir))
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== Данные ==============


def create_user(
    db: Session, email: str, authorities: Iterable[str], password: str = TEST_PASSWORD
) -> User:
    roles = ensure_roles(db)
    user = User(
        first_name="Test",
        last_name="User",
        email=email,
        hashed_password=AuthService.get_password_hash(password),
    )
    user.roles = [roles[authority] for authority in authorities]
    db.add(user)
    db.commit()
    return user


def auth_headers(user: User) -> Dict[str, str]:
    token = AuthService.create_access_token({"sub": str(user.id), "username": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(db_session) -> User:
    return create_user(db_session, "admin@dscatalog.com", [ROLE_CLIENT, ROLE_ADMIN])


@pytest.fixture
def client_user(db_session) -> User:
    return create_user(db_session, "maria@gmail.com", [ROLE_CLIENT])


@pytest.fixture
def admin_headers(admin_user) -> Dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture
def client_headers(client_user) -> Dict[str, str]:
    return auth_headers(client_user)


@pytest.fixture
def make_category(db_session):
    def _make(name: str) -> Category:
        category = Category(name=name)
        db_session.add(category)
        db_session.commit()
        return category

    return _make


@pytest.fixture
def make_product(db_session):
    def _make(name: str = "Smart TV", categories=()) -> Product:
        product = Product(
            name=name,
            description="Lorem ipsum",
            price=Decimal("2190.00"),
            date=datetime(2024, 1, 15, tzinfo=timezone.utc),
        )
        product.categories.extend(categories)
        db_session.add(product)
        db_session.commit()
        return product

    return _make


@pytest.fixture
def make_user(db_session):
    def _make(email: str, authorities: Iterable[str] = (ROLE_CLIENT,)) -> User:
        return create_user(db_session, email, authorities)

    return _make
