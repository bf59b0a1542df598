"""
Конфигурация базы данных.

Содержит настройки подключения к PostgreSQL, фабрику сессий
и границу транзакции для изменяющих операций.
"""

from contextlib import contextmanager
from typing import Generator, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings


def configure_sqlite(engine: Engine) -> Engine:
    """
    Включает внешние ключи и SAVEPOINT для драйвера pysqlite.

    pysqlite сам управляет BEGIN, из-за чего вложенные транзакции
    работают некорректно. Передаем управление транзакциями SQLAlchemy.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


# Создание движка SQLAlchemy
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Проверка соединения перед использованием
    echo=bool(settings.DEBUG),  # Логирование SQL запросов в режиме отладки
)
if engine.dialect.name == "sqlite":
    configure_sqlite(engine)


# Фабрика сессий базы данных
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


def get_db() -> Generator:
    """
    Dependency для получения сессии базы данных.

    Yields:
        Session: Сессия SQLAlchemy

    Note:
        Автоматически закрывает сессию после использования
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Граница транзакции изменяющей операции.

    Фиксирует изменения при успешном завершении блока и откатывает
    их при любом исключении, после чего исключение пробрасывается дальше.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
