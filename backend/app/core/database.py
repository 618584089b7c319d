# backend/app/core/database.py
"""
Moteur SQLAlchemy async + fabrique de sessions.

get_db() est la seule porte d'entrée des routers vers la DB (via DbDep).
"""
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.core.config import settings


class Base(DeclarativeBase):
    pass


def enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """
    pysqlite émet BEGIN lui-même (et trop tard) : les SAVEPOINT de
    l'import en masse deviennent incohérents. On reprend la main sur BEGIN.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")


engine = create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
if engine.dialect.name == "sqlite":
    enable_sqlite_savepoints(engine)

SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_db() -> AsyncIterator[AsyncSession]:
    async with SessionLocal() as session:
        yield session


async def init_models() -> None:
    """Crée les tables manquantes depuis Base.metadata (pas de migrations)."""
    import app.shared.models  # noqa: F401  (enregistre les modèles)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
