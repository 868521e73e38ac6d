"""
Async engine, session factory and the request-scoped ``get_db`` dependency.

Postgres (asyncpg) is the production backend.  SQLite is supported for
local runs and the test suite; its foreign keys are off unless enabled per
connection, so :func:`enable_sqlite_foreign_keys` turns them on to get the
same reference checks and ``ON DELETE CASCADE`` behaviour as Postgres.
"""
import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from news_api.config import settings
from news_api.middleware import install_query_counter

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Issue ``PRAGMA foreign_keys=ON`` on every new SQLite connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _foreign_keys_on(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine_for(url: str, **kwargs) -> AsyncEngine:
    """
    Build an async engine for *url* with the app's instrumentation attached:
    the per-request query counter and, on SQLite, foreign key enforcement.
    """
    engine = create_async_engine(url, echo=settings.DEBUG, **kwargs)
    if engine.dialect.name == "sqlite":
        enable_sqlite_foreign_keys(engine)
    install_query_counter(engine)
    return engine


engine = create_engine_for(settings.DATABASE_URL, pool_pre_ping=True)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db():
    """
    Yield a session for one request and own its transaction: commit when
    the endpoint returns, roll back when it raises.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception as exc:
            logger.debug("Rolling back request transaction: %r", exc)
            await session.rollback()
            raise
