import contextlib
import functools
import logging
import sys
from collections.abc import AsyncIterator

from alembic import command, config
from sqlalchemy import event
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.config.settings import settings
from src.errors import ConflictError, DependencyError

logger = logging.getLogger(__name__)


def create_engine(url: str):
    url = str(url)
    use_echo = settings.LOG_DB
    connect_args = {}
    if "sqlite" in url:
        connect_args = {"timeout": settings.DB_TIMEOUT_SECONDS}
    elif "asyncpg" in url:
        connect_args = {
            "timeout": settings.DB_TIMEOUT_SECONDS,
            "command_timeout": settings.DB_TIMEOUT_SECONDS,
        }
    new_engine = create_async_engine(
        url,
        echo=use_echo,
        connect_args=connect_args,
    )
    if "sqlite" in url:
        # cascades on rsvps/snapshots rely on foreign keys being enforced
        @event.listens_for(new_engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


def current_dsn() -> str:
    if "pytest" in sys.modules:
        return settings.TEST_DB_DSN
    return settings.DB_DSN


engine = create_engine(current_dsn())


def run_upgrade(connection, cfg):
    cfg.attributes["connection"] = connection
    command.upgrade(cfg, "head")


async def run_migrations():
    async with engine.begin() as conn:
        await conn.run_sync(run_upgrade, config.Config("alembic.ini"))


async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


@contextlib.asynccontextmanager
async def async_session_manager(
    auto_commit=True, session_overwrite: AsyncSession | None = None
) -> AsyncIterator[AsyncSession]:
    try:
        if session_overwrite:
            yield session_overwrite
        else:
            async with async_session_maker() as session:
                try:
                    yield session
                except Exception as e:
                    await session.rollback()
                    raise e
                else:
                    if auto_commit:
                        await session.commit()
    except IntegrityError as e:
        raise ConflictError(f"Write rejected by a uniqueness or reference constraint: {e.orig}") from e
    except (DBAPIError, TimeoutError, ConnectionError) as e:
        raise DependencyError(f"Database unavailable: {e}") from e


def retry_read_once(func):
    """Retry an idempotent read a single time when the store fails."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except DependencyError:
            logger.warning("Read %s failed, retrying once", func.__qualname__)
            return await func(*args, **kwargs)

    return wrapper
