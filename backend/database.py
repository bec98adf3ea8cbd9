import logging

from core.settings import get_settings
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_engine_for(url: str, **kwargs) -> AsyncEngine:
    """Create an async engine; SQLite connections are allowed across threads."""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_async_engine(url, echo=False, **kwargs)


def create_session_maker(bind: AsyncEngine) -> async_sessionmaker:
    """Session factory with sensible defaults."""
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False, autoflush=False)


# SQLite by default: sqlite+aiosqlite:///./roundtable.db (DATABASE_URL overrides)
DATABASE_URL = get_settings().database_url

engine = create_engine_for(DATABASE_URL)
async_session_maker = create_session_maker(engine)


async def init_db(bind: AsyncEngine = None):
    """Create any missing tables."""
    import models  # noqa: F401  (registers tables on Base.metadata)

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")
