"""Database engine and async session factory, built per configuration."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from vidshare.config import Settings
from vidshare.models.otp_code import Base


def make_engine(config: Settings) -> AsyncEngine:
    """Create an async engine for ``config.database_url``."""
    return create_async_engine(config.database_url, echo=config.debug)


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables that don't yet exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
