"""Async SQLAlchemy engine and session factory.

Learn: one engine per process with connection pooling; each request gets
its own AsyncSession through the get_db dependency. SQLite URLs (used by
the test-suite and local hacking) skip the pool sizing arguments, which
SQLite's pool classes don't accept.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from bookshelf.config import settings


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine, with pool sizing for server databases."""
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=echo)
    return create_async_engine(
        url,
        echo=echo,
        pool_size=5,
        max_overflow=15,
        pool_pre_ping=True,
    )


engine = build_engine(settings.database_url, echo=settings.debug)

# Session factory — each request gets its own session.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncSession:
    """FastAPI dependency — yields a session per request, auto-closes."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create every table in the ORM metadata (no-op for existing ones)."""
    from bookshelf.db.models import Base

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
