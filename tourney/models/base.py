"""Database base and session setup."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

import config


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


engine = create_async_engine(
    config.DATABASE_URL,
    echo=False,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session():
    """Async generator yielding database sessions. Use: async for session in get_async_session(): ..."""
    async with async_session_factory() as session:
        yield session


async def _seed_admin_allowlist(session: AsyncSession) -> None:
    """Insert ADMIN_ALLOWLIST_EMAILS that are not in admin_users yet."""
    from tourney.models.admin import AdminAllowlistEntry

    if not config.ADMIN_ALLOWLIST_EMAILS:
        return
    result = await session.execute(select(AdminAllowlistEntry.email))
    existing = {row[0] for row in result.fetchall()}
    for email in sorted(config.ADMIN_ALLOWLIST_EMAILS - existing):
        session.add(AdminAllowlistEntry(email=email))
    await session.commit()


async def init_db() -> None:
    """Create all tables and seed the admin allow-list."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with async_session_factory() as session:
        await _seed_admin_allowlist(session)
