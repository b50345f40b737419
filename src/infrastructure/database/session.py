"""Database session management."""

from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from infrastructure.database.models import Base


class Database:
    """Owns the async engine and session factory for one application."""

    def __init__(self, url: str, *, echo: bool = False, **engine_kwargs: Any) -> None:
        connect_args: dict = engine_kwargs.pop("connect_args", {})
        # asyncpg's prepared statement cache breaks behind a transaction-mode
        # pooler; ``?pgbouncer=true`` on the URL turns it off.
        parsed = make_url(url)
        if parsed.query.get("pgbouncer") == "true":
            url = parsed.difference_update_query(["pgbouncer"]).render_as_string(
                hide_password=False
            )
            connect_args["statement_cache_size"] = 0
        if not url.startswith("sqlite"):
            engine_kwargs.setdefault("pool_pre_ping", True)

        self.url = url
        self.engine: AsyncEngine = create_async_engine(
            url,
            echo=echo,
            connect_args=connect_args,
            **engine_kwargs,
        )
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create_all(self) -> None:
        """Create all tables (tests, seeding and local runs)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()
