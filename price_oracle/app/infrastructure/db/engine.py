from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from price_oracle.app.config import settings


def create_app_async_engine(*, echo: bool = False) -> AsyncEngine:
    """
    Factory for AsyncEngine used by the sqlalchemy price store.

    Centralizing engine creation keeps connection handling consistent
    across tasks and makes it easier to tweak pool settings in one place.
    """
    if not settings.database_url:
        raise RuntimeError(
            "DATABASE_URL (or POSTGRES_USER/POSTGRES_SERVER/POSTGRES_DB) must be set "
            "for the sqlalchemy price store backend"
        )
    return create_async_engine(
        settings.database_url,  # postgresql+asyncpg://...
        echo=echo,
        pool_pre_ping=True,
    )
