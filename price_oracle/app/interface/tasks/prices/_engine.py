from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from price_oracle.app.application.services.conversion_engine import ConversionEngine
from price_oracle.app.chains import ChainConfig, ChainRegistry
from price_oracle.app.config import settings
from price_oracle.app.infrastructure.db.engine import create_app_async_engine
from price_oracle.app.infrastructure.factories.conversion_engine_factory import (
    conversion_engine_factory,
)


@dataclass(frozen=True)
class EngineContext:
    engine: ConversionEngine
    chain: ChainConfig


@asynccontextmanager
async def open_conversion_engine(
    *,
    chain: int | str,
    backend: str | None = None,
    chains: ChainRegistry | None = None,
    storage_dir: Path | None = None,
) -> AsyncIterator[EngineContext]:
    """
    Build a ConversionEngine for a task run and resolve the requested chain.

    The database engine is only created for the sqlalchemy backend and is
    disposed when the task finishes.
    """
    backend = backend or settings.price_store_backend
    registry = chains if chains is not None else ChainRegistry.from_file(settings.chains_file)
    chain_config = registry.resolve(chain)

    db_engine = create_app_async_engine() if backend == "sqlalchemy" else None
    try:
        engine = conversion_engine_factory(
            backend=backend,
            chains=registry,
            engine=db_engine,
            storage_dir=storage_dir,
        )
        yield EngineContext(engine=engine, chain=chain_config)
    finally:
        if db_engine is not None:
            await db_engine.dispose()
