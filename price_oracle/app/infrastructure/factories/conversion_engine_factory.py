from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

from sqlalchemy.ext.asyncio import AsyncEngine

from price_oracle.app.application.services.conversion_engine import ConversionEngine
from price_oracle.app.chains import ChainRegistry
from price_oracle.app.config import settings
from price_oracle.app.domain.ports.out import PriceStore
from price_oracle.app.infrastructure.stores.json_file_price_store import JsonFilePriceStore
from price_oracle.app.infrastructure.stores.sqlalchemy_price_store import SqlAlchemyPriceStore

PriceStoreFactory = Callable[[AsyncEngine | None, Path], PriceStore]

_PRICE_STORE_REGISTRY: Dict[str, PriceStoreFactory] = {}


def _make_file_store(engine: AsyncEngine | None, storage_dir: Path) -> PriceStore:
    _ = engine  # unused; prices live on disk
    return JsonFilePriceStore(root_dir=storage_dir)


def _make_sqlalchemy_store(engine: AsyncEngine | None, storage_dir: Path) -> PriceStore:
    _ = storage_dir
    if engine is None:
        raise ValueError("sqlalchemy price store requires an AsyncEngine")
    return SqlAlchemyPriceStore(engine)


# Register backends
_PRICE_STORE_REGISTRY["file"] = _make_file_store
_PRICE_STORE_REGISTRY["sqlalchemy"] = _make_sqlalchemy_store


def price_store_factory(
    *,
    backend: str,
    engine: AsyncEngine | None = None,
    storage_dir: Path | None = None,
) -> PriceStore:
    """Create a price store for the given backend ("file" or "sqlalchemy")."""
    try:
        factory = _PRICE_STORE_REGISTRY[backend]
    except KeyError:
        raise ValueError(f"Unsupported price store backend: {backend!r}")

    return factory(engine, storage_dir if storage_dir is not None else settings.storage_dir)


def conversion_engine_factory(
    *,
    backend: str,
    chains: ChainRegistry,
    engine: AsyncEngine | None = None,
    storage_dir: Path | None = None,
    update_every_ms: int | None = None,
    inclusive_block_match: bool | None = None,
) -> ConversionEngine:
    """
    Wire a ConversionEngine:
    - price store for the backend (JSON files under storage_dir, or domain.token_prices),
    - per-engine PriceCache with the configured refresh interval,
    - lookup policy over the configured chains.

    Unset arguments fall back to application settings.
    """
    store = price_store_factory(backend=backend, engine=engine, storage_dir=storage_dir)

    return ConversionEngine(
        store=store,
        chains=chains,
        update_every_ms=(
            update_every_ms if update_every_ms is not None else settings.update_every_ms
        ),
        inclusive_block_match=(
            inclusive_block_match
            if inclusive_block_match is not None
            else settings.inclusive_block_match
        ),
    )
