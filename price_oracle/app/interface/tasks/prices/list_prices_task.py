from __future__ import annotations

from price_oracle.app.domain.models import PriceObservation
from price_oracle.app.interface.tasks.prices._engine import open_conversion_engine


async def list_prices_task(
    *,
    chain: int | str,
    backend: str | None = None,
    **engine_kwargs,
) -> list[PriceObservation]:
    """Task: dump every recorded price observation of a chain."""
    async with open_conversion_engine(chain=chain, backend=backend, **engine_kwargs) as ctx:
        return await ctx.engine.get_all_prices_for_chain(ctx.chain.id)
