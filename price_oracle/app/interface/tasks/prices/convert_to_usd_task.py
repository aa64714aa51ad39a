from __future__ import annotations

from price_oracle.app.application.services.block_selector import (
    BlockSelector,
    resolve_block_selector,
)
from price_oracle.app.domain.models import ToUsdResult
from price_oracle.app.interface.tasks.prices._engine import open_conversion_engine


async def convert_to_usd_task(
    *,
    chain: int | str,
    token: str,
    amount: int | str,
    block: BlockSelector = None,
    backend: str | None = None,
    **engine_kwargs,
) -> ToUsdResult:
    """Task: value a raw token amount (smallest units) in USD."""
    token_amount = int(amount)
    if token_amount < 0:
        raise ValueError("amount must be non-negative")

    block_number = resolve_block_selector(block)
    async with open_conversion_engine(chain=chain, backend=backend, **engine_kwargs) as ctx:
        return await ctx.engine.convert_to_usd(
            chain_id=ctx.chain.id,
            token=token,
            amount=token_amount,
            block_number=block_number,
        )
