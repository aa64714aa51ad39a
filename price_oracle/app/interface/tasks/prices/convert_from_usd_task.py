from __future__ import annotations

from decimal import Decimal, InvalidOperation

from price_oracle.app.application.services.block_selector import (
    BlockSelector,
    resolve_block_selector,
)
from price_oracle.app.domain.models import FromUsdResult
from price_oracle.app.interface.tasks.prices._engine import open_conversion_engine


async def convert_from_usd_task(
    *,
    chain: int | str,
    token: str,
    amount: Decimal | str,
    block: BlockSelector = None,
    backend: str | None = None,
    **engine_kwargs,
) -> FromUsdResult:
    """Task: how many raw token units a USD amount buys."""
    try:
        usd_amount = Decimal(amount)
    except InvalidOperation:
        raise ValueError(f"Invalid USD amount: {amount!r}") from None

    block_number = resolve_block_selector(block)
    async with open_conversion_engine(chain=chain, backend=backend, **engine_kwargs) as ctx:
        return await ctx.engine.convert_from_usd(
            chain_id=ctx.chain.id,
            token=token,
            amount=usd_amount,
            block_number=block_number,
        )
