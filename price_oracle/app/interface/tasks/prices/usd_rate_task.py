from __future__ import annotations

import logging

from price_oracle.app.application.services.block_selector import (
    BlockSelector,
    resolve_block_selector,
)
from price_oracle.app.domain.models import RateResult
from price_oracle.app.interface.tasks.prices._engine import open_conversion_engine

logger = logging.getLogger(__name__)


async def usd_rate_task(
    *,
    chain: int | str,
    token: str,
    block: BlockSelector = None,
    backend: str | None = None,
    **engine_kwargs,
) -> RateResult:
    """
    Task: resolve the USD price of a token at a block.

    block can be a block number or "latest" (current price).
    """
    block_number = resolve_block_selector(block)
    async with open_conversion_engine(chain=chain, backend=backend, **engine_kwargs) as ctx:
        rate = await ctx.engine.get_usd_conversion_rate(
            chain_id=ctx.chain.id,
            token_address=token,
            block_number=block_number,
        )

    logger.info(
        "Resolved USD rate",
        extra={"chain_id": ctx.chain.id, "token": token, "block": block_number},
    )
    return rate
