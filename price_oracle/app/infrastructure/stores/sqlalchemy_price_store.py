from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine

from price_oracle.app.domain.models import Address, PriceObservation
from price_oracle.app.domain.ports.out import PriceStore
from price_oracle.app.infrastructure.db.models.domain.token_prices import TokenPricesDB

logger = logging.getLogger(__name__)


class SqlAlchemyPriceStore(PriceStore):
    """
    Loads observations for a chain from domain.token_prices.

    Ordered by (block_number, id) so every token's observations come back
    sorted by block, with insertion order breaking ties.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def load(
        self,
        *,
        chain_id: int,
    ) -> list[PriceObservation]:
        stmt = (
            select(
                TokenPricesDB.token_address,
                TokenPricesDB.block_number,
                TokenPricesDB.price_usd,
            )
            .where(TokenPricesDB.chain_id == chain_id)
            .order_by(TokenPricesDB.block_number, TokenPricesDB.id)
        )

        async with self._engine.connect() as conn:
            result = await conn.execute(stmt)
            rows = result.mappings().all()

        logger.debug(
            "Fetched %s token_prices rows",
            len(rows),
            extra={"chain_id": chain_id},
        )

        observations: list[PriceObservation] = []
        for r in rows:
            token_address = r["token_address"]
            # asyncpg might return memoryview; normalize to bytes
            if isinstance(token_address, memoryview):
                token_address = token_address.tobytes()
            observations.append(
                PriceObservation(
                    token=Address.parse(bytes(token_address)),
                    block=int(r["block_number"]),
                    price=Decimal(r["price_usd"]),
                )
            )
        return observations
