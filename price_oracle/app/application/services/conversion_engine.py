from __future__ import annotations

from decimal import Decimal

from price_oracle.app.application.services.lookup_policy import LookupPolicy
from price_oracle.app.application.services.price_cache import Clock, PriceCache
from price_oracle.app.chains import ChainRegistry
from price_oracle.app.config import DEFAULT_REFRESH_PRICE_INTERVAL_MS
from price_oracle.app.domain.models import (
    Address,
    FromUsdResult,
    PriceObservation,
    RateResult,
    ToUsdResult,
)
from price_oracle.app.domain.ports.out import PriceStore
from price_oracle.app.domain.token_math import (
    PRICE_DECIMALS,
    convert_fiat_to_token,
    convert_token_to_fiat,
)


class ConversionEngine:
    """
    Converts between raw token amounts and USD at a given block.

    Owns its PriceCache; one instance should be shared by every event handler
    of the indexing process.
    """

    def __init__(
        self,
        *,
        store: PriceStore,
        chains: ChainRegistry,
        update_every_ms: int = DEFAULT_REFRESH_PRICE_INTERVAL_MS,
        inclusive_block_match: bool = False,
        clock: Clock | None = None,
    ) -> None:
        self._cache = PriceCache(store=store, update_every_ms=update_every_ms, clock=clock)
        self._lookup = LookupPolicy(
            cache=self._cache,
            chains=chains,
            inclusive_block_match=inclusive_block_match,
        )

    async def convert_to_usd(
        self,
        *,
        chain_id: int,
        token: str | Address,
        amount: int,
        block_number: int | None = None,
    ) -> ToUsdResult:
        rate = await self.get_usd_conversion_rate(
            chain_id=chain_id, token_address=token, block_number=block_number
        )

        return ToUsdResult(
            amount=convert_token_to_fiat(
                token_amount=amount,
                token_decimals=rate.decimals,
                token_price=rate.price,
                token_price_decimals=PRICE_DECIMALS,
            ),
            price=rate.price,
        )

    async def convert_from_usd(
        self,
        *,
        chain_id: int,
        token: str | Address,
        amount: Decimal,
        block_number: int | None = None,
    ) -> FromUsdResult:
        rate = await self.get_usd_conversion_rate(
            chain_id=chain_id, token_address=token, block_number=block_number
        )

        return FromUsdResult(
            amount=convert_fiat_to_token(
                fiat_amount=amount,
                token_price=rate.price,
                token_price_decimals=PRICE_DECIMALS,
                token_decimals=rate.decimals,
            ),
            # tokens per USD, the inverse of the stored rate
            price=Decimal(1) / rate.price,
        )

    async def get_usd_conversion_rate(
        self,
        *,
        chain_id: int,
        token_address: str | Address,
        block_number: int | None = None,
    ) -> RateResult:
        return await self._lookup.resolve(
            chain_id=chain_id,
            token_address=token_address,
            block_number=block_number,
        )

    async def get_all_prices_for_chain(self, chain_id: int) -> list[PriceObservation]:
        return list(await self._cache.get_observations(chain_id))
