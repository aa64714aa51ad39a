from __future__ import annotations

import logging

from price_oracle.app.application.services.price_cache import PriceCache
from price_oracle.app.chains import ChainRegistry
from price_oracle.app.domain.errors import (
    NoPricesFoundError,
    PriceNotFoundError,
    UnknownTokenError,
)
from price_oracle.app.domain.models import Address, PriceObservation, RateResult

logger = logging.getLogger(__name__)


class LookupPolicy:
    """
    Selects the single price observation that applies to (chain, token, block).

    Selection, in priority order:
    - no block -> latest observation,
    - block after the latest observation -> latest (forward extrapolation),
    - block at or before the earliest observation -> earliest (backward extrapolation),
    - otherwise the newest observation with block < requested block.

    With ``inclusive_block_match`` the last rule becomes ``<=``, so an
    observation recorded exactly at the requested block is used.
    """

    def __init__(
        self,
        *,
        cache: PriceCache,
        chains: ChainRegistry,
        inclusive_block_match: bool = False,
    ) -> None:
        self._cache = cache
        self._chains = chains
        self._inclusive_block_match = inclusive_block_match

    async def resolve(
        self,
        *,
        chain_id: int,
        token_address: str | Address,
        block_number: int | None = None,
    ) -> RateResult:
        if block_number is not None and block_number < 0:
            raise ValueError("block_number must be non-negative")

        chain = self._chains.get(chain_id)
        try:
            address = Address.parse(token_address)
        except ValueError:
            raise UnknownTokenError(str(token_address), chain_id) from None

        token = chain.find_token(address)
        if token is None:
            raise UnknownTokenError(str(token_address), chain_id)

        observations = [
            p for p in await self._cache.get_observations(chain_id) if p.token == address
        ]
        if not observations:
            raise NoPricesFoundError(address.value, chain_id, block_number)

        closest = self._select(observations, address=address, block_number=block_number)
        # never fires: the scan always reaches first, whose block is below block_number
        if closest is None:
            raise PriceNotFoundError(address.value, chain_id, block_number)

        return RateResult.from_observation(closest, decimals=token.decimals)

    def _select(
        self,
        observations: list[PriceObservation],
        *,
        address: Address,
        block_number: int | None,
    ) -> PriceObservation | None:
        first = observations[0]
        last = observations[-1]

        if block_number is None:
            return last

        if block_number > last.block:
            logger.debug(
                "Requested price for block %s newer than last available %s",
                block_number,
                last.block,
                extra={"token": address.value},
            )
            return last

        # nothing older exists at the earliest block itself
        if block_number <= first.block:
            if block_number < first.block:
                logger.debug(
                    "Requested price for block %s older than earliest available %s",
                    block_number,
                    first.block,
                    extra={"token": address.value},
                )
            return first

        for p in reversed(observations):
            if p.block < block_number or (self._inclusive_block_match and p.block == block_number):
                return p

        return None
