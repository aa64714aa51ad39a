from __future__ import annotations

from typing import Protocol

from price_oracle.app.domain.models import PriceObservation


class PriceStore(Protocol):
    """
    Port for loading recorded price observations of a chain.

    Implementations return the full list for the chain. For any single token
    the observations must come back ordered by block ascending; ordering
    across tokens is irrelevant.
    """

    async def load(
        self,
        *,
        chain_id: int,
    ) -> list[PriceObservation]:
        ...
