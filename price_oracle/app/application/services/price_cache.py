from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from price_oracle.app.config import DEFAULT_REFRESH_PRICE_INTERVAL_MS
from price_oracle.app.domain.models import PriceObservation
from price_oracle.app.domain.ports.out import PriceStore

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


@dataclass
class CacheEntry:
    last_updated_at: float  # ms, clock of the call that started the reload
    observations: asyncio.Future[list[PriceObservation]]


class PriceCache:
    """
    Per-chain cache of price observations, refreshed from a PriceStore when stale.

    The entry is replaced with the pending reload as soon as it starts, so
    concurrent callers on the same loop share one in-flight load.
    A failed reload drops the entry; the next call retries.
    """

    def __init__(
        self,
        *,
        store: PriceStore,
        update_every_ms: int = DEFAULT_REFRESH_PRICE_INTERVAL_MS,
        clock: Clock | None = None,
    ) -> None:
        if update_every_ms <= 0:
            raise ValueError("update_every_ms must be positive")
        self._store = store
        self._update_every_ms = update_every_ms
        self._clock = clock if clock is not None else _monotonic_ms
        self._entries: dict[int, CacheEntry] = {}

    async def get_observations(self, chain_id: int) -> list[PriceObservation]:
        entry = self._entries.get(chain_id)
        now = self._clock()

        if entry is None or self._is_stale(entry, now):
            entry = CacheEntry(
                last_updated_at=now,
                observations=asyncio.ensure_future(self._reload(chain_id)),
            )
            self._entries[chain_id] = entry
            entry.observations.add_done_callback(
                lambda fut, e=entry: self._drop_if_failed(chain_id, e, fut)
            )

        # shield: one cancelled caller must not cancel the shared reload
        return await asyncio.shield(entry.observations)

    def _drop_if_failed(
        self,
        chain_id: int,
        entry: CacheEntry,
        fut: asyncio.Future[list[PriceObservation]],
    ) -> None:
        # runs even when no caller is left waiting on the reload
        if not fut.cancelled() and fut.exception() is None:
            return
        if self._entries.get(chain_id) is entry:
            del self._entries[chain_id]

    def _is_stale(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.last_updated_at > self._update_every_ms

    async def _reload(self, chain_id: int) -> list[PriceObservation]:
        observations = await self._store.load(chain_id=chain_id)
        logger.info(
            "Reloaded %s price observations for chain %s",
            len(observations),
            chain_id,
            extra={"chain_id": chain_id},
        )
        return observations
