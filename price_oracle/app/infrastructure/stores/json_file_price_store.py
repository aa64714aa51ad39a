from __future__ import annotations

import asyncio
import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any

from price_oracle.app.domain.models import Address, PriceObservation
from price_oracle.app.domain.ports.out import PriceStore

logger = logging.getLogger(__name__)

PRICES_FILE_NAME = "prices.json"


class JsonFilePriceStore(PriceStore):
    """
    Reads ``<root_dir>/<chain_id>/prices.json``.

    The file is a JSON array written by the price ingestion job, one record per
    observation::

        {"token": "0x...", "code": "ETH", "price": 1834.12, "timestamp": ..., "block": 17000000}

    Records are returned in file order. A missing file means no prices yet.
    """

    def __init__(self, *, root_dir: Path) -> None:
        self.root_dir = root_dir

    async def load(
        self,
        *,
        chain_id: int,
    ) -> list[PriceObservation]:
        path = self.file_path(chain_id)
        return await asyncio.to_thread(self._read, path)

    def file_path(self, chain_id: int) -> Path:
        return self.root_dir / str(chain_id) / PRICES_FILE_NAME

    @staticmethod
    def _read(path: Path) -> list[PriceObservation]:
        if not path.exists():
            logger.warning("Prices file %s does not exist", path)
            return []

        with path.open("r", encoding="utf-8") as handle:
            # parse_float keeps prices exact (no binary float round-trip)
            records: list[dict[str, Any]] = json.load(handle, parse_float=Decimal)

        return [
            PriceObservation(
                token=Address.parse(record["token"]),
                block=int(record["block"]),
                price=Decimal(record["price"]),
            )
            for record in records
        ]
