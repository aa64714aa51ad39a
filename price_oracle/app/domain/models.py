from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from eth_utils import is_hex_address, to_normalized_address


@dataclass(frozen=True)
class Address:
    """
    Canonical EVM address (lowercase 0x-prefixed hex).

    Built once at the boundary (config load, store load, public API)
    so lookups compare values instead of raw strings.
    """

    value: str

    @classmethod
    def parse(cls, raw: str | bytes | Address) -> Address:
        if isinstance(raw, Address):
            return raw
        if isinstance(raw, (bytes, bytearray, memoryview)):
            b = bytes(raw)
            if len(b) != 20:
                raise ValueError(f"Address must be 20 bytes, got {len(b)}")
            return cls("0x" + b.hex())
        if not isinstance(raw, str) or not is_hex_address(raw.strip()):
            raise ValueError(f"Invalid address: {raw!r}")
        return cls(to_normalized_address(raw.strip()))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PriceObservation:
    """USD price of one whole token unit as recorded at a given block."""

    token: Address
    block: int
    price: Decimal


@dataclass(frozen=True)
class RateResult:
    token: Address
    block: int
    price: Decimal
    decimals: int

    @classmethod
    def from_observation(cls, observation: PriceObservation, *, decimals: int) -> RateResult:
        return cls(
            token=observation.token,
            block=observation.block,
            price=observation.price,
            decimals=decimals,
        )


@dataclass(frozen=True)
class ToUsdResult:
    amount: Decimal  # USD
    price: Decimal  # USD per token


@dataclass(frozen=True)
class FromUsdResult:
    amount: int  # raw token units
    price: Decimal  # tokens per USD
