"""Static per-chain configuration (tokens and RPC endpoints)."""
from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from price_oracle.app.domain.errors import UnknownChainError
from price_oracle.app.domain.models import Address


class TokenDescriptor(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    address: Address
    decimals: int = Field(ge=0, le=255)
    code: str | None = None

    @field_validator("address", mode="before")
    @classmethod
    def _normalize_address(cls, v: object) -> Address:
        return Address.parse(v)  # type: ignore[arg-type]


class ChainConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    name: str
    rpc: str | None = None
    tokens: list[TokenDescriptor] = Field(default_factory=list)

    def find_token(self, address: Address) -> TokenDescriptor | None:
        for token in self.tokens:
            if token.address == address:
                return token
        return None


_CHAINS_ADAPTER = TypeAdapter(list[ChainConfig])


class ChainRegistry:
    def __init__(self, chains: Iterable[ChainConfig]) -> None:
        self._by_id: dict[int, ChainConfig] = {}
        for chain in chains:
            if chain.id in self._by_id:
                raise ValueError(f"Duplicate chain id in configuration: {chain.id}")
            self._by_id[chain.id] = chain

    @classmethod
    def from_file(cls, path: Path) -> ChainRegistry:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        return cls(_CHAINS_ADAPTER.validate_python(raw))

    def get(self, chain_id: int) -> ChainConfig:
        try:
            return self._by_id[chain_id]
        except KeyError:
            raise UnknownChainError(chain_id) from None

    def get_by_name(self, name: str) -> ChainConfig:
        for chain in self._by_id.values():
            if chain.name == name:
                return chain
        raise UnknownChainError(name)

    def resolve(self, chain: int | str) -> ChainConfig:
        """Accept either a numeric chain id or a configured chain name."""
        if isinstance(chain, int):
            return self.get(chain)
        if chain.strip().isdigit():
            return self.get(int(chain))
        return self.get_by_name(chain)

    def __iter__(self):
        return iter(self._by_id.values())
