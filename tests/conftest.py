from __future__ import annotations

import pytest

from price_oracle.app.chains import ChainConfig, ChainRegistry, TokenDescriptor
from tests.helpers.fakes import (
    CHAIN_ID,
    DEFAULT_OBSERVATIONS,
    OTHER_CHAIN_ID,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    FakeClock,
    FakePriceStore,
)


@pytest.fixture(scope="function")
def chains() -> ChainRegistry:
    return ChainRegistry(
        [
            ChainConfig(
                id=CHAIN_ID,
                name="mainnet",
                rpc="http://localhost:8545",
                tokens=[
                    TokenDescriptor(address=TOKEN_A, decimals=18, code="AAA"),
                    TokenDescriptor(address=TOKEN_B, decimals=6, code="BBB"),
                    TokenDescriptor(address=TOKEN_C, decimals=18, code="CCC"),
                ],
            ),
            ChainConfig(id=OTHER_CHAIN_ID, name="optimism", tokens=[]),
        ]
    )


@pytest.fixture(scope="function")
def price_store() -> FakePriceStore:
    return FakePriceStore({CHAIN_ID: list(DEFAULT_OBSERVATIONS)})


@pytest.fixture(scope="function")
def clock() -> FakeClock:
    return FakeClock()
