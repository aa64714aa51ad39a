from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest

from price_oracle.app.application.services.lookup_policy import LookupPolicy
from price_oracle.app.application.services.price_cache import PriceCache
from price_oracle.app.chains import ChainRegistry
from price_oracle.app.domain.errors import (
    NoPricesFoundError,
    UnknownChainError,
    UnknownTokenError,
)
from price_oracle.app.domain.models import Address, RateResult
from tests.helpers.fakes import (
    CHAIN_ID,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    UNCONFIGURED,
    FakeClock,
    FakePriceStore,
    observation,
)


def _policy(
    store: FakePriceStore,
    chains: ChainRegistry,
    *,
    inclusive_block_match: bool = False,
) -> LookupPolicy:
    cache = PriceCache(store=store, update_every_ms=10_000, clock=FakeClock())
    return LookupPolicy(cache=cache, chains=chains, inclusive_block_match=inclusive_block_match)


def _resolve(policy: LookupPolicy, token: str, block: int | None = None) -> RateResult:
    return asyncio.run(policy.resolve(chain_id=CHAIN_ID, token_address=token, block_number=block))


@pytest.mark.parametrize(
    ("block", "expected_price", "expected_block"),
    [
        (150, "2.0", 100),  # newest observation strictly before the block
        (50, "2.0", 100),  # backward extrapolation
        (250, "3.0", 200),  # forward extrapolation
        (100, "2.0", 100),  # at the earliest block
        (200, "2.0", 100),  # observation exactly at the block is skipped
        (201, "3.0", 200),
        (None, "3.0", 200),  # current price
    ],
)
def test_selection_rules(
    price_store: FakePriceStore,
    chains: ChainRegistry,
    block: int | None,
    expected_price: str,
    expected_block: int,
) -> None:
    rate = _resolve(_policy(price_store, chains), TOKEN_A, block)

    assert rate.price == Decimal(expected_price)
    assert rate.block == expected_block
    assert rate.decimals == 18
    assert rate.token == Address.parse(TOKEN_A)


def test_forward_extrapolation_matches_current_price(
    price_store: FakePriceStore, chains: ChainRegistry
) -> None:
    policy = _policy(price_store, chains)
    assert _resolve(policy, TOKEN_A, 200 + 1).price == _resolve(policy, TOKEN_A).price


def test_inclusive_block_match_uses_observation_at_block(
    price_store: FakePriceStore, chains: ChainRegistry
) -> None:
    policy = _policy(price_store, chains, inclusive_block_match=True)

    assert _resolve(policy, TOKEN_A, 200).price == Decimal("3.0")
    assert _resolve(policy, TOKEN_A, 199).price == Decimal("2.0")


def test_picks_latest_of_several_in_range(chains: ChainRegistry) -> None:
    store = FakePriceStore(
        {
            CHAIN_ID: [
                observation(TOKEN_A, 10, "1"),
                observation(TOKEN_A, 20, "2"),
                observation(TOKEN_A, 30, "3"),
                observation(TOKEN_A, 40, "4"),
            ]
        }
    )
    assert _resolve(_policy(store, chains), TOKEN_A, 35).price == Decimal("3")


def test_address_matching_is_case_insensitive(
    price_store: FakePriceStore, chains: ChainRegistry
) -> None:
    policy = _policy(price_store, chains)

    lower = _resolve(policy, TOKEN_B, 150)
    upper = _resolve(policy, "0x" + "B" * 40, 150)

    assert lower == upper
    assert lower.decimals == 6
    assert lower.price == Decimal("0.99990000")


def test_unknown_token_raises(price_store: FakePriceStore, chains: ChainRegistry) -> None:
    with pytest.raises(UnknownTokenError) as exc_info:
        _resolve(_policy(price_store, chains), UNCONFIGURED, 150)
    assert exc_info.value.chain_id == CHAIN_ID


def test_malformed_address_is_unknown_token(price_store: FakePriceStore, chains: ChainRegistry) -> None:
    with pytest.raises(UnknownTokenError):
        _resolve(_policy(price_store, chains), "0xAAA", 150)


def test_configured_token_without_prices_raises(
    price_store: FakePriceStore, chains: ChainRegistry
) -> None:
    with pytest.raises(NoPricesFoundError):
        _resolve(_policy(price_store, chains), TOKEN_C, 150)


def test_unknown_chain_raises(price_store: FakePriceStore, chains: ChainRegistry) -> None:
    policy = _policy(price_store, chains)
    with pytest.raises(UnknownChainError):
        asyncio.run(policy.resolve(chain_id=999, token_address=TOKEN_A))
    assert price_store.loads == []


def test_negative_block_is_rejected(price_store: FakePriceStore, chains: ChainRegistry) -> None:
    with pytest.raises(ValueError):
        _resolve(_policy(price_store, chains), TOKEN_A, -1)
