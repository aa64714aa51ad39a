from __future__ import annotations

from decimal import Decimal, localcontext

import pytest

from price_oracle.app.domain.models import Address
from price_oracle.app.domain.token_math import convert_fiat_to_token, convert_token_to_fiat


def test_token_to_fiat_scales_by_token_decimals() -> None:
    usd = convert_token_to_fiat(
        token_amount=5 * 10**18,
        token_decimals=18,
        token_price=Decimal("2.00000000"),
    )
    assert usd == Decimal("10")


def test_token_to_fiat_keeps_precision_for_uint256_amounts() -> None:
    amount = 2**256 - 1
    usd = convert_token_to_fiat(
        token_amount=amount,
        token_decimals=18,
        token_price=Decimal("1.00000001"),
    )
    with localcontext() as ctx:
        ctx.prec = 120
        expected = Decimal(amount * 100000001).scaleb(-26)
    assert usd == expected
    assert usd.scaleb(26, context=ctx) == amount * 100000001


def test_token_to_fiat_rejects_negative_amount() -> None:
    with pytest.raises(ValueError):
        convert_token_to_fiat(token_amount=-1, token_decimals=18, token_price=Decimal("1"))


def test_fiat_to_token_rounds_to_whole_units() -> None:
    units = convert_fiat_to_token(
        fiat_amount=Decimal("1"),
        token_price=Decimal("3.00000000"),
        token_decimals=6,
    )
    # 333333.33.. -> 333333
    assert units == 333333


def test_fiat_to_token_rejects_zero_price() -> None:
    with pytest.raises(ValueError):
        convert_fiat_to_token(fiat_amount=Decimal("1"), token_price=Decimal("0"), token_decimals=18)


def test_round_trip_stays_within_one_unit() -> None:
    price = Decimal("1834.12345678")
    for amount in (1, 999, 10**18 + 7, 123456789123456789123):
        usd = convert_token_to_fiat(token_amount=amount, token_decimals=18, token_price=price)
        back = convert_fiat_to_token(fiat_amount=usd, token_price=price, token_decimals=18)
        assert abs(back - amount) <= 1


def test_address_parse_is_case_insensitive() -> None:
    lower = Address.parse("0x" + "ab" * 20)
    upper = Address.parse("0x" + "AB" * 20)
    assert lower == upper
    assert str(upper) == "0x" + "ab" * 20


def test_address_parse_accepts_raw_bytes() -> None:
    assert Address.parse(b"\xab" * 20) == Address.parse("0x" + "ab" * 20)


@pytest.mark.parametrize("raw", ["0xAAA", "", "not-an-address", b"\x00" * 19])
def test_address_parse_rejects_malformed(raw: object) -> None:
    with pytest.raises(ValueError):
        Address.parse(raw)  # type: ignore[arg-type]
