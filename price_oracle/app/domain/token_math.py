from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal, localcontext

PRICE_DECIMALS = 8

# uint256 amounts times an 8-decimal price need ~90 significant digits
_PRECISION = 120


def _scaled_price(price: Decimal, price_decimals: int) -> int:
    return int((price * (Decimal(10) ** price_decimals)).to_integral_value(rounding=ROUND_HALF_EVEN))


def convert_token_to_fiat(
    *,
    token_amount: int,
    token_decimals: int,
    token_price: Decimal,
    token_price_decimals: int = PRICE_DECIMALS,
) -> Decimal:
    """
    Raw token units -> fiat amount.

    The integer product is formed first, the decimal shift is applied last,
    so no precision is lost on the token side.
    """
    if token_amount < 0:
        raise ValueError("token_amount must be non-negative")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        numerator = token_amount * _scaled_price(token_price, token_price_decimals)
        return Decimal(numerator).scaleb(-(token_decimals + token_price_decimals))


def convert_fiat_to_token(
    *,
    fiat_amount: Decimal,
    token_price: Decimal,
    token_decimals: int,
    token_price_decimals: int = PRICE_DECIMALS,
) -> int:
    """Fiat amount -> raw token units, rounded half-even to a whole unit."""
    scaled_price = _scaled_price(token_price, token_price_decimals)
    if scaled_price <= 0:
        raise ValueError("token_price must be positive")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        units = (
            Decimal(fiat_amount).scaleb(token_decimals + token_price_decimals)
            / Decimal(scaled_price)
        )
        return int(units.to_integral_value(rounding=ROUND_HALF_EVEN))
