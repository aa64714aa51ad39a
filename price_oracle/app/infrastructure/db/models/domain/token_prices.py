from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    DateTime,
    Index,
    Integer,
    LargeBinary,
    Numeric,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from price_oracle.app.infrastructure.db.db_base import BaseDB


class TokenPricesDB(BaseDB):
    """
    Recorded USD prices of configured tokens.

    One row = one observation (token price at a block) per chain_id.
    Written by the price ingestion job; read-only for the conversion engine.
    """

    __tablename__ = "token_prices"
    __table_args__ = (
        Index("ix_token_prices_chain_token_block", "chain_id", "token_address", "block_number"),
        {"schema": "domain"},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    chain_id: Mapped[int] = mapped_column(Integer, nullable=False)
    token_address: Mapped[bytes] = mapped_column(LargeBinary(20), nullable=False)
    code: Mapped[str | None] = mapped_column(Text, nullable=True)

    block_number: Mapped[int] = mapped_column(BigInteger, nullable=False)
    # 8 implied decimals, USD per whole token
    price_usd: Mapped[Decimal] = mapped_column(Numeric(38, 8), nullable=False)

    observed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
