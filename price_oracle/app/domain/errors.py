from __future__ import annotations


class PriceOracleError(Exception):
    pass


class UnknownChainError(PriceOracleError):
    def __init__(self, chain: int | str) -> None:
        super().__init__(f"Chain {chain!r} is not configured")
        self.chain = chain


class UnknownTokenError(PriceOracleError):
    def __init__(self, token: str, chain_id: int) -> None:
        super().__init__(f"Token {token} is not configured on chain {chain_id}")
        self.token = token
        self.chain_id = chain_id


class NoPricesFoundError(PriceOracleError):
    def __init__(self, token: str, chain_id: int, block_number: int | None = None) -> None:
        super().__init__(
            f"No prices found for token {token} on chain {chain_id} at {block_number}"
        )
        self.token = token
        self.chain_id = chain_id
        self.block_number = block_number


class PriceNotFoundError(PriceOracleError):
    """Requested block is inside the recorded range but nothing matched (unsorted data)."""

    def __init__(self, token: str, chain_id: int, block_number: int | None = None) -> None:
        super().__init__(
            f"Price not found for token {token} on chain {chain_id} at {block_number}"
        )
        self.token = token
        self.chain_id = chain_id
        self.block_number = block_number
