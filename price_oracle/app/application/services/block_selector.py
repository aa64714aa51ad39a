from __future__ import annotations

from typing import Literal

BlockSelector = int | str | None
_LATEST: Literal["latest"] = "latest"


def resolve_block_selector(block: BlockSelector) -> int | None:
    """
    Resolve a user-supplied block into a block number for price lookups.

    - int / numeric string -> that block,
    - None / "" / "latest" -> None (current price).
    """
    if block is None:
        return None

    if isinstance(block, int):
        if block < 0:
            raise ValueError("Block numbers must be non-negative")
        return block

    block_str = block.strip().lower()
    if block_str in ("", _LATEST):
        return None
    if block_str.isdigit():
        return int(block_str)

    raise ValueError(f"Unsupported block value: {block!r}")
