from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from .prices.usd_rate_task import usd_rate_task as prices__usd_rate_task
from .prices.convert_to_usd_task import convert_to_usd_task as prices__convert_to_usd_task
from .prices.convert_from_usd_task import convert_from_usd_task as prices__convert_from_usd_task
from .prices.list_prices_task import list_prices_task as prices__list_prices_task

TaskFn = Callable[..., Awaitable[Any]]

TASKS: dict[str, TaskFn] = {
    "prices__usd_rate_task": prices__usd_rate_task,
    "prices__convert_to_usd_task": prices__convert_to_usd_task,
    "prices__convert_from_usd_task": prices__convert_from_usd_task,
    "prices__list_prices_task": prices__list_prices_task,
}
