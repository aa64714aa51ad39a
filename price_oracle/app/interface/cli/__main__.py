import asyncio
import inspect
import logging
from typing import Optional

import typer
from dotenv import load_dotenv
from InquirerPy import inquirer

from price_oracle.app.domain.models import (
    FromUsdResult,
    PriceObservation,
    RateResult,
    ToUsdResult,
)
from price_oracle.app.interface.tasks import TASKS
from price_oracle.app.interface.tasks.prices.convert_from_usd_task import convert_from_usd_task
from price_oracle.app.interface.tasks.prices.convert_to_usd_task import convert_to_usd_task
from price_oracle.app.interface.tasks.prices.list_prices_task import list_prices_task
from price_oracle.app.interface.tasks.prices.usd_rate_task import usd_rate_task

load_dotenv()

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

app = typer.Typer()
prices_app = typer.Typer(help="cli for historical token prices and USD conversions.")
app.add_typer(prices_app, name="prices")


def _parse_log_level(value: str) -> int:
    try:
        return LOG_LEVELS[value.lower()]
    except KeyError:
        raise typer.BadParameter(
            f"Invalid log level {value!r}, expected one of: {', '.join(LOG_LEVELS)}"
        )


@app.callback()
def main(
    log_level: str = typer.Option("info", "--log-level", help="debug | info | warning | error"),
) -> None:
    logging.basicConfig(
        level=_parse_log_level(log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def render(result: object) -> str:
    if isinstance(result, RateResult):
        return (
            f"token={result.token} block={result.block} "
            f"price_usd={result.price} decimals={result.decimals}"
        )
    if isinstance(result, ToUsdResult):
        return f"amount_usd={result.amount} price_usd_per_token={result.price}"
    if isinstance(result, FromUsdResult):
        return f"amount_raw={result.amount} price_token_per_usd={result.price}"
    if isinstance(result, list):
        return "\n".join(render(item) for item in result)
    if isinstance(result, PriceObservation):
        return f"{result.token}\t{result.block}\t{result.price}"
    return str(result)


@prices_app.command("rate")
def rate(
    chain: str = typer.Option(..., "--chain", "-s", help="Chain id or configured chain name"),
    token: str = typer.Option(..., "--token", "-t"),
    block: Optional[str] = typer.Option(None, "--block", "-b", help="Block number or 'latest'"),
) -> None:
    typer.echo(render(asyncio.run(usd_rate_task(chain=chain, token=token, block=block))))


@prices_app.command("to-usd")
def to_usd(
    amount: str = typer.Argument(..., help="Raw token amount (smallest units)"),
    chain: str = typer.Option(..., "--chain", "-s"),
    token: str = typer.Option(..., "--token", "-t"),
    block: Optional[str] = typer.Option(None, "--block", "-b"),
) -> None:
    typer.echo(
        render(asyncio.run(convert_to_usd_task(chain=chain, token=token, amount=amount, block=block)))
    )


@prices_app.command("from-usd")
def from_usd(
    amount: str = typer.Argument(..., help="USD amount"),
    chain: str = typer.Option(..., "--chain", "-s"),
    token: str = typer.Option(..., "--token", "-t"),
    block: Optional[str] = typer.Option(None, "--block", "-b"),
) -> None:
    typer.echo(
        render(
            asyncio.run(convert_from_usd_task(chain=chain, token=token, amount=amount, block=block))
        )
    )


@prices_app.command("list")
def list_prices(
    chain: str = typer.Option(..., "--chain", "-s"),
) -> None:
    typer.echo(render(asyncio.run(list_prices_task(chain=chain))))


@prices_app.command("run")
def run() -> None:
    task_name = inquirer.select(
        message="Select task:",
        choices=list(TASKS.keys()),
        pointer="❯",
        instruction="Use ↑/↓ to move, Enter to select",
    ).execute()
    chain = inquirer.text(
        message="Chain (id or configured name, e.g. 1 or mainnet):",
        default="1",
    ).execute()

    task = TASKS[task_name]

    kwargs: dict[str, object] = {"chain": chain}

    sig = inspect.signature(task)
    params = sig.parameters

    if "token" in params:
        kwargs["token"] = inquirer.text(message="Token address:").execute()
    if "amount" in params:
        kwargs["amount"] = inquirer.text(message="Amount:").execute()
    if "block" in params:
        kwargs["block"] = inquirer.text(
            message="Block (number or latest):",
            default="latest",
        ).execute()

    typer.echo(render(asyncio.run(task(**kwargs))))  # type: ignore


if __name__ == "__main__":
    app()
