"""
Root Typer application for the chaincore CLI.

Runs chaincode operations in-process, against a local environment, for
development and smoke testing.
"""

from __future__ import annotations

import asyncio

import typer
from typer import Typer

from chaincore.cli.utils import load_chaincode, output_response, print_operations
from chaincore.framework import LocalEnvironment
from chaincore.framework.logging import configure_logging

app = Typer(
    name="chaincore",
    help="chaincore: dispatch core for ledger chaincodes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        from chaincore import __version__

        typer.echo(f"chaincore {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG | INFO | WARNING | ERROR"),
) -> None:
    """chaincore CLI: invoke chaincode operations locally."""
    configure_logging(level=log_level.upper() if log_level else None, force=True)


@app.command("invoke")
def invoke(
    target: str = typer.Argument(..., help="Chaincode as module:attribute"),
    fn: str = typer.Argument(..., help="Operation name"),
    args: list[str] = typer.Argument(None, help="Raw string arguments"),
    tx_id: str | None = typer.Option(None, "--tx-id", help="Transaction id to use"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Run one operation through the dispatcher."""
    chaincode = load_chaincode(target)
    env = LocalEnvironment(fcn=fn, params=tuple(args or ()))
    if tx_id:
        env.tx_id = tx_id
    response = asyncio.run(chaincode.invoke(env))
    output_response(response, as_json=json_out)


@app.command("init")
def init(
    target: str = typer.Argument(..., help="Chaincode as module:attribute"),
) -> None:
    """Run the chaincode's activation hook."""
    chaincode = load_chaincode(target)
    response = asyncio.run(chaincode.init(LocalEnvironment(fcn="init")))
    output_response(response)


@app.command("operations")
def operations(
    target: str = typer.Argument(..., help="Chaincode as module:attribute"),
) -> None:
    """List the operations a chaincode exposes."""
    print_operations(load_chaincode(target))
