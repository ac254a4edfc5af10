"""
CLI utility helpers: chaincode loading and output formatting.
"""

from __future__ import annotations

import importlib
import json
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from chaincore.core.errors import ChaincodeError
from chaincore.framework import Chaincode, Response

console = Console()
err_console = Console(stderr=True)


def load_chaincode(target: str) -> Chaincode:
    """Resolve ``module:attribute`` to a chaincode instance.

    The attribute may be an instance, a ``Chaincode`` subclass or a
    zero-argument factory returning an instance.
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise typer.BadParameter(f"Expected 'module:attribute', got {target!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise typer.BadParameter(f"Cannot import {module_name!r}: {e}") from e

    obj = getattr(module, attr, None)
    if obj is None:
        raise typer.BadParameter(f"{module_name!r} has no attribute {attr!r}")

    if not isinstance(obj, Chaincode) and callable(obj):
        obj = obj()
    if not isinstance(obj, Chaincode):
        raise typer.BadParameter(f"{target!r} is not a Chaincode")
    return obj


def output_response(response: Response, *, as_json: bool = False) -> None:
    """Render a peer ``Response``; failures exit with code 1."""
    if not response.ok:
        error = ChaincodeError.from_serialized(response.message)
        if as_json:
            console.print_json(json.dumps(error.to_dict(), default=str))
        else:
            err_console.print(f"[bold red]Error[/bold red] ({escape(error.kind_name)}): {escape(error.message)}")
            if error.data:
                err_console.print_json(json.dumps(dict(error.data), default=str))
        raise typer.Exit(code=1)

    if not response.payload:
        console.print("[dim]No payload.[/dim]")
        return

    text = response.payload.decode("utf-8", errors="replace")
    try:
        console.print_json(text)
    except json.JSONDecodeError:
        console.print(escape(text))


def print_operations(chaincode: Chaincode) -> None:
    """Render registered operations as a Rich table."""
    table = Table(title=chaincode.name, show_lines=False, pad_edge=False)
    table.add_column("operation")
    table.add_column("description", overflow="fold")
    for name, doc in chaincode.registry.describe().items():
        table.add_row(escape(name), escape(doc))
    console.print(table)
