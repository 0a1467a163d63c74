"""Output formatting utilities: text vs JSON, rich tables, logging setup."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

console = Console()
error_console = Console(stderr=True)


def is_piped() -> bool:
    return not sys.stdout.isatty()


def resolve_format(fmt: str | None) -> str:
    """Auto-detect the format when not given: json when piped, text for TTY."""
    if fmt is None:
        return "json" if is_piped() else "text"
    return fmt


def output(data: Any, fmt: str | None = None) -> None:
    """Output data in the requested format."""
    fmt = resolve_format(fmt)

    if fmt == "json":
        if isinstance(data, str):
            print(json.dumps({"value": data}))
        elif hasattr(data, "model_dump"):
            print(data.model_dump_json(indent=2))
        elif isinstance(data, (dict, list)):
            print(json.dumps(data, indent=2, default=str))
        else:
            print(json.dumps({"value": str(data)}, default=str))
    else:
        if isinstance(data, str):
            console.print(data)
        elif hasattr(data, "model_dump"):
            console.print_json(data.model_dump_json(indent=2))
        elif isinstance(data, (dict, list)):
            console.print_json(json.dumps(data, default=str))
        else:
            console.print(str(data))


def output_table(rows: list[dict[str, str]], columns: list[str], fmt: str | None = None) -> None:
    fmt = resolve_format(fmt)

    if fmt == "json":
        print(json.dumps(rows, indent=2, default=str))
    else:
        table = Table()
        for col in columns:
            table.add_column(col.title())
        for row in rows:
            table.add_row(*[escape(str(row.get(col, ""))) for col in columns])
        console.print(table)


def configure_logging(verbose: bool = False) -> None:
    """Send DEBUG logs to stderr through rich when verbose."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def error(msg: str) -> None:
    error_console.print(f"[red]Error:[/red] {msg}")


def success(msg: str) -> None:
    console.print(f"[green]{msg}[/green]")


def info(msg: str) -> None:
    console.print(f"[dim]{msg}[/dim]")
