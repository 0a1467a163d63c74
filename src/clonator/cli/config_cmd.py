"""Config subcommands: get, set, list for persisted defaults."""

from __future__ import annotations

from typing import Callable, Optional

import typer

from clonator.cli._shared import FORMAT_OPTION
from clonator.utils.config import load_global_config, save_global_config
from clonator.utils.output import error, info, output, success

config_app = typer.Typer(no_args_is_help=True)


def _parse_bool(value: str) -> bool:
    if value not in ("true", "false"):
        raise ValueError("expected true or false")
    return value == "true"


def _parse_length(value: str) -> int:
    length = int(value)
    if length < 0:
        raise ValueError("expected a non-negative integer")
    return length


def _parse_grouping(value: str) -> str:
    if value not in ("by-topic", "by-list", "none"):
        raise ValueError("expected by-topic, by-list or none")
    return value


_VALID_KEYS: dict[str, Callable[[str], object]] = {
    "grouping_mode": _parse_grouping,
    "max_leaf_length": _parse_length,
    "allow_spaces_in_leaf": _parse_bool,
    "allow_dots_in_leaf": _parse_bool,
}


@config_app.command("get")
def config_get(
    key: str = typer.Argument(..., help="Configuration key"),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Get a configuration value."""
    if key not in _VALID_KEYS:
        error(f"Unknown key: {key}. Valid keys: {', '.join(sorted(_VALID_KEYS))}")
        raise typer.Exit(1)

    config = load_global_config()
    value = config.get(key)
    if fmt == "json":
        output({"key": key, "value": value}, fmt="json")
    elif value is None:
        info(f"{key}: (not set)")
    else:
        info(f"{key}: {value}")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Configuration key"),
    value: str = typer.Argument(..., help="Value to set"),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Set a configuration value."""
    if key not in _VALID_KEYS:
        error(f"Unknown key: {key}. Valid keys: {', '.join(sorted(_VALID_KEYS))}")
        raise typer.Exit(1)

    try:
        parsed = _VALID_KEYS[key](value)
    except ValueError as e:
        error(f"Invalid value for {key}: {value} ({e})")
        raise typer.Exit(1)

    config = load_global_config()
    config[key] = parsed
    save_global_config(config)

    if fmt == "json":
        output({"key": key, "value": parsed}, fmt="json")
    else:
        success(f"{key} = {value}")


@config_app.command("list")
def config_list(
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """List all configuration values."""
    config = load_global_config()
    if fmt == "json":
        output(config, fmt="json")
    elif config:
        for k, v in sorted(config.items()):
            info(f"{k}: {v}")
    else:
        info("No configuration set")
