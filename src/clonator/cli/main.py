"""Typer app: top-level commands (repos, gists, version) and the config group."""

from __future__ import annotations

import typer

from clonator import __version__

app = typer.Typer(
    name="clonator",
    help="Clone or list a GitHub account's repositories and gists, grouped by tag.",
    no_args_is_help=True,
)


@app.command()
def version() -> None:
    """Print the program version."""
    typer.echo(f"clonator v{__version__}")


# Register commands and subcommand groups
from clonator.cli.listing_cmd import register_listing_commands
from clonator.cli.config_cmd import config_app

register_listing_commands(app)
app.add_typer(config_app, name="config", help="Manage persisted defaults")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
