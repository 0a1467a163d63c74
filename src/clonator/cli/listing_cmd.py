"""Listing commands: ``repos`` and ``gists``.

Both commands share one flow: fetch the listing, then either clone every
record, list it, show details, dump the raw JSON or dump extracted fields.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.markup import escape

from clonator.cli._shared import FORMAT_OPTION, TOKEN_OPTION, VERBOSE_OPTION, resolve_identity
from clonator.core.errors import ClonatorError
from clonator.core.extract import END_OF_OBJECT, extract_fields
from clonator.core.pipeline import check_supported, for_each_record, iter_records
from clonator.core.schema import (
    GistRecord,
    GroupingMode,
    ListingKind,
    PlacementConfig,
    Record,
    RepoRecord,
    Visibility,
)
from clonator.sources.base import ListingRequest
from clonator.sources.github import GitHubListing
from clonator.sync.cloner import CloneError, GitCloner
from clonator.utils.config import load_global_config
from clonator.utils.output import (
    configure_logging,
    console,
    error,
    info,
    output,
    output_table,
    resolve_format,
)


class Action(str, Enum):
    clone = "clone"
    list = "list"
    xlist = "xlist"
    json = "json"
    fields = "fields"


_VISIBILITY_CHAR = {Visibility.private: "#", Visibility.internal: "i", Visibility.public: "."}


def register_listing_commands(app: typer.Typer) -> None:
    """Register ``repos`` and ``gists`` on the top-level app."""

    @app.command("repos")
    def repos(
        username: Optional[str] = typer.Argument(None, help="GitHub user name or access token"),
        directory: Optional[str] = typer.Argument(None, help="Base directory for the clones"),
        ssh: bool = typer.Option(False, "--ssh", "-s", help="Clone using ssh (SSH keys required)"),
        dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Only print the commands"),
        list_: bool = typer.Option(False, "--list", "-l", help="List the repositories"),
        xlist: bool = typer.Option(False, "--xlist", "-L", help="List with detailed info"),
        raw_json: bool = typer.Option(False, "--json", "-j", help="Print the raw listing JSON"),
        fields: bool = typer.Option(False, "--fields", help="Print the extracted fields"),
        group: Optional[GroupingMode] = typer.Option(
            None, "--group", "-g", help="Grouping: by-topic (default), by-list, none"
        ),
        max_length: Optional[int] = typer.Option(
            None, "--max-length", min=0, help="Maximum directory name length (0 = no limit)"
        ),
        token: Optional[str] = TOKEN_OPTION,
        fmt: Optional[str] = FORMAT_OPTION,
        verbose: bool = VERBOSE_OPTION,
    ) -> None:
        """Clone (or list) all repositories owned by a user."""
        run_listing(
            ListingKind.repos,
            username,
            directory,
            action=_pick_action(list_, xlist, raw_json, fields),
            ssh=ssh,
            dry_run=dry_run,
            overrides={"grouping_mode": group, "max_leaf_length": max_length},
            token=token,
            fmt=fmt,
            verbose=verbose,
        )

    @app.command("gists")
    def gists(
        username: Optional[str] = typer.Argument(None, help="GitHub user name or access token"),
        directory: Optional[str] = typer.Argument(None, help="Base directory for the clones"),
        ssh: bool = typer.Option(False, "--ssh", "-s", help="Clone using ssh (SSH keys required)"),
        dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Only print the commands"),
        list_: bool = typer.Option(False, "--list", "-l", help="List the gists"),
        xlist: bool = typer.Option(False, "--xlist", "-L", help="List with detailed info"),
        raw_json: bool = typer.Option(False, "--json", "-j", help="Print the raw listing JSON"),
        fields: bool = typer.Option(False, "--fields", help="Print the extracted fields"),
        group: Optional[GroupingMode] = typer.Option(
            None, "--group", "-g", help="Grouping: by-topic (default), by-list, none"
        ),
        max_length: Optional[int] = typer.Option(
            None, "--max-length", min=0, help="Maximum directory name length (0 = no limit)"
        ),
        allow_spaces: Optional[bool] = typer.Option(
            None, "--allow-spaces/--no-allow-spaces", help="Keep spaces in names"
        ),
        allow_dots: Optional[bool] = typer.Option(
            None, "--allow-dots/--no-allow-dots", help="Keep dots in names"
        ),
        token: Optional[str] = TOKEN_OPTION,
        fmt: Optional[str] = FORMAT_OPTION,
        verbose: bool = VERBOSE_OPTION,
    ) -> None:
        """Clone (or list) all gists owned by a user."""
        run_listing(
            ListingKind.gists,
            username,
            directory,
            action=_pick_action(list_, xlist, raw_json, fields),
            ssh=ssh,
            dry_run=dry_run,
            overrides={
                "grouping_mode": group,
                "max_leaf_length": max_length,
                "allow_spaces_in_leaf": allow_spaces,
                "allow_dots_in_leaf": allow_dots,
            },
            token=token,
            fmt=fmt,
            verbose=verbose,
        )


def run_listing(
    kind: ListingKind,
    username: str | None,
    directory: str | None,
    *,
    action: Action,
    ssh: bool = False,
    dry_run: bool = False,
    overrides: dict | None = None,
    token: str | None = None,
    fmt: str | None = None,
    verbose: bool = False,
) -> None:
    configure_logging(verbose)
    username, token = resolve_identity(username, token)
    if not username and not token:
        error("missing USERNAME parameter")
        raise typer.Exit(1)

    try:
        config = PlacementConfig.from_settings(
            load_global_config(),
            base_directory=directory,
            username=username,
            credential=token,
            **(overrides or {}),
        )
    except ValidationError as e:
        error(f"Invalid configuration: {e}")
        raise typer.Exit(1)

    listing = GitHubListing(ListingRequest(kind=kind, username=username, token=token))
    try:
        check_supported(config)
        if action is Action.json:
            for chunk in listing.stream():
                typer.echo(chunk, nl=False)
        elif action is Action.fields:
            _print_fields(listing)
        elif action is Action.list:
            _print_list(kind, iter_records(listing.stream(), kind, config), fmt)
        elif action is Action.xlist:
            _print_details(iter_records(listing.stream(), kind, config), fmt)
        else:
            _clone_all(kind, listing, config, ssh=ssh, dry_run=dry_run)
    except ClonatorError as e:
        error(str(e))
        raise typer.Exit(1)


def _pick_action(list_: bool, xlist: bool, raw_json: bool, fields: bool) -> Action:
    if raw_json:
        return Action.json
    if fields:
        return Action.fields
    if xlist:
        return Action.xlist
    if list_:
        return Action.list
    return Action.clone


def _clone_all(
    kind: ListingKind,
    listing: GitHubListing,
    config: PlacementConfig,
    *,
    ssh: bool,
    dry_run: bool,
) -> None:
    if config.base_directory and not dry_run:
        root = config.base_directory.rstrip("/") or "/"
        if Path(root).exists():
            error(f"directory '{root}' already exists")
            raise typer.Exit(1)

    cloner = GitCloner(use_ssh=ssh, dry_run=dry_run, echo=typer.echo)
    failed: list[Record] = []

    def clone(record: Record) -> None:
        try:
            cloner.clone(record)
        except CloneError as e:
            error(str(e))
            failed.append(record)

    count = for_each_record(listing.stream(), kind, config, clone)
    if dry_run:
        return
    info(f"{count - len(failed)} {kind.value} cloned")
    if failed:
        error(f"{len(failed)} of {count} {kind.value} could not be cloned")
        raise typer.Exit(1)


def _print_fields(listing: GitHubListing) -> None:
    for token in extract_fields(listing.stream()):
        if token is END_OF_OBJECT:
            typer.echo("}")
        else:
            typer.echo(f"{token.name} = {token.raw}")


def _list_row(record: Record) -> dict[str, str]:
    if isinstance(record, RepoRecord):
        return {
            "index": str(record.index),
            "vis": _VISIBILITY_CHAR[record.visibility],
            "name": record.name,
            "description": record.description or "-",
        }
    return {
        "index": str(record.index),
        "vis": "." if record.public else "#",
        "description": record.description or record.html_url,
    }


def _print_list(kind: ListingKind, records, fmt: str | None) -> None:
    if resolve_format(fmt) == "json":
        output([r.model_dump(mode="json") for r in records], fmt="json")
        return
    columns = ["index", "vis", "name", "description"]
    if kind is ListingKind.gists:
        columns = ["index", "vis", "description"]
    output_table([_list_row(r) for r in records], columns, fmt="text")


def _detail_lines(record: Record) -> list[str]:
    if isinstance(record, GistRecord):
        return [
            f"{record.index}:{record.description or record.html_url}",
            f"    owner     : {record.owner or ''}",
            f"    public    : {'true' if record.public else 'false'}",
            f"    webpage   : {record.html_url}",
            f"    git url   : {record.git_pull_url}",
            f"    ssh url   : {record.ssh_url}",
            f"    directory : {record.directory}",
        ]
    return [
        f"{record.index}:{record.name}",
        f"    owner     : {record.owner or ''}",
        f"    directory : {record.directory}",
        f"    descript  : {record.description if record.description is not None else ''}",
        f"    visibility: {record.visibility.value}",
        f"    group     : {record.group_tag or ''}",
        f"    webpage   : {record.html_url}",
        f"    git url   : {record.clone_url}",
        f"    ssh url   : {record.ssh_url}",
    ]


def _print_details(records, fmt: str | None) -> None:
    if resolve_format(fmt) == "json":
        output([r.model_dump(mode="json") for r in records], fmt="json")
        return
    for record in records:
        for line in _detail_lines(record):
            console.print(escape(line), highlight=False)
        console.print()
