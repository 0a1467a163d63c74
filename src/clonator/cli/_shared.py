"""Shared CLI options and helpers to avoid circular imports."""

from __future__ import annotations

import typer

from clonator.sources.github import looks_like_token

FORMAT_OPTION = typer.Option(None, "--format", "-F", help="Output format: json or text")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-V", help="Print debug logs to stderr")
TOKEN_OPTION = typer.Option(
    None, "--token", envvar="GITHUB_TOKEN", help="Personal access token (private items)"
)


def resolve_identity(username: str | None, token: str | None) -> tuple[str, str]:
    """Split the USERNAME argument and --token into (username, token).

    A USERNAME that looks like a personal access token is used as the token.
    """
    username = username or ""
    token = token or ""
    if username and looks_like_token(username):
        return "", username
    return username, token
