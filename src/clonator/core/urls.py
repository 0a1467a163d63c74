"""Clone URL helpers: credential embedding and SSH URL derivation."""

from __future__ import annotations

import re

from clonator.core.schema import Visibility

_SCHEME_RE = re.compile(r"^.*?://")


def embed_credential(url: str, user: str, password: str = "") -> str:
    """Insert ``user[:password]@`` right after the scheme separator."""
    if not user:
        return url
    userinfo = f"{user}:{password}" if password else user
    return url.replace("://", f"://{userinfo}@", 1)


def rewrite_clone_url(
    clone_url: str,
    visibility: Visibility | str | None,
    credential: str = "",
    secret: str = "",
) -> str:
    """Return the URL to clone from; private repos get the credential embedded."""
    if visibility != Visibility.private or not credential:
        return clone_url
    return embed_credential(clone_url, credential, secret)


def ssh_url_from_pull_url(url: str) -> str:
    """Convert ``https://host/path`` into ``git@host:path``."""
    return _SCHEME_RE.sub("git@", url, count=1).replace("/", ":", 1)


def strip_scheme(url: str) -> str:
    return _SCHEME_RE.sub("", url, count=1)
