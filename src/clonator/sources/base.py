"""Base data structures for listing sources."""

from __future__ import annotations

from dataclasses import dataclass

from clonator.core.schema import ListingKind


@dataclass
class ListingRequest:
    """What to list and on whose behalf."""

    kind: ListingKind
    username: str = ""  # account whose public items are listed
    token: str = ""  # personal access token; lists the token owner's items
