"""Group tag resolution from descriptions and topics.

A repository is grouped when its description contains a bracketed token
such as ``[group:Tools]`` / ``[group-tools]``, or when one of its topics is
``group-tools`` / ``group:tools``. The description wins over topics.
"""

from __future__ import annotations

import logging
import re
import string
from typing import Iterable

logger = logging.getLogger(__name__)

DESCRIPTION_TAG_RE = re.compile(r"\[group[-:][^\]]+\]")
TOPIC_TAG_RE = re.compile(r"^group[-:](.+)")

_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)
_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

_UNSAFE_SEGMENTS = frozenset({".", ".."})


def capitalize_tag(tag: str) -> str:
    """Uppercase the first character and lowercase the rest (ASCII only)."""
    return tag[:1].translate(_UPPER) + tag[1:].translate(_LOWER)


def tag_from_description(description: str | None) -> str | None:
    if not description:
        return None
    m = DESCRIPTION_TAG_RE.search(description)
    if not m:
        return None
    # "[group:xxx]" -> "xxx"
    return m.group(0)[len("[group:") : -1]


def tag_from_topics(topics: Iterable[str]) -> str | None:
    for topic in topics:
        m = TOPIC_TAG_RE.match(topic)
        if m:
            return m.group(1)
    return None


def is_safe_segment(tag: str) -> bool:
    """A tag must name exactly one directory below the root."""
    return "/" not in tag and "\\" not in tag and tag.strip() not in _UNSAFE_SEGMENTS


def resolve_group_tag(description: str | None, topics: Iterable[str] = ()) -> str | None:
    """Return the capitalized group tag, or None when the item is ungrouped.

    Tags that are not a single path segment are ignored.
    """
    raw = tag_from_description(description) or tag_from_topics(topics)
    if not raw:
        return None
    if not is_safe_segment(raw):
        logger.debug("Ignoring group tag %r: not a single directory name", raw)
        return None
    return capitalize_tag(raw)
