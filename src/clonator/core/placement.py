"""Local path computation: root, group segment and leaf name.

Repository leaves are the repository name as-is (GitHub already restricts
repo names to filesystem-safe characters). Gist leaves come from free-text
descriptions, so they are sanitized, truncated, and replaced by the tail of
the gist URL when too little of the description survives.
"""

from __future__ import annotations

import re
import string

from clonator.core.errors import UnsupportedFeature
from clonator.core.schema import GroupingMode, PlacementConfig
from clonator.core.tags import is_safe_segment
from clonator.core.urls import strip_scheme

DEFAULT_ROOT = "./GitHub/"

# Sanitized leaves with fewer alphanumerics than this fall back to the URL
MIN_LEAF_ALNUM = 5

_ASCII_ALNUM = frozenset(string.ascii_letters + string.digits)


def select_root(config: PlacementConfig, owner: str | None = None) -> str:
    """Pick the root directory, always with a single trailing slash."""
    if config.base_directory:
        return config.base_directory.rstrip("/") + "/"
    if config.credential and owner:
        return f"./{owner.rstrip('/')}/"
    if config.username:
        return f"./{config.username.rstrip('/')}/"
    return DEFAULT_ROOT


def group_segment(config: PlacementConfig, group_tag: str | None) -> str:
    mode = config.grouping_mode
    if mode is GroupingMode.by_list:
        raise UnsupportedFeature("group by stars list isn't implemented yet")
    if mode is GroupingMode.by_topic and group_tag and is_safe_segment(group_tag):
        return f"{group_tag}/"
    return ""


def sanitize_leaf(text: str, config: PlacementConfig) -> str:
    """Replace disallowed characters with '_' and apply the length limit."""
    allowed = "A-Za-z0-9"
    if config.allow_spaces_in_leaf:
        allowed += " "
    if config.allow_dots_in_leaf:
        allowed += r"\."
    leaf = re.sub(f"[^{allowed}]", "_", text)
    if config.max_leaf_length > 0:
        leaf = leaf[: config.max_leaf_length]
    return leaf


def count_alnum(text: str) -> int:
    return sum(1 for ch in text if ch in _ASCII_ALNUM)


def url_leaf(url: str, config: PlacementConfig) -> str:
    """Build a leaf from a web URL: drop scheme and host, sanitize the rest."""
    host_and_path = strip_scheme(url).strip("/")
    _, _, path = host_and_path.partition("/")
    return sanitize_leaf(path or host_and_path, config)


def build_local_path(
    config: PlacementConfig,
    owner: str | None,
    group_tag: str | None,
    leaf: str,
    fallback_url: str | None = None,
) -> str:
    """Compute ``root/[group/]leaf`` for one record.

    Passing ``fallback_url`` marks ``leaf`` as free text (gist descriptions):
    it is sanitized, and swapped for the URL-derived leaf when it keeps fewer
    than MIN_LEAF_ALNUM alphanumeric characters.
    """
    segment = group_segment(config, group_tag)
    if fallback_url is not None:
        leaf = sanitize_leaf(leaf, config)
        if count_alnum(leaf) < MIN_LEAF_ALNUM:
            leaf = url_leaf(fallback_url, config)
    return f"{select_root(config, owner)}{segment}{leaf}"
