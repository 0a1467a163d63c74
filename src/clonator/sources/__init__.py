"""Upstream listing sources.

Sources only stream the raw listing JSON; turning it into records is the
job of clonator.core.
"""

from __future__ import annotations

from clonator.sources.base import ListingRequest

__all__ = ["ListingRequest"]
