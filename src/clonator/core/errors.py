"""Exception hierarchy shared by the pipeline stages."""

from __future__ import annotations


class ClonatorError(Exception):
    """Base class for every error the tool reports to the user."""


class UpstreamReadError(ClonatorError):
    """Raised when the listing stream cannot be read at all."""


class UnsupportedFeature(ClonatorError):
    """Raised for recognized configuration values that are not implemented."""
