"""gh-clonator: organize a GitHub account's repositories and gists on disk."""

__version__ = "0.2.0"
