"""Shared fixtures: GitHub listing payloads shaped like the REST responses."""

from __future__ import annotations

import json

import pytest

from clonator.core.schema import PlacementConfig


def _repo(
    name: str,
    *,
    owner: str = "alice",
    description: str | None = None,
    visibility: str = "public",
    topics: list[str] | None = None,
    clone: bool = True,
) -> dict:
    """Trimmed-down element of GET /users/{user}/repos."""
    repo = {
        "id": 1296269,
        "name": name,
        "full_name": f"{owner}/{name}",
        "owner": {"login": owner, "id": 1, "type": "User"},
        "private": visibility == "private",
        "html_url": f"https://github.com/{owner}/{name}",
        "description": description,
        "fork": False,
        "ssh_url": f"git@github.com:{owner}/{name}.git",
        "license": {"key": "mit", "name": "MIT License", "spdx_id": "MIT"},
        "topics": topics or [],
        "visibility": visibility,
        "permissions": {"admin": True, "push": True, "pull": True},
        "stargazers_count": 80,
    }
    if clone:
        repo["clone_url"] = f"https://github.com/{owner}/{name}.git"
    return repo


def _gist(
    gist_id: str,
    *,
    owner: str = "alice",
    description: str | None = None,
    public: bool = True,
    pull: bool = True,
) -> dict:
    """Trimmed-down element of GET /users/{user}/gists."""
    gist = {
        "url": f"https://api.github.com/gists/{gist_id}",
        "id": gist_id,
        "html_url": f"https://gist.github.com/{gist_id}",
        "files": {"notes.md": {"filename": "notes.md", "type": "text/markdown", "size": 932}},
        "public": public,
        "description": description,
        "comments": 0,
        "user": None,
        "owner": {"login": owner, "id": 1},
        "truncated": False,
    }
    if pull:
        gist["git_pull_url"] = f"https://gist.github.com/{gist_id}.git"
    return gist


@pytest.fixture
def repo_listing() -> str:
    """Four repos, the third one missing its clone_url."""
    return json.dumps(
        [
            _repo("dotfiles", description="My dotfiles [group:Tools]", topics=["group-other", "shell"]),
            _repo("secret-notes", visibility="private", topics=["group:NOTES"]),
            _repo("ghost", description="no clone url", clone=False),
            _repo("website", description="", visibility="internal"),
        ],
        indent=2,
    )


@pytest.fixture
def gist_listing() -> str:
    """Three gists, the last one missing its git_pull_url."""
    return json.dumps(
        [
            _gist("aa11bb22", description="Bash tricks & tips"),
            _gist("def456", public=False),
            _gist("broken", description="no pull url", pull=False),
        ],
        indent=2,
    )


@pytest.fixture
def config() -> PlacementConfig:
    return PlacementConfig(username="alice")
