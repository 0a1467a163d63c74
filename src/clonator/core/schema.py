"""Pydantic v2 models for records and placement configuration."""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, Field


class ListingKind(str, Enum):
    repos = "repos"
    gists = "gists"


class Visibility(str, Enum):
    public = "public"
    private = "private"
    internal = "internal"


class GroupingMode(str, Enum):
    by_topic = "by-topic"
    by_list = "by-list"
    none = "none"


# -- Configuration --


class PlacementConfig(BaseModel):
    """Everything the placement engine needs to compute local paths."""

    base_directory: str = ""
    grouping_mode: GroupingMode = GroupingMode.by_topic
    max_leaf_length: int = Field(default=64, ge=0)  # 0 = no limit
    allow_spaces_in_leaf: bool = False
    allow_dots_in_leaf: bool = False
    username: str = ""
    credential: str = ""
    secret: str = ""

    @classmethod
    def from_settings(cls, settings: dict[str, Any], **overrides: Any) -> PlacementConfig:
        """Merge persisted settings with explicit overrides (None = not given)."""
        values = {k: v for k, v in settings.items() if k in cls.model_fields}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


# -- Records --


class RepoRecord(BaseModel):
    index: int
    name: str
    owner: str | None = None
    description: str | None = None  # None when the listing had JSON null
    visibility: Visibility = Visibility.public
    html_url: str = ""
    clone_url: str
    ssh_url: str
    group_tag: str | None = None
    directory: str

    def clone_source(self, use_ssh: bool = False) -> str:
        return self.ssh_url if use_ssh else self.clone_url


class GistRecord(BaseModel):
    index: int
    owner: str | None = None
    description: str | None = None
    public: bool = True
    html_url: str
    git_pull_url: str
    ssh_url: str
    group_tag: str | None = None
    directory: str

    def clone_source(self, use_ssh: bool = False) -> str:
        return self.ssh_url if use_ssh else self.git_pull_url


Record = Union[RepoRecord, GistRecord]
