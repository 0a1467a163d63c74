"""Assemble field tokens into repository and gist records.

Each listing element is collected into a fresh accumulator that lives only
until its END_OF_OBJECT marker. An element missing its identity fields
produces no record and does not consume an index.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from clonator.core.extract import END_OF_OBJECT, Field, Token
from clonator.core.placement import build_local_path
from clonator.core.scanner import decode_string
from clonator.core.schema import (
    GistRecord,
    ListingKind,
    PlacementConfig,
    Record,
    RepoRecord,
    Visibility,
)
from clonator.core.tags import resolve_group_tag
from clonator.core.urls import rewrite_clone_url, ssh_url_from_pull_url

logger = logging.getLogger(__name__)


@dataclass
class ObjectFields:
    """Raw values gathered for one listing element."""

    values: dict[str, str] = field(default_factory=dict)
    topic_tags: list[str] = field(default_factory=list)

    def add(self, token: Field) -> None:
        if token.name == "topic_tag":
            self.topic_tags.append(decode_string(token.raw))
        else:
            # Last write wins
            self.values[token.name] = token.raw

    def raw(self, name: str) -> str | None:
        return self.values.get(name)

    def text(self, name: str) -> str | None:
        """Decoded string value; None when absent or JSON null."""
        raw = self.values.get(name)
        if raw is None or raw == "null":
            return None
        if raw.startswith('"'):
            return decode_string(raw)
        return raw


def collect_objects(tokens: Iterable[Token]) -> Iterator[ObjectFields]:
    """Group tokens into one ObjectFields per END_OF_OBJECT marker.

    Fields trailing after the last marker (a cut stream) are discarded.
    """
    current = ObjectFields()
    for token in tokens:
        if token is END_OF_OBJECT:
            yield current
            current = ObjectFields()
        elif isinstance(token, Field):
            current.add(token)


class RecordAssembler:
    """Base assembler: numbering and drop policy. Subclasses build records."""

    kind: ListingKind

    def __init__(self, config: PlacementConfig) -> None:
        self.config = config

    def assemble(self, tokens: Iterable[Token]) -> Iterator[Record]:
        index = 0
        for fields in collect_objects(tokens):
            record = self.build(fields, index + 1)
            if record is None:
                logger.debug("Dropped incomplete %s entry: %s", self.kind.value, sorted(fields.values))
                continue
            index += 1
            yield record

    def build(self, fields: ObjectFields, index: int) -> Record | None:
        raise NotImplementedError


class RepoAssembler(RecordAssembler):
    kind = ListingKind.repos

    def build(self, fields: ObjectFields, index: int) -> RepoRecord | None:
        name = fields.text("name")
        clone_url = fields.text("clone_url")
        ssh_url = fields.text("ssh_url")
        if not (name and clone_url and ssh_url):
            return None

        owner = fields.text("login")
        visibility = _parse_visibility(fields.text("visibility"))
        group_tag = resolve_group_tag(fields.text("description_tag"), fields.topic_tags)
        return RepoRecord(
            index=index,
            name=name,
            owner=owner,
            description=fields.text("description"),
            visibility=visibility,
            html_url=fields.text("html_url") or "",
            clone_url=rewrite_clone_url(
                clone_url, visibility, self.config.credential, self.config.secret
            ),
            ssh_url=ssh_url,
            group_tag=group_tag,
            directory=build_local_path(self.config, owner, group_tag, name),
        )


class GistAssembler(RecordAssembler):
    kind = ListingKind.gists

    def build(self, fields: ObjectFields, index: int) -> GistRecord | None:
        html_url = fields.text("html_url")
        git_pull_url = fields.text("git_pull_url")
        if not (html_url and git_pull_url):
            return None

        owner = fields.text("login")
        description = fields.text("description")
        group_tag = resolve_group_tag(fields.text("description_tag"))
        return GistRecord(
            index=index,
            owner=owner,
            description=description,
            public=fields.raw("public") != "false",
            html_url=html_url,
            git_pull_url=git_pull_url,
            ssh_url=ssh_url_from_pull_url(git_pull_url),
            group_tag=group_tag,
            directory=build_local_path(
                self.config, owner, group_tag, description or "", fallback_url=html_url
            ),
        )


_ASSEMBLERS: dict[ListingKind, type[RecordAssembler]] = {
    ListingKind.repos: RepoAssembler,
    ListingKind.gists: GistAssembler,
}


def assembler_for(kind: ListingKind, config: PlacementConfig) -> RecordAssembler:
    return _ASSEMBLERS[ListingKind(kind)](config)


def _parse_visibility(value: str | None) -> Visibility:
    try:
        return Visibility(value) if value else Visibility.public
    except ValueError:
        logger.debug("Unknown visibility %r, treating as public", value)
        return Visibility.public
