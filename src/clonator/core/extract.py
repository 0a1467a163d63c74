"""Project scanner events down to the fields the placement engine uses.

The output is a flat token stream: ``Field(name, raw)`` for each interesting
value and ``END_OF_OBJECT`` after each element of the listing. Values are
left raw (quoted strings, bare literals); decoding happens in the assembler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Union

from clonator.core.scanner import Chunk, Event, EventKind, scan
from clonator.core.tags import DESCRIPTION_TAG_RE, TOPIC_TAG_RE

# Scalar fields accepted at each object depth. Depth 1 is a listing element,
# depth 2 its nested owner object.
ACCEPTED_FIELDS: dict[int, frozenset[str]] = {
    1: frozenset(
        {
            "name",
            "description",
            "visibility",
            "public",
            "html_url",
            "clone_url",
            "git_pull_url",
            "ssh_url",
        }
    ),
    2: frozenset({"login"}),
}

# Required enclosing member name for the nested fields
_NESTED_PARENT = {2: "owner"}


@dataclass(frozen=True)
class Field:
    name: str
    raw: str


class _EndOfObject:
    def __repr__(self) -> str:
        return "END_OF_OBJECT"


END_OF_OBJECT = _EndOfObject()

Token = Union[Field, _EndOfObject]


def extract_fields(chunks: Iterable[Chunk]) -> Iterator[Token]:
    """Lazily extract field tokens from a listing stream."""
    for event in scan(chunks):
        if event.kind is EventKind.END_OBJECT:
            if event.depth == 1:
                yield END_OF_OBJECT
        elif event.kind is EventKind.VALUE:
            yield from _project(event)


def _project(event: Event) -> Iterator[Field]:
    raw = event.raw or ""

    if event.key is None:
        if event.depth == 1 and event.parent == "topics" and _is_topic_tag(raw):
            yield Field("topic_tag", raw)
        return

    accepted = ACCEPTED_FIELDS.get(event.depth, frozenset())
    if event.key not in accepted:
        return
    if event.depth in _NESTED_PARENT and event.parent != _NESTED_PARENT[event.depth]:
        return
    if event.depth == 1 and event.parent is not None:
        return

    yield Field(event.key, raw)

    if event.key == "description" and raw.startswith('"'):
        m = DESCRIPTION_TAG_RE.search(raw)
        if m:
            yield Field("description_tag", f'"{m.group(0)}"')


def _is_topic_tag(raw: str) -> bool:
    return raw.startswith('"') and TOPIC_TAG_RE.match(raw[1:-1]) is not None
