"""Lenient, event-based JSON scanner.

Understands just enough JSON to follow GitHub listing responses: objects,
arrays, strings and bare literals (numbers, booleans, null). The document is
never materialized; callers get a flat stream of events tagged with the
object nesting depth and the member name each event is bound to.

Input that does not fit the grammar is skipped instead of reported, so a
truncated or noisy response degrades to fewer events. The only error raised
is UpstreamReadError, when the chunk source itself fails.
"""

from __future__ import annotations

import codecs
import json
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Union

from clonator.core.errors import UpstreamReadError

Chunk = Union[str, bytes]

_STRUCTURAL = frozenset("{}[]:,")
_WHITESPACE = frozenset(" \t\r\n")


class EventKind(str, Enum):
    START_OBJECT = "start_object"
    END_OBJECT = "end_object"
    START_ARRAY = "start_array"
    END_ARRAY = "end_array"
    VALUE = "value"


@dataclass(frozen=True)
class Event:
    """A single scanner event.

    For START_OBJECT/END_OBJECT, ``depth`` is the depth of the object itself
    (1 for the elements of a top-level array).
    """

    kind: EventKind
    depth: int
    key: str | None = None  # member name the node is bound to, None inside arrays
    parent: str | None = None  # member name of the innermost enclosing container
    raw: str | None = None  # token text, VALUE events only


@dataclass
class _Frame:
    is_object: bool
    key: str | None
    member: str | None = None  # object frames: name waiting for its value
    awaiting_value: bool = False  # object frames: ':' already seen

    def claim(self) -> str | None:
        """Consume the pending member slot and return its name."""
        if not self.is_object:
            return None
        key = self.member if self.awaiting_value else None
        self.member = None
        self.awaiting_value = False
        return key


def iter_chars(chunks: Iterable[Chunk]) -> Iterator[str]:
    """Flatten text or UTF-8 byte chunks into characters."""
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    source = iter(chunks)
    while True:
        try:
            chunk = next(source)
        except StopIteration:
            break
        except OSError as e:
            raise UpstreamReadError(f"Could not read listing stream: {e}") from e
        if isinstance(chunk, bytes):
            chunk = decoder.decode(chunk)
        yield from chunk
    yield from decoder.decode(b"", final=True)


def tokenize(chunks: Iterable[Chunk]) -> Iterator[str]:
    """Yield structural characters, raw string literals and bare literals.

    String tokens keep their surrounding quotes and escapes. A string cut
    off by the end of the stream is dropped.
    """
    chars = iter_chars(chunks)
    literal: list[str] = []
    for ch in chars:
        if ch == '"':
            if literal:
                yield "".join(literal)
                literal = []
            buf = [ch]
            escaped = False
            for c in chars:
                buf.append(c)
                if escaped:
                    escaped = False
                elif c == "\\":
                    escaped = True
                elif c == '"':
                    break
            else:
                return
            yield "".join(buf)
        elif ch in _STRUCTURAL or ch in _WHITESPACE:
            if literal:
                yield "".join(literal)
                literal = []
            if ch in _STRUCTURAL:
                yield ch
        else:
            literal.append(ch)
    if literal:
        yield "".join(literal)


def decode_string(raw: str) -> str:
    """Decode a raw JSON string token, falling back to stripping the quotes."""
    try:
        value = json.loads(raw)
    except ValueError:
        return raw[1:-1] if len(raw) >= 2 and raw.startswith('"') else raw
    return value if isinstance(value, str) else raw


def scan(chunks: Iterable[Chunk]) -> Iterator[Event]:
    """Turn a chunk stream into scanner events."""
    stack: list[_Frame] = []
    depth = 0

    for token in tokenize(chunks):
        frame = stack[-1] if stack else None
        parent = frame.key if frame else None

        if token == "{" or token == "[":
            key = frame.claim() if frame else None
            if token == "{":
                depth += 1
                stack.append(_Frame(is_object=True, key=key))
                yield Event(EventKind.START_OBJECT, depth, key, parent)
            else:
                stack.append(_Frame(is_object=False, key=key))
                yield Event(EventKind.START_ARRAY, depth, key, parent)

        elif token == "}":
            # Mismatched closers are ignored
            if frame is None or not frame.is_object:
                continue
            stack.pop()
            outer = stack[-1].key if stack else None
            yield Event(EventKind.END_OBJECT, depth, frame.key, outer)
            depth -= 1

        elif token == "]":
            if frame is None or frame.is_object:
                continue
            stack.pop()
            outer = stack[-1].key if stack else None
            yield Event(EventKind.END_ARRAY, depth, frame.key, outer)

        elif token == ":":
            if frame and frame.is_object and frame.member is not None:
                frame.awaiting_value = True

        elif token == ",":
            if frame and frame.is_object:
                frame.member = None
                frame.awaiting_value = False

        elif frame is None:
            # Scalars outside any container carry no fields
            continue

        elif not frame.is_object:
            yield Event(EventKind.VALUE, depth, None, parent, raw=token)

        elif frame.awaiting_value:
            yield Event(EventKind.VALUE, depth, frame.claim(), parent, raw=token)

        elif token.startswith('"'):
            frame.member = decode_string(token)
