"""Wire the stages: chunks -> fields -> records -> consumer callback."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator

from clonator.core.errors import UnsupportedFeature
from clonator.core.extract import extract_fields
from clonator.core.records import assembler_for
from clonator.core.scanner import Chunk
from clonator.core.schema import GroupingMode, ListingKind, PlacementConfig, Record

logger = logging.getLogger(__name__)


def check_supported(config: PlacementConfig) -> None:
    """Reject recognized-but-unimplemented settings before any work starts."""
    if config.grouping_mode is GroupingMode.by_list:
        raise UnsupportedFeature("group by stars list isn't implemented yet")


def iter_records(
    chunks: Iterable[Chunk], kind: ListingKind, config: PlacementConfig
) -> Iterator[Record]:
    """Validate the config eagerly, then return a lazy record iterator."""
    check_supported(config)
    return assembler_for(kind, config).assemble(extract_fields(chunks))


def for_each_record(
    chunks: Iterable[Chunk],
    kind: ListingKind,
    config: PlacementConfig,
    callback: Callable[[Record], object],
) -> int:
    """Call ``callback`` once per record, in listing order. Returns the count."""
    count = 0
    for record in iter_records(chunks, kind, config):
        callback(record)
        count += 1
    logger.debug("Processed %d %s", count, ListingKind(kind).value)
    return count
