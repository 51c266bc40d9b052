"""Selection and ordering of the entries to paginate."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timezone
from typing import Any, Mapping

from sitepager.collection.models import MISSING, FileRecord, lookup_field
from sitepager.config.models import PaginationOptions

from .dates import coerce_date
from .errors import PaginationError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SelectedFile:
    """A collection entry captured before any mutation.

    Attributes:
        path: Collection key of the entry.
        record: Record stored under ``path``.
    """

    path: str
    record: FileRecord

    def field(self, name: str) -> Any:
        """Return the dotted field ``name`` or ``MISSING``."""
        return lookup_field(self.record, name)


def select_files(files: Mapping[str, FileRecord], options: PaginationOptions) -> list[SelectedFile]:
    """Return the entries under ``options.directory`` ordered by ``options.sort_by``.

    Entries without a usable sort value are treated as least recent: they
    trail a newest-first listing and lead an oldest-first one. An explicit
    ``None`` counts as no value, the same as an absent field. Dates, datetimes
    and date strings are compared as UTC datetimes (naive values are taken
    as UTC), so date-only and timestamped front matter sort together. The
    sort is stable, so ties keep their collection order.

    Args:
        files: File collection to select from.
        options: Pagination options for the pass.

    Returns:
        list[SelectedFile]: Ordered selection; empty when nothing matches.

    Raises:
        PaginationError: If the sort values cannot be compared with each other.
    """
    prefix = f"{options.directory}/"
    selected = [
        SelectedFile(path, record) for path, record in files.items() if path.startswith(prefix)
    ]
    LOGGER.debug("Found %d files in directory %s", len(selected), options.directory)
    if not selected:
        return []

    dated: list[tuple[Any, SelectedFile]] = []
    undated: list[SelectedFile] = []
    for entry in selected:
        value = entry.field(options.sort_by)
        if value is MISSING or value is None:
            undated.append(entry)
        else:
            dated.append((_sort_key(value), entry))

    try:
        dated.sort(key=lambda pair: pair[0], reverse=options.reverse)
    except TypeError as exc:
        raise PaginationError(
            f"Cannot order {options.directory!r} entries by {options.sort_by!r}: {exc}"
        ) from exc

    ordered = [entry for _, entry in dated]
    ordered = ordered + undated if options.reverse else undated + ordered
    LOGGER.debug(
        "Files sorted by %s in %s order",
        options.sort_by,
        "descending" if options.reverse else "ascending",
    )
    return ordered


def _sort_key(value: Any) -> Any:
    if not isinstance(value, (date, str)):
        return value
    resolved = coerce_date(value)
    if resolved is None:
        return value
    if resolved.tzinfo is None:
        return resolved.replace(tzinfo=timezone.utc)
    return resolved


__all__ = ["SelectedFile", "select_files"]
