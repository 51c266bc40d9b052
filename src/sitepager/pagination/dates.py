"""Date resolution for index records."""

from __future__ import annotations

from datetime import date, datetime, timezone
from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING, Any, Iterable

from sitepager.collection.models import MISSING

if TYPE_CHECKING:
    from .selector import SelectedFile

_DATE_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y/%m/%d", "%b %d, %Y", "%B %d, %Y", "%d %b %Y", "%d %B %Y")


def coerce_date(value: Any) -> datetime | None:
    """Return ``value`` as a datetime when it is a date or a parseable date string."""
    if value is MISSING or value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError):
        return None


def find_most_recent_date(
    entries: Iterable[SelectedFile],
    sort_by: str,
    *,
    now: datetime | None = None,
) -> datetime:
    """Return the first resolvable ``sort_by`` date among ``entries``.

    Entries are scanned in page order, so for a newest-first listing this is
    the most recent date on the page. Falls back to ``now`` (or the current
    UTC time) when no entry carries a usable date.
    """
    for entry in entries:
        resolved = coerce_date(entry.field(sort_by))
        if resolved is not None:
            return resolved
    return now or datetime.now(timezone.utc)


__all__ = ["coerce_date", "find_most_recent_date"]
