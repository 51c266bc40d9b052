"""Shapes shared by the file collection and the pagination core."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Final

FileRecord = Dict[str, Any]
"""Metadata fields of one virtual file plus its ``contents`` payload."""

FileCollection = Dict[str, FileRecord]
"""Virtual path -> record, owned by the host and mutated in place."""

CONTENTS_KEY: Final = "contents"


class _Missing:
    """Marker for a metadata field that is absent from a record."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


def lookup_field(record: Mapping[str, Any], path: str) -> Any:
    """Resolve a dotted field path such as ``meta.date`` against a record.

    Args:
        record: Mapping to resolve against; nested mappings are traversed.
        path: Dot-separated field names.

    Returns:
        Any: The stored value (which may legitimately be ``None``, ``False`` or
        ``0``), or ``MISSING`` when any segment is absent.
    """
    current: Any = record
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return MISSING
        current = current[part]
    return current


__all__ = ["FileRecord", "FileCollection", "CONTENTS_KEY", "MISSING", "lookup_field"]
