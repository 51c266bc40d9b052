"""Split an ordered selection into fixed-size pages."""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

from sitepager.config.exceptions import ConfigError

T = TypeVar("T")


def count_pages(item_count: int, per_page: int) -> int:
    """Return ``ceil(item_count / per_page)``."""
    _check_page_size(per_page)
    return math.ceil(item_count / per_page)


def chunk(items: Sequence[T], per_page: int) -> list[list[T]]:
    """Group ``items`` into consecutive pages of at most ``per_page`` entries.

    Raises:
        ConfigError: If ``per_page`` is not a positive integer.
    """
    _check_page_size(per_page)
    return [list(items[start : start + per_page]) for start in range(0, len(items), per_page)]


def _check_page_size(per_page: int) -> None:
    if isinstance(per_page, bool) or not isinstance(per_page, int) or per_page <= 0:
        raise ConfigError(f"Page size must be a positive integer, got {per_page!r}.")


__all__ = ["chunk", "count_pages"]
