"""Path rewriting and clean-URL helpers."""

from __future__ import annotations

import logging
import re

LOGGER = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".html"
INDEX_SUFFIX = "/index.html"

_EXTENSION_PATTERN = re.compile(r"\.[^/.]+$")
_PAGE_EXTENSION_PATTERN = re.compile(r"\.(md|html)$")
_REPEATED_SLASHES = re.compile(r"/{2,}")


def split_filename(path: str) -> tuple[str, str]:
    """Return the final segment of ``path`` split into basename and extension.

    The extension includes its dot and falls back to ``.html`` when the
    filename has none.
    """
    filename = path.rsplit("/", 1)[-1]
    match = _EXTENSION_PATTERN.search(filename)
    if match is None:
        return filename, DEFAULT_EXTENSION
    return filename[: match.start()], match.group(0)


def rewrite_item_path(path: str, directory: str) -> str:
    """Return the per-item location ``directory/<basename>/index<ext>`` for ``path``."""
    basename, extension = split_filename(path)
    if basename == "index":
        LOGGER.warning(
            "Entry %s is named index; it will be nested under %s/index/", path, directory
        )
    return f"{directory}/{basename}/index{extension}"


def collapse_slashes(url: str | None) -> str | None:
    """Collapse runs of ``/`` into one; ``None`` passes through."""
    if not url:
        return None
    return _REPEATED_SLASHES.sub("/", url)


def clean_url(path: str) -> str:
    """Normalize a site path into a clean URL.

    ``.../index.html`` becomes ``.../``, ``.md``/``.html`` suffixes are dropped,
    a leading slash is enforced and a trailing slash removed (except for ``/``).
    """
    if path.endswith(INDEX_SUFFIX):
        directory = path[: -len("index.html")]
        return directory if directory.startswith("/") else f"/{directory}"

    path = _PAGE_EXTENSION_PATTERN.sub("", path)
    if not path.startswith("/"):
        path = f"/{path}"
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]
    return path


def detail_path(new_path: str) -> str:
    """Return the URL reported for a relocated entry in pagination metadata."""
    cleaned = clean_url(new_path)
    if cleaned.endswith("/index"):
        cleaned = cleaned[: -len("index")]
    return cleaned


__all__ = [
    "DEFAULT_EXTENSION",
    "split_filename",
    "rewrite_item_path",
    "collapse_slashes",
    "clean_url",
    "detail_path",
]
