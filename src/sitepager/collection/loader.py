"""Build file collections and site metadata from disk."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from .discovery import DirectoryScanner
from .errors import CollectionError
from .frontmatter import FRONT_MATTER_SUFFIXES, split_front_matter
from .models import CONTENTS_KEY, FileCollection, FileRecord

LOGGER = logging.getLogger(__name__)

_DATA_SUFFIXES = (".json", ".yaml", ".yml")


class CollectionLoader:
    """Read a source tree into a file collection keyed by POSIX relative path."""

    def __init__(self, scanner: DirectoryScanner | None = None) -> None:
        self.scanner = scanner or DirectoryScanner()

    def load(self, root: Path) -> FileCollection:
        """Return a collection for every file the scanner finds under ``root``.

        Files with a page suffix (``.md``, ``.html``...) have their YAML front
        matter lifted into record fields; the remaining body becomes
        ``contents``. Every record also receives filesystem ``stats``.

        Raises:
            CollectionError: If ``root`` is not a directory or a file cannot be read.
        """
        root = root.expanduser().resolve()
        if not root.is_dir():
            raise CollectionError(f"Source directory does not exist: {root}")

        files: FileCollection = {}
        for relative in self.scanner.scan(root):
            key = relative.as_posix()
            files[key] = self._read_record(root / relative, key)
        LOGGER.debug("Loaded %d files from %s", len(files), root)
        return files

    def _read_record(self, path: Path, key: str) -> FileRecord:
        try:
            raw = path.read_bytes()
            stat = path.stat()
        except OSError as exc:
            raise CollectionError(f"{key}: {exc}") from exc

        record: FileRecord = {}
        contents = raw
        if path.suffix.lower() in FRONT_MATTER_SUFFIXES:
            try:
                text = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise CollectionError(f"{key}: not valid UTF-8: {exc}") from exc
            fields, body = split_front_matter(text, source=key)
            record.update(fields)
            contents = body.encode("utf-8")

        record[CONTENTS_KEY] = contents
        record.setdefault(
            "stats",
            {
                "atime": datetime.fromtimestamp(stat.st_atime, tz=timezone.utc),
                "mtime": datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                "ctime": datetime.fromtimestamp(stat.st_ctime, tz=timezone.utc),
                "size": stat.st_size,
            },
        )
        return record


def load_site_metadata(data_dir: Path) -> dict[str, Any]:
    """Return every JSON/YAML document in ``data_dir`` keyed by file stem.

    ``data/site.json`` and ``data/social.yaml`` become
    ``{"site": {...}, "social": {...}}``.

    Raises:
        CollectionError: If a data file cannot be parsed.
    """
    data_dir = data_dir.expanduser()
    if not data_dir.is_dir():
        raise CollectionError(f"Data directory does not exist: {data_dir}")

    metadata: dict[str, Any] = {}
    for path in sorted(data_dir.iterdir()):
        if not path.is_file() or path.suffix.lower() not in _DATA_SUFFIXES:
            continue
        text = path.read_text(encoding="utf-8")
        try:
            if path.suffix.lower() == ".json":
                metadata[path.stem] = json.loads(text)
            else:
                metadata[path.stem] = yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise CollectionError(f"Invalid data file {path.name}: {exc}") from exc
    return metadata
