"""Write file collections back to disk."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

import yaml

from .errors import CollectionError
from .frontmatter import FRONT_MATTER_SUFFIXES, render_front_matter
from .models import CONTENTS_KEY, FileRecord


class CollectionWriter:
    """Materialize a file collection beneath a destination directory."""

    def __init__(self, *, omit_fields: tuple[str, ...] = ("stats",)) -> None:
        self.omit_fields = omit_fields

    def write(self, files: Mapping[str, FileRecord], destination: Path) -> list[Path]:
        """Write every record and return the paths written.

        Page files are written with their metadata as YAML front matter so
        downstream renderers see the pagination fields; other files are
        written verbatim.

        Raises:
            CollectionError: If a key escapes ``destination`` or metadata cannot be serialized.
        """
        destination = destination.expanduser().resolve()
        written: list[Path] = []
        for key, record in files.items():
            target = (destination / key).resolve()
            if destination not in target.parents:
                raise CollectionError(f"Refusing to write {key} outside {destination}")
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(self._serialize(key, record, target))
            written.append(target)
        return written

    def _serialize(self, key: str, record: FileRecord, target: Path) -> bytes:
        contents = record.get(CONTENTS_KEY, b"")
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        if target.suffix.lower() not in FRONT_MATTER_SUFFIXES:
            return contents

        fields = {
            name: value
            for name, value in record.items()
            if name != CONTENTS_KEY and name not in self.omit_fields
        }
        try:
            text = render_front_matter(fields, contents.decode("utf-8"))
        except (yaml.YAMLError, UnicodeDecodeError) as exc:
            raise CollectionError(f"{key}: cannot serialize record: {exc}") from exc
        return text.encode("utf-8")
