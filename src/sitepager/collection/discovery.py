"""Source file discovery utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator


def _is_hidden(path: Path) -> bool:
    return any(part.startswith(".") for part in path.parts if part not in (".", ".."))


class DirectoryScanner:
    """Discover source files beneath a root directory."""

    def __init__(self, *, recursive: bool = True, include_hidden: bool = False) -> None:
        self.recursive = recursive
        self.include_hidden = include_hidden

    def scan(self, root: Path) -> Iterator[Path]:
        """Yield files under root as paths relative to it, in sorted order."""
        root = root.expanduser().resolve()
        if not root.is_dir():
            return

        for path in sorted(self._iter_paths(root)):
            if not path.is_file():
                continue
            relative = path.relative_to(root)
            if not self.include_hidden and _is_hidden(relative):
                continue
            yield relative

    def _iter_paths(self, root: Path) -> Iterable[Path]:
        if self.recursive:
            yield from root.rglob("*")
        else:
            yield from root.iterdir()
