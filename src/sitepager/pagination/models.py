"""Pagination plan data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class PageLinks(BaseModel):
    """Navigation URLs for one page; ``None`` where no such page exists."""

    first: Optional[str] = None
    last: Optional[str] = None
    next: Optional[str] = None
    previous: Optional[str] = None


class PaginationMetadata(BaseModel):
    """Pagination block attached to index records.

    Attributes:
        name: Paginated directory.
        num: 1-based page number.
        pages: Total number of pages.
        files: File details for the entries on this page.
        next: URL of the following page.
        previous: URL of the preceding page.
        first: URL of the first page.
        last: URL of the last page.
    """

    name: str
    num: int
    pages: int
    files: List[Dict[str, Any]] = Field(default_factory=list)
    next: Optional[str] = None
    previous: Optional[str] = None
    first: Optional[str] = None
    last: Optional[str] = None


class MoveOperation(BaseModel):
    """Relocation of one selected entry.

    Attributes:
        source: Collection key before the move.
        destination: Collection key after the move.
        page_number: Page the entry lands on.
        record: Record stored under ``destination``.
    """

    source: str
    destination: str
    page_number: int
    record: Dict[str, Any]


class IndexPage(BaseModel):
    """Generated index record for pages 2..N."""

    path: str
    page_number: int
    record: Dict[str, Any]


class FirstPageUpdate(BaseModel):
    """Fields merged into the pre-existing first index record."""

    target: str
    pagination: PaginationMetadata
    page_files: List[Dict[str, Any]] = Field(default_factory=list)
    date: datetime


class PaginationPlan(BaseModel):
    """Everything a pass will change, derived before the collection is touched."""

    total_pages: int = 0
    moves: List[MoveOperation] = Field(default_factory=list)
    index_pages: List[IndexPage] = Field(default_factory=list)
    first_page: Optional[FirstPageUpdate] = None
    notes: List[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.moves


@dataclass(slots=True)
class PaginationResult:
    """Outcome of a pagination pass.

    Attributes:
        ok: Whether the pass completed.
        error: Failure surfaced to the host when ``ok`` is false.
        total_pages: Number of pages produced.
        moved: Mapping of original keys to their new keys.
        created: Keys of generated index records.
        updated: Key of the first index record when it received pagination data.
        notes: Informational messages collected while planning.
    """

    ok: bool
    error: Exception | None = None
    total_pages: int = 0
    moved: dict[str, str] = field(default_factory=dict)
    created: list[str] = field(default_factory=list)
    updated: str | None = None
    notes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: Exception) -> "PaginationResult":
        return cls(ok=False, error=error)
