"""Planner for pagination passes.

Record fields written by a pass keep the camelCase names site templates read:
``pageFiles``, ``originalPath``, ``pageNumber`` and ``totalPages``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence

from sitepager.collection.models import CONTENTS_KEY, FileRecord
from sitepager.config.models import PaginationOptions

from .chunker import chunk
from .dates import find_most_recent_date
from .models import (
    FirstPageUpdate,
    IndexPage,
    MoveOperation,
    PageLinks,
    PaginationMetadata,
    PaginationPlan,
)
from .paths import INDEX_SUFFIX, detail_path, rewrite_item_path
from .selector import SelectedFile, select_files
from .urls import generate_pagination_urls, resolve_pattern

LOGGER = logging.getLogger(__name__)


class PaginationPlanner:
    """Derive a pagination plan from a read-only view of the collection."""

    def build_plan(
        self,
        files: Mapping[str, FileRecord],
        options: PaginationOptions,
        *,
        metadata: Optional[Mapping[str, Any]] = None,
        now: Optional[datetime] = None,
    ) -> PaginationPlan:
        """Produce the plan for one pass without touching ``files``.

        Args:
            files: File collection as handed in by the host.
            options: Validated pagination options.
            metadata: Global site metadata merged into generated index records.
            now: Timestamp used for synthetic stats and date fallbacks.

        Returns:
            PaginationPlan: Moves, generated index pages and the first-page update.
            The plan is empty when no entry lives under ``options.directory``.
        """

        selection = select_files(files, options)
        if not selection:
            LOGGER.debug("No files found in directory %s, skipping pagination", options.directory)
            return PaginationPlan(notes=[f"No files found under {options.directory}/."])

        timestamp = now or datetime.now(timezone.utc)
        pages = chunk(selection, options.per_page)
        total_pages = len(pages)
        LOGGER.debug("Created %d pages with %d items per page", total_pages, options.per_page)

        plan = PaginationPlan(total_pages=total_pages)
        claimed: set[str] = set()

        for page_number, entries in enumerate(pages[1:], start=2):
            details = self._plan_moves(plan, entries, page_number, total_pages, options, claimed)
            plan.index_pages.append(
                self._build_index_page(
                    entries, details, page_number, total_pages, options, metadata, timestamp
                )
            )
            claimed.add(plan.index_pages[-1].path)

        details = self._plan_moves(plan, pages[0], 1, total_pages, options, claimed)
        plan.first_page = self._build_first_page(
            files, selection, pages[0], details, total_pages, options, timestamp, plan
        )
        return plan

    # ------------------------------------------------------------------ #
    # Helpers                                                            #
    # ------------------------------------------------------------------ #

    def _plan_moves(
        self,
        plan: PaginationPlan,
        entries: Sequence[SelectedFile],
        page_number: int,
        total_pages: int,
        options: PaginationOptions,
        claimed: set[str],
    ) -> list[dict[str, Any]]:
        details: list[dict[str, Any]] = []
        for entry in entries:
            destination = rewrite_item_path(entry.path, options.directory)
            if destination in claimed:
                message = f"{entry.path}: {destination} is already taken and will be overwritten."
                LOGGER.warning(message)
                plan.notes.append(message)
            claimed.add(destination)

            record = dict(entry.record)
            record.update(
                originalPath=entry.path,
                pageNumber=page_number,
                totalPages=total_pages,
            )
            plan.moves.append(
                MoveOperation(
                    source=entry.path,
                    destination=destination,
                    page_number=page_number,
                    record=record,
                )
            )
            details.append(self._build_file_detail(entry, destination))
        return details

    def _build_file_detail(self, entry: SelectedFile, destination: str) -> dict[str, Any]:
        detail = {key: value for key, value in entry.record.items() if key != CONTENTS_KEY}
        detail["path"] = detail_path(destination)
        return detail

    def _links(self, page_number: int, total_pages: int, options: PaginationOptions) -> PageLinks:
        links = generate_pagination_urls(
            options.directory,
            options.output_dir,
            page_number,
            total_pages,
            options.use_permalinks,
        )
        LOGGER.debug(
            "Pagination URLs for page %d: first=%s, prev=%s, next=%s, last=%s",
            page_number,
            links.first,
            links.previous,
            links.next,
            links.last,
        )
        return links

    def _build_index_page(
        self,
        entries: Sequence[SelectedFile],
        details: list[dict[str, Any]],
        page_number: int,
        total_pages: int,
        options: PaginationOptions,
        metadata: Optional[Mapping[str, Any]],
        timestamp: datetime,
    ) -> IndexPage:
        page_path = resolve_pattern(options.output_dir, options.directory, page_number)
        index_path = page_path.rstrip("/") + INDEX_SUFFIX
        links = self._links(page_number, total_pages, options)
        pagination = PaginationMetadata(
            name=options.directory,
            num=page_number,
            pages=total_pages,
            files=details,
            **links.model_dump(),
        )

        record: dict[str, Any] = dict(metadata or {})
        record.update(
            pagination=pagination.model_dump(),
            pageFiles=details,
            date=find_most_recent_date(entries, options.sort_by, now=timestamp),
            stats={
                "atime": timestamp,
                "mtime": timestamp,
                "ctime": timestamp,
                "birthtime": timestamp,
            },
            layout=options.index_layout,
        )
        record[CONTENTS_KEY] = b""
        return IndexPage(path=index_path, page_number=page_number, record=record)

    def _build_first_page(
        self,
        files: Mapping[str, FileRecord],
        selection: Sequence[SelectedFile],
        entries: Sequence[SelectedFile],
        details: list[dict[str, Any]],
        total_pages: int,
        options: PaginationOptions,
        timestamp: datetime,
        plan: PaginationPlan,
    ) -> FirstPageUpdate | None:
        target = options.first_index_file
        relocated = {entry.path for entry in selection}
        if target in relocated:
            message = (
                f"First page file {target} is relocated with {options.directory}/; "
                "pagination data not attached."
            )
            LOGGER.warning(message)
            plan.notes.append(message)
            return None
        if target not in files:
            message = f"First page file {target} does not exist; pagination data not attached."
            LOGGER.debug(message)
            plan.notes.append(message)
            return None

        links = self._links(1, total_pages, options)
        pagination = PaginationMetadata(
            name=options.directory,
            num=1,
            pages=total_pages,
            files=details,
            next=links.next,
            previous=None,
            first=links.first,
            last=links.last,
        )
        return FirstPageUpdate(
            target=target,
            pagination=pagination,
            page_files=details,
            date=find_most_recent_date(entries, options.sort_by, now=timestamp),
        )


__all__ = ["PaginationPlanner"]
