"""Executor for pagination plans."""

from __future__ import annotations

import logging
from typing import MutableMapping

from sitepager.collection.models import FileRecord

from .errors import PaginationError
from .models import MoveOperation, PaginationPlan, PaginationResult

LOGGER = logging.getLogger(__name__)


class PlanExecutor:
    """Apply pagination plans to a file collection in place."""

    def apply(
        self, plan: PaginationPlan, files: MutableMapping[str, FileRecord]
    ) -> PaginationResult:
        """Commit ``plan`` to ``files``.

        Every source key is removed before any destination is written, so a
        destination that coincides with another entry's source survives. Pages
        2..N are committed before the first page, and the first index record
        is updated last.

        Args:
            plan: Plan computed by :class:`PaginationPlanner` for ``files``.
            files: File collection to mutate.

        Returns:
            PaginationResult: Successful result describing the applied changes.

        Raises:
            PaginationError: If the collection no longer matches the plan.
        """

        self._validate(plan, files)
        result = PaginationResult(ok=True, total_pages=plan.total_pages, notes=list(plan.notes))
        if plan.is_empty:
            return result

        for move_op in plan.moves:
            del files[move_op.source]

        later_moves = [move_op for move_op in plan.moves if move_op.page_number > 1]
        first_moves = [move_op for move_op in plan.moves if move_op.page_number == 1]

        self._insert(later_moves, files, result)
        for index_page in plan.index_pages:
            files[index_page.path] = dict(index_page.record)
            result.created.append(index_page.path)
            LOGGER.debug("Created index file: %s", index_page.path)

        self._insert(first_moves, files, result)
        update = plan.first_page
        if update is not None:
            record = files[update.target]
            LOGGER.debug("Adding pagination metadata to first page file: %s", update.target)
            record["pagination"] = update.pagination.model_dump()
            record["pageFiles"] = list(update.page_files)
            if not record.get("date"):
                record["date"] = update.date
            result.updated = update.target

        LOGGER.debug("Pagination process completed")
        return result

    def _insert(
        self,
        moves: list[MoveOperation],
        files: MutableMapping[str, FileRecord],
        result: PaginationResult,
    ) -> None:
        for move_op in moves:
            LOGGER.debug("Moving file from %s to %s", move_op.source, move_op.destination)
            files[move_op.destination] = dict(move_op.record)
            result.moved[move_op.source] = move_op.destination

    def _validate(self, plan: PaginationPlan, files: MutableMapping[str, FileRecord]) -> None:
        missing = [move_op.source for move_op in plan.moves if move_op.source not in files]
        if missing:
            raise PaginationError(f"Planned sources are missing from the collection: {missing}")
        if plan.first_page is not None and plan.first_page.target not in files:
            raise PaginationError(
                f"First index file {plan.first_page.target} is missing from the collection."
            )


__all__ = ["PlanExecutor"]
