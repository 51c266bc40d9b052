"""Paginate a directory of a virtual file collection.

The pass selects the entries under ``options.directory``, orders them, splits
them into pages, relocates every entry to ``<directory>/<name>/index.<ext>``
and writes index records carrying a ``pagination`` block. Planning happens
against an untouched collection; nothing is mutated unless the whole plan
could be built.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Mapping, MutableMapping, Optional

from pydantic import ValidationError

from sitepager.collection.models import FileRecord
from sitepager.config.exceptions import ConfigError
from sitepager.config.models import PaginationOptions

from .errors import PaginationError
from .executor import PlanExecutor
from .models import PageLinks, PaginationMetadata, PaginationPlan, PaginationResult
from .planner import PaginationPlanner

LOGGER = logging.getLogger(__name__)

DoneCallback = Callable[..., None]
Plugin = Callable[
    [MutableMapping[str, FileRecord], Optional[Mapping[str, Any]], DoneCallback], None
]


def resolve_options(
    options: PaginationOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> PaginationOptions:
    """Merge ``overrides`` onto ``options`` and validate the result.

    Both field names (``per_page``) and their camelCase aliases (``perPage``)
    are accepted.

    Raises:
        ConfigError: If the merged options are invalid.
    """
    if isinstance(options, PaginationOptions):
        base = options.model_dump()
    elif options is None:
        base = {}
    elif isinstance(options, Mapping):
        base = PaginationOptions.canonical_keys(options)
    else:
        raise ConfigError(f"Pagination options must be a mapping, got {type(options).__name__}.")

    base.update(PaginationOptions.canonical_keys(overrides))
    try:
        return PaginationOptions.model_validate(base)
    except ValidationError as exc:
        raise ConfigError(f"Invalid pagination options: {exc}") from exc


def paginate(
    files: MutableMapping[str, FileRecord],
    metadata: Optional[Mapping[str, Any]] = None,
    options: PaginationOptions | Mapping[str, Any] | None = None,
    *,
    now: Optional[datetime] = None,
    **overrides: Any,
) -> PaginationResult:
    """Run one pagination pass over ``files``.

    Failures never propagate: configuration problems, plans that cannot be
    built and unexpected errors are logged and returned as a failed result, in
    which case ``files`` is left untouched.

    Args:
        files: File collection to paginate in place.
        metadata: Global site metadata merged into generated index records.
        options: Pagination options, as a model or a mapping.
        now: Timestamp for synthetic stats and date fallbacks.
        **overrides: Individual option overrides.

    Returns:
        PaginationResult: Outcome of the pass.
    """
    try:
        resolved = resolve_options(options, **overrides)
        LOGGER.debug("Starting pagination process with options: %s", resolved.model_dump())
        plan = PaginationPlanner().build_plan(files, resolved, metadata=metadata, now=now)
        return PlanExecutor().apply(plan, files)
    except (ConfigError, PaginationError) as exc:
        LOGGER.error("Pagination failed: %s", exc)
        return PaginationResult.failure(exc)
    except Exception as exc:
        LOGGER.exception("Unexpected error while paginating")
        return PaginationResult.failure(exc)


def simple_pagination(
    options: PaginationOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> Plugin:
    """Return a build-step callable with a completion callback.

    The returned ``plugin(files, metadata, done)`` paginates ``files`` and
    calls ``done()`` once on success or ``done(error)`` once on failure.
    Options are validated inside the step so invalid options also surface
    through ``done``.
    """

    def plugin(
        files: MutableMapping[str, FileRecord],
        metadata: Optional[Mapping[str, Any]],
        done: DoneCallback,
    ) -> None:
        result = paginate(files, metadata, options, **overrides)
        if result.ok:
            done()
        else:
            done(result.error)

    return plugin


__all__ = [
    "PageLinks",
    "PaginationError",
    "PaginationMetadata",
    "PaginationOptions",
    "PaginationPlan",
    "PaginationPlanner",
    "PaginationResult",
    "PlanExecutor",
    "paginate",
    "resolve_options",
    "simple_pagination",
]
