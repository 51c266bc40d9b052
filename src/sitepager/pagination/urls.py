"""Navigation URL generation for paginated listings.

Two URL schemes are supported. The permalink scheme addresses every page as a
directory (``/blog/2/``) and runs URLs through :func:`clean_url`. The flat
scheme addresses pages as files (``/blog/2.html``) and only collapses duplicate
slashes. In both schemes the first page lives at the directory itself, page 1
has no previous link and page 2 links back to the first page.
"""

from __future__ import annotations

from sitepager.config.models import DIRECTORY_PLACEHOLDER, NUMBER_PLACEHOLDER

from .models import PageLinks
from .paths import INDEX_SUFFIX, clean_url, collapse_slashes


def resolve_pattern(pattern: str, directory: str, page_number: int) -> str:
    """Substitute the directory and page number placeholders in ``pattern``."""
    return pattern.replace(DIRECTORY_PLACEHOLDER, directory, 1).replace(
        NUMBER_PLACEHOLDER, str(page_number), 1
    )


def generate_pagination_urls(
    directory: str,
    output_pattern: str,
    page_number: int,
    total_pages: int,
    use_permalinks: bool,
) -> PageLinks:
    """Return first/last/next/previous URLs for ``page_number`` of ``total_pages``.

    Args:
        directory: Paginated directory.
        output_pattern: Page directory pattern, e.g. ``:directory/:num``.
        page_number: 1-based page number.
        total_pages: Number of pages in the listing.
        use_permalinks: Select the permalink scheme instead of the flat one.

    Returns:
        PageLinks: Clean absolute URLs, ``None`` where a link does not apply.
    """

    def page_url(number: int) -> str:
        resolved = resolve_pattern(output_pattern, directory, number)
        if use_permalinks:
            return clean_url(f"/{resolved}{INDEX_SUFFIX}")
        return f"/{resolved}.html"

    if use_permalinks:
        first = clean_url(f"/{directory}{INDEX_SUFFIX}")
    else:
        first = f"/{directory}.html"

    next_url = page_url(page_number + 1) if page_number < total_pages else None
    if page_number > 2:
        previous = page_url(page_number - 1)
    elif page_number == 2:
        previous = first
    else:
        previous = None

    return PageLinks(
        first=collapse_slashes(first),
        last=collapse_slashes(page_url(total_pages)),
        next=collapse_slashes(next_url),
        previous=collapse_slashes(previous),
    )


__all__ = ["resolve_pattern", "generate_pagination_urls"]
