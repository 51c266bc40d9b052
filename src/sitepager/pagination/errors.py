"""Pagination errors."""


class PaginationError(Exception):
    """Raised when a pagination pass cannot be planned or applied."""
