"""Collection loading errors."""


class CollectionError(Exception):
    """Raised when source files cannot be turned into a file collection."""
