"""Virtual file collections and their on-disk representation."""

from .discovery import DirectoryScanner
from .errors import CollectionError
from .loader import CollectionLoader, load_site_metadata
from .models import MISSING, FileCollection, FileRecord, lookup_field
from .writer import CollectionWriter

__all__ = [
    "CollectionError",
    "CollectionLoader",
    "CollectionWriter",
    "DirectoryScanner",
    "FileCollection",
    "FileRecord",
    "MISSING",
    "load_site_metadata",
    "lookup_field",
]
