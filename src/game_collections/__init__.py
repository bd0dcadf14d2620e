"""game-collections - Resolve file filters into game collections.

Public API: filter models, the shared search context, and the resolver
entry points. Apps inject policy (collections, directories, processing order).
"""

from .context import SearchContext
from .discovery import MEDIA_DIR_NAME
from .discovery import all_valid_subdirs
from .discovery import canonical_path
from .discovery import media_dir_for
from .discovery import resolve_filelist
from .exceptions import CollectionError
from .exceptions import CollectionMetadataError
from .exceptions import CollectionNotFoundError
from .matcher import file_passes_filter
from .models import Game
from .models import merge_field
from .resolver import process_filter
from .resolver import process_filters
from .resolver import tidy_filters
from .schema import Collection
from .schema import CollectionsFile
from .schema import FileFilter
from .schema import FilterRule

__all__ = [
    # Schema
    "Collection",
    "CollectionsFile",
    "FileFilter",
    "FilterRule",
    # Registry
    "Game",
    "SearchContext",
    "merge_field",
    # Resolution
    "tidy_filters",
    "process_filter",
    "process_filters",
    "file_passes_filter",
    # Discovery
    "MEDIA_DIR_NAME",
    "all_valid_subdirs",
    "canonical_path",
    "media_dir_for",
    "resolve_filelist",
    # Exceptions
    "CollectionError",
    "CollectionMetadataError",
    "CollectionNotFoundError",
]

__version__ = "0.1.0"
