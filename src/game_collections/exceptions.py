"""Collection-specific exceptions.

The resolution engine never lets these escape; they are raised by the
registry accessors and the definition loader, and absorbed by the resolver.
"""


class CollectionError(Exception):
    """Base exception for collection and filter operations.

    ``context`` names what the error is about, using the keys
    ``collection_key`` and ``path`` where they apply, so callers can report
    the offending collection or definition file.
    """

    def __init__(self, message: str, context: dict[str, str] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    @property
    def collection_key(self) -> str | None:
        """Key of the collection involved, if known."""
        return self.context.get("collection_key")


class CollectionMetadataError(CollectionError):
    """Invalid or unreadable collection definition."""


class CollectionNotFoundError(CollectionError):
    """Collection key not registered in the search context."""
