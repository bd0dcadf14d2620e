"""Game records stored in the search context.

Launch fields are sticky: once a source sets them, later merges keep the
existing value.
"""

from dataclasses import dataclass
from pathlib import PurePath

from .schema import Collection

STICKY_FIELDS = ("launch_cmd", "launch_workdir", "relative_basedir")


def merge_field(existing: str, incoming: str) -> str:
    """Keep ``existing`` if it is set, otherwise take ``incoming``."""
    return existing if existing else incoming


@dataclass
class Game:
    """A game discovered on disk, identified by its canonical path."""

    path: str
    title: str
    launch_cmd: str = ""
    launch_workdir: str = ""
    relative_basedir: str = ""

    @classmethod
    def from_path(cls, path: str, collection: Collection) -> "Game":
        """Create a game for a file entry, seeded with the collection defaults."""
        return cls(
            path=path,
            title=PurePath(path).stem,
            launch_cmd=collection.launch_cmd,
            launch_workdir=collection.launch_workdir,
            relative_basedir=collection.relative_basedir,
        )

    def backfill(self, collection: Collection) -> None:
        """Fill empty launch fields from a collection's defaults."""
        for name in STICKY_FIELDS:
            setattr(self, name, merge_field(getattr(self, name), getattr(collection, name)))
