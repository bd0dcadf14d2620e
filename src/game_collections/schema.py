"""Collection and filter schema.

The filter models are built by an upstream metadata parser and handed to the
resolver fully formed. ``CollectionsFile`` is a small TOML front end for
callers that keep their definitions in a file.
"""

import re
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError
from pydantic import field_validator

from .exceptions import CollectionMetadataError

if TYPE_CHECKING:
    from .context import SearchContext


class Collection(BaseModel):
    """A named group of games sharing default launch metadata."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    summary: str = ""
    description: str = ""

    # Defaults backfilled into games of this collection
    launch_cmd: str = ""
    launch_workdir: str = ""
    relative_basedir: str = ""


class FilterRule(BaseModel):
    """One side (include or exclude) of a file filter."""

    extensions: list[str] = Field(default_factory=list)
    files: list[str] = Field(default_factory=list)
    regex: re.Pattern | None = None

    @field_validator("extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        if not isinstance(value, list) or not all(isinstance(ext, str) for ext in value):
            raise ValueError("extensions must be a list of strings")
        return [ext.strip().lstrip(".").lower() for ext in value]

    @field_validator("regex", mode="before")
    @classmethod
    def _empty_pattern_is_none(cls, value: str | re.Pattern | None) -> str | re.Pattern | None:
        if isinstance(value, str) and not value:
            return None
        return value

    def is_empty(self) -> bool:
        """Check if the rule can match anything at all."""
        return not (self.extensions or self.files or self.regex is not None)


class FileFilter(BaseModel):
    """Filter definition scoped to one collection.

    Entries under ``directories`` belong to the collection if they pass
    ``include`` and are not rejected by ``exclude``.
    """

    collection_key: str = Field(min_length=1)
    directories: list[str] = Field(min_length=1)
    include: FilterRule = Field(default_factory=FilterRule)
    exclude: FilterRule = Field(default_factory=FilterRule)

    @field_validator("directories")
    @classmethod
    def _no_empty_directories(cls, value: list[str]) -> list[str]:
        if any(not directory for directory in value):
            raise ValueError("filter directories must not be empty")
        return value


class CollectionsFile(BaseModel):
    """Collections and filters loaded from a TOML definition file.

    File format::

        [collections.RetroA]
        launch = "emuA {file.path}"
        workdir = "/opt/emu"
        directories = ["roms"]
        extensions = ["zip"]
        files = ["special.dat"]
        regex = "\\\\.bin$"
        ignore-extensions = ["txt"]
        ignore-files = ["broken.zip"]
        ignore-regex = "demo"

    Relative directories are resolved against the file's own directory.
    """

    model_config = ConfigDict(frozen=True)

    collections: list[Collection] = Field(default_factory=list)
    filters: list[FileFilter] = Field(default_factory=list)

    @classmethod
    def from_toml(cls, toml_path: Path) -> "CollectionsFile":
        """
        Load collection definitions from a TOML file.

        Args:
            toml_path: Path to the definition file

        Returns:
            CollectionsFile instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            CollectionMetadataError: If the file is not valid TOML or a
                definition is malformed
        """
        if not toml_path.exists():
            raise FileNotFoundError(f"Collection definition file not found: {toml_path}")

        try:
            with open(toml_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise CollectionMetadataError(
                f"Invalid TOML in {toml_path}: {e}", context={"path": str(toml_path)}
            ) from e

        sections = data.get("collections")
        if not isinstance(sections, dict) or not sections:
            raise CollectionMetadataError(
                f"[collections] section missing in {toml_path}", context={"path": str(toml_path)}
            )

        base_dir = toml_path.parent
        collections = []
        filters = []
        try:
            for name, section in sections.items():
                collections.append(
                    Collection(
                        name=name,
                        summary=section.get("summary", ""),
                        description=section.get("description", ""),
                        launch_cmd=section.get("launch", ""),
                        launch_workdir=section.get("workdir", ""),
                        relative_basedir=section.get("basedir", ""),
                    )
                )

                # A collection without directories only carries defaults
                directories = section.get("directories", [])
                if not directories:
                    continue
                if not isinstance(directories, list) or not all(isinstance(d, str) for d in directories):
                    raise CollectionMetadataError(
                        f"'directories' of collection '{name}' must be a list of strings in {toml_path}",
                        context={"path": str(toml_path), "collection_key": name},
                    )

                filters.append(
                    FileFilter(
                        collection_key=name,
                        directories=[str(base_dir / d) for d in directories],
                        include=FilterRule(
                            extensions=section.get("extensions", []),
                            files=section.get("files", []),
                            regex=section.get("regex"),
                        ),
                        exclude=FilterRule(
                            extensions=section.get("ignore-extensions", []),
                            files=section.get("ignore-files", []),
                            regex=section.get("ignore-regex"),
                        ),
                    )
                )
        except (AttributeError, ValidationError) as e:
            raise CollectionMetadataError(
                f"Invalid collection definition in {toml_path}: {e}", context={"path": str(toml_path)}
            ) from e

        return cls(collections=collections, filters=filters)

    def populate(self, context: "SearchContext") -> None:
        """Register every collection of this file in a search context."""
        for collection in self.collections:
            context.add_collection(collection)
