"""Include/exclude rule matching for a single filesystem entry."""

from collections.abc import Collection as PathSet
from pathlib import Path

from .schema import FileFilter
from .utils import file_suffix
from .utils import rx_match


def file_passes_filter(
    entry_path: str,
    file_filter: FileFilter,
    exclude_files: PathSet[str],
    entry_canonical_path: str | None = None,
) -> bool:
    """
    Decide whether a filesystem entry belongs to a filter.

    Exclusion is checked first and is final: an entry matching any exclude
    condition is rejected even if it also matches an include condition.

    Args:
        entry_path: Path of the entry as found by the directory walk
        file_filter: Filter to apply
        exclude_files: Canonical paths of the filter's explicitly excluded files
        entry_canonical_path: Canonical path of the entry, if already known

    Returns:
        True if the entry passes
    """
    if entry_canonical_path is None:
        entry_canonical_path = str(Path(entry_path).resolve())
    extension = file_suffix(Path(entry_path).name)

    excluded = (
        extension in file_filter.exclude.extensions
        or entry_canonical_path in exclude_files
        or rx_match(file_filter.exclude.regex, entry_path)
    )
    if excluded:
        return False

    return extension in file_filter.include.extensions or rx_match(file_filter.include.regex, entry_path)
