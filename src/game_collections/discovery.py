"""Filesystem discovery for file filters.

Convention: the ``media`` directory directly under a filter root holds
artwork and other assets, and is never searched for games. Anything that
resolves into it (including symlinks pointing there) is skipped too.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

MEDIA_DIR_NAME = "media"


def canonical_path(base_dir: str | Path, path: str | Path) -> str | None:
    """
    Resolve a path against a base directory to its canonical form.

    Args:
        base_dir: Directory that relative paths are relative to
        path: Absolute or relative path

    Returns:
        Absolute, symlink-resolved path if the target exists, None otherwise

    Example:
        >>> canonical_path("/games", "sub/../a.zip")
        '/games/a.zip'
    """
    full_path = Path(base_dir) / path
    try:
        if not full_path.exists():
            return None
        return str(full_path.resolve())
    except OSError as e:
        logger.debug(f"Cannot resolve {full_path}: {e}")
        return None


def resolve_filelist(files: list[str], root_dir: str | Path) -> list[str]:
    """Canonicalize a file list relative to ``root_dir``, dropping missing entries."""
    result = []
    for file in files:
        can_path = canonical_path(root_dir, file)
        if can_path is None:
            logger.debug(f"Listed file not found, skipping: {Path(root_dir) / file}")
            continue
        result.append(can_path)
    return result


def _resolve(path: Path) -> Path:
    try:
        return path.resolve()
    except RuntimeError:
        # Symlink loop
        return path.absolute()


def media_dir_for(filter_dir: str | Path) -> Path:
    """Resolved location of the reserved media directory of a filter root."""
    return _resolve(Path(filter_dir) / MEDIA_DIR_NAME)


def _within(path: Path, directory: Path) -> bool:
    return path.is_relative_to(directory)


def _readable(path: Path) -> bool:
    return os.access(path, os.R_OK)


def _readable_subdirs(directory: Path) -> list[Path]:
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        logger.debug(f"Cannot list {directory}: {e}")
        return []

    result = []
    for entry in entries:
        try:
            if entry.is_dir() and _readable(entry):
                result.append(entry)
        except OSError:
            continue
    return result


def all_valid_subdirs(filter_dir: str | Path) -> list[str]:
    """
    Find every directory to search under a filter root.

    The walk is recursive and follows symlinks, so a directory reachable
    through several paths is returned once per path. A symlink back to one
    of its own ancestors is not entered. The ``media`` directory directly
    under the root is skipped along with everything beneath it, whichever
    path leads there. The root itself comes last, with a trailing separator,
    so every returned entry can be joined with a file name.

    Args:
        filter_dir: Root directory of a filter

    Returns:
        List of directory paths, empty if ``filter_dir`` is empty
    """
    if not filter_dir:
        logger.warning("Empty filter directory, nothing to search")
        return []

    root = Path(filter_dir)
    media_dir = media_dir_for(root)

    result: list[str] = []
    # Each pending directory carries the resolved directories above it
    root_chain = (_resolve(root),)
    pending = [(subdir, root_chain) for subdir in reversed(_readable_subdirs(root))]
    while pending:
        subdir, chain = pending.pop()
        real = subdir.resolve()
        if real in chain or _within(real, media_dir):
            continue

        result.append(str(subdir))
        chain = chain + (real,)
        pending.extend((child, chain) for child in reversed(_readable_subdirs(subdir)))

    root_entry = str(root)
    result.append(root_entry if root_entry.endswith(os.sep) else root_entry + os.sep)
    return result


def list_entries(directory: str | Path, reserved_dir: Path | None = None) -> list[str]:
    """
    List the readable files and directories directly inside a directory.

    Symlinks are followed; dangling links and unreadable entries are left
    out. A missing or unreadable directory has no entries.

    Args:
        directory: Directory to list
        reserved_dir: Resolved directory whose contents (and itself) are left out

    Returns:
        Entry paths, sorted by name
    """
    try:
        entries = sorted(Path(directory).iterdir())
    except OSError as e:
        logger.debug(f"Cannot list {directory}: {e}")
        return []

    result = []
    for entry in entries:
        try:
            if not (entry.is_file() or entry.is_dir()) or not _readable(entry):
                continue
            if reserved_dir is not None and _within(entry.resolve(), reserved_dir):
                continue
        except OSError:
            continue
        result.append(str(entry))
    return result
