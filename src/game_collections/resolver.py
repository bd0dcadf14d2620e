"""Filter resolver - Turn file filters into games in a search context.

Filters are resolved one at a time, directories within a filter one at a
time. Everything that can go wrong on disk (missing directories, stale file
lists, unreadable entries) just produces fewer games.
"""

import logging

from .context import SearchContext
from .discovery import all_valid_subdirs
from .discovery import canonical_path
from .discovery import list_entries
from .discovery import media_dir_for
from .discovery import resolve_filelist
from .exceptions import CollectionNotFoundError
from .matcher import file_passes_filter
from .schema import FileFilter
from .utils import unique

logger = logging.getLogger(__name__)


def tidy_filters(filters: list[FileFilter]) -> None:
    """
    Remove duplicate directories, extensions and files from each filter, in place.

    Must run once over a filter list before resolution. Running it again
    changes nothing.
    """
    for file_filter in filters:
        file_filter.directories = unique(file_filter.directories)
        for rule in (file_filter.include, file_filter.exclude):
            rule.extensions = unique(rule.extensions)
            rule.files = unique(rule.files)


def process_filter(file_filter: FileFilter, context: SearchContext) -> None:
    """
    Resolve one filter and merge the matching entries into the context.

    For every filter directory, all entries (files and directories) under
    its valid subdirectories are matched against the filter rules. After the
    walk, explicitly listed include files are added unless they are also
    explicitly excluded, whether or not the walk reached them.

    Args:
        file_filter: Tidied filter; its collection must be registered in ``context``
        context: Shared search context to update

    Example:
        >>> context = SearchContext()
        >>> context.add_collection(Collection(name="Retro"))
        >>> file_filter = FileFilter(
        ...     collection_key="Retro",
        ...     directories=["/games"],
        ...     include=FilterRule(extensions=["zip"]),
        ... )
        >>> process_filter(file_filter, context)
        >>> [game.path for game in context.games_in_collection("Retro")]
        ['/games/sub/b.zip', '/games/a.zip']
    """
    try:
        collection = context.get_collection(file_filter.collection_key)
    except CollectionNotFoundError as e:
        logger.warning(f"Skipping filter for unknown collection '{e.collection_key}'")
        return

    if file_filter.include.is_empty():
        logger.debug(f"Filter '{file_filter.collection_key}' includes nothing, skipping")
        return

    all_include_files: list[str] = []
    all_exclude_files: list[str] = []

    for filter_dir in file_filter.directories:
        dirs_to_check = all_valid_subdirs(filter_dir)
        if not dirs_to_check:
            continue

        media_dir = media_dir_for(filter_dir)
        include_files = resolve_filelist(file_filter.include.files, filter_dir)
        exclude_files = resolve_filelist(file_filter.exclude.files, filter_dir)
        exclude_set = set(exclude_files)

        matched = 0
        for subdir in dirs_to_check:
            for entry_path in list_entries(subdir, media_dir):
                game_path = canonical_path(subdir, entry_path)
                if game_path is None:
                    continue
                if file_passes_filter(entry_path, file_filter, exclude_set, game_path):
                    context.accept_game(game_path, collection)
                    matched += 1

        logger.debug(
            f"Filter '{file_filter.collection_key}' matched {matched} entries "
            f"in {len(dirs_to_check)} directories under {filter_dir}"
        )

        all_include_files.extend(include_files)
        all_exclude_files.extend(exclude_files)

    excluded = set(all_exclude_files)
    for game_path in unique(all_include_files):
        if game_path not in excluded:
            context.accept_game(game_path, collection)


def process_filters(filters: list[FileFilter], context: SearchContext) -> None:
    """
    Resolve filters in list order against one search context.

    Order matters: for a game matched by several collections, the first one
    processed sets its launch defaults.

    Args:
        filters: Tidied filters (see ``tidy_filters``)
        context: Shared search context to update
    """
    for file_filter in filters:
        process_filter(file_filter, context)

    logger.info(
        f"Resolved {len(filters)} filters: {len(context.games)} games "
        f"in {len(context.collection_childs)} collections"
    )
