"""Search context - the shared registry of collections and discovered games.

The context is owned by the caller and passed explicitly to every resolver
call. It only grows: games are inserted or updated, never removed.
"""

import logging

from .exceptions import CollectionNotFoundError
from .models import Game
from .schema import Collection

logger = logging.getLogger(__name__)


class SearchContext:
    """
    Collection-spanning registry of games.

    ``path_to_gameid`` is the single dedup key for every filter sharing the
    context, and game ids are allocated only in ``accept_game``. Mutation is
    not synchronized; callers that walk directories in parallel must funnel
    ``accept_game`` calls through one thread.
    """

    def __init__(self, collections: dict[str, Collection] | None = None):
        self.collections: dict[str, Collection] = dict(collections or {})
        self.games: dict[int, Game] = {}
        self.path_to_gameid: dict[str, int] = {}
        self.collection_childs: dict[str, list[int]] = {}
        self._next_game_id = 0

    def add_collection(self, collection: Collection) -> None:
        """Register a collection under its name (replacing a previous one)."""
        self.collections[collection.name] = collection

    def get_collection(self, key: str) -> Collection:
        """
        Look up a registered collection.

        Raises:
            CollectionNotFoundError: If no collection is registered under ``key``
        """
        try:
            return self.collections[key]
        except KeyError:
            raise CollectionNotFoundError(
                f"Collection '{key}' is not registered", context={"collection_key": key}
            ) from None

    def accept_game(self, game_path: str, collection: Collection) -> int:
        """
        Insert or update the game at a canonical path and link it to a collection.

        A new game is seeded from the collection defaults. An existing game
        only gets the defaults it is still missing, so the collection that
        saw it first wins for every field it sets.

        Args:
            game_path: Canonical path of the file entry
            collection: Owning collection

        Returns:
            Id of the new or existing game
        """
        game_id = self.path_to_gameid.get(game_path)
        if game_id is None:
            game_id = self._next_game_id
            self._next_game_id += 1
            self.path_to_gameid[game_path] = game_id
            self.games[game_id] = Game.from_path(game_path, collection)
            logger.debug(f"New game {game_id}: {game_path}")
        else:
            # Known from an earlier source, possibly without launch defaults
            self.games[game_id].backfill(collection)

        childs = self.collection_childs.setdefault(collection.name, [])
        if game_id not in childs:
            childs.append(game_id)

        return game_id

    def games_in_collection(self, name: str) -> list[Game]:
        """List the games linked to a collection, in discovery order."""
        return [self.games[game_id] for game_id in self.collection_childs.get(name, [])]
