"""Tests for game records and sticky field merging."""

from game_collections import Collection
from game_collections import Game
from game_collections import merge_field


def test_merge_field_keeps_existing():
    assert merge_field("emuA", "emuB") == "emuA"
    assert merge_field("emuA", "") == "emuA"


def test_merge_field_takes_incoming_when_empty():
    assert merge_field("", "emuB") == "emuB"
    assert merge_field("", "") == ""


def test_game_from_path():
    """Test new games are seeded from the collection defaults."""
    collection = Collection(
        name="Retro", launch_cmd="emu {file.path}", launch_workdir="/opt/emu", relative_basedir="/games"
    )

    game = Game.from_path("/games/Super Game.zip", collection)

    assert game.path == "/games/Super Game.zip"
    assert game.title == "Super Game"
    assert game.launch_cmd == "emu {file.path}"
    assert game.launch_workdir == "/opt/emu"
    assert game.relative_basedir == "/games"


def test_game_backfill_only_empty_fields():
    """Test backfill never overwrites a field that is already set."""
    game = Game(path="/games/a.zip", title="a", launch_cmd="emuA")
    collection = Collection(name="RetroB", launch_cmd="emuB", launch_workdir="/opt/b")

    game.backfill(collection)

    assert game.launch_cmd == "emuA"
    assert game.launch_workdir == "/opt/b"
    assert game.relative_basedir == ""

