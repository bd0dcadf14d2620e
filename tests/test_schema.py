"""Tests for collection and filter schema."""

import re
import tempfile
from pathlib import Path

import pytest
from game_collections import Collection
from game_collections import CollectionMetadataError
from game_collections import CollectionsFile
from game_collections import FileFilter
from game_collections import FilterRule
from game_collections import SearchContext
from pydantic import ValidationError


def test_filter_rule_defaults():
    """Test that a default rule matches nothing."""
    rule = FilterRule()

    assert rule.extensions == []
    assert rule.files == []
    assert rule.regex is None
    assert rule.is_empty()


def test_filter_rule_normalizes_extensions():
    """Test extensions are lowercased and stripped of leading dots."""
    rule = FilterRule(extensions=["ZIP", ".7z", " Nes "])

    assert rule.extensions == ["zip", "7z", "nes"]
    assert not rule.is_empty()


def test_filter_rule_empty_regex_is_none():
    """Test an empty pattern is stored as no pattern."""
    rule = FilterRule(regex="")

    assert rule.regex is None
    assert rule.is_empty()


def test_filter_rule_compiles_regex():
    """Test regex strings are compiled."""
    rule = FilterRule(regex=r"\.bin$")

    assert isinstance(rule.regex, re.Pattern)
    assert rule.regex.search("/games/disc.bin")


def test_filter_rule_invalid_regex():
    """Test invalid pattern is rejected at construction."""
    with pytest.raises(ValidationError):
        FilterRule(regex="(unclosed")


def test_file_filter_requires_collection_key():
    """Test empty collection key is rejected."""
    with pytest.raises(ValidationError):
        FileFilter(collection_key="", directories=["/games"])


def test_file_filter_requires_directory():
    """Test a filter needs at least one non-empty directory."""
    with pytest.raises(ValidationError):
        FileFilter(collection_key="Retro", directories=[])

    with pytest.raises(ValidationError):
        FileFilter(collection_key="Retro", directories=["/games", ""])


def test_collection_immutable():
    """Test that Collection is frozen."""
    collection = Collection(name="Retro", launch_cmd="emu {file.path}")

    with pytest.raises(ValidationError):
        collection.launch_cmd = "other"


def test_collections_file_from_toml():
    """Test loading collections and filters from a definition file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        toml_path = Path(tmpdir) / "collections.toml"
        toml_path.write_text(r"""
[collections.RetroA]
summary = "Retro games"
launch = "emuA {file.path}"
workdir = "/opt/emu"
directories = ["roms", "/mnt/roms"]
extensions = ["ZIP", "7z"]
files = ["special.dat"]
regex = "\\.bin$"
ignore-extensions = ["txt"]
ignore-files = ["broken.zip"]
ignore-regex = "demo"

[collections.Defaults]
launch = "default-emu"
""")

        definitions = CollectionsFile.from_toml(toml_path)

        assert [c.name for c in definitions.collections] == ["RetroA", "Defaults"]
        retro = definitions.collections[0]
        assert retro.summary == "Retro games"
        assert retro.launch_cmd == "emuA {file.path}"
        assert retro.launch_workdir == "/opt/emu"
        assert retro.relative_basedir == ""

        # Defaults has no directories, so it only carries launch defaults
        assert len(definitions.filters) == 1
        file_filter = definitions.filters[0]
        assert file_filter.collection_key == "RetroA"
        assert file_filter.directories == [str(Path(tmpdir) / "roms"), "/mnt/roms"]
        assert file_filter.include.extensions == ["zip", "7z"]
        assert file_filter.include.files == ["special.dat"]
        assert file_filter.include.regex.pattern == r"\.bin$"
        assert file_filter.exclude.extensions == ["txt"]
        assert file_filter.exclude.files == ["broken.zip"]
        assert file_filter.exclude.regex.pattern == "demo"


def test_collections_file_populate():
    """Test collections are registered in a search context."""
    definitions = CollectionsFile(collections=[Collection(name="A"), Collection(name="B")])
    context = SearchContext()

    definitions.populate(context)

    assert set(context.collections) == {"A", "B"}


def test_collections_file_missing():
    """Test missing definition file."""
    with pytest.raises(FileNotFoundError):
        CollectionsFile.from_toml(Path("/nonexistent/collections.toml"))


def test_collections_file_invalid_toml():
    """Test invalid TOML is reported as metadata error."""
    with tempfile.TemporaryDirectory() as tmpdir:
        toml_path = Path(tmpdir) / "collections.toml"
        toml_path.write_text("[collections.A\nlaunch = ")

        with pytest.raises(CollectionMetadataError, match="Invalid TOML"):
            CollectionsFile.from_toml(toml_path)


def test_collections_file_missing_section():
    """Test error when there is no [collections] table."""
    with tempfile.TemporaryDirectory() as tmpdir:
        toml_path = Path(tmpdir) / "collections.toml"
        toml_path.write_text('[other]\nname = "x"\n')

        with pytest.raises(CollectionMetadataError, match="section missing"):
            CollectionsFile.from_toml(toml_path)


def test_collections_file_invalid_definition():
    """Test malformed definitions are reported with context."""
    with tempfile.TemporaryDirectory() as tmpdir:
        toml_path = Path(tmpdir) / "collections.toml"
        toml_path.write_text('[collections.A]\ndirectories = ["roms"]\nregex = "(unclosed"\n')

        with pytest.raises(CollectionMetadataError) as exc_info:
            CollectionsFile.from_toml(toml_path)

        assert exc_info.value.context["path"] == str(toml_path)


def test_filter_rule_rejects_non_list_extensions():
    """Test a bare string or number is not accepted as an extension list."""
    with pytest.raises(ValidationError):
        FilterRule(extensions="zip")

    with pytest.raises(ValidationError):
        FilterRule(extensions=5)

    with pytest.raises(ValidationError):
        FilterRule(extensions=["zip", 7])


def _write_definition(tmpdir: str, body: str) -> Path:
    toml_path = Path(tmpdir) / "collections.toml"
    toml_path.write_text(body)
    return toml_path


@pytest.mark.parametrize(
    "body",
    [
        '[collections.A]\ndirectories = ["roms"]\nextensions = "zip"\n',
        '[collections.A]\ndirectories = ["roms"]\nextensions = 5\n',
        '[collections.A]\ndirectories = ["roms"]\nfiles = "special.dat"\n',
        '[collections.A]\ndirectories = "roms"\nextensions = ["zip"]\n',
        '[collections.A]\ndirectories = ["roms", 3]\nextensions = ["zip"]\n',
        "[collections]\nA = 5\n",
    ],
)
def test_collections_file_rejects_wrong_types(body):
    """Test wrongly typed definition values are reported as metadata errors."""
    with tempfile.TemporaryDirectory() as tmpdir:
        toml_path = _write_definition(tmpdir, body)

        with pytest.raises(CollectionMetadataError) as exc_info:
            CollectionsFile.from_toml(toml_path)

        assert exc_info.value.context["path"] == str(toml_path)
