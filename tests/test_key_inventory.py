from pathlib import Path

import pytest

from src.processors.key_inventory import (
    KeyFileName,
    parse_key_file_name,
    scan_key_directory,
)
from src.utilities.errors import KeyDirectoryAccessError, KeyDirectoryMissingError


def test_parse_three_fields():
    assert parse_key_file_name("MY_OLD-GUID_S-1-5-21") == KeyFileName(
        container="MY", identifier="OLD-GUID", suffix="S-1-5-21"
    )


def test_parse_two_fields_has_empty_suffix():
    assert parse_key_file_name("c2319c42033a5ca7f44e731bfd3fa2b5_old-guid") == KeyFileName(
        container="c2319c42033a5ca7f44e731bfd3fa2b5", identifier="old-guid", suffix=""
    )


@pytest.mark.parametrize("name", ["desktop.ini", "noseparator", ""])
def test_parse_single_field_is_not_a_key(name):
    assert parse_key_file_name(name) is None


def test_parse_ignores_fields_beyond_suffix():
    parsed = parse_key_file_name("A_B_C_D")
    assert parsed == KeyFileName(container="A", identifier="B", suffix="C")


def test_parse_keeps_empty_fields():
    assert parse_key_file_name("MY_") == KeyFileName(container="MY", identifier="", suffix="")


def test_scan_returns_only_key_files(logger, keys_dir, write_key):
    write_key("MY_OLD-GUID_S-1-5-21")
    write_key("readme")
    (keys_dir / "nested_dir_name").mkdir()

    entries = scan_key_directory(logger=logger, keys_dir=keys_dir)

    assert [entry.path.name for entry in entries] == ["MY_OLD-GUID_S-1-5-21"]
    entry = entries[0]
    assert entry.directory == keys_dir
    assert entry.path == keys_dir / "MY_OLD-GUID_S-1-5-21"
    assert entry.name.identifier == "OLD-GUID"


def test_scan_empty_directory(logger, keys_dir):
    assert scan_key_directory(logger=logger, keys_dir=keys_dir) == []


def test_scan_missing_directory_is_fatal(logger, tmp_path):
    with pytest.raises(KeyDirectoryMissingError, match="Verify"):
        scan_key_directory(logger=logger, keys_dir=tmp_path / "absent")


def test_scan_permission_denied_is_fatal(logger, keys_dir, monkeypatch):
    def deny(self):
        raise PermissionError(13, "Access is denied", str(self))

    monkeypatch.setattr(Path, "iterdir", deny)

    with pytest.raises(KeyDirectoryAccessError, match="Permission denied"):
        scan_key_directory(logger=logger, keys_dir=keys_dir)


def test_scan_skips_single_unreadable_entry(logger, keys_dir, write_key, monkeypatch):
    write_key("A_OLD-GUID")
    write_key("B_OLD-GUID")
    original_is_file = Path.is_file

    def locked_entry(self):
        if self.name == "A_OLD-GUID":
            raise PermissionError(13, "Access is denied", str(self))
        return original_is_file(self)

    monkeypatch.setattr(Path, "is_file", locked_entry)

    entries = scan_key_directory(logger=logger, keys_dir=keys_dir)

    assert [entry.path.name for entry in entries] == ["B_OLD-GUID"]
