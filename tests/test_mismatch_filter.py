from src.processors.key_inventory import KeyFileEntry, parse_key_file_name
from src.processors.mismatch_filter import find_mismatched_entries, identifiers_match


def _entry(keys_dir, name):
    return KeyFileEntry(
        name=parse_key_file_name(name), directory=keys_dir, path=keys_dir / name
    )


def test_identifiers_match_ignores_case():
    assert identifiers_match("old-guid", "OLD-GUID")
    assert identifiers_match("Ab12-CD", "aB12-cd")
    assert not identifiers_match("OLD-GUID", "NEW-GUID")


def test_matching_identifiers_are_never_selected(logger, keys_dir):
    entries = [
        _entry(keys_dir, "A_new-guid"),
        _entry(keys_dir, "B_NEW-GUID_S-1-5-18"),
        _entry(keys_dir, "C_New-Guid_x"),
    ]
    assert find_mismatched_entries(logger, entries, "NEW-GUID") == []


def test_only_stale_entries_are_selected(logger, keys_dir):
    current = _entry(keys_dir, "A_NEW-GUID")
    stale = _entry(keys_dir, "B_OLD-GUID_S-1-5-21")

    selected = find_mismatched_entries(logger, [current, stale], "new-guid")

    assert selected == [stale]
