"""
Processors package for MachineKeySync.

Provides the individual repair stages:
- Key container inventory and filename parsing
- Stale identifier detection
- Name reprojection and copying
"""

from .key_inventory import (
    KeyFileEntry,
    KeyFileName,
    parse_key_file_name,
    scan_key_directory,
)
from .mismatch_filter import find_mismatched_entries, identifiers_match
from .reprojection import (
    ReprojectionReport,
    build_reprojected_name,
    reproject_entry,
    reproject_key_files,
)

__all__ = [
    "KeyFileEntry",
    "KeyFileName",
    "parse_key_file_name",
    "scan_key_directory",
    "find_mismatched_entries",
    "identifiers_match",
    "ReprojectionReport",
    "build_reprojected_name",
    "reproject_entry",
    "reproject_key_files",
]

__version__ = "1.0.0"
