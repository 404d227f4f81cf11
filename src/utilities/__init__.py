"""
Utilities package for MachineKeySync.

Provides core utility functions:
- Machine identifier lookup
- Session transcript setup and teardown
- Overwrite-safe file copying and checksums
- Error types shared by every stage
"""

from .common import copy_without_overwrite, generate_checksum
from .errors import (
    IdentityReadError,
    KeyCopyError,
    KeyDirectoryAccessError,
    KeyDirectoryMissingError,
    KeyRepairError,
    SessionLogError,
)
from .machine_identity import read_machine_identifier
from .session_log import close_session_log, open_session_log, session_timestamp

__all__ = [
    "copy_without_overwrite",
    "generate_checksum",
    "IdentityReadError",
    "KeyCopyError",
    "KeyDirectoryAccessError",
    "KeyDirectoryMissingError",
    "KeyRepairError",
    "SessionLogError",
    "read_machine_identifier",
    "close_session_log",
    "open_session_log",
    "session_timestamp",
]

__version__ = "1.0.0"
