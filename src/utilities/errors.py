"""
Error types raised by the MachineKeySync stages.

Fatal errors carry the process exit code the entry point should use. Copy
errors are per-file and are never allowed to abort a batch.
"""

from config import ExitCode


class KeyRepairError(Exception):
    """Base class for every error raised by the repair pipeline."""

    exit_code: ExitCode = ExitCode.SUCCESS


class SessionLogError(KeyRepairError):
    exit_code = ExitCode.LOG_SINK_UNAVAILABLE


class IdentityReadError(KeyRepairError):
    exit_code = ExitCode.IDENTITY_UNREADABLE


class KeyDirectoryMissingError(KeyRepairError):
    exit_code = ExitCode.KEY_DIRECTORY_MISSING


class KeyDirectoryAccessError(KeyRepairError):
    exit_code = ExitCode.KEY_DIRECTORY_INACCESSIBLE


class KeyCopyError(KeyRepairError):
    """A single key file could not be copied to its reprojected name."""
