"""
Configuration Module

Central configuration management for the MachineKeySync repair tool.
Contains the machine identity sources, key directory layout, filename schema,
logging settings and exit codes used across the pipeline.

Author: Ashiq Gazi
"""

import os
from enum import Enum, IntEnum
from pathlib import Path
from typing import List


class HashAlgorithm(Enum):
    """
    Hash algorithms available for verifying copied key container files.

    Only algorithms guaranteed by hashlib on every platform are listed.
    """

    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    SHA3_256 = "sha3_256"
    BLAKE2B = "blake2b"


class RunStatus(Enum):
    """
    Outcome of a repair run as reported by the pipeline.

    SUCCESS: Mismatched files were found and the batch was processed
    NOTHING_TO_DO: Every key file already carries the current identifier
    FATAL: The run was aborted before or during inventory
    """

    SUCCESS = "success"
    NOTHING_TO_DO = "nothing_to_do"
    FATAL = "fatal"


class ExitCode(IntEnum):
    SUCCESS = 0
    LOG_SINK_UNAVAILABLE = 1
    IDENTITY_UNREADABLE = 2
    KEY_DIRECTORY_MISSING = 3
    KEY_DIRECTORY_INACCESSIBLE = 4


# ============================================================================
# MACHINE IDENTITY SOURCES
# ============================================================================

# Windows: HKEY_LOCAL_MACHINE\SOFTWARE\Microsoft\Cryptography -> MachineGuid
MACHINE_GUID_REGISTRY_PATH: str = r"SOFTWARE\Microsoft\Cryptography"
MACHINE_GUID_VALUE_NAME: str = "MachineGuid"

# Other platforms: first readable file wins
MACHINE_ID_FILES: List[Path] = [
    Path("/etc/machine-id"),
    Path("/var/lib/dbus/machine-id"),
]


# ============================================================================
# KEY CONTAINER LAYOUT
# ============================================================================

PROGRAM_DATA_DIR: Path = Path(os.environ.get("ProgramData", r"C:\ProgramData"))
KEYS_SUBPATH: Path = Path("Microsoft") / "Crypto" / "Keys"
KEYS_DIR: Path = PROGRAM_DATA_DIR / KEYS_SUBPATH

# Filename schema: container_identifier[_suffix]
KEY_NAME_DELIMITER: str = "_"
KEY_NAME_MIN_FIELDS: int = 2


# ============================================================================
# COPY VERIFICATION
# ============================================================================

CHECKSUM_ALGORITHM: HashAlgorithm = HashAlgorithm.SHA256
CHECKSUM_CHUNK_SIZE_BYTES: int = 8192


# ============================================================================
# LOGGING CONFIGURATION
# ============================================================================

LOGGER_NAME: str = "MACHINEKEYSYNC"
LOG_LEVEL: str = "INFO"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SESSION_LOG_FILE_PREFIX: str = "MACHINEKEYSYNC-SESSION"
SESSION_TIMESTAMP_FORMAT: str = "%Y-%m-%d_%H-%M-%S"
