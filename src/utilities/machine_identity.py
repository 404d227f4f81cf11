"""
Machine Identity Reader

Reads the current machine identifier from the host's persistent local-machine
configuration store. On Windows this is the MachineGuid value under
HKEY_LOCAL_MACHINE\\SOFTWARE\\Microsoft\\Cryptography; elsewhere the systemd /
D-Bus machine-id file stands in for it.

Author: Ashiq Gazi
"""

import logging
import platform
from functools import partial
from pathlib import Path
from typing import List, Optional

from config import (
    MACHINE_GUID_REGISTRY_PATH,
    MACHINE_GUID_VALUE_NAME,
    MACHINE_ID_FILES,
)
from src.utilities.errors import IdentityReadError


def _read_registry_machine_guid() -> str:
    import winreg

    # KEY_WOW64_64KEY so a 32-bit interpreter still sees the native hive
    with winreg.OpenKey(
        winreg.HKEY_LOCAL_MACHINE,
        MACHINE_GUID_REGISTRY_PATH,
        0,
        winreg.KEY_READ | winreg.KEY_WOW64_64KEY,
    ) as key:
        value, value_type = winreg.QueryValueEx(key, MACHINE_GUID_VALUE_NAME)
    if not isinstance(value, str):
        raise ValueError(
            f"{MACHINE_GUID_VALUE_NAME} has registry type {value_type}, expected a string"
        )
    return value


def _read_machine_id_file(candidates: List[Path]) -> str:
    last_error: Optional[OSError] = None
    for candidate in candidates:
        try:
            return candidate.read_text(encoding="utf-8")
        except OSError as e:
            last_error = e
    raise OSError(
        f"No readable machine-id file among: {', '.join(str(c) for c in candidates)}"
    ) from last_error


def read_machine_identifier(
    logger: logging.Logger,
    system_name: Optional[str] = None,
    machine_id_files: Optional[List[Path]] = None,
) -> str:
    """
    Read the current machine identifier exactly once for the run.

    There is no fallback value and no retry. Any failure to open the store or
    read the value, or an empty value, is fatal to the run.

    Args:
        logger: Logger instance for recording the lookup
        system_name: Platform name override (defaults to platform.system())
        machine_id_files: Candidate machine-id files for non-Windows hosts

    Returns:
        The machine identifier with surrounding whitespace stripped

    Raises:
        IdentityReadError: If the identifier cannot be read or is empty
    """
    system_name = system_name or platform.system()
    candidates = machine_id_files if machine_id_files is not None else MACHINE_ID_FILES

    if system_name == "Windows":
        source = f"HKLM\\{MACHINE_GUID_REGISTRY_PATH}\\{MACHINE_GUID_VALUE_NAME}"
        reader = _read_registry_machine_guid
        hint = "Run the tool as an administrator on the affected machine."
    else:
        source = ", ".join(str(c) for c in candidates)
        reader = partial(_read_machine_id_file, candidates)
        hint = "Verify that the machine-id file exists and is readable."

    logger.debug(f"Reading machine identifier from {source}")

    # ValueError covers undecodable machine-id bytes and non-string registry values
    try:
        identifier: str = reader().strip()
    except (OSError, ImportError, ValueError) as e:
        raise IdentityReadError(
            f"Unable to read the machine identifier from {source}: {e}. {hint}"
        ) from e

    if not identifier:
        raise IdentityReadError(f"Machine identifier at {source} is empty")

    logger.info(f"Current machine identifier: {identifier}")
    return identifier
