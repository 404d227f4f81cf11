"""
Key Inventory Module

Lists the machine key container directory and decomposes each filename into
the container_identifier[_suffix] schema used by the Windows key store.

Author: Ashiq Gazi
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from config import KEY_NAME_DELIMITER, KEY_NAME_MIN_FIELDS
from src.utilities.errors import KeyDirectoryAccessError, KeyDirectoryMissingError


@dataclass(frozen=True)
class KeyFileName:
    container: str
    identifier: str
    suffix: str = ""


@dataclass(frozen=True)
class KeyFileEntry:
    """A parsed key container file together with where it lives on disk."""

    name: KeyFileName
    directory: Path
    path: Path


def parse_key_file_name(file_name: str) -> Optional[KeyFileName]:
    """
    Split a filename into container, identifier and optional suffix.

    Returns None when the name has fewer than two delimited fields, meaning
    the file is not a key container and must be left alone. Fields beyond
    the third are not part of the schema.
    """
    fields: List[str] = file_name.split(KEY_NAME_DELIMITER)
    if len(fields) < KEY_NAME_MIN_FIELDS:
        return None

    suffix: str = fields[2] if len(fields) > 2 else ""
    return KeyFileName(container=fields[0], identifier=fields[1], suffix=suffix)


def scan_key_directory(logger: logging.Logger, keys_dir: Path) -> List[KeyFileEntry]:
    """
    Enumerate the files directly inside keys_dir and parse their names.

    The listing is not recursive and subdirectories are skipped. Files whose
    names do not follow the key schema are logged and excluded.

    Args:
        logger: Logger instance for tracking operations and errors
        keys_dir: The machine key container directory

    Returns:
        Parsed entries in directory listing order

    Raises:
        KeyDirectoryMissingError: If keys_dir does not exist
        KeyDirectoryAccessError: If keys_dir exists but cannot be enumerated
    """
    logger.info("=" * 80)
    logger.info("KEY CONTAINER INVENTORY STAGE")
    logger.info("=" * 80)
    logger.info(f"Processing directory: {keys_dir}")

    if not keys_dir.exists():
        raise KeyDirectoryMissingError(
            f"Key directory not found: {keys_dir}. Verify that this machine "
            "has the expected ProgramData\\Microsoft\\Crypto\\Keys layout."
        )

    try:
        listed_items: List[Path] = list(keys_dir.iterdir())
    except PermissionError as e:
        raise KeyDirectoryAccessError(
            f"Permission denied listing {keys_dir}: {e}. "
            "Run the tool from an elevated (administrator) session."
        ) from e
    except OSError as e:
        raise KeyDirectoryAccessError(f"Unable to list {keys_dir}: {e}") from e

    directory_items: List[Path] = []
    for item in listed_items:
        try:
            if not item.is_file():
                continue
        except OSError as e:
            logger.debug(f"Skipping unreadable entry {item.name}: {e}")
            continue
        directory_items.append(item)

    entries: List[KeyFileEntry] = []
    for item in directory_items:
        key_name: Optional[KeyFileName] = parse_key_file_name(item.name)
        if key_name is None:
            logger.debug(f"Skipping non-key file: {item.name}")
            continue
        entries.append(KeyFileEntry(name=key_name, directory=keys_dir, path=item))

    logger.info(
        f"Found {len(entries)} key file(s) among {len(directory_items)} file(s)"
    )
    return entries
