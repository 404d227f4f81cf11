import logging
from typing import List

from src.processors.key_inventory import KeyFileEntry


def identifiers_match(embedded_identifier: str, current_identifier: str) -> bool:
    """Ordinal comparison ignoring case, as Windows compares GUID strings."""
    return embedded_identifier.upper() == current_identifier.upper()


def find_mismatched_entries(
    logger: logging.Logger,
    entries: List[KeyFileEntry],
    current_identifier: str,
) -> List[KeyFileEntry]:
    """
    Select the key files whose embedded identifier is not the current one.

    Args:
        logger: Logger instance for tracking operations
        entries: Parsed key files from the inventory stage
        current_identifier: The machine identifier read for this run

    Returns:
        The stale entries, in inventory order. An empty list means every key
        file already carries the current identifier.
    """
    mismatched: List[KeyFileEntry] = []
    for entry in entries:
        if identifiers_match(entry.name.identifier, current_identifier):
            logger.debug(f"Identifier already current: {entry.path.name}")
            continue
        logger.info(
            f"Stale identifier {entry.name.identifier} in {entry.path.name}"
        )
        mismatched.append(entry)

    return mismatched
