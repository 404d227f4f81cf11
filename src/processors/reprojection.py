"""
Name Reprojection Module

Creates copies of stale key container files under names that carry the
current machine identifier. The container and suffix fields of the original
name are preserved; only the identifier field is replaced. Originals are
never renamed, modified or deleted.

A failure on one file is recorded as a warning and the batch moves on to the
next file, so a single locked or already-present destination never prevents
the remaining keys from being repaired.

Author: Ashiq Gazi
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import List, TypedDict

from tqdm import tqdm

from config import KEY_NAME_DELIMITER
from src.processors.key_inventory import KeyFileEntry, KeyFileName
from src.utilities.common import copy_without_overwrite, generate_checksum
from src.utilities.errors import KeyCopyError


class ReprojectionReport(TypedDict):
    """
    Type definition for the report returned by reproject_key_files.

    Attributes:
        total_entries: Number of stale key files handed to the stage
        copied_files: Destination paths successfully created (or planned, in a dry run)
        warnings: One message per key file that could not be copied
        dry_run: Whether copies were only planned
    """

    total_entries: int
    copied_files: List[str]
    warnings: List[str]
    dry_run: bool


def build_reprojected_name(key_name: KeyFileName, current_identifier: str) -> str:
    """
    Build container_current[_suffix] from a parsed key name.

    A blank or whitespace-only suffix produces no trailing delimiter.
    """
    fields: List[str] = [key_name.container, current_identifier]
    if key_name.suffix.strip():
        fields.append(key_name.suffix)
    return KEY_NAME_DELIMITER.join(fields)


def reproject_entry(entry: KeyFileEntry, current_identifier: str) -> KeyFileEntry:
    """Derive the entry the copy of this key file will become."""
    new_name: KeyFileName = replace(entry.name, identifier=current_identifier)
    file_name: str = build_reprojected_name(entry.name, current_identifier)
    return KeyFileEntry(
        name=new_name,
        directory=entry.directory,
        path=entry.directory / file_name,
    )


def _verify_copy(logger: logging.Logger, source: Path, destination: Path) -> None:
    try:
        source_checksum: str = generate_checksum(logger=logger, artifact_path=source)
        copy_checksum: str = generate_checksum(logger=logger, artifact_path=destination)
    except OSError as e:
        raise KeyCopyError(f"Could not verify copy {destination.name}: {e}") from e

    if source_checksum != copy_checksum:
        raise KeyCopyError(
            f"Checksum mismatch after copying {source.name} to {destination.name}"
        )


def reproject_key_files(
    logger: logging.Logger,
    entries: List[KeyFileEntry],
    current_identifier: str,
    dry_run: bool = False,
) -> ReprojectionReport:
    """
    Copy every stale key file to its reprojected name, one file at a time.

    For each entry the destination is built by joining the entry's own
    directory with container_current[_suffix]. The file's bytes are copied,
    verified by checksum, and the original is left exactly as it was.

    Args:
        logger: Logger instance for tracking operations and errors
        entries: Key files whose embedded identifier is stale
        current_identifier: The machine identifier read for this run
        dry_run: Log the planned copies without creating any file

    Returns:
        ReprojectionReport with the created destinations and per-file warnings.
        Copy failures never raise out of this function.
    """
    logger.info("=" * 80)
    logger.info("KEY NAME REPROJECTION STAGE")
    logger.info("=" * 80)

    report: ReprojectionReport = {
        "total_entries": len(entries),
        "copied_files": [],
        "warnings": [],
        "dry_run": dry_run,
    }

    for entry in tqdm(entries, desc="Reprojecting key files", unit="files"):
        target: KeyFileEntry = reproject_entry(entry, current_identifier)

        if dry_run:
            logger.info(f"[dry run] Would copy {entry.path.name} -> {target.path.name}")
            report["copied_files"].append(str(target.path))
            continue

        try:
            copy_without_overwrite(
                logger=logger, source=entry.path, destination=target.path
            )
            _verify_copy(logger=logger, source=entry.path, destination=target.path)
        except KeyCopyError as e:
            warning_msg: str = f"Failed to copy {entry.path.name}: {e}"
            logger.warning(warning_msg)
            report["warnings"].append(warning_msg)
            continue

        logger.info(f"Successfully copied {entry.path.name} -> {target.path.name}")
        report["copied_files"].append(str(target.path))

    logger.info(
        f"Reprojection stage completed: {len(report['copied_files'])} copied, "
        f"{len(report['warnings'])} failed"
    )
    return report
