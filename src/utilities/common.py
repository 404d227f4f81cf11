import hashlib
import shutil
from datetime import datetime
from logging import Logger
from pathlib import Path
from typing import List

from config import CHECKSUM_ALGORITHM, CHECKSUM_CHUNK_SIZE_BYTES
from src.utilities.errors import KeyCopyError


def copy_without_overwrite(logger: Logger, source: Path, destination: Path) -> None:
    """
    Copy a file's bytes to a new path, refusing to replace anything already there.

    The destination is opened in exclusive-create mode so an existing file is
    never overwritten, even if it appears between the check and the copy. File
    timestamps and permission bits are carried over like shutil.copy2 does; a
    failure to carry them over is logged and the byte copy is kept. If
    the copy fails after the destination was created, the partial destination
    is removed again; the source is never touched.

    Args:
        logger: Logger instance for tracking operations and errors
        source: Existing file to duplicate
        destination: Path of the new file - must not exist yet

    Raises:
        KeyCopyError: If the destination exists, cannot be written, the disk is
            full, or any other I/O error occurs
    """
    if destination.exists():
        raise KeyCopyError(f"Destination already exists: {destination}")

    created: bool = False
    try:
        with source.open("rb") as source_handle:
            with destination.open("xb") as destination_handle:
                created = True
                shutil.copyfileobj(
                    source_handle, destination_handle, CHECKSUM_CHUNK_SIZE_BYTES
                )

    except FileExistsError as e:
        raise KeyCopyError(f"Destination already exists: {destination}") from e

    except PermissionError as e:
        if created:
            _discard_partial_copy(logger, destination)
        raise KeyCopyError(f"Permission denied copying to {destination}: {e}") from e

    except OSError as e:
        if created:
            _discard_partial_copy(logger, destination)
        raise KeyCopyError(f"I/O error copying {source.name} to {destination}: {e}") from e

    # Bytes are complete past this point
    try:
        shutil.copystat(source, destination)
    except OSError as e:
        logger.warning(f"Copied {source.name} but could not copy its metadata: {e}")

    logger.debug(f"Copied {source} -> {destination}")


def _discard_partial_copy(logger: Logger, destination: Path) -> None:
    try:
        destination.unlink()
        logger.debug(f"Removed partial copy: {destination}")
    except OSError as e:
        logger.warning(f"Could not remove partial copy {destination}: {e}")


def generate_checksum(logger: Logger, artifact_path: Path) -> str:
    """
    Calculate the checksum of a file by streaming it in fixed-size chunks.

    Args:
        artifact_path: Path object pointing to the file to be hashed - must exist and be readable

    Returns:
        Hexadecimal string representation of the file's checksum

    Raises:
        ValueError: If CHECKSUM_ALGORITHM is not supported by this interpreter
        FileNotFoundError: If the specified file does not exist
        PermissionError: If the file cannot be read due to insufficient permissions
        OSError: If an I/O error occurs during file reading operations
    """
    logger.debug(
        f"Starting checksum generation for {artifact_path.name} using {CHECKSUM_ALGORITHM.value}"
    )

    try:
        hash_object = hashlib.new(CHECKSUM_ALGORITHM.value)
    except ValueError as algorithm_error:
        available_algorithms: List[str] = sorted(hashlib.algorithms_available)
        error_msg: str = (
            f"Unsupported hash algorithm: {CHECKSUM_ALGORITHM.value}. "
            f"Available algorithms: {', '.join(available_algorithms)}"
        )
        logger.error(error_msg)
        raise ValueError(error_msg) from algorithm_error

    start_time: float = datetime.now().timestamp()
    bytes_processed: int = 0

    with artifact_path.open("rb") as artifact_handle:
        for artifact_chunk in iter(
            lambda: artifact_handle.read(CHECKSUM_CHUNK_SIZE_BYTES), b""
        ):
            hash_object.update(artifact_chunk)
            bytes_processed += len(artifact_chunk)

    final_checksum: str = hash_object.hexdigest()
    processing_duration: float = datetime.now().timestamp() - start_time

    logger.debug(
        f"Generated {CHECKSUM_ALGORITHM.value} checksum for {artifact_path.name}: "
        f"{final_checksum[:16]}... ({bytes_processed:,} bytes in {processing_duration:.2f}s)"
    )

    return final_checksum
