"""
Key Repair Pipeline Module

Orchestrates a complete repair run: read the current machine identifier,
inventory the key container directory, select stale key files and copy them
to names carrying the current identifier.

Every stage returns a value or raises. The pipeline turns fatal errors into a
RepairReport with RunStatus.FATAL so the caller alone decides how the process
ends; no stage terminates the run on its own.

Author: Ashiq Gazi
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, TypedDict

from config import KEYS_DIR, ExitCode, RunStatus
from src.processors.key_inventory import KeyFileEntry, scan_key_directory
from src.processors.mismatch_filter import find_mismatched_entries
from src.processors.reprojection import ReprojectionReport, reproject_key_files
from src.utilities.errors import KeyRepairError
from src.utilities.machine_identity import read_machine_identifier


class RepairReport(TypedDict):
    """
    Type definition for the report returned by KeyRepairPipeline.run.

    Attributes:
        status: RunStatus value describing how the run ended
        exit_code: Process exit code matching the status
        machine_identifier: Identifier read for the run, None if unreadable
        keys_dir: Directory that was inventoried
        key_files: Number of files matching the key name schema
        mismatched_files: Number of key files with a stale identifier
        copied_files: Destination paths created (or planned, in a dry run)
        warnings: Per-file copy failures
        error: Diagnostic for a fatal error, None otherwise
        dry_run: Whether copies were only planned
        started_at: ISO 8601 start timestamp
        completed_at: ISO 8601 completion timestamp
    """

    status: str
    exit_code: int
    machine_identifier: Optional[str]
    keys_dir: str
    key_files: int
    mismatched_files: int
    copied_files: List[str]
    warnings: List[str]
    error: Optional[str]
    dry_run: bool
    started_at: str
    completed_at: str


class KeyRepairPipeline:
    """
    Repairs key container filenames left stale by a sysprep identity change.

    The run is strictly sequential:
    1. Identity read (once, threaded through every later stage)
    2. Key directory inventory and filename parsing
    3. Case-insensitive identifier mismatch filtering
    4. Copy of each stale file under its reprojected name
    """

    def __init__(
        self,
        logger: logging.Logger,
        keys_dir: Path = KEYS_DIR,
        identity_reader: Callable[[logging.Logger], str] = read_machine_identifier,
    ):
        """
        Initialize the KeyRepairPipeline.

        Args:
            logger: Logger instance for recording pipeline operations and errors
            keys_dir: Machine key container directory to repair
            identity_reader: Callable returning the current machine identifier
        """
        self.logger = logger
        self.keys_dir = keys_dir
        self.identity_reader = identity_reader

    def run(self, dry_run: bool = False) -> RepairReport:
        report: RepairReport = {
            "status": RunStatus.SUCCESS.value,
            "exit_code": int(ExitCode.SUCCESS),
            "machine_identifier": None,
            "keys_dir": str(self.keys_dir),
            "key_files": 0,
            "mismatched_files": 0,
            "copied_files": [],
            "warnings": [],
            "error": None,
            "dry_run": dry_run,
            "started_at": datetime.now().isoformat(),
            "completed_at": "",
        }

        try:
            current_identifier: str = self.identity_reader(self.logger)
            report["machine_identifier"] = current_identifier

            entries: List[KeyFileEntry] = scan_key_directory(
                logger=self.logger, keys_dir=self.keys_dir
            )
            report["key_files"] = len(entries)

        except KeyRepairError as e:
            self.logger.error(str(e))
            report["status"] = RunStatus.FATAL.value
            report["exit_code"] = int(e.exit_code)
            report["error"] = str(e)
            report["completed_at"] = datetime.now().isoformat()
            return report

        mismatched: List[KeyFileEntry] = find_mismatched_entries(
            logger=self.logger,
            entries=entries,
            current_identifier=current_identifier,
        )
        report["mismatched_files"] = len(mismatched)

        if not mismatched:
            self.logger.info("No files to fix.")
            report["status"] = RunStatus.NOTHING_TO_DO.value
            report["completed_at"] = datetime.now().isoformat()
            return report

        self.logger.info(f"Found {len(mismatched)} file(s) to fix")

        reprojection: ReprojectionReport = reproject_key_files(
            logger=self.logger,
            entries=mismatched,
            current_identifier=current_identifier,
            dry_run=dry_run,
        )
        report["copied_files"] = reprojection["copied_files"]
        report["warnings"] = reprojection["warnings"]
        report["completed_at"] = datetime.now().isoformat()

        self.logger.info("Key repair completed")
        return report


def write_session_summary(
    logger: logging.Logger, report: RepairReport, summary_path: Path
) -> bool:
    """
    Save the run report as JSON next to the session transcript.

    A summary that cannot be written is logged and does not change the
    outcome of the run.
    """
    try:
        with open(summary_path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)
    except OSError as e:
        logger.warning(f"Failed to write session summary {summary_path}: {e}")
        return False

    logger.debug(f"Session summary written to {summary_path}")
    return True
