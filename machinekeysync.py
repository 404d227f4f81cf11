"""
MachineKeySync Main Entry Point

Repairs machine key container filenames after a sysprep identity change.
Key files under ProgramData\\Microsoft\\Crypto\\Keys embed the machine's
MachineGuid in their names; once sysprep assigns a new MachineGuid, remote
registration can no longer match them. This tool copies each stale key file
to a name carrying the current identifier and leaves the original in place.

Exit codes:
    0  success, or nothing to fix
    1  the session transcript could not be created
    2  the machine identifier could not be read
    3  the key directory does not exist
    4  the key directory could not be listed

Author: Ashiq Gazi
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config import SESSION_LOG_FILE_PREFIX, ExitCode
from src.pipelines import KeyRepairPipeline, RepairReport, write_session_summary
from src.utilities import (
    SessionLogError,
    close_session_log,
    open_session_log,
    session_timestamp,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="machinekeysync",
        description=(
            "Copy machine key container files whose names carry a stale "
            "MachineGuid to names carrying the current one"
        ),
    )
    parser.add_argument(
        "log_dir",
        nargs="?",
        default=None,
        help="directory for the session transcript (default: current directory)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="report the copies that would be made without creating any file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log debug detail for every file",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    log_dir: Path = Path(args.log_dir) if args.log_dir else Path.cwd()
    timestamp: str = session_timestamp()

    try:
        logger: logging.Logger = open_session_log(
            log_dir=log_dir,
            timestamp=timestamp,
            level="DEBUG" if args.verbose else "INFO",
        )
    except SessionLogError as e:
        print(f"Unable to start session transcript: {e}", file=sys.stderr)
        return int(e.exit_code)

    try:
        logger.info("MACHINEKEYSYNC: MACHINE KEY CONTAINER IDENTITY REPAIR")
        if args.dry_run:
            logger.info("Dry run: no files will be created")

        report: RepairReport = KeyRepairPipeline(logger=logger).run(
            dry_run=args.dry_run
        )

        write_session_summary(
            logger=logger,
            report=report,
            summary_path=log_dir / f"{SESSION_LOG_FILE_PREFIX}-{timestamp}.json",
        )

        if report["exit_code"] == ExitCode.SUCCESS:
            logger.info(f"Run finished with status: {report['status']}")
        else:
            logger.error(f"Run aborted with exit code {report['exit_code']}")
        return report["exit_code"]

    finally:
        close_session_log(logger)


if __name__ == "__main__":
    sys.exit(main())
