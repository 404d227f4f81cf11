"""
Pipelines package for MachineKeySync.

Provides the end-to-end key repair pipeline and its run report.
"""

from .key_repair_pipeline import KeyRepairPipeline, RepairReport, write_session_summary

__all__ = [
    "KeyRepairPipeline",
    "RepairReport",
    "write_session_summary",
]

__version__ = "1.0.0"
