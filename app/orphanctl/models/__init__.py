"""Data models for orphanctl.

This module exports the persisted data structures used by the application.
"""

from orphanctl.models.history import RunRecord, create_run_record

__all__ = [
    "RunRecord",
    "create_run_record",
]
