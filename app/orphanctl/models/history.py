"""Run record model for the cleanup audit trail.

Each cleanup run that deletes files is recorded as one RunRecord in a
JSON Lines history file, so past deletions can be reviewed later.
"""

import json
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from orphanctl.cleanup.models import CleanupResult


@dataclass(frozen=True, slots=True)
class RunRecord:
    """Record of a single cleanup run.

    Attributes:
        id: Unique identifier (12-character hex string from UUID).
        timestamp: When the run finished (ISO 8601 format with timezone).
        location: Root location that was cleaned.
        older_than: Retention cutoff used (ISO 8601).
        deleted: Paths deleted successfully.
        failed: Mapping of path to error message for failed deletes.
        metadata: Additional context (command, match mode, etc.).
    """

    id: str
    timestamp: str
    location: str
    older_than: str
    deleted: tuple[str, ...] = ()
    failed: dict[str, str] = field(default_factory=lambda: {})
    metadata: dict[str, Any] = field(default_factory=lambda: {})

    def __post_init__(self) -> None:
        """Reject records missing an ID, timestamp or location."""
        if not self.id:
            msg = "Run record ID cannot be empty"
            raise ValueError(msg)
        if not self.timestamp:
            msg = "Timestamp cannot be empty"
            raise ValueError(msg)
        if not self.location:
            msg = "Location cannot be empty"
            raise ValueError(msg)

    @property
    def attempted(self) -> int:
        """Number of deletes attempted during the run."""
        return len(self.deleted) + len(self.failed)

    @property
    def success(self) -> bool:
        """Whether every attempted delete succeeded."""
        return not self.failed

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form written to the history file."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "location": self.location,
            "older_than": self.older_than,
            "deleted": list(self.deleted),
            "failed": self.failed,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RunRecord":
        """Rebuild a record from its dict form.

        Missing ``deleted``, ``failed`` and ``metadata`` default to empty;
        a missing ``id``, ``timestamp``, ``location`` or ``older_than``
        raises KeyError.
        """
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            location=data["location"],
            older_than=data["older_than"],
            deleted=tuple(data.get("deleted", [])),
            failed=dict(data.get("failed", {})),
            metadata=data.get("metadata", {}),
        )

    def to_json_line(self) -> str:
        """Compact JSON without a trailing newline."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> "RunRecord":
        """Deserialize from JSON line.

        Raises:
            json.JSONDecodeError: If line is not valid JSON.
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        data = json.loads(line.strip())
        return cls.from_dict(data)


def create_run_record(
    result: CleanupResult,
    metadata: dict[str, Any] | None = None,
) -> RunRecord:
    """Build a RunRecord from a finished cleanup run.

    The record gets a fresh 12-character ID and the current UTC time;
    failed deletes keep their error messages.
    """
    return RunRecord(
        id=uuid.uuid4().hex[:12],
        timestamp=datetime.now(UTC).isoformat(),
        location=result.location,
        older_than=result.older_than.isoformat(),
        deleted=tuple(result.report.deleted),
        failed={o.path: o.error or "" for o in result.report.failures},
        metadata=metadata or {},
    )
