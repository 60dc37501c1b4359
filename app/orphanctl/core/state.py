"""Persistence of the cleanup run history.

The history is a JSON Lines file with one RunRecord per line. Runs are
only ever appended; readers tolerate lines they cannot parse.
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

from orphanctl.core.paths import HISTORY_FILENAME, ensure_dir, get_state_dir
from orphanctl.models.history import RunRecord

logger = logging.getLogger(__name__)


class StateManager:
    """Reads and appends run records.

    Storage location: ~/.local/state/orphanctl/history.jsonl
    """

    def __init__(self, state_dir: Path | None = None) -> None:
        """Initialize StateManager.

        Args:
            state_dir: Directory holding the history file.
                Default: ~/.local/state/orphanctl
        """
        self._state_dir = state_dir if state_dir is not None else get_state_dir()

    @property
    def history_path(self) -> Path:
        """Path to the history file."""
        return self._state_dir / HISTORY_FILENAME

    def record_run(self, record: RunRecord) -> None:
        """Append a run record, creating the state directory if needed.

        Raises:
            RuntimeError: If the state directory cannot be created.
            OSError: If the file cannot be written.
        """
        ensure_dir(self._state_dir)
        with self.history_path.open(mode="a", encoding="utf-8") as f:
            f.write(record.to_json_line() + "\n")

    def _iter_records(self) -> Iterator[RunRecord]:
        """Yield records in file order (oldest first), skipping bad lines."""
        if not self.history_path.exists():
            return

        with self.history_path.open(encoding="utf-8") as f:
            for line_num, raw in enumerate(f, start=1):
                line = raw.strip()
                if not line:
                    continue
                try:
                    yield RunRecord.from_json_line(line)
                except (json.JSONDecodeError, KeyError, ValueError, TypeError) as e:
                    logger.warning("Skipping corrupt history line %d: %s", line_num, e)

    def get_history(self, limit: int | None = None) -> list[RunRecord]:
        """Return run records, newest first.

        Args:
            limit: Maximum number of records; all if None.

        Returns:
            Records newest first; empty if no history exists yet.
        """
        records = list(self._iter_records())
        records.reverse()
        return records if limit is None else records[:limit]

    def get_record_by_id(self, id_or_prefix: str) -> RunRecord | None:
        """Find the newest run whose ID starts with ``id_or_prefix``."""
        for record in self.get_history():
            if record.id.startswith(id_or_prefix):
                return record
        return None
