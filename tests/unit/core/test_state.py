"""Unit tests for StateManager.

Tests for the StateManager class that handles run history persistence.
"""

import json
import logging
from pathlib import Path

import pytest
from orphanctl.core.state import StateManager
from orphanctl.models.history import RunRecord


def _record(record_id: str, deleted: tuple[str, ...] = ("/t/a",)) -> RunRecord:
    return RunRecord(
        id=record_id,
        timestamp="2026-01-31T12:00:00+00:00",
        location="/t",
        older_than="2026-01-28T12:00:00+00:00",
        deleted=deleted,
    )


class TestStateManagerInit:
    """Tests for StateManager initialization."""

    def test_init_with_default_state_dir(self) -> None:
        """StateManager uses default state directory when none provided."""
        manager = StateManager()
        assert manager._state_dir is not None

    def test_history_path_property(self, tmp_path: Path) -> None:
        """history_path returns correct path."""
        manager = StateManager(state_dir=tmp_path)
        assert manager.history_path == tmp_path / "history.jsonl"


class TestRecordRun:
    """Tests for StateManager.record_run method."""

    def test_creates_directories(self, tmp_path: Path) -> None:
        """record_run creates parent directories if needed."""
        manager = StateManager(state_dir=tmp_path / "deep" / "state")

        manager.record_run(_record("aaa111"))

        assert manager.history_path.exists()

    def test_appends_valid_jsonl(self, tmp_path: Path) -> None:
        """Each record is one JSON line."""
        manager = StateManager(state_dir=tmp_path)

        manager.record_run(_record("aaa111"))
        manager.record_run(_record("bbb222"))

        lines = manager.history_path.read_text().splitlines()
        assert [json.loads(line)["id"] for line in lines] == ["aaa111", "bbb222"]


class TestGetHistory:
    """Tests for StateManager.get_history method."""

    @pytest.fixture
    def manager(self, tmp_path: Path) -> StateManager:
        """StateManager with three recorded runs."""
        manager = StateManager(state_dir=tmp_path)
        for record_id in ("aaa111", "bbb222", "ccc333"):
            manager.record_run(_record(record_id))
        return manager

    def test_missing_file_returns_empty(self, tmp_path: Path) -> None:
        """No history file means no records."""
        assert StateManager(state_dir=tmp_path).get_history() == []

    def test_newest_first(self, manager: StateManager) -> None:
        """Records are returned newest first."""
        assert [r.id for r in manager.get_history()] == ["ccc333", "bbb222", "aaa111"]

    def test_limit(self, manager: StateManager) -> None:
        """limit caps the number of records."""
        assert [r.id for r in manager.get_history(limit=2)] == ["ccc333", "bbb222"]

    def test_skips_corrupt_lines(
        self, manager: StateManager, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Corrupt lines are skipped with a warning."""
        with manager.history_path.open("a") as f:
            f.write("{not json\n")
            f.write('{"id": "x"}\n')
            f.write("\n")

        with caplog.at_level(logging.WARNING):
            records = manager.get_history()

        assert len(records) == 3
        assert "Skipping corrupt history line 4" in caplog.text
        assert "Skipping corrupt history line 5" in caplog.text


class TestGetRecordById:
    """Tests for StateManager.get_record_by_id method."""

    def test_full_id(self, tmp_path: Path) -> None:
        """A full ID finds its record."""
        manager = StateManager(state_dir=tmp_path)
        manager.record_run(_record("abc123456789"))

        record = manager.get_record_by_id("abc123456789")

        assert record is not None
        assert record.deleted == ("/t/a",)

    def test_prefix(self, tmp_path: Path) -> None:
        """An ID prefix finds its record."""
        manager = StateManager(state_dir=tmp_path)
        manager.record_run(_record("abc123456789"))

        record = manager.get_record_by_id("abc1")

        assert record is not None
        assert record.id == "abc123456789"

    def test_not_found(self, tmp_path: Path) -> None:
        """Unknown IDs return None."""
        assert StateManager(state_dir=tmp_path).get_record_by_id("nope") is None
