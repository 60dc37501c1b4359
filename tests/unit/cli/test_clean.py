"""Unit tests for the clean command.

Tests for the CLI clean command: confirmation, dry-run, failure
reporting and history recording.
"""

from pathlib import Path
from unittest.mock import patch

from orphanctl.cleanup.errors import DeletionError
from orphanctl.cli.main import app
from orphanctl.core.state import StateManager
from typer.testing import CliRunner

runner = CliRunner()


class TestCleanCommand:
    """Tests for orphanctl clean command."""

    def test_clean_help(self) -> None:
        """Clean command shows help."""
        result = runner.invoke(app, ["clean", "--help"])
        assert result.exit_code == 0
        assert "--dry-run" in result.output
        assert "--yes" in result.output

    def test_dry_run_keeps_files(self, table_dir: Path, live_file: Path) -> None:
        """Dry-run reports the orphan without deleting it."""
        result = runner.invoke(
            app, ["clean", str(table_dir), "--live", str(live_file), "--dry-run"]
        )

        assert result.exit_code == 0
        assert "Dry-run: 1 file would be deleted." in result.output
        assert (table_dir / "data" / "orphan.parquet").exists()
        assert StateManager().get_history() == []

    def test_yes_deletes_orphans(self, table_dir: Path, live_file: Path) -> None:
        """--yes deletes orphans without prompting."""
        result = runner.invoke(app, ["clean", str(table_dir), "--live", str(live_file), "-y"])

        assert result.exit_code == 0
        assert "Deleted 1 orphan file." in result.output
        assert not (table_dir / "data" / "orphan.parquet").exists()
        assert (table_dir / "data" / "live.parquet").exists()
        assert (table_dir / "data" / "_SUCCESS").exists()

    def test_records_history(self, table_dir: Path, live_file: Path) -> None:
        """A real run is recorded to the history file."""
        result = runner.invoke(app, ["clean", str(table_dir), "--live", str(live_file), "-y"])

        assert "Run recorded to history." in result.output
        records = StateManager().get_history()
        assert len(records) == 1
        assert records[0].deleted == (str(table_dir / "data" / "orphan.parquet"),)
        assert records[0].metadata["match_mode"] == "contains"

    def test_confirmation_declined(self, table_dir: Path, live_file: Path) -> None:
        """Declining the prompt aborts without deleting."""
        result = runner.invoke(
            app, ["clean", str(table_dir), "--live", str(live_file)], input="n\n"
        )

        assert result.exit_code == 0
        assert "Aborted." in result.output
        assert (table_dir / "data" / "orphan.parquet").exists()

    def test_confirmation_accepted(self, table_dir: Path, live_file: Path) -> None:
        """Accepting the prompt deletes the orphans."""
        result = runner.invoke(
            app, ["clean", str(table_dir), "--live", str(live_file)], input="y\n"
        )

        assert result.exit_code == 0
        assert not (table_dir / "data" / "orphan.parquet").exists()

    def test_delete_failure_exits_nonzero(self, table_dir: Path, live_file: Path) -> None:
        """Failed deletes are reported and set a failing exit code."""
        with patch(
            "orphanctl.cleanup.operator.delete_local_file",
            side_effect=DeletionError("Cannot delete: busy"),
        ):
            result = runner.invoke(
                app, ["clean", str(table_dir), "--live", str(live_file), "-y"]
            )

        assert result.exit_code == 1
        assert "0 deleted, 1 failed" in result.output
        assert (table_dir / "data" / "orphan.parquet").exists()
        records = StateManager().get_history()
        assert len(records) == 1
        assert records[0].success is False

    def test_no_orphans(self, tmp_path: Path, table_dir: Path) -> None:
        """Nothing to delete exits cleanly."""
        live = tmp_path / "all.txt"
        data = table_dir / "data"
        live.write_text(f"{data / 'live.parquet'}\n{data / 'orphan.parquet'}\n")

        result = runner.invoke(app, ["clean", str(table_dir), "--live", str(live), "-y"])

        assert result.exit_code == 0
        assert "No orphan files found." in result.output

    def test_invalid_delete_workers(self, table_dir: Path, live_file: Path) -> None:
        """--delete-workers must be positive."""
        result = runner.invoke(
            app,
            ["clean", str(table_dir), "--live", str(live_file), "--delete-workers", "0"],
        )

        assert result.exit_code != 0
