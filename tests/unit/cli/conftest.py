"""Shared fixtures for CLI command tests."""

import os
from pathlib import Path

import pytest

# Well past the default retention period
OLD_MTIME = 1_600_000_000


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and state directories into the test's temp directory."""
    home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(home / "state"))
    return home


@pytest.fixture
def table_dir(tmp_path: Path) -> Path:
    """A table location with one live and one orphan data file."""
    root = tmp_path / "table"
    data = root / "data"
    data.mkdir(parents=True)
    for name in ("live.parquet", "orphan.parquet", "_SUCCESS"):
        f = data / name
        f.write_bytes(b"x")
        os.utime(f, (OLD_MTIME, OLD_MTIME))
    return root


@pytest.fixture
def live_file(tmp_path: Path, table_dir: Path) -> Path:
    """Live path file referencing the live data file."""
    path = tmp_path / "live.txt"
    path.write_text(f"# exported live set\n{table_dir / 'data' / 'live.parquet'}\n")
    return path
