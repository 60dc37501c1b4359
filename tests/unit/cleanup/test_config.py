"""Unit tests for cleanup configuration.

Tests for CleanupConfig validation and TOML load/save.
"""

import sys
import tomllib
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from orphanctl.cleanup.config import (
    CleanupConfig,
    ConfigError,
    ConfigParseError,
    config_to_dict,
    load_config,
    save_config,
)
from orphanctl.cleanup.reconciler import MatchMode
from pydantic import ValidationError


class TestCleanupConfig:
    """Tests for CleanupConfig model."""

    def test_defaults(self) -> None:
        """Defaults match the standard cleanup behavior."""
        config = CleanupConfig()

        assert config.older_than_days == 3.0
        assert config.max_depth == 3
        assert config.max_direct_subdirs == 10
        assert config.max_traversal_depth == 2000
        assert config.executor == "thread"
        assert config.delete_workers == 1
        assert config.match_mode == MatchMode.CONTAINS
        assert config.gc_enabled is True

    def test_budgets(self) -> None:
        """Budgets are derived from the configured limits."""
        config = CleanupConfig(max_depth=2, max_direct_subdirs=5, max_traversal_depth=50)

        assert config.bounded_budget.max_depth == 2
        assert config.bounded_budget.max_direct_subdirs == 5
        assert config.worker_budget.max_depth == 50
        assert config.worker_budget.max_direct_subdirs == sys.maxsize

    def test_cutoff(self) -> None:
        """cutoff subtracts the retention period from the reference time."""
        now = datetime(2026, 1, 31, tzinfo=UTC)
        config = CleanupConfig(older_than_days=7)

        assert config.cutoff(now) == now - timedelta(days=7)

    def test_cutoff_defaults_to_aware_now(self) -> None:
        """Without a reference time, the cutoff is timezone-aware."""
        assert CleanupConfig().cutoff().tzinfo is not None

    def test_rejects_unknown_fields(self) -> None:
        """Unknown fields are rejected."""
        with pytest.raises(ValidationError):
            CleanupConfig.model_validate({"retention": 3})

    def test_rejects_invalid_parallelism(self) -> None:
        """parallelism must be positive."""
        with pytest.raises(ValidationError):
            CleanupConfig(parallelism=0)

    def test_rejects_traversal_depth_not_above_max_depth(self) -> None:
        """Workers must be allowed deeper than the coordinator."""
        with pytest.raises(ValidationError, match="max_traversal_depth"):
            CleanupConfig(max_depth=5, max_traversal_depth=5)

    def test_match_mode_from_string(self) -> None:
        """match_mode accepts its string value."""
        assert CleanupConfig.model_validate({"match_mode": "exact"}).match_mode == MatchMode.EXACT


class TestLoadConfig:
    """Tests for load_config function."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        """A missing config file means defaults."""
        assert load_config(tmp_path / "config.toml") == CleanupConfig()

    def test_loads_values(self, tmp_path: Path) -> None:
        """Values in the file override defaults."""
        path = tmp_path / "config.toml"
        path.write_text('older_than_days = 7\nparallelism = 16\nmatch_mode = "exact"\n')

        config = load_config(path)

        assert config.older_than_days == 7
        assert config.parallelism == 16
        assert config.match_mode == MatchMode.EXACT

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("older_than_days = \n")

        with pytest.raises(ConfigParseError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_content_raises(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("parallelism = -1\n")

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)


class TestSaveConfig:
    """Tests for save_config function."""

    def test_save_and_reload(self, tmp_path: Path) -> None:
        """A saved config loads back unchanged."""
        path = tmp_path / "nested" / "config.toml"
        config = CleanupConfig(older_than_days=5, match_mode=MatchMode.EXACT)

        saved = save_config(config, path)

        assert saved == path
        assert load_config(path) == config

    def test_writes_plain_values(self, tmp_path: Path) -> None:
        """Enums are stored as plain strings."""
        path = tmp_path / "config.toml"
        save_config(CleanupConfig(), path)

        with open(path, "rb") as f:
            data = tomllib.load(f)
        assert data["match_mode"] == "contains"

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """Atomic write leaves no temporary files behind."""
        save_config(CleanupConfig(), tmp_path / "config.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_config_to_dict(self) -> None:
        """config_to_dict contains every field."""
        assert set(config_to_dict(CleanupConfig())) == set(CleanupConfig.model_fields)
