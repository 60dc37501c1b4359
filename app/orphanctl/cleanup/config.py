"""Cleanup configuration and settings.

Configuration is stored in ~/.config/orphanctl/config.toml. Every field
has a default, so a missing file means "use defaults"; command-line
options override file values for a single run.

Example::

    older_than_days = 7
    parallelism = 16
    delete_workers = 4
    match_mode = "contains"
"""

import logging
import os
import sys
import tomllib
from datetime import UTC, datetime, timedelta
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from orphanctl.cleanup.models import TraversalBudget
from orphanctl.cleanup.reconciler import MatchMode
from orphanctl.core.paths import get_config_path

logger = logging.getLogger(__name__)


class CleanupConfig(BaseModel):
    """Settings for orphan file cleanup runs.

    Attributes:
        older_than_days: Retention period; only older files can be orphans.
        parallelism: Maximum workers listing deferred subtrees.
        max_depth: Directory levels the coordinator lists itself.
        max_direct_subdirs: Fanout above which the coordinator defers.
        max_traversal_depth: Safety depth cap for worker traversal.
        executor: Run listing workers on threads or processes.
        delete_workers: Concurrent delete threads (1 = sequential).
        match_mode: Rule matching listed paths against live paths.
        gc_enabled: Whether files under the location may be deleted at all.
    """

    model_config = ConfigDict(extra="forbid")

    older_than_days: Annotated[
        float,
        Field(ge=0, description="Only files older than this many days are removed"),
    ] = 3.0
    parallelism: Annotated[
        int,
        Field(ge=1, le=1024, description="Maximum listing workers"),
    ] = 8
    max_depth: Annotated[
        int,
        Field(ge=0, le=64, description="Coordinator listing depth"),
    ] = 3
    max_direct_subdirs: Annotated[
        int,
        Field(ge=1, description="Coordinator fanout limit"),
    ] = 10
    max_traversal_depth: Annotated[
        int,
        Field(ge=1, description="Worker traversal safety depth"),
    ] = 2000
    executor: Annotated[
        Literal["thread", "process"],
        Field(description="Listing worker type"),
    ] = "thread"
    delete_workers: Annotated[
        int,
        Field(ge=1, le=256, description="Concurrent delete threads"),
    ] = 1
    match_mode: Annotated[
        MatchMode,
        Field(description="Live path matching rule"),
    ] = MatchMode.CONTAINS
    gc_enabled: Annotated[
        bool,
        Field(description="Allow deleting files under the location"),
    ] = True

    @model_validator(mode="after")
    def validate_depths(self) -> "CleanupConfig":
        """Validate that workers can go deeper than the coordinator."""
        if self.max_traversal_depth <= self.max_depth:
            msg = (
                f"max_traversal_depth ({self.max_traversal_depth}) must exceed "
                f"max_depth ({self.max_depth})"
            )
            raise ValueError(msg)
        return self

    @property
    def bounded_budget(self) -> TraversalBudget:
        """Budget for the coordinator walk."""
        return TraversalBudget(
            max_depth=self.max_depth,
            max_direct_subdirs=self.max_direct_subdirs,
        )

    @property
    def worker_budget(self) -> TraversalBudget:
        """Budget for worker walks; fanout is never limited."""
        return TraversalBudget(
            max_depth=self.max_traversal_depth,
            max_direct_subdirs=sys.maxsize,
        )

    def cutoff(self, now: datetime | None = None) -> datetime:
        """Compute the retention cutoff.

        Args:
            now: Reference time; defaults to the current UTC time.

        Returns:
            ``now`` minus the retention period.
        """
        reference = now or datetime.now(UTC)
        return reference - timedelta(days=self.older_than_days)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> CleanupConfig:
    """Load cleanup configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated CleanupConfig; defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or the content doesn't
            match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return CleanupConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return CleanupConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: CleanupConfig, path: Path | None = None) -> Path:
    """Save cleanup configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The CleanupConfig object to save.
        path: Path to save the config. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: CleanupConfig) -> dict[str, Any]:
    """Convert CleanupConfig to a dictionary for TOML serialization.

    Enum values are written as plain strings.

    Args:
        config: The CleanupConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    return config.model_dump(mode="json")
