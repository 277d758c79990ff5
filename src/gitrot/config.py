"""Configuration loading and management for gitrot.

Configuration sources are merged in priority order:
    1. Defaults (defined in GitrotConfig)
    2. Global config (~/.gitrot.toml)
    3. Project config (./gitrot.toml)
    4. Explicit config file
    5. Environment variables (GITROT_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(range_days=30)
    >>> config.range_days
    30
    >>> config.staleness_enabled
    True
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Iterator, Literal, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]
VERBOSITY_LEVELS = ("quiet", "normal", "verbose")

SECONDS_PER_DAY = 60 * 60 * 24

ENV_PREFIX = "GITROT_"


@dataclass(frozen=True)
class GitrotConfig:
    """Configuration for a gitrot run.

    Attributes:
        range_days: Staleness threshold in days. ``None`` leaves the stale
            comment search disabled; the block dump and stats still work.
        git_executable: Name or path of the git binary.
        timeout_seconds: How long to wait for ``git blame`` to exit once its
            output has been consumed.
        workers: Files analyzed concurrently (1 = sequential).
        verbosity: Log level for the run: quiet, normal or verbose.
    """

    range_days: Optional[int] = None
    git_executable: str = "git"
    timeout_seconds: int = 30
    workers: int = 1
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        if self.range_days is not None and self.range_days < 0:
            raise ValueError("range_days must be non-negative")
        if not self.git_executable:
            raise ValueError("git_executable must not be empty")
        if self.timeout_seconds < 1:
            raise ValueError("timeout_seconds must be at least 1")
        if self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.verbosity not in VERBOSITY_LEVELS:
            raise ValueError(f"verbosity must be one of {', '.join(VERBOSITY_LEVELS)}")

    @property
    def staleness_enabled(self) -> bool:
        """True when a range is set and stale pairs should be searched for."""
        return self.range_days is not None


# Integer-valued fields; everything else is read from the environment as text
_INT_FIELDS = frozenset({"range_days", "timeout_seconds", "workers"})


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> GitrotConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options do not mask config files.
            The boolean ``verbose`` and ``quiet`` flags map onto ``verbosity``.

    Returns:
        Validated GitrotConfig instance

    Raises:
        ConfigurationError: A config file is missing or unreadable, or the
            merged values do not form a valid configuration.
        InvalidConfigError: A GITROT_* environment variable cannot be parsed.
    """
    merged: dict[str, Any] = {}
    for scope, path in _config_files(config_file):
        merged.update(_load_toml_file(path, scope))
    merged.update(_load_env_vars())
    merged.update(_cli_overrides(overrides))

    try:
        return GitrotConfig(**merged)
    except (TypeError, ValueError) as e:
        # TypeError: a key that is not a GitrotConfig field
        raise ConfigurationError(f"Invalid configuration: {e}")


def _config_files(explicit: Optional[Path]) -> Iterator[tuple[str, Path]]:
    """Yield (scope, path) for every config file that applies, lowest priority first."""
    for scope, path in (
        ("global", Path.home() / ".gitrot.toml"),
        ("project", Path.cwd() / "gitrot.toml"),
    ):
        if path.exists():
            yield scope, path

    if explicit is not None:
        if not explicit.exists():
            raise ConfigurationError(
                f"Config file not found: {explicit}", details={"path": str(explicit)}
            )
        yield "explicit", explicit


def _cli_overrides(overrides: dict[str, Any]) -> dict[str, Any]:
    overrides = dict(overrides)
    verbose = overrides.pop("verbose", False)
    quiet = overrides.pop("quiet", False)
    if quiet:
        overrides["verbosity"] = "quiet"
    elif verbose:
        overrides["verbosity"] = "verbose"
    return {k: v for k, v in overrides.items() if v is not None}


def _load_env_vars() -> dict[str, Any]:
    """Read GITROT_<FIELD> variables, e.g. GITROT_RANGE_DAYS=30 or GITROT_VERBOSITY=quiet."""
    result: dict[str, Any] = {}
    for field in fields(GitrotConfig):
        env_key = ENV_PREFIX + field.name.upper()
        raw = os.environ.get(env_key)
        if raw is None:
            continue
        if field.name not in _INT_FIELDS:
            result[field.name] = raw
            continue
        try:
            result[field.name] = int(raw)
        except ValueError:
            raise InvalidConfigError(env_key, raw, "expected an integer")
    return result


def _load_toml_file(path: Path, scope: str) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(
            f"Invalid {scope} config '{path}': {e}", details={"path": str(path)}
        )
