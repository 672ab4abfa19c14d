"""Configuration loading and management."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from gridstat.core.exceptions import ConfigError, ConfigNotFoundError

DEFAULT_QSTAT_COMMAND = "qstat"
DEFAULT_QSTAT_ARGS = ["-xml", "-f", "-F", "-u", "*"]


@dataclass
class GridStatConfig:
    """Loaded configuration."""

    qstat: dict[str, Any] = field(default_factory=dict)
    display: dict[str, Any] = field(default_factory=dict)

    _source_path: Path | None = field(default=None, repr=False)

    @property
    def qstat_command(self) -> list[str]:
        """Full qstat command line, executable first."""
        command = self.qstat.get("command", DEFAULT_QSTAT_COMMAND)
        args = self.qstat.get("args", DEFAULT_QSTAT_ARGS)
        if not isinstance(command, str) or not isinstance(args, list):
            raise ConfigError("[qstat] command must be a string and args a list")
        return [command, *(str(a) for a in args)]

    @property
    def expand_tasks(self) -> bool:
        return bool(self.display.get("expand_tasks", False))

    @property
    def timestamp_format(self) -> str | None:
        """strftime format for job timestamps; None keeps the raw text."""
        fmt = self.display.get("timestamp_format")
        if fmt is not None and not isinstance(fmt, str):
            raise ConfigError("[display] timestamp_format must be a string")
        return fmt or None


def find_config_file() -> Path | None:
    """Find configuration file in priority order.

    Search order:
    1. ./gridstat.toml (current directory)
    2. ./pyproject.toml [tool.gridstat] section
    3. Git repository root gridstat.toml
    4. ~/.config/gridstat/config.toml
    """
    cwd = Path.cwd()
    if (cwd / "gridstat.toml").exists():
        return cwd / "gridstat.toml"

    if (cwd / "pyproject.toml").exists():
        try:
            with open(cwd / "pyproject.toml", "rb") as f:
                pyproject = tomllib.load(f)
            if "gridstat" in pyproject.get("tool", {}):
                return cwd / "pyproject.toml"
        except tomllib.TOMLDecodeError:
            pass

    git_root = _find_git_root(cwd)
    if git_root and (git_root / "gridstat.toml").exists():
        return git_root / "gridstat.toml"

    user_config = Path.home() / ".config" / "gridstat" / "config.toml"
    if user_config.exists():
        return user_config

    return None


def _find_git_root(start: Path) -> Path | None:
    """Find git repository root."""
    current = start.resolve()
    while current != current.parent:
        if (current / ".git").exists():
            return current
        current = current.parent
    return None


def load_config(path: Path | str | None = None) -> GridStatConfig:
    """Load configuration from file.

    Args:
        path: Explicit config path or None to auto-discover

    Raises:
        ConfigNotFoundError: If an explicit *path* does not exist.
        ConfigError: If the file is not valid TOML.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            return GridStatConfig()

    path = Path(path)
    if not path.exists():
        raise ConfigNotFoundError(f"Config file not found: {path}")

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    if path.name == "pyproject.toml":
        data = data.get("tool", {}).get("gridstat", {})

    config = GridStatConfig(
        qstat=data.get("qstat", {}),
        display=data.get("display", {}),
    )
    config._source_path = path

    return config


# Global config cache
_cached_config: GridStatConfig | None = None


def get_config() -> GridStatConfig:
    """Get the global configuration (cached)."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(path: Path | str | None = None) -> GridStatConfig:
    """Reload configuration (clears cache)."""
    global _cached_config
    _cached_config = load_config(path)
    return _cached_config
