"""Configuration loading.

Settings are read once from an optional YAML file into a typed
DiffReviewConfig. A missing file means all defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from diffreview.domain.vcs import VcsType

CONFIG_ENV_VAR = "DIFFREVIEW_CONFIG"
CONFIG_FILENAME = ".diffreview.yml"
DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when the configuration file is invalid."""

    pass


@dataclass
class DiffReviewConfig:
    """Typed configuration.

    Attributes:
        data_dir: Directory for stored sessions (None for the XDG default)
        vcs: Which VCS to use, or AUTO to detect
        log_level: Standard logging level name
        persist_sessions: Whether review sessions are saved between runs
    """

    data_dir: Path | None = None
    vcs: VcsType = VcsType.AUTO
    log_level: str = DEFAULT_LOG_LEVEL
    persist_sessions: bool = True

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict) -> DiffReviewConfig:
        """Parse config from a YAML mapping.

        Raises:
            ConfigError: If a value is invalid
        """
        try:
            vcs = VcsType.from_string(str(data.get("vcs", VcsType.AUTO.value)))
        except ValueError as e:
            raise ConfigError(str(e))

        log_level = str(data.get("log_level", DEFAULT_LOG_LEVEL)).upper()
        if log_level not in _LOG_LEVELS:
            raise ConfigError(
                f"Invalid log_level: {log_level}. Must be one of: {', '.join(_LOG_LEVELS)}"
            )

        persist_sessions = data.get("persist_sessions", True)
        if not isinstance(persist_sessions, bool):
            raise ConfigError(
                f"Invalid persist_sessions: {persist_sessions!r}. Must be true or false"
            )

        data_dir = data.get("data_dir")
        return cls(
            data_dir=Path(data_dir).expanduser() if data_dir else None,
            vcs=vcs,
            log_level=log_level,
            persist_sessions=persist_sessions,
        )


def find_config_file(path: str | Path | None = None, repo_dir: str | Path | None = None) -> Path | None:
    """Locate the config file.

    Lookup order: explicit path, then $DIFFREVIEW_CONFIG, then
    .diffreview.yml in the repository directory.
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    if repo_dir is not None:
        candidate = Path(repo_dir) / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

    return None


def load_config(path: str | Path | None = None, repo_dir: str | Path | None = None) -> DiffReviewConfig:
    """Load configuration from YAML, falling back to defaults.

    Args:
        path: Explicit config file path
        repo_dir: Repository directory searched for .diffreview.yml

    Returns:
        Parsed configuration

    Raises:
        ConfigError: If an explicitly named file is missing, or any file
            holds invalid YAML or invalid values
    """
    config_path = find_config_file(path, repo_dir)
    if config_path is None:
        return DiffReviewConfig()

    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {config_path}")

    return DiffReviewConfig.from_dict(data)
