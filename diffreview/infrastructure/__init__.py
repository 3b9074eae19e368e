"""Infrastructure components for diffreview.

This layer handles external system interactions:
- git and jj via their CLIs
- Session files on disk
- YAML configuration

Organized into:
- vcs/ - VCS backends (git, jj), detection and command running
- storage.py - JSON session persistence
- config.py - configuration loading
"""

from .config import ConfigError, DiffReviewConfig, load_config
from .storage import SessionStorageError, SessionStore, default_data_dir
from .vcs import (
    GitBackend,
    JjBackend,
    VcsBackend,
    VcsCommandError,
    VcsError,
    VcsNotFoundError,
    create_backend,
    detect_vcs,
)

__all__ = [
    # Configuration
    "ConfigError",
    "DiffReviewConfig",
    "load_config",
    # Session storage
    "SessionStorageError",
    "SessionStore",
    "default_data_dir",
    # VCS backends
    "GitBackend",
    "JjBackend",
    "VcsBackend",
    "VcsCommandError",
    "VcsError",
    "VcsNotFoundError",
    "create_backend",
    "detect_vcs",
]
