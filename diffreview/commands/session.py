"""Shared wiring for commands that operate on a repository's review session."""

from __future__ import annotations

from diffreview.infrastructure.config import load_config
from diffreview.services.review_service import RefreshResult, ReviewService


def open_review_service(
    repo_dir: str = ".",
    config_path: str | None = None,
) -> tuple[ReviewService, RefreshResult]:
    """Create a ReviewService for a repository and refresh it.

    Raises:
        ConfigError: If the configuration is invalid
        VcsError: If no supported repository contains repo_dir
    """
    config = load_config(config_path, repo_dir=repo_dir)
    service = ReviewService.create(repo_dir, config)
    return service, service.refresh()
