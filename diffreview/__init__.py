"""diffreview - review working-copy changes with anchored comments.

A well-structured CLI package following:
- CLI Architecture: Single entry point dispatcher with explicit parameters
- Domain Modeling: Parse-once pattern with type-safe models
- Services Pattern: Core services with dependency injection

Usage:
    python -m diffreview <command> [options]
    diffreview <command> [options]

Structure:
    diffreview/
    ├── __main__.py          # Entry point dispatcher
    ├── domain/              # Domain models (parse-once pattern)
    │   ├── diff.py          # Hunk, DiffLine, FileDiff, unified diff parser
    │   ├── side_by_side.py  # AlignedRow, side-by-side aligner
    │   ├── rename.py        # {old => new} rename path expansion
    │   ├── fingerprint.py   # Diff change fingerprints
    │   ├── review.py        # ReviewSession, FileReviewState, Comment
    │   └── vcs.py           # VcsType, VcsFileChange
    ├── services/            # Business logic services
    │   ├── review_service.py
    │   ├── diff_cache.py
    │   └── export.py
    ├── infrastructure/      # External system interactions
    │   ├── vcs/             # git and jj backends
    │   ├── storage.py       # JSON session files
    │   ├── config.py        # YAML configuration
    │   └── diff_io.py
    └── commands/            # Thin command orchestrators
"""
