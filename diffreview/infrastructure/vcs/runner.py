"""VCS command runner.

Infrastructure component that wraps subprocess calls to the git and jj CLIs.
This abstraction allows backends to be tested without actually calling a VCS.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one CLI invocation."""

    success: bool
    stdout: str = ""
    stderr: str = ""

    @property
    def output(self) -> str:
        """Stdout with surrounding whitespace removed."""
        return self.stdout.strip()


class CommandRunner(Protocol):
    """Protocol for running VCS commands."""

    def run(self, cmd: list[str], cwd: str | Path) -> CommandResult:
        """Run a command in a directory and return its result."""
        ...


@dataclass
class SubprocessRunner:
    """Runs VCS commands via subprocess.

    This is the production implementation of CommandRunner.
    For testing, mock this class or use a fake implementation.
    """

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def run(self, cmd: list[str], cwd: str | Path) -> CommandResult:
        """Run a command without raising on a non-zero exit.

        Args:
            cmd: Command and arguments (e.g., ["git", "diff", "HEAD"])
            cwd: Working directory for the command

        Returns:
            CommandResult; success is False for a non-zero exit or a
            missing executable
        """
        logger.debug("Running %s in %s", " ".join(cmd), cwd)
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                check=True,
            )
            return CommandResult(success=True, stdout=result.stdout, stderr=result.stderr)
        except subprocess.CalledProcessError as e:
            return CommandResult(success=False, stdout=e.stdout or "", stderr=e.stderr or "")
        except FileNotFoundError as e:
            return CommandResult(success=False, stderr=str(e))
