"""
Git client implementation for changelog_pr.

This module wraps the Git operations needed to publish the changelog:
creating a branch, staging and committing the file, and pushing the
branch. All subprocess calls go through :meth:`GitClient._run` so that
unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for interacting with a Git working copy."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If Git cannot be started, or if the command exits with a
            non-zero status when ``check`` is True.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            logger.error("Failed to execute Git: %s", exc)
            raise GitError(f"Failed to execute git: {exc}") from exc

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # Branch operations
    # ------------------------------------------------------------------
    def branch_exists(self, branch_name: str) -> bool:
        """Return True if a local branch named ``branch_name`` exists."""
        result = self._run(["branch", "--list", branch_name], check=False)
        return bool(result.stdout.strip())

    def create_branch(self, branch_name: str) -> None:
        """Create a branch at the current HEAD and switch to it.

        Raises
        ------
        GitError
            If the branch already exists or cannot be created.
        """
        self._run(["checkout", "-b", branch_name], check=True)

    # ------------------------------------------------------------------
    # Staging, committing, pushing
    # ------------------------------------------------------------------
    def stage_files(self, files: List[str]) -> None:
        """Stage the given files for commit."""
        for file in files:
            self._run(["add", "--", file], check=True)

    def commit(self, message: str) -> None:
        """Create a commit with the given message.

        Raises
        ------
        GitError
            If the commit fails, for example when nothing is staged.
        """
        self._run(["commit", "-m", message], check=True)

    def push_branch(self, branch_name: str, remote: str = "origin") -> None:
        """Push ``branch_name`` to ``remote`` and set it as upstream.

        Raises
        ------
        GitError
            If the push is rejected.
        """
        self._run(["push", "--set-upstream", remote, branch_name], check=True)
