"""
Version control system (VCS) integration.

This package contains the client used to branch, commit and push the
generated changelog with Git.
"""

from .git_client import GitClient, GitError  # noqa: F401
