"""
Changelog building for changelog_pr.

This package classifies commits by their conventional-commit prefix,
renders them as a grouped Markdown document and writes it to disk. See
:mod:`changelog_pr.changelog.commit_classifier`,
:mod:`changelog_pr.changelog.renderer` and
:mod:`changelog_pr.changelog.writer` for details.
"""

from .commit_classifier import Category, classify_commit  # noqa: F401
from .commit_model import Commit  # noqa: F401
from .renderer import build_changelog, format_entry, group_commits  # noqa: F401
from .writer import ChangelogWriteError, write_changelog  # noqa: F401
