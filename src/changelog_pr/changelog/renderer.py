"""
Rendering of commits into a Markdown changelog.

Each commit becomes one list item linking its short hash to the commit
page, followed by the author and the message without its
conventional-commit prefix. Items are grouped by category and emitted
in fixed section order; sections with no items are left out entirely.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

from changelog_pr.changelog.commit_classifier import Category, classify_commit
from changelog_pr.changelog.commit_model import Commit


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# Rendered sections in document order.
SECTIONS: List[Tuple[Category, str]] = [
    (Category.FEATURE, "Features"),
    (Category.CONFIGURATION, "Configurations"),
    (Category.FIX, "Issues"),
]
OTHER_SECTION: Tuple[Category, str] = (Category.OTHER, "Other Changes")

GROUPED_CATEGORIES = (
    Category.FEATURE,
    Category.FIX,
    Category.CONFIGURATION,
    Category.OTHER,
)


def commit_prefix(message: str) -> str:
    """Return the text before the first colon, or ``""`` if there is none."""
    if ":" not in message:
        return ""
    return message.split(":", 1)[0]


def strip_prefix(message: str) -> str:
    """Remove the first ``<prefix>:`` occurrence and trim whitespace."""
    if ":" not in message:
        return message.strip()
    return message.replace(commit_prefix(message) + ":", "", 1).strip()


def format_entry(commit: Commit) -> str:
    """Format a commit as a Markdown list item."""
    return (
        f"- ([{commit.short_sha}]({commit.html_url})) - "
        f"<{commit.author_name}> - {strip_prefix(commit.message)}"
    )


def group_commits(commits: Iterable[Commit]) -> Dict[Category, List[str]]:
    """Group formatted entries by category, preserving input order.

    Chore commits are dropped, so the result only has keys for the
    feature, fix, configuration and other categories.
    """
    groups: Dict[Category, List[str]] = {category: [] for category in GROUPED_CATEGORIES}
    for commit in commits:
        category = classify_commit(commit.message)
        if category is Category.CHORE:
            logger.debug("Skipping chore commit %s", commit.short_sha)
            continue
        groups[category].append(format_entry(commit))
    return groups


def render_section(title: str, lines: List[str]) -> str:
    return f"### {title}\n\n" + "\n".join(lines) + "\n\n"


def build_changelog(
    commits: Iterable[Commit], owner: str, repo: str, include_other: bool = False
) -> str:
    """Render the changelog document for ``commits``.

    Parameters
    ----------
    commits : Iterable[Commit]
        Commits in the order they should appear within each section.
    owner : str
        Repository owner, shown under the title.
    repo : str
        Repository name, used as the document title.
    include_other : bool, optional
        Append an "Other Changes" section for commits without a
        recognised prefix. Off by default, in which case those commits
        are classified but not rendered.

    Returns
    -------
    str
        The Markdown document.
    """
    groups = group_commits(commits)
    logger.debug(
        "Grouped commits: %s",
        {category.value: lines for category, lines in groups.items()},
    )

    sections = list(SECTIONS)
    if include_other:
        sections.append(OTHER_SECTION)

    document = f"# {repo}\n##### by {owner}\n"
    for category, title in sections:
        if groups[category]:
            document += render_section(title, groups[category])
    logger.debug("Rendered changelog:\n%s", document)
    return document
