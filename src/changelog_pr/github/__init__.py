"""
GitHub REST API integration for changelog_pr.

This package contains the :class:`GitHubClient` used to list recent
commits and to open pull requests.
"""

from .github_client import GitHubClient, GitHubError  # noqa: F401
