"""
Data model for commits read from the GitHub API.

The :class:`Commit` holds the handful of fields the changelog needs from
an entry of the ``GET /repos/{owner}/{repo}/commits`` response.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


SHORT_SHA_LENGTH = 7


@dataclass(frozen=True)
class Commit:
    """Representation of a commit returned by the commit-list endpoint.

    Attributes
    ----------
    html_url : str
        Web URL of the commit, ending with the full commit hash.
    message : str
        Full commit message.
    author_name : str
        Display name of the commit author.
    """

    html_url: str
    message: str
    author_name: str

    @property
    def sha(self) -> str:
        """Full commit hash, taken from the last path segment of the URL."""
        return self.html_url.rstrip("/").rsplit("/", 1)[-1]

    @property
    def short_sha(self) -> str:
        return self.sha[:SHORT_SHA_LENGTH]

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Commit":
        """Build a commit from one element of the API response.

        Raises
        ------
        KeyError, TypeError
            If the payload lacks ``html_url``, ``commit.message`` or
            ``commit.author.name``.
        """
        details = data["commit"]
        return cls(
            html_url=data["html_url"],
            message=details["message"],
            author_name=details["author"]["name"],
        )
