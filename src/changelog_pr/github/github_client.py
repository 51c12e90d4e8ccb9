"""
Client for the GitHub REST API.

This client wraps the two HTTP requests the tool needs: listing the
recent commits of a repository and opening a pull request. On error
conditions (connection failures, timeouts, unexpected status codes,
malformed payloads) a :class:`GitHubError` is raised. No request is
retried.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from changelog_pr.changelog.commit_model import Commit


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class GitHubError(Exception):
    """Raised when a request to the GitHub API fails."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class GitHubClient:
    """Client for the GitHub REST API.

    Parameters
    ----------
    token : str
        Token sent as a bearer credential.
    api_url : str, optional
        Base URL of the API. Defaults to ``https://api.github.com``.
    api_version : str, optional
        Value of the ``X-GitHub-Api-Version`` header.
    request_timeout : float, optional
        Timeout in seconds for HTTP requests. Defaults to 30 seconds.
    """

    token: str = field(repr=False)
    api_url: str = "https://api.github.com"
    api_version: str = "2022-11-28"
    request_timeout: float = 30.0

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "X-GitHub-Api-Version": self.api_version,
        }

    def _request(self, method: str, path: str, expected_status: int, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body.

        Raises
        ------
        GitHubError
            If the request fails, the status differs from
            ``expected_status`` or the body is not JSON.
        """
        url = f"{self.api_url}{path}"
        logger.debug("Sending %s request to %s", method, url)
        try:
            response = requests.request(
                method,
                url,
                headers=self._headers(),
                timeout=self.request_timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            logger.error("Request to GitHub failed: %s", exc)
            raise GitHubError(f"Request to {url} failed: {exc}") from exc
        if response.status_code != expected_status:
            logger.error(
                "GitHub returned status %s for %s %s: %s",
                response.status_code,
                method,
                url,
                response.text,
            )
            raise GitHubError(
                f"GitHub returned status {response.status_code} for {method} {path}: {response.text}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            logger.error("Failed to parse GitHub response: %s", exc)
            raise GitHubError(f"Failed to parse GitHub response for {method} {path}") from exc

    def list_commits(self, owner: str, repo: str) -> List[Commit]:
        """Return the first page of commits of ``owner/repo``.

        Commits are returned in the order the API lists them (newest
        first).

        Raises
        ------
        GitHubError
            If the request fails or the payload is not a list of commits.
        """
        data = self._request("GET", f"/repos/{owner}/{repo}/commits", 200)
        if not isinstance(data, list):
            raise GitHubError("Unexpected response structure from commit listing")
        try:
            commits = [Commit.from_api(item) for item in data]
        except (KeyError, TypeError) as exc:
            logger.error("Malformed commit in GitHub response: %s", exc)
            raise GitHubError(f"Malformed commit in GitHub response: {exc}") from exc
        logger.debug("Fetched %d commit(s) from %s/%s", len(commits), owner, repo)
        return commits

    def create_pull_request(
        self, owner: str, repo: str, title: str, body: str, head: str, base: str
    ) -> str:
        """Open a pull request and return its web URL.

        Raises
        ------
        GitHubError
            If GitHub rejects the request, for example because a pull
            request for ``head`` already exists.
        """
        payload = {"title": title, "body": body, "head": head, "base": base}
        data = self._request("POST", f"/repos/{owner}/{repo}/pulls", 201, json=payload)
        if not isinstance(data, dict):
            raise GitHubError("Unexpected response structure from pull request creation")
        return data.get("html_url", "")
