"""
Publishing of the generated changelog as a pull request.

The :class:`Publisher` runs a fixed sequence of steps: create a branch,
stage and commit the changelog, push the branch and open a pull request.
Steps run in order and the first failure stops the sequence. Nothing is
rolled back, so a failed pull request leaves the pushed branch in place.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from changelog_pr.config.loader import ChangelogConfig
from changelog_pr.github.github_client import GitHubClient, GitHubError
from changelog_pr.vcs.git_client import GitClient, GitError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


COMMIT_MESSAGE = "chore: update CHANGELOG.md"
PULL_REQUEST_TITLE = "Update CHANGELOG.md"
PULL_REQUEST_BODY = "Automated changelog update generated from the latest commits."
REMOTE = "origin"


class PublishError(Exception):
    """Raised when a publish step fails.

    Attributes
    ----------
    step : str
        Description of the step that failed.
    """

    def __init__(self, step: str, cause: Exception) -> None:
        super().__init__(f"{step} failed: {cause}")
        self.step = step
        self.cause = cause


class Publisher:
    """Commit the changelog on a new branch and propose it as a pull request.

    Parameters
    ----------
    git : GitClient
        Client for the local working copy.
    github : GitHubClient
        Client for the GitHub API.
    config : ChangelogConfig
        Run configuration supplying owner, repository and base branch.
    changelog_file : str
        Path of the changelog relative to the repository root.
    """

    def __init__(
        self,
        git: GitClient,
        github: GitHubClient,
        config: ChangelogConfig,
        changelog_file: str,
    ) -> None:
        self.git = git
        self.github = github
        self.config = config
        self.changelog_file = changelog_file
        self.pull_request_url: Optional[str] = None

    def _create_branch(self, branch: str) -> None:
        if self.git.branch_exists(branch):
            raise GitError(f"Branch '{branch}' already exists")
        self.git.create_branch(branch)

    def _open_pull_request(self, branch: str) -> None:
        self.pull_request_url = self.github.create_pull_request(
            self.config.owner,
            self.config.repo,
            title=PULL_REQUEST_TITLE,
            body=PULL_REQUEST_BODY,
            head=branch,
            base=self.config.base_branch,
        )

    def steps(self, branch: str) -> List[Tuple[str, Callable[[], None]]]:
        """Return the ordered publish steps for ``branch``."""
        return [
            (f"Create branch '{branch}'", lambda: self._create_branch(branch)),
            (f"Stage {self.changelog_file}", lambda: self.git.stage_files([self.changelog_file])),
            ("Commit changelog", lambda: self.git.commit(COMMIT_MESSAGE)),
            (f"Push '{branch}' to {REMOTE}", lambda: self.git.push_branch(branch, REMOTE)),
            (
                f"Open pull request {branch} -> {self.config.base_branch}",
                lambda: self._open_pull_request(branch),
            ),
        ]

    def publish(
        self,
        branch: Optional[str] = None,
        on_step: Optional[Callable[[int, int, str], None]] = None,
    ) -> str:
        """Run every publish step and return the pull request URL.

        Parameters
        ----------
        branch : str, optional
            Branch to create. Defaults to the configured branch.
        on_step : callable, optional
            Called as ``on_step(index, total, description)`` before each
            step runs.

        Raises
        ------
        PublishError
            If any step fails. Later steps are not attempted.
        """
        branch = branch or self.config.branch
        if not branch:
            raise ValueError("No branch configured for publishing")
        steps = self.steps(branch)
        for index, (description, action) in enumerate(steps, start=1):
            if on_step is not None:
                on_step(index, len(steps), description)
            logger.debug("Publish step %d/%d: %s", index, len(steps), description)
            try:
                action()
            except (GitError, GitHubError) as exc:
                logger.error("Publish step '%s' failed: %s", description, exc)
                raise PublishError(description, exc) from exc
        logger.info("Opened pull request: %s", self.pull_request_url)
        return self.pull_request_url or ""
