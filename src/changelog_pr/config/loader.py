"""
Configuration loader for changelog_pr.

The tool runs inside a GitHub Actions job. Action inputs are exposed to
the process as ``INPUT_<NAME>`` environment variables and the runner
provides ``GITHUB_REF`` and ``GITHUB_API_URL``. This loader collects
those values, applies any explicit overrides (for example from command
line options), validates them and returns a :class:`ChangelogConfig`.

If a required value is missing or has the wrong type, a
:class:`ConfigError` is raised.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_API_URL = "https://api.github.com"
DEFAULT_API_VERSION = "2022-11-28"
DEFAULT_BASE_BRANCH = "main"
DEFAULT_OUTPUT_PATH = "CHANGELOG.md"
DEFAULT_REQUEST_TIMEOUT = 30.0
BRANCH_PREFIX = "changelog/"

# Config key -> environment variable supplying it
ENV_VARS: Dict[str, str] = {
    "owner": "INPUT_OWNER",
    "repo": "INPUT_REPO",
    "token": "INPUT_TOKEN",
    "branch": "INPUT_BRANCH",
    "ref": "GITHUB_REF",
    "api_url": "GITHUB_API_URL",
}


class ConfigError(Exception):
    """Raised when the run configuration is missing or invalid."""

    pass


@dataclass(repr=False)
class ChangelogConfig:
    """Validated configuration for a single run.

    Attributes
    ----------
    owner : str
        Account or organization owning the repository.
    repo : str
        Repository name.
    token : str
        Credential for the GitHub REST API.
    branch : str, optional
        Name of the branch the changelog is committed to. Only required
        when publishing.
    base_branch : str
        Branch the pull request targets.
    output_path : Path
        Location of the generated changelog file.
    api_url : str
        Base URL of the GitHub REST API.
    include_other : bool
        Whether commits without a recognised prefix get their own section.
    """

    owner: str
    repo: str
    token: str
    branch: Optional[str] = None
    base_branch: str = DEFAULT_BASE_BRANCH
    output_path: Path = Path(DEFAULT_OUTPUT_PATH)
    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    include_other: bool = False

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks
        return (
            f"ChangelogConfig(owner={self.owner!r}, repo={self.repo!r}, "
            f"branch={self.branch!r}, base_branch={self.base_branch!r}, "
            f"output_path={str(self.output_path)!r}, api_url={self.api_url!r})"
        )


def parse_branch_ref(ref: str) -> str:
    """Return the branch name from a git ref.

    The branch is the final path segment of the ref, so
    ``refs/heads/foo`` becomes ``foo``. A bare branch name is returned
    unchanged.

    Raises
    ------
    ConfigError
        If the ref is empty or ends with a slash.
    """
    name = ref.strip().rsplit("/", 1)[-1]
    if not name:
        raise ConfigError(f"Cannot determine branch name from ref '{ref}'")
    return name


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    require_branch: bool = True,
    **overrides: Any,
) -> ChangelogConfig:
    """Load the run configuration from the CI environment.

    Parameters
    ----------
    environ : Mapping[str, str], optional
        Environment to read from. Defaults to ``os.environ``.
    require_branch : bool, optional
        Fail when no target branch can be determined. Pass False when the
        changelog is only written and not published.
    **overrides
        Explicit values that take precedence over the environment. Keys
        are ``owner``, ``repo``, ``token``, ``branch``, ``ref``,
        ``api_url``, ``base_branch``, ``output_path``,
        ``request_timeout`` and ``include_other``. ``None`` values are
        ignored.

    Returns
    -------
    ChangelogConfig
        The validated configuration. When no ``branch`` is supplied the
        target branch is ``changelog/<current branch>``, where the
        current branch is parsed from ``ref``.

    Raises
    ------
    ConfigError
        If required values are missing or have the wrong type.
    """
    env = os.environ if environ is None else environ
    data: Dict[str, Any] = {}
    for key, var in ENV_VARS.items():
        value = env.get(var)
        if value:
            data[key] = value
    data.update({key: value for key, value in overrides.items() if value is not None})

    required_keys = ["owner", "repo", "token"]
    missing = [key for key in required_keys if not data.get(key)]
    if missing:
        logger.error("Configuration missing required keys: %s", missing)
        raise ConfigError(
            "Missing required configuration keys: "
            + ", ".join(f"{key} ({ENV_VARS[key]})" for key in missing)
        )

    for key in required_keys + ["branch", "ref", "api_url", "base_branch"]:
        if key in data and not isinstance(data[key], str):
            raise ConfigError(f"'{key}' must be a string")

    branch = data.get("branch")
    ref = data.get("ref")
    if not branch and ref:
        branch = BRANCH_PREFIX + parse_branch_ref(ref)
    if not branch and require_branch:
        raise ConfigError(
            "Cannot determine the changelog branch: set 'branch' (INPUT_BRANCH) "
            "or 'ref' (GITHUB_REF)"
        )

    timeout = data.get("request_timeout", DEFAULT_REQUEST_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ConfigError("'request_timeout' must be a number")

    config = ChangelogConfig(
        owner=data["owner"],
        repo=data["repo"],
        token=data["token"],
        branch=branch,
        base_branch=data.get("base_branch", DEFAULT_BASE_BRANCH),
        output_path=Path(data.get("output_path", DEFAULT_OUTPUT_PATH)),
        api_url=data.get("api_url", DEFAULT_API_URL).rstrip("/"),
        request_timeout=float(timeout),
        include_other=bool(data.get("include_other", False)),
    )
    logger.debug("Loaded configuration: %r", config)
    return config
