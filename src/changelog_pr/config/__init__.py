"""
Configuration loading for changelog_pr.

Builds the run configuration from the inputs supplied by the CI
environment. See :mod:`changelog_pr.config.loader` for implementation
details.
"""

from .loader import ChangelogConfig, ConfigError, load_config, parse_branch_ref  # noqa: F401
