"""
Command line interface for the changelog_pr tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``changelog-pr`` command. It orchestrates
configuration loading, commit retrieval, changelog rendering, writing
the changelog file and publishing it as a pull request. Every failure
ends the run with one of the exit codes defined below.
"""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import List, Optional

import click

from changelog_pr import __version__
from changelog_pr.changelog.renderer import build_changelog
from changelog_pr.changelog.writer import ChangelogWriteError, write_changelog
from changelog_pr.config.loader import ConfigError, load_config
from changelog_pr.github.github_client import GitHubClient, GitHubError
from changelog_pr.publisher import Publisher, PublishError
from changelog_pr.vcs.git_client import GitClient

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_CONFIG_ERROR = 3
EXIT_GITHUB_ERROR = 4
EXIT_FILE_ERROR = 5
EXIT_PUBLISH_FAILURE = 6


# ---------------------------------------------------------------------------
# Progress and status display utilities
# ---------------------------------------------------------------------------

class ProgressIndicator:
    """Timed progress line for CI logs."""

    def __init__(self, message: str):
        self.message = message
        self.start_time = None

    def __enter__(self):
        self.start_time = time.time()
        click.echo(f"→ {self.message}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            elapsed = time.time() - self.start_time
            click.echo(f"  ✓ Done ({elapsed:.1f}s)")
        return False


def print_step(step_num: int, total_steps: int, message: str):
    """Print a step indicator."""
    click.echo(f"\n{'='*60}")
    click.echo(f"Step {step_num}/{total_steps}: {message}")
    click.echo(f"{'='*60}")


def print_info(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}")


def print_success(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}")


def print_error(message: str, indent: int = 0):
    """Print an error message to stderr."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


def print_publish_step(index: int, total: int, description: str):
    print_info(f"[{index}/{total}] {description}", indent=1)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

@click.command()
@click.option("--owner", help="Repository owner. Defaults to $INPUT_OWNER.")
@click.option("--repo", help="Repository name. Defaults to $INPUT_REPO.")
@click.option("--token", help="GitHub API token. Defaults to $INPUT_TOKEN.")
@click.option("--ref", help="Current git ref, e.g. refs/heads/main. Defaults to $GITHUB_REF.")
@click.option("--branch", help="Branch to commit the changelog to. Defaults to changelog/<current branch>.")
@click.option("--base", "base_branch", help="Branch the pull request targets.  [default: main]")
@click.option("--output", "output_path", type=click.Path(dir_okay=False), help="Changelog file to write.  [default: CHANGELOG.md]")
@click.option("--api-url", help="GitHub API base URL. Defaults to $GITHUB_API_URL.")
@click.option("--include-other", is_flag=True, help="Add an 'Other Changes' section for unprefixed commits.")
@click.option("--no-publish", is_flag=True, help="Only write the changelog; do not branch, push or open a pull request.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="changelog-pr")
def main(
    owner: Optional[str],
    repo: Optional[str],
    token: Optional[str],
    ref: Optional[str],
    branch: Optional[str],
    base_branch: Optional[str],
    output_path: Optional[str],
    api_url: Optional[str],
    include_other: bool,
    no_publish: bool,
    verbose: bool,
) -> None:
    """Generate CHANGELOG.md from recent commits and open a pull request.

    Inputs are read from the GitHub Actions environment (INPUT_OWNER,
    INPUT_REPO, INPUT_TOKEN, GITHUB_REF); options override them.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    ctx = click.get_current_context(silent=True)

    total_steps = 4 if no_publish else 5
    current_step = 0

    try:
        # Step 1: Load configuration
        current_step += 1
        print_step(current_step, total_steps, "Loading Configuration")

        try:
            config = load_config(
                owner=owner,
                repo=repo,
                token=token,
                ref=ref,
                branch=branch,
                base_branch=base_branch,
                output_path=output_path,
                api_url=api_url,
                include_other=include_other or None,
                require_branch=not no_publish,
            )
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        print_success(f"Repository: {config.owner}/{config.repo}")
        if not no_publish:
            print_info(f"Changelog branch: {config.branch} -> {config.base_branch}", indent=1)

        github = GitHubClient(
            token=config.token,
            api_url=config.api_url,
            api_version=config.api_version,
            request_timeout=config.request_timeout,
        )

        # Step 2: Fetch commits
        current_step += 1
        print_step(current_step, total_steps, "Fetching Commits")

        try:
            with ProgressIndicator(f"Listing commits of {config.owner}/{config.repo}"):
                commits = github.list_commits(config.owner, config.repo)
        except GitHubError as exc:
            print_error(f"Failed to fetch commits: {exc}")
            raise click.exceptions.Exit(EXIT_GITHUB_ERROR)

        print_success(f"Fetched {len(commits)} commit{'s' if len(commits) != 1 else ''}")

        # Step 3: Render changelog
        current_step += 1
        print_step(current_step, total_steps, "Rendering Changelog")

        document = build_changelog(
            commits, config.owner, config.repo, include_other=config.include_other
        )
        print_success(f"Rendered {len(document.splitlines())} lines")

        # Step 4: Write changelog
        current_step += 1
        print_step(current_step, total_steps, "Writing Changelog")

        try:
            write_changelog(document, config.output_path)
        except ChangelogWriteError as exc:
            print_error(str(exc))
            raise click.exceptions.Exit(EXIT_FILE_ERROR)

        print_success(f"Wrote {config.output_path}")

        if no_publish:
            click.echo("\n🎉 Changelog generated.\n")
            raise click.exceptions.Exit(EXIT_SUCCESS)

        # Step 5: Publish
        current_step += 1
        print_step(current_step, total_steps, "Publishing Pull Request")

        repo_root = GitClient.find_repo_root(Path.cwd())
        if repo_root is None:
            print_error("Current directory is not inside a Git repository.")
            raise click.exceptions.Exit(EXIT_PUBLISH_FAILURE)

        changelog_file = os.path.relpath(config.output_path.resolve(), repo_root)
        publisher = Publisher(GitClient(repo_root), github, config, changelog_file)
        try:
            pull_request_url = publisher.publish(on_step=print_publish_step)
        except PublishError as exc:
            print_error(f"Publishing failed: {exc}")
            raise click.exceptions.Exit(EXIT_PUBLISH_FAILURE)

        summary_items: List[str] = [
            f"✓ Branch: {config.branch}",
            f"✓ Pull request: {pull_request_url or '(no URL returned)'}",
        ]
        click.echo("")
        for item in summary_items:
            click.echo(f"  {item}")
        click.echo("\n🎉 Changelog pull request opened.\n")

        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
