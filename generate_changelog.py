#!/usr/bin/env python
"""
Thin wrapper script to invoke the changelog_pr CLI.

Running ``python generate_changelog.py`` is equivalent to running the
``changelog-pr`` console script installed via ``pyproject.toml``.
"""

from changelog_pr.cli import main


if __name__ == "__main__":
    main(prog_name="changelog-pr")
