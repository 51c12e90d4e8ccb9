"""
Top-level package for changelog_pr.

This package exposes the main CLI entry point via the
``changelog_pr.cli`` module.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
