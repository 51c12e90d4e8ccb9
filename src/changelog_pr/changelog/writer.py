"""
Writing the changelog document to disk.

The previous changelog is removed before the new one is written; the
file is always replaced, never merged.
"""

from __future__ import annotations

import logging
from pathlib import Path


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class ChangelogWriteError(Exception):
    """Raised when the changelog file cannot be removed or written."""

    pass


def remove_changelog(path: Path) -> bool:
    """Delete ``path`` if it exists.

    Returns
    -------
    bool
        True if a file was removed, False if there was nothing to remove.

    Raises
    ------
    ChangelogWriteError
        For any failure other than the file not existing.
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        logger.error("Failed to remove %s: %s", path, exc)
        raise ChangelogWriteError(f"Failed to remove {path}: {exc}") from exc
    logger.info("Removed previous %s", path)
    return True


def write_changelog(content: str, path: Path) -> Path:
    """Replace the changelog at ``path`` with ``content``.

    The file is written as UTF-8. If the old file cannot be removed the
    new one is not written.

    Raises
    ------
    ChangelogWriteError
        If removing the old file or writing the new one fails.
    """
    remove_changelog(path)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to write %s: %s", path, exc)
        raise ChangelogWriteError(f"Failed to write {path}: {exc}") from exc
    logger.debug("Wrote %d characters to %s", len(content), path)
    return path
