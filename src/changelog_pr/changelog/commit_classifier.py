"""
Classification of commit messages into changelog categories.

Messages are matched against an ordered list of prefix rules, evaluated
top to bottom, so ``feat`` wins over ``fix`` which wins over ``config``.
Anything that matches no rule is ``OTHER``; every message therefore
falls into exactly one category.
"""

from __future__ import annotations

import enum
from typing import Callable, List, Tuple


class Category(enum.Enum):
    """Changelog categories a commit can be classified into."""

    FEATURE = "feature"
    FIX = "fix"
    CONFIGURATION = "configuration"
    CHORE = "chore"
    OTHER = "other"


def _starts_with(prefix: str) -> Callable[[str], bool]:
    return lambda message: message.startswith(prefix)


# Evaluated in order; first match wins.
CLASSIFICATION_RULES: List[Tuple[Callable[[str], bool], Category]] = [
    (_starts_with("feat"), Category.FEATURE),
    (_starts_with("fix"), Category.FIX),
    (_starts_with("config"), Category.CONFIGURATION),
    (_starts_with("chore"), Category.CHORE),
]


def classify_commit(message: str) -> Category:
    """Classify a commit message by its conventional-commit prefix.

    Parameters
    ----------
    message : str
        Full commit message. Matching is case-insensitive and anchored at
        the start of the message.

    Returns
    -------
    Category
        The first category whose rule matches, or ``Category.OTHER``.

    Examples
    --------
    >>> classify_commit("Feat: add login")
    <Category.FEATURE: 'feature'>
    >>> classify_commit("update readme")
    <Category.OTHER: 'other'>
    """
    lowered = message.lower()
    for matches, category in CLASSIFICATION_RULES:
        if matches(lowered):
            return category
    return Category.OTHER
