"""Shared utilities used across the reservation assistant."""

import re
from typing import Iterable


def keyword_pattern(keywords: Iterable[str]) -> re.Pattern[str]:
    r"""Compile a case-insensitive, word-bounded alternation of keywords.

    Keywords are regex fragments, so ``non.?veg`` matches "non-veg" and
    "nonveg" alike.

    Examples:
        >>> bool(keyword_pattern(["book", "table"]).search("Book a TABLE"))
        True
        >>> bool(keyword_pattern(["eat"]).search("great"))
        False
    """
    return re.compile(r"\b(" + "|".join(keywords) + r")\b", re.IGNORECASE)


def matches_any(pattern: re.Pattern[str], text: str) -> bool:
    """Return True if ``pattern`` occurs anywhere in ``text``."""
    return pattern.search(text) is not None
