"""String helpers for looking at line-leading whitespace."""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Literal

WhitespaceKind = Literal["none", "tabs", "spaces", "mixed"]

_LEADING_RE = re.compile(r"[ \t]*")


def extract_leading_whitespace(line: str) -> str:
    match = _LEADING_RE.match(line)
    return match.group(0) if match else ""


def count_leading_spaces(line: str) -> int:
    """Count the spaces inside the leading whitespace of ``line``.

    Tabs are skipped rather than expanded, so ``"\\t  x"`` counts as 2.
    """

    return extract_leading_whitespace(line).count(" ")


def classify_leading_whitespace(prefix: str) -> WhitespaceKind:
    if not prefix:
        return "none"
    has_tab = "\t" in prefix
    has_space = " " in prefix
    if has_tab and has_space:
        return "mixed"
    return "tabs" if has_tab else "spaces"


def is_blank(line: str) -> bool:
    return not line.strip()


def most_frequent_value(freq: Mapping[int, int]) -> int | None:
    """Return the key with the largest count.

    Ties go to the key inserted first, so callers that fill ``freq`` while
    scanning lines top to bottom get the width seen first.
    """

    best: int | None = None
    best_count = 0
    for value, count in freq.items():
        if count > best_count:
            best = value
            best_count = count
    return best


def expand_tabs_to_spaces(text: str, tab_width: int) -> str:
    # Each tab is worth tab_width spaces wherever it sits; no tab stops.
    return text.replace("\t", " " * tab_width)


def tabs_and_remainder(width: int, tab_width: int) -> str:
    tab_count, remainder = divmod(width, tab_width)
    return "\t" * tab_count + " " * remainder


def count_spaces_replaced(old_prefix: str, new_prefix: str) -> int:
    return old_prefix.count(" ") - new_prefix.count(" ")


__all__ = [
    "WhitespaceKind",
    "extract_leading_whitespace",
    "count_leading_spaces",
    "classify_leading_whitespace",
    "is_blank",
    "most_frequent_value",
    "expand_tabs_to_spaces",
    "tabs_and_remainder",
    "count_spaces_replaced",
]
