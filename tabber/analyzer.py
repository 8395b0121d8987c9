"""Classify the leading whitespace of every line in a document."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .indent_utils import (
    classify_leading_whitespace,
    count_leading_spaces,
    extract_leading_whitespace,
    is_blank,
    most_frequent_value,
)


@dataclass(frozen=True)
class IndentationStats:
    total_lines: int = 0
    empty_lines: int = 0
    tab_indented_lines: int = 0
    space_indented_lines: int = 0
    mixed_indentation_lines: int = 0
    # width -> line count, in the order widths were first seen
    space_frequency: dict[int, int] = field(default_factory=dict)


@dataclass(frozen=True)
class IndentationAnalysisResult:
    has_tabs: bool
    dominant_space_width: int | None
    mixed_indent_line_numbers: tuple[int, ...]
    stats: IndentationStats

    @property
    def is_mixed(self) -> bool:
        return bool(self.mixed_indent_line_numbers)


def analyze(lines: Sequence[str]) -> IndentationAnalysisResult:
    """Scan ``lines`` top to bottom and tally their indentation.

    Blank lines only count as empty. A prefix holding any tab counts as tab
    indented, and as mixed too when it also holds a space. Space-only prefixes
    feed the width histogram that picks ``dominant_space_width``.
    """

    total = 0
    empty = 0
    tab_lines = 0
    space_lines = 0
    mixed: list[int] = []
    frequency: dict[int, int] = {}

    for index, line in enumerate(lines):
        total += 1
        if is_blank(line):
            empty += 1
            continue

        prefix = extract_leading_whitespace(line)
        kind = classify_leading_whitespace(prefix)
        if kind in {"tabs", "mixed"}:
            tab_lines += 1
            if kind == "mixed":
                mixed.append(index)
        elif kind == "spaces":
            space_lines += 1
            width = count_leading_spaces(line)
            frequency[width] = frequency.get(width, 0) + 1

    stats = IndentationStats(
        total_lines=total,
        empty_lines=empty,
        tab_indented_lines=tab_lines,
        space_indented_lines=space_lines,
        mixed_indentation_lines=len(mixed),
        space_frequency=frequency,
    )
    return IndentationAnalysisResult(
        has_tabs=tab_lines > 0,
        dominant_space_width=most_frequent_value(frequency),
        mixed_indent_line_numbers=tuple(mixed),
        stats=stats,
    )


__all__ = ["IndentationStats", "IndentationAnalysisResult", "analyze"]
