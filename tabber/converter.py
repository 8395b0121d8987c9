"""Rewrite space indentation as tab indentation, one line edit at a time."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .indent_utils import (
    classify_leading_whitespace,
    count_spaces_replaced,
    expand_tabs_to_spaces,
    extract_leading_whitespace,
    is_blank,
    tabs_and_remainder,
)
from .preserver import LineProtection, PreservedRegion, line_protection

logger = logging.getLogger("tabber.converter")

DEFAULT_TAB_WIDTH = 4


@dataclass(frozen=True)
class ConversionOptions:
    tab_width: int = DEFAULT_TAB_WIDTH
    preserve_indentation_in_empty_lines: bool = True
    only_leading_spaces: bool = True
    preserve_literals: bool = True

    def __post_init__(self) -> None:
        width = self.tab_width
        if isinstance(width, bool) or not isinstance(width, int) or width < 1:
            raise ValueError(f"tab_width must be a positive integer, got {width!r}")


@dataclass(frozen=True)
class LineEdit:
    line_index: int
    original_text: str
    new_text: str


@dataclass(frozen=True)
class ConversionResult:
    edits: tuple[LineEdit, ...] = ()
    lines_changed: int = 0
    spaces_replaced: int = 0


def convert_leading_whitespace(prefix: str, tab_width: int) -> str:
    """Return the tab form of a leading whitespace ``prefix``.

    Space-only prefixes become ``width // tab_width`` tabs plus the leftover
    spaces. Mixed prefixes are first expanded to spaces, so where the tabs
    originally sat is not kept, only the total width. Tab-only and empty
    prefixes come back unchanged.
    """

    kind = classify_leading_whitespace(prefix)
    if kind == "spaces":
        return tabs_and_remainder(len(prefix), tab_width)
    if kind == "mixed":
        return tabs_and_remainder(len(expand_tabs_to_spaces(prefix, tab_width)), tab_width)
    return prefix


def collapse_space_runs(
    text: str, tab_width: int, protected: Sequence[tuple[int, int]] = ()
) -> str:
    """Replace every ``tab_width`` consecutive spaces in ``text`` with a tab.

    Characters inside a ``protected`` column span are copied as they are.
    """

    parts: list[str] = []
    space_run = 0
    spans = sorted(protected)
    span_idx = 0
    i = 0
    while i < len(text):
        while span_idx < len(spans) and spans[span_idx][1] <= i:
            span_idx += 1
        if span_idx < len(spans) and spans[span_idx][0] <= i:
            if space_run:
                parts.append(" " * space_run)
                space_run = 0
            end = spans[span_idx][1]
            parts.append(text[i:end])
            i = end
            continue
        ch = text[i]
        if ch == " ":
            space_run += 1
            if space_run == tab_width:
                parts.append("\t")
                space_run = 0
        else:
            if space_run:
                parts.append(" " * space_run)
                space_run = 0
            parts.append(ch)
        i += 1
    if space_run:
        parts.append(" " * space_run)
    return "".join(parts)


def convert_line(
    line: str, options: ConversionOptions, protection: LineProtection | None = None
) -> str:
    prefix = extract_leading_whitespace(line)
    new_prefix = convert_leading_whitespace(prefix, options.tab_width)
    rest = line[len(prefix) :]
    if not options.only_leading_spaces:
        offset = len(prefix)
        spans = [
            (max(0, start - offset), end - offset)
            for start, end in (protection.spans if protection else ())
            if end > offset
        ]
        rest = collapse_space_runs(rest, options.tab_width, spans)
    return new_prefix + rest


def convert(
    lines: Sequence[str],
    options: ConversionOptions | None = None,
    regions: Sequence[PreservedRegion] | None = None,
) -> ConversionResult:
    """Build the edits that turn the space indentation of ``lines`` into tabs.

    ``regions`` are literal ranges over ``"\\n".join(lines)``; lines that
    begin inside one of them are left alone, and with ``only_leading_spaces``
    off no space run inside a region is collapsed.
    """

    options = options or ConversionOptions()
    protections = line_protection(lines, regions) if regions else None

    edits: list[LineEdit] = []
    spaces_replaced = 0
    for index, line in enumerate(lines):
        if is_blank(line) and not options.preserve_indentation_in_empty_lines:
            continue
        protection = protections[index] if protections is not None else None
        if protection is not None and protection.starts_inside:
            continue

        new_line = convert_line(line, options, protection)
        if new_line == line:
            continue
        edits.append(LineEdit(line_index=index, original_text=line, new_text=new_line))
        spaces_replaced += count_spaces_replaced(
            extract_leading_whitespace(line), extract_leading_whitespace(new_line)
        )

    logger.debug("Generated %d line edits (%d spaces replaced)", len(edits), spaces_replaced)
    return ConversionResult(
        edits=tuple(edits),
        lines_changed=len(edits),
        spaces_replaced=spaces_replaced,
    )


__all__ = [
    "DEFAULT_TAB_WIDTH",
    "ConversionOptions",
    "LineEdit",
    "ConversionResult",
    "convert_leading_whitespace",
    "collapse_space_runs",
    "convert_line",
    "convert",
]
