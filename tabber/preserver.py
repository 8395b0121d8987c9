"""Lexical detection of string, comment and regex literals.

The converter must not rewrite whitespace that belongs to a literal, so this
module finds the character ranges covered by literals in a document. It is a
best-effort scan built from regular expressions, not a parser: unterminated
literals produce no region, and the regex-literal heuristic can mistake a
division for a regex (or the other way around).

Scanners run in a fixed priority order. A later scanner never claims text an
earlier one already owns: a candidate that starts inside claimed text is
skipped, and a candidate that starts in free text only claims the parts of
its span that are still free. The returned regions therefore never overlap.
"""
from __future__ import annotations

import bisect
import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger("tabber.preserver")

Span = tuple[int, int]


class RegionOffsetError(ValueError):
    """Raised when processed text no longer lines up with captured regions."""


@dataclass(frozen=True)
class PreservedRegion:
    start_offset: int
    end_offset: int
    original_content: str
    kind: str


@dataclass(frozen=True)
class LineProtection:
    """Preserved spans of a single line, as column ranges."""

    starts_inside: bool
    spans: tuple[Span, ...] = ()


class LiteralScanner(Protocol):
    kind: str

    def find(self, text: str, start: int) -> Span | None:
        """Return the next literal span at or after ``start``."""
        ...


class _PatternScanner:
    kind = "literal"
    pattern: re.Pattern[str]

    def find(self, text: str, start: int) -> Span | None:
        match = self.pattern.search(text, start)
        return match.span() if match else None


class StringScanner(_PatternScanner):
    """Quoted strings on a single line; a backslash escapes the next char."""

    kind = "string"

    def __init__(self, quote: str) -> None:
        q = re.escape(quote)
        self.quote = quote
        self.pattern = re.compile(rf"{q}(?:[^{q}\\\n]|\\.)*{q}")


class TemplateScanner(_PatternScanner):
    """Backtick templates, balancing braces one level deep inside ``${...}``."""

    kind = "template"
    pattern = re.compile(
        r"`(?:[^`\\$]|\\.|\$(?!\{)|\$\{(?:[^{}]|\{[^{}]*\})*\})*`", re.DOTALL
    )


class CommentScanner(_PatternScanner):
    def __init__(self, kind: str, pattern: str, flags: int = 0) -> None:
        self.kind = kind
        self.pattern = re.compile(pattern, flags)


class RegexScanner(_PatternScanner):
    """Slash-delimited regex literals, told apart from division by context.

    A candidate is accepted when the previous non-blank character on its line
    cannot end an operand (identifier characters, ``)`` and ``]`` can), unless
    that operand is a keyword such as ``return`` that is followed by an
    expression.
    """

    kind = "regex"
    pattern = re.compile(
        r"/(?![*+/])(?:[^\n/\\\[]|\\.|\[(?:[^\n\]\\]|\\.)*\])+/[dgimsuvy]*"
    )
    _KEYWORDS = frozenset(
        {
            "return",
            "typeof",
            "instanceof",
            "in",
            "of",
            "new",
            "delete",
            "void",
            "throw",
            "case",
            "do",
            "else",
            "yield",
            "await",
        }
    )
    _WORD_BEFORE_RE = re.compile(r"([\w$]+)\s*$")

    def find(self, text: str, start: int) -> Span | None:
        pos = start
        while True:
            match = self.pattern.search(text, pos)
            if match is None:
                return None
            if self._starts_expression(text, match.start()):
                return match.span()
            pos = match.start() + 1

    def _starts_expression(self, text: str, slash: int) -> bool:
        line_start = text.rfind("\n", 0, slash) + 1
        before = text[line_start:slash].rstrip()
        if not before:
            return True
        last = before[-1]
        if last in ")]":
            return False
        if last.isalnum() or last in "_$":
            word = self._WORD_BEFORE_RE.search(before)
            return bool(word) and word.group(1) in self._KEYWORDS
        return True


DEFAULT_SCANNERS: tuple[LiteralScanner, ...] = (
    StringScanner('"'),
    StringScanner("'"),
    TemplateScanner(),
    CommentScanner("line_comment", r"//[^\n]*"),
    CommentScanner("block_comment", r"/\*.*?\*/", re.DOTALL),
    RegexScanner(),
)


def capture_regions(
    full_text: str, scanners: Sequence[LiteralScanner] | None = None
) -> tuple[PreservedRegion, ...]:
    """Return the literal regions of ``full_text`` sorted by offset."""

    claimed: list[Span] = []
    regions: list[PreservedRegion] = []
    for scanner in scanners if scanners is not None else DEFAULT_SCANNERS:
        claimed_starts = [span[0] for span in claimed]
        new_spans: list[Span] = []
        pos = 0
        while pos < len(full_text):
            found = scanner.find(full_text, pos)
            if found is None:
                break
            start, end = found
            if end <= start:
                pos = start + 1
                continue
            owner = _owning_span(claimed, claimed_starts, start)
            if owner is not None:
                pos = owner[1]
                continue
            for frag_start, frag_end in _subtract(claimed, claimed_starts, start, end):
                new_spans.append((frag_start, frag_end))
                regions.append(
                    PreservedRegion(
                        start_offset=frag_start,
                        end_offset=frag_end,
                        original_content=full_text[frag_start:frag_end],
                        kind=scanner.kind,
                    )
                )
            pos = end
        claimed = sorted(claimed + new_spans)

    regions.sort(key=lambda region: region.start_offset)
    logger.debug("Captured %d literal regions", len(regions))
    return tuple(regions)


def _owning_span(claimed: list[Span], starts: list[int], offset: int) -> Span | None:
    idx = bisect.bisect_right(starts, offset) - 1
    if idx >= 0 and claimed[idx][0] <= offset < claimed[idx][1]:
        return claimed[idx]
    return None


def _subtract(claimed: list[Span], starts: list[int], start: int, end: int) -> list[Span]:
    pieces: list[Span] = []
    cursor = start
    idx = max(0, bisect.bisect_right(starts, start) - 1)
    for span_start, span_end in claimed[idx:]:
        if span_start >= end:
            break
        if span_end <= cursor:
            continue
        if cursor < span_start:
            pieces.append((cursor, span_start))
        cursor = max(cursor, span_end)
    if cursor < end:
        pieces.append((cursor, end))
    return pieces


def preserve_content(full_text: str, processor: Callable[[str], str]) -> str:
    """Run ``processor`` over ``full_text`` and put every literal back.

    The processor has to keep the text length so that region offsets still
    point at the same characters afterwards.
    """

    regions = capture_regions(full_text)
    processed = processor(full_text)
    if not regions:
        return processed
    if len(processed) != len(full_text):
        raise RegionOffsetError(
            f"Processor changed text length from {len(full_text)} to {len(processed)}"
        )

    pieces: list[str] = []
    cursor = 0
    for region in regions:
        pieces.append(processed[cursor : region.start_offset])
        pieces.append(region.original_content)
        cursor = region.end_offset
    pieces.append(processed[cursor:])
    return "".join(pieces)


def line_protection(
    lines: Sequence[str], regions: Sequence[PreservedRegion]
) -> list[LineProtection]:
    """Map document-wide regions onto the lines they cover.

    Offsets refer to the lines joined with ``"\\n"``. A line "starts inside"
    a literal when a region opened on an earlier line is still open at its
    first character, as on the body lines of a block comment.
    """

    if not lines:
        return []

    line_starts: list[int] = []
    offset = 0
    for line in lines:
        line_starts.append(offset)
        offset += len(line) + 1

    starts_inside = [False] * len(lines)
    spans: list[list[Span]] = [[] for _ in lines]
    for region in regions:
        idx = bisect.bisect_right(line_starts, region.start_offset) - 1
        while idx < len(lines) and line_starts[idx] < region.end_offset:
            line_start = line_starts[idx]
            line_end = line_start + len(lines[idx])
            if region.start_offset < line_start:
                starts_inside[idx] = True
            col_start = max(region.start_offset, line_start) - line_start
            col_end = min(region.end_offset, line_end) - line_start
            if col_start < col_end:
                spans[idx].append((col_start, col_end))
            idx += 1

    return [
        LineProtection(starts_inside=inside, spans=tuple(line_spans))
        for inside, line_spans in zip(starts_inside, spans)
    ]


__all__ = [
    "PreservedRegion",
    "LineProtection",
    "LiteralScanner",
    "StringScanner",
    "TemplateScanner",
    "CommentScanner",
    "RegexScanner",
    "RegionOffsetError",
    "DEFAULT_SCANNERS",
    "capture_regions",
    "preserve_content",
    "line_protection",
]
