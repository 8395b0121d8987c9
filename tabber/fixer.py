"""Fix the indentation of whole documents and batches of documents.

This is the boundary the command line tool (or an editor integration) calls.
Nothing here touches files: documents come in as line sequences and the
edits go back out inside the results, for the caller to apply.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .analyzer import IndentationAnalysisResult, analyze
from .converter import ConversionOptions, LineEdit, convert
from .preserver import PreservedRegion, capture_regions

logger = logging.getLogger("tabber.fixer")

FileId = str | int


@dataclass(frozen=True)
class IndentationFixResult:
    name: FileId
    lines_changed: int = 0
    spaces_replaced: int = 0
    success: bool = True
    error: str | None = None
    edits: tuple[LineEdit, ...] = ()


@dataclass
class IndentationFixSummary:
    total_files: int = 0
    total_files_fixed: int = 0
    total_lines_changed: int = 0
    total_spaces_replaced: int = 0
    failed_files: list[FileId] = field(default_factory=list)
    results: list[IndentationFixResult] = field(default_factory=list)

    def add(self, result: IndentationFixResult) -> None:
        self.total_files += 1
        self.results.append(result)
        if not result.success:
            self.failed_files.append(result.name)
            return
        if result.lines_changed > 0:
            self.total_files_fixed += 1
        self.total_lines_changed += result.lines_changed
        self.total_spaces_replaced += result.spaces_replaced

    def mark_failed(self, index: int, error: str) -> None:
        """Turn ``results[index]`` into a failure, e.g. when saving it failed."""

        result = self.results[index]
        if not result.success:
            return
        if result.lines_changed > 0:
            self.total_files_fixed -= 1
        self.total_lines_changed -= result.lines_changed
        self.total_spaces_replaced -= result.spaces_replaced
        self.results[index] = IndentationFixResult(
            name=result.name, success=False, error=error
        )
        self.failed_files.append(result.name)


def analyze_indentation(lines: Sequence[str]) -> IndentationAnalysisResult:
    return analyze(lines)


def capture_literal_regions(full_text: str) -> tuple[PreservedRegion, ...]:
    return capture_regions(full_text)


def generate_conversion_edits(
    lines: Sequence[str], options: ConversionOptions | None = None
) -> tuple[LineEdit, ...]:
    options = options or ConversionOptions()
    return convert(lines, options, _regions_for(lines, options)).edits


def _regions_for(
    lines: Sequence[str], options: ConversionOptions
) -> tuple[PreservedRegion, ...] | None:
    if not options.preserve_literals:
        return None
    return capture_regions("\n".join(lines))


def fix_single_file(
    lines: Sequence[str],
    options: ConversionOptions | None = None,
    *,
    name: FileId = "<document>",
) -> IndentationFixResult:
    """Analyze ``lines`` and convert their space indentation to tabs.

    Documents without space or mixed indentation return a successful
    zero-change result straight away. Errors from the lower layers are
    reported in the result instead of being raised.
    """

    options = options or ConversionOptions()
    try:
        analysis = analyze(lines)
        stats = analysis.stats
        if stats.space_indented_lines == 0 and stats.mixed_indentation_lines == 0:
            logger.debug("%s: no space indentation, nothing to convert", name)
            return IndentationFixResult(name=name)

        result = convert(lines, options, _regions_for(lines, options))
    except Exception as exc:
        logger.warning("Could not fix indentation in %s: %s", name, exc)
        return IndentationFixResult(name=name, success=False, error=str(exc) or repr(exc))

    logger.debug(
        "%s: %d lines changed, %d spaces replaced",
        name,
        result.lines_changed,
        result.spaces_replaced,
    )
    return IndentationFixResult(
        name=name,
        lines_changed=result.lines_changed,
        spaces_replaced=result.spaces_replaced,
        edits=result.edits,
    )


def fix_all_files(
    documents: Iterable[Sequence[str]],
    options: ConversionOptions | None = None,
    *,
    names: Sequence[FileId] | None = None,
) -> IndentationFixSummary:
    """Run :func:`fix_single_file` over ``documents`` in order.

    Results are identified by ``names`` when given and by their 0-based
    position otherwise. A failing document never stops the batch.
    """

    summary = IndentationFixSummary()
    for index, lines in enumerate(documents):
        name = names[index] if names is not None else index
        summary.add(fix_single_file(lines, options, name=name))
    return summary


def create_report(summary: IndentationFixSummary) -> str:
    report = [
        "Indentation Fix Report",
        "======================",
        "",
        f"Total files processed: {summary.total_files}",
        f"Files with fixes applied: {summary.total_files_fixed}",
        f"Total lines changed: {summary.total_lines_changed}",
        f"Total spaces replaced: {summary.total_spaces_replaced}",
    ]

    if summary.failed_files:
        report.append("")
        report.append(f"Files that failed to process ({len(summary.failed_files)}):")
        report.extend(f"- {name}" for name in summary.failed_files)

    report.append("")
    report.append("Detailed Results:")
    for result in summary.results:
        if not result.success:
            report.append(f"✗ {result.name}: Failed - {result.error}")
        elif result.lines_changed > 0:
            report.append(
                f"✓ {result.name}: {result.lines_changed} lines changed, "
                f"{result.spaces_replaced} spaces replaced"
            )
        else:
            report.append(f"✓ {result.name}: No changes needed")

    return "\n".join(report) + "\n"


__all__ = [
    "IndentationFixResult",
    "IndentationFixSummary",
    "analyze_indentation",
    "capture_literal_regions",
    "generate_conversion_edits",
    "fix_single_file",
    "fix_all_files",
    "create_report",
]
