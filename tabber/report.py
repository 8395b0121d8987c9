"""Human readable descriptions of an indentation analysis."""
from __future__ import annotations

from .analyzer import IndentationAnalysisResult


def status_text(result: IndentationAnalysisResult) -> str:
    """Short label for a status line, e.g. ``"4 Spaces (Mixed)"``."""

    if result.has_tabs:
        text = "Tabs"
    elif result.dominant_space_width:
        text = f"{result.dominant_space_width} Spaces"
    else:
        text = "No Indentation"
    if result.is_mixed:
        text += " (Mixed)"
    return text


def summarize_analysis(result: IndentationAnalysisResult) -> str:
    stats = result.stats
    message = "Indentation Analysis: "
    if stats.tab_indented_lines > 0 and stats.space_indented_lines > 0:
        message += (
            f"Mixed indentation - {stats.tab_indented_lines} tab-indented lines, "
            f"{stats.space_indented_lines} space-indented lines"
        )
    elif stats.tab_indented_lines > 0:
        message += "Tab indentation"
    elif stats.space_indented_lines > 0:
        message += f"{result.dominant_space_width}-space indentation"
    else:
        message += "No indentation detected"

    if stats.mixed_indentation_lines > 0:
        message += f" ({stats.mixed_indentation_lines} lines with mixed indentation)"
    return message


def analysis_details(result: IndentationAnalysisResult, limit: int = 10) -> str:
    stats = result.stats
    lines = [
        "Indentation Analysis",
        "====================",
        f"Total lines: {stats.total_lines}",
        f"Empty lines: {stats.empty_lines}",
        f"Tab-indented lines: {stats.tab_indented_lines}",
        f"Space-indented lines: {stats.space_indented_lines}",
        f"Mixed indentation lines: {stats.mixed_indentation_lines}",
    ]

    if stats.space_frequency:
        lines.append("")
        lines.append("Space indentation levels:")
        for width, count in stats.space_frequency.items():
            lines.append(f"  {width} spaces: {count} lines")

    mixed = result.mixed_indent_line_numbers
    if mixed:
        lines.append("")
        lines.append("Lines with mixed indentation:")
        lines.extend(f"  Line {index + 1}" for index in mixed[:limit])
        if len(mixed) > limit:
            lines.append(f"  ...and {len(mixed) - limit} more")

    return "\n".join(lines)


__all__ = ["status_text", "summarize_analysis", "analysis_details"]
