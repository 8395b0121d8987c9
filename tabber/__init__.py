"""Indentation analysis and space-to-tab conversion."""
from __future__ import annotations

__version__ = "0.1.0"

from .analyzer import IndentationAnalysisResult, IndentationStats
from .converter import ConversionOptions, ConversionResult, LineEdit
from .fixer import (
    IndentationFixResult,
    IndentationFixSummary,
    analyze_indentation,
    capture_literal_regions,
    create_report,
    fix_all_files,
    fix_single_file,
    generate_conversion_edits,
)
from .preserver import PreservedRegion

__all__ = [
    "__version__",
    "IndentationAnalysisResult",
    "IndentationStats",
    "ConversionOptions",
    "ConversionResult",
    "LineEdit",
    "PreservedRegion",
    "IndentationFixResult",
    "IndentationFixSummary",
    "analyze_indentation",
    "generate_conversion_edits",
    "fix_single_file",
    "fix_all_files",
    "capture_literal_regions",
    "create_report",
]
