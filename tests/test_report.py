import pytest

from tabber.analyzer import analyze
from tabber.report import analysis_details, status_text, summarize_analysis


@pytest.mark.parametrize(
    "lines,expected",
    [
        (["\tx", "    y"], "Tabs"),
        (["\tx", "\t  z"], "Tabs (Mixed)"),
        (["    a", "    b", "  c"], "4 Spaces"),
        (["a", ""], "No Indentation"),
        ([], "No Indentation"),
    ],
)
def test_status_text(lines, expected):
    assert status_text(analyze(lines)) == expected


@pytest.mark.parametrize(
    "lines,expected",
    [
        (["    a", "    b", "  c"], "Indentation Analysis: 4-space indentation"),
        (["\ta"], "Indentation Analysis: Tab indentation"),
        (
            ["\ta", "    b"],
            "Indentation Analysis: Mixed indentation - 1 tab-indented lines, "
            "1 space-indented lines",
        ),
        (
            ["\t  a"],
            "Indentation Analysis: Tab indentation (1 lines with mixed indentation)",
        ),
        (["x"], "Indentation Analysis: No indentation detected"),
    ],
)
def test_summarize_analysis(lines, expected):
    assert summarize_analysis(analyze(lines)) == expected


def test_analysis_details_lists_widths_and_mixed_lines():
    lines = ["  a", "    b", "    c", "\t d"]

    details = analysis_details(analyze(lines))

    assert details.splitlines() == [
        "Indentation Analysis",
        "====================",
        "Total lines: 4",
        "Empty lines: 0",
        "Tab-indented lines: 1",
        "Space-indented lines: 3",
        "Mixed indentation lines: 1",
        "",
        "Space indentation levels:",
        "  2 spaces: 1 lines",
        "  4 spaces: 2 lines",
        "",
        "Lines with mixed indentation:",
        "  Line 4",
    ]


def test_analysis_details_truncates_mixed_lines():
    details = analysis_details(analyze(["\t x"] * 12), limit=10)

    assert "  Line 10" in details
    assert "  Line 11" not in details
    assert details.endswith("  ...and 2 more")
