import pytest

from tabber.analyzer import analyze
from tabber.converter import (
    ConversionOptions,
    ConversionResult,
    LineEdit,
    collapse_space_runs,
    convert,
    convert_leading_whitespace,
)
from tabber.preserver import capture_regions


def _apply(lines, edits):
    updated = list(lines)
    for edit in edits:
        updated[edit.line_index] = edit.new_text
    return updated


def _regions(lines):
    return capture_regions("\n".join(lines))


@pytest.mark.parametrize("k", [1, 2, 3, 5])
def test_width_divisible_indentation_becomes_tabs_only(k):
    result = convert([" " * (4 * k) + "x"])

    assert result.edits == (LineEdit(0, " " * (4 * k) + "x", "\t" * k + "x"),)
    assert result.lines_changed == 1
    assert result.spaces_replaced == 4 * k


@pytest.mark.parametrize("k,r", [(1, 1), (1, 3), (2, 2), (3, 1)])
def test_remainder_spaces_are_kept(k, r):
    line = " " * (4 * k + r) + "x"
    result = convert([line])

    assert result.edits[0].new_text == "\t" * k + " " * r + "x"
    assert result.spaces_replaced == 4 * k


def test_less_than_one_tab_of_spaces_is_left_alone():
    assert convert(["   x"]) == ConversionResult()


def test_tab_only_lines_produce_no_edits():
    assert convert(["\tx", "\t\ty", "z"]).edits == ()


def test_mixed_prefix_is_normalized_from_its_total_width():
    lines = ["  \tx", "  \t  y"]
    before = analyze(lines)
    result = convert(lines)

    assert before.mixed_indent_line_numbers == (0, 1)
    # 2 + 4 = 6 columns -> one tab and two spaces; 2 + 4 + 2 = 8 -> two tabs.
    assert [edit.new_text for edit in result.edits] == ["\t  x", "\t\ty"]
    assert result.spaces_replaced == 0 + 4

    after = analyze(_apply(lines, result.edits))
    assert after.mixed_indent_line_numbers == (0,)
    assert convert(_apply(lines, result.edits)).edits == ()


def test_tab_then_remainder_is_already_canonical():
    assert convert_leading_whitespace("\t  ", 4) == "\t  "
    assert convert(["\t  x"]).edits == ()


def test_conversion_is_idempotent():
    lines = ["    a", "      b", "\t  c", "  \t d", "x", "        "]

    first = convert(lines)
    second = convert(lines)

    assert first == second
    assert convert(_apply(lines, first.edits)).edits == ()


def test_blank_lines_are_converted_unless_asked_otherwise():
    lines = ["    a", "    ", "    b"]

    converted = convert(lines)
    assert [edit.line_index for edit in converted.edits] == [0, 1, 2]
    assert converted.edits[1].new_text == "\t"

    kept = convert(lines, ConversionOptions(preserve_indentation_in_empty_lines=False))
    assert [edit.line_index for edit in kept.edits] == [0, 2]


def test_custom_tab_width():
    result = convert(["      x", "   y"], ConversionOptions(tab_width=2))

    assert [edit.new_text for edit in result.edits] == ["\t\t\tx", "\t y"]
    assert result.spaces_replaced == 6 + 2


def test_empty_document():
    assert convert([], ConversionOptions()) == ConversionResult(
        edits=(), lines_changed=0, spaces_replaced=0
    )


@pytest.mark.parametrize("width", [0, -4, True, 2.5, "4"])
def test_invalid_tab_width_is_rejected(width):
    with pytest.raises(ValueError):
        ConversionOptions(tab_width=width)


def test_string_interior_spaces_are_untouched():
    lines = ['    const x = "    y";']
    result = convert(lines, ConversionOptions(), _regions(lines))

    assert result.edits[0].new_text == '\tconst x = "    y";'
    assert result.spaces_replaced == 4


def test_lines_inside_block_comment_are_skipped():
    lines = ["/*", "    keep me", " */", "    code"]

    protected = convert(lines, ConversionOptions(), _regions(lines))
    assert [edit.line_index for edit in protected.edits] == [3]

    unprotected = convert(lines, ConversionOptions())
    assert [edit.line_index for edit in unprotected.edits] == [1, 3]


def test_lines_inside_template_literal_are_skipped():
    lines = ["const t = `", "    keep", "`;", "    x"]
    result = convert(lines, ConversionOptions(), _regions(lines))

    assert [edit.line_index for edit in result.edits] == [3]


def test_all_spaces_mode_collapses_runs_outside_literals():
    lines = ['    const x = "    y";    // a    b']
    options = ConversionOptions(only_leading_spaces=False)
    result = convert(lines, options, _regions(lines))

    assert result.edits[0].new_text == '\tconst x = "    y";\t// a    b'
    # Only the indentation counts towards replaced spaces.
    assert result.spaces_replaced == 4


def test_all_spaces_mode_without_regions_touches_everything():
    options = ConversionOptions(only_leading_spaces=False)

    assert convert(["    a    b"], options).edits[0].new_text == "\ta\tb"


def test_collapse_space_runs():
    assert collapse_space_runs("a     b", 4) == "a\t b"
    assert collapse_space_runs("       x", 4, [(0, 3)]) == "   \tx"
    assert collapse_space_runs("  ", 4) == "  "
