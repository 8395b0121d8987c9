from tabber.analyzer import IndentationStats, analyze


def test_analyze_empty_document():
    result = analyze([])

    assert result.has_tabs is False
    assert result.dominant_space_width is None
    assert result.mixed_indent_line_numbers == ()
    assert result.stats == IndentationStats()
    assert result.stats.space_frequency == {}


def test_analyze_counts_each_kind_of_line():
    lines = [
        "def f():",
        "    a",
        "",
        "\tb",
        "\t  c",
        "  ",
        "  d",
        "    e",
    ]
    result = analyze(lines)
    stats = result.stats

    assert stats.total_lines == 8
    assert stats.empty_lines == 2
    assert stats.tab_indented_lines == 2
    assert stats.space_indented_lines == 3
    assert stats.mixed_indentation_lines == 1
    assert stats.space_frequency == {4: 2, 2: 1}
    assert list(stats.space_frequency) == [4, 2]
    assert result.mixed_indent_line_numbers == (4,)
    assert result.dominant_space_width == 4
    assert result.has_tabs is True
    assert (
        stats.tab_indented_lines + stats.space_indented_lines + stats.empty_lines
        <= stats.total_lines
    )


def test_space_before_tab_is_mixed():
    result = analyze(["  \tx", "\t x", "\tx"])

    assert result.mixed_indent_line_numbers == (0, 1)
    assert result.stats.tab_indented_lines == 3
    assert result.stats.space_indented_lines == 0
    assert result.dominant_space_width is None


def test_dominant_width_tie_goes_to_first_seen_width():
    two_first = ["  a"] * 5 + ["    b"] * 5
    four_first = ["    b"] * 5 + ["  a"] * 5

    assert analyze(two_first).stats.space_frequency == {2: 5, 4: 5}
    assert analyze(two_first).dominant_space_width == 2
    assert analyze(four_first).dominant_space_width == 4


def test_analyze_is_repeatable():
    lines = ["    a", "\t  b", "", "c", "  d"]

    assert analyze(lines) == analyze(lines)


def test_lines_without_indentation_only_count_as_total():
    result = analyze(["a", "b", "c"])

    assert result.stats.total_lines == 3
    assert result.stats.empty_lines == 0
    assert result.stats.tab_indented_lines == 0
    assert result.stats.space_indented_lines == 0
    assert result.is_mixed is False
