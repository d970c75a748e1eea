import pytest

from gitglance.patch import (
    DiffLineData,
    LineType,
    build_diff_context,
    parse_hunk_header,
    parse_patch_to_diff_lines,
)

PATCH = "@@ -10,3 +20,4 @@ fn main\n context\n-removed\n+added one\n+added two\n tail\n"


def test_parse_hunk_header_reads_starts():
    assert parse_hunk_header("@@ -10,3 +20,4 @@ fn main") == (10, 20)


def test_parse_hunk_header_without_counts():
    assert parse_hunk_header("@@ -7 +9 @@") == (7, 9)


def test_parse_hunk_header_unreadable_start_is_zero():
    assert parse_hunk_header("@@ -abc,1 +20,2 @@") == (0, 20)


@pytest.mark.parametrize("line", ["@@", "@@ -1,2", " context", "+added"])
def test_parse_hunk_header_rejects(line):
    assert parse_hunk_header(line) is None


def test_line_types_follow_prefixes():
    lines = parse_patch_to_diff_lines(PATCH)
    assert [dl.line_type for dl in lines] == [
        LineType.HUNK_HEADER,
        LineType.CONTEXT,
        LineType.DELETE,
        LineType.ADD,
        LineType.ADD,
        LineType.CONTEXT,
    ]


def test_contents_strip_prefix_and_header_kept_whole():
    lines = parse_patch_to_diff_lines(PATCH)
    assert lines[0].content == "@@ -10,3 +20,4 @@ fn main"
    assert [dl.content for dl in lines[1:]] == ["context", "removed", "added one", "added two", "tail"]


def test_first_context_line_starts_at_header_numbers():
    lines = parse_patch_to_diff_lines(PATCH)
    assert lines[0].old_line_no is None and lines[0].new_line_no is None
    assert (lines[1].old_line_no, lines[1].new_line_no) == (10, 20)


def test_sides_of_added_and_deleted_lines():
    lines = parse_patch_to_diff_lines(PATCH)
    for dl in lines:
        if dl.line_type is LineType.ADD:
            assert dl.old_line_no is None and dl.new_line_no is not None
        if dl.line_type is LineType.DELETE:
            assert dl.new_line_no is None and dl.old_line_no is not None


def test_line_numbers_advance_by_one_per_side():
    lines = parse_patch_to_diff_lines(PATCH)[1:]
    old_nums = [dl.old_line_no for dl in lines if dl.old_line_no is not None]
    new_nums = [dl.new_line_no for dl in lines if dl.new_line_no is not None]
    assert old_nums == list(range(old_nums[0], old_nums[0] + len(old_nums)))
    assert new_nums == list(range(new_nums[0], new_nums[0] + len(new_nums)))


def test_no_newline_marker_is_skipped():
    patch = "@@ -1 +1 @@\n-old\n\\ No newline at end of file\n+new\n"
    lines = parse_patch_to_diff_lines(patch)
    assert [dl.content for dl in lines] == ["@@ -1 +1 @@", "old", "new"]


def test_crlf_line_endings_are_stripped():
    lines = parse_patch_to_diff_lines("@@ -1 +1 @@\r\n+new\r\n")
    assert [dl.content for dl in lines] == ["@@ -1 +1 @@", "new"]


def test_unprefixed_line_is_context():
    lines = parse_patch_to_diff_lines("@@ -3 +5 @@\nbare")
    assert lines[1].line_type is LineType.CONTEXT
    assert lines[1].content == "bare"
    assert (lines[1].old_line_no, lines[1].new_line_no) == (3, 5)


def test_second_hunk_resets_numbers():
    patch = "@@ -1 +1 @@\n a\n@@ -40 +50 @@\n+b\n"
    lines = parse_patch_to_diff_lines(patch)
    assert lines[3].new_line_no == 50


def test_empty_patch_gives_no_lines():
    assert parse_patch_to_diff_lines("") == []


def test_build_diff_context_marks_cursor():
    lines = parse_patch_to_diff_lines(PATCH)
    text = build_diff_context(lines, 3)
    rows = text.split("\n")
    assert rows[3] == "+added one ← comment here"
    assert rows[0] == "@@@@ -10,3 +20,4 @@ fn main"
    assert rows[2] == "-removed"
    assert rows[1] == " context"
    assert sum("← comment here" in row for row in rows) == 1


def test_build_diff_context_window_is_limited():
    lines = [DiffLineData(LineType.CONTEXT, f"l{i}") for i in range(30)]
    rows = build_diff_context(lines, 15).split("\n")
    assert len(rows) == 11
    assert rows[0] == " l10"
    assert rows[-1] == " l20"


def test_build_diff_context_skips_non_diff_items():
    lines = [DiffLineData(LineType.ADD, "x"), "badge", DiffLineData(LineType.DELETE, "y")]
    assert build_diff_context(lines, 0).split("\n") == ["+x ← comment here", "-y"]


def test_build_diff_context_empty():
    assert build_diff_context([], 0) == ""