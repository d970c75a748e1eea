from gitglance.popup import (
    Popup,
    PopupPosition,
    PopupRender,
    picker_popup_lines,
    search_popup_lines,
)
from gitglance.styles import Color, Line, Modifier, Span


def test_search_popup_active_shows_count():
    lines = search_popup_lines("hello", True, 5, None)
    assert len(lines) == 1
    text = lines[0].text()
    assert "/" in text
    assert "hello" in text
    assert "5 matches" in text


def test_search_popup_confirmed_shows_position():
    lines = search_popup_lines("hello", False, 5, 2)
    assert "3/5" in lines[0].text()


def test_search_popup_active_no_matches_has_no_count():
    lines = search_popup_lines("q", True, 0, None)
    assert lines[0].text() == "/ q /"


def test_search_popup_inactive_without_index_shows_count():
    lines = search_popup_lines("q", False, 4, None)
    assert lines[0].text().endswith("  4 matches")


def test_picker_popup_renders_items():
    items = [
        ("file1.rs", "src/", [0, 1], True),
        ("file2.rs", "src/", [], False),
    ]
    lines = picker_popup_lines("fi", items, 10, 2)
    assert len(lines) == 4


def test_picker_popup_header_lines():
    lines = picker_popup_lines("fi", [], 10, 2)
    assert lines[0].text() == "> fi█"
    assert lines[1].text() == "  2/10"


def test_picker_popup_highlights_matches():
    items = [("file1.rs", "src/", [0, 1], True)]
    line = picker_popup_lines("fi", items, 1, 1)[2]
    assert [s.content for s in line.spans] == ["█ ", "f", "i", "le1.rs", "  src/"]
    assert Modifier.UNDERLINED in line.spans[1].style.modifiers
    assert line.spans[1].style.fg == Color.YELLOW


def test_picker_popup_non_cursor_item():
    items = [("abc", "", [1], False)]
    line = picker_popup_lines("b", items, 1, 1)[2]
    assert [s.content for s in line.spans] == ["  ", "a", "b", "c"]
    assert Modifier.UNDERLINED not in line.spans[2].style.modifiers
    assert line.text() == "  abc"


def _content(n):
    return [Line([Span(f"line {i}")]) for i in range(n)]


def test_render_rows_have_modal_width():
    result = Popup("Files", _content(3)).render(80, 24)
    assert isinstance(result, PopupRender)
    assert result.height == 5
    assert len(result.lines) == 5
    assert all(row.width() == result.width for row in result.lines)


def test_render_borders_and_title():
    result = Popup("Files", _content(1)).render(80, 24)
    top = result.lines[0].text()
    assert top.startswith("╭─ Files ")
    assert top.endswith("╮")
    assert result.lines[-1].text().startswith("╰")
    assert result.lines[-1].text().endswith("╯")
    assert result.lines[1].text().startswith("│ line 0")
    assert result.lines[1].text().endswith(" │")


def test_render_width_respects_min_and_area():
    wide = Popup("T", _content(1)).render(200, 24)
    assert wide.width == 100
    narrow = Popup("T", _content(1)).render(30, 24)
    assert narrow.width == 26
    tiny = Popup("T", _content(1)).render(4, 24)
    assert tiny.width == 6


def test_render_horizontally_centred():
    result = Popup("T", _content(1)).render(80, 24)
    assert result.x * 2 + result.width in (80, 81)


def test_render_vertical_positions():
    top = Popup("T", _content(1)).render(80, 24)
    assert top.y == (24 - 3) // 3
    centre = Popup("T", _content(1), position=PopupPosition.CENTER).render(80, 24)
    assert centre.y == (24 - 3) // 2
    cramped = Popup("T", _content(30)).render(80, 10)
    assert cramped.y == 1


def test_render_empty_title():
    result = Popup("", _content(0)).render(80, 24)
    assert result.lines[0].text().startswith("╭──")
    assert result.lines[0].width() == result.width


def test_border_colour_applied():
    result = Popup("T", _content(1), border_color=Color.BLUE).render(80, 24)
    assert result.lines[0].spans[0].style.fg == Color.BLUE
    assert result.lines[-1].spans[0].style.fg == Color.BLUE