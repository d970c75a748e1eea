"""Bordered overlay popups and the content lines of the search and picker popups."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Sequence

from gitglance.styles import AnyColor, Color, Line, Modifier, Span, Style


class PopupPosition(enum.Enum):
    """Vertical placement of a popup within its area."""

    TOP_THIRD = "top_third"
    CENTER = "center"


@dataclass
class PopupRender:
    """A laid-out popup: its rectangle, relative to the area, and its rows."""

    x: int
    y: int
    width: int
    height: int
    lines: list[Line]


def _pad_line(spans: list[Span], target_w: int) -> None:
    w = sum(s.width() for s in spans)
    if w < target_w:
        spans.append(Span(" " * (target_w - w)))


@dataclass
class Popup:
    """A titled, bordered box of content lines."""

    title: str
    lines: list[Line] = field(default_factory=list)
    position: PopupPosition = PopupPosition.TOP_THIRD
    border_color: AnyColor = Color.DARK_GRAY
    min_width: int = 36

    def render(self, area_width: int, area_height: int) -> PopupRender:
        """Lay the popup out inside an area of the given size."""
        half = area_width // 2
        min_total = self.min_width + 4
        max_total = max(area_width - 4, 0)
        modal_w = max(min(max(half, min_total), max_total), 6)
        inner_w = max(modal_w - 4, 0)
        modal_h = len(self.lines) + 2

        spare_h = max(area_height - modal_h, 0)
        if self.position is PopupPosition.TOP_THIRD:
            pad_y = max(spare_h // 3, 1)
        else:
            pad_y = spare_h // 2
        pad_x = max(area_width - modal_w, 0) // 2
        bc = Style(fg=self.border_color)

        title_str = f" {self.title} " if self.title else ""
        title_w = Span(title_str).width()
        fill_w = max(modal_w - (3 + title_w), 0)
        top = [
            Span("╭─", bc),
            Span(title_str, Style(modifiers=Modifier.BOLD)),
            Span("─" * fill_w, bc),
            Span("╮", bc),
        ]
        _pad_line(top, modal_w)

        bottom = [Span("╰", bc), Span("─" * max(modal_w - 2, 0), bc), Span("╯", bc)]
        _pad_line(bottom, modal_w)

        rows = [Line(top)]
        for line in self.lines:
            pad = max(inner_w - line.width(), 0)
            spans = [Span("│ ", bc), *line.spans]
            if pad > 0:
                spans.append(Span(" " * pad))
            spans.append(Span(" │", bc))
            rows.append(Line(spans))
        rows.append(Line(bottom))

        return PopupRender(x=pad_x, y=pad_y, width=modal_w, height=modal_h, lines=rows)


_PROMPT = Style(fg=Color.MAGENTA, modifiers=Modifier.BOLD)
_DIM = Style(fg=Color.DARK_GRAY)


def search_popup_lines(
    query: str, active: bool, match_count: int, match_idx: Optional[int]
) -> list[Line]:
    """Content of the search popup: the query between slashes and a match count."""
    spans = [
        Span("/", _PROMPT),
        Span(" "),
        Span(query, Style(fg=Color.WHITE)),
        Span(" "),
        Span("/", _PROMPT),
    ]
    if active:
        if match_count > 0:
            spans.append(Span(f"  {match_count} matches", _DIM))
    elif match_idx is not None:
        spans.append(Span(f"  {match_idx + 1}/{match_count}", _DIM))
    elif match_count > 0:
        spans.append(Span(f"  {match_count} matches", _DIM))
    return [Line(spans)]


def picker_popup_lines(
    query: str,
    items: Sequence[tuple[str, str, Sequence[int], bool]],
    total: int,
    filtered: int,
) -> list[Line]:
    """Content of the picker popup.

    ``items`` holds ``(label, description, match_positions, is_cursor)`` tuples.
    """
    pointer_style = Style(fg=Color.YELLOW, modifiers=Modifier.BOLD)
    selected_style = Style(fg=Color.YELLOW, modifiers=Modifier.BOLD)
    normal_style = Style()

    lines = [
        Line([Span("> ", _PROMPT), Span(f"{query}█", normal_style)]),
        Line([Span(f"  {filtered}/{total}", _DIM)]),
    ]

    for label, description, match_positions, is_cursor in items:
        spans = [Span("█ ", pointer_style) if is_cursor else Span("  ")]
        label_style = selected_style if is_cursor else normal_style
        hl_modifiers = Modifier.BOLD | Modifier.UNDERLINED if is_cursor else Modifier.BOLD
        hl_style = Style(fg=Color.YELLOW, modifiers=hl_modifiers)

        chars = list(label)
        pos = 0
        for mp in match_positions:
            if pos < mp <= len(chars):
                spans.append(Span("".join(chars[pos:mp]), label_style))
            if mp < len(chars):
                spans.append(Span(chars[mp], hl_style))
                pos = mp + 1
        if pos < len(chars):
            spans.append(Span("".join(chars[pos:]), label_style))

        if description:
            spans.append(Span(f"  {description}", _DIM))
        lines.append(Line(spans))

    return lines