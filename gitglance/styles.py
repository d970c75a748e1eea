"""Terminal style primitives and the diff colour scheme derived from a palette."""

from __future__ import annotations

import enum
import math
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Union

from wcwidth import wcwidth

RGB = Tuple[int, int, int]

_WHITE: RGB = (255, 255, 255)
_BLACK: RGB = (0, 0, 0)
_FALLBACK_BG: RGB = (30, 30, 30)
_FALLBACK_BORDER: RGB = (128, 128, 128)

_BLEND_SELECTION = 0.12
_BLEND_ADD_BG = 0.08
_BLEND_ADD_SELECTED = 0.25
_BLEND_DEL_BG = 0.08
_BLEND_DEL_SELECTED = 0.25
_BLEND_HUNK_BG = 0.10
_BLEND_HUNK_SELECTED = 0.25
_BLEND_CONTRAST_BOOST = 0.3
_BLEND_SEARCH_CURRENT = 0.7


class Color(enum.Enum):
    """Named terminal colours that follow the user's colour scheme."""

    RESET = "reset"
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    GRAY = "gray"
    DARK_GRAY = "dark_gray"
    LIGHT_RED = "light_red"
    LIGHT_GREEN = "light_green"
    LIGHT_YELLOW = "light_yellow"
    LIGHT_BLUE = "light_blue"
    LIGHT_MAGENTA = "light_magenta"
    LIGHT_CYAN = "light_cyan"
    WHITE = "white"


@dataclass(frozen=True)
class Rgb:
    """An exact 24-bit colour."""

    r: int
    g: int
    b: int

    @classmethod
    def of(cls, t: RGB) -> "Rgb":
        return cls(*t)

    def as_tuple(self) -> RGB:
        return (self.r, self.g, self.b)


AnyColor = Union[Color, Rgb]


class Modifier(enum.Flag):
    """Text attributes."""

    BOLD = enum.auto()
    ITALIC = enum.auto()
    UNDERLINED = enum.auto()
    DIM = enum.auto()
    REVERSED = enum.auto()


@dataclass(frozen=True)
class Style:
    """Foreground colour plus text attributes."""

    fg: Optional[AnyColor] = None
    modifiers: Modifier = Modifier(0)

    def with_fg(self, color: AnyColor) -> "Style":
        return replace(self, fg=color)

    def with_modifier(self, modifier: Modifier) -> "Style":
        return replace(self, modifiers=self.modifiers | modifier)


def _display_width(text: str) -> int:
    return sum(max(wcwidth(ch), 0) for ch in text)


@dataclass(frozen=True)
class Span:
    """A run of text drawn in one style."""

    content: str
    style: Style = Style()

    def width(self) -> int:
        return _display_width(self.content)


@dataclass
class Line:
    """A row of styled spans."""

    spans: list[Span] = field(default_factory=list)

    def width(self) -> int:
        return sum(span.width() for span in self.spans)

    def text(self) -> str:
        return "".join(span.content for span in self.spans)


class DiffMode(enum.Enum):
    """Which changes a diff shows."""

    WORKING = "working"
    STAGED = "staged"
    BRANCH = "branch"


def blend(fg: RGB, bg: RGB, alpha: float) -> RGB:
    """Alpha blend: fg*alpha + bg*(1-alpha), truncated per channel."""

    def channel(f: int, b: int) -> int:
        return min(255, max(0, int(f * alpha + b * (1.0 - alpha))))

    return (channel(fg[0], bg[0]), channel(fg[1], bg[1]), channel(fg[2], bg[2]))


def relative_luminance(c: RGB) -> float:
    return 0.2126 * (c[0] / 255.0) + 0.7152 * (c[1] / 255.0) + 0.0722 * (c[2] / 255.0)


def ensure_contrast(fg: RGB, bg: RGB) -> RGB:
    """Brighten fg by mixing in white when it is too close to bg in luminance."""
    if relative_luminance(fg) - relative_luminance(bg) > 0.15:
        return fg
    return blend(_WHITE, fg, _BLEND_CONTRAST_BOOST)


def brightness_modify(r: int, g: int, b: int, pct: float) -> RGB:
    """Scale each channel by pct percent, rounded and clamped to 0..255."""

    def modify(v: int) -> int:
        x = v + v * pct / 100.0
        rounded = math.floor(x + 0.5) if x >= 0 else -math.floor(-x + 0.5)
        return int(min(255, max(0, rounded)))

    return (modify(r), modify(g), modify(b))


@dataclass
class DiffColors:
    """Colours used to draw a diff view."""

    add_fg: AnyColor = Color.GREEN
    add_bg: AnyColor = Color.RESET
    del_fg: AnyColor = Color.RED
    del_bg: AnyColor = Color.RESET
    hunk_fg: AnyColor = Color.CYAN
    hunk_bg: AnyColor = Color.RESET
    context_fg: AnyColor = Color.RESET
    line_number_fg: AnyColor = Color.DARK_GRAY
    cursor_bg: AnyColor = Color.DARK_GRAY
    selected_add_bg: AnyColor = Color.DARK_GRAY
    selected_del_bg: AnyColor = Color.DARK_GRAY
    selected_ctx_bg: AnyColor = Color.DARK_GRAY
    selected_hunk_bg: AnyColor = Color.DARK_GRAY
    search_match_bg: AnyColor = Color.YELLOW
    search_current_bg: AnyColor = Color.LIGHT_YELLOW
    border_fg: AnyColor = Color.DARK_GRAY
    chrome_fg: AnyColor = Color.DARK_GRAY

    @classmethod
    def from_palette(cls, palette) -> "DiffColors":
        """Derive blended colours from a 16-entry ANSI palette.

        ``palette`` is a sequence of optional RGB tuples, or an object with
        such a sequence in its ``colors`` attribute.
        """
        raw: Sequence[Optional[RGB]] = getattr(palette, "colors", palette)
        colors: list[Optional[RGB]] = list(raw)[:16]
        colors += [None] * (16 - len(colors))

        bg = colors[0] or _FALLBACK_BG
        red, green, yellow, blue = colors[1], colors[2], colors[3], colors[4]
        white = colors[15] or colors[7]
        bright_black = colors[8]

        bg_lum = relative_luminance(bg)
        select_tint = _WHITE if bg_lum < 0.5 else _BLACK
        select_bg = Rgb.of(blend(select_tint, bg, _BLEND_SELECTION))
        border = Rgb.of(bright_black or _FALLBACK_BORDER)
        chrome = brightness_modify(*bg, 40.0 if bg_lum < 0.5 else -20.0)

        result = cls(
            line_number_fg=border,
            cursor_bg=select_bg,
            selected_ctx_bg=select_bg,
            border_fg=border,
            chrome_fg=Rgb.of(chrome),
        )

        if green is not None:
            add_bg = blend(green, bg, _BLEND_ADD_BG)
            result.add_fg = Rgb.of(ensure_contrast(green, add_bg))
            result.add_bg = Rgb.of(add_bg)
            result.selected_add_bg = Rgb.of(blend(green, bg, _BLEND_ADD_SELECTED))

        if red is not None:
            del_bg = blend(red, bg, _BLEND_DEL_BG)
            result.del_fg = Rgb.of(ensure_contrast(red, del_bg))
            result.del_bg = Rgb.of(del_bg)
            result.selected_del_bg = Rgb.of(blend(red, bg, _BLEND_DEL_SELECTED))

        if blue is not None and white is not None:
            hunk_bg = blend(blue, bg, _BLEND_HUNK_BG)
            result.hunk_fg = Rgb.of(ensure_contrast(white, hunk_bg))
            result.hunk_bg = Rgb.of(hunk_bg)
            result.selected_hunk_bg = Rgb.of(blend(blue, bg, _BLEND_HUNK_SELECTED))

        if yellow is not None:
            result.search_match_bg = Rgb.of(yellow)
            result.search_current_bg = Rgb.of(blend(yellow, _WHITE, _BLEND_SEARCH_CURRENT))

        return result


_MODE_COLORS = {
    DiffMode.WORKING: Color.MAGENTA,
    DiffMode.STAGED: Color.GREEN,
    DiffMode.BRANCH: Color.BLUE,
}

_MODE_LABELS = {
    DiffMode.WORKING: "UNSTAGED",
    DiffMode.STAGED: "STAGED",
    DiffMode.BRANCH: "BRANCH",
}


def mode_color(mode: DiffMode) -> Color:
    return _MODE_COLORS[mode]


def mode_label(mode: DiffMode) -> str:
    return _MODE_LABELS[mode]


def mode_style(mode: DiffMode) -> Style:
    return Style().with_fg(mode_color(mode)).with_modifier(Modifier.BOLD)