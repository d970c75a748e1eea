"""Syntax highlighting of source text into styled spans, with terminal-friendly themes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, get_lexer_for_filename
from pygments.lexers.special import TextLexer
from pygments.token import (
    Comment,
    Generic,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Token,
    _TokenType,
)
from pygments.util import ClassNotFound

from gitglance.styles import RGB, AnyColor, Color, Modifier, Rgb, Style

StyledLine = list[tuple[Style, str]]

# Rust keywords that the grammar does not always scope as keywords.
_RUST_EXTRA_KEYWORDS = frozenset(
    {
        "async", "await", "dyn", "move", "try", "union", "yield",
        "abstract", "become", "box", "do", "final", "override",
        "priv", "typeof", "unsized", "virtual",
    }
)

_DEFAULT_TEXT: RGB = (200, 200, 200)
_DEFAULT_COMMENT: RGB = (128, 128, 128)


@dataclass(frozen=True)
class ThemeColors:
    """Semantic colour roles for syntax highlighting."""

    text: RGB
    keyword: RGB
    string: RGB
    number: RGB
    comment: RGB
    function: RGB
    typ: RGB
    operator: RGB
    constant: RGB
    deleted: RGB
    inserted: RGB


@dataclass(frozen=True)
class ThemeItem:
    """A scope selector and the style it applies."""

    scope: str
    foreground: RGB
    bold: bool = False
    italic: bool = False


@dataclass
class Theme:
    """A named set of scope rules with a default foreground."""

    name: str
    foreground: RGB
    scopes: list[ThemeItem] = field(default_factory=list)


# (selector, colour role, bold, italic)
_SCOPE_TABLE: tuple[tuple[str, str, bool, bool], ...] = (
    # Keywords
    ("keyword", "keyword", True, False),
    ("keyword.control", "keyword", True, False),
    ("keyword.control.import", "keyword", False, False),
    ("keyword.control.flow", "keyword", True, False),
    ("keyword.control.conditional", "keyword", True, False),
    ("keyword.control.loop", "keyword", True, False),
    ("keyword.declaration", "keyword", True, False),
    ("keyword.operator", "operator", False, False),
    ("keyword.operator.assignment", "operator", False, False),
    ("keyword.operator.arithmetic", "operator", False, False),
    ("keyword.operator.logical", "operator", False, False),
    ("keyword.operator.comparison", "operator", False, False),
    ("keyword.operator.new", "keyword", True, False),
    ("keyword.other", "keyword", False, False),
    # Storage
    ("storage", "keyword", True, False),
    ("storage.type", "typ", False, False),
    ("storage.type.function", "keyword", True, False),
    ("storage.type.class", "keyword", True, False),
    ("storage.type.interface", "keyword", True, False),
    ("storage.type.struct", "keyword", True, False),
    ("storage.type.enum", "keyword", True, False),
    ("storage.modifier", "keyword", True, False),
    # Entity names
    ("entity.name", "function", False, False),
    ("entity.name.function", "function", False, False),
    ("entity.name.function.constructor", "function", False, False),
    ("entity.name.function.decorator", "operator", False, False),
    ("entity.name.class", "function", True, False),
    ("entity.name.struct", "function", True, False),
    ("entity.name.enum", "function", True, False),
    ("entity.name.interface", "function", True, False),
    ("entity.name.trait", "function", True, False),
    ("entity.name.type", "typ", False, False),
    ("entity.name.tag", "keyword", False, False),
    ("entity.name.section", "function", True, False),
    ("entity.name.namespace", "keyword", False, False),
    ("entity.name.impl", "typ", False, False),
    ("entity.other.attribute-name", "function", False, False),
    ("entity.other.inherited-class", "typ", False, False),
    # Variables
    ("variable", "text", False, False),
    ("variable.other", "text", False, False),
    ("variable.other.constant", "constant", False, False),
    ("variable.other.member", "text", False, False),
    ("variable.other.property", "text", False, False),
    ("variable.parameter", "text", False, False),
    ("variable.language", "keyword", False, True),
    ("variable.function", "function", False, False),
    ("variable.annotation", "operator", False, False),
    # Constants
    ("constant", "constant", False, False),
    ("constant.numeric", "number", False, False),
    ("constant.numeric.integer", "number", False, False),
    ("constant.numeric.float", "number", False, False),
    ("constant.numeric.hex", "number", False, False),
    ("constant.language", "constant", False, False),
    ("constant.character", "string", False, False),
    ("constant.character.escape", "operator", False, False),
    ("constant.other", "constant", False, False),
    # Strings
    ("string", "string", False, False),
    ("string.quoted", "string", False, False),
    ("string.quoted.single", "string", False, False),
    ("string.quoted.double", "string", False, False),
    ("string.quoted.triple", "string", False, False),
    ("string.quoted.other", "string", False, False),
    ("string.template", "string", False, False),
    ("string.interpolated", "string", False, False),
    ("string.regexp", "operator", False, False),
    ("string.other", "string", False, False),
    # Comments
    ("comment", "comment", False, True),
    ("comment.line", "comment", False, True),
    ("comment.block", "comment", False, True),
    ("comment.block.documentation", "comment", False, True),
    # Support
    ("support", "function", False, False),
    ("support.function", "function", False, False),
    ("support.function.builtin", "function", False, False),
    ("support.macro", "function", False, True),
    ("support.class", "function", True, False),
    ("support.type", "typ", False, False),
    ("support.type.builtin", "typ", False, False),
    ("support.constant", "constant", False, False),
    ("support.variable", "text", False, False),
    ("support.other", "function", False, False),
    ("support.module", "keyword", False, False),
    # Meta
    ("meta.preprocessor", "operator", False, False),
    ("meta.decorator", "operator", False, False),
    ("meta.annotation", "operator", False, False),
    ("meta.function-call", "text", False, False),
    ("meta.attribute", "operator", False, False),
    # Punctuation
    ("punctuation", "text", False, False),
    ("punctuation.definition.string", "string", False, False),
    ("punctuation.definition.comment", "comment", False, True),
    ("punctuation.definition.tag", "keyword", False, False),
    ("punctuation.definition.annotation", "operator", False, False),
    ("punctuation.separator", "text", False, False),
    ("punctuation.section", "text", False, False),
    ("punctuation.accessor", "text", False, False),
    # Source-specific
    ("source.go keyword.function", "keyword", True, False),
    ("source.go keyword.var", "keyword", True, False),
    ("source.go keyword.const", "keyword", True, False),
    ("source.go keyword.type", "keyword", True, False),
    ("source.go keyword.interface", "keyword", True, False),
    ("source.go keyword.struct", "keyword", True, False),
    ("source.go keyword.package", "keyword", True, False),
    ("source.go keyword.import", "keyword", False, False),
    ("source.rust keyword.other", "keyword", True, False),
    ("source.rust storage.type.impl", "keyword", True, False),
    ("source.rust entity.name.lifetime", "operator", False, False),
    ("source.rust storage.type.lifetime", "operator", False, False),
    ("source.rust punctuation.definition.attribute", "operator", False, False),
    ("source.rust meta.attribute", "operator", False, False),
    ("source.python meta.function-call.generic", "function", False, False),
    ("source.python meta.qualified-name", "text", False, False),
    ("source.ts entity.name.type", "typ", False, False),
    ("source.js entity.name.type", "typ", False, False),
    # Markup
    ("markup.deleted", "deleted", False, False),
    ("markup.inserted", "inserted", False, False),
    ("markup.changed", "operator", False, False),
    ("markup.italic", "text", False, True),
    ("markup.bold", "text", True, False),
    ("markup.heading", "function", True, False),
    ("markup.list", "keyword", False, False),
    ("markup.quote", "comment", False, True),
    ("markup.raw", "string", False, False),
    ("markup.underline.link", "function", False, False),
)


def build_scopes(colors: ThemeColors) -> list[ThemeItem]:
    """Build the scope rules shared by the default and palette-derived themes."""
    return [
        ThemeItem(scope, getattr(colors, role), bold, italic)
        for scope, role, bold, italic in _SCOPE_TABLE
    ]


def default_ansi_theme() -> Theme:
    """A theme of typical terminal colours, each of which maps to a named ANSI colour."""
    colors = ThemeColors(
        text=_DEFAULT_TEXT,
        keyword=(255, 85, 255),
        string=(85, 255, 85),
        number=(85, 255, 255),
        comment=_DEFAULT_COMMENT,
        function=(85, 85, 255),
        typ=(85, 255, 255),
        operator=(255, 255, 85),
        constant=(85, 255, 255),
        deleted=(255, 85, 85),
        inserted=(85, 255, 85),
    )
    return Theme(name="ghq-default", foreground=colors.text, scopes=build_scopes(colors))


_ANSI_MAP: dict[RGB, Color] = {
    (200, 200, 200): Color.WHITE,
    (255, 85, 255): Color.LIGHT_MAGENTA,
    (85, 255, 85): Color.LIGHT_GREEN,
    (85, 255, 255): Color.LIGHT_CYAN,
    (128, 128, 128): Color.DARK_GRAY,
    (85, 85, 255): Color.LIGHT_BLUE,
    (255, 255, 85): Color.LIGHT_YELLOW,
    (255, 85, 85): Color.LIGHT_RED,
}


def build_theme_from_palette(palette) -> Theme:
    """Derive a theme from a 16-entry ANSI palette, preferring bright variants.

    ``palette`` is a sequence of optional RGB tuples, or an object with such a
    sequence in its ``colors`` attribute.
    """
    raw: Sequence[Optional[RGB]] = getattr(palette, "colors", palette)
    colors: list[Optional[RGB]] = list(raw)[:16]
    colors += [None] * (16 - len(colors))

    def pick(bright: int, normal: int) -> RGB:
        return colors[bright] or colors[normal] or _DEFAULT_TEXT

    theme_colors = ThemeColors(
        text=pick(15, 7),
        keyword=pick(13, 5),
        string=pick(10, 2),
        number=pick(14, 6),
        comment=colors[8] or _DEFAULT_COMMENT,
        function=pick(12, 4),
        typ=pick(14, 6),
        operator=pick(11, 3),
        constant=pick(14, 6),
        deleted=pick(9, 1),
        inserted=pick(10, 2),
    )
    return Theme(name="ghq", foreground=theme_colors.text, scopes=build_scopes(theme_colors))


_TOKEN_SCOPES: dict[_TokenType, str] = {
    Keyword: "keyword",
    Keyword.Constant: "constant.language",
    Keyword.Declaration: "keyword.declaration",
    Keyword.Namespace: "keyword.control.import",
    Keyword.Pseudo: "keyword.other",
    Keyword.Reserved: "keyword",
    Keyword.Type: "storage.type",
    Name.Attribute: "entity.other.attribute-name",
    Name.Builtin: "support.function.builtin",
    Name.Builtin.Pseudo: "variable.language",
    Name.Class: "entity.name.class",
    Name.Constant: "variable.other.constant",
    Name.Decorator: "entity.name.function.decorator",
    Name.Exception: "support.class",
    Name.Function: "entity.name.function",
    Name.Function.Magic: "support.function",
    Name.Label: "entity.name",
    Name.Namespace: "entity.name.namespace",
    Name.Property: "variable.other.property",
    Name.Tag: "entity.name.tag",
    Name.Variable: "variable",
    Name.Variable.Magic: "variable.language",
    String: "string",
    String.Affix: "storage.type",
    String.Backtick: "string.template",
    String.Char: "constant.character",
    String.Doc: "comment.block.documentation",
    String.Double: "string.quoted.double",
    String.Escape: "constant.character.escape",
    String.Heredoc: "string.quoted.other",
    String.Interpol: "string.interpolated",
    String.Other: "string.other",
    String.Regex: "string.regexp",
    String.Single: "string.quoted.single",
    String.Symbol: "constant.other",
    Number: "constant.numeric",
    Number.Float: "constant.numeric.float",
    Number.Hex: "constant.numeric.hex",
    Number.Integer: "constant.numeric.integer",
    Operator: "keyword.operator",
    Operator.Word: "keyword.operator.logical",
    Punctuation: "punctuation",
    Comment: "comment",
    Comment.Hashbang: "comment.line",
    Comment.Multiline: "comment.block",
    Comment.Preproc: "meta.preprocessor",
    Comment.PreprocFile: "string",
    Comment.Single: "comment.line",
    Comment.Special: "comment.block.documentation",
    Generic.Deleted: "markup.deleted",
    Generic.Emph: "markup.italic",
    Generic.Heading: "markup.heading",
    Generic.Inserted: "markup.inserted",
    Generic.Strong: "markup.bold",
    Generic.Subheading: "markup.heading",
}

_ROOT_SCOPES = {
    "Rust": "source.rust",
    "Go": "source.go",
    "Python": "source.python",
    "TypeScript": "source.ts",
    "JavaScript": "source.js",
}


def _token_scope(ttype: _TokenType) -> str:
    t = ttype
    while t is not Token:
        scope = _TOKEN_SCOPES.get(t)
        if scope is not None:
            return scope
        if t.parent is None:
            break
        t = t.parent
    return ""


def _root_scope(lexer: Lexer) -> str:
    if lexer.name in _ROOT_SCOPES:
        return _ROOT_SCOPES[lexer.name]
    return "source." + (lexer.aliases[0] if lexer.aliases else "text")


def _selector_part_matches(part: str, scope: str) -> bool:
    return scope == part or scope.startswith(part + ".")


def _selector_score(selector: str, stack: list[str]) -> Optional[tuple[int, int]]:
    """Score a selector against a scope stack, or None when it does not match."""
    parts = selector.split()
    if not parts or not _selector_part_matches(parts[-1], stack[-1]):
        return None
    remaining = iter(stack[:-1])
    for part in parts[:-1]:
        if not any(_selector_part_matches(part, s) for s in remaining):
            return None
    return (parts[-1].count(".") + 1, len(parts))


class Highlighter:
    """Turns source text into lines of (style, text) spans."""

    def __init__(self) -> None:
        self.theme = default_ansi_theme()
        # While set, theme RGB values are shown as the matching named ANSI colours.
        self._ansi_map: Optional[dict[RGB, Color]] = dict(_ANSI_MAP)
        self._style_cache: dict[tuple[str, _TokenType], Style] = {}

    def set_theme(self, theme: Theme) -> None:
        """Use a palette-derived theme with exact RGB colours."""
        self.theme = theme
        self._ansi_map = None
        self._style_cache.clear()

    def _color(self, rgb: RGB) -> AnyColor:
        if self._ansi_map is not None and rgb in self._ansi_map:
            return self._ansi_map[rgb]
        return Rgb.of(rgb)

    def _make_style(self, rgb: RGB, bold: bool, italic: bool) -> Style:
        modifiers = Modifier(0)
        if bold:
            modifiers |= Modifier.BOLD
        if italic:
            modifiers |= Modifier.ITALIC
        return Style(fg=self._color(rgb), modifiers=modifiers)

    def _token_style(self, root: str, ttype: _TokenType) -> Style:
        key = (root, ttype)
        cached = self._style_cache.get(key)
        if cached is not None:
            return cached
        scope = _token_scope(ttype)
        best: Optional[ThemeItem] = None
        best_rank: Optional[tuple[int, int, int]] = None
        if scope:
            stack = [root, scope]
            for index, item in enumerate(self.theme.scopes):
                score = _selector_score(item.scope, stack)
                if score is None:
                    continue
                rank = (score[0], score[1], index)
                if best_rank is None or rank > best_rank:
                    best, best_rank = item, rank
        if best is None:
            style = self._make_style(self.theme.foreground, False, False)
        else:
            style = self._make_style(best.foreground, best.bold, best.italic)
        self._style_cache[key] = style
        return style

    def _keyword_style(self) -> Style:
        item = next((s for s in self.theme.scopes if s.scope == "keyword"), None)
        if item is None:
            return Style(fg=Color.LIGHT_MAGENTA, modifiers=Modifier.BOLD)
        bold, italic = item.bold, item.italic
        if not bold and not italic:
            bold = True
        return self._make_style(item.foreground, bold, italic)

    def _patch_rust_keywords(self, spans: StyledLine) -> StyledLine:
        """Restyle spans holding Rust keywords the grammar missed."""
        kw_style = self._keyword_style()
        result: StyledLine = []
        for style, text in spans:
            trimmed = text.strip()
            if trimmed not in _RUST_EXTRA_KEYWORDS:
                result.append((style, text))
                continue
            leading = text[: len(text) - len(text.lstrip())]
            trailing = text[len(text.rstrip()):]
            if leading:
                result.append((style, leading))
            result.append((kw_style, trimmed))
            if trailing:
                result.append((style, trailing))
        return result

    def _highlight(self, code: str, lexer: Lexer) -> list[StyledLine]:
        if not code:
            return []
        line_count = code.count("\n") + (0 if code.endswith("\n") else 1)
        root = _root_scope(lexer)
        lines: list[StyledLine] = [[]]
        for ttype, value in lexer.get_tokens(code):
            style = self._token_style(root, ttype)
            pieces = value.split("\n")
            for i, piece in enumerate(pieces):
                if i:
                    lines.append([])
                if i < len(pieces) - 1:
                    piece = piece.rstrip("\r")
                if piece:
                    lines[-1].append((style, piece))
        lines = lines[:line_count]
        lines += [[] for _ in range(line_count - len(lines))]
        if lexer.name == "Rust":
            lines = [self._patch_rust_keywords(line) for line in lines]
        return lines

    def highlight_file(self, content: str, filename: str) -> list[StyledLine]:
        """Highlight file content, choosing the grammar from the file name."""
        try:
            lexer = get_lexer_for_filename(filename, stripnl=False)
        except ClassNotFound:
            lexer = TextLexer(stripnl=False)
        return self._highlight(content, lexer)

    def highlight_code_block(self, code: str, lang: str) -> list[StyledLine]:
        """Highlight a code block by language token such as "rust", "go" or "js"."""
        lexer: Lexer = TextLexer(stripnl=False)
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripnl=False)
            except ClassNotFound:
                try:
                    lexer = get_lexer_for_filename(f"block.{lang}", stripnl=False)
                except ClassNotFound:
                    pass
        return self._highlight(code, lexer)