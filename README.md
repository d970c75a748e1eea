# gitglance

Building blocks for a keyboard-driven terminal reviewer of git diffs.
The package provides styled-text types, colour schemes, a fuzzy picker,
popup layout, syntax highlighting, patch parsing and helpers for review
threads.

## Installation

```
pip install gitglance
```

To run the test suite:

```
pip install "gitglance[test]"
pytest
```

## What is inside

- `gitglance.styles`: `Color`, `Rgb`, `Modifier`, `Style`, `Span` and `Line`
  for styled text; `Span.width` and `Line.width` give the display width.
  `DiffColors.from_palette` takes a 16-colour terminal palette (a sequence
  of optional RGB tuples, or an object with a `colors` attribute) and
  derives diff colours from it: it blends add, delete and hunk backgrounds,
  keeps foregrounds readable with `ensure_contrast`, and sets the selection,
  chrome and search colours. `DiffColors()` gives plain ANSI defaults.
  `mode_label`, `mode_color` and `mode_style` describe each `DiffMode`
  (`UNSTAGED`, `STAGED`, `BRANCH`).
- `gitglance.picker`: `Picker` is a fuzzy-filtered list of `PickerItem`s.
  Results are ranked by score and carry the positions that matched, for
  highlighting. Matching ignores case unless the query has an upper-case
  letter. `fuzzy_indices` can also be called directly.
- `gitglance.popup`: `Popup.render(area_width, area_height)` lays out a
  bordered, titled modal and returns a `PopupRender` with its position,
  size and rows. `search_popup_lines` and `picker_popup_lines` build its
  contents.
- `gitglance.highlight`: `Highlighter.highlight_file` and
  `Highlighter.highlight_code_block` turn source text into one list of
  `(Style, text)` spans per line, using Pygments. The default theme maps its
  colours to named ANSI colours; `set_theme` with a theme from
  `build_theme_from_palette` uses exact RGB instead. Rust keywords such as
  `async` and `await` are always given the keyword style.
- `gitglance.patch`: `parse_patch_to_diff_lines` turns a unified-diff patch
  into `DiffLineData` rows with old and new line numbers;
  `parse_hunk_header` reads the start lines of a hunk header, and
  `build_diff_context` renders the lines around a cursor, marking it.
- `gitglance.modes`: `cycle_mode` moves to the next diff mode, and
  `help_hints` returns the key hints for the current focus.
- `gitglance.session`: `format_thread_history` and `build_copilot_prompt`
  build the assistant prompt for a comment; `new_comment_id` and
  `now_rfc3339` make ids and timestamps; `next_uncached` picks the next
  file to pre-highlight, fanning out from the current one.

## Example

```python
from gitglance.picker import Picker, PickerItem
from gitglance.patch import parse_patch_to_diff_lines

p = Picker("Files", [PickerItem("src/main.rs", "+10 -5", "src/main.rs")])
p.push_char("m")
print(p.selected().value)        # src/main.rs

rows = parse_patch_to_diff_lines("@@ -1,2 +1,2 @@\n-old\n+new\n same\n")
print([(r.line_type.name, r.old_line_no, r.new_line_no) for r in rows])
# [('HUNK_HEADER', None, None), ('DELETE', 1, None), ('ADD', None, 1), ('CONTEXT', 2, 2)]
```

## What it does not do

The package has no command and does not draw to a terminal: `Popup` and the
highlighter return laid-out text, and a front end has to put it on screen.
It does not run git, read a repository or talk to GitHub or an assistant;
patches, palettes and thread contents are passed in by the caller. It keeps
no scroll or cursor state for a view and has no cell buffer or hyperlink
output.