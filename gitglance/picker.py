"""Fuzzy-filtered list picker."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

_SCORE_MATCH = 16
_SCORE_GAP_START = -3
_SCORE_GAP_EXTENSION = -1
_BONUS_BOUNDARY = 8
_BONUS_NON_WORD = 8
_BONUS_CAMEL_CASE = 7
_BONUS_CONSECUTIVE = 4
_BONUS_FIRST_CHAR_MULTIPLIER = 2


def _is_word(ch: str) -> bool:
    return ch.isalnum()


def _position_bonus(prev: Optional[str], cur: str) -> int:
    if not _is_word(cur):
        return _BONUS_NON_WORD
    if prev is None or not _is_word(prev):
        return _BONUS_BOUNDARY
    if prev.islower() and cur.isupper():
        return _BONUS_CAMEL_CASE
    if not prev.isdigit() and cur.isdigit():
        return _BONUS_CAMEL_CASE
    return 0


def _is_subsequence(pattern: list[str], text: list[str]) -> bool:
    chars = iter(text)
    return all(any(ch == p for ch in chars) for p in pattern)


def fuzzy_indices(choice: str, pattern: str) -> Optional[tuple[int, list[int]]]:
    """Fuzzy-match ``pattern`` against ``choice``.

    Returns ``(score, character positions)`` of the best alignment, or None
    when the pattern is not a subsequence of the choice. Matching ignores case
    unless the pattern holds an upper-case letter.
    """
    if not pattern:
        return (0, [])
    case_sensitive = any(ch.isupper() for ch in pattern)
    text = [ch if case_sensitive else ch.lower() for ch in choice]
    pat = [ch if case_sensitive else ch.lower() for ch in pattern]
    if not _is_subsequence(pat, text):
        return None

    bonuses = [
        _position_bonus(choice[j - 1] if j > 0 else None, ch)
        for j, ch in enumerate(choice)
    ]

    scores: list[list[Optional[int]]] = []
    parents: list[list[Optional[int]]] = []
    for i, pch in enumerate(pat):
        row: list[Optional[int]] = [None] * len(text)
        back: list[Optional[int]] = [None] * len(text)
        for j, tch in enumerate(text):
            if tch != pch:
                continue
            base = _SCORE_MATCH + bonuses[j] * (_BONUS_FIRST_CHAR_MULTIPLIER if i == 0 else 1)
            if i == 0:
                row[j] = base
                continue
            best: Optional[int] = None
            best_k: Optional[int] = None
            for k, prev in enumerate(scores[i - 1][:j]):
                if prev is None:
                    continue
                gap = j - k - 1
                step = _BONUS_CONSECUTIVE if gap == 0 else _SCORE_GAP_START + _SCORE_GAP_EXTENSION * (gap - 1)
                candidate = prev + step
                if best is None or candidate > best:
                    best, best_k = candidate, k
            if best is not None:
                row[j] = best + base
                back[j] = best_k
        scores.append(row)
        parents.append(back)

    end: Optional[int] = None
    end_score: Optional[int] = None
    for j, score in enumerate(scores[-1]):
        if score is not None and (end_score is None or score > end_score):
            end, end_score = j, score
    if end is None or end_score is None:
        return None

    indices = [end]
    for back in reversed(parents[1:]):
        prev_idx = back[indices[-1]]
        assert prev_idx is not None
        indices.append(prev_idx)
    indices.reverse()
    return (end_score, indices)


@dataclass
class PickerItem:
    """One selectable entry."""

    label: str
    description: str = ""
    value: str = ""


@dataclass
class FilteredItem:
    """An item that survived filtering, with its score and matched positions."""

    index: int
    score: int = 0
    match_positions: list[int] = field(default_factory=list)


class Picker:
    """A titled list of items narrowed by a fuzzy query."""

    def __init__(self, title: str, items: list[PickerItem]) -> None:
        self.title = title
        self.items = list(items)
        self.query = ""
        self.filtered: list[FilteredItem] = []
        self.cursor = 0
        self.filter()

    def filter(self) -> None:
        """Recompute the filtered list from the query and reset the cursor."""
        self.cursor = 0
        if not self.query:
            self.filtered = [FilteredItem(index=i) for i in range(len(self.items))]
            return
        scored = []
        for i, item in enumerate(self.items):
            found = fuzzy_indices(item.label, self.query)
            if found is not None:
                score, positions = found
                scored.append(FilteredItem(index=i, score=score, match_positions=positions))
        scored.sort(key=lambda f: -f.score)
        self.filtered = scored

    def selected(self) -> Optional[PickerItem]:
        if 0 <= self.cursor < len(self.filtered):
            return self.items[self.filtered[self.cursor].index]
        return None

    def move_up(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def move_down(self) -> None:
        if self.cursor + 1 < len(self.filtered):
            self.cursor += 1

    def push_char(self, c: str) -> None:
        self.query += c
        self.filter()

    def pop_char(self) -> None:
        self.query = self.query[:-1]
        self.filter()