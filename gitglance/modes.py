"""Diff mode cycling and the context-dependent key hints of the diff view."""

from __future__ import annotations

from gitglance.styles import DiffMode

Hint = tuple[str, str]


def cycle_mode(mode: DiffMode, is_default_branch: bool) -> DiffMode:
    """Return the mode after ``mode``.

    Working goes to staged. Staged goes to branch, except on the default
    branch, where a branch diff is empty and the cycle wraps back to working.
    Branch goes to working.
    """
    if mode is DiffMode.WORKING:
        return DiffMode.STAGED
    if mode is DiffMode.STAGED:
        return DiffMode.WORKING if is_default_branch else DiffMode.BRANCH
    return DiffMode.WORKING


def help_hints(
    composing: bool,
    panel_visible: bool,
    tree_focused: bool,
    has_files: bool,
    on_badge: bool,
    mode: DiffMode,
) -> list[Hint]:
    """Return the (key, description) hints shown in the help line for the current state."""
    if composing:
        return [
            ("esc", "cancel"),
            ("shift+tab", "switch mode"),
            ("enter", "submit"),
        ]

    if panel_visible:
        return [
            ("esc", "close panel"),
            ("r", "reply"),
            ("x", "resolve"),
            ("q", "close panel"),
        ]

    if tree_focused:
        hints = [
            ("j/k", "navigate"),
            ("l", "focus diff"),
            ("^j/^k", "next/prev file"),
        ]
        if mode is DiffMode.WORKING:
            hints.append(("s", "stage file"))
        elif mode is DiffMode.STAGED:
            hints.append(("u", "unstage file"))
        hints.append(("↵", "open file"))
        return hints

    if has_files:
        hints = [
            ("j/k", "navigate"),
            ("^j/^k", "next/prev file"),
            ("f", "focus tree"),
            ("↵", "comment"),
            ("c", "ask copilot"),
        ]
        if on_badge:
            hints.append(("x", "resolve"))
        if mode is DiffMode.WORKING:
            hints += [("s", "stage line"), ("S", "stage hunk")]
        elif mode is DiffMode.STAGED:
            hints += [("u", "unstage line"), ("U", "unstage hunk")]
        hints += [("m", "mode"), ("C", "commit/push")]
        return hints

    return [
        ("j/k", "navigate tree"),
        ("↵", "open file"),
        ("^j/^k", "next/prev file"),
    ]