import pytest

from gitglance.modes import cycle_mode, help_hints
from gitglance.styles import DiffMode


@pytest.mark.parametrize(
    "mode, is_default, expected",
    [
        (DiffMode.WORKING, False, DiffMode.STAGED),
        (DiffMode.WORKING, True, DiffMode.STAGED),
        (DiffMode.STAGED, False, DiffMode.BRANCH),
        (DiffMode.STAGED, True, DiffMode.WORKING),
        (DiffMode.BRANCH, False, DiffMode.WORKING),
        (DiffMode.BRANCH, True, DiffMode.WORKING),
    ],
)
def test_cycle_mode(mode, is_default, expected):
    assert cycle_mode(mode, is_default) is expected


def test_cycle_on_feature_branch_visits_all_modes():
    mode = DiffMode.WORKING
    seen = []
    for _ in range(3):
        mode = cycle_mode(mode, False)
        seen.append(mode)
    assert set(seen) == set(DiffMode)
    assert seen[-1] is DiffMode.WORKING


def test_cycle_on_default_branch_never_reaches_branch():
    mode = DiffMode.WORKING
    for _ in range(6):
        mode = cycle_mode(mode, True)
        assert mode is not DiffMode.BRANCH
    assert mode is DiffMode.WORKING


def test_composing_hints_take_precedence():
    hints = help_hints(True, True, True, True, True, DiffMode.WORKING)
    assert hints == [("esc", "cancel"), ("shift+tab", "switch mode"), ("enter", "submit")]


def test_panel_hints():
    hints = help_hints(False, True, False, True, True, DiffMode.WORKING)
    assert hints == [
        ("esc", "close panel"),
        ("r", "reply"),
        ("x", "resolve"),
        ("q", "close panel"),
    ]


def test_tree_focused_working_mode():
    hints = help_hints(False, False, True, True, False, DiffMode.WORKING)
    assert ("s", "stage file") in hints
    assert ("u", "unstage file") not in hints
    assert hints[0] == ("j/k", "navigate")
    assert hints[-1] == ("↵", "open file")


def test_tree_focused_staged_mode():
    hints = help_hints(False, False, True, True, False, DiffMode.STAGED)
    assert ("u", "unstage file") in hints
    assert ("s", "stage file") not in hints


def test_tree_focused_branch_mode_has_no_staging():
    hints = help_hints(False, False, True, True, False, DiffMode.BRANCH)
    keys = [k for k, _ in hints]
    assert "s" not in keys and "u" not in keys


def test_diff_hints_working_mode():
    hints = help_hints(False, False, False, True, False, DiffMode.WORKING)
    assert ("s", "stage line") in hints
    assert ("S", "stage hunk") in hints
    assert ("x", "resolve") not in hints
    assert hints[-2:] == [("m", "mode"), ("C", "commit/push")]


def test_diff_hints_staged_mode():
    hints = help_hints(False, False, False, True, False, DiffMode.STAGED)
    assert ("u", "unstage line") in hints
    assert ("U", "unstage hunk") in hints
    assert ("s", "stage line") not in hints


def test_diff_hints_on_badge_adds_resolve():
    without = help_hints(False, False, False, True, False, DiffMode.BRANCH)
    with_badge = help_hints(False, False, False, True, True, DiffMode.BRANCH)
    assert ("x", "resolve") in with_badge
    assert len(with_badge) == len(without) + 1


def test_no_files_hints():
    hints = help_hints(False, False, False, False, False, DiffMode.WORKING)
    assert hints == [
        ("j/k", "navigate tree"),
        ("↵", "open file"),
        ("^j/^k", "next/prev file"),
    ]


def test_hint_keys_are_unique_in_diff_view():
    for mode in DiffMode:
        hints = help_hints(False, False, False, True, True, mode)
        keys = [k for k, _ in hints]
        assert len(keys) == len(set(keys))