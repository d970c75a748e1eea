"""Helpers for the review session: highlight prefetch order, comment ids and Copilot prompts."""

from __future__ import annotations

import time
from collections.abc import Collection, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class ThreadEntry:
    """One comment of a thread as it appears in the conversation history.

    ``author`` is the name shown in the history ("User", "Copilot" or a
    GitHub login). ``text_blocks`` holds the text parts of a structured reply;
    they are used only when ``body`` is empty.
    """

    author: str
    body: str = ""
    text_blocks: Sequence[str] = field(default_factory=tuple)


def _entry_text(entry: ThreadEntry) -> str:
    if entry.body:
        return entry.body
    return "\n".join(entry.text_blocks)


def next_uncached(
    filenames: Sequence[str], center: int, cached: Collection[str]
) -> Optional[str]:
    """Return the nearest file around ``center`` whose highlights are not cached.

    Candidates fan out from the centre, after before before, one step at a
    time. The centre file itself is not considered. ``center`` is clamped to
    the last file. Returns None when every other file is cached.
    """
    total = len(filenames)
    if total == 0:
        return None
    center = min(max(center, 0), total - 1)
    for offset in range(1, total):
        for candidate in (center + offset, center - offset):
            if 0 <= candidate < total and filenames[candidate] not in cached:
                return filenames[candidate]
    return None


def new_comment_id(prefix: str) -> str:
    """Return an id made of ``prefix`` and the current time in nanoseconds, in hex."""
    return f"{prefix}-{time.time_ns():x}"


def now_rfc3339() -> str:
    """Return the current UTC time as RFC 3339 with whole seconds and a Z suffix."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_thread_history(entries: Iterable[ThreadEntry]) -> str:
    """Render prior thread comments as a history section for a prompt.

    Returns an empty string when there are no entries.
    """
    parts = [f"**{entry.author}**: {_entry_text(entry)}" for entry in entries]
    if not parts:
        return ""
    return "\n\nThread history:\n" + "\n\n".join(parts) + "\n"


def build_copilot_prompt(
    path: str, line: int, side: str, body: str, diff_hunk: str, history: str
) -> str:
    """Build the prompt sent to Copilot for a comment on a diff line."""
    return (
        f"The user left a comment on `{path}` line {line} ({side}):\n\n"
        f"{body}\n\n"
        f"Diff context:\n```\n{diff_hunk}\n```{history}\n\n"
        "Please provide a helpful response."
    )