"""Stateless scanners used to pick chunk boundaries."""
from __future__ import annotations

from enum import Enum

FENCE = "```"
NOT_FOUND = -1


class FenceState(Enum):
    OUTSIDE = "outside"
    INSIDE = "inside"

    def toggled(self) -> "FenceState":
        return FenceState.INSIDE if self is FenceState.OUTSIDE else FenceState.OUTSIDE


def _is_fence_at(text: str, index: int) -> bool:
    return text.startswith(FENCE, index)


def find_last_unclosed_code_block(text: str) -> int:
    """Return the offset of the last opening fence left unclosed, or -1.

    Every fence flips the scanner between ``OUTSIDE`` and ``INSIDE``; there is
    no notion of nesting. The offset of the most recent OUTSIDE -> INSIDE flip
    is kept, and reported only if the scan ends INSIDE.
    """
    state = FenceState.OUTSIDE
    last_open = NOT_FOUND

    i = 0
    while i < len(text):
        if _is_fence_at(text, i):
            if state is FenceState.OUTSIDE:
                last_open = i
            state = state.toggled()
            i += len(FENCE)
            continue
        i += 1

    if state is FenceState.INSIDE:
        return last_open
    return NOT_FOUND


def fence_start_spanning(text: str, offset: int) -> int:
    """Return the start of the fence that straddles ``offset``, or -1.

    Fences are matched left to right without overlap, the same way
    :func:`find_last_unclosed_code_block` sees them.
    """
    i = 0
    while i < offset:
        if _is_fence_at(text, i):
            if offset < i + len(FENCE):
                return i
            i += len(FENCE)
            continue
        i += 1
    return NOT_FOUND


def find_next_closing_code_block(text: str, start: int) -> int:
    """Return the offset just past the next fence at or after ``start``, or -1."""
    idx = text.find(FENCE, max(start, 0))
    if idx < 0:
        return NOT_FOUND
    return idx + len(FENCE)


def _find_last_of(text: str, chars: str, window: int) -> int:
    stop = max(0, len(text) - window)
    for i in range(len(text) - 1, stop - 1, -1):
        if text[i] in chars:
            return i
    return NOT_FOUND


def find_last_newline(text: str, window: int) -> int:
    """Offset of the last newline within the trailing ``window`` chars, or -1."""
    return _find_last_of(text, "\n", window)


def find_last_space(text: str, window: int) -> int:
    """Offset of the last space or tab within the trailing ``window`` chars, or -1."""
    return _find_last_of(text, " \t", window)
