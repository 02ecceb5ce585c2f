"""Integer percentage progress reporting."""

from __future__ import annotations

from typing import Callable, Optional

ProgressCallback = Callable[[int], None]


def percent(completed: int, total: int) -> int:
    """Half-up rounded percentage; an empty run counts as finished."""
    if total <= 0:
        return 100
    completed = min(max(completed, 0), total)
    return (completed * 200 + total) // (2 * total)


def batch_percent(index: int, count: int, item_percent: int) -> int:
    """Overall percentage while item ``index`` of ``count`` is at ``item_percent``."""
    if count <= 0:
        return 100
    scaled = 100 * index + min(max(item_percent, 0), 100)
    return min(100, (scaled * 2 + count) // (2 * count))


class ProgressTracker:
    """Counts completed images and forwards non-decreasing percentages."""

    def __init__(self, total: int, callback: Optional[ProgressCallback] = None) -> None:
        self.total = max(0, int(total))
        self.completed = 0
        self._callback = callback
        self._last: Optional[int] = None

    def report(self, value: int) -> int:
        value = min(100, max(0, int(value)))
        if self._last is not None and value < self._last:
            value = self._last
        self._last = value
        if self._callback is not None:
            self._callback(value)
        return value

    def advance(self, count: int = 1) -> int:
        self.completed = min(self.total, self.completed + count)
        return self.report(percent(self.completed, self.total))

    def finish(self) -> None:
        if self._last != 100:
            self.report(100)

    @property
    def last_reported(self) -> Optional[int]:
        return self._last
