"""Time chunks, one measured interval each, and their display formatting.

All instants are integer milliseconds since the Unix epoch and all durations
are integer milliseconds.
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import Callable, Optional

from simetimer.errors import InvalidArgumentError


def now_millis() -> int:
    """Current wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


def format_duration(ms: int) -> str:
    """Render a duration as ``H:MM:SS.mmm`` with unpadded hours."""
    if ms < 0:
        raise InvalidArgumentError(f"duration must not be negative, got {ms}")
    seconds, millis = divmod(ms, 1000)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def format_start(instant_ms: int) -> str:
    """Render an instant in local time as ``D. M. YYYY, HH:MM:SS``."""
    dt = datetime.fromtimestamp(instant_ms / 1000)
    return f"{dt.day}. {dt.month}. {dt.year:04d}, {dt:%H:%M:%S}"


class TimeChunk:
    """One recorded interval: start instant, duration and an editable comment.

    Start and duration are fixed at construction. Ordering follows
    :meth:`compare_to` (start first, then duration); equality also takes the
    comment into account so that a reloaded project compares equal to the one
    that was saved.
    """

    __slots__ = ("_start_ms", "_duration_ms", "_comment")

    def __init__(self, start_ms: int, duration_ms: int, comment: str = "") -> None:
        if duration_ms < 0:
            raise InvalidArgumentError(f"duration must not be negative, got {duration_ms}")
        if comment is None:
            raise InvalidArgumentError("comment must not be None")
        self._start_ms = int(start_ms)
        self._duration_ms = int(duration_ms)
        self._comment = comment

    @classmethod
    def until_now(
        cls,
        start_ms: int,
        comment: str = "",
        now: Optional[Callable[[], int]] = None,
    ) -> "TimeChunk":
        """Build a chunk whose duration runs from *start_ms* to the current time."""
        stop_ms = (now or now_millis)()
        return cls(start_ms, max(stop_ms - start_ms, 0), comment)

    @property
    def start_ms(self) -> int:
        return self._start_ms

    @property
    def duration_ms(self) -> int:
        return self._duration_ms

    @property
    def end_ms(self) -> int:
        return self._start_ms + self._duration_ms

    @property
    def comment(self) -> str:
        return self._comment

    def set_comment(self, comment: str) -> None:
        if comment is None:
            raise InvalidArgumentError("comment must not be None")
        self._comment = comment

    def sort_key(self) -> tuple[int, int]:
        return (self._start_ms, self._duration_ms)

    def compare_to(self, other: "TimeChunk") -> int:
        """Return -1, 0 or 1 comparing start instants first and durations second."""
        mine, theirs = self.sort_key(), other.sort_key()
        return (mine > theirs) - (mine < theirs)

    def __lt__(self, other: "TimeChunk") -> bool:
        if not isinstance(other, TimeChunk):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeChunk):
            return NotImplemented
        return (
            self._start_ms == other._start_ms
            and self._duration_ms == other._duration_ms
            and self._comment == other._comment
        )

    __hash__ = None  # mutable comment

    def __repr__(self) -> str:
        return (
            f"TimeChunk(start_ms={self._start_ms}, duration_ms={self._duration_ms}, "
            f"comment={self._comment!r})"
        )

    def as_tuple(self) -> tuple[int, int, str]:
        return (self._start_ms, self._duration_ms, self._comment)

    def as_row(self, index: int) -> tuple[str, str, str, str]:
        """Table row with the 1-based *index*, formatted start, duration and comment."""
        return (
            str(index + 1),
            format_start(self._start_ms),
            format_duration(self._duration_ms),
            self._comment,
        )
