"""Session clock — the Idle/Running state machine that turns start, stop and cut
into time chunks appended to the current project.

The clock never reads the wall clock implicitly inside a chunk: every
operation captures exactly one ``now()`` reading and passes explicit values to
:class:`~simetimer.chunks.TimeChunk`. Inject *now* for reproducible tests.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from simetimer.chunks import TimeChunk, format_duration, now_millis
from simetimer.errors import InvalidStateError
from simetimer.project import Project, has_unsaved_chunks

logger = logging.getLogger(__name__)


class SessionClock:
    """Measures time into a :class:`Project`."""

    def __init__(
        self,
        project: Optional[Project] = None,
        now: Optional[Callable[[], int]] = None,
    ) -> None:
        self._now = now or now_millis
        self.project = project if project is not None else Project()
        self._current_start: Optional[int] = None
        self._persisted: Optional[tuple] = None

    @property
    def running(self) -> bool:
        return self._current_start is not None

    @property
    def current_start(self) -> Optional[int]:
        return self._current_start

    def _read_now(self) -> int:
        """One clock reading, never earlier than the running chunk's start.

        A wall clock that jumps backwards yields a zero-length interval instead
        of a negative one.
        """
        now = self._now()
        if self._current_start is not None and now < self._current_start:
            logger.warning(
                "Clock went backwards by %d ms; clamping to chunk start",
                self._current_start - now,
            )
            return self._current_start
        return now

    def _require_running(self, action: str) -> None:
        if not self.running:
            raise InvalidStateError(f"cannot {action}: the clock is not running")

    # -- transitions -------------------------------------------------------

    def start(self) -> None:
        if self.running:
            raise InvalidStateError("cannot start: the clock is already running")
        self._current_start = self._read_now()
        logger.debug("Clock started at %d", self._current_start)

    def stop(self, comment: str = "") -> TimeChunk:
        """Close the running interval, append it and go idle."""
        self._require_running("stop")
        now = self._read_now()
        chunk = TimeChunk(self._current_start, now - self._current_start, comment)
        self.project.add(chunk)
        self._current_start = None
        logger.debug("Clock stopped: %r", chunk)
        return chunk

    def cut(self, comment: str = "") -> TimeChunk:
        """Close the running interval and open the next one at the same instant."""
        self._require_running("cut")
        now = self._read_now()
        chunk = TimeChunk(self._current_start, now - self._current_start, comment)
        self.project.add(chunk)
        self._current_start = now
        logger.debug("Clock cut: %r", chunk)
        return chunk

    def reset(self) -> None:
        """Discard any running interval and start over with an empty project.

        The caller decides whether to confirm first, see :attr:`has_unsaved_chunks`.
        """
        if self.running:
            logger.debug("Reset discarded running interval started at %d", self._current_start)
        self._current_start = None
        self.project = Project()
        self._persisted = None
        logger.info("Project reset")

    def replace_project(self, project: Project) -> None:
        """Swap in a freshly loaded project and treat it as persisted."""
        if self.running:
            raise InvalidStateError("cannot replace the project while the clock is running")
        self.project = project
        self.mark_persisted()

    def set_comment(self, index: int, comment: str) -> TimeChunk:
        chunk = self.project.get(index)
        chunk.set_comment(comment)
        return chunk

    # -- persistence tracking ----------------------------------------------

    def mark_persisted(self) -> None:
        """Record the current project content as saved."""
        self._persisted = self.project.snapshot()

    @property
    def has_unsaved_chunks(self) -> bool:
        return has_unsaved_chunks(self.project, self._persisted)

    # -- display -----------------------------------------------------------

    def elapsed_chunk_ms(self) -> int:
        if self.running:
            return self._read_now() - self._current_start
        last = self.project.last_chunk()
        return last.duration_ms if last is not None else 0

    def elapsed_total_ms(self) -> int:
        running = self._read_now() - self._current_start if self.running else 0
        return self.project.total_time() + running

    def displayed_chunk(self) -> str:
        return format_duration(self.elapsed_chunk_ms())

    def displayed_total(self) -> str:
        return format_duration(self.elapsed_total_ms())

    def project_rows(self) -> list[tuple[str, str, str, str]]:
        return self.project.rows()
