"""Projects — the ordered collection of time chunks behind one project file."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from simetimer.chunks import TimeChunk
from simetimer.errors import ChunkIndexError


class Project:
    """Chunks in append order.

    ``add`` never re-sorts; call :meth:`sort_times` once a batch is complete.
    Every loader does so before handing a project back.
    """

    def __init__(self, chunks: Iterable[TimeChunk] = ()) -> None:
        self._chunks: list[TimeChunk] = list(chunks)

    def add(self, chunk: TimeChunk) -> None:
        self._chunks.append(chunk)

    def size(self) -> int:
        return len(self._chunks)

    def get(self, index: int) -> TimeChunk:
        if not 0 <= index < len(self._chunks):
            raise ChunkIndexError(
                f"chunk index {index} out of range for project of size {len(self._chunks)}"
            )
        return self._chunks[index]

    def total_time(self) -> int:
        """Sum of all chunk durations in milliseconds; 0 for an empty project."""
        return sum(chunk.duration_ms for chunk in self._chunks)

    def last_chunk(self) -> Optional[TimeChunk]:
        return self._chunks[-1] if self._chunks else None

    def sort_times(self) -> None:
        """Stable in-place sort by start instant, then duration."""
        self._chunks.sort(key=TimeChunk.sort_key)

    def rows(self) -> list[tuple[str, str, str, str]]:
        return [chunk.as_row(i) for i, chunk in enumerate(self._chunks)]

    def snapshot(self) -> tuple[tuple[int, int, str], ...]:
        """Immutable copy of every chunk's fields, for unsaved-change detection."""
        return tuple(chunk.as_tuple() for chunk in self._chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self) -> Iterator[TimeChunk]:
        return iter(self._chunks)

    def __getitem__(self, index: int) -> TimeChunk:
        return self.get(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Project):
            return NotImplemented
        return self._chunks == other._chunks

    __hash__ = None

    def __repr__(self) -> str:
        return f"Project({self._chunks!r})"


def has_unsaved_chunks(
    project: Project,
    last_persisted: Project | tuple | None,
) -> bool:
    """True when *project* differs from what was last saved or loaded.

    *last_persisted* is either a project or a :meth:`Project.snapshot`; ``None``
    means nothing was persisted yet, in which case only a non-empty project
    counts as unsaved.
    """
    if last_persisted is None:
        return len(project) > 0
    if isinstance(last_persisted, Project):
        last_persisted = last_persisted.snapshot()
    return project.snapshot() != tuple(last_persisted)
