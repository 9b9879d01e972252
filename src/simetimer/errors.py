"""Error kinds raised by the time-chunk model, the session clock and the codecs."""

from __future__ import annotations

from pathlib import Path


class SimeTimerError(Exception):
    """Base class for every error simetimer raises on purpose."""


class InvalidArgumentError(SimeTimerError, ValueError):
    """A value was rejected, e.g. a ``None`` comment or a negative duration."""


class InvalidStateError(SimeTimerError, RuntimeError):
    """The session clock was asked to do something its state does not allow."""


class ChunkIndexError(SimeTimerError, IndexError):
    """Positional access outside the bounds of a project."""


class UnsupportedFormatError(SimeTimerError, ValueError):
    """A file format selector other than plain or byte."""


class ProjectFileError(SimeTimerError):
    """Failure at the file boundary. Carries the path and a one-line message."""

    offers_delete = False

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None


class ProjectFileNotFoundError(ProjectFileError):
    """The file to load does not exist, or the target directory is not writable."""


class CorruptDataError(ProjectFileError):
    """The file exists but its content is not a valid project."""

    offers_delete = True


class UnknownIOError(ProjectFileError):
    """Any other I/O failure (permissions, disk full, ...)."""
