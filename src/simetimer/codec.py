"""Project file codecs — plain (tab-delimited text) and byte (binary records).

Plain, one line per chunk::

    <row 1..n>\\t<start ms>\\t<duration ms>\\t<comment>

Backslash, tab, CR and LF inside a comment are written as ``\\\\``, ``\\t``,
``\\r`` and ``\\n`` so a comment can never break the line layout.

Byte, one record per chunk::

    int64 BE start ms | int64 BE duration ms | uint16 BE length | modified UTF-8 comment

Neither format carries a header; the caller always names the codec.
Legacy layouts (two-field plain lines, 16-byte byte records) are only read
when asked for explicitly with ``legacy=True``.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import struct
import tempfile
from enum import Enum
from pathlib import Path

from simetimer.chunks import TimeChunk
from simetimer.errors import (
    CorruptDataError,
    InvalidArgumentError,
    ProjectFileNotFoundError,
    UnknownIOError,
    UnsupportedFormatError,
)
from simetimer.project import Project

logger = logging.getLogger(__name__)


class FileFormat(str, Enum):
    PLAIN = "plain"
    BYTE = "byte"

    @classmethod
    def coerce(cls, value: "FileFormat | str") -> "FileFormat":
        """Return *value* as a FileFormat or raise UnsupportedFormatError."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedFormatError(f"unsupported file format: {value!r}")


# ---------------------------------------------------------------------------
# Plain format
# ---------------------------------------------------------------------------

_PLAIN_FIELDS = 4
_LEGACY_PLAIN_FIELDS = 2

_ESCAPES = {"\\": "\\\\", "\t": "\\t", "\n": "\\n", "\r": "\\r"}
_UNESCAPES = {"\\": "\\", "t": "\t", "n": "\n", "r": "\r"}
_ESCAPE_RE = re.compile(r"[\\\t\n\r]")
_UNESCAPE_RE = re.compile(r"\\([\\tnr])")
_INT_RE = re.compile(r"-?[0-9]+")


def _escape_comment(comment: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], comment)


def _unescape_comment(field: str) -> str:
    # Unknown sequences stay literal so files written without escaping still load.
    return _UNESCAPE_RE.sub(lambda m: _UNESCAPES[m.group(1)], field)


def _require_encodable(chunk: TimeChunk) -> None:
    """Refuse comments holding surrogate code points; neither format can store them."""
    try:
        chunk.comment.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidArgumentError(
            f"comment of chunk starting at {chunk.start_ms} contains an unpaired "
            f"surrogate at position {exc.start}"
        ) from exc


def encode_plain(project: Project, line_separator: str = os.linesep) -> bytes:
    for chunk in project:
        _require_encodable(chunk)
    lines = [
        f"{i + 1}\t{chunk.start_ms}\t{chunk.duration_ms}\t{_escape_comment(chunk.comment)}"
        for i, chunk in enumerate(project)
    ]
    if not lines:
        return b""
    return (line_separator.join(lines) + line_separator).encode("utf-8")


def _parse_int(field: str, what: str, line_no: int) -> int:
    # int() alone would also take "1_000", " 5 " and non-ASCII digits.
    if not _INT_RE.fullmatch(field):
        raise CorruptDataError(f"line {line_no}: {what} is not an integer: {field!r}")
    return int(field)


def _chunk_or_corrupt(start: int, duration: int, comment: str, where: str) -> TimeChunk:
    try:
        return TimeChunk(start, duration, comment)
    except InvalidArgumentError as exc:
        raise CorruptDataError(f"{where}: {exc}") from exc


def decode_plain(data: bytes, legacy: bool = False) -> Project:
    """Parse plain-format bytes into an unsorted project.

    Blank lines are skipped and both LF and CRLF line ends are accepted.
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CorruptDataError(f"file is not valid UTF-8: {exc}") from exc

    project = Project()
    for line_no, line in enumerate(text.split("\n"), start=1):
        line = line.rstrip("\r")
        if not line:
            continue
        fields = line.split("\t")
        if len(fields) == _PLAIN_FIELDS:
            _parse_int(fields[0], "row index", line_no)
            start = _parse_int(fields[1], "start", line_no)
            duration = _parse_int(fields[2], "duration", line_no)
            comment = _unescape_comment(fields[3])
        elif legacy and len(fields) == _LEGACY_PLAIN_FIELDS:
            start = _parse_int(fields[0], "start", line_no)
            duration = _parse_int(fields[1], "duration", line_no)
            comment = ""
        else:
            raise CorruptDataError(
                f"line {line_no}: expected {_PLAIN_FIELDS} tab-separated fields, got {len(fields)}"
            )
        project.add(_chunk_or_corrupt(start, duration, comment, f"line {line_no}"))
    return project


# ---------------------------------------------------------------------------
# Byte format
# ---------------------------------------------------------------------------

_TIMES = struct.Struct(">qq")
_LENGTH = struct.Struct(">H")


def _encode_modified_utf8(text: str) -> bytes:
    """Java-style modified UTF-8: NUL as C0 80, astral characters as surrogate pairs."""
    units = []
    for ch in text:
        cp = ord(ch)
        if cp > 0xFFFF:
            cp -= 0x10000
            units.append(chr(0xD800 + (cp >> 10)))
            units.append(chr(0xDC00 + (cp & 0x3FF)))
        else:
            units.append(ch)
    return "".join(units).encode("utf-8", "surrogatepass").replace(b"\x00", b"\xc0\x80")


def _decode_modified_utf8(raw: bytes) -> str:
    text = raw.replace(b"\xc0\x80", b"\x00").decode("utf-8", "surrogatepass")
    # Re-pair surrogates; a lone surrogate is rejected here.
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le")


def encode_byte(project: Project) -> bytes:
    parts: list[bytes] = []
    for chunk in project:
        _require_encodable(chunk)
        comment = _encode_modified_utf8(chunk.comment)
        if len(comment) > 0xFFFF:
            raise InvalidArgumentError(
                f"comment of chunk starting at {chunk.start_ms} is too long to encode "
                f"({len(comment)} bytes, at most 65535)"
            )
        try:
            parts.append(_TIMES.pack(chunk.start_ms, chunk.duration_ms))
        except struct.error as exc:
            raise InvalidArgumentError(f"chunk times do not fit in 64 bits: {chunk!r}") from exc
        parts.append(_LENGTH.pack(len(comment)))
        parts.append(comment)
    return b"".join(parts)


def decode_byte(data: bytes, legacy: bool = False) -> Project:
    """Parse byte-format records into an unsorted project.

    The data must end exactly on a record boundary.
    """
    project = Project()
    offset = 0
    record = 0
    total = len(data)
    while offset < total:
        record += 1
        where = f"record {record} at byte {offset}"
        if total - offset < _TIMES.size:
            raise CorruptDataError(f"{where}: truncated, {total - offset} bytes left")
        start, duration = _TIMES.unpack_from(data, offset)
        offset += _TIMES.size
        comment = ""
        if not legacy:
            if total - offset < _LENGTH.size:
                raise CorruptDataError(f"{where}: truncated before comment length")
            (length,) = _LENGTH.unpack_from(data, offset)
            offset += _LENGTH.size
            if total - offset < length:
                raise CorruptDataError(
                    f"{where}: comment needs {length} bytes, {total - offset} left"
                )
            try:
                comment = _decode_modified_utf8(data[offset:offset + length])
            except UnicodeError as exc:
                raise CorruptDataError(f"{where}: comment is not valid UTF-8") from exc
            offset += length
        project.add(_chunk_or_corrupt(start, duration, comment, where))
    return project


# ---------------------------------------------------------------------------
# Dispatch and file boundary
# ---------------------------------------------------------------------------

_ENCODERS = {
    FileFormat.PLAIN: encode_plain,
    FileFormat.BYTE: encode_byte,
}

_DECODERS = {
    FileFormat.PLAIN: decode_plain,
    FileFormat.BYTE: decode_byte,
}


def encode(project: Project, fmt: FileFormat | str) -> bytes:
    return _ENCODERS[FileFormat.coerce(fmt)](project)


def decode(data: bytes, fmt: FileFormat | str, legacy: bool = False) -> Project:
    """Decode *data* and return the project sorted chronologically."""
    project = _DECODERS[FileFormat.coerce(fmt)](data, legacy=legacy)
    project.sort_times()
    return project


def _atomic_write(path: Path, data: bytes) -> None:
    """Write *data* to a temp file beside *path*, then rename it into place."""
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
    except (FileNotFoundError, NotADirectoryError, PermissionError) as exc:
        raise ProjectFileNotFoundError(
            f"Cannot write to folder {path.parent}: {exc.strerror or exc}", path
        ) from exc
    except OSError as exc:
        raise UnknownIOError(f"An unknown error occurred while saving: {exc}", path) from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, path)
    except OSError as exc:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        raise UnknownIOError(f"An unknown error occurred while saving: {exc}", path) from exc


def save_project(project: Project, path: str | Path, fmt: FileFormat | str) -> Path:
    """Write *project* to *path* in *fmt*, replacing the file all at once.

    On failure the previous file content is left untouched.
    """
    fmt = FileFormat.coerce(fmt)
    path = Path(path)
    data = encode(project, fmt)
    _atomic_write(path, data)
    logger.info("Project saved: %s (%s, %d chunks)", path, fmt.value, len(project))
    return path


def load_project(path: str | Path, fmt: FileFormat | str, legacy: bool = False) -> Project:
    """Read a complete project from *path*, sorted chronologically.

    Either the whole project is returned or an error is raised; there is no
    partial result.
    """
    fmt = FileFormat.coerce(fmt)
    path = Path(path)
    try:
        data = path.read_bytes()
    except (FileNotFoundError, NotADirectoryError, IsADirectoryError) as exc:
        raise ProjectFileNotFoundError(f"The project file could not be found: {path}", path) from exc
    except OSError as exc:
        raise UnknownIOError(f"An unknown error occurred while loading: {exc}", path) from exc

    try:
        project = decode(data, fmt, legacy=legacy)
    except CorruptDataError as exc:
        logger.warning("Corrupt project file %s (%s): %s", path, fmt.value, exc.message)
        raise CorruptDataError(f"The project file could not be read: {exc.message}", path) from exc

    logger.info("Project loaded: %s (%s, %d chunks)", path, fmt.value, len(project))
    return project


def delete_file(path: str | Path) -> None:
    """Remove a project file, typically after a corrupt load."""
    path = Path(path)
    try:
        path.unlink()
    except FileNotFoundError as exc:
        raise ProjectFileNotFoundError(f"The project file could not be found: {path}", path) from exc
    except OSError as exc:
        raise UnknownIOError(f"The project file could not be deleted: {exc}", path) from exc
    logger.info("Project file deleted: %s", path)


PROJECT_SUFFIX = ".stp"


def with_default_suffix(path: str | Path) -> Path:
    """Append ``.stp`` to a file name that has no extension."""
    path = Path(path).expanduser()
    if "." not in path.name:
        path = path.with_name(path.name + PROJECT_SUFFIX)
    return path
