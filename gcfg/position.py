"""Source positions, files and file sets.

A position within a file set is a plain integer ``p`` with
``p == file.base + offset``; ``NO_POS`` (0) carries no position.
"""

from __future__ import annotations

import threading
from bisect import bisect_right
from dataclasses import dataclass
from typing import Any, Callable, Iterator, NamedTuple, Optional

__all__ = ["NO_POS", "PositionError", "Position", "File", "FileSet"]

NO_POS = 0


class PositionError(ValueError):
    """Raised for offsets, positions or bases outside the permitted range."""


@dataclass(frozen=True)
class Position:
    """A source position: file name, offset, line and column (1-based)."""

    filename: str = ""
    offset: int = 0
    line: int = 0
    column: int = 0

    def is_valid(self) -> bool:
        """Return True if the position has a line number."""
        return self.line > 0

    def __str__(self) -> str:
        text = self.filename
        if self.is_valid():
            if text:
                text += ":"
            text += f"{self.line}:{self.column}"
        return text or "-"


class _LineInfo(NamedTuple):
    offset: int
    filename: str
    line: int


def _search(lines: list[int], offset: int) -> int:
    return bisect_right(lines, offset) - 1


class File:
    """A file belonging to a FileSet, with its line offset table."""

    def __init__(
        self,
        fileset: FileSet,
        name: str,
        base: int,
        size: int,
        lines: Optional[list[int]] = None,
        infos: Optional[list[_LineInfo]] = None,
    ) -> None:
        self._set = fileset
        self.name = name
        self.base = base
        self.size = size
        self._lines: list[int] = list(lines) if lines is not None else [0]
        self._infos: list[_LineInfo] = list(infos) if infos else []

    def __repr__(self) -> str:
        return f"File(name={self.name!r}, base={self.base}, size={self.size})"

    def line_count(self) -> int:
        """Return the number of lines in the file."""
        with self._set._lock:
            return len(self._lines)

    def add_line(self, offset: int) -> None:
        """Record the start of a new line; ignored unless past the last line and inside the file."""
        with self._set._lock:
            if (not self._lines or self._lines[-1] < offset) and offset < self.size:
                self._lines.append(offset)

    def set_lines(self, lines: list[int]) -> bool:
        """Replace the line table; return False if it is not strictly increasing within the file."""
        for previous, offset in zip([None, *lines], lines):
            if (previous is not None and offset <= previous) or self.size <= offset:
                return False
        with self._set._lock:
            self._lines = list(lines)
        return True

    def set_lines_for_content(self, content: bytes) -> None:
        """Compute the line table from the file content."""
        lines: list[int] = []
        line = 0
        for offset, byte in enumerate(content):
            if line >= 0:
                lines.append(line)
            line = offset + 1 if byte == 0x0A else -1
        with self._set._lock:
            self._lines = lines

    def add_line_info(self, offset: int, filename: str, line: int) -> None:
        """Record alternative file and line information starting at offset."""
        with self._set._lock:
            if not self._infos or (self._infos[-1].offset < offset < self.size):
                self._infos.append(_LineInfo(offset, filename, line))

    def pos(self, offset: int) -> int:
        """Return the position value for a file offset."""
        if offset < 0 or offset > self.size:
            raise PositionError(f"illegal file offset {offset}")
        return self.base + offset

    def offset(self, p: int) -> int:
        """Return the file offset for a position value in this file."""
        if not self.base <= p <= self.base + self.size:
            raise PositionError(f"illegal Pos value {p}")
        return p - self.base

    def line(self, p: int) -> int:
        """Return the line number for a position value."""
        return self.position(p).line

    def position(self, p: int) -> Position:
        """Return the Position for a position value in this file, or an empty one for NO_POS."""
        if p == NO_POS:
            return Position()
        if not self.base <= p <= self.base + self.size:
            raise PositionError(f"illegal Pos value {p}")
        return self._position(p)

    def _position(self, p: int) -> Position:
        offset = p - self.base
        with self._set._lock:
            filename = self.name
            line = column = 0
            i = _search(self._lines, offset)
            if i >= 0:
                line, column = i + 1, offset - self._lines[i] + 1
            if self._infos:
                j = bisect_right(self._infos, offset, key=lambda info: info.offset) - 1
                if j >= 0:
                    alt = self._infos[j]
                    filename = alt.filename
                    k = _search(self._lines, alt.offset)
                    if k >= 0:
                        line += alt.line - k - 1
        return Position(filename, offset, line, column)


class FileSet:
    """A set of source files sharing one position space."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._base = 1  # 0 is NO_POS
        self._files: list[File] = []
        self._last: Optional[File] = None

    @property
    def base(self) -> int:
        """The minimum base that the next added file may use."""
        with self._lock:
            return self._base

    def __iter__(self) -> Iterator[File]:
        with self._lock:
            files = list(self._files)
        return iter(files)

    def add_file(self, filename: str, base: int, size: int) -> File:
        """Add a file with the given name, base and size and return it."""
        with self._lock:
            if base < self._base or size < 0:
                raise PositionError(f"illegal base {base} or size {size}")
            file = File(self, filename, base, size)
            self._base = base + size + 1  # EOF has a position too
            self._files.append(file)
            self._last = file
            return file

    def _find(self, p: int) -> Optional[File]:
        last = self._last
        if last is not None and last.base <= p <= last.base + last.size:
            return last
        i = bisect_right(self._files, p, key=lambda f: f.base) - 1
        if i >= 0:
            file = self._files[i]
            if p <= file.base + file.size:
                self._last = file
                return file
        return None

    def file(self, p: int) -> Optional[File]:
        """Return the file containing p, or None."""
        if p == NO_POS:
            return None
        with self._lock:
            return self._find(p)

    def position(self, p: int) -> Position:
        """Return the Position for p, or an empty Position if p is unknown."""
        if p == NO_POS:
            return Position()
        with self._lock:
            file = self._find(p)
            return file._position(p) if file is not None else Position()

    def write(self, encode: Callable[[dict[str, Any]], Any]) -> Any:
        """Serialize the file set as plain data through encode and return its result."""
        with self._lock:
            data = {
                "base": self._base,
                "files": [
                    {
                        "name": f.name,
                        "base": f.base,
                        "size": f.size,
                        "lines": list(f._lines),
                        "infos": [
                            {"offset": i.offset, "filename": i.filename, "line": i.line}
                            for i in f._infos
                        ],
                    }
                    for f in self._files
                ],
            }
        return encode(data)

    def read(self, decode: Callable[[], dict[str, Any]]) -> None:
        """Replace the file set's contents with the plain data returned by decode."""
        data = decode()
        with self._lock:
            self._base = data["base"]
            self._files = [
                File(
                    self,
                    f["name"],
                    f["base"],
                    f["size"],
                    f.get("lines") or [],
                    [
                        _LineInfo(i["offset"], i["filename"], i["line"])
                        for i in f.get("infos") or []
                    ],
                )
                for f in data.get("files") or []
            ]
            self._last = None