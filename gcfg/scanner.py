"""Tokenizer for configuration text.

A :class:`Scanner` turns UTF-8 source bytes into a stream of tokens,
recording line information in the :class:`~gcfg.position.File` it is given.
Syntax errors are reported through an optional error handler; scanning
always continues so that a caller can collect every problem.
"""

from __future__ import annotations

import unicodedata
from enum import IntFlag
from typing import IO, Callable, Iterable, Iterator, NamedTuple, Optional, Union

from .position import File, Position
from .token import Token

__all__ = [
    "ScanError",
    "ErrorList",
    "print_error",
    "Mode",
    "ScanResult",
    "ErrorHandler",
    "Scanner",
]

_EOF = ""
_WHITESPACE = (" ", "\t", "\r")

ErrorHandler = Callable[[Position, str], None]


class ScanError(Exception):
    """A syntax error at a source position."""

    def __init__(self, pos: Position, msg: str) -> None:
        super().__init__(pos, msg)
        self.pos = pos
        self.msg = msg

    def __str__(self) -> str:
        if self.pos.filename or self.pos.is_valid():
            return f"{self.pos}: {self.msg}"
        return self.msg

    def __repr__(self) -> str:
        return f"ScanError({self.pos!r}, {self.msg!r})"


class ErrorList(Exception):
    """An ordered collection of :class:`ScanError`, usable as an exception itself."""

    def __init__(self, errors: Iterable[ScanError] = ()) -> None:
        super().__init__()
        self._errors: list[ScanError] = list(errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[ScanError]:
        return iter(list(self._errors))

    def __getitem__(self, index: int) -> ScanError:
        return self._errors[index]

    def add(self, pos: Position, msg: str) -> None:
        """Append an error with the given position and message."""
        self._errors.append(ScanError(pos, msg))

    def reset(self) -> None:
        """Remove all errors."""
        self._errors.clear()

    def sort(self) -> None:
        """Sort the errors by file name, then by offset."""
        self._errors.sort(key=lambda e: (e.pos.filename, e.pos.offset))

    def remove_multiples(self) -> None:
        """Sort the errors and keep only the first one on each line."""
        self.sort()
        last = Position()
        kept: list[ScanError] = []
        for error in self._errors:
            if error.pos.filename != last.filename or error.pos.line != last.line:
                last = error.pos
                kept.append(error)
        self._errors = kept

    def err(self) -> Optional[ErrorList]:
        """Return a snapshot of this list as an exception, or None if it is empty."""
        if not self._errors:
            return None
        return ErrorList(self._errors)

    def __str__(self) -> str:
        if not self._errors:
            return "no errors"
        if len(self._errors) == 1:
            return str(self._errors[0])
        return f"{self._errors[0]} (and {len(self._errors) - 1} more errors)"

    def __repr__(self) -> str:
        return f"ErrorList({self._errors!r})"


def print_error(stream: IO[str], err: Optional[BaseException]) -> None:
    """Write err to stream: one line per entry for an ErrorList, else its text."""
    if isinstance(err, ErrorList):
        for error in err:
            stream.write(f"{error}\n")
    elif err is not None:
        stream.write(f"{err}\n")


class Mode(IntFlag):
    """Flags controlling scanner behaviour."""

    NONE = 0
    SCAN_COMMENTS = 1  # return comments as COMMENT tokens


class ScanResult(NamedTuple):
    """One scanned token: its position, kind and literal text."""

    pos: int
    tok: Token
    lit: str


def _is_letter(ch: str) -> bool:
    if not ch:
        return False
    if "a" <= ch <= "z" or "A" <= ch <= "Z":
        return True
    return ord(ch) >= 0x80 and unicodedata.category(ch).startswith("L")


def _is_digit(ch: str) -> bool:
    if not ch:
        return False
    if "0" <= ch <= "9":
        return True
    return ord(ch) >= 0x80 and unicodedata.category(ch) == "Nd"


def _format_rune(ch: str) -> str:
    text = f"U+{ord(ch):04X}"
    if ch.isprintable():
        text += f" '{ch}'"
    return text


def _decode_rune(src: bytes, index: int) -> tuple[Optional[str], int]:
    lead = src[index]
    if 0xC2 <= lead <= 0xDF:
        width = 2
    elif 0xE0 <= lead <= 0xEF:
        width = 3
    elif 0xF0 <= lead <= 0xF4:
        width = 4
    else:
        return None, 1
    try:
        return src[index:index + width].decode("utf-8"), width
    except UnicodeDecodeError:
        return None, 1


class Scanner:
    """Tokenizer over one source file."""

    def __init__(
        self,
        file: File,
        src: Union[bytes, bytearray, str],
        error_handler: Optional[ErrorHandler] = None,
        mode: Mode = Mode.NONE,
    ) -> None:
        if isinstance(src, str):
            src = src.encode("utf-8")
        src = bytes(src)
        if file.size != len(src):
            raise ValueError(
                "source length and file size mismatch: "
                f"file size ({file.size}) src len ({len(src)})"
            )
        self._file = file
        self._src = src
        self._err = error_handler
        self._mode = Mode(mode)

        self._ch = " "
        self._offset = 0
        self._rd_offset = 0
        self._line_offset = 0
        self._next_val = False
        self.error_count = 0

        self._next()

    def __iter__(self) -> Iterator[ScanResult]:
        """Yield the remaining tokens, stopping before EOF."""
        while True:
            result = self.scan()
            if result.tok == Token.EOF:
                return
            yield result

    def _next(self) -> None:
        src = self._src
        if self._rd_offset < len(src):
            self._offset = self._rd_offset
            if self._ch == "\n":
                self._line_offset = self._offset
                self._file.add_line(self._offset)
            byte, width = src[self._rd_offset], 1
            if byte == 0:
                self._error(self._offset, "illegal character NUL")
                ch = "\x00"
            elif byte >= 0x80:
                decoded, width = _decode_rune(src, self._rd_offset)
                if decoded is None:
                    self._error(self._offset, "illegal UTF-8 encoding")
                    ch = "\ufffd"
                else:
                    ch = decoded
            else:
                ch = chr(byte)
            self._rd_offset += width
            self._ch = ch
        else:
            self._offset = len(src)
            if self._ch == "\n":
                self._line_offset = self._offset
                self._file.add_line(self._offset)
            self._ch = _EOF

    def _error(self, offset: int, msg: str) -> None:
        if self._err is not None:
            self._err(self._file.position(self._file.pos(offset)), msg)
        self.error_count += 1

    def _text(self, start: int, end: int) -> str:
        return self._src[start:end].decode("utf-8", "replace")

    def _scan_comment(self) -> str:
        start = self._offset - 1  # the initial ';' or '#' is consumed
        while self._ch != "\n" and self._ch != _EOF:
            self._next()
        return self._text(start, self._offset)

    def _scan_identifier(self) -> str:
        start = self._offset
        while _is_letter(self._ch) or _is_digit(self._ch) or self._ch == "-":
            self._next()
        return self._text(start, self._offset)

    def _scan_escape(self, in_value: bool) -> None:
        start = self._offset
        ch = self._ch
        self._next()  # always make progress
        if ch in ("\\", '"', "\n"):
            return
        if in_value and ch in ("n", "t", "b"):
            return
        self._error(start, "unknown escape sequence")

    def _scan_string(self) -> str:
        start = self._offset - 1  # opening '"' is consumed
        while self._ch != '"':
            ch = self._ch
            self._next()
            if ch == "\n" or ch == _EOF:
                self._error(start, "string not terminated")
                break
            if ch == "\\":
                self._scan_escape(False)
        self._next()
        return self._text(start, self._offset)

    def _scan_value_string(self) -> str:
        start = self._offset
        has_cr = False
        end = start
        in_quote = False
        while in_quote or (self._ch != _EOF and self._ch not in ("\n", ";", "#")):
            ch = self._ch
            self._next()
            if in_quote and ch == "\\":
                self._scan_escape(True)
            elif not in_quote and ch == "\\":
                if self._ch == "\r":
                    has_cr = True
                    self._next()
                if self._ch != "\n":
                    self._scan_escape(True)
                else:
                    self._next()
            elif ch == '"':
                in_quote = not in_quote
            elif ch == "\r":
                has_cr = True
            elif ch == _EOF or (in_quote and ch == "\n"):
                self._error(start, "string not terminated")
                break
            if in_quote or ch not in _WHITESPACE:
                end = self._offset
        literal = self._src[start:end]
        if has_cr:
            literal = literal.replace(b"\r", b"")
        return literal.decode("utf-8", "replace")

    def _skip_whitespace(self) -> None:
        while self._ch in _WHITESPACE:
            self._next()

    def scan(self) -> ScanResult:
        """Scan the next token and return its position, kind and literal.

        Literals are set for IDENT, STRING and COMMENT tokens and for ILLEGAL
        (the offending character); other tokens have an empty literal.
        """
        while True:
            self._skip_whitespace()
            pos = self._file.pos(self._offset)
            ch = self._ch
            lit = ""
            if self._next_val:
                lit = self._scan_value_string()
                tok = Token.STRING
                self._next_val = False
            elif _is_letter(ch):
                lit = self._scan_identifier()
                tok = Token.IDENT
            else:
                self._next()  # always make progress
                if ch == _EOF:
                    tok = Token.EOF
                elif ch == "\n":
                    tok = Token.EOL
                elif ch == '"':
                    tok = Token.STRING
                    lit = self._scan_string()
                elif ch == "[":
                    tok = Token.LBRACK
                elif ch == "]":
                    tok = Token.RBRACK
                elif ch in (";", "#"):
                    lit = self._scan_comment()
                    if not self._mode & Mode.SCAN_COMMENTS:
                        continue
                    tok = Token.COMMENT
                elif ch == "=":
                    tok = Token.ASSIGN
                    self._next_val = True
                else:
                    self._error(self._file.offset(pos), f"illegal character {_format_rune(ch)}")
                    tok = Token.ILLEGAL
                    lit = ch
            return ScanResult(pos, tok, lit)