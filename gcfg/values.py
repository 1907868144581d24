"""Helpers for converting configuration value strings into Python values."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Any, Mapping

from .errors import GcfgError

__all__ = [
    "ValueParseError",
    "EnumParser",
    "BOOL_VALUES",
    "parse_bool",
    "IntMode",
    "parse_int",
    "scan_fully",
]


class ValueParseError(GcfgError, ValueError):
    """A value string cannot be converted to the requested type."""


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


@dataclass
class EnumParser:
    """Maps a predefined set of strings to predefined values."""

    type_name: str = ""
    case_match: bool = False
    _vals: dict[str, Any] = field(default_factory=dict, repr=False)

    def add_vals(self, vals: Mapping[str, Any]) -> None:
        """Add string-to-value mappings."""
        for key, value in vals.items():
            if not self.type_name:
                self.type_name = type(value).__name__
            if not self.case_match:
                key = key.lower()
            self._vals[key] = value

    def parse(self, s: str) -> Any:
        """Return the value for s, raising ValueParseError if it is unknown."""
        if not self.case_match:
            s = s.lower()
        try:
            return self._vals[s]
        except KeyError:
            raise ValueParseError(f"failed to parse {self.type_name} `{s}`") from None


BOOL_VALUES: dict[str, bool] = {
    "true": True, "yes": True, "on": True, "1": True,
    "false": False, "no": False, "off": False, "0": False,
}

_bool_parser = EnumParser()
_bool_parser.add_vals(BOOL_VALUES)


def parse_bool(s: str) -> bool:
    """Parse a boolean word from BOOL_VALUES, ignoring case."""
    return bool(_bool_parser.parse(s))


class IntMode(IntFlag):
    """The set of bases accepted when parsing an integer."""

    DEC = 1
    HEX = 2
    OCT = 4

    def __str__(self) -> str:
        names = [name for flag, name in ((IntMode.DEC, "Dec"), (IntMode.HEX, "Hex"), (IntMode.OCT, "Oct")) if self & flag]
        return "IntMode(" + "|".join(names) + ")"


def _prefix0(val: str) -> bool:
    return val.startswith("0") or val.startswith("-0")


def _prefix0x(val: str) -> bool:
    return val.startswith("0x") or val.startswith("-0x")


def parse_int(val: str, mode: IntMode, target_type: type = int) -> Any:
    """Parse val as an integer of target_type using the bases allowed by mode.

    Where mode leaves the base ambiguous, non-decimal values need a ``0`` or
    ``0x`` prefix.
    """
    val = val.strip()
    mode = IntMode(mode)
    D, H, O = IntMode.DEC, IntMode.HEX, IntMode.OCT
    if mode == D:
        verb = "d"
    elif mode == D | H:
        verb = "v" if _prefix0x(val) else "d"
    elif mode == D | O:
        verb = "v" if _prefix0(val) and not _prefix0x(val) else "d"
    elif mode == D | H | O:
        verb = "v"
    elif mode == H:
        verb = "v" if _prefix0x(val) else "x"
    elif mode == O:
        verb = "o"
    elif mode == H | O:
        if not _prefix0(val):
            raise ValueParseError("ambiguous integer value; must include '0' prefix")
        verb = "v"
    else:
        raise ValueParseError("unsupported mode")
    return scan_fully(val, verb, target_type)


class _ScanFailure(Exception):
    pass


_DIGITS = {2: "01", 8: "01234567", 10: "0123456789", 16: "0123456789abcdefABCDEF"}
_VERB_BASES = {"d": 10, "x": 16, "X": 16, "o": 8, "b": 2}


def _leading(text: str, allowed: str) -> str:
    match = re.match("[" + re.escape(allowed) + "]*", text)
    return match.group(0) if match else ""


def _scan_int(text: str, verb: str) -> tuple[int, str]:
    body = text.lstrip()
    sign = body[:1] if body[:1] in ("+", "-") else ""
    rest = body[len(sign):]
    have_digits = False
    if verb == "v":
        if rest.startswith("0"):
            marker = rest[1:2].lower()
            if marker in ("b", "o", "x"):
                base = {"b": 2, "o": 8, "x": 16}[marker]
                rest = rest[2:]
            else:
                base = 8
                rest = rest[1:]
                have_digits = True
        else:
            base = 10
        allowed = _DIGITS[base] + "_"
    elif verb in _VERB_BASES:
        base = _VERB_BASES[verb]
        allowed = _DIGITS[base]
    else:
        raise _ScanFailure(f"bad verb '%{verb}' for integer")
    run = _leading(rest, allowed)
    if not run and not have_digits:
        raise _ScanFailure("expected integer")
    try:
        value = int(run, base) if run else 0
    except ValueError:
        raise _ScanFailure(f"invalid integer syntax {_quote(run)}") from None
    return (-value if sign == "-" else value), rest[len(run):]


_FLOAT_RE = re.compile(
    r"[+-]?(?:infinity|inf|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.IGNORECASE
)


def _scan_float(text: str, verb: str) -> tuple[float, str]:
    if verb not in ("v", "e", "f", "g", "E", "F", "G"):
        raise _ScanFailure(f"bad verb '%{verb}' for float")
    body = text.lstrip()
    match = _FLOAT_RE.match(body)
    if not match:
        raise _ScanFailure("expected floating-point number")
    return float(match.group(0)), body[match.end():]


_BOOL_WORDS = (
    ("true", True), ("TRUE", True), ("True", True),
    ("false", False), ("FALSE", False), ("False", False),
    ("t", True), ("T", True), ("f", False), ("F", False),
    ("1", True), ("0", False),
)


def _scan_bool(text: str, verb: str) -> tuple[bool, str]:
    if verb not in ("v", "t"):
        raise _ScanFailure(f"bad verb '%{verb}' for boolean")
    body = text.lstrip()
    for word, value in _BOOL_WORDS:
        if body.startswith(word):
            return value, body[len(word):]
    raise _ScanFailure("syntax error scanning boolean")


def _scan_word(text: str, verb: str) -> tuple[str, str]:
    if verb not in ("v", "s"):
        raise _ScanFailure(f"bad verb '%{verb}' for string")
    body = text.lstrip()
    word = body.split(maxsplit=1)[0] if body.strip() else ""
    if not word:
        raise _ScanFailure("unexpected EOF")
    return word, body[len(word):]


def scan_fully(val: str, verb: str, target_type: Any = int) -> Any:
    """Scan val with a formatting verb into target_type, requiring all input be used.

    Verbs: ``v`` (value with base prefixes), ``d``, ``x``, ``o``, ``b`` for
    integers; ``v``/``e``/``f``/``g`` for floats; ``v``/``t`` for booleans;
    ``v``/``s`` for strings.
    """
    name = getattr(target_type, "__name__", repr(target_type))
    is_type = isinstance(target_type, type)
    try:
        if is_type and issubclass(target_type, bool):
            value, rest = _scan_bool(val, verb)
        elif is_type and issubclass(target_type, int):
            value, rest = _scan_int(val, verb)
        elif is_type and issubclass(target_type, float):
            value, rest = _scan_float(val, verb)
        elif is_type and issubclass(target_type, str):
            value, rest = _scan_word(val, verb)
        else:
            raise _ScanFailure("can't scan type")
    except _ScanFailure as exc:
        raise ValueParseError(f"failed to parse {_quote(val)} as {name}: {exc}") from None
    extra = rest.split()
    if extra:
        raise ValueParseError(
            f"failed to parse {_quote(val)} as {name}: extra characters {_quote(extra[0])}"
        )
    if type(value) is not target_type:
        try:
            value = target_type(value)
        except (TypeError, ValueError) as exc:
            raise ValueParseError(f"failed to parse {_quote(val)} as {name}: {exc}") from None
    return value