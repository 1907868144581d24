"""Error types shared by the reading and setting code."""

from __future__ import annotations

import json
from typing import Optional

__all__ = [
    "GcfgError",
    "ConfigSyntaxWarning",
    "MissingEscapeSequenceError",
    "MissingEndQuoteError",
    "fatal_only",
]


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


class GcfgError(Exception):
    """Base class of every error raised by this package."""


class ConfigSyntaxWarning(GcfgError):
    """Data that has no place in the configuration structure.

    Raised for unknown sections, subsections and variables; callers that
    only care about fatal errors can filter it out with :func:`fatal_only`.
    """

    def __init__(self, section: str, subsection: str = "", variable: str = "") -> None:
        self.section = section
        self.subsection = subsection
        self.variable = variable
        message = f"can't store data in section {_quote(section)}"
        if subsection:
            message += f", subsection {_quote(subsection)}"
        if variable:
            message += f", variable {_quote(variable)}"
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"syntax warning: {self.message}"


class MissingEscapeSequenceError(GcfgError, ValueError):
    """A backslash is not followed by a valid escape character."""

    def __init__(self, message: str = "missing escape sequence") -> None:
        super().__init__(message)


class MissingEndQuoteError(GcfgError, ValueError):
    """A quoted string is not closed."""

    def __init__(self, message: str = "missing end quote") -> None:
        super().__init__(message)


def _is_warning(err: BaseException) -> bool:
    if isinstance(err, ConfigSyntaxWarning):
        return True
    group = getattr(err, "exceptions", None)
    if isinstance(group, (tuple, list)) and group:
        return all(isinstance(e, BaseException) and _is_warning(e) for e in group)
    return False


def fatal_only(err: Optional[BaseException]) -> Optional[BaseException]:
    """Return err unless it is None or consists only of syntax warnings."""
    if err is None or _is_warning(err):
        return None
    return err