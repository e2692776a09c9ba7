"""
unitalg.core.errors
===================

Exceptions raised by the lexer, parser, registry and unit algebra.

Every failure is a ``UnitError`` (itself a ``ValueError``), so callers that
only care about "did it work" can catch one type. Each subclass carries a
``Status`` code, and syntax errors additionally carry a ``Reason`` and the
offending position in the input.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Status(Enum):
    """Status codes, as reported by ``UnitSystem.status()``."""

    SUCCESS = "success"
    SYNTAX = "syntax"
    UNKNOWN = "unknown"
    MEANINGLESS = "meaningless"
    EXISTS = "exists"
    BAD_ARG = "bad_arg"
    OPEN = "open"


class Reason(Enum):
    """Why an expression or operation was rejected."""

    BAD_CHARACTER = "unexpected character"
    NON_FINITE = "non-finite numbers are not allowed"
    SURROUNDING_WHITESPACE = "leading or trailing whitespace"
    UNEXPECTED_TOKEN = "unexpected token"
    MISSING_OPERAND = "missing operand"
    MISSING_EXPONENT = "missing exponent"
    UNCLOSED_PAREN = "unclosed parenthesis"
    DOUBLE_SHIFT = "more than one shift operator"
    MISSING_ORIGIN = "missing origin after shift operator"
    BAD_TIMESTAMP = "invalid date or time"
    MISSING_RE = "missing 're' in logarithmic reference"
    MISSING_REFERENCE = "missing reference value in logarithmic reference"
    UNKNOWN_UNIT = "unknown unit"
    EXPONENT_TOO_LARGE = "exponent too large"
    ZERO_SCALE = "zero scale factor"
    OFFSET_OPERAND = "operand has an origin offset"
    LOG_OPERAND = "operand is a logarithmic unit"
    DOUBLE_OFFSET = "unit already has an origin offset"
    NOT_TIME = "timestamp origin requires a unit of time"
    BAD_LOG_BASE = "unsupported logarithm base"
    NOT_CONVERTIBLE = "units are not convertible"
    OUT_OF_DOMAIN = "value outside the domain of the conversion"
    BAD_EXPONENT = "invalid exponent"


def _pointer(text: str, position: Optional[int]) -> str:
    if position is None or not (0 <= position <= len(text)):
        return ""
    return f"\n{text}\n{' ' * position}^"


class UnitError(ValueError):
    """Base class for every error raised by unitalg."""

    status: Status = Status.BAD_ARG

    def __init__(self, message: str, *, reason: Optional[Reason] = None) -> None:
        super().__init__(message)
        self.reason = reason


class UnitSyntaxError(UnitError):
    """The expression is not well formed."""

    status = Status.SYNTAX

    def __init__(self, reason: Reason, text: str, position: Optional[int] = None) -> None:
        super().__init__(f"{reason.value}{_pointer(text, position)}", reason=reason)
        self.text = text
        self.position = position


class UnknownUnitError(UnitError):
    """An identifier did not resolve to any registered unit."""

    status = Status.UNKNOWN

    def __init__(self, name: str, text: str = "", position: Optional[int] = None) -> None:
        super().__init__(
            f"Don't recognize unit '{name}'{_pointer(text, position)}",
            reason=Reason.UNKNOWN_UNIT,
        )
        self.name = name
        self.text = text
        self.position = position


class DimensionError(UnitError):
    """The operation is meaningless for the units involved."""

    status = Status.MEANINGLESS

    def __init__(self, reason: Reason, detail: str = "") -> None:
        message = f"{reason.value}: {detail}" if detail else reason.value
        super().__init__(message, reason=reason)
        self.position: Optional[int] = None


class AlreadyRegisteredError(UnitError):
    """A name or symbol is already bound to a different unit."""

    status = Status.EXISTS

    def __init__(self, name: str) -> None:
        super().__init__(f"Cannot register '{name}': it is already bound to a different unit.")
        self.name = name


class InvalidNameError(UnitError):
    """A name or symbol cannot be registered."""

    status = Status.BAD_ARG

    def __init__(self, name: str, why: str = "not a valid identifier") -> None:
        super().__init__(f"Cannot register {name!r}: {why}.")
        self.name = name


class DatabaseError(UnitError):
    """The named-unit table handed to ``init`` is unusable."""

    status = Status.OPEN


__all__ = [
    "Status",
    "Reason",
    "UnitError",
    "UnitSyntaxError",
    "UnknownUnitError",
    "DimensionError",
    "AlreadyRegisteredError",
    "InvalidNameError",
    "DatabaseError",
]
