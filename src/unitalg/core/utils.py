"""
unitalg.core.utils
==================

Small helpers shared by the algebra, the lexer and the formatter: exact
exponent coercion, Unicode superscripts, and compact number rendering
(e.g. ``25``, ``0.001``, ``1e-09``).
"""

from __future__ import annotations

import math
from fractions import Fraction
from numbers import Rational
from typing import Union

from unitalg.core.errors import DimensionError, Reason

ExponentLike = Union[int, Fraction, float]

_SUPERSCRIPTS = str.maketrans("0123456789-+", "⁰¹²³⁴⁵⁶⁷⁸⁹⁻⁺")
_FROM_SUPERSCRIPTS = str.maketrans("⁰¹²³⁴⁵⁶⁷⁸⁹⁻⁺", "0123456789-+")

SUPERSCRIPT_DIGITS = "⁰¹²³⁴⁵⁶⁷⁸⁹"
SUPERSCRIPT_SIGNS = "⁻⁺"

# Floats are accepted as exponents only when they are (close to) a simple ratio.
_MAX_DENOMINATOR = 1000


def superscript(n: int) -> str:
    """``2`` -> ``²``; an exponent of one renders as nothing."""
    return "" if n == 1 else str(n).translate(_SUPERSCRIPTS)


def from_superscript(text: str) -> int:
    """Map a run of superscript characters (``⁻²``) back to an int."""
    return int(text.translate(_FROM_SUPERSCRIPTS))


def as_exponent(value: ExponentLike) -> Fraction:
    """Coerce ``value`` to an exact rational exponent.

    Raises ``DimensionError`` for booleans, non-finite floats and floats that
    are not close to a ratio with a small denominator.
    """
    if isinstance(value, bool):
        raise DimensionError(Reason.BAD_EXPONENT, repr(value))
    if isinstance(value, Fraction):
        return value
    if isinstance(value, (int, Rational)):
        return Fraction(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise DimensionError(Reason.BAD_EXPONENT, repr(value))
        frac = Fraction(value).limit_denominator(_MAX_DENOMINATOR)
        if not math.isclose(float(frac), value, rel_tol=1e-12, abs_tol=1e-15):
            raise DimensionError(Reason.BAD_EXPONENT, f"{value!r} is not a simple ratio")
        return frac
    raise DimensionError(Reason.BAD_EXPONENT, f"unsupported exponent type {type(value).__name__}")


def format_number(value: float, digits: int = 15) -> str:
    """Shortest ``%g``-style rendering with at most ``digits`` significant digits."""
    if value == int(value) and abs(value) < 10 ** digits:
        return str(int(value))
    return f"{value:.{digits}g}"


__all__ = [
    "SUPERSCRIPT_DIGITS",
    "SUPERSCRIPT_SIGNS",
    "superscript",
    "as_exponent",
    "format_number",
    "from_superscript",
]
