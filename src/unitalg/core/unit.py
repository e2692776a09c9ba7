"""
unitalg.core.unit
=================

The ``Unit`` value type and the unit-algebra engine.

A unit is a scale factor times a product of base dimensions raised to rational
powers, optionally carrying an origin offset (``celsius`` is ``K @ 273.15``),
an absolute origin instant (``days since 2000-01-01``), or a logarithmic tag
with a reference unit (``lg(re 1 mW)``). Units are immutable: every operation
returns a new value.

The module-level functions take an explicit ``max_exponent`` so a unit system
can impose its own ceiling; the operator overloads use the default one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from fractions import Fraction
from math import isclose, isfinite
from typing import Optional, Union

from unitalg.core.dimensions import DIM_0, Dimension, dim_div, dim_mul, dim_pow
from unitalg.core.errors import DimensionError, Reason
from unitalg.core.settings import DEFAULT_MAX_EXPONENT
from unitalg.core.utils import ExponentLike, as_exponent

Number = Union[int, float]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

LOG_BASES = {2.0: "lb", math.e: "ln", 10.0: "lg"}

_REL_TOL = 1e-12
_OFFSET_ABS_TOL = 1e-9


@dataclass(frozen=True, slots=True)
class Unit:
    """Representation of a (possibly shifted or logarithmic) unit."""

    dim: Dimension = DIM_0
    scale: float = 1.0
    offset: float = 0.0
    timestamp: bool = False
    log_base: Optional[float] = None
    reference: Optional["Unit"] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "dim", Dimension(self.dim))
        object.__setattr__(self, "scale", float(self.scale))
        object.__setattr__(self, "offset", float(self.offset))
        if not isfinite(self.scale) or not isfinite(self.offset):
            raise DimensionError(Reason.NON_FINITE, f"scale={self.scale!r}, offset={self.offset!r}")
        if self.scale == 0.0:
            raise DimensionError(Reason.ZERO_SCALE)
        if self.log_base is not None:
            if self.reference is None or self.dim or self.scale != 1.0 or self.offset:
                raise DimensionError(Reason.LOG_OPERAND, "a logarithmic unit carries only its reference")
        elif self.reference is not None:
            raise DimensionError(Reason.BAD_LOG_BASE, "reference given without a logarithm base")

    @classmethod
    def one(cls) -> "Unit":
        """The dimensionless unit ``1``."""
        return ONE

    # --- Queries ---
    @property
    def is_dimensionless(self) -> bool:
        return self.log_base is None and self.dim.is_dimensionless

    @property
    def is_log(self) -> bool:
        return self.log_base is not None

    @property
    def is_shifted(self) -> bool:
        return self.offset != 0.0 or self.timestamp

    @property
    def is_timestamp(self) -> bool:
        return self.timestamp

    def base_unit(self) -> "Unit":
        """This unit with any origin removed."""
        if not self.is_shifted:
            return self
        return replace(self, offset=0.0, timestamp=False)

    def origin_instant(self) -> Optional[datetime]:
        """The absolute origin of a timestamp unit (UTC), else None."""
        if not self.timestamp:
            return None
        return EPOCH + timedelta(seconds=self.offset * self.scale)

    @property
    def log_symbol(self) -> Optional[str]:
        if self.log_base is None:
            return None
        return LOG_BASES[self.log_base]

    # --- Equality ---
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Unit):
            return NotImplemented
        return (
            self.dim == other.dim
            and self.timestamp == other.timestamp
            and self.log_base == other.log_base
            and self.reference == other.reference
            and isclose(self.scale, other.scale, rel_tol=_REL_TOL, abs_tol=0.0)
            and isclose(self.offset, other.offset, rel_tol=_REL_TOL, abs_tol=_OFFSET_ABS_TOL)
        )

    def __hash__(self) -> int:
        return hash((self.dim, self.timestamp, self.log_base))

    # --- Operators (default exponent ceiling) ---
    def __mul__(self, other: Union["Unit", Number]) -> "Unit":
        if isinstance(other, (int, float)):
            return multiply(self, Unit(scale=other))
        if not isinstance(other, Unit):
            return NotImplemented
        return multiply(self, other)

    def __rmul__(self, other: Number) -> "Unit":
        if not isinstance(other, (int, float)):
            return NotImplemented
        return multiply(Unit(scale=other), self)

    def __truediv__(self, other: Union["Unit", Number]) -> "Unit":
        if isinstance(other, (int, float)):
            return divide(self, Unit(scale=other))
        if not isinstance(other, Unit):
            return NotImplemented
        return divide(self, other)

    def __rtruediv__(self, other: Number) -> "Unit":
        if not isinstance(other, (int, float)):
            return NotImplemented
        return divide(Unit(scale=other), self)

    def __pow__(self, n: ExponentLike) -> "Unit":
        return power(self, n)

    # --- Display ---
    def __str__(self) -> str:
        from unitalg.io.formatter import format_unit

        return format_unit(self)

    def __repr__(self) -> str:
        from unitalg.core.settings import Encoding
        from unitalg.io.formatter import format_unit

        return f"Unit({format_unit(self, Encoding.ASCII)!r})"


ONE = Unit()


# ---------------------------------------------------------------------------
# Engine operations
# ---------------------------------------------------------------------------

def _check_plain(u: Unit, what: str) -> None:
    if u.is_log:
        raise DimensionError(Reason.LOG_OPERAND, what)
    if u.is_shifted:
        raise DimensionError(Reason.OFFSET_OPERAND, what)


def _check_ceiling(dim: Dimension, max_exponent: int) -> Dimension:
    if dim.max_abs_exponent() > max_exponent:
        raise DimensionError(Reason.EXPONENT_TOO_LARGE, f"{dim!r} exceeds {max_exponent}")
    return dim


def multiply(a: Unit, b: Unit, *, max_exponent: int = DEFAULT_MAX_EXPONENT) -> Unit:
    """``a·b``: exponents add, scales multiply."""
    _check_plain(a, "cannot multiply")
    _check_plain(b, "cannot multiply")
    dim = _check_ceiling(dim_mul(a.dim, b.dim), max_exponent)
    return Unit(dim, a.scale * b.scale)


def invert(a: Unit) -> Unit:
    """``1/a``: exponents negate, scale reciprocates."""
    _check_plain(a, "cannot invert")
    return Unit(dim_div(DIM_0, a.dim), 1.0 / a.scale)


def divide(a: Unit, b: Unit, *, max_exponent: int = DEFAULT_MAX_EXPONENT) -> Unit:
    return multiply(a, invert(b), max_exponent=max_exponent)


def power(a: Unit, n: ExponentLike, *, max_exponent: int = DEFAULT_MAX_EXPONENT) -> Unit:
    """``a^n`` for an integer or rational ``n``; ``a^0`` is ``1`` for any ``a``."""
    frac = as_exponent(n)
    if abs(frac) > max_exponent:
        raise DimensionError(Reason.EXPONENT_TOO_LARGE, f"{frac} exceeds {max_exponent}")
    if frac == 0:
        return ONE
    _check_plain(a, "cannot raise to a power")
    if frac == 1:
        return a
    if a.scale < 0 and frac.denominator != 1:
        raise DimensionError(Reason.BAD_EXPONENT, f"cannot take root {frac} of negative scale")
    dim = _check_ceiling(dim_pow(a.dim, frac), max_exponent)
    try:
        scale = a.scale ** frac.numerator if frac.denominator == 1 else a.scale ** float(frac)
    except OverflowError:
        raise DimensionError(Reason.NON_FINITE, f"scale {a.scale!r} ** {frac}") from None
    return Unit(dim, scale)


def root(a: Unit, n: int, *, max_exponent: int = DEFAULT_MAX_EXPONENT) -> Unit:
    if not isinstance(n, int) or isinstance(n, bool) or n < 1:
        raise DimensionError(Reason.BAD_EXPONENT, f"root must be a positive integer, got {n!r}")
    return power(a, Fraction(1, n), max_exponent=max_exponent)


def shift(a: Unit, origin: Number) -> Unit:
    """Copy of ``a`` whose zero sits at ``origin`` (in units of ``a``)."""
    if a.is_log:
        raise DimensionError(Reason.LOG_OPERAND, "cannot shift")
    if a.is_shifted:
        raise DimensionError(Reason.DOUBLE_OFFSET)
    return Unit(a.dim, a.scale, offset=origin)


def shift_to_instant(a: Unit, instant: datetime, time_dim: Dimension) -> Unit:
    """Timestamp unit counting ``a``-sized steps since ``instant``.

    ``time_dim`` is the unit system's dimension of time; ``a`` must have
    exactly that dimension.
    """
    if a.is_log:
        raise DimensionError(Reason.LOG_OPERAND, "cannot shift")
    if a.is_shifted:
        raise DimensionError(Reason.DOUBLE_OFFSET)
    if a.dim != time_dim:
        raise DimensionError(Reason.NOT_TIME, repr(a.dim))
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    seconds = (instant - EPOCH).total_seconds()
    return Unit(a.dim, a.scale, offset=seconds / a.scale, timestamp=True)


def log_unit(base: Number, reference: Unit) -> Unit:
    """Logarithmic unit of ``base`` (2, e or 10) relative to ``reference``."""
    for known in LOG_BASES:
        if isclose(float(base), known, rel_tol=_REL_TOL):
            break
    else:
        raise DimensionError(Reason.BAD_LOG_BASE, repr(base))
    if reference.is_log:
        raise DimensionError(Reason.LOG_OPERAND, "logarithmic units cannot be nested")
    if reference.is_shifted:
        raise DimensionError(Reason.OFFSET_OPERAND, "reference of a logarithmic unit")
    return Unit(log_base=known, reference=reference)


def are_convertible(a: Unit, b: Unit) -> bool:
    """True if values in ``a`` can be expressed in ``b``."""
    da = a.reference.dim if a.is_log else a.dim
    db = b.reference.dim if b.is_log else b.dim
    return da == db


__all__ = [
    "Unit",
    "ONE",
    "EPOCH",
    "LOG_BASES",
    "multiply",
    "invert",
    "divide",
    "power",
    "root",
    "shift",
    "shift_to_instant",
    "log_unit",
    "are_convertible",
]
