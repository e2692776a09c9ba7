# unitalg.core.dimensions

from __future__ import annotations

from fractions import Fraction
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from unitalg.core.utils import ExponentLike, as_exponent


class BaseDimension:
    """
    Opaque identifier for one independent dimension (length, mass, currency, ...).

    Identity based: two base dimensions are equal only if they are the same
    object, even when their labels match. ``index`` is the registration order
    inside the owning unit system and drives canonical factor order.
    """

    __slots__ = ("name", "symbol", "index")

    def __init__(self, name: str, symbol: str, index: int) -> None:
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "symbol", symbol)
        object.__setattr__(self, "index", index)

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError("BaseDimension is immutable")

    def __repr__(self) -> str:
        return f"BaseDimension({self.name!r}, {self.symbol!r})"


DimPair = Tuple[BaseDimension, Fraction]
DimLike = Union["Dimension", Mapping[BaseDimension, ExponentLike], Iterable[Tuple[BaseDimension, ExponentLike]]]


class Dimension(tuple):
    """
    Immutable product of base dimensions raised to rational exponents.

    Stored as a tuple of ``(BaseDimension, Fraction)`` pairs, zero exponents
    dropped, ordered by base registration order. Being a tuple keeps it
    hashable and comparable.
    """

    __slots__ = ()

    def __new__(cls, data: DimLike = ()) -> "Dimension":
        if isinstance(data, Dimension):
            return tuple.__new__(cls, data)

        items = data.items() if isinstance(data, Mapping) else data
        merged: Dict[BaseDimension, Fraction] = {}
        for base, exp in items:
            if not isinstance(base, BaseDimension):
                raise TypeError(f"Dimension keys must be BaseDimension, got {type(base).__name__}")
            merged[base] = merged.get(base, Fraction(0)) + as_exponent(exp)

        pairs = sorted(
            ((b, e) for b, e in merged.items() if e != 0),
            key=lambda pair: (pair[0].index, pair[0].name),
        )
        return tuple.__new__(cls, pairs)

    # --- Algebra (operator overloads) ---
    def __mul__(self, other: DimLike) -> "Dimension":  # type: ignore[override]
        return Dimension(tuple(self) + tuple(Dimension(other)))

    def __truediv__(self, other: DimLike) -> "Dimension":
        o = Dimension(other)
        return Dimension(tuple(self) + tuple((b, -e) for b, e in o))

    def __pow__(self, n: ExponentLike, modulo: Any | None = None) -> "Dimension":
        if modulo is not None:
            raise TypeError("Modulo exponentiation is not supported for Dimension.")
        frac = as_exponent(n)
        return Dimension((b, e * frac) for b, e in self)

    # Raise instead of returning NotImplemented: tuple's sequence slots would apply.
    def __rmul__(self, other: Any) -> "Dimension":
        raise TypeError(f"unsupported operand type(s) for *: '{type(other).__name__}' and 'Dimension'")

    def __add__(self, other: Any) -> "Dimension":
        raise TypeError("Dimensions cannot be added")

    def __radd__(self, other: Any) -> "Dimension":
        raise TypeError("Dimensions cannot be added")

    # --- Helpers ---
    @property
    def is_dimensionless(self) -> bool:
        return len(self) == 0

    def exponent(self, base: BaseDimension) -> Fraction:
        for b, e in self:
            if b is base:
                return e
        return Fraction(0)

    def as_dict(self) -> Dict[BaseDimension, Fraction]:
        return dict(self)

    def single_base(self) -> Optional[BaseDimension]:
        """The base dimension if this is exactly ``base^1``, else None."""
        if len(self) == 1 and self[0][1] == 1:
            return self[0][0]
        return None

    def max_abs_exponent(self) -> Fraction:
        return max((abs(e) for _, e in self), default=Fraction(0))

    def __repr__(self) -> str:
        parts = ""
        for base, exp in self:
            shown = exp.numerator if exp.denominator == 1 else f"({exp.numerator}/{exp.denominator})"
            parts += f"[{base.symbol}^{shown}]"
        return parts or "[1]"


# --- Function shims used by the algebra ------------------------------------

def dim_mul(a: DimLike, b: DimLike) -> Dimension:
    return Dimension(a) * b


def dim_div(a: DimLike, b: DimLike) -> Dimension:
    return Dimension(a) / b


def dim_pow(a: DimLike, n: ExponentLike) -> Dimension:
    return Dimension(a) ** n


DIM_0: Dimension = Dimension()

__all__ = ["BaseDimension", "Dimension", "DIM_0", "dim_mul", "dim_div", "dim_pow"]
