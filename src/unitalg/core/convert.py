"""Numeric value conversion between convertible units."""

from __future__ import annotations

import math
from typing import Callable

from unitalg.core.errors import DimensionError, Reason
from unitalg.core.unit import Unit, are_convertible

Converter = Callable[[float], float]


def _exp(base: float, v: float) -> float:
    try:
        return math.pow(base, v)
    except OverflowError:
        raise DimensionError(Reason.OUT_OF_DOMAIN, f"{base}**{v!r} overflows") from None


def _log(v: float, base: float) -> float:
    if v <= 0:
        raise DimensionError(Reason.OUT_OF_DOMAIN, f"logarithm of {v!r}")
    return math.log(v, base)


def _to_base(unit: Unit) -> Converter:
    if unit.is_log:
        ref_scale = unit.reference.scale
        base = unit.log_base
        return lambda v: _exp(base, v) * ref_scale
    scale, offset = unit.scale, unit.offset
    return lambda v: (v + offset) * scale


def _from_base(unit: Unit) -> Converter:
    if unit.is_log:
        ref_scale = unit.reference.scale
        base = unit.log_base
        return lambda v: _log(v / ref_scale, base)
    scale, offset = unit.scale, unit.offset
    return lambda v: v / scale - offset


def converter(src: Unit, dst: Unit) -> Converter:
    """Return ``f`` such that ``f(x)`` expresses ``x src`` in ``dst``.

    Offsets and timestamp origins are honoured, so ``converter(celsius, K)(0)``
    is ``273.15``. Logarithmic units convert through their reference.
    """
    if not are_convertible(src, dst):
        raise DimensionError(Reason.NOT_CONVERTIBLE, f"{src} -> {dst}")
    if src == dst:
        return lambda v: float(v)
    to_base, from_base = _to_base(src), _from_base(dst)
    return lambda v: from_base(to_base(float(v)))


def convert(value: float, src: Unit, dst: Unit) -> float:
    return converter(src, dst)(value)


__all__ = ["Converter", "converter", "convert"]
