"""
unitalg.io.formatter
====================

Render a ``Unit`` as text.

Rendering goes through an ordered chain of strategies: the requested encoding,
then ASCII, then the literal ``"1"``. A strategy returns ``None`` when it
cannot represent the unit (fractional exponents have no superscript form,
non-ASCII labels have no ASCII form), and the next one is tried.

Output is meant to be parsed back: ``parse(format_unit(u)) == u``.

    >>> format_unit(newton)
    'kg·m/s²'
    >>> format_unit(newton, Encoding.ASCII)
    'kg.m/s^2'
"""

from __future__ import annotations

from fractions import Fraction
from typing import Callable, List, Optional, Sequence, Tuple

from unitalg.core.settings import DEFAULT_SIGNIFICANT_DIGITS, Encoding
from unitalg.core.unit import Unit
from unitalg.core.utils import format_number, superscript

Factor = Tuple[str, Fraction]
Strategy = Callable[[Unit, bool, int], Optional[str]]

FALLBACK = "1"


class _Style:
    """How one encoding joins factors and writes exponents."""

    def __init__(self, joiner: str, exponent: Callable[[Fraction], Optional[str]], accepts: Callable[[str], bool]):
        self.joiner = joiner
        self.exponent = exponent
        self.accepts = accepts

    def factors(self, factors: Sequence[Factor]) -> Optional[str]:
        parts: List[str] = []
        for label, exp in factors:
            if not self.accepts(label):
                return None
            shown = self.exponent(exp)
            if shown is None:
                return None
            parts.append(label + shown)
        return self.joiner.join(parts)


def _utf8_exponent(exp: Fraction) -> Optional[str]:
    if exp.denominator != 1:
        return None
    return superscript(exp.numerator)


def _ascii_exponent(exp: Fraction) -> str:
    if exp == 1:
        return ""
    if exp.denominator == 1:
        return f"^{exp.numerator}"
    return f"^({exp.numerator}/{exp.denominator})"


_UTF8 = _Style("·", _utf8_exponent, lambda label: True)
_ASCII = _Style(".", _ascii_exponent, str.isascii)


def _linear(unit: Unit, style: _Style, names: bool, digits: int, *, with_scale: bool = False) -> Optional[str]:
    numerator: List[Factor] = []
    denominator: List[Factor] = []
    for base, exp in unit.dim:
        label = base.name if names else base.symbol
        if exp > 0:
            numerator.append((label, exp))
        else:
            denominator.append((label, -exp))

    num = style.factors(numerator)
    den = style.factors(denominator)
    if num is None or den is None:
        return None

    scale = format_number(unit.scale, digits) if (unit.scale != 1.0 or with_scale) else ""
    if not num:
        if den:
            return f"{scale or '1'}/{den}"
        return scale or "1"
    body = f"{num}/{den}" if den else num
    return f"{scale} {body}" if scale else body


def _render(unit: Unit, style: _Style, names: bool, digits: int) -> Optional[str]:
    if unit.is_log:
        reference = _linear(unit.reference, style, names, digits, with_scale=True)
        if reference is None:
            return None
        return f"{unit.log_symbol}(re {reference})"

    linear = _linear(unit.base_unit(), style, names, digits)
    if linear is None:
        return None
    if unit.is_timestamp:
        try:
            instant = unit.origin_instant()
        except OverflowError:
            return None
        stamp = (
            f"{instant.year:04d}-{instant.month:02d}-{instant.day:02d} "
            f"{instant.hour:02d}:{instant.minute:02d}:{instant.second:02d}"
        )
        if instant.microsecond:
            stamp += f".{instant.microsecond:06d}"
        return f"{linear} since {stamp} UTC"
    if unit.is_shifted:
        return f"{linear} @ {format_number(unit.offset, digits)}"
    return linear


def _utf8(unit: Unit, names: bool, digits: int) -> Optional[str]:
    return _render(unit, _UTF8, names, digits)


def _ascii(unit: Unit, names: bool, digits: int) -> Optional[str]:
    return _render(unit, _ASCII, names, digits)


def _literal_one(unit: Unit, names: bool, digits: int) -> Optional[str]:
    return FALLBACK


_BY_ENCODING = {Encoding.UTF8: _utf8, Encoding.ASCII: _ascii}


def strategies(encoding: Encoding) -> List[Strategy]:
    """The chain tried for ``encoding``: itself, then ASCII, then ``"1"``."""
    chain = [_BY_ENCODING[encoding]]
    if encoding is not Encoding.ASCII:
        chain.append(_ascii)
    chain.append(_literal_one)
    return chain


def format_unit(
    unit: Unit,
    encoding: Encoding = Encoding.UTF8,
    *,
    names: bool = False,
    digits: int = DEFAULT_SIGNIFICANT_DIGITS,
) -> str:
    """Render ``unit``; never fails.

    ``names=True`` spells base units by name (``meter^2``) instead of symbol.
    ``digits`` bounds the significant digits of the scale and the offset.
    """
    for strategy in strategies(encoding):
        text = strategy(unit, names, digits)
        if text is not None:
            return text
    return FALLBACK


__all__ = ["format_unit", "strategies", "FALLBACK"]
