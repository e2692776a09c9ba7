# unitalg.units.prefixes

from __future__ import annotations

from typing import Mapping, NamedTuple, Tuple


class Prefix(NamedTuple):
    name: str
    symbol: str
    factor: float


PREFIXES: Tuple[Prefix, ...] = (
    Prefix("quetta", "Q", 1e30),
    Prefix("ronna", "R", 1e27),
    Prefix("yotta", "Y", 1e24),
    Prefix("zetta", "Z", 1e21),
    Prefix("exa", "E", 1e18),
    Prefix("peta", "P", 1e15),
    Prefix("tera", "T", 1e12),
    Prefix("giga", "G", 1e9),
    Prefix("mega", "M", 1e6),
    Prefix("kilo", "k", 1e3),
    Prefix("hecto", "h", 1e2),
    Prefix("deka", "da", 1e1),
    Prefix("deci", "d", 1e-1),
    Prefix("centi", "c", 1e-2),
    Prefix("milli", "m", 1e-3),
    Prefix("micro", "µ", 1e-6),
    Prefix("nano", "n", 1e-9),
    Prefix("pico", "p", 1e-12),
    Prefix("femto", "f", 1e-15),
    Prefix("atto", "a", 1e-18),
    Prefix("zepto", "z", 1e-21),
    Prefix("yocto", "y", 1e-24),
    Prefix("ronto", "r", 1e-27),
    Prefix("quecto", "q", 1e-30),
)

# Extra spellings: ASCII and Greek-letter micro, British deca.
_SYMBOL_ALIASES = {"u": 1e-6, "μ": 1e-6}
_NAME_ALIASES = {"deca": 1e1}

SYMBOL_FACTORS: Mapping[str, float] = {**{p.symbol: p.factor for p in PREFIXES}, **_SYMBOL_ALIASES}
NAME_FACTORS: Mapping[str, float] = {**{p.name: p.factor for p in PREFIXES}, **_NAME_ALIASES}

# Longest first so "da" wins over "d".
SYMBOLS_DESC: Tuple[str, ...] = tuple(sorted(SYMBOL_FACTORS, key=len, reverse=True))
NAMES_DESC: Tuple[str, ...] = tuple(sorted(NAME_FACTORS, key=len, reverse=True))
