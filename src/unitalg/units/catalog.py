"""
unitalg.units.catalog
=====================

The named-unit table loaded by ``unitalg.init()`` when no table is given.

Each entry is a plain mapping, so callers can build their own tables from any
source (JSON, TOML, a database) without touching the engine:

- ``{"base": True, "name": ..., "symbol": ...}`` creates a new base dimension.
- ``{"name": ..., "symbol": ..., "definition": "<expression>"}`` defines a unit
  in terms of units registered earlier in the table.

Optional keys: ``plural``, ``aliases`` (extra names), ``symbol_aliases`` (extra
symbols) and ``prefixable`` (default True).

Base dimensions are created in table order, which is also the order of
factors in formatted output (``kg·m/s²``).
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

Entry = Mapping[str, Any]


def _base(name: str, symbol: str, **extra: Any) -> Dict[str, Any]:
    return {"base": True, "name": name, "symbol": symbol, **extra}


def _unit(name: str, symbol: str | None, definition: str, **extra: Any) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"name": name, "definition": definition, **extra}
    if symbol is not None:
        entry["symbol"] = symbol
    return entry


# ---------------------------------------------------------------------------
# SI base units
# ---------------------------------------------------------------------------
BASE_UNITS: List[Dict[str, Any]] = [
    _base("kilogram", "kg", prefixable=False),
    _base("meter", "m", aliases=["metre"]),
    _base("second", "s"),
    _base("ampere", "A", aliases=["amp"]),
    _base("kelvin", "K"),
    _base("mole", "mol"),
    _base("candela", "cd"),
]

# ---------------------------------------------------------------------------
# Derived SI units
# ---------------------------------------------------------------------------
DERIVED_UNITS: List[Dict[str, Any]] = [
    _unit("gram", "g", "1e-3 kg"),
    _unit("radian", "rad", "1"),
    _unit("steradian", "sr", "rad^2"),
    _unit("hertz", "Hz", "1/s", plural="hertz"),
    _unit("newton", "N", "kg m s-2"),
    _unit("pascal", "Pa", "N/m^2"),
    _unit("joule", "J", "N m"),
    _unit("watt", "W", "J/s"),
    _unit("coulomb", "C", "A s"),
    _unit("volt", "V", "W/A"),
    _unit("farad", "F", "C/V"),
    _unit("ohm", "Ω", "V/A"),
    _unit("siemens", "S", "A/V", plural="siemens"),
    _unit("weber", "Wb", "V s"),
    _unit("tesla", "T", "Wb/m^2"),
    _unit("henry", "H", "Wb/A"),
    _unit("lumen", "lm", "cd sr"),
    _unit("lux", "lx", "lm/m^2", plural="lux"),
    _unit("becquerel", "Bq", "1/s"),
    _unit("gray", "Gy", "J/kg"),
    _unit("sievert", "Sv", "J/kg"),
    _unit("katal", "kat", "mol/s"),
]

# ---------------------------------------------------------------------------
# Temperature scales (origin-shifted)
# ---------------------------------------------------------------------------
TEMPERATURE_UNITS: List[Dict[str, Any]] = [
    _unit("celsius", "°C", "K @ 273.15", plural="celsius", aliases=["degree_Celsius"],
          symbol_aliases=["degC"], prefixable=False),
    _unit("rankine", "°R", "K/1.8", aliases=["degree_Rankine"], symbol_aliases=["degR"]),
    _unit("fahrenheit", "°F", "°R @ 459.67", plural="fahrenheit", aliases=["degree_Fahrenheit"],
          symbol_aliases=["degF"], prefixable=False),
]

# ---------------------------------------------------------------------------
# Time
# ---------------------------------------------------------------------------
TIME_UNITS: List[Dict[str, Any]] = [
    _unit("minute", "min", "60 s", prefixable=False),
    _unit("hour", "h", "60 min", symbol_aliases=["hr"], prefixable=False),
    _unit("day", "d", "24 h", prefixable=False),
    _unit("week", "wk", "7 d", prefixable=False),
    _unit("fortnight", None, "14 d", prefixable=False),
    _unit("year", "yr", "365.2425 d", aliases=["annum"]),
    _unit("month", "mo", "yr/12", prefixable=False),
    _unit("decade", None, "10 yr", prefixable=False),
    _unit("century", None, "100 yr", prefixable=False),
]

# ---------------------------------------------------------------------------
# Length, area, volume, mass
# ---------------------------------------------------------------------------
CUSTOMARY_UNITS: List[Dict[str, Any]] = [
    _unit("inch", "in", "2.54 cm", prefixable=False),
    _unit("foot", "ft", "12 in", plural="feet", prefixable=False),
    _unit("yard", "yd", "3 ft", prefixable=False),
    _unit("mile", "mi", "5280 ft", prefixable=False),
    _unit("perch", None, "5.0292 m", prefixable=False),
    _unit("nautical_mile", "nmi", "1852 m", prefixable=False),
    _unit("hectare", "ha", "1e4 m^2", prefixable=False),
    _unit("liter", "L", "1e-3 m^3", aliases=["litre"], symbol_aliases=["l"]),
    _unit("pound", "lb", "0.45359237 kg", aliases=["lbm"], prefixable=False),
    _unit("ounce", "oz", "lb/16", prefixable=False),
    _unit("tonne", "t", "1000 kg", aliases=["metric_ton"]),
]

# ---------------------------------------------------------------------------
# Pressure, energy and dimensionless ratios
# ---------------------------------------------------------------------------
OTHER_UNITS: List[Dict[str, Any]] = [
    _unit("bar", "bar", "1e5 Pa"),
    _unit("atmosphere", "atm", "101325 Pa", prefixable=False),
    _unit("calorie", "cal", "4.1868 J"),
    _unit("electronvolt", "eV", "1.602176634e-19 J"),
    _unit("percent", "%", "0.01", prefixable=False),
    _unit("degree", "°", "0.0174532925199433 rad", aliases=["arc_degree"], symbol_aliases=["deg"],
          prefixable=False),
]

DEFAULT_TABLE: Sequence[Entry] = tuple(
    BASE_UNITS + DERIVED_UNITS + TEMPERATURE_UNITS + TIME_UNITS + CUSTOMARY_UNITS + OTHER_UNITS
)

__all__ = ["Entry", "DEFAULT_TABLE"]
