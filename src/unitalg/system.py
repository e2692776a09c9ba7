"""
unitalg.system
==============

``UnitSystem`` ties a registry, its base dimensions and the engine settings
together. There is no process-wide instance: ``init()`` returns a fresh system
and callers pass it around.

Two calling styles are supported:

- raising: ``system.parse("m/s")`` returns a ``Unit`` or raises a ``UnitError``;
- result values: ``system.try_parse("m/s")`` returns an ``Outcome`` and records
  its status, readable afterwards with ``system.status()``.

The status slot is a ``ContextVar``, so threads and asyncio tasks sharing one
system do not see each other's status.
"""

from __future__ import annotations

import logging
import threading
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from unitalg.core.convert import Converter, converter
from unitalg.core.dimensions import BaseDimension, Dimension
from unitalg.core.errors import DatabaseError, Status, UnitError
from unitalg.core.settings import DEFAULT_SETTINGS, Encoding, Settings
from unitalg.core.unit import Unit
from unitalg.io.formatter import format_unit
from unitalg.units.catalog import DEFAULT_TABLE
from unitalg.units.parser import parse_unit_expr
from unitalg.units.registry import UnitsRegistry

logger = logging.getLogger(__name__)

UnitLike = Union[Unit, str]

TIME_UNIT_NAME = "second"


@dataclass(frozen=True)
class Outcome:
    """Result of a ``try_*`` call: a unit on success, the error otherwise."""

    unit: Optional[Unit] = None
    error: Optional[UnitError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status(self) -> Status:
        return Status.SUCCESS if self.error is None else self.error.status


class UnitSystem:
    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or DEFAULT_SETTINGS
        self.registry = UnitsRegistry()
        self._bases: List[BaseDimension] = []
        self._lock = threading.RLock()
        self._status: ContextVar[Status] = ContextVar(f"unitalg_status_{id(self):x}", default=Status.SUCCESS)

    def __repr__(self) -> str:
        return f"UnitSystem(bases={len(self._bases)}, entries={len(self.registry)})"

    # --- base dimensions ---
    def new_base_unit(self, name: str, symbol: str, *, plural: Optional[str] = None, prefixable: bool = True) -> Unit:
        """Create a new base dimension and register its unit under ``name`` and ``symbol``."""
        with self._lock:
            base = BaseDimension(name, symbol, len(self._bases))
            unit = Unit(Dimension({base: 1}))
            self.registry.ensure_available(name, unit)
            self.registry.ensure_available(symbol, unit, symbol=True)
            self.registry.register(name, unit, plural=plural, prefixable=prefixable)
            self.registry.register(symbol, unit, symbol=True, prefixable=prefixable)
            self._bases.append(base)
            logger.debug("new base dimension %s (%s)", name, symbol)
            return unit

    @property
    def base_dimensions(self) -> Tuple[BaseDimension, ...]:
        with self._lock:
            return tuple(self._bases)

    @property
    def time_dimension(self) -> Optional[Dimension]:
        """Dimension of the unit named ``second``, which timestamp units must have."""
        unit = self.registry.lookup(TIME_UNIT_NAME)
        if unit is None or unit.is_shifted or unit.is_log:
            return None
        return unit.dim

    # --- parsing ---
    def parse(self, expression: str) -> Unit:
        try:
            return parse_unit_expr(
                expression, self.registry, settings=self.settings, time_dim=self.time_dimension
            )
        except UnitError as e:
            logger.debug("rejected %r: %s (%s)", expression, e.status.name, e.reason.name if e.reason else "-")
            raise

    def try_parse(self, expression: str) -> Outcome:
        try:
            return self._record(Outcome(unit=self.parse(expression)))
        except UnitError as e:
            return self._record(Outcome(error=e))

    def lookup(self, name: str) -> Optional[Unit]:
        return self.registry.lookup(name)

    # --- registration ---
    def register(
        self,
        name: str,
        unit: UnitLike,
        *,
        symbol: bool = False,
        plural: Optional[str] = None,
        prefixable: bool = True,
    ) -> Unit:
        """Bind ``name`` to ``unit`` (a ``Unit`` or an expression) and return the unit."""
        if isinstance(unit, str):
            unit = self.parse(unit)
        self.registry.register(name, unit, symbol=symbol, plural=plural, prefixable=prefixable)
        return unit

    def register_named(self, name: str, unit: UnitLike) -> Outcome:
        try:
            return self._record(Outcome(unit=self.register(name, unit)))
        except UnitError as e:
            logger.debug("registration of %r failed: %s", name, e)
            return self._record(Outcome(error=e))

    # --- output and conversion ---
    def format(self, unit: Unit, encoding: Optional[Encoding] = None, *, names: bool = False) -> str:
        return format_unit(
            unit,
            encoding or self.settings.default_encoding,
            names=names,
            digits=self.settings.significant_digits,
        )

    def converter(self, src: UnitLike, dst: UnitLike) -> Converter:
        return converter(self._as_unit(src), self._as_unit(dst))

    def convert(self, value: float, src: UnitLike, dst: UnitLike) -> float:
        return self.converter(src, dst)(value)

    def status(self) -> Status:
        """Status of the last ``try_*`` call made in the current context."""
        return self._status.get()

    # --- internals ---
    def _as_unit(self, unit: UnitLike) -> Unit:
        return self.parse(unit) if isinstance(unit, str) else unit

    def _record(self, outcome: Outcome) -> Outcome:
        self._status.set(outcome.status)
        return outcome


# ---------------------------------------------------------------------------
# Loading a named-unit table
# ---------------------------------------------------------------------------

def _load_entry(system: UnitSystem, entry: Mapping[str, Any]) -> None:
    name = entry["name"]
    symbol = entry.get("symbol")
    prefixable = bool(entry.get("prefixable", True))

    if entry.get("base"):
        if symbol is None:
            raise KeyError("symbol")
        unit = system.new_base_unit(name, symbol, plural=entry.get("plural"), prefixable=prefixable)
    else:
        unit = system.parse(entry["definition"])
        system.register(name, unit, plural=entry.get("plural"), prefixable=prefixable)
        if symbol is not None:
            system.register(symbol, unit, symbol=True, prefixable=prefixable)

    for alias in entry.get("aliases", ()):
        system.register(alias, unit, prefixable=prefixable)
    for alias in entry.get("symbol_aliases", ()):
        system.register(alias, unit, symbol=True, prefixable=prefixable)


def load_table(system: UnitSystem, table: Iterable[Mapping[str, Any]]) -> UnitSystem:
    """Register every entry of ``table``; any bad entry raises ``DatabaseError``."""
    try:
        entries = list(table)
    except TypeError as e:
        raise DatabaseError(f"Unit table is not iterable: {e}") from e
    count = 0
    for index, entry in enumerate(entries):
        try:
            _load_entry(system, entry)
        except (UnitError, KeyError, TypeError) as e:
            label = entry.get("name", "?") if isinstance(entry, Mapping) else "?"
            raise DatabaseError(f"Bad unit table entry #{index} ({label!r}): {e}") from e
        count += 1
    logger.debug("loaded %d unit table entries", count)
    return system


def init(database: Optional[Iterable[Mapping[str, Any]]] = None, *, settings: Optional[Settings] = None) -> UnitSystem:
    """Create a unit system from ``database`` (the bundled table when None).

    Settings default to ``Settings.from_env()``.
    """
    system = UnitSystem(settings or Settings.from_env())
    load_table(system, DEFAULT_TABLE if database is None else database)
    logger.debug("initialized %r", system)
    return system


# Free-function forms for callers that thread the system explicitly.

def parse(system: UnitSystem, expression: str) -> Unit:
    return system.parse(expression)


def register_named(system: UnitSystem, name: str, unit: UnitLike) -> Outcome:
    return system.register_named(name, unit)


def status(system: UnitSystem) -> Status:
    return system.status()


__all__ = [
    "Outcome",
    "UnitSystem",
    "init",
    "load_table",
    "parse",
    "register_named",
    "status",
]
