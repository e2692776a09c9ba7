"""
unitalg.units.registry
======================

Thread-safe name/symbol → ``Unit`` table owned by a unit system.

- Symbols (``m``, ``Pa``, ``°C``) are case-sensitive; names (``meter``,
  ``pascal``) are case-insensitive and also answer to their plural.
- SI prefixes are applied at lookup time, never stored: ``km`` is ``k`` + ``m``
  and ``kilometers`` is ``kilo`` + ``meters``.
- The table is append-only. Re-registering the same text with an equal unit is
  a no-op; binding it to a different unit raises ``AlreadyRegisteredError``.
"""
from __future__ import annotations

import logging
import threading
import unicodedata
from typing import Dict, Iterable, List, Optional, Tuple

from unitalg.core.errors import AlreadyRegisteredError, InvalidNameError, UnknownUnitError
from unitalg.core.unit import Unit
from unitalg.units.lexer import is_valid_name
from unitalg.units.prefixes import NAME_FACTORS, NAMES_DESC, SYMBOL_FACTORS, SYMBOLS_DESC

logger = logging.getLogger(__name__)

_SIBILANT_ENDINGS = ("s", "x", "z", "ch", "sh")


def plural_of(name: str) -> str:
    """English plural used for names registered without an explicit one."""
    lower = name.lower()
    if lower.endswith(_SIBILANT_ENDINGS):
        return name + "es"
    if lower.endswith("y") and len(name) > 1 and lower[-2] not in "aeiou":
        return name[:-1] + "ies"
    return name + "s"


def _normalize(text: str) -> str:
    return unicodedata.normalize("NFC", text)


class UnitsRegistry:
    """Append-only registry of named and symbolic units with SI prefix synthesis."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._symbols: Dict[str, Unit] = {}
        self._names: Dict[str, Unit] = {}        # casefolded name or plural -> unit
        self._spellings: Dict[str, str] = {}     # casefolded name -> name as registered
        self._plurals: Dict[str, str] = {}       # casefolded plural -> casefolded name
        self._non_prefixable: set[str] = set()   # symbols and casefolded names/plurals

    def __contains__(self, text: str) -> bool:
        return self.lookup(text) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._symbols) + len(self._spellings)

    # -------------------------- registration -------------------------------
    def register(
        self,
        text: str,
        unit: Unit,
        *,
        symbol: bool = False,
        plural: Optional[str] = None,
        prefixable: bool = True,
    ) -> None:
        """Bind ``text`` to ``unit`` as a symbol (``symbol=True``) or as a name.

        Names also get ``plural`` (or the derived English plural). Shifted and
        logarithmic units never accept prefixes, whatever ``prefixable`` says.
        """
        text = _normalize(text)
        self._validate(text)
        prefixable = prefixable and not (unit.is_shifted or unit.is_log)

        with self._lock:
            if symbol:
                self.ensure_available(text, unit, symbol=True)
                if text in self._symbols:
                    return
                self._symbols[text] = unit
                if not prefixable:
                    self._non_prefixable.add(text)
                logger.debug("registered symbol %r -> %r", text, unit)
                return

            folded = text.casefold()
            self.ensure_available(text, unit, symbol=False)
            if folded in self._spellings:
                return
            self._names[folded] = unit
            self._spellings[folded] = text
            self._plurals.pop(folded, None)
            if not prefixable:
                self._non_prefixable.add(folded)
            self._add_plural(folded, plural if plural is not None else plural_of(text), unit, prefixable)
            logger.debug("registered name %r -> %r", text, unit)

    def register_alias(self, alias: str, target: str, *, symbol: bool = False) -> None:
        """Bind ``alias`` to whatever ``target`` currently resolves to."""
        with self._lock:
            unit = self.get(target)
            folded = _normalize(target).casefold()
            prefixable = target not in self._non_prefixable and folded not in self._non_prefixable
            self.register(alias, unit, symbol=symbol, prefixable=prefixable)

    def ensure_available(self, text: str, unit: Unit, *, symbol: bool = False) -> None:
        """Raise ``AlreadyRegisteredError`` if ``text`` is bound to a unit other than ``unit``."""
        text = _normalize(text)
        with self._lock:
            existing = self._symbols.get(text)
            if existing is None and not symbol:
                existing = self._names.get(text.casefold())
            if existing is None and symbol and text.casefold() in self._spellings:
                existing = self._names[text.casefold()]
            if existing is not None and existing != unit:
                raise AlreadyRegisteredError(text)

    def _add_plural(self, folded: str, plural: str, unit: Unit, prefixable: bool) -> None:
        key = _normalize(plural).casefold()
        if key == folded or not is_valid_name(plural):
            return
        existing = self._names.get(key)
        if existing is not None:
            if existing != unit:
                logger.debug("plural %r of %r shadowed by an existing name", plural, folded)
            return
        self._names[key] = unit
        self._plurals[key] = folded
        if not prefixable:
            self._non_prefixable.add(key)

    @staticmethod
    def _validate(text: str) -> None:
        if not isinstance(text, str) or not text:
            raise InvalidNameError(str(text), "empty name")
        if not is_valid_name(text):
            raise InvalidNameError(text)

    # ----------------------------- lookup ----------------------------------
    def lookup(self, text: str) -> Optional[Unit]:
        """Resolve ``text``: symbol, then name/plural, then prefixed symbol, then prefixed name."""
        text = _normalize(text)
        with self._lock:
            unit = self._symbols.get(text)
            if unit is not None:
                return unit
            folded = text.casefold()
            unit = self._names.get(folded)
            if unit is not None:
                return unit
            unit = self._prefixed_symbol(text)
            if unit is not None:
                return unit
            return self._prefixed_name(folded)

    def get(self, text: str) -> Unit:
        unit = self.lookup(text)
        if unit is None:
            raise UnknownUnitError(text)
        return unit

    def _prefixed_symbol(self, text: str) -> Optional[Unit]:
        for prefix in SYMBOLS_DESC:
            if len(text) > len(prefix) and text.startswith(prefix):
                rest = text[len(prefix):]
                base = self._symbols.get(rest)
                if base is not None and rest not in self._non_prefixable:
                    return _scaled(base, SYMBOL_FACTORS[prefix])
        return None

    def _prefixed_name(self, folded: str) -> Optional[Unit]:
        for prefix in NAMES_DESC:
            if len(folded) > len(prefix) and folded.startswith(prefix):
                rest = folded[len(prefix):]
                base = self._names.get(rest)
                if base is not None and rest not in self._non_prefixable:
                    return _scaled(base, NAME_FACTORS[prefix])
        return None

    # --------------------------- introspection -----------------------------
    def symbols(self) -> List[str]:
        with self._lock:
            return list(self._symbols)

    def names(self) -> List[str]:
        """Registered names in their original spelling (plurals excluded)."""
        with self._lock:
            return list(self._spellings.values())

    def symbol_of(self, unit: Unit) -> Optional[str]:
        """First symbol registered for a unit equal to ``unit``."""
        return _first_match(self.items(symbols=True), unit)

    def name_of(self, unit: Unit) -> Optional[str]:
        return _first_match(self.items(symbols=False), unit)

    def items(self, *, symbols: bool) -> List[Tuple[str, Unit]]:
        with self._lock:
            if symbols:
                return list(self._symbols.items())
            return [(spelled, self._names[folded]) for folded, spelled in self._spellings.items()]


def _scaled(base: Unit, factor: float) -> Unit:
    return Unit(base.dim, base.scale * factor)


def _first_match(pairs: Iterable[Tuple[str, Unit]], unit: Unit) -> Optional[str]:
    for text, candidate in pairs:
        if candidate == unit:
            return text
    return None


__all__ = ["UnitsRegistry", "plural_of"]
