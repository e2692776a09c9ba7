"""
unitalg.workflow
================

Line-oriented helpers for defining and probing custom units::

    >>> system = unitalg.init()
    >>> add_custom_unit(system, "foo = 5 * meter")
    True
    >>> describe(system, "foo^2")
    '25 m²'
    >>> describe(system, "foo^")
    'FAILED'

Every failure collapses to ``False`` or ``FAILED``; the structured error stays
available through ``UnitSystem.try_parse`` and ``UnitSystem.status``.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, Tuple

from unitalg.core.errors import InvalidNameError, UnitError
from unitalg.core.settings import Encoding
from unitalg.system import UnitSystem

logger = logging.getLogger(__name__)

FAILED = "FAILED"


def split_definition(definition: str) -> Tuple[str, str]:
    """``"name = expr"`` -> ``("name", "expr")``, splitting on the first ``=``.

    The name is trimmed of spaces and tabs; the expression is kept as written
    apart from surrounding spaces and tabs.
    """
    name, sep, expression = definition.partition("=")
    if not sep:
        raise InvalidNameError(definition, "expected 'name = expression'")
    return name.strip(" \t"), expression.strip(" \t")


def add_custom_unit(system: UnitSystem, definition: str) -> bool:
    """Parse and register ``"name = expression"``; True on success."""
    try:
        name, expression = split_definition(definition)
    except UnitError as e:
        logger.debug("bad definition %r: %s", definition, e)
        return False
    outcome = system.try_parse(expression)
    if not outcome.ok:
        return False
    return system.register_named(name, outcome.unit).ok


def describe(system: UnitSystem, expression: str, encoding: Optional[Encoding] = None) -> str:
    """Canonical text of ``expression``, or ``FAILED``."""
    outcome = system.try_parse(expression)
    if not outcome.ok:
        return FAILED
    return system.format(outcome.unit, encoding)


def check(system: UnitSystem, expression: str) -> bool:
    return system.try_parse(expression).ok


def run_custom(system: UnitSystem, definition: str, expressions: Iterable[str]) -> Iterator[str]:
    """Register ``definition`` then describe each expression.

    Yields a single ``FAILED`` if the definition itself is rejected.
    """
    if not add_custom_unit(system, definition):
        yield FAILED
        return
    for expression in expressions:
        yield describe(system, expression)


__all__ = ["FAILED", "split_definition", "add_custom_unit", "describe", "check", "run_custom"]
