"""
unitalg: a unit-expression parser and unit-algebra engine.

Parse expressions such as ``kg m s-2``, ``celsius @ 20``, ``days since
2000-01-01`` or ``lg(re 1 mW)`` into immutable ``Unit`` values, combine and
convert them, and format them back to text.

    >>> import unitalg
    >>> system = unitalg.init()
    >>> system.format(system.parse("kg m s-2"))
    'kg·m/s²'

The public names below are imported lazily so that ``import unitalg`` stays
cheap and free of import-time side effects.
"""

from importlib import import_module
from importlib import metadata as _metadata
from typing import Any


__author__ = "Parneet Sidhu"
__license__ = "MIT"

# Try to read the installed package version first; fall back to a default for local dev.
try:
    __version__ = _metadata.version("unitalg")
except _metadata.PackageNotFoundError:
    import tomllib
    with open("pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

_LAZY = {
    "init": "unitalg.system",
    "UnitSystem": "unitalg.system",
    "Outcome": "unitalg.system",
    "Unit": "unitalg.core.unit",
    "format_unit": "unitalg.io.formatter",
    "Encoding": "unitalg.core.settings",
    "Settings": "unitalg.core.settings",
    "Status": "unitalg.core.errors",
    "UnitError": "unitalg.core.errors",
    "UnitSyntaxError": "unitalg.core.errors",
    "UnknownUnitError": "unitalg.core.errors",
    "DimensionError": "unitalg.core.errors",
    "AlreadyRegisteredError": "unitalg.core.errors",
    "DatabaseError": "unitalg.core.errors",
}

__all__ = ["__version__", "__author__", "__license__", *_LAZY]


def __getattr__(name: str) -> Any:
    """Resolve the public API on first access."""
    module = _LAZY.get(name)
    if module is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    value = getattr(import_module(module), name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    # Improve discoverability in REPL / autocomplete.
    return sorted(list(globals().keys()) + list(_LAZY))
