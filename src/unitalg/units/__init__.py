from importlib import import_module
from typing import Any

# Lazy access helpers -------------------------------------------------------

_LAZY = {
    "tokenize": "unitalg.units.lexer",
    "parse_unit_expr": "unitalg.units.parser",
    "UnitsRegistry": "unitalg.units.registry",
    "plural_of": "unitalg.units.registry",
    "DEFAULT_TABLE": "unitalg.units.catalog",
}


def __getattr__(name: str) -> Any:
    """
    Lazy attribute access. Submodules are imported on first use so that
    importing one of them does not pull in the others.
    """
    module = _LAZY.get(name)
    if module is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    return getattr(import_module(module), name)


def __dir__() -> list[str]:
    # Improve discoverability in REPL / autocomplete.
    return sorted(list(globals().keys()) + list(_LAZY))
