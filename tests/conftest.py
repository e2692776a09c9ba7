# tests/conftest.py
import pytest

from unitalg.core.settings import Settings
from unitalg.system import UnitSystem, init


@pytest.fixture
def system() -> UnitSystem:
    """Fresh unit system with the bundled table; registrations never leak between tests."""
    return init(settings=Settings())


@pytest.fixture
def bare() -> UnitSystem:
    """Unit system with only length, mass and time."""
    s = UnitSystem()
    s.new_base_unit("meter", "m")
    s.new_base_unit("kilogram", "kg", prefixable=False)
    s.new_base_unit("second", "s")
    return s


@pytest.fixture
def parse(system):
    return system.parse
