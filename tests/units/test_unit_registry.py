# pytest tests for unitalg.units.registry
#
# These tests exercise the case rule, plurals, SI-prefix synthesis,
# anti-stacking rules, conflict handling and thread-safety. Most use an
# isolated registry; a few use the fully loaded `system` fixture.

import threading

import pytest

from unitalg.core.dimensions import BaseDimension, Dimension
from unitalg.core.errors import AlreadyRegisteredError, InvalidNameError, Status, UnknownUnitError
from unitalg.core.unit import ONE, Unit, shift
from unitalg.units.registry import UnitsRegistry, plural_of

L = BaseDimension("meter", "m", 0)
T = BaseDimension("second", "s", 1)
METER = Unit(Dimension({L: 1}))
SECOND = Unit(Dimension({T: 1}))


@pytest.fixture()
def reg():
    r = UnitsRegistry()
    r.register("meter", METER)
    r.register("m", METER, symbol=True)
    r.register("second", SECOND)
    r.register("s", SECOND, symbol=True)
    return r


# ---------------------------------------------------------------------------
# Lookup & case rule
# ---------------------------------------------------------------------------

def test_symbols_are_case_sensitive(reg):
    assert reg.lookup("m") == METER
    assert reg.lookup("S") is None

def test_names_are_case_insensitive(reg):
    for spelling in ("meter", "METER", "Meter", "mEtEr"):
        assert reg.lookup(spelling) == METER

def test_plural_names(reg):
    assert reg.lookup("meters") == METER
    assert reg.lookup("SECONDS") == SECOND

def test_get_raises_unknown(reg):
    with pytest.raises(UnknownUnitError) as ei:
        reg.get("furlong")
    assert ei.value.status is Status.UNKNOWN

def test_contains(reg):
    assert "m" in reg
    assert "km" in reg
    assert "furlong" not in reg


# ---------------------------------------------------------------------------
# Prefixes
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("text, factor", [
    ("km", 1e3), ("mm", 1e-3), ("µm", 1e-6), ("μm", 1e-6), ("um", 1e-6),
    ("dam", 1e1), ("dm", 1e-1), ("Qm", 1e30), ("qm", 1e-30), ("ns", 1e-9),
])
def test_prefixed_symbols(reg, text, factor):
    u = reg.lookup(text)
    assert u.dim == METER.dim or u.dim == SECOND.dim
    assert u.scale == pytest.approx(factor)

@pytest.mark.parametrize("text, factor", [
    ("kilometer", 1e3), ("KILOMETERS", 1e3), ("millisecond", 1e-3),
    ("nanoseconds", 1e-9), ("dekameter", 1e1), ("decameter", 1e1), ("microsecond", 1e-6),
])
def test_prefixed_names(reg, text, factor):
    assert reg.lookup(text).scale == pytest.approx(factor)

def test_prefix_symbol_does_not_mix_with_names(reg):
    assert reg.lookup("kmeter") is None
    assert reg.lookup("kilom") is None

def test_prefixes_do_not_stack(reg):
    assert reg.lookup("kkm") is None
    assert reg.lookup("mkm") is None

def test_prefix_alone_is_not_a_unit(reg):
    assert reg.lookup("k") is None
    assert reg.lookup("kilo") is None

def test_non_prefixable(reg):
    reg.register("kg", Unit(Dimension({L: 1}), 7.0), symbol=True, prefixable=False)
    assert reg.lookup("mkg") is None

def test_shifted_units_never_prefixable(reg):
    reg.register("ds", shift(SECOND, 5), symbol=True)
    assert reg.lookup("kds") is None

def test_prefixed_units_are_not_stored(reg):
    reg.lookup("km")
    assert "km" not in reg.symbols()


# ---------------------------------------------------------------------------
# Registration rules
# ---------------------------------------------------------------------------

def test_identical_reregistration_is_noop(reg):
    reg.register("meter", Unit(Dimension({L: 1})))
    reg.register("m", METER, symbol=True)
    assert reg.names().count("meter") == 1

def test_conflicting_registration_fails(reg):
    with pytest.raises(AlreadyRegisteredError) as ei:
        reg.register("meter", SECOND)
    assert ei.value.status is Status.EXISTS
    with pytest.raises(AlreadyRegisteredError):
        reg.register("m", SECOND, symbol=True)
    assert reg.lookup("meter") == METER

def test_name_conflicts_with_existing_symbol(reg):
    with pytest.raises(AlreadyRegisteredError):
        reg.register("s", METER)

def test_name_conflicts_with_existing_plural(reg):
    with pytest.raises(AlreadyRegisteredError):
        reg.register("meters", SECOND)

@pytest.mark.parametrize("bad", ["", "2m", "m2", "per", "Since", "nan", "a b", "m/s", "x^2"])
def test_invalid_names(reg, bad):
    with pytest.raises(InvalidNameError) as ei:
        reg.register(bad, METER)
    assert ei.value.status is Status.BAD_ARG

def test_explicit_plural(reg):
    reg.register("foot", Unit(METER.dim, 0.3048), plural="feet")
    assert reg.lookup("feet") == reg.lookup("foot")
    assert reg.lookup("foots") is None

def test_plural_shadowed_by_existing_name_is_skipped(reg):
    reg.register("ms", ONE)          # a name, not a symbol
    reg.register("m", METER)         # plural "ms" already taken
    assert reg.lookup("ms") == ONE

def test_register_alias(reg):
    reg.register_alias("metre", "meter")
    reg.register_alias("mtr", "m", symbol=True)
    assert reg.lookup("METRE") == METER
    assert reg.lookup("kmtr").scale == pytest.approx(1e3)
    with pytest.raises(UnknownUnitError):
        reg.register_alias("x", "nope")

def test_ensure_available(reg):
    reg.ensure_available("meter", METER)
    reg.ensure_available("furlong", SECOND)
    with pytest.raises(AlreadyRegisteredError):
        reg.ensure_available("METER", SECOND)


# ---------------------------------------------------------------------------
# Introspection
# ---------------------------------------------------------------------------

def test_listing_and_reverse_lookup(reg):
    assert reg.names() == ["meter", "second"]
    assert reg.symbols() == ["m", "s"]
    assert reg.symbol_of(SECOND) == "s"
    assert reg.name_of(METER) == "meter"
    assert reg.symbol_of(ONE) is None
    assert len(reg) == 4


@pytest.mark.parametrize("name, plural", [
    ("meter", "meters"), ("inch", "inches"), ("henry", "henries"), ("day", "days"),
    ("lux", "luxes"), ("gas", "gases"), ("century", "centuries"),
])
def test_plural_of(name, plural):
    assert plural_of(name) == plural


# ---------------------------------------------------------------------------
# Default table
# ---------------------------------------------------------------------------

def test_default_table_spot_checks(system):
    reg = system.registry
    assert reg.lookup("N") == system.parse("kg m s-2")
    assert reg.lookup("feet") == reg.lookup("ft")
    assert reg.lookup("perches") == reg.lookup("perch")
    assert reg.lookup("Ω") == reg.lookup("ohm") == reg.lookup("OHMS")
    assert reg.lookup("l") == reg.lookup("L") == reg.lookup("litre")
    assert reg.lookup("mL").scale == pytest.approx(1e-6)
    assert reg.lookup("kg").scale == 1.0
    assert reg.lookup("g").scale == pytest.approx(1e-3)
    assert reg.lookup("mg").scale == pytest.approx(1e-6)
    assert reg.lookup("mkg") is None
    assert reg.lookup("kcelsius") is None
    assert reg.lookup("hPa").scale == pytest.approx(100)

def test_exact_symbols_win_over_prefixes(system):
    reg = system.registry
    assert reg.lookup("min").scale == pytest.approx(60)      # not milli-inch
    assert reg.lookup("Pa").scale == pytest.approx(1)        # not peta-annum
    assert reg.lookup("d").scale == pytest.approx(86400)     # day, not deci
    assert reg.lookup("cd") == system.parse("candela")


# ---------------------------------------------------------------------------
# Thread-safety: concurrent registration & lookup
# ---------------------------------------------------------------------------

def test_thread_safety_register_and_lookup(reg):
    errors = []

    def writer(i):
        try:
            reg.register(f"unit{i}x", Unit(METER.dim, float(i + 1)))
        except Exception as e:  # pragma: no cover - only on failure
            errors.append(e)

    def reader():
        try:
            for _ in range(200):
                assert reg.lookup("km").scale == pytest.approx(1e3)
        except Exception as e:  # pragma: no cover
            errors.append(e)

    threads = [threading.Thread(target=writer, args=(i,)) for i in range(50)]
    threads += [threading.Thread(target=reader) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert not errors
    assert all(reg.lookup(f"UNIT{i}X").scale == pytest.approx(i + 1) for i in range(50))

def test_thread_safety_same_name_race(reg):
    outcomes = []
    lock = threading.Lock()

    def worker(scale):
        try:
            reg.register("contested", Unit(METER.dim, scale))
            result = "ok"
        except AlreadyRegisteredError:
            result = "exists"
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker, args=(float(i + 1),)) for i in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("exists") == 9
