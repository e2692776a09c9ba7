from datetime import datetime, timezone
from fractions import Fraction

import pytest

from unitalg.core.dimensions import BaseDimension, Dimension
from unitalg.core.settings import Encoding
from unitalg.core.unit import ONE, Unit, log_unit, power, shift, shift_to_instant
from unitalg.io.formatter import FALLBACK, format_unit, strategies


@pytest.mark.parametrize("expr, expected", [
    ("N", "kg·m/s²"),
    ("m/s", "m/s"),
    ("Hz", "1/s"),
    ("1/min", "0.0166666666666667/s"),
    ("60/s", "60/s"),
    ("nanosecond", "1e-09 s"),
    ("mW", "0.001 kg·m²/s³"),
    ("J/(kg K)", "m²/s²·K"),
    ("", "1"),
    ("percent", "0.01"),
    ("m2 kg-1", "m²/kg"),
    ("-5 m", "-5 m"),
])
def test_utf8(parse, expr, expected):
    assert format_unit(parse(expr)) == expected


@pytest.mark.parametrize("expr, expected", [
    ("N", "kg.m/s^2"),
    ("m/s^2", "m/s^2"),
    ("m^(1/2)", "m^(1/2)"),
    ("J/(kg K)", "m^2/s^2.K"),
    ("Hz", "1/s"),
])
def test_ascii(parse, expr, expected):
    assert format_unit(parse(expr), Encoding.ASCII) == expected


def test_custom_unit_squared(system):
    system.register("foo", "5 * meter")
    assert format_unit(system.parse("foo^2")) == "25 m²"


def test_names_option(parse):
    assert format_unit(parse("m2"), Encoding.ASCII, names=True) == "meter^2"
    assert format_unit(parse("N"), names=True) == "kilogram·meter/second²"


def test_fractional_exponent_falls_back_to_ascii(parse):
    assert format_unit(parse("m^(1/2)")) == "m^(1/2)"
    assert format_unit(parse("m^(3/2) s-1")) == "m^(3/2)/s"


def test_non_ascii_label_falls_back_to_one():
    odd = BaseDimension("µnit", "µ", 0)
    u = power(Unit(Dimension({odd: 1})), Fraction(1, 2))
    assert format_unit(u) == FALLBACK
    assert format_unit(Unit(Dimension({odd: 1})), Encoding.ASCII) == FALLBACK
    assert format_unit(Unit(Dimension({odd: 1}))) == "µ"


def test_strategy_chain_order():
    assert len(strategies(Encoding.UTF8)) == 3
    assert len(strategies(Encoding.ASCII)) == 2
    assert strategies(Encoding.UTF8)[-1](ONE, False, 15) == FALLBACK


def test_offset_units(parse):
    assert format_unit(parse("celsius")) == "K @ 273.15"
    assert format_unit(parse("celsius @ 20")) == "K @ 293.15"
    assert format_unit(parse("°F"), Encoding.ASCII) == "0.555555555555556 K @ 459.67"


def test_timestamp_units(parse):
    assert format_unit(parse("seconds since 2000-01-01")) == "s since 2000-01-01 00:00:00 UTC"
    assert format_unit(parse("days since 1990-1-1")) == "86400 s since 1990-01-01 00:00:00 UTC"
    assert (
        format_unit(parse("s since 2000-01-01T12:30:00.25+01:00"))
        == "s since 2000-01-01 11:30:00.250000 UTC"
    )


def test_early_timestamp_is_zero_padded(bare):
    second = bare.parse("s")
    u = shift_to_instant(second, datetime(999, 1, 2, tzinfo=timezone.utc), second.dim)
    assert format_unit(u) == "s since 0999-01-02 00:00:00 UTC"


def test_log_units(parse):
    assert format_unit(parse("lg(re 1)")) == "lg(re 1)"
    assert format_unit(parse("ln(re 1 K)")) == "ln(re 1 K)"
    assert format_unit(parse("lb(re 1 Hz)")) == "lb(re 1/s)"
    assert format_unit(parse("lg(re 1 mW)"), Encoding.ASCII) == "lg(re 0.001 kg.m^2/s^3)"


def test_digits(parse):
    assert format_unit(parse("(1/3) m"), digits=3) == "0.333 m"


def test_shift_with_dimensionless_base():
    assert format_unit(shift(ONE, 5)) == "1 @ 5"
    assert format_unit(log_unit(10, ONE)) == "lg(re 1)"


ROUND_TRIP = [
    "N", "m/s", "kg m2 s-3 A-1", "1/s", "60/s", "nanosecond", "mW", "25 m2", "m^(1/2)",
    "m^(-3/2)", "celsius", "celsius @ 20", "°F", "days since 1990-1-1",
    "s since 2000-01-01T12:30:00.25", "lg(re 1 mW)", "ln(re 1 K)", "lb(re 1 Hz)", "lg(re 1)",
    "", "percent", "-5 m", "ft/min", "1e30 kg", "mi/h", "J/(kg K)",
]


@pytest.mark.parametrize("expr", ROUND_TRIP)
@pytest.mark.parametrize("encoding", [Encoding.UTF8, Encoding.ASCII])
def test_format_parse_round_trip(system, expr, encoding):
    u = system.parse(expr)
    again = system.parse(format_unit(u, encoding))
    assert again == u
    assert format_unit(again, encoding) == format_unit(u, encoding)


@pytest.mark.parametrize("expr", ["N", "mi/h", "m^(1/2)"])
def test_names_round_trip(system, expr):
    u = system.parse(expr)
    assert system.parse(format_unit(u, Encoding.ASCII, names=True)) == u
