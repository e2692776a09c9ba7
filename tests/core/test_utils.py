import pytest
import math
from fractions import Fraction

# Target module
import unitalg.core.utils as utils
from unitalg.core.errors import DimensionError


# -------------------------------
# superscripts
# -------------------------------

@pytest.mark.parametrize("n, expected", [
    (1, ""),         # 1 -> empty
    (2, "²"),
    (3, "³"),
    (10, "¹⁰"),
    (-1, "⁻¹"),      # superscript minus + superscript ONE
    (-3, "⁻³"),
])
def test_superscript(n, expected):
    assert utils.superscript(n) == expected


@pytest.mark.parametrize("text, expected", [("²", 2), ("⁻²", -2), ("¹⁰", 10), ("⁺³", 3)])
def test_from_superscript(text, expected):
    assert utils.from_superscript(text) == expected


# -------------------------------
# as_exponent
# -------------------------------

@pytest.mark.parametrize("value, expected", [
    (2, Fraction(2)),
    (Fraction(1, 3), Fraction(1, 3)),
    (0.5, Fraction(1, 2)),
    (-0.25, Fraction(-1, 4)),
])
def test_as_exponent(value, expected):
    assert utils.as_exponent(value) == expected


@pytest.mark.parametrize("value", [True, math.nan, math.inf, math.pi, "2"])
def test_as_exponent_rejects(value):
    with pytest.raises(DimensionError):
        utils.as_exponent(value)


# -------------------------------
# format_number
# -------------------------------

@pytest.mark.parametrize("value, expected", [
    (25.0, "25"),
    (1.0, "1"),
    (-60.0, "-60"),
    (0.001, "0.001"),
    (1e-9, "1e-09"),
    (1e20, "1e+20"),
    (273.15, "273.15"),
    (1 / 3, "0.333333333333333"),
])
def test_format_number(value, expected):
    assert utils.format_number(value) == expected


def test_format_number_digits():
    assert utils.format_number(math.pi, 4) == "3.142"
