import pytest

from unitalg.core.settings import (
    DEFAULT_MAX_EXPONENT,
    DEFAULT_SETTINGS,
    DEFAULT_SIGNIFICANT_DIGITS,
    Encoding,
    Settings,
)


def test_defaults():
    s = Settings()
    assert s == DEFAULT_SETTINGS
    assert s.max_exponent == DEFAULT_MAX_EXPONENT == 127
    assert s.significant_digits == DEFAULT_SIGNIFICANT_DIGITS == 15
    assert s.default_encoding is Encoding.UTF8


@pytest.mark.parametrize("kwargs", [
    {"max_exponent": 0},
    {"max_exponent": -3},
    {"significant_digits": 0},
    {"significant_digits": 18},
])
def test_validation(kwargs):
    with pytest.raises(ValueError):
        Settings(**kwargs)


def test_from_env(monkeypatch):
    monkeypatch.setenv("UNITALG_MAX_EXPONENT", "12")
    monkeypatch.setenv("UNITALG_SIGNIFICANT_DIGITS", "6")
    s = Settings.from_env()
    assert (s.max_exponent, s.significant_digits) == (12, 6)


def test_from_env_defaults(monkeypatch):
    monkeypatch.delenv("UNITALG_MAX_EXPONENT", raising=False)
    monkeypatch.delenv("UNITALG_SIGNIFICANT_DIGITS", raising=False)
    assert Settings.from_env() == DEFAULT_SETTINGS


def test_from_env_rejects_garbage(monkeypatch):
    monkeypatch.setenv("UNITALG_MAX_EXPONENT", "lots")
    with pytest.raises(ValueError):
        Settings.from_env()


def test_with_returns_copy():
    s = DEFAULT_SETTINGS.with_(default_encoding=Encoding.ASCII)
    assert s.default_encoding is Encoding.ASCII
    assert DEFAULT_SETTINGS.default_encoding is Encoding.UTF8
    with pytest.raises(ValueError):
        DEFAULT_SETTINGS.with_(max_exponent=0)
