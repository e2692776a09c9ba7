# unitalg.core.settings

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum


class Encoding(Enum):
    """Output encodings understood by the formatter."""

    UTF8 = "utf8"
    ASCII = "ascii"


DEFAULT_MAX_EXPONENT = 127
DEFAULT_SIGNIFICANT_DIGITS = 15


@dataclass(frozen=True, slots=True)
class Settings:
    """Engine knobs shared by the parser, the algebra and the formatter."""

    max_exponent: int = DEFAULT_MAX_EXPONENT
    default_encoding: Encoding = Encoding.UTF8
    significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS

    def __post_init__(self) -> None:
        if self.max_exponent < 1:
            raise ValueError("max_exponent must be a positive integer")
        if not (1 <= self.significant_digits <= 17):
            raise ValueError("significant_digits must be between 1 and 17")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings, letting ``UNITALG_*`` environment variables override defaults."""
        return cls(
            max_exponent=int(os.getenv("UNITALG_MAX_EXPONENT", DEFAULT_MAX_EXPONENT)),
            significant_digits=int(os.getenv("UNITALG_SIGNIFICANT_DIGITS", DEFAULT_SIGNIFICANT_DIGITS)),
        )

    def with_(self, **changes: object) -> "Settings":
        return replace(self, **changes)


DEFAULT_SETTINGS = Settings()
