"""
unitalg.units.lexer
===================

Tokenizer for unit expressions.

``tokenize`` is stateless between calls: every call builds a fresh scanner.
Besides the usual numbers, identifiers and operators it recognises

* exponents written directly after an operand (``m2``, ``s-2``, ``m²``),
* shift keywords and ``per`` (case-insensitive, whole words only),
* date/time literals, but only right after a shift operator, so
  ``days since 20231225`` is a date while ``20231225 m`` is a number.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Iterator, List, NamedTuple, Optional

from unitalg.core.errors import Reason, UnitSyntaxError
from unitalg.core.utils import SUPERSCRIPT_DIGITS, SUPERSCRIPT_SIGNS, from_superscript


class TokenKind(Enum):
    NUMBER = "number"
    IDENTIFIER = "identifier"
    OPERATOR = "operator"
    LPAREN = "("
    RPAREN = ")"
    KEYWORD = "keyword"
    WHITESPACE = "whitespace"
    EXPONENT = "exponent"
    TIMESTAMP = "timestamp"
    END = "end"


class Token(NamedTuple):
    kind: TokenKind
    text: str
    position: int
    value: object = None


KEYWORDS = frozenset({"per", "after", "from", "since", "re"})
SHIFT_KEYWORDS = frozenset({"after", "from", "since"})
MULTIPLY_OPERATORS = frozenset({".", "·", "⋅", "-"})

_OPERATORS = ("**", "*", "^", "/", "@", ".", "·", "⋅", "-")

# Identifier characters: letters, underscore, and a few unit glyphs; never a
# (superscript) digit at the start or the end.
_ID_EDGE = rf"(?:[^\W\d{SUPERSCRIPT_DIGITS}]|[°%'\"])"
_ID_BODY = rf"(?:[^\W{SUPERSCRIPT_DIGITS}]|[°%'\"])"

IDENTIFIER_RE = re.compile(rf"{_ID_EDGE}(?:{_ID_BODY}*{_ID_EDGE})?")
_DIGIT_EXPONENT = re.compile(r"[+-]?[0-9]+(?![0-9]|\.[0-9])")
_SUPER_EXPONENT = re.compile(rf"[{SUPERSCRIPT_SIGNS}]?[{SUPERSCRIPT_DIGITS}]+")
_NUMBER = re.compile(r"(?:[0-9]+(?:\.[0-9]+)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_WHITESPACE = re.compile(r"\s+")
_NON_FINITE = re.compile(r"[+-]?(?:nan(?:\([^)]*\))?|inf(?:inity)?)(?![\w°%'\"])", re.IGNORECASE)

_DATE = re.compile(
    r"""
      (?P<year>\d{1,4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})
    | (?P<pyear>\d{4})(?P<pmonth>\d{2})(?P<pday>\d{2})(?![\d.])
    """,
    re.VERBOSE,
)
_CLOCK = re.compile(r"(?:T|[ \t]+)(?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2}(?:\.\d+)?))?")
_ZONE_NAME = re.compile(r"[ \t]*(?:Z|UTC|GMT)(?![\w])")
_ZONE_OFFSET = re.compile(r"[ \t]*(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?(?!\d)")


def is_integer_literal(token: Token) -> bool:
    return token.kind is TokenKind.NUMBER and _INTEGER.fullmatch(token.text) is not None


def is_shift_operator(token: Token) -> bool:
    if token.kind is TokenKind.OPERATOR:
        return token.text == "@"
    return token.kind is TokenKind.KEYWORD and token.value in SHIFT_KEYWORDS


def is_valid_name(text: str) -> bool:
    """True if ``text`` lexes as one identifier that is not a keyword or ``nan``/``inf``."""
    if IDENTIFIER_RE.fullmatch(text) is None or text.casefold() in KEYWORDS:
        return False
    return _NON_FINITE.fullmatch(text) is None


class _Lexer:
    def __init__(self, text: str) -> None:
        self.s = text
        self.n = len(text)
        self.i = 0
        self._prev: Optional[Token] = None

    def _emit(self, kind: TokenKind, start: int, value: object = None) -> Token:
        tok = Token(kind, self.s[start:self.i], start, value)
        if kind is not TokenKind.WHITESPACE:
            self._prev = tok
        return tok

    def _operand_expected(self) -> bool:
        prev = self._prev
        return prev is None or prev.kind in (TokenKind.OPERATOR, TokenKind.LPAREN, TokenKind.KEYWORD)

    def _after_shift(self) -> bool:
        return self._prev is not None and is_shift_operator(self._prev)

    def _error(self, reason: Reason, position: Optional[int] = None) -> UnitSyntaxError:
        return UnitSyntaxError(reason, self.s, self.i if position is None else position)

    def tokens(self) -> Iterator[Token]:
        s = self.s
        while self.i < self.n:
            start = self.i
            c = s[start]

            m = _WHITESPACE.match(s, start)
            if m:
                self.i = m.end()
                yield self._emit(TokenKind.WHITESPACE, start)
                continue

            if self._after_shift():
                stamp = self._scan_timestamp()
                if stamp is not None:
                    yield self._emit(TokenKind.TIMESTAMP, start, stamp)
                    continue

            operand_expected = self._operand_expected()
            m = _NON_FINITE.match(s, start)
            if m and (c not in "+-" or operand_expected):
                raise self._error(Reason.NON_FINITE)

            if c in "0123456789" or (operand_expected and self._signed_number_ahead(start)):
                yield self._scan_number(start)
                continue

            m = IDENTIFIER_RE.match(s, start)
            if m:
                self.i = m.end()
                word = m.group(0)
                folded = word.casefold()
                if folded in KEYWORDS:
                    yield self._emit(TokenKind.KEYWORD, start, folded)
                    continue
                yield self._emit(TokenKind.IDENTIFIER, start, word)
                m = _DIGIT_EXPONENT.match(s, self.i)
                if m:
                    exp_start, self.i = self.i, m.end()
                    yield self._emit(TokenKind.EXPONENT, exp_start, int(m.group(0)))
                continue

            m = _SUPER_EXPONENT.match(s, start)
            if m:
                self.i = m.end()
                yield self._emit(TokenKind.EXPONENT, start, from_superscript(m.group(0)))
                continue

            if c == "(":
                self.i += 1
                yield self._emit(TokenKind.LPAREN, start)
                continue
            if c == ")":
                self.i += 1
                yield self._emit(TokenKind.RPAREN, start)
                continue

            for op in _OPERATORS:
                if s.startswith(op, start):
                    self.i += len(op)
                    yield self._emit(TokenKind.OPERATOR, start, op)
                    break
            else:
                raise self._error(Reason.BAD_CHARACTER)

        yield Token(TokenKind.END, "", self.n)

    # ---- scanners ----
    def _signed_number_ahead(self, start: int) -> bool:
        s = self.s
        if s[start] == ".":
            return _NUMBER.match(s, start) is not None
        return s[start] in "+-" and _NUMBER.match(s, start + 1) is not None

    def _scan_number(self, start: int) -> Token:
        pos = start + 1 if self.s[start] in "+-" else start
        m = _NUMBER.match(self.s, pos)
        self.i = m.end()
        return self._emit(TokenKind.NUMBER, start, float(self.s[start:self.i]))

    def _scan_timestamp(self) -> Optional[datetime]:
        s, start = self.s, self.i
        m = _DATE.match(s, start)
        if not m:
            return None
        if m.group("year") is not None:
            year, month, day = int(m.group("year")), int(m.group("month")), int(m.group("day"))
        else:
            year, month, day = int(m.group("pyear")), int(m.group("pmonth")), int(m.group("pday"))
        end = m.end()

        hour = minute = 0
        seconds = 0.0
        clock = _CLOCK.match(s, end)
        if clock:
            hour, minute = int(clock.group("hour")), int(clock.group("minute"))
            seconds = float(clock.group("second") or 0)
            end = clock.end()

        zone = timezone.utc
        named = _ZONE_NAME.match(s, end)
        if named:
            end = named.end()
        elif clock:
            offset = _ZONE_OFFSET.match(s, end)
            if offset:
                delta = timedelta(hours=int(offset.group("hours")), minutes=int(offset.group("minutes") or 0))
                zone = timezone(-delta if offset.group("sign") == "-" else delta)
                end = offset.end()

        try:
            whole = int(seconds)
            stamp = datetime(year, month, day, hour, minute, whole, tzinfo=zone)
            stamp = (stamp + timedelta(seconds=seconds - whole)).astimezone(timezone.utc)
        except (ValueError, OverflowError):
            raise self._error(Reason.BAD_TIMESTAMP, start) from None
        self.i = end
        return stamp


def tokenize(text: str) -> List[Token]:
    """Split ``text`` into tokens, ending with a single END token."""
    return list(_Lexer(text).tokens())


__all__ = [
    "TokenKind",
    "Token",
    "KEYWORDS",
    "SHIFT_KEYWORDS",
    "MULTIPLY_OPERATORS",
    "IDENTIFIER_RE",
    "tokenize",
    "is_integer_literal",
    "is_shift_operator",
    "is_valid_name",
]
