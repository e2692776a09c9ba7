"""
unitalg.units.parser
====================

Recursive-descent parser for unit expressions.

Parsing happens in two steps. ``_compile_unit_expr`` turns the text into a
*plan* (nested tuples, no registry lookups) and is cached by expression text,
which is safe across unit systems because a plan holds no bound units.
``_eval_plan`` then resolves names against a registry and runs the algebra.

Grammar, highest binding first::

    primary  := NUMBER | NAME | "(" shift ")" | log
    log      := ("lg" | "ln" | "lb") "(" "re" NUMBER [product] ")"
    power    := primary [("^" | "**") exponent | EXPONENT]
    exponent := signed_int | "(" signed_int "/" int ")"
    implicit := power ((WS | "." | "·" | "-" | <adjacent>) power)*
    product  := implicit (("*" | "/" | "per") implicit)*
    shift    := product [("@" | "after" | "from" | "since") (NUMBER | TIMESTAMP)]

Surrounding whitespace is rejected, the empty string is the unit ``1``, and
unmatched closing parentheses at the very end are tolerated (``kg)``).
"""

from __future__ import annotations

import math
from datetime import datetime
from fractions import Fraction
from functools import lru_cache
from typing import TYPE_CHECKING, List, Optional, Tuple, Union

from unitalg.core.dimensions import Dimension
from unitalg.core.errors import DimensionError, Reason, UnitSyntaxError, UnknownUnitError
from unitalg.core.settings import DEFAULT_SETTINGS, Settings
from unitalg.core.unit import ONE, Unit, divide, log_unit, multiply, power, shift, shift_to_instant
from unitalg.units.lexer import (
    MULTIPLY_OPERATORS,
    Token,
    TokenKind,
    is_integer_literal,
    is_shift_operator,
    tokenize,
)

if TYPE_CHECKING:
    from unitalg.units.registry import UnitsRegistry

# --- Plan node types ------------------------------------------------
# ("one",)
# ("num", <float>, <pos>)
# ("name", <str>, <pos>)
# ("pow", <plan>, <Fraction>, <pos>)
# ("mul" | "div", <plan>, <plan>, <pos>)
# ("shift", <plan>, <float | datetime>, <pos>)
# ("log", <float>, <plan>, <pos>)
Plan = Tuple[object, ...]

LOG_FUNCTIONS = {"lg": 10.0, "ln": math.e, "lb": 2.0}


class _UnitExprParser:
    def __init__(self, text: str) -> None:
        self.s = text
        self.toks: List[Token] = tokenize(text)
        self.i = 0

    def parse(self) -> Plan:
        if self.s != self.s.strip():
            pos = 0 if self.s[:1].isspace() else len(self.s.rstrip())
            raise self._error(Reason.SURROUNDING_WHITESPACE, pos)
        if self._peek().kind is TokenKind.END:
            return ("one",)

        plan = self._parse_shift()
        self._skip_ws()
        # Known quirk: stray closing parentheses at the very end are ignored.
        while self._peek().kind is TokenKind.RPAREN:
            self._advance()
            self._skip_ws()
        if self._peek().kind is not TokenKind.END:
            raise self._error(Reason.UNEXPECTED_TOKEN)
        return plan

    # shift := product [SHIFT (NUMBER | TIMESTAMP)]
    def _parse_shift(self) -> Plan:
        self._skip_ws()
        if is_shift_operator(self._peek()):
            raise self._error(Reason.MISSING_OPERAND)
        base = self._parse_product()
        self._skip_ws()
        op = self._peek()
        if not is_shift_operator(op):
            return base

        self._advance()
        self._skip_ws()
        tok = self._peek()
        if is_shift_operator(tok):
            raise self._error(Reason.DOUBLE_SHIFT)
        if tok.kind not in (TokenKind.NUMBER, TokenKind.TIMESTAMP):
            raise self._error(Reason.MISSING_ORIGIN)
        self._advance()

        for rest in self.toks[self.i:]:
            if is_shift_operator(rest):
                raise self._error(Reason.DOUBLE_SHIFT, rest.position)
        return ("shift", base, tok.value, op.position)

    # product := implicit (('*' | '/' | 'per') implicit)*
    def _parse_product(self) -> Plan:
        left = self._parse_implicit()
        while True:
            self._skip_ws()
            tok = self._peek()
            if tok.kind is TokenKind.OPERATOR and tok.text in ("*", "/"):
                kind = "mul" if tok.text == "*" else "div"
            elif tok.kind is TokenKind.KEYWORD and tok.value == "per":
                kind = "div"
            else:
                return left
            self._advance()
            self._skip_ws()
            self._expect_operand()
            right = self._parse_implicit()
            left = (kind, left, right, tok.position)

    # implicit := power ((WS | '.' | '·' | '-' | <adjacent>) power)*
    def _parse_implicit(self) -> Plan:
        left = self._parse_power()
        while True:
            mark = self.i
            self._skip_ws()
            tok = self._peek()
            if tok.kind is TokenKind.OPERATOR and tok.text in MULTIPLY_OPERATORS:
                self._advance()
                self._skip_ws()
                self._expect_operand()
            elif not self._starts_operand(tok):
                self.i = mark
                return left
            right = self._parse_power()
            left = ("mul", left, right, tok.position)

    # power := primary [('^' | '**') exponent | EXPONENT]
    def _parse_power(self) -> Plan:
        base = self._parse_primary()
        tok = self._peek()
        if tok.kind is TokenKind.EXPONENT:
            self._advance()
            return ("pow", base, Fraction(tok.value), tok.position)

        mark = self.i
        self._skip_ws()
        tok = self._peek()
        if tok.kind is TokenKind.OPERATOR and tok.text in ("^", "**"):
            self._advance()
            self._skip_ws()
            return ("pow", base, self._parse_exponent(), tok.position)
        self.i = mark
        return base

    def _parse_exponent(self) -> Fraction:
        tok = self._peek()
        if is_integer_literal(tok):
            self._advance()
            return Fraction(int(tok.text))
        if tok.kind is TokenKind.LPAREN:
            self._advance()
            self._skip_ws()
            num = self._peek()
            if not is_integer_literal(num):
                raise self._error(Reason.MISSING_EXPONENT)
            self._advance()
            self._skip_ws()
            slash = self._peek()
            if not (slash.kind is TokenKind.OPERATOR and slash.text == "/"):
                raise self._error(Reason.BAD_EXPONENT)
            self._advance()
            self._skip_ws()
            den = self._peek()
            if not is_integer_literal(den) or int(den.text) <= 0:
                raise self._error(Reason.BAD_EXPONENT)
            self._advance()
            self._skip_ws()
            if self._peek().kind is not TokenKind.RPAREN:
                raise self._error(Reason.UNCLOSED_PAREN, tok.position)
            self._advance()
            return Fraction(int(num.text), int(den.text))
        if tok.kind is TokenKind.NUMBER:
            raise self._error(Reason.BAD_EXPONENT)
        raise self._error(Reason.MISSING_EXPONENT)

    # primary := NUMBER | NAME | '(' shift ')' | log
    def _parse_primary(self) -> Plan:
        self._skip_ws()
        tok = self._peek()
        if tok.kind is TokenKind.NUMBER:
            self._advance()
            return ("num", tok.value, tok.position)
        if tok.kind is TokenKind.IDENTIFIER:
            if tok.text.casefold() in LOG_FUNCTIONS and self._peek(1).kind is TokenKind.LPAREN:
                return self._parse_log()
            self._advance()
            return ("name", tok.text, tok.position)
        if tok.kind is TokenKind.LPAREN:
            self._advance()
            self._skip_ws()
            if self._peek().kind is TokenKind.RPAREN:
                raise self._error(Reason.MISSING_OPERAND)
            inner = self._parse_shift()
            self._skip_ws()
            if self._peek().kind is not TokenKind.RPAREN:
                raise self._error(Reason.UNCLOSED_PAREN, tok.position)
            self._advance()
            return inner
        if tok.kind is TokenKind.END:
            raise self._error(Reason.MISSING_OPERAND)
        raise self._error(Reason.UNEXPECTED_TOKEN)

    # log := ('lg' | 'ln' | 'lb') '(' 're' NUMBER [product] ')'
    def _parse_log(self) -> Plan:
        func = self._advance()
        paren = self._advance()
        self._skip_ws()
        tok = self._peek()
        if not (tok.kind is TokenKind.KEYWORD and tok.value == "re"):
            raise self._error(Reason.MISSING_RE)
        self._advance()
        self._skip_ws()
        if self._peek().kind is not TokenKind.NUMBER:
            raise self._error(Reason.MISSING_REFERENCE)
        reference = self._parse_product()
        self._skip_ws()
        if self._peek().kind is not TokenKind.RPAREN:
            raise self._error(Reason.UNCLOSED_PAREN, paren.position)
        self._advance()
        return ("log", LOG_FUNCTIONS[func.text.casefold()], reference, func.position)

    # ---- token helpers ----
    def _peek(self, ahead: int = 0) -> Token:
        return self.toks[min(self.i + ahead, len(self.toks) - 1)]

    def _advance(self) -> Token:
        tok = self.toks[self.i]
        if tok.kind is not TokenKind.END:
            self.i += 1
        return tok

    def _skip_ws(self) -> None:
        while self.toks[self.i].kind is TokenKind.WHITESPACE:
            self.i += 1

    @staticmethod
    def _starts_operand(tok: Token) -> bool:
        return tok.kind in (TokenKind.NUMBER, TokenKind.IDENTIFIER, TokenKind.LPAREN)

    def _expect_operand(self) -> None:
        if not self._starts_operand(self._peek()):
            raise self._error(Reason.MISSING_OPERAND)

    def _error(self, reason: Reason, position: Optional[int] = None) -> UnitSyntaxError:
        return UnitSyntaxError(reason, self.s, self._peek().position if position is None else position)


# ---------------- Evaluation of a plan against a given registry ----------------
class _Context:
    __slots__ = ("text", "reg", "max_exponent", "time_dim")

    def __init__(self, text: str, reg: "UnitsRegistry", settings: Settings, time_dim: Optional[Dimension]) -> None:
        self.text = text
        self.reg = reg
        self.max_exponent = settings.max_exponent
        self.time_dim = time_dim


def _eval_plan(plan: Plan, ctx: _Context) -> Unit:
    kind = plan[0]
    if kind == "one":
        return ONE
    if kind == "name":
        unit = ctx.reg.lookup(plan[1])
        if unit is None:
            raise UnknownUnitError(plan[1], ctx.text, plan[2])
        return unit

    pos = plan[-1]
    try:
        if kind == "num":
            return Unit(scale=plan[1])
        if kind == "pow":
            return power(_eval_plan(plan[1], ctx), plan[2], max_exponent=ctx.max_exponent)
        if kind == "mul":
            return multiply(_eval_plan(plan[1], ctx), _eval_plan(plan[2], ctx), max_exponent=ctx.max_exponent)
        if kind == "div":
            return divide(_eval_plan(plan[1], ctx), _eval_plan(plan[2], ctx), max_exponent=ctx.max_exponent)
        if kind == "shift":
            return _eval_shift(_eval_plan(plan[1], ctx), plan[2], ctx)
        if kind == "log":
            return log_unit(plan[1], _eval_plan(plan[2], ctx))
    except DimensionError as e:
        if e.position is None:
            e.position = pos
        raise
    raise RuntimeError(f"Invalid plan node: {plan!r}")


def _eval_shift(base: Unit, origin: Union[float, datetime], ctx: _Context) -> Unit:
    if isinstance(origin, datetime):
        if ctx.time_dim is None:
            raise DimensionError(Reason.NOT_TIME, "the unit system defines no second")
        return shift_to_instant(base, origin, ctx.time_dim)
    if base.is_shifted and not base.is_timestamp:
        # celsius @ 20 is kelvin with its zero at 293.15 K
        return shift(base.base_unit(), base.offset + origin)
    return shift(base, origin)


# ---------------- Public API with caching-safe compilation ----------------
@lru_cache(maxsize=4096)
def _compile_unit_expr(expr: str) -> Plan:
    return _UnitExprParser(expr).parse()


def parse_unit_expr(
    expr: str,
    reg: "UnitsRegistry",
    *,
    settings: Settings = DEFAULT_SETTINGS,
    time_dim: Optional[Dimension] = None,
) -> Unit:
    """
    Parse ``expr`` into a normalized ``Unit``, resolving names in ``reg``.

    ``time_dim`` is the dimension a unit must have to be anchored to a date
    (``days since 2000-01-01``); without it timestamp origins are rejected.

    Raises ``UnitSyntaxError``, ``UnknownUnitError`` or ``DimensionError``.
    """
    plan = _compile_unit_expr(expr)
    return _eval_plan(plan, _Context(expr, reg, settings, time_dim))


__all__ = ["parse_unit_expr", "LOG_FUNCTIONS"]
