import logging
import math
from dataclasses import dataclass
from parser.ast import Binary, Expr, Grouping, Literal, Unary
from parser.scanner.token import Token, TokenKind
from parser.value import Value, is_equal, stringify, type_name
from typing import List, Optional, Tuple

ARITHMETIC = {
    TokenKind.MINUS: lambda a, b: a - b,
    TokenKind.STAR: lambda a, b: a * b,
}

COMPARISON = {
    TokenKind.GREATER: lambda a, b: a > b,
    TokenKind.GREATER_EQUAL: lambda a, b: a >= b,
    TokenKind.LESS: lambda a, b: a < b,
    TokenKind.LESS_EQUAL: lambda a, b: a <= b,
}


@dataclass
class RuntimeTypeError(Exception):
    op: Token
    operands: Tuple[Value, ...]

    def __str__(self):
        rendered = ", ".join(describe(v) for v in self.operands)
        return (
            f"[line {self.op.line}] Incompatible types for operator "
            f"{self.op.kind}: {rendered}"
        )


def is_number(v) -> bool:
    return isinstance(v, float)


def is_compatible(op: Token, left: Value, right: Value) -> bool:
    match op.kind:
        case TokenKind.PLUS:
            return (is_number(left) and is_number(right)) or (
                isinstance(left, str) and isinstance(right, str)
            )
        case TokenKind.MINUS | TokenKind.SLASH | TokenKind.STAR:
            return is_number(left) and is_number(right)
        case (
            TokenKind.GREATER
            | TokenKind.GREATER_EQUAL
            | TokenKind.LESS
            | TokenKind.LESS_EQUAL
        ):
            return is_number(left) and is_number(right)
        case TokenKind.BANG_EQUAL | TokenKind.EQUAL_EQUAL:
            return True
    return False


def describe(v: Value) -> str:
    shown = repr(v) if isinstance(v, str) else stringify(v)
    return f"{shown} ({type_name(v)})"


def divide(a: float, b: float) -> float:
    if b != 0.0:
        return a / b
    if math.isnan(a) or a == 0.0:
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


class Interpreter:
    """
    Tree-walking evaluator.

    `evaluate` returns the value of an expression, or None when there is no
    value: either the expression is an absent placeholder literal or an
    operator was applied to operands it does not accept. The second case
    also records a message in `errors`; nil is the NIL value, never None.
    """

    def __init__(self):
        self.errors: List[str] = []

    @property
    def had_error(self) -> bool:
        return len(self.errors) > 0

    def evaluate(self, expr: Expr) -> Optional[Value]:
        try:
            value = self.visit(expr)
        except RuntimeTypeError as e:
            logging.debug(f"evaluation failed: {e}")
            self.errors.append(str(e))
            return None
        except RecursionError:
            logging.debug("evaluation failed: recursion limit reached")
            self.errors.append("Expression too deeply nested to evaluate.")
            return None

        logging.debug(f"evaluated to {value!r}")
        return value

    def visit(self, expr: Expr) -> Optional[Value]:
        match expr:
            case Literal(value=value):
                return value
            case Grouping(expression=inner):
                return self.visit(inner)
            case Unary(op=op, right=right):
                return self.visit_unary(op, right)
            case Binary(left=left, op=op, right=right):
                return self.visit_binary(left, op, right)

        raise TypeError(f"unknown expression node: {expr!r}")

    def visit_unary(self, op: Token, right: Expr) -> Optional[Value]:
        value = self.visit(right)
        if value is None:
            return None

        match op.kind, value:
            case TokenKind.MINUS, float():
                return -value
            case TokenKind.BANG, bool():
                return not value

        raise RuntimeTypeError(op, (value,))

    def visit_binary(self, left: Expr, op: Token, right: Expr) -> Optional[Value]:
        a = self.visit(left)
        b = self.visit(right)
        if a is None or b is None:
            return None

        if not is_compatible(op, a, b):
            raise RuntimeTypeError(op, (a, b))

        match op.kind:
            case TokenKind.PLUS:
                return a + b
            case TokenKind.SLASH:
                return divide(a, b)
            case TokenKind.EQUAL_EQUAL:
                return is_equal(a, b)
            case TokenKind.BANG_EQUAL:
                return not is_equal(a, b)
            case kind if kind in ARITHMETIC:
                return ARITHMETIC[kind](a, b)
            case kind if kind in COMPARISON:
                return COMPARISON[kind](a, b)

        raise RuntimeTypeError(op, (a, b))
