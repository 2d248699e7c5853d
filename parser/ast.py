from dataclasses import dataclass
from typing import List, Optional, Union

from .scanner.token import Token
from .value import Value, stringify


@dataclass(frozen=True)
class Literal:
    value: Optional[Value]


@dataclass(frozen=True)
class Grouping:
    expression: "Expr"


@dataclass(frozen=True)
class Unary:
    op: Token  # '-', '!'
    right: "Expr"


@dataclass(frozen=True)
class Binary:
    left: "Expr"
    op: Token
    right: "Expr"


Expr = Union[Literal, Grouping, Unary, Binary]


def parenthesize(name: str, *exprs: Expr) -> str:
    parts = [name]
    for e in exprs:
        parts.append(print_ast(e))
    return f"({' '.join(parts)})"


def print_ast(expr: Expr) -> str:
    """Render an expression fully parenthesized, e.g. `(+ 1.0 2.0)`."""
    match expr:
        case Literal(value=None):
            return "null"
        case Literal(value=value):
            return stringify(value)
        case Grouping(expression=inner):
            return parenthesize("group", inner)
        case Unary(op=op, right=right):
            return parenthesize(op.lexeme, right)
        case Binary(left=left, op=op, right=right):
            return parenthesize(op.lexeme, left, right)

    raise TypeError(f"unknown expression node: {expr!r}")


def format_tree_node(
    node: Expr, lines: List[str], is_last: bool = True, prefix: str = ""
) -> None:
    """
    Append a hierarchical rendering of an AST node to `lines`.

    Args:
        node: The AST node to render
        lines: Output lines, one per node
        is_last: Whether this is the last child of its parent
        prefix: Prefix string for the current line
    """
    connector = "└── " if is_last else "├── "
    current_prefix = prefix + connector
    next_prefix = prefix + ("    " if is_last else "│   ")

    match node:
        case Literal(value=None):
            lines.append(f"{current_prefix}Literal: null")

        case Literal(value=str() as value):
            lines.append(f"{current_prefix}Literal: '{value}'")

        case Literal(value=value):
            lines.append(f"{current_prefix}Literal: {stringify(value)}")

        case Grouping(expression=inner):
            lines.append(f"{current_prefix}Grouping")
            format_tree_node(inner, lines, True, next_prefix)

        case Unary(op=op, right=right):
            lines.append(f"{current_prefix}Unary: {op.lexeme}")
            format_tree_node(right, lines, True, next_prefix)

        case Binary(left=left, op=op, right=right):
            lines.append(f"{current_prefix}Binary: {op.kind}")
            lines.append(f"{next_prefix}├── Left:")
            format_tree_node(left, lines, True, next_prefix + "│   ")
            lines.append(f"{next_prefix}└── Right:")
            format_tree_node(right, lines, True, next_prefix + "    ")

        case _:
            lines.append(f"{current_prefix}Unknown node: {node.__class__.__name__}")


def format_tree(node: Expr) -> str:
    """Render the AST starting from the given node as a tree."""
    lines: List[str] = []
    format_tree_node(node, lines)
    return "\n".join(lines)
