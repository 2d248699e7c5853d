import enum
from dataclasses import dataclass
from typing import Optional

from ..value import Value, stringify


class TokenKind(enum.Enum):
    # --- Single-character tokens ---
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    COMMA = ","
    DOT = "."
    MINUS = "-"
    PLUS = "+"
    SEMICOLON = ";"
    SLASH = "/"
    STAR = "*"

    # --- One or two character tokens ---
    BANG = "!"
    BANG_EQUAL = "!="
    EQUAL = "="
    EQUAL_EQUAL = "=="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="

    # --- Literals ---
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    # --- Keywords ---
    AND = "and"
    CLASS = "class"
    ELSE = "else"
    FALSE = "false"
    FUN = "fun"
    FOR = "for"
    IF = "if"
    NIL = "nil"
    OR = "or"
    PRINT = "print"
    RETURN = "return"
    SUPER = "super"
    THIS = "this"
    TRUE = "true"
    VAR = "var"
    WHILE = "while"

    # --- Special ---
    EOF = "EOF"

    def __str__(self):
        return self.name


KEYWORDS = {
    kind.value: kind
    for kind in (
        TokenKind.AND,
        TokenKind.CLASS,
        TokenKind.ELSE,
        TokenKind.FALSE,
        TokenKind.FUN,
        TokenKind.FOR,
        TokenKind.IF,
        TokenKind.NIL,
        TokenKind.OR,
        TokenKind.PRINT,
        TokenKind.RETURN,
        TokenKind.SUPER,
        TokenKind.THIS,
        TokenKind.TRUE,
        TokenKind.VAR,
        TokenKind.WHILE,
    )
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    literal: Optional[Value]
    line: int

    def __str__(self):
        literal = "null" if self.literal is None else stringify(self.literal)
        return f"{self.kind} {self.lexeme} {literal}"
