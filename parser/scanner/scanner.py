import logging
from typing import List, Optional, Tuple

from ..reporter import Reporter
from ..value import Value
from .token import KEYWORDS, Token, TokenKind


def is_digit(c: Optional[str]) -> bool:
    return c is not None and "0" <= c <= "9"


def is_alpha(c: Optional[str]) -> bool:
    return c is not None and (c.isalpha() or c == "_")


def is_alphanumeric(c: Optional[str]) -> bool:
    return c is not None and (c.isalnum() or c == "_")


def is_surrogate(c: str) -> bool:
    return "\ud800" <= c <= "\udfff"


class Scanner:
    """
    Turns source text into tokens, one at a time.

    Iterating a scanner yields every token in source order and finishes
    with a single EOF token. Malformed input never stops the scan: each
    problem is recorded in the reporter and scanning picks up at the next
    character.
    """

    LEXEME_TOKEN_MAP = {k.value: k for k in TokenKind}

    def __init__(self, source: str, reporter: Optional[Reporter] = None):
        self.source = source
        self.reporter = reporter if reporter is not None else Reporter()
        self.length = len(source)
        self.start = 0
        self.current = 0
        self.line = 1
        self.finished = False

    def __iter__(self):
        return self

    def __next__(self) -> Token:
        if self.finished:
            raise StopIteration()
        token = self.next_token
        logging.debug(f"scanned {token.kind} {token.lexeme!r} on line {token.line}")
        return token

    def scan_tokens(self) -> List[Token]:
        return list(self)

    @property
    def next_token(self) -> Token:
        while not self.is_at_end:
            self.start = self.current
            token = self.scan_token()
            if token is not None:
                return token

        self.finished = True
        return Token(TokenKind.EOF, "", None, self.line)

    def scan_token(self) -> Optional[Token]:
        c = self.advance()

        match c:
            case "(" | ")" | "{" | "}" | "," | "." | "-" | "+" | ";" | "*":
                return self.make_token(self.LEXEME_TOKEN_MAP[c])

            case "!" | "=" | "<" | ">":
                self.match("=")
                return self.make_token(self.LEXEME_TOKEN_MAP[self.lexeme])

            case "/":
                if self.match("/"):
                    while self.peek() is not None and self.peek() != "\n":
                        self.advance()
                    return None
                return self.make_token(TokenKind.SLASH)

            case "\n":
                self.line += 1
                return None

            case " " | "\r" | "\t":
                return None

            case '"':
                return self.scan_string()

            case c if is_digit(c):
                return self.scan_numeric()

            case c if is_alpha(c):
                return self.scan_identifier()

            case c if is_surrogate(c):
                self.reporter.error(
                    self.line, f"Invalid UTF-8 codepoint at: {self.start}"
                )
                return None

        self.reporter.error(self.line, f"Unexpected character: {c}")
        return None

    def scan_string(self) -> Optional[Token]:
        # strings may span lines
        while self.peek() is not None and self.peek() != '"':
            if self.peek() == "\n":
                self.line += 1
            self.advance()

        if self.is_at_end:
            self.reporter.error(self.line, "Unterminated string.")
            return None

        self.advance()

        value = self.source[self.start + 1 : self.current - 1]
        for i, c in enumerate(value):
            if is_surrogate(c):
                self.reporter.error(
                    self.line, f"Invalid UTF-8 codepoint at: {self.start + 1 + i}"
                )
                return None

        return self.make_token(TokenKind.STRING, value)

    def scan_numeric(self) -> Token:
        while is_digit(self.peek()):
            self.advance()

        # a trailing "." is left for the next token
        if self.peek() == "." and is_digit(self.peek_next()):
            self.advance()
            while is_digit(self.peek()):
                self.advance()

        return self.make_token(TokenKind.NUMBER, float(self.lexeme))

    def scan_identifier(self) -> Token:
        while is_alphanumeric(self.peek()):
            self.advance()

        return self.make_token(KEYWORDS.get(self.lexeme, TokenKind.IDENTIFIER))

    @property
    def is_at_end(self) -> bool:
        return self.current >= self.length

    @property
    def lexeme(self) -> str:
        return self.source[self.start : self.current]

    def peek(self) -> Optional[str]:
        if self.is_at_end:
            return None
        return self.source[self.current]

    def peek_next(self) -> Optional[str]:
        if self.current + 1 >= self.length:
            return None
        return self.source[self.current + 1]

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def match(self, expected: str) -> bool:
        if self.peek() != expected:
            return False
        self.current += 1
        return True

    def make_token(self, kind: TokenKind, literal: Optional[Value] = None) -> Token:
        return Token(kind, self.lexeme, literal, self.line)


def scan(source: str, reporter: Optional[Reporter] = None) -> Tuple[List[Token], Reporter]:
    scanner = Scanner(source, reporter)
    return scanner.scan_tokens(), scanner.reporter
