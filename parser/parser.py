import logging
from parser.ast import Binary, Expr, Grouping, Literal, Unary
from parser.error import ParseError
from parser.reporter import Reporter
from parser.scanner.token import Token, TokenKind
from parser.value import NIL
from typing import List, Optional

STATEMENT_KEYWORDS = (
    TokenKind.CLASS,
    TokenKind.FUN,
    TokenKind.VAR,
    TokenKind.FOR,
    TokenKind.IF,
    TokenKind.WHILE,
    TokenKind.PRINT,
    TokenKind.RETURN,
)


class Parser:
    """
    Recursive-descent parser for expressions.

    Each precedence level is one method; binary levels fold their operands
    left-associatively. Syntax errors are recorded in the reporter and
    unwind the current production via `ParseError`, which never escapes
    `parse`.
    """

    def __init__(self, tokens: List[Token], reporter: Optional[Reporter] = None):
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            raise ValueError("token stream must end with an EOF token")
        self.tokens = tokens
        self.reporter = reporter if reporter is not None else Reporter()
        self.current = 0

    @property
    def had_error(self) -> bool:
        return self.reporter.had_error

    def parse(self) -> Expr:
        try:
            return self.parse_expression()
        except ParseError:
            return Literal(None)
        except RecursionError:
            self.error(self.peek(), "Expression too deeply nested.")
            return Literal(None)

    def parse_expression(self) -> Expr:
        return self.parse_equality()

    def parse_binary(self, operand, *kinds: TokenKind) -> Expr:
        node = operand()
        while self.match(*kinds):
            op = self.previous()
            right = operand()
            node = Binary(node, op, right)
            logging.debug(f"folded binary {op.lexeme!r} on line {op.line}")
        return node

    def parse_equality(self) -> Expr:
        return self.parse_binary(
            self.parse_comparison, TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL
        )

    def parse_comparison(self) -> Expr:
        return self.parse_binary(
            self.parse_term,
            TokenKind.GREATER,
            TokenKind.GREATER_EQUAL,
            TokenKind.LESS,
            TokenKind.LESS_EQUAL,
        )

    def parse_term(self) -> Expr:
        return self.parse_binary(self.parse_factor, TokenKind.MINUS, TokenKind.PLUS)

    def parse_factor(self) -> Expr:
        return self.parse_binary(self.parse_unary, TokenKind.SLASH, TokenKind.STAR)

    def parse_unary(self) -> Expr:
        if self.match(TokenKind.BANG, TokenKind.MINUS):
            op = self.previous()
            return Unary(op, self.parse_unary())
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        token = self.peek()

        match token.kind:
            case TokenKind.FALSE:
                self.advance()
                return Literal(False)

            case TokenKind.TRUE:
                self.advance()
                return Literal(True)

            case TokenKind.NIL:
                self.advance()
                return Literal(NIL)

            case TokenKind.NUMBER | TokenKind.STRING:
                self.advance()
                return Literal(token.literal)

            case TokenKind.LEFT_PAREN:
                self.advance()
                inner = self.parse_expression()
                try:
                    self.expect(TokenKind.RIGHT_PAREN, "Expect ')' after expression.")
                except ParseError:
                    self.synchronize()
                    raise
                return Grouping(inner)

        raise self.error(token, "Expect expression.")

    def expect(self, kind: TokenKind, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise self.error(self.peek(), message)

    def error(self, token: Token, message: str) -> ParseError:
        return self.reporter.error_at(token, message)

    def synchronize(self):
        """Discard tokens until the start of the next statement."""
        self.advance()

        while not self.is_at_end:
            if self.previous().kind == TokenKind.SEMICOLON:
                return
            if self.peek().kind in STATEMENT_KEYWORDS:
                return
            self.advance()

    def match(self, *kinds: TokenKind) -> bool:
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def check(self, kind: TokenKind) -> bool:
        if self.is_at_end:
            return False
        return self.peek().kind == kind

    def advance(self) -> Token:
        if not self.is_at_end:
            self.current += 1
        return self.previous()

    @property
    def is_at_end(self) -> bool:
        return self.peek().kind == TokenKind.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]


def parse(tokens: List[Token], reporter: Optional[Reporter] = None) -> Expr:
    return Parser(tokens, reporter).parse()
