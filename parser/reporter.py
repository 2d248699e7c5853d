import logging
from typing import List

from .error import LexicalError, LoxError, ParseError
from .scanner.token import Token, TokenKind


class Reporter:
    """
    Collects the diagnostics of a single run.

    One reporter is handed to both the scanner and the parser so that
    `had_error` reflects everything either stage found. Nothing is printed
    here; callers decide how and where to show `errors`.
    """

    def __init__(self):
        self.errors: List[str] = []

    @property
    def had_error(self) -> bool:
        return len(self.errors) > 0

    def report(self, err: LoxError) -> LoxError:
        message = str(err)
        logging.debug(f"recorded {type(err).__name__}: {message}")
        self.errors.append(message)
        return err

    def error(self, line: int, message: str) -> LexicalError:
        err = LexicalError(message, line)
        self.report(err)
        return err

    def error_at(self, token: Token, message: str) -> ParseError:
        if token.kind == TokenKind.EOF:
            where = " at the end"
        else:
            where = f" at '{token.lexeme}'"

        err = ParseError(message, token.line, where)
        self.report(err)
        return err

    def reset(self):
        self.errors.clear()
