from parser.ast import Expr
from parser.parser import Parser
from parser.reporter import Reporter
from parser.scanner.scanner import Scanner
from parser.value import Value, stringify
from typing import List, Optional

from interpreter.interpreter import Interpreter


class Lox:
    """
    One source-processing run: scan, parse and evaluate a single source text.

    Scanning happens on construction. The scanner and the parser share one
    reporter, so `had_error` covers lexical and syntax errors alike. Build a
    new instance for every source; nothing carries over between runs.
    """

    def __init__(self, source: str):
        self.source = source
        self.reporter = Reporter()
        self.tokens = Scanner(source, self.reporter).scan_tokens()
        self.interpreter = Interpreter()
        self._expr: Optional[Expr] = None

    @property
    def had_error(self) -> bool:
        return self.reporter.had_error

    @property
    def errors(self) -> List[str]:
        return self.reporter.errors

    @property
    def had_runtime_error(self) -> bool:
        return self.interpreter.had_error

    @property
    def runtime_errors(self) -> List[str]:
        return self.interpreter.errors

    def parse(self) -> Expr:
        if self._expr is None:
            self._expr = Parser(self.tokens, self.reporter).parse()
        return self._expr

    def evaluate(self) -> Optional[Value]:
        expr = self.parse()
        if self.had_error:
            return None
        return self.interpreter.evaluate(expr)

    def interpret(self) -> str:
        value = self.evaluate()
        return "" if value is None else stringify(value)
