from dataclasses import dataclass

from colorama import Fore, Style


@dataclass
class LoxError(Exception):
    message: str
    line: int
    where: str = ""

    def __str__(self):
        return f"[line {self.line}] Error{self.where}: {self.message}"


class LexicalError(LoxError):
    pass


class ParseError(LoxError):
    pass


def format_error(err, color: bool = True) -> str:
    if not color:
        return str(err)
    red = Fore.RED + Style.BRIGHT
    reset = Style.RESET_ALL
    return f"{red}{str(err)}{reset}"
