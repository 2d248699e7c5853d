import logging
import shutil
import sys
from parser.ast import format_tree, print_ast
from parser.error import format_error

import click

from interpreter.session import Lox

EXIT_DATA_ERROR = 65
EXIT_SOFTWARE_ERROR = 70

# deeply nested expressions recurse once per level in every stage
RECURSION_LIMIT = 10000


def read_source(sourcefile: str, print_source: bool) -> str:
    # undecodable bytes become lone surrogates the scanner reports
    with open(sourcefile, "r", encoding="utf-8", errors="surrogateescape") as f:
        source = f.read()

    if print_source:
        click.echo(source.encode("utf-8", errors="replace"))
        click.echo("-" * shutil.get_terminal_size().columns + "\n")

    return source


def report_errors(errors, color: bool) -> None:
    for err in errors:
        click.echo(format_error(err, color), err=True)


def render(expr, tree: bool, color: bool) -> str:
    try:
        return format_tree(expr) if tree else print_ast(expr)
    except RecursionError:
        report_errors(["Expression too deeply nested to print."], color)
        sys.exit(EXIT_SOFTWARE_ERROR)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Logging level for pipeline internals.",
)
@click.option(
    "--color/--no-color", default=True, help="Whether or not to colorize errors."
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, color: bool) -> None:
    logging.basicConfig(level=log_level.upper())
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))
    ctx.obj = {"color": color}


@cli.command()
@click.argument("sourcefile", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--print-source/--no-print-source",
    default=False,
    help="Whether or not to print the source before scanning.",
)
@click.pass_obj
def tokenize(obj: dict, sourcefile: str, print_source: bool) -> None:
    lox = Lox(read_source(sourcefile, print_source))

    for token in lox.tokens:
        click.echo(token)

    report_errors(lox.errors, obj["color"])
    if lox.had_error:
        sys.exit(EXIT_DATA_ERROR)


@cli.command()
@click.argument("sourcefile", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--print-source/--no-print-source",
    default=False,
    help="Whether or not to print the source.",
)
@click.option("--tree", is_flag=True, help="Print the AST as a tree.")
@click.pass_obj
def parse(obj: dict, sourcefile: str, print_source: bool, tree: bool) -> None:
    lox = Lox(read_source(sourcefile, print_source))
    expr = lox.parse()

    report_errors(lox.errors, obj["color"])
    if lox.had_error:
        sys.exit(EXIT_DATA_ERROR)

    click.echo(render(expr, tree, obj["color"]))


@cli.command()
@click.argument("sourcefile", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--print-source/--no-print-source",
    default=False,
    help="Whether or not to print the source.",
)
@click.pass_obj
def evaluate(obj: dict, sourcefile: str, print_source: bool) -> None:
    lox = Lox(read_source(sourcefile, print_source))
    result = lox.interpret()

    report_errors(lox.errors, obj["color"])
    if lox.had_error:
        sys.exit(EXIT_DATA_ERROR)

    report_errors(lox.runtime_errors, obj["color"])
    if lox.had_runtime_error:
        sys.exit(EXIT_SOFTWARE_ERROR)

    click.echo(result)


@cli.command()
@click.argument("sourcefile", type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def run(obj: dict, sourcefile: str) -> None:
    lox = Lox(read_source(sourcefile, False))
    expr = lox.parse()

    report_errors(lox.errors, obj["color"])
    if lox.had_error:
        sys.exit(EXIT_DATA_ERROR)

    click.echo(f"< {render(expr, False, obj['color'])}")


@cli.command()
@click.pass_obj
def prompt(obj: dict) -> None:
    while True:
        click.echo("> ", nl=False)
        line = sys.stdin.readline()
        if line == "":
            click.echo()
            break

        lox = Lox(line)
        result = lox.interpret()
        report_errors(lox.errors, obj["color"])
        report_errors(lox.runtime_errors, obj["color"])
        if not (lox.had_error or lox.had_runtime_error):
            click.echo(f"< {result}")


if __name__ == "__main__":
    cli()
