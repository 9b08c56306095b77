"""
Command line interface for the Wi front end.

    wic tokens add.wi          # one token per line
    wic tokens --json add.wi   # token dump as JSON
    wic -v parse --tree add.wi # parse, print summaries and trees

Author: xwest
"""

import json
import logging

import click

from .diagnostics import format_diagnostic
from .driver import Driver, SUCCESS_MESSAGES
from .lexer import Lexer, TokenType
from .parser import Parser, to_source, dump


_handler = None


def configure_logging(verbosity: int):
    """Attach a handler for the current stderr to the package logger."""
    global _handler

    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.ERROR

    log = logging.getLogger("wic")
    if _handler is not None:
        log.removeHandler(_handler)
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    log.addHandler(_handler)
    log.setLevel(level)


def _report(error, source_text: str):
    click.secho(format_diagnostic(error.diagnostic, source_text), fg="red", err=True)


@click.group()
@click.option("-v", "--verbose", count=True, help="-v for progress, -vv for lexer/parser traces.")
@click.version_option(package_name="wic")
def main(verbose):
    """Lexer and parser for the Wi language."""
    configure_logging(verbose)


@main.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option("--json", "as_json", is_flag=True, help="Dump tokens as a JSON array.")
@click.pass_context
def tokens(ctx, source, as_json):
    """Print the tokens of SOURCE (default: stdin)."""
    text = source.read()
    lexer = Lexer(text, source.name)
    token_list = lexer.tokenize()

    if as_json:
        click.echo(json.dumps([
            {
                "type": token.type.name,
                "lexeme": token.lexeme,
                "value": token.value,
                "line": token.location.line,
                "column": token.location.column,
            }
            for token in token_list
        ], indent=2))
    else:
        for token in token_list:
            lexeme = "" if token.type == TokenType.EOF else repr(token.lexeme)
            click.echo(f"{token.location.line}:{token.location.column}\t{token.type.name}\t{lexeme}".rstrip())

    for error in lexer.errors:
        _report(error, text)
    if lexer.has_errors():
        ctx.exit(1)


@main.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option("--tree", is_flag=True, help="Also print each parsed construct as a tree.")
@click.pass_context
def parse(ctx, source, tree):
    """Parse SOURCE (default: stdin) one top-level construct at a time."""
    text = source.read()
    driver = Driver(Parser(Lexer(text, source.name)))

    failures = 0
    for result in driver.run():
        if not result.ok:
            failures += 1
            _report(result.error, text)
            continue

        rendered = to_source(result.value, export=result.kind == "export")
        click.echo(f"{SUCCESS_MESSAGES[result.kind]}: {rendered}")
        if tree:
            click.echo(dump(result.value))

    if failures:
        click.secho(f"{failures} error(s)", fg="red", err=True)
        ctx.exit(1)


if __name__ == "__main__":
    main()
