"""Polynomial-language compiler and interpreter — public API."""

from __future__ import annotations

from typing import Iterable, Mapping

from .ast import Expr
from .check import SemanticReport, check as check_program
from .context import Program
from .errors import SYNTAX_ERROR_MESSAGE, ParseError as ParseError, PolycError as PolycError
from .parse import Parser
from .runtime import RunResult, run as run_program
from .tokens import tokenize


def parse(source: str) -> Program:
    """Parse a whole program into its tables, statements and findings."""
    return Parser(tokenize(source)).parse_program()


def parse_expression(
    source: str, declarations: Mapping[str, list[str]] | None = None
) -> tuple[Expr, Program]:
    """Parse one standalone polynomial expression.

    Call sites are checked against declarations; findings land on the
    returned Program.
    """
    program = Program()
    if declarations is not None:
        for name, params in declarations.items():
            program.declarations[name] = list(params)
    expr = Parser(tokenize(source), program).parse_standalone_expression()
    return expr, program


def check(source: str) -> SemanticReport | None:
    """Parse source and return its semantic report (None = clean)."""
    return check_program(parse(source))


def run(source: str, tasks: Iterable[int] | None = None) -> RunResult:
    """Parse, check and run source. A syntax error yields exit code 1."""
    try:
        program = parse(source)
    except ParseError:
        return RunResult(1, [SYNTAX_ERROR_MESSAGE])
    return run_program(program, tasks)
