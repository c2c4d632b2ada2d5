"""Semantic checker — gates execution on the findings collected while parsing."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .context import CODE_ARITY, CODE_UNDECLARED, Program

log = logging.getLogger(__name__)

CODE_DUPLICATE = 1
CODE_INVALID_MONOMIAL = 2


@dataclass(frozen=True)
class SemanticReport:
    """The single highest-priority category of findings."""

    code: int
    lines: list[int]

    def format(self) -> str:
        return format_line_report("Semantic Error Code " + str(self.code), self.lines)


def format_line_report(label: str, lines: list[int]) -> str:
    """label followed by the lines, each preceded by a space."""
    parts = [label + ":"]
    for line in lines:
        parts.append(str(line))
    return " ".join(parts)


def check(program: Program) -> SemanticReport | None:
    """Return the report for the first non-empty category, or None if clean.

    Priority: duplicate declarations, invalid monomials, undeclared
    polynomial calls, argument-count mismatches.
    """
    if program.duplicate_lines:
        return _report(CODE_DUPLICATE, program.duplicate_lines)
    if program.invalid_monomial_lines:
        return _report(CODE_INVALID_MONOMIAL, program.invalid_monomial_lines)
    undeclared = [e.line for e in program.call_errors if e.code == CODE_UNDECLARED]
    if undeclared:
        return _report(CODE_UNDECLARED, undeclared)
    arity = [e.line for e in program.call_errors if e.code == CODE_ARITY]
    if arity:
        return _report(CODE_ARITY, arity)
    log.debug("no semantic findings")
    return None


def _report(code: int, lines: list[int]) -> SemanticReport:
    log.debug("semantic error code %d on %d line(s)", code, len(lines))
    return SemanticReport(code, sorted(lines))
