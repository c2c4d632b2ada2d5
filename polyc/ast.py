"""Polynomial-language AST — expression and statement nodes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union


# ============================================================
# EXPRESSIONS
# ============================================================


@dataclass(frozen=True)
class Const:
    """Integer literal."""

    value: int


@dataclass(frozen=True)
class Var:
    """Variable reference; line is where the name was written."""

    name: str
    line: int


@dataclass(frozen=True)
class Add:
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Sub:
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Mul:
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Pow:
    """base ^ exponent, exponent is always a literal."""

    base: Expr
    exponent: int


@dataclass(frozen=True)
class Call:
    """name(arg, ...) — args are Var, Const or nested Call."""

    name: str
    args: tuple[Expr, ...]
    line: int


Expr = Union[Const, Var, Add, Sub, Mul, Pow, Call]


# ============================================================
# STATEMENTS
# ============================================================


@dataclass(frozen=True)
class InputStmt:
    """INPUT var;"""

    var: str
    line: int


@dataclass(frozen=True)
class OutputStmt:
    """OUTPUT var;"""

    var: str
    line: int


@dataclass(frozen=True)
class AssignStmt:
    """var = call;"""

    var: str
    line: int
    rhs: Call


Stmt = Union[InputStmt, OutputStmt, AssignStmt]


# ============================================================
# TRAVERSAL HELPERS
# ============================================================


def iter_vars(expr: Expr) -> Iterator[Var]:
    """Yield Var leaves left to right."""
    if isinstance(expr, Const):
        return
    if isinstance(expr, Var):
        yield expr
        return
    if isinstance(expr, (Add, Sub, Mul)):
        yield from iter_vars(expr.left)
        yield from iter_vars(expr.right)
        return
    if isinstance(expr, Pow):
        yield from iter_vars(expr.base)
        return
    if isinstance(expr, Call):
        for arg in expr.args:
            yield from iter_vars(arg)
        return
    raise TypeError("unhandled expression node: " + type(expr).__name__)


def uses_var(expr: Expr, name: str) -> bool:
    for var in iter_vars(expr):
        if var.name == name:
            return True
    return False
