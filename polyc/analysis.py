"""Static analysis: uninitialized_uses, useless_assignments, polynomial degrees."""

from __future__ import annotations

from .ast import (
    Add,
    AssignStmt,
    Call,
    Const,
    Expr,
    InputStmt,
    Mul,
    OutputStmt,
    Pow,
    Stmt,
    Sub,
    Var,
    iter_vars,
    uses_var,
)
from .check import format_line_report
from .context import Program

UNINITIALIZED_LABEL = "Warning Code 1"
USELESS_ASSIGNMENT_LABEL = "Warning Code 2"


# ── Uninitialized use ────────────────────────────────────────


def uninitialized_uses(stmts: list[Stmt]) -> list[int]:
    """Lines where an assignment reads a variable nothing has set yet."""
    initialized: set[str] = set()
    lines: list[int] = []
    for stmt in stmts:
        if isinstance(stmt, InputStmt):
            initialized.add(stmt.var)
        elif isinstance(stmt, AssignStmt):
            for var in iter_vars(stmt.rhs):
                if var.name not in initialized:
                    lines.append(var.line)
            initialized.add(stmt.var)
        elif isinstance(stmt, OutputStmt):
            continue
        else:
            raise TypeError("unhandled statement node: " + type(stmt).__name__)
    return sorted(lines)


# ── Useless assignment ───────────────────────────────────────


def useless_assignments(stmts: list[Stmt]) -> list[int]:
    """Lines of assignments whose value nothing later reads."""
    lines: list[int] = []
    for i, stmt in enumerate(stmts):
        if isinstance(stmt, AssignStmt) and not _is_used_later(stmt.var, stmts[i + 1 :]):
            lines.append(stmt.line)
    return sorted(lines)


def _is_used_later(name: str, rest: list[Stmt]) -> bool:
    """Scan forward until name is read, overwritten, or re-input."""
    for stmt in rest:
        if isinstance(stmt, AssignStmt):
            if stmt.var == name:
                # Redefinition ends the scan; its own RHS may still read name
                return uses_var(stmt.rhs, name)
            if uses_var(stmt.rhs, name):
                return True
        elif isinstance(stmt, InputStmt):
            if stmt.var == name:
                return False
        elif isinstance(stmt, OutputStmt):
            if stmt.var == name:
                return True
        else:
            raise TypeError("unhandled statement node: " + type(stmt).__name__)
    return False


# ── Degree ───────────────────────────────────────────────────


def degree(expr: Expr) -> int:
    """Structural degree. Calls count as constants."""
    if isinstance(expr, Const):
        return 0
    if isinstance(expr, Var):
        return 1
    if isinstance(expr, (Add, Sub)):
        return max(degree(expr.left), degree(expr.right))
    if isinstance(expr, Mul):
        return degree(expr.left) + degree(expr.right)
    if isinstance(expr, Pow):
        return degree(expr.base) * expr.exponent
    if isinstance(expr, Call):
        return 0
    raise TypeError("unhandled expression node: " + type(expr).__name__)


def polynomial_degrees(program: Program) -> list[tuple[str, int]]:
    """(name, degree) for every declared polynomial, in declaration order."""
    return [(name, degree(program.bodies[name])) for name in program.degree_order()]


# ── Reports ──────────────────────────────────────────────────


def uninitialized_report(program: Program) -> list[str]:
    lines = uninitialized_uses(program.statements)
    if not lines:
        return []
    return [format_line_report(UNINITIALIZED_LABEL, lines)]


def useless_assignment_report(program: Program) -> list[str]:
    lines = useless_assignments(program.statements)
    if not lines:
        return []
    return [format_line_report(USELESS_ASSIGNMENT_LABEL, lines)]


def degree_report(program: Program) -> list[str]:
    return [name + ": " + str(d) for name, d in polynomial_degrees(program)]
