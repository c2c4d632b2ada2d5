"""Polynomial-language interpreter and task driver."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from .analysis import degree_report, uninitialized_report, useless_assignment_report
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
)
from .check import check
from .context import (
    MAX_VARIABLES,
    TASK_DEGREE,
    TASK_EXECUTE,
    TASK_UNINITIALIZED,
    TASK_USELESS_ASSIGNMENT,
    Program,
)
from .errors import InputExhausted
from .int32 import wrapping_add, wrapping_mul, wrapping_pow, wrapping_sub

log = logging.getLogger(__name__)


# ============================================================
# Evaluation
# ============================================================


def evaluate(expr: Expr, env: Mapping[str, int], program: Program) -> int:
    """Value of expr with variables bound by env; unbound names read as 0."""
    if isinstance(expr, Const):
        return expr.value
    if isinstance(expr, Var):
        return env.get(expr.name, 0)
    if isinstance(expr, Add):
        return wrapping_add(
            evaluate(expr.left, env, program), evaluate(expr.right, env, program)
        )
    if isinstance(expr, Sub):
        return wrapping_sub(
            evaluate(expr.left, env, program), evaluate(expr.right, env, program)
        )
    if isinstance(expr, Mul):
        return wrapping_mul(
            evaluate(expr.left, env, program), evaluate(expr.right, env, program)
        )
    if isinstance(expr, Pow):
        return wrapping_pow(evaluate(expr.base, env, program), expr.exponent)
    if isinstance(expr, Call):
        args = [evaluate(arg, env, program) for arg in expr.args]
        return call_polynomial(expr.name, args, program)
    raise TypeError("unhandled expression node: " + type(expr).__name__)


def call_polynomial(name: str, args: list[int], program: Program) -> int:
    """Evaluate a declared body in a fresh scope holding only its parameters."""
    params = program.declarations.get(name)
    body = program.bodies.get(name)
    if params is None or body is None:
        return 0
    env: dict[str, int] = {}
    for i, param in enumerate(params):
        env[param] = args[i] if i < len(args) else 0
    return evaluate(body, env, program)


# ============================================================
# Execution store
# ============================================================


class Runtime:
    """Executes the statement list against a flat integer store."""

    def __init__(self, program: Program):
        self.program: Program = program
        self.mem: list[int] = [0] * MAX_VARIABLES
        self.next_input: int = 0
        self.output: list[str] = []

    def environment(self) -> dict[str, int]:
        return {name: self.mem[loc] for name, loc in self.program.symbols.items()}

    def read_input(self, line: int) -> int:
        inputs = self.program.inputs
        if self.next_input >= len(inputs):
            raise InputExhausted("no input values left", line)
        value = inputs[self.next_input]
        self.next_input += 1
        return value

    def execute(self, stmt: Stmt) -> None:
        if isinstance(stmt, InputStmt):
            self.mem[self.program.slot(stmt.var)] = self.read_input(stmt.line)
        elif isinstance(stmt, OutputStmt):
            self.output.append(str(self.mem[self.program.slot(stmt.var)]))
        elif isinstance(stmt, AssignStmt):
            value = evaluate(stmt.rhs, self.environment(), self.program)
            self.mem[self.program.slot(stmt.var)] = value
        else:
            raise TypeError("unhandled statement node: " + type(stmt).__name__)

    def run(self) -> list[str]:
        for stmt in self.program.statements:
            self.execute(stmt)
        return self.output


# ============================================================
# Task driver
# ============================================================


@dataclass
class RunResult:
    exit_code: int
    lines: list[str] = field(default_factory=list)

    @property
    def stdout(self) -> str:
        return "".join(line + "\n" for line in self.lines)


def run(program: Program, tasks: Iterable[int] | None = None) -> RunResult:
    """Check a parsed program, then run the selected tasks in fixed order.

    tasks overrides the program's own TASKS selection when given.
    """
    report = check(program)
    if report is not None:
        return RunResult(0, [report.format()])
    selected = set(tasks) if tasks is not None else program.tasks
    log.debug("running tasks %s", sorted(selected))
    lines: list[str] = []
    if TASK_EXECUTE in selected:
        lines.extend(Runtime(program).run())
    if TASK_UNINITIALIZED in selected:
        lines.extend(uninitialized_report(program))
    if TASK_USELESS_ASSIGNMENT in selected:
        lines.extend(useless_assignment_report(program))
    if TASK_DEGREE in selected:
        lines.extend(degree_report(program))
    return RunResult(0, lines)
