"""Compilation context — everything one program run builds and reads."""

from __future__ import annotations

from dataclasses import dataclass, field

from .ast import Expr, Stmt
from .errors import CapacityError

MAX_VARIABLES = 1000

TASK_EXECUTE = 2
TASK_UNINITIALIZED = 3
TASK_USELESS_ASSIGNMENT = 4
TASK_DEGREE = 5

KNOWN_TASKS: frozenset[int] = frozenset(
    {TASK_EXECUTE, TASK_UNINITIALIZED, TASK_USELESS_ASSIGNMENT, TASK_DEGREE}
)

# Call-site finding codes
CODE_UNDECLARED = 3
CODE_ARITY = 4


@dataclass(frozen=True)
class PolyHeader:
    name: str
    line: int
    params: list[str]


@dataclass(frozen=True)
class CallError:
    """Undeclared callee (code 3) or wrong argument count (code 4)."""

    code: int
    line: int


@dataclass
class Program:
    """Tables, findings and execution layout for one parsed program."""

    tasks: set[int] = field(default_factory=set)
    declarations: dict[str, list[str]] = field(default_factory=dict)
    bodies: dict[str, Expr] = field(default_factory=dict)
    first_line: dict[str, int] = field(default_factory=dict)
    duplicate_lines: list[int] = field(default_factory=list)
    invalid_monomial_lines: list[int] = field(default_factory=list)
    call_errors: list[CallError] = field(default_factory=list)
    statements: list[Stmt] = field(default_factory=list)
    symbols: dict[str, int] = field(default_factory=dict)
    inputs: list[int] = field(default_factory=list)

    def select_task(self, number: int) -> None:
        if number in KNOWN_TASKS:
            self.tasks.add(number)

    def declare(self, header: PolyHeader) -> None:
        self.declarations[header.name] = list(header.params)

    def define(self, header: PolyHeader, body: Expr) -> None:
        """Keep the first body for a name; later ones only count as duplicates."""
        if header.name in self.first_line:
            self.duplicate_lines.append(header.line)
            return
        self.first_line[header.name] = header.line
        self.bodies[header.name] = body

    def record_call(self, name: str, argc: int, line: int) -> None:
        params = self.declarations.get(name)
        if params is None:
            self.call_errors.append(CallError(CODE_UNDECLARED, line))
        elif len(params) != argc:
            self.call_errors.append(CallError(CODE_ARITY, line))

    def slot(self, name: str) -> int:
        """Storage slot for name, allocating the next free one on first sight."""
        loc = self.symbols.get(name)
        if loc is not None:
            return loc
        if len(self.symbols) >= MAX_VARIABLES:
            raise CapacityError(
                "too many variables (limit " + str(MAX_VARIABLES) + "): '" + name + "'"
            )
        loc = len(self.symbols)
        self.symbols[name] = loc
        return loc

    def has_findings(self) -> bool:
        return bool(
            self.duplicate_lines or self.invalid_monomial_lines or self.call_errors
        )

    def degree_order(self) -> list[str]:
        """Declared names by ascending first declaration line."""
        return sorted(self.first_line, key=lambda name: (self.first_line[name], name))
