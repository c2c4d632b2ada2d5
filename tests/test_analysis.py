"""Tests for the static analysis passes and the semantic checker."""

from polyc import check, parse
from polyc.analysis import (
    degree,
    polynomial_degrees,
    uninitialized_uses,
    useless_assignments,
)
from polyc.ast import (
    Add,
    AssignStmt,
    Call,
    Const,
    InputStmt,
    Mul,
    OutputStmt,
    Pow,
    Sub,
    Var,
    iter_vars,
    uses_var,
)


def _assign(var: str, line: int, *args: str) -> AssignStmt:
    return AssignStmt(var, line, Call("p", tuple(Var(a, line) for a in args), line))


# ── AST helpers ──


def test_iter_vars_left_to_right():
    expr = Call("p", (Var("a", 1), Call("q", (Const(2), Var("b", 2)), 2), Var("a", 3)), 1)
    assert [(v.name, v.line) for v in iter_vars(expr)] == [("a", 1), ("b", 2), ("a", 3)]


def test_uses_var_looks_through_operators():
    expr = Sub(Const(1), Pow(Mul(Var("x", 1), Var("y", 1)), 2))
    assert uses_var(expr, "y")
    assert not uses_var(expr, "z")


# ── Degree ──


def test_degree_rules():
    x = Var("x", 1)
    y = Var("y", 1)
    assert degree(Const(4)) == 0
    assert degree(x) == 1
    assert degree(Add(x, Mul(x, y))) == 2
    assert degree(Sub(Pow(x, 3), x)) == 3
    assert degree(Pow(Add(x, Const(1)), 2)) == 2
    assert degree(Pow(Mul(x, y), 0)) == 0


def test_call_counts_as_constant():
    assert degree(Mul(Var("x", 1), Call("p", (Var("x", 1),), 1))) == 1


def test_sums_of_variables_stay_linear():
    program = parse(
        "TASKS 5\nPOLY p(x, y) = x + y - x - y + x;\nEXECUTE INPUT a;\nINPUTS 1"
    )
    assert polynomial_degrees(program) == [("p", 1)]


def test_same_line_declarations_ordered_by_name():
    program = parse("TASKS 5\nPOLY b = x; a = x^2;\nc = 1;\nEXECUTE INPUT a;\nINPUTS 1")
    assert polynomial_degrees(program) == [("a", 2), ("b", 1), ("c", 0)]


# ── Uninitialized use ──


def test_repeated_uninitialized_reads_each_reported():
    stmts = [_assign("b", 3, "a"), _assign("c", 5, "a")]
    assert uninitialized_uses(stmts) == [3, 5]


def test_assignment_initializes_after_its_rhs():
    stmts = [_assign("a", 2, "a"), _assign("b", 3, "a")]
    assert uninitialized_uses(stmts) == [2]


def test_output_does_not_initialize():
    stmts = [OutputStmt("a", 1), _assign("b", 2, "a")]
    assert uninitialized_uses(stmts) == [2]


def test_input_initializes():
    stmts = [InputStmt("a", 1), _assign("b", 2, "a", "b")]
    assert uninitialized_uses(stmts) == [2]


# ── Useless assignment ──


def test_assignment_at_end_is_useless():
    stmts = [InputStmt("a", 1), _assign("b", 2, "a")]
    assert useless_assignments(stmts) == [2]


def test_output_uses_assignment():
    stmts = [_assign("b", 1, "a"), OutputStmt("b", 2)]
    assert useless_assignments(stmts) == []


def test_input_kills_assignment():
    stmts = [_assign("b", 1, "a"), InputStmt("b", 2), OutputStmt("b", 3)]
    assert useless_assignments(stmts) == [1]


def test_self_referencing_redefinition_uses():
    stmts = [_assign("b", 1, "a"), _assign("b", 2, "b"), OutputStmt("b", 3)]
    assert useless_assignments(stmts) == []


def test_redefinition_stops_scan():
    stmts = [
        _assign("b", 1, "a"),
        _assign("b", 2, "a"),
        _assign("c", 3, "b"),
        OutputStmt("c", 4),
    ]
    assert useless_assignments(stmts) == [1]


def test_read_by_other_assignment():
    stmts = [_assign("b", 1, "a"), _assign("c", 2, "b"), OutputStmt("c", 3)]
    assert useless_assignments(stmts) == []


def test_unrelated_statements_do_not_stop_scan():
    stmts = [
        _assign("b", 1, "a"),
        InputStmt("c", 2),
        OutputStmt("c", 3),
        _assign("d", 4, "c"),
        OutputStmt("b", 5),
    ]
    assert useless_assignments(stmts) == [4]


# ── Semantic checker ──


def test_clean_program_has_no_report():
    assert check("TASKS 2\nPOLY p = x;\nEXECUTE INPUT a;\nINPUTS 1") is None


def test_report_format_and_sorting():
    report = check("TASKS 2\nPOLY p = x;\nEXECUTE\nb = q(1);\na = q(1);\nINPUTS 1")
    assert report is not None
    assert report.code == 3
    assert report.lines == [4, 5]
    assert report.format() == "Semantic Error Code 3: 4 5"


def test_invalid_monomial_outranks_arity():
    report = check("TASKS 2\nPOLY p(x, y) = z;\nEXECUTE\nb = p(1);\nINPUTS 1")
    assert report is not None
    assert report.format() == "Semantic Error Code 2: 2"
