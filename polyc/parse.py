"""Polynomial-language parser — recursive descent, one method per grammar production.

The parser is also the builder: it fills the `Program` tables while it
reads, and records semantic findings (duplicate declarations, invalid
monomials, bad call sites) without stopping. Only a token that does not fit
the grammar stops it, by raising `ParseError`.
"""

from __future__ import annotations

import logging

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
from .context import PolyHeader, Program
from .errors import ParseError
from .int32 import parse_int
from .tokens import (
    TK_COMMA,
    TK_EOF,
    TK_EQUAL,
    TK_EXECUTE,
    TK_ID,
    TK_INPUT,
    TK_INPUTS,
    TK_LPAREN,
    TK_MINUS,
    TK_NUM,
    TK_OUTPUT,
    TK_PLUS,
    TK_POLY,
    TK_POWER,
    TK_RPAREN,
    TK_SEMICOLON,
    TK_TASKS,
    Token,
    TokenStream,
)

log = logging.getLogger(__name__)

IMPLICIT_PARAM = "x"

STATEMENT_STARTS: set[str] = {TK_INPUT, TK_OUTPUT, TK_ID}
FACTOR_STARTS: set[str] = {TK_NUM, TK_ID, TK_LPAREN}


class Parser:
    """Recursive descent parser and table builder."""

    def __init__(self, tokens: list[Token], program: Program | None = None):
        self.stream: TokenStream = TokenStream(tokens)
        self.program: Program = program if program is not None else Program()
        self.in_declaration: bool = False
        self.current_params: list[str] = []

    # ── Helpers ──────────────────────────────────────────────

    def peek_type(self, k: int = 1) -> str:
        return self.stream.peek(k).type

    def at(self, type_: str) -> bool:
        return self.stream.peek(1).type == type_

    def expect(self, type_: str) -> Token:
        tok = self.stream.get_token()
        if tok.type != type_:
            raise ParseError(type_, _describe(tok), tok.line)
        return tok

    def error(self, expected: str) -> ParseError:
        tok = self.stream.peek(1)
        return ParseError(expected, _describe(tok), tok.line)

    # ── Top Level ────────────────────────────────────────────

    def parse_program(self) -> Program:
        self.parse_tasks_section()
        self.parse_poly_section()
        self.parse_execute_section()
        self.parse_inputs_section()
        self.expect(TK_EOF)
        log.debug(
            "parsed %d declarations, %d statements, %d inputs",
            len(self.program.first_line),
            len(self.program.statements),
            len(self.program.inputs),
        )
        return self.program

    def parse_standalone_expression(self) -> Expr:
        """A single body outside any declaration, followed by end of input."""
        expr = self.parse_body()
        self.expect(TK_EOF)
        return expr

    # ── TASKS ────────────────────────────────────────────────

    def parse_tasks_section(self) -> None:
        self.expect(TK_TASKS)
        self.parse_num_list()

    def parse_num_list(self) -> None:
        tok = self.expect(TK_NUM)
        self.program.select_task(int(tok.value))
        while self.at(TK_NUM):
            tok = self.expect(TK_NUM)
            self.program.select_task(int(tok.value))

    # ── POLY ─────────────────────────────────────────────────

    def parse_poly_section(self) -> None:
        self.expect(TK_POLY)
        self.parse_poly_decl()
        while self.at(TK_ID):
            self.parse_poly_decl()

    def parse_poly_decl(self) -> None:
        header = self.parse_poly_header()
        self.expect(TK_EQUAL)
        self.in_declaration = True
        self.current_params = header.params
        body = self.parse_body()
        self.in_declaration = False
        self.current_params = []
        self.expect(TK_SEMICOLON)
        self.program.define(header, body)

    def parse_poly_header(self) -> PolyHeader:
        name_tok = self.expect(TK_ID)
        if self.at(TK_LPAREN):
            self.expect(TK_LPAREN)
            params = self.parse_id_list()
            self.expect(TK_RPAREN)
        else:
            params = [IMPLICIT_PARAM]
        header = PolyHeader(name_tok.value, name_tok.line, params)
        # Visible to call sites from here on, including inside this body
        self.program.declare(header)
        return header

    def parse_id_list(self) -> list[str]:
        ids = [self.expect(TK_ID).value]
        while self.at(TK_COMMA):
            self.expect(TK_COMMA)
            ids.append(self.expect(TK_ID).value)
        return ids

    # ── Bodies ───────────────────────────────────────────────

    def parse_body(self) -> Expr:
        """body := term (+ term)* (- body)?"""
        left = self.parse_term()
        while self.at(TK_PLUS):
            self.expect(TK_PLUS)
            left = Add(left, self.parse_term())
        if self.at(TK_MINUS):
            self.expect(TK_MINUS)
            # Recursing into body, not term: a - b - c is a - (b - c)
            left = Sub(left, self.parse_body())
        return left

    def parse_term(self) -> Expr:
        """term := factor factor*, juxtaposition is multiplication."""
        if self.peek_type() not in FACTOR_STARTS:
            raise self.error("term")
        left = self.parse_factor()
        while self.at(TK_ID) or self.at(TK_LPAREN):
            if not self.in_declaration and isinstance(left, Call):
                break
            left = Mul(left, self.parse_factor())
        return left

    def parse_factor(self) -> Expr:
        tok = self.stream.peek(1)
        was_paren = False
        expr: Expr
        if tok.type == TK_NUM:
            self.expect(TK_NUM)
            expr = Const(parse_int(tok.value))
        elif tok.type == TK_ID:
            self.expect(TK_ID)
            if self.in_declaration:
                if tok.value not in self.current_params:
                    self.program.invalid_monomial_lines.append(tok.line)
                expr = Var(tok.value, tok.line)
            elif self.at(TK_LPAREN):
                expr = self.parse_call_from(tok)
            else:
                expr = Var(tok.value, tok.line)
        elif tok.type == TK_LPAREN:
            self.expect(TK_LPAREN)
            expr = self.parse_body()
            self.expect(TK_RPAREN)
            was_paren = True
        else:
            raise self.error("factor")

        if self.at(TK_POWER):
            self.expect(TK_POWER)
            exponent = self.expect(TK_NUM)
            expr = Pow(expr, parse_int(exponent.value))
        elif self.in_declaration and was_paren and self.at(TK_NUM):
            raise self.error("operator after parenthesized factor")
        return expr

    # ── Calls ────────────────────────────────────────────────

    def parse_call_from(self, name_tok: Token) -> Call:
        """Arguments of a call whose name token was already consumed."""
        self.expect(TK_LPAREN)
        args = [self.parse_argument()]
        while self.at(TK_COMMA):
            self.expect(TK_COMMA)
            args.append(self.parse_argument())
        self.expect(TK_RPAREN)
        self.program.record_call(name_tok.value, len(args), name_tok.line)
        return Call(name_tok.value, tuple(args), name_tok.line)

    def parse_argument(self) -> Expr:
        tok = self.stream.peek(1)
        if tok.type == TK_ID:
            self.expect(TK_ID)
            if self.at(TK_LPAREN):
                return self.parse_call_from(tok)
            return Var(tok.value, tok.line)
        if tok.type == TK_NUM:
            self.expect(TK_NUM)
            return Const(parse_int(tok.value))
        raise self.error("argument")

    # ── EXECUTE ──────────────────────────────────────────────

    def parse_execute_section(self) -> None:
        self.expect(TK_EXECUTE)
        self.program.statements.append(self.parse_statement())
        while self.peek_type() in STATEMENT_STARTS:
            self.program.statements.append(self.parse_statement())

    def parse_statement(self) -> Stmt:
        if self.at(TK_INPUT):
            return self.parse_input_statement()
        if self.at(TK_OUTPUT):
            return self.parse_output_statement()
        if self.at(TK_ID):
            return self.parse_assign_statement()
        raise self.error("statement")

    def parse_input_statement(self) -> InputStmt:
        self.expect(TK_INPUT)
        tok = self.expect(TK_ID)
        self.expect(TK_SEMICOLON)
        self.program.slot(tok.value)
        return InputStmt(tok.value, tok.line)

    def parse_output_statement(self) -> OutputStmt:
        self.expect(TK_OUTPUT)
        tok = self.expect(TK_ID)
        self.expect(TK_SEMICOLON)
        self.program.slot(tok.value)
        return OutputStmt(tok.value, tok.line)

    def parse_assign_statement(self) -> AssignStmt:
        target = self.expect(TK_ID)
        self.program.slot(target.value)
        self.expect(TK_EQUAL)
        callee = self.expect(TK_ID)
        rhs = self.parse_call_from(callee)
        self.expect(TK_SEMICOLON)
        return AssignStmt(target.value, target.line, rhs)

    # ── INPUTS ───────────────────────────────────────────────

    def parse_inputs_section(self) -> None:
        self.expect(TK_INPUTS)
        tok = self.expect(TK_NUM)
        self.program.inputs.append(parse_int(tok.value))
        while self.at(TK_NUM):
            tok = self.expect(TK_NUM)
            self.program.inputs.append(parse_int(tok.value))


def _describe(tok: Token) -> str:
    if tok.type == TK_EOF:
        return "end of input"
    return tok.type + " '" + tok.value + "'"
