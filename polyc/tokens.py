"""Polynomial-language tokenizer — lexes source into a flat token list."""

from __future__ import annotations

import logging
from dataclasses import dataclass

log = logging.getLogger(__name__)


# Token type constants
TK_TASKS = "TASKS"
TK_POLY = "POLY"
TK_EXECUTE = "EXECUTE"
TK_INPUT = "INPUT"
TK_OUTPUT = "OUTPUT"
TK_INPUTS = "INPUTS"
TK_ID = "ID"
TK_NUM = "NUM"
TK_EQUAL = "EQUAL"
TK_LPAREN = "LPAREN"
TK_RPAREN = "RPAREN"
TK_COMMA = "COMMA"
TK_SEMICOLON = "SEMICOLON"
TK_PLUS = "PLUS"
TK_MINUS = "MINUS"
TK_POWER = "POWER"
TK_ERROR = "ERROR"
TK_EOF = "EOF"

KEYWORDS: dict[str, str] = {
    "TASKS": TK_TASKS,
    "POLY": TK_POLY,
    "EXECUTE": TK_EXECUTE,
    "INPUT": TK_INPUT,
    "OUTPUT": TK_OUTPUT,
    "INPUTS": TK_INPUTS,
}

PUNCTUATION: dict[str, str] = {
    "=": TK_EQUAL,
    "(": TK_LPAREN,
    ")": TK_RPAREN,
    ",": TK_COMMA,
    ";": TK_SEMICOLON,
    "+": TK_PLUS,
    "-": TK_MINUS,
    "^": TK_POWER,
}


@dataclass(frozen=True)
class Token:
    """A token with type, text, and 1-indexed source line."""

    type: str
    value: str
    line: int


def _is_digit(c: str) -> bool:
    return c >= "0" and c <= "9"


def _is_alpha(c: str) -> bool:
    return (c >= "a" and c <= "z") or (c >= "A" and c <= "Z")


def _is_alnum(c: str) -> bool:
    return _is_alpha(c) or _is_digit(c)


def tokenize(source: str) -> list[Token]:
    """Tokenize program source into a flat list ending with TK_EOF.

    Characters that start no terminal become TK_ERROR tokens; the parser
    rejects them like any other unexpected token.
    """
    tokens: list[Token] = []
    pos = 0
    line = 1
    length = len(source)

    while pos < length:
        c = source[pos]

        if c == "\n":
            pos += 1
            line += 1
            continue

        if c == " " or c == "\t" or c == "\r" or c == "\f" or c == "\v":
            pos += 1
            continue

        start_pos = pos

        # NUM: "0" on its own, or a non-zero digit followed by digits
        if _is_digit(c):
            pos += 1
            if c != "0":
                while pos < length and _is_digit(source[pos]):
                    pos += 1
            tokens.append(Token(TK_NUM, source[start_pos:pos], line))
            continue

        # ID or keyword
        if _is_alpha(c):
            while pos < length and _is_alnum(source[pos]):
                pos += 1
            word = source[start_pos:pos]
            tokens.append(Token(KEYWORDS.get(word, TK_ID), word, line))
            continue

        if c in PUNCTUATION:
            tokens.append(Token(PUNCTUATION[c], c, line))
            pos += 1
            continue

        tokens.append(Token(TK_ERROR, c, line))
        pos += 1

    tokens.append(Token(TK_EOF, "", line))
    log.debug("tokenized %d tokens over %d lines", len(tokens), line)
    return tokens


class TokenStream:
    """Consuming token cursor with unlimited, 1-indexed lookahead."""

    def __init__(self, tokens: list[Token]):
        if not tokens or tokens[-1].type != TK_EOF:
            raise ValueError("token list must end with an EOF token")
        self.tokens: list[Token] = tokens
        self.pos: int = 0

    def get_token(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def peek(self, k: int) -> Token:
        if k <= 0:
            raise ValueError("peek distance must be positive, got " + str(k))
        idx = self.pos + k - 1
        if idx >= len(self.tokens):
            return self.tokens[len(self.tokens) - 1]
        return self.tokens[idx]
