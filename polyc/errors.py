"""Error hierarchy shared by the parser, context and runtime."""

from __future__ import annotations

SYNTAX_ERROR_MESSAGE = "SYNTAX ERROR !!!!!&%!!"


class PolycError(Exception):
    """Base error for compiling or running a polynomial program."""

    def __init__(self, msg: str, line: int | None = None):
        if line is None:
            super().__init__(msg)
        else:
            super().__init__(msg + " at line " + str(line))
        self.msg: str = msg
        self.line: int | None = line


class ParseError(PolycError):
    """Token stream does not match the grammar. Always fatal."""

    def __init__(self, expected: str, found: str, line: int):
        super().__init__(SYNTAX_ERROR_MESSAGE, line)
        self.expected: str = expected
        self.found: str = found

    def detail(self) -> str:
        return (
            "expected "
            + self.expected
            + ", got "
            + self.found
            + " at line "
            + str(self.line)
        )


class CapacityError(PolycError):
    """Execution store has no free slot left."""


class RuntimeFault(PolycError):
    """Interpreter could not continue."""


class InputExhausted(RuntimeFault):
    """INPUT statement ran with no queued values left."""
