"""polyc CLI — compile, check and run polynomial programs."""

from __future__ import annotations

import logging
import sys

from . import parse
from .errors import SYNTAX_ERROR_MESSAGE, CapacityError, ParseError, RuntimeFault
from .runtime import run

log = logging.getLogger(__name__)


USAGE: str = """\
polyc [OPTIONS] [FILE]

Compile and run a polynomial program read from FILE, or stdin.

Options:
  --tasks N[,N...]   Run these tasks instead of the program's TASKS list
                     (2 execute, 3 uninitialized use, 4 useless assignment,
                     5 degrees)
  --debug            Log pipeline progress to stderr
  --help             Show this help message
"""


def _parse_tasks(text: str) -> list[int] | None:
    tasks: list[int] = []
    for part in text.split(","):
        part = part.strip()
        if not part.isdigit():
            return None
        tasks.append(int(part))
    return tasks


def _configure_logging(debug: bool) -> None:
    root = logging.getLogger("polyc")
    if not debug:
        return
    if not root.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        root.addHandler(h)
    root.setLevel(logging.DEBUG)


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    filepath: str = ""
    tasks: list[int] | None = None
    debug = False
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        elif arg == "--debug":
            debug = True
            i += 1
        elif arg == "--tasks":
            if i + 1 >= len(args):
                print("polyc: --tasks requires a value", file=sys.stderr)
                return 2
            tasks = _parse_tasks(args[i + 1])
            if tasks is None:
                print("polyc: invalid task list '" + args[i + 1] + "'", file=sys.stderr)
                return 2
            i += 2
        elif arg.startswith("-"):
            print("polyc: unknown flag '" + arg + "'", file=sys.stderr)
            return 2
        elif filepath == "":
            filepath = arg
            i += 1
        else:
            print("polyc: unexpected argument '" + arg + "'", file=sys.stderr)
            return 2

    _configure_logging(debug)

    if filepath != "":
        try:
            with open(filepath, "rb") as f:
                raw = f.read()
        except FileNotFoundError:
            print("polyc: " + filepath + ": No such file or directory", file=sys.stderr)
            return 1
        except OSError as e:
            print("polyc: " + filepath + ": " + str(e), file=sys.stderr)
            return 1
    else:
        raw = sys.stdin.buffer.read()
    try:
        source = raw.decode("utf-8")
    except ValueError:
        print("polyc: invalid utf-8 in input", file=sys.stderr)
        return 1

    try:
        program = parse(source)
    except ParseError as e:
        log.debug("syntax error: %s", e.detail())
        print(SYNTAX_ERROR_MESSAGE)
        return 1
    except CapacityError as e:
        print("polyc: error: " + str(e), file=sys.stderr)
        return 1

    try:
        result = run(program, tasks)
    except RuntimeFault as e:
        print("polyc: runtime error: " + str(e), file=sys.stderr)
        return 1

    sys.stdout.write(result.stdout)
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
