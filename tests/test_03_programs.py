"""Whole-program tests: source in, printed lines out.

Test cases live in 03_programs/*.tests files. The expected section holds
the exact output lines (empty for no output).
"""

from pathlib import Path

import pytest

from polyc import run

PROGRAMS_DIR = Path(__file__).parent / "03_programs"


def parse_program_file(path: Path) -> list[tuple[str, str, list[str]]]:
    """Parse .tests file into (name, input, expected_lines) tuples."""
    lines = path.read_text().split("\n")
    result: list[tuple[str, str, list[str]]] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if line.startswith("=== "):
            test_name = line[4:].strip()
            i += 1
            input_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                input_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            expected_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                expected_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            result.append((test_name, "\n".join(input_lines), expected_lines))
        else:
            i += 1
    return result


def discover_program_tests() -> list[tuple[str, str, list[str]]]:
    results = []
    for test_file in sorted(PROGRAMS_DIR.glob("*.tests")):
        for name, source, expected in parse_program_file(test_file):
            results.append((f"{test_file.stem}/{name}", source, expected))
    return results


def pytest_generate_tests(metafunc):
    """Parametrize tests over program test files."""
    if "program_source" in metafunc.fixturenames:
        params = [
            pytest.param(source, expected, id=test_id)
            for test_id, source, expected in discover_program_tests()
        ]
        metafunc.parametrize("program_source,program_expected", params)


def test_program(program_source: str, program_expected: list[str]):
    """Verify the printed lines of a full compile-and-run."""
    result = run(program_source)
    assert result.lines == program_expected
