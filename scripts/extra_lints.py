#!/usr/bin/env python3
"""Project-specific lint rules that ruff does not cover.

Rules:
1. no-class-tests: test files use module-level functions (Hypothesis
   stateful ``*.TestCase`` aliases are fine)
2. import-in-function: library code imports at module level
3. mutable-default: no list/dict/set default arguments
4. no-print: library code logs instead of printing
5. global-random: library code draws from an owned ``random.Random``
   instance, never from the ``random`` module's shared generator

Usage: python scripts/extra_lints.py [PATH ...]   (defaults to src and tests)
"""

import ast
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DIRECTORIES = ("src", "tests")

# Names on the random module that construct a generator rather than draw.
RANDOM_CONSTRUCTORS = frozenset({"Random", "SystemRandom"})


@dataclass(frozen=True)
class LintError:
    file: Path
    line: int
    column: int
    rule: str
    message: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}: {self.rule}: {self.message}"


class ProjectLinter(ast.NodeVisitor):
    def __init__(self, file: Path) -> None:
        self.file = file
        self.is_test = file.name.startswith("test_") or file.name == "conftest.py"
        self.errors: list[LintError] = []
        self._depth = 0
        # Local names bound to the random module, e.g. ``import random as _r``.
        self._random_aliases: set[str] = set()

    def _report(self, node: ast.AST, rule: str, message: str) -> None:
        self.errors.append(
            LintError(
                self.file,
                getattr(node, "lineno", 0),
                getattr(node, "col_offset", 0),
                rule,
                message,
            )
        )

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        if self.is_test and node.name.startswith("Test"):
            self._report(node, "no-class-tests", f"Test class '{node.name}'.")
        self.generic_visit(node)

    def _visit_function(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        for default in [*node.args.defaults, *node.args.kw_defaults]:
            if default is not None and _is_mutable(default):
                self._report(default, "mutable-default", "Use None as the default.")
        self._depth += 1
        self.generic_visit(node)
        self._depth -= 1

    visit_FunctionDef = _visit_function
    visit_AsyncFunctionDef = _visit_function

    def _visit_import(self, node: ast.Import | ast.ImportFrom) -> None:
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name == "random":
                    self._random_aliases.add(alias.asname or "random")
        if self._depth and not self.is_test:
            self._report(node, "import-in-function", "Import at module level.")
        self.generic_visit(node)

    visit_Import = _visit_import
    visit_ImportFrom = _visit_import

    def visit_Call(self, node: ast.Call) -> None:
        func = node.func
        if not self.is_test:
            if isinstance(func, ast.Name) and func.id == "print":
                self._report(node, "no-print", "Use logging instead of print().")
            if (
                isinstance(func, ast.Attribute)
                and isinstance(func.value, ast.Name)
                and func.value.id in self._random_aliases
                and func.attr not in RANDOM_CONSTRUCTORS
            ):
                self._report(
                    node,
                    "global-random",
                    f"random.{func.attr}() uses the shared generator.",
                )
        self.generic_visit(node)


def _is_mutable(node: ast.expr) -> bool:
    if isinstance(node, (ast.List, ast.Dict, ast.Set)):
        return True
    return (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id in ("list", "dict", "set")
    )


def lint_source(source: str, file: Path) -> list[LintError]:
    try:
        tree = ast.parse(source)
    except SyntaxError as e:
        return [LintError(file, e.lineno or 0, e.offset or 0, "syntax-error", e.msg)]
    linter = ProjectLinter(file)
    linter.visit(tree)
    return linter.errors


def iter_python_files(paths: list[Path]) -> Iterator[Path]:
    for path in paths:
        if path.is_dir():
            yield from sorted(path.rglob("*.py"))
        elif path.suffix == ".py":
            yield path


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    paths = [Path(a) for a in args] or [
        Path(d) for d in DEFAULT_DIRECTORIES if Path(d).exists()
    ]

    errors: list[LintError] = []
    for file in iter_python_files(paths):
        errors.extend(lint_source(file.read_text(), file))

    for error in sorted(errors, key=lambda e: (str(e.file), e.line, e.column)):
        print(error)
    if errors:
        print(f"\nFound {len(errors)} custom lint error(s)")
        return 1
    print("All custom lint checks passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
