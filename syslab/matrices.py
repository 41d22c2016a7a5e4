"""Random matrix test data and a checker for computed products."""

from __future__ import annotations

import os
import random
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path

VALUE_LIMIT = 100
DEFAULT_DIRECTORY = "tests"
DEFAULT_LIST = "tests_list"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_SEPARATORS = re.compile(r"[ \n]+")


def _atoi(token: str) -> int:
    """Parse a leading integer the way atoi does: 0 when there is none."""
    match = _LEADING_INT.match(token)
    return int(match.group(1)) if match else 0


@dataclass
class Matrix:
    """A rectangular matrix of integers stored row by row."""

    values: list[list[int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.values = [list(row) for row in self.values]
        widths = {len(row) for row in self.values}
        if len(widths) > 1:
            raise ValueError("all rows of a matrix must have the same length")

    @property
    def rows(self) -> int:
        return len(self.values)

    @property
    def columns(self) -> int:
        return len(self.values[0]) if self.values else 0

    def multiply(self, other: Matrix) -> Matrix:
        """Return the product ``self`` x ``other``."""
        if self.columns != other.rows:
            raise ValueError(
                f"cannot multiply {self.rows}x{self.columns} by {other.rows}x{other.columns}"
            )
        other_columns = list(zip(*other.values)) if other.values else []
        return Matrix(
            [
                [sum(a * b for a, b in zip(row, column)) for column in other_columns]
                for row in self.values
            ]
        )

    def format(self) -> str:
        """Render each value followed by a space, one row per line."""
        return "".join(
            "".join(f"{value} " for value in row) + "\n" for row in self.values
        )


def read_matrix(path: str | os.PathLike) -> Matrix:
    """Read a matrix written as space-separated integers, one row per line.

    The width is taken from the last line; shorter rows are padded with zeros
    and longer ones cut to that width.
    """
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    parsed = [
        [_atoi(token) for token in _SEPARATORS.split(line) if token]
        for line in text.splitlines()
    ]
    width = len(parsed[-1]) if parsed else 0
    return Matrix([(row + [0] * width)[:width] for row in parsed])


def _write_random(path: Path, rows: int, columns: int, rng: random.Random) -> None:
    matrix = Matrix(
        [[rng.randint(-VALUE_LIMIT, VALUE_LIMIT) for _ in range(columns)] for _ in range(rows)]
    )
    path.write_text(matrix.format(), encoding="utf-8")


def generate_tests(
    count: int,
    low: int,
    high: int,
    directory: str | os.PathLike = DEFAULT_DIRECTORY,
    list_path: str | os.PathLike = DEFAULT_LIST,
    rng: random.Random | None = None,
) -> list[tuple[str, str, str]]:
    """Write ``count`` random pairs of compatible matrices and list them.

    Each line of the list names the A file, the B file and the C file where
    the product is expected; dimensions are drawn from ``low`` to ``high``.
    """
    if low > high:
        raise ValueError("the lower size bound must not exceed the upper one")
    rng = rng or random.Random()
    base = Path(directory)
    base.mkdir(parents=True, exist_ok=True)
    prefix = os.fspath(directory)
    triples = []
    with open(list_path, "w", encoding="utf-8") as listing:
        for index in range(count):
            a_name, b_name, c_name = (f"{prefix}/{index}_{suffix}" for suffix in "ABC")
            listing.write(f"{a_name} {b_name} {c_name}\n")
            a_rows = rng.randint(low, high)
            a_columns = rng.randint(low, high)
            b_columns = rng.randint(low, high)
            _write_random(Path(a_name), a_rows, a_columns, rng)
            _write_random(Path(b_name), a_columns, b_columns, rng)
            triples.append((a_name, b_name, c_name))
    return triples


def check_tests(list_path: str | os.PathLike) -> list[bool]:
    """For each listed triple, whether C holds the product of A and B."""
    names = Path(list_path).read_text(encoding="utf-8").split()
    results = []
    for start in range(0, len(names) - 2, 3):
        a, b, c = (read_matrix(name) for name in names[start : start + 3])
        try:
            product = a.multiply(b)
        except ValueError:
            results.append(False)
            continue
        results.append(product == c)
    return results


def main_generate(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 3:
        print("Too few arguments")
        return 1
    try:
        generate_tests(int(args[0]), int(args[1]), int(args[2]))
    except (ValueError, OSError) as error:
        print(error, file=sys.stderr)
        return 1
    return 0


def main_check(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("Too few arguments")
        return 1
    try:
        results = check_tests(args[0])
    except OSError as error:
        print(error, file=sys.stderr)
        return 1
    for number, same in enumerate(results):
        verdict = "THE SAME" if same else "DIFFRENT"
        print(f"Data generated nr {number}: are with check data are:\t{verdict}")
    return 0


if __name__ == "__main__":
    sys.exit(main_check())