"""Multiply listed matrix pairs in parallel worker processes, column by column."""

from __future__ import annotations

import fcntl
import math
import os
import re
import resource
import subprocess
import sys
import time
import traceback
from dataclasses import dataclass
from pathlib import Path

VALUE_LIMIT = 100
_FAILED = 255
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_SEPARATOR = re.compile(r"[ \n]")
_SEPARATORS = re.compile(r"[ \n]+")


@dataclass
class MatrixFile:
    """A matrix stored as text in ``path``; ``width`` is the cell width of an output file."""

    path: str
    rows: int
    columns: int
    width: int = 0


def _atoi(token: str) -> int:
    match = _LEADING_INT.match(token)
    return int(match.group(1)) if match else 0


def _lines(path: str) -> list[str]:
    return Path(path).read_text(encoding="utf-8", errors="replace").splitlines(keepends=True)


def _open_matrix(path: str) -> MatrixFile:
    """Measure a matrix file: rows are its lines, columns the values on its first line."""
    lines = _lines(path)
    first = lines[0] if lines else ""
    columns = max(1, sum(1 for token in _SEPARATORS.split(first) if token))
    return MatrixFile(path, len(lines), columns)


def _read_rows(matrix: MatrixFile) -> list[list[int]]:
    rows = []
    for number, line in enumerate(_lines(matrix.path)[: matrix.rows]):
        tokens = _SEPARATOR.split(line)
        if len(tokens) < matrix.columns:
            raise ValueError(f"{matrix.path}: row {number} has fewer than {matrix.columns} values")
        rows.append([_atoi(token) for token in tokens[: matrix.columns]])
    return rows


def _read_column(matrix: MatrixFile, index: int) -> list[int]:
    column = []
    for number, line in enumerate(_lines(matrix.path)):
        tokens = _SEPARATOR.split(line)
        if index >= len(tokens):
            raise ValueError(f"{matrix.path}: row {number} has no column {index}")
        column.append(_atoi(tokens[index]))
    return column


def _cell(value: int, width: int) -> bytes:
    text = str(value)
    if len(text) > width:
        raise ValueError(f"value {value} does not fit in {width} characters")
    return text.ljust(width).encode("ascii")


def output_width(columns: int) -> int:
    """Cell width for a product whose inner dimension is ``columns``."""
    if columns < 1:
        raise ValueError("a matrix needs at least one column")
    return math.ceil(math.log10(columns * VALUE_LIMIT * VALUE_LIMIT)) + 3


def prepare_output(path: str | os.PathLike, rows: int, columns: int, width: int) -> None:
    """Fill the output file with placeholder cells so columns can be written in place."""
    line = b"@" * (columns * width) + b"\n"
    Path(path).write_bytes(line * rows)


def column_range(worker: int, workers: int, columns: int) -> tuple[int, int]:
    """First and last column (inclusive) that ``worker`` of ``workers`` computes."""
    if workers < 1:
        raise ValueError("there must be at least one worker")
    chunk = math.ceil(columns / workers)
    start = worker * chunk
    end = min((worker + 1) * chunk - 1, columns - 1)
    return start, end


def load_tasks(list_path: str | os.PathLike) -> list[tuple[MatrixFile, MatrixFile, MatrixFile]]:
    """Read A, B, C triples from the list and prepare every C file for writing."""
    names = Path(list_path).read_text(encoding="utf-8").split()
    tasks = []
    for start in range(0, len(names) - 2, 3):
        a_name, b_name, c_name = names[start : start + 3]
        a = _open_matrix(a_name)
        b = _open_matrix(b_name)
        c = MatrixFile(c_name, a.rows, b.columns, output_width(a.columns))
        prepare_output(c.path, c.rows, c.columns, c.width)
        tasks.append((a, b, c))
    return tasks


def _write_shared(c: MatrixFile, column: int, values: list[int]) -> None:
    with open(c.path, "r+b", buffering=0) as out:
        fcntl.flock(out.fileno(), fcntl.LOCK_EX)
        try:
            for row, value in enumerate(values):
                out.seek(c.width * (column + row * c.columns) + row)
                out.write(_cell(value, c.width))
        finally:
            fcntl.flock(out.fileno(), fcntl.LOCK_UN)


def _write_separate(c: MatrixFile, column: int, values: list[int]) -> None:
    data = b"".join(_cell(value, c.width) + b"\n" for value in values)
    Path(f"{c.path}_{column}").write_bytes(data)


def multiply_columns(
    a: MatrixFile, b: MatrixFile, c: MatrixFile, start: int, end: int, separate: bool
) -> list[list[int]]:
    """Compute columns ``start``..``end`` of C = A x B, write them and return them."""
    if a.columns != b.rows:
        raise ValueError(f"cannot multiply {a.rows}x{a.columns} by {b.rows}x{b.columns}")
    a_rows = _read_rows(a)
    write = _write_separate if separate else _write_shared
    computed = []
    for column in range(start, end + 1):
        b_column = _read_column(b, column)
        values = [sum(x * y for x, y in zip(row, b_column)) for row in a_rows]
        write(c, column, values)
        computed.append(values)
    return computed


def worker_task(
    worker: int,
    workers: int,
    tasks: list[tuple[MatrixFile, MatrixFile, MatrixFile]],
    time_limit: float,
    separate: bool,
) -> int:
    """Do this worker's share of every task until CPU time runs out; count the tasks touched."""
    started = time.process_time()
    done = 0
    for a, b, c in tasks:
        if worker < b.columns:
            done += 1
            start, end = column_range(worker, workers, b.columns)
            multiply_columns(a, b, c, start, end, separate)
        if time.process_time() - started >= time_limit:
            break
    return done


def _apply_limits(cpu_limit: int | None, memory_limit: int | None) -> None:
    if memory_limit is not None:
        size = memory_limit * (1 << 20)
        resource.setrlimit(resource.RLIMIT_AS, (size, size))
    if cpu_limit is not None:
        resource.setrlimit(resource.RLIMIT_CPU, (cpu_limit, cpu_limit))


def _paste(c: MatrixFile) -> None:
    parts = [f"{c.path}_{column}" for column in range(c.columns)]
    fd = os.open(c.path, os.O_RDWR | os.O_CREAT, 0o600)
    try:
        subprocess.run(["paste", *parts], stdout=fd, check=True)
    finally:
        os.close(fd)


def run(
    list_path: str | os.PathLike,
    workers: int,
    time_limit: float,
    separate: bool = False,
    cpu_limit: int | None = None,
    memory_limit: int | None = None,
) -> list[tuple[int, int, resource.struct_rusage]]:
    """Multiply every listed pair with ``workers`` child processes.

    Returns, per worker, its pid, the number of tasks it worked on (its exit
    status) and its resource usage.
    """
    if workers < 1:
        raise ValueError("there must be at least one worker")
    tasks = load_tasks(list_path)
    pids = []
    for worker in range(workers):
        sys.stdout.flush()
        sys.stderr.flush()
        pid = os.fork()
        if pid == 0:
            code = _FAILED
            try:
                _apply_limits(cpu_limit, memory_limit)
                code = worker_task(worker, workers, tasks, time_limit, separate) & 0xFF
            except BaseException:
                traceback.print_exc()
            finally:
                os._exit(code)
        pids.append(pid)

    results = []
    for pid in pids:
        _, status, usage = os.wait4(pid, 0)
        results.append((pid, os.waitstatus_to_exitcode(status), usage))

    if separate:
        for _, _, c in tasks:
            _paste(c)
    return results


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 4:
        print("Too few arguments")
        return 1
    try:
        list_path = args[0]
        workers = int(args[1])
        time_limit = float(args[2])
        separate = int(args[3]) == 2
        cpu_limit = int(args[4]) if len(args) > 4 else None
        memory_limit = int(args[5]) if len(args) > 5 else None
        results = run(list_path, workers, time_limit, separate, cpu_limit, memory_limit)
    except (ValueError, OSError, subprocess.CalledProcessError) as error:
        print(error, file=sys.stderr)
        return 1
    for pid, count, usage in results:
        print(f"Number of multiplying operations: {count} finished by process: {pid}")
        print(
            f"\tUser CPU time: {int(usage.ru_utime * 1000)} ms\n"
            f"\tSystem CPU time: {int(usage.ru_stime * 1000)} ms\n"
            f"\tMax resident set size: {usage.ru_maxrss} KB"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())