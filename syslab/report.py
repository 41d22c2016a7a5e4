"""Run table commands from the command line and log their timings."""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, TextIO

from syslab.blocks import BlockTable, TableFullError

REPORT_FILE = "raport.txt"


@dataclass
class Timing:
    """Real, user and system time in seconds."""

    real: float = 0.0
    user: float = 0.0
    system: float = 0.0

    def format(self, operation: str) -> str:
        return (
            f"Operation: {operation}\n"
            f"Real time: {self.real:f}\n"
            f"User time: {self.user:f}\n"
            f"System time: {self.system:f}\n\n"
        )


@contextmanager
def timed() -> Iterator[Timing]:
    """Yield a Timing that is filled in when the block ends."""
    timing = Timing()
    start = os.times()
    try:
        yield timing
    finally:
        end = os.times()
        timing.real = end.elapsed - start.elapsed
        timing.user = end.user - start.user
        timing.system = end.system - start.system


def _take(args: list[str], position: int, count: int, command: str) -> list[str]:
    values = args[position + 1 : position + 1 + count]
    if len(values) < count:
        raise ValueError(f"{command} needs {count} argument(s)")
    return values


def run_commands(table: BlockTable, args: list[str], report: TextIO) -> None:
    """Execute commands on ``table`` and write each one's timing to ``report``."""
    position = 0
    while position < len(args):
        command = args[position]
        with timed() as timing:
            try:
                if command == "compareListOfTwoFiles":
                    (pairs,) = _take(args, position, 1, command)
                    position += 2
                    table.compare_pairs(pairs)
                elif command == "removeOperation":
                    block, operation = _take(args, position, 2, command)
                    position += 3
                    table.remove_operation(int(block), int(operation))
                elif command == "removeBlock":
                    (block,) = _take(args, position, 1, command)
                    position += 2
                    table.remove_block(int(block))
                else:
                    command = "wrong function called"
                    position += 1
            except (IndexError, TableFullError, OSError) as error:
                print(error, file=sys.stderr)
        report.write(timing.format(command))


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        print("You should have given more than 3 arguments")
        return 1
    if args[0] != "createTable":
        print("Firstly you should have given argument: createTable")
        return 1
    table = BlockTable(int(args[1]))
    with open(REPORT_FILE, "a", encoding="utf-8") as report:
        run_commands(table, args[2:], report)
    table.clear()
    return 0


if __name__ == "__main__":
    sys.exit(main())