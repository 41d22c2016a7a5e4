"""A fixed-size table of blocks holding the edit operations produced by diff."""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_RESULT = "result.txt"

# A newline followed by any character; the character after a newline is
# consumed together with it, so it is never itself examined as a newline.
_BOUNDARY = re.compile(r"\n([\s\S])")


class TableFullError(Exception):
    """Raised when every slot of the table already holds a block."""


@dataclass
class Block:
    """The operations read from one diff result; removed ones become None."""

    operations: list[str | None] = field(default_factory=list)

    @property
    def count(self) -> int:
        return sum(1 for operation in self.operations if operation is not None)


def _operation_starts(text: str) -> list[int]:
    """Offsets where an operation other than the first begins."""
    return [
        match.start(1)
        for match in _BOUNDARY.finditer(text)
        if "0" < match.group(1) < "9"
    ]


def count_operations(text: str) -> int:
    """Count the diff operations in ``text``: one plus each line opening with 1-8."""
    if not text:
        return 0
    return len(_operation_starts(text)) + 1


def split_operations(text: str) -> list[str]:
    """Split diff output into its operations, each starting at its header line."""
    if not text:
        return []
    starts = [0, *_operation_starts(text)]
    ends = [*starts[1:], len(text)]
    return [text[start:end] for start, end in zip(starts, ends)]


def _split_pair(token: str) -> tuple[str, str]:
    first, _, second = token.lstrip(":").partition(":")
    if not first or not second:
        raise ValueError(f"expected a pair of files as 'first:second', got {token!r}")
    return first, second


def parse_pairs(text: str) -> list[tuple[str, str]]:
    """Parse a space-separated list of ``first:second`` file pairs."""
    return [_split_pair(token) for token in text.split(" ") if token]


def compare_files(first: str, second: str, result_path: str | Path = DEFAULT_RESULT) -> int:
    """Append the diff of two files to ``result_path`` and return diff's exit status."""
    with open(result_path, "ab") as out:
        completed = subprocess.run(["diff", first, second], stdout=out, check=False)
    return completed.returncode


class BlockTable:
    """A table of ``size`` slots, each empty or holding one Block."""

    def __init__(self, size: int, result_path: str | Path = DEFAULT_RESULT) -> None:
        if size < 0:
            raise ValueError("table size must not be negative")
        self.size = size
        self.result_path = Path(result_path)
        self._slots: list[Block | None] = [None] * size

    def load_result(self) -> int:
        """Read the result file into the first free slot and return its index."""
        try:
            free = self._slots.index(None)
        except ValueError:
            raise TableFullError("array overflow, file wasn't loaded") from None
        text = self.result_path.read_bytes().decode("utf-8", errors="surrogateescape")
        self._slots[free] = Block(list(split_operations(text)))
        return free

    def compare_pair(self, pair: str) -> int:
        """Diff the files named by ``first:second`` and load the result."""
        first, second = _split_pair(pair)
        compare_files(first, second, self.result_path)
        return self.load_result()

    def compare_pairs(self, pairs: str) -> list[int]:
        """Diff every pair in a space-separated list; return the slots filled."""
        return [self.compare_pair(f"{first}:{second}") for first, second in parse_pairs(pairs)]

    def _slot(self, index: int) -> Block | None:
        if not 0 <= index < self.size:
            raise IndexError(f"table has no slot {index}")
        return self._slots[index]

    def _existing(self, index: int) -> Block:
        block = self._slot(index)
        if block is None:
            raise IndexError(f"table has no block with index {index}")
        return block

    def operation_count(self, index: int) -> int:
        block = self._slot(index)
        return 0 if block is None else block.count

    def remove_block(self, index: int) -> None:
        self._existing(index)
        self._slots[index] = None

    def remove_operation(self, block_index: int, operation_index: int) -> None:
        """Remove one operation; a block losing its last operation is removed too."""
        block = self._existing(block_index)
        if not 0 <= operation_index < len(block.operations) or block.operations[operation_index] is None:
            raise IndexError(f"block {block_index} has no operation with index {operation_index}")
        block.operations[operation_index] = None
        if block.count == 0:
            self._slots[block_index] = None

    def block(self, index: int) -> Block | None:
        return self._slot(index)

    def operation(self, block_index: int, operation_index: int) -> str:
        block = self._existing(block_index)
        if not 0 <= operation_index < len(block.operations):
            raise IndexError(f"block {block_index} has no operation with index {operation_index}")
        text = block.operations[operation_index]
        if text is None:
            raise IndexError(f"block {block_index} has no operation with index {operation_index}")
        return text

    def clear(self) -> None:
        self._slots = [None] * self.size