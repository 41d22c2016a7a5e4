"""List each immediate subdirectory of a path with ``ls -la`` in a child process."""

from __future__ import annotations

import os
import stat
import subprocess
import sys


def find_directories(path: str | os.PathLike | None) -> list[str]:
    """Run ``ls -la`` on every subdirectory of ``path``; return the directories listed."""
    if path is None:
        return []
    try:
        entries = list(os.scandir(path))
    except OSError:
        return []
    listed = []
    for entry in entries:
        directory = f"{os.fspath(path)}/{entry.name}"
        try:
            info = os.lstat(directory)
        except OSError:
            continue
        if not stat.S_ISDIR(info.st_mode):
            continue
        sys.stdout.flush()
        with subprocess.Popen(["ls", "-la", directory]) as child:
            print(f"\npid = {child.pid}  path = {directory}\n", flush=True)
            child.wait()
        listed.append(directory)
    return listed


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    find_directories(args[0] if args else ".")
    return 0


if __name__ == "__main__":
    sys.exit(main())