"""Print the time and the current directory listing every second.

Ctrl+Z pauses and resumes the output, Ctrl+C ends the program.
"""

from __future__ import annotations

import os
import signal
import sys
import time
from typing import Callable, TextIO


def list_directory(path: str | os.PathLike = ".") -> list[str]:
    """Names in ``path`` as a directory read returns them, '.' and '..' included."""
    return [".", "..", *sorted(os.listdir(path))]


class Watcher:
    """Produces the periodic listing and keeps track of whether it is paused."""

    def __init__(
        self,
        path: str | os.PathLike = ".",
        out: TextIO | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.path = path
        self.out = out if out is not None else sys.stdout
        self.clock = clock
        self.paused = False

    def toggle(self, signum: int, frame: object = None) -> None:
        """Pause the output if it runs, resume it if it is paused."""
        if not self.paused:
            self.out.write(
                f"\nOtrzymano sygnal {signum}\n"
                " kontynuacja: CTRL+Z \t zakończenie programu: CTRL+C \n"
            )
            self.out.flush()
        self.paused = not self.paused

    def tick(self) -> str | None:
        """Write one listing unless paused; return what was written."""
        if self.paused:
            return None
        stamp = time.strftime("Time\t%H:%M:%S", time.localtime(self.clock()))
        names = "".join(f"{name}\n" for name in list_directory(self.path))
        text = f"{stamp}\ncontent directory: \n{names}\n"
        self.out.write(text)
        self.out.flush()
        return text


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    watcher = Watcher(args[0] if args else ".")
    signal.signal(signal.SIGTSTP, watcher.toggle)
    try:
        while True:
            watcher.tick()
            time.sleep(1)
    except KeyboardInterrupt:
        print(f"\nOdebrano sygnał SIGINT: {int(signal.SIGINT)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())