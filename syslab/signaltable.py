"""Check how ignoring, handling, masking and pending signals survive fork and exec."""

from __future__ import annotations

import os
import signal
import sys
from typing import Callable, Iterable

ACTIONS = {"i": "ignore", "h": "handle", "m": "mask", "p": "pending"}
FORK_ACTIONS = ("i", "h", "m", "p")
EXEC_ACTIONS = ("i", "m", "p")
SIGNALS = range(1, 23)
_MODULE = "syslab.signaltable"
_CHILD = b"C"
_PARENT = b"P"


def _check(signum: int, action: str) -> None:
    if action not in ACTIONS:
        raise ValueError(f"unknown action: {action}")
    if not 1 <= signum < signal.NSIG:
        raise ValueError(f"no signal with number {signum}")


def _set_handler(signum: int, handler: object) -> None:
    # Signals such as SIGKILL cannot be caught; the attempt is simply dropped.
    try:
        signal.signal(signum, handler)
    except (OSError, ValueError):
        pass


def _raise(signum: int) -> None:
    os.kill(os.getpid(), signum)


def _wait(pid: int) -> None:
    """Wait for a child; a child that stopped itself is killed and reaped."""
    try:
        _, status = os.waitpid(pid, os.WUNTRACED)
    except ChildProcessError:
        return
    if os.WIFSTOPPED(status):
        os.kill(pid, signal.SIGKILL)
        try:
            os.waitpid(pid, 0)
        except ChildProcessError:
            pass


def _pending(signum: int) -> bool:
    return signum in signal.sigpending()


def _child_side(signum: int, action: str, report: Callable[[], None]) -> None:
    if action == "p":
        if _pending(signum):
            report()
        return
    _raise(signum)
    if action != "h":
        report()


def _exec_helper(signum: int, action: str, fd: int) -> None:
    os.set_inheritable(fd, True)
    os.execv(
        sys.executable,
        [sys.executable, "-m", _MODULE, "--helper", action, str(signum), str(fd)],
    )


def _helper(action: str, signum: int, fd: int) -> None:
    """The side of a probe that runs after exec."""
    if action == "p":
        if _pending(signum):
            os.write(fd, _CHILD)
        return
    if action == "m":
        _set_handler(signum, lambda s, f: os._exit(0))
    _raise(signum)
    os.write(fd, _CHILD)


def _scenario(signum: int, action: str, fd: int, use_exec: bool) -> None:
    role = [_CHILD]

    def report() -> None:
        os.write(fd, role[0])

    if action == "h":
        _set_handler(signum, lambda s, f: report())
    elif action == "i":
        _set_handler(signum, signal.SIG_IGN)
    else:
        signal.pthread_sigmask(signal.SIG_SETMASK, {signum})
        if action == "m":
            _set_handler(signum, lambda s, f: os._exit(0))
        else:
            _raise(signum)

    pid = os.fork()
    if pid == 0:
        try:
            if use_exec:
                _exec_helper(signum, action, fd)
            _child_side(signum, action, report)
        finally:
            os._exit(0)
    _wait(pid)
    role[0] = _PARENT
    if action == "p":
        if _pending(signum):
            report()
        return
    _raise(signum)
    if action != "h":
        report()


def _read_all(fd: int) -> bytes:
    chunks = []
    while chunk := os.read(fd, 1024):
        chunks.append(chunk)
    return b"".join(chunks)


def _probe(signum: int, action: str, use_exec: bool) -> tuple[bool, bool]:
    _check(signum, action)
    read_fd, write_fd = os.pipe()
    sys.stdout.flush()
    sys.stderr.flush()
    pid = os.fork()
    if pid == 0:
        try:
            os.close(read_fd)
            _scenario(signum, action, write_fd, use_exec)
        finally:
            os._exit(0)
    os.close(write_fd)
    try:
        _wait(pid)
        data = _read_all(read_fd)
    finally:
        os.close(read_fd)
    return _CHILD in data, _PARENT in data


def probe(signum: int, action: str) -> tuple[bool, bool]:
    """Apply ``action`` to ``signum`` in a process, then raise it there and in a forked child.

    Returns whether the child and whether the process itself saw the
    setting take effect.
    """
    return _probe(signum, action, False)


def _run_table(
    signals: Iterable[int], actions: Iterable[str], use_exec: bool
) -> list[tuple[int, str, bool, bool]]:
    actions = list(actions)
    return [
        (signum, action, *_probe(signum, action, use_exec))
        for signum in signals
        for action in actions
    ]


def run_table(signals: Iterable[int], actions: Iterable[str]) -> list[tuple[int, str, bool, bool]]:
    """Probe every signal with every action; rows are (signal, action, child, parent)."""
    return _run_table(signals, actions, False)


def _print_rows(rows: list[tuple[int, str, bool, bool]]) -> None:
    for signum, action, child, parent in rows:
        print(f"{signum}\t{ACTIONS[action]}\tchildSignal: {child}\tparentSignal: {parent}")


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if args and args[0] == "--helper":
        if len(args) != 4:
            return 1
        _helper(args[1], int(args[2]), int(args[3]))
        return 0
    _print_rows(run_table(SIGNALS, FORK_ACTIONS))
    print()
    print("Exec")
    _print_rows(_run_table(SIGNALS, EXEC_ACTIONS, True))
    return 0


if __name__ == "__main__":
    sys.exit(main())