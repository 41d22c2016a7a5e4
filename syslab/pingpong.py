"""A parent sends signals to its child, which echoes each one back."""

from __future__ import annotations

import os
import signal
import sys

_ECHO_TIMEOUT = 5.0


def _signals(variant: int) -> tuple[int, int, str, str]:
    if variant in (1, 2):
        return signal.SIGUSR1, signal.SIGUSR2, "SIGUSR1", "SIGUSR2"
    if variant == 3:
        return signal.SIGRTMIN, signal.SIGRTMAX, "SIGRTMIN", "SIGRTMAX"
    raise ValueError(f"unknown variant: {variant}")


def _child(parent: int, ping: int, end: int, ping_name: str, end_name: str) -> int:
    received = 0
    watched = {ping, end, signal.SIGINT}
    while True:
        info = signal.sigwaitinfo(watched)
        if info.si_signo == signal.SIGINT:
            print(f"Liczba sygnałów otrzymanych przez dziecko: {received}", flush=True)
            return received
        if info.si_pid != parent:
            continue
        received += 1
        if info.si_signo == ping:
            os.kill(parent, ping)
            print(f"dziecko odebrało {ping_name} \tdziecko wysłało {ping_name}", flush=True)
        else:
            print(f"Dziecko odebrało {end_name}", flush=True)
            print(f"Liczba odebranych sygnałów przez dziecko: {received} ", flush=True)
            return received


def _take(signum: int, sender: int, timeout: float) -> bool:
    """Consume ``signum`` until one from ``sender`` arrives; False on timeout."""
    while True:
        info = signal.sigtimedwait({signum}, timeout)
        if info is None:
            return False
        if info.si_pid == sender:
            return True


def run(count: int, variant: int) -> tuple[int, int, int]:
    """Send ``count`` signals to a child, then the end signal.

    Variant 1 sends without waiting, 2 waits for each echo, 3 uses real-time
    signals. Returns the signals sent, the number the child received (its
    exit status) and the echoes that came back.
    """
    if count < 0:
        raise ValueError("count must not be negative")
    ping, end, ping_name, end_name = _signals(variant)
    parent = os.getpid()
    old = signal.pthread_sigmask(signal.SIG_BLOCK, {ping, end, signal.SIGINT})
    sys.stdout.flush()
    try:
        pid = os.fork()
    except OSError:
        signal.pthread_sigmask(signal.SIG_SETMASK, old)
        raise
    if pid == 0:
        code = 255
        try:
            code = _child(parent, ping, end, ping_name, end_name) & 0xFF
        finally:
            os._exit(code)

    signal.pthread_sigmask(signal.SIG_SETMASK, set(old) | {ping})
    sent = 0
    echoes = 0
    status = 0
    try:
        try:
            for _ in range(count):
                print(f"Rodzic wysłał {ping_name}")
                os.kill(pid, ping)
                sent += 1
                if variant == 2:
                    if not _take(ping, pid, _ECHO_TIMEOUT):
                        raise RuntimeError("the child stopped answering")
                    echoes += 1
                    print(f"Rodzic odebrał {ping_name}")
                else:
                    while _take(ping, pid, 0):
                        echoes += 1
            print(f"Rodzic wysłał {end_name}")
            os.kill(pid, end)
            if variant == 3:
                sent += 1
            _, status = os.waitpid(pid, 0)
        except BaseException:
            os.kill(pid, end)
            os.waitpid(pid, 0)
            raise
    except KeyboardInterrupt:
        print("Rodzic odebrał SIGINT")
        print(f"Sygnały wysłane do dziecka: {sent}")
        raise
    finally:
        while _take(ping, pid, 0):
            echoes += 1
        signal.pthread_sigmask(signal.SIG_SETMASK, old)
    if not os.WIFEXITED(status):
        raise RuntimeError("the child did not exit normally")
    return sent, os.WEXITSTATUS(status), echoes


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        print("Too few arguments")
        return 1
    try:
        sent, received, echoes = run(int(args[0]), int(args[1]))
    except KeyboardInterrupt:
        return 9
    except (ValueError, RuntimeError, OSError) as error:
        print(error, file=sys.stderr)
        return 1
    print(f"Sygnały wysłane do dziecka: {sent}")
    print(f"Sygnały odebrane przez dziecko: {received}")
    print(f"Sygnały odebrane przez rodzica: {echoes}")
    return 0


if __name__ == "__main__":
    sys.exit(main())