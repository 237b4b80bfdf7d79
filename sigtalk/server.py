"""Receive text from client processes, one bit per signal.

SIGUSR1 carries a set bit and SIGUSR2 a clear one. The first process to
signal during a message becomes its sender; signals from anyone else are
ignored until the message is over. Each bit is acknowledged with SIGUSR1,
and with confirmation on a finished message is answered with SIGUSR2.
"""

from __future__ import annotations

import os
import signal
import sys
import time
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager, suppress
from typing import TextIO

from .printf import sprintf
from .protocol import (
    BITS_PER_BYTE,
    LENGTH_SIZE,
    TIMEOUT,
    TransferTimeout,
    bits_to_byte,
    decode_length,
)

__all__ = ["Server", "main"]

_SIGNALS = frozenset({signal.SIGUSR1, signal.SIGUSR2})
_CONFIRM_FLAG = "--confirm"
_CLIENT_TIMEOUT = "Timeout: signal from client may missing."


@contextmanager
def _blocked(signals: Iterable[int]) -> Iterator[None]:
    """Hold *signals* pending for this thread so they can be waited for."""
    previous = signal.pthread_sigmask(signal.SIG_BLOCK, set(signals))
    try:
        yield
    finally:
        signal.pthread_sigmask(signal.SIG_SETMASK, previous)


class Server:
    """Receives messages sent bit by bit and writes them to *out*."""

    def __init__(self, timeout: float = TIMEOUT, confirm: bool = False,
                 out: TextIO | None = None) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self.timeout = timeout
        self.confirm = confirm
        self.out = out if out is not None else sys.stdout
        self.client_pid: int | None = None

    def _print(self, fmt: str, *args: object) -> None:
        self.out.write(sprintf(fmt, *args))
        self.out.flush()

    def _answer(self, signum: int) -> None:
        if self.client_pid is not None:
            with suppress(OSError):
                os.kill(self.client_pid, signum)

    def _next_bit(self) -> int:
        deadline = time.monotonic() + self.timeout
        while True:
            remaining = max(deadline - time.monotonic(), 0.0)
            info = signal.sigtimedwait(_SIGNALS, remaining)
            if info is None:
                raise TransferTimeout(_CLIENT_TIMEOUT)
            if self.client_pid is None:
                self.client_pid = info.si_pid
            if info.si_pid == self.client_pid:
                return 1 if info.si_signo == signal.SIGUSR1 else 0

    def receive_byte(self) -> int:
        """Receive eight bits, acknowledging each, and return the byte."""
        bits = []
        with _blocked(_SIGNALS):
            for _ in range(BITS_PER_BYTE):
                bits.append(self._next_bit())
                self._answer(signal.SIGUSR1)
        return bits_to_byte(bits)

    def receive(self, size: int) -> bytes:
        """Receive exactly *size* bytes."""
        if size < 0:
            raise ValueError("size must not be negative")
        with _blocked(_SIGNALS):
            return bytes(self.receive_byte() for _ in range(size))

    def receive_message(self) -> str | None:
        """Receive one whole message, print it and return its text.

        Returns None when no message arrived in time, when the length field
        is not positive, or when the sender stopped in the middle of it.
        """
        self.client_pid = None
        with _blocked(_SIGNALS):
            try:
                length = decode_length(self.receive(LENGTH_SIZE))
            except TransferTimeout:
                return None
            if length <= 0:
                return None
            try:
                body = self.receive(length)
            except TransferTimeout:
                self._print("%s\n", _CLIENT_TIMEOUT)
                return None
        text = body.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        self._print("[Message length: %i]\n" if self.confirm else "Message length: %i\n",
                    length - 1)
        self._print("[Message:%s]\n", text)
        if self.confirm:
            self._answer(signal.SIGUSR2)
        return text

    def serve_forever(self) -> None:
        """Print the process id, then receive messages until interrupted."""
        with _blocked(_SIGNALS):
            self._print("Server PID: %i\n", os.getpid())
            while True:
                self._print("Waiting for message from client...\n")
                self.receive_message()


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point: server [--confirm]."""
    args = list(sys.argv[1:] if argv is None else argv)
    unknown = [arg for arg in args if arg != _CONFIRM_FLAG]
    if unknown:
        print("Usage: server [--confirm]")
        return 1
    if not hasattr(signal, "sigtimedwait"):
        print("Fail to handle signal.")
        return 1
    try:
        Server(confirm=_CONFIRM_FLAG in args).serve_forever()
    except KeyboardInterrupt:
        return 0
    return 0