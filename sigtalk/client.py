"""Send text to a server process, one bit per signal.

A set bit travels as SIGUSR1 and a clear bit as SIGUSR2. After every bit
the client waits for the server's acknowledgement before sending the next.
With confirmation on, the client also waits for a final SIGUSR2 that the
server sends once it has the whole message.
"""

from __future__ import annotations

import os
import signal
import sys
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager

from .printf import printf
from .protocol import (
    LENGTH_SIZE,
    TIMEOUT,
    TransferTimeout,
    byte_to_bits,
    encode_message,
)
from .textutils import atoi

__all__ = ["Client", "main"]

_BIT_SIGNALS = {1: signal.SIGUSR1, 0: signal.SIGUSR2}
_USAGE = "Error: Wrong Format. Enter: [./client <PID> <string>]"
_ACK_TIMEOUT = "Time out: ack signal from server may missing."
_SEND_FAILED = "Fail to send signal to server."
_INVALID_PID = "Error: Invalid PID."
_CONFIRM_FLAG = "--confirm"


@contextmanager
def _blocked(signals: Iterable[int]) -> Iterator[None]:
    """Hold *signals* pending for this thread so they can be waited for."""
    previous = signal.pthread_sigmask(signal.SIG_BLOCK, set(signals))
    try:
        yield
    finally:
        signal.pthread_sigmask(signal.SIG_SETMASK, previous)


class Client:
    """Sends bytes to the server process *pid* and waits for each acknowledgement."""

    def __init__(self, pid: int, timeout: float = TIMEOUT, confirm: bool = False) -> None:
        if pid <= 0:
            raise ValueError(f"invalid server pid {pid}")
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self.pid = pid
        self.timeout = timeout
        self.confirm = confirm
        acks = {signal.SIGUSR1, signal.SIGUSR2} if confirm else {signal.SIGUSR1}
        self._acks = frozenset(acks)

    def _signal(self, signum: int) -> None:
        try:
            os.kill(self.pid, signum)
        except OSError as exc:
            raise ConnectionError(_SEND_FAILED) from exc

    def _await_ack(self) -> int:
        """Wait for one acknowledgement and return the signal that brought it."""
        info = signal.sigtimedwait(self._acks, self.timeout)
        if info is None:
            raise TransferTimeout(_ACK_TIMEOUT)
        return info.si_signo

    def send_byte(self, value: int) -> None:
        """Send one byte, most significant bit first."""
        bits = byte_to_bits(value)
        with _blocked(self._acks):
            for bit in bits:
                self._signal(_BIT_SIGNALS[bit])
                self._await_ack()

    def send(self, data: bytes | bytearray | memoryview) -> None:
        """Send every byte of *data* in order."""
        if isinstance(data, (str, int)):
            raise TypeError("data must be a bytes-like object")
        with _blocked(self._acks):
            for value in bytes(data):
                self.send_byte(value)

    def send_message(self, text: str | bytes) -> int:
        """Send *text* with its length field and return the text length in bytes.

        Raises ProcessLookupError when no process answers at the pid.
        """
        try:
            os.kill(self.pid, 0)
        except OSError as exc:
            raise ProcessLookupError(f"no process with pid {self.pid}") from exc
        packet = encode_message(text)
        with _blocked(self._acks):
            self.send(packet)
            if self.confirm:
                while self._await_ack() != signal.SIGUSR2:
                    pass
        return len(packet) - LENGTH_SIZE - 1


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point: client [--confirm] <PID> <string>."""
    args = list(sys.argv[1:] if argv is None else argv)
    confirm = _CONFIRM_FLAG in args
    args = [arg for arg in args if arg != _CONFIRM_FLAG]
    if len(args) != 2:
        printf("%s\n", _USAGE)
        return 1
    pid_text, text = args
    length = len(encode_message(text)) - LENGTH_SIZE - 1
    printf("[Message length: %i]\n" if confirm else "Message length: %i\n", length)
    try:
        client = Client(atoi(pid_text), confirm=confirm)
        client.send_message(text)
    except (ValueError, ProcessLookupError):
        printf("%s\n", _INVALID_PID)
        return 1
    except TransferTimeout:
        printf("%s\n", _ACK_TIMEOUT)
        return 1
    except ConnectionError:
        printf("%s\n", _SEND_FAILED)
        return 1
    printf("Finish sending.\n")
    if confirm:
        printf("Server already receive message.\n")
    return 0