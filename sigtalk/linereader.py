"""Line-by-line reading from a stream or file descriptor with a fixed read size."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from typing import IO, AnyStr, Generic, Union

__all__ = ["DEFAULT_BUFFER_SIZE", "LineReader", "read_lines"]

DEFAULT_BUFFER_SIZE = 10

Source = Union[int, IO[bytes], IO[str]]


def _reader_for(stream: Source) -> Callable[[int], AnyStr]:
    if isinstance(stream, bool):
        raise TypeError("a stream or file descriptor is required")
    if isinstance(stream, int):
        if stream < 0:
            raise ValueError("file descriptor must not be negative")
        return lambda size: os.read(stream, size)
    read = getattr(stream, "read", None)
    if not callable(read):
        raise TypeError("a stream must have a read() method")
    return read


def _newline_index(data: str | bytes) -> int:
    """Return the index of the first newline in *data*, or -1 if there is none."""
    if isinstance(data, str):
        return data.find("\n")
    return data.find(b"\n")


class LineReader(Generic[AnyStr]):
    """Return one line at a time, newline included, reading *buffer_size* at a time.

    Data read past the end of the current line is kept for the next call.
    Once the stream is exhausted the reader returns None, but a later call
    reads again, so data that arrives afterwards is still delivered.
    """

    def __init__(self, stream: Source, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self._read = _reader_for(stream)
        self._buffer_size = buffer_size
        self._pending: AnyStr | None = None

    def _fill(self) -> None:
        """Read until a newline is buffered or the stream has nothing more."""
        pending = self._pending
        while pending is None or _newline_index(pending) < 0:
            chunk = self._read(self._buffer_size)
            if not chunk:
                break
            pending = chunk if pending is None else pending + chunk
        self._pending = pending

    def next_line(self) -> AnyStr | None:
        """Return the next line, or None when there is nothing left to read."""
        self._fill()
        pending = self._pending
        if not pending:
            self._pending = None
            return None
        end = _newline_index(pending)
        if end < 0:
            self._pending = None
            return pending
        line, rest = pending[:end + 1], pending[end + 1:]
        self._pending = rest or None
        return line

    def __iter__(self) -> Iterator[AnyStr]:
        while (line := self.next_line()) is not None:
            yield line


def read_lines(stream: Source, buffer_size: int = DEFAULT_BUFFER_SIZE) -> Iterator[AnyStr]:
    """Yield every line of *stream*, newline included."""
    yield from LineReader(stream, buffer_size)