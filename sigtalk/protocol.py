"""Wire format shared by the signal client and server.

A message travels as its length (text length plus one, a little-endian
32-bit signed integer) followed by the text and a terminating NUL byte.
Every byte is sent as eight bits, most significant first; the receiver
acknowledges each bit.
"""

from __future__ import annotations

import struct
from collections.abc import Iterable

__all__ = [
    "TIMEOUT",
    "BITS_PER_BYTE",
    "LENGTH_SIZE",
    "ProtocolError",
    "TransferTimeout",
    "byte_to_bits",
    "bits_to_byte",
    "encode_message",
    "decode_length",
]

TIMEOUT = 10.0
BITS_PER_BYTE = 8
LENGTH_SIZE = 4

_LENGTH = struct.Struct("<i")
_INT_MAX = 2**31 - 1


class ProtocolError(ValueError):
    """Data that does not follow the wire format."""


class TransferTimeout(TimeoutError):
    """The other side stopped answering in the middle of a transfer."""


def byte_to_bits(value: int) -> tuple[int, ...]:
    """Return the eight bits of a byte, most significant first.

    Signed values from -128 are accepted and sent as their two's complement.
    """
    if not -128 <= value <= 255:
        raise ProtocolError(f"{value} does not fit in one byte")
    value &= 0xFF
    return tuple((value >> shift) & 1 for shift in reversed(range(BITS_PER_BYTE)))


def bits_to_byte(bits: Iterable[int]) -> int:
    """Assemble eight bits, most significant first, into a value 0..255."""
    collected = list(bits)
    if len(collected) != BITS_PER_BYTE:
        raise ProtocolError(f"expected {BITS_PER_BYTE} bits, got {len(collected)}")
    value = 0
    for bit in collected:
        if bit not in (0, 1):
            raise ProtocolError(f"invalid bit {bit!r}")
        value = (value << 1) | bit
    return value


def encode_message(text: str | bytes) -> bytes:
    """Return the full wire form of *text*: length field, text and NUL.

    Text after an embedded NUL is not part of the message.
    """
    payload = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    payload = payload.split(b"\0", 1)[0]
    length = len(payload) + 1
    if length > _INT_MAX:
        raise ProtocolError("message too long")
    return _LENGTH.pack(length) + payload + b"\0"


def decode_length(data: bytes | bytearray) -> int:
    """Decode the length field that opens a message."""
    if len(data) != LENGTH_SIZE:
        raise ProtocolError(f"length field must be {LENGTH_SIZE} bytes, got {len(data)}")
    return _LENGTH.unpack(bytes(data))[0]