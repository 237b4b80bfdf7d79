"""A small printf: %c %s %p %d %i %u %x %X, with any other character after
'%' printed as itself."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from typing import Any

__all__ = ["format_digit", "format_pointer", "sprintf", "printf"]

_LOWER_DIGITS = "0123456789abcdef"
_UPPER_DIGITS = "0123456789ABCDEF"
_NULL_TEXT = "(null)"
_UINT_MASK = 0xFFFFFFFF


def _to_int32(value: int) -> int:
    return (value + 2**31) % 2**32 - 2**31


def _cstr(text: str) -> str:
    return text.split("\0", 1)[0]


def format_digit(number: int, base: int = 10, uppercase: bool = False) -> str:
    """Render *number* in *base* (2 to 16), with a leading '-' when negative."""
    if not 2 <= base <= 16:
        raise ValueError("base must be between 2 and 16")
    digits = _UPPER_DIGITS if uppercase else _LOWER_DIGITS
    sign = "-" if number < 0 else ""
    remaining = abs(number)
    reversed_digits = []
    while True:
        remaining, digit = divmod(remaining, base)
        reversed_digits.append(digits[digit])
        if not remaining:
            break
    return sign + "".join(reversed(reversed_digits))


def format_pointer(address: int | None) -> str:
    """Render an address as '0x' followed by lowercase hex; None is address 0."""
    if address is None:
        address = 0
    if address < 0:
        raise ValueError("an address cannot be negative")
    return "0x" + format_digit(address, 16)


def _take(pending: Iterator[Any], spec: str) -> Any:
    try:
        return next(pending)
    except StopIteration:
        raise TypeError(f"not enough arguments for %{spec}") from None


def _require_int(value: Any, spec: str) -> int:
    if not isinstance(value, int):
        raise TypeError(f"%{spec} needs an int, not {type(value).__name__}")
    return value


def _convert(spec: str, pending: Iterator[Any]) -> str:
    if spec == "c":
        value = _take(pending, spec)
        if isinstance(value, str) and len(value) == 1:
            return value
        return chr(_require_int(value, spec) & 0xFF)
    if spec == "s":
        value = _take(pending, spec)
        if value is None:
            return _NULL_TEXT
        if not isinstance(value, str):
            raise TypeError(f"%s needs a str, not {type(value).__name__}")
        return _cstr(value)
    if spec == "p":
        value = _take(pending, spec)
        return format_pointer(None if value is None else _require_int(value, spec))
    if spec in ("d", "i"):
        return format_digit(_to_int32(_require_int(_take(pending, spec), spec)), 10)
    if spec == "u":
        return format_digit(_require_int(_take(pending, spec), spec) & _UINT_MASK, 10)
    if spec == "x":
        return format_digit(_require_int(_take(pending, spec), spec) & _UINT_MASK, 16)
    if spec == "X":
        return format_digit(_require_int(_take(pending, spec), spec) & _UINT_MASK, 16, True)
    return spec


def sprintf(fmt: str, *args: Any) -> str:
    """Format *args* according to *fmt* and return the text.

    A '%' at the very end of the format is dropped. Surplus arguments are
    ignored; missing ones raise TypeError.
    """
    pending = iter(args)
    chars = iter(_cstr(fmt))
    parts = []
    for char in chars:
        if char != "%":
            parts.append(char)
            continue
        spec = next(chars, None)
        if spec is None:
            break
        parts.append(_convert(spec, pending))
    return "".join(parts)


def printf(fmt: str, *args: Any) -> int:
    """Write the formatted text to standard output and return its size in bytes."""
    text = sprintf(fmt, *args)
    sys.stdout.write(text)
    sys.stdout.flush()
    return len(text.encode("utf-8"))