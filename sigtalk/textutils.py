"""String helpers with C library semantics: parsing, searching, copying and splitting."""

from __future__ import annotations

from itertools import zip_longest

__all__ = [
    "atoi",
    "itoa",
    "split",
    "strtrim",
    "substr",
    "strnstr",
    "strncmp",
    "memcmp",
    "strlcpy",
    "strlcat",
    "strchr",
    "strrchr",
]

_WHITESPACE = frozenset(" \t\n\v\f\r")
_DIGITS = frozenset("0123456789")
_LONG_MAX = 2**63 - 1
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def _to_int32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range."""
    return (value - _INT_MIN) % 2**32 + _INT_MIN


def _cstr(text: str) -> str:
    """Return the part of *text* before any embedded NUL character."""
    return text.split("\0", 1)[0]


def _as_bytes(data: str | bytes | bytearray | memoryview) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _single_char(ch: str) -> str:
    if not isinstance(ch, str) or len(ch) != 1:
        raise ValueError("expected a single character")
    return ch


def atoi(text: str) -> int:
    """Parse a leading decimal integer the way the C library does.

    Leading whitespace is skipped and one optional sign is accepted; parsing
    stops at the first non-digit. If the magnitude overflows a 64-bit long,
    -1 is returned for positive input and 0 for negative input. The result is
    otherwise truncated to a signed 32-bit integer.
    """
    text = _cstr(text)
    pos = 0
    while pos < len(text) and text[pos] in _WHITESPACE:
        pos += 1
    negative = False
    if pos < len(text) and text[pos] in "+-":
        negative = text[pos] == "-"
        pos += 1
    number = 0
    for char in text[pos:]:
        if char not in _DIGITS:
            break
        number = number * 10 + (ord(char) - ord("0"))
        if number > _LONG_MAX:
            return 0 if negative else -1
    result = _to_int32(number)
    return _to_int32(-result) if negative else result


def itoa(n: int) -> str:
    """Return the decimal text of a signed 32-bit integer."""
    if not _INT_MIN <= n <= _INT_MAX:
        raise OverflowError(f"{n} does not fit in a signed 32-bit integer")
    return str(n)


def split(text: str, sep: str) -> list[str]:
    """Split *text* on *sep*, dropping the empty pieces between separators."""
    sep = _single_char(sep)
    text = _cstr(text)
    return [word for word in text.split(sep) if word]


def strtrim(text: str | None, charset: str | None) -> str | None:
    """Strip every leading and trailing character found in *charset*.

    When either argument is None, *text* is returned unchanged.
    """
    if text is None or charset is None:
        return text
    text = _cstr(text)
    charset = _cstr(charset)
    if not charset:
        return text
    return text.strip(charset)


def substr(text: str, start: int, length: int) -> str:
    """Return at most *length* characters of *text* beginning at *start*.

    A start at or past the end of the text yields an empty string.
    """
    if start < 0 or length < 0:
        raise ValueError("start and length must not be negative")
    text = _cstr(text)
    if start >= len(text):
        return ""
    return text[start:start + length]


def strnstr(haystack: str, needle: str, length: int) -> int | None:
    """Find *needle* wholly inside the first *length* characters of *haystack*.

    Returns the index of the first match, 0 for an empty needle, or None.
    """
    if length < 0:
        raise ValueError("length must not be negative")
    haystack = _cstr(haystack)
    needle = _cstr(needle)
    if not needle:
        return 0
    index = haystack[:length].find(needle)
    return None if index < 0 else index


def strncmp(s1: str | bytes, s2: str | bytes, n: int) -> int:
    """Compare at most *n* bytes of two strings, stopping at a NUL.

    Returns the difference of the first unequal bytes (as unsigned values),
    or 0 when the compared parts are equal.
    """
    if n < 0:
        raise ValueError("n must not be negative")
    left = _as_bytes(s1)[:n]
    right = _as_bytes(s2)[:n]
    for a, b in zip_longest(left, right, fillvalue=0):
        if a != b:
            return a - b
        if a == 0:
            return 0
    return 0


def memcmp(b1: bytes | bytearray | memoryview, b2: bytes | bytearray | memoryview, n: int) -> int:
    """Compare the first *n* bytes of two buffers, NUL bytes included."""
    if n < 0:
        raise ValueError("n must not be negative")
    left = bytes(b1)
    right = bytes(b2)
    if len(left) < n or len(right) < n:
        raise ValueError("buffer shorter than the number of bytes to compare")
    for a, b in zip(left[:n], right[:n]):
        if a != b:
            return a - b
    return 0


def strlcpy(src: str, size: int) -> tuple[str, int]:
    """Copy *src* into a buffer of *size* characters including the terminator.

    Returns the copied text and the full length of *src*, so a returned
    length of at least *size* means the copy was truncated.
    """
    if size < 0:
        raise ValueError("size must not be negative")
    src = _cstr(src)
    copied = src[:size - 1] if size else ""
    return copied, len(src)


def strlcat(dst: str, src: str, size: int) -> tuple[str, int]:
    """Append *src* to *dst* within a buffer of *size* characters.

    Returns the resulting text and the length it tried to create. When
    *size* is not larger than *dst*, nothing is appended and the length
    returned is *size* plus the length of *src*.
    """
    if size < 0:
        raise ValueError("size must not be negative")
    dst = _cstr(dst)
    src = _cstr(src)
    if size <= len(dst):
        return dst, size + len(src)
    room = size - len(dst) - 1
    return dst + src[:room], len(dst) + len(src)


def strchr(text: str, ch: str) -> int | None:
    """Return the index of the first *ch* in *text*, or None.

    Searching for the NUL character finds the terminator at the end.
    """
    ch = _single_char(ch)
    text = _cstr(text)
    if ch == "\0":
        return len(text)
    index = text.find(ch)
    return None if index < 0 else index


def strrchr(text: str, ch: str) -> int | None:
    """Return the index of the last *ch* in *text*, or None.

    Searching for the NUL character finds the terminator at the end.
    """
    ch = _single_char(ch)
    text = _cstr(text)
    if ch == "\0":
        return len(text)
    index = text.rfind(ch)
    return None if index < 0 else index