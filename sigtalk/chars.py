"""Character classification and case conversion for single characters.

Each function accepts either a character code (an int) or a one-character
string. The classification follows the plain ASCII rules, so codes outside
0..127 are never letters, digits or printable.
"""

from __future__ import annotations

__all__ = [
    "isalpha",
    "isdigit",
    "isalnum",
    "isascii",
    "isprint",
    "toupper",
    "tolower",
]

_CASE_OFFSET = ord("a") - ord("A")


def _code(c: int | str) -> int:
    """Return the character code of *c*."""
    if isinstance(c, str):
        if len(c) != 1:
            raise ValueError("expected a single character")
        return ord(c)
    if isinstance(c, int):
        return c
    raise TypeError(f"expected an int or a single character, not {type(c).__name__}")


def _same_kind(original: int | str, code: int) -> int | str:
    """Return *code* as the same kind of value that *original* was."""
    return chr(code) if isinstance(original, str) else code


def isalpha(c: int | str) -> bool:
    """True for an ASCII letter."""
    code = _code(c)
    return ord("A") <= code <= ord("Z") or ord("a") <= code <= ord("z")


def isdigit(c: int | str) -> bool:
    """True for an ASCII decimal digit."""
    code = _code(c)
    return ord("0") <= code <= ord("9")


def isalnum(c: int | str) -> bool:
    """True for an ASCII letter or digit."""
    return isalpha(c) or isdigit(c)


def isascii(c: int | str) -> bool:
    """True for a code in the 7-bit ASCII range."""
    return 0 <= _code(c) <= 127


def isprint(c: int | str) -> bool:
    """True for a printable ASCII character, space included."""
    return 32 <= _code(c) <= 126


def toupper(c: int | str) -> int | str:
    """Map a lowercase ASCII letter to uppercase; leave anything else alone."""
    code = _code(c)
    if ord("a") <= code <= ord("z"):
        code -= _CASE_OFFSET
    return _same_kind(c, code)


def tolower(c: int | str) -> int | str:
    """Map an uppercase ASCII letter to lowercase; leave anything else alone."""
    code = _code(c)
    if ord("A") <= code <= ord("Z"):
        code += _CASE_OFFSET
    return _same_kind(c, code)