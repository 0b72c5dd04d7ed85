"""ASCII-oriented string helpers used by the parser and the lexer.

Character predicates accept either a one-character ``str`` or an ``int``
byte value, so they work when iterating over ``str`` and ``bytes`` alike.
"""

from __future__ import annotations

from typing import Callable, Union

CharLike = Union[str, int]

_ASCII_UPPER = str.maketrans(
    "abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)


def _code(c: CharLike) -> int:
    return c if isinstance(c, int) else ord(c)


def starts_with(text: str, prefix: str) -> bool:
    """Return True if ``text`` begins with ``prefix``."""
    return text.startswith(prefix)


def ends_with(text: str, suffix: str) -> bool:
    """Return True if ``text`` ends with ``suffix``."""
    return text.endswith(suffix)


def contains(text: str, part: str) -> bool:
    """Return True if ``part`` occurs in ``text``."""
    return part in text


def is_alpha(text: str) -> bool:
    """Return True if every character is an ASCII letter or underscore."""
    return all(is_alpha_ascii(c) or c == "_" for c in text)


def to_upper(text: str) -> str:
    """Return ``text`` with ASCII letters upper-cased."""
    return text.translate(_ASCII_UPPER)


def is_integer(text: str) -> bool:
    """Return True if every character is an ASCII digit."""
    return all(is_numeric_ascii(c) for c in text)


def is_float(text: str) -> bool:
    """Return True if ``text`` is digits with exactly one decimal point."""
    if not all(is_numeric_ascii(c) or c == "." for c in text):
        return False
    return text.count(".") == 1


def is_ascii(c: CharLike) -> bool:
    return _code(c) < 0x80


def is_lower_alpha_ascii(c: CharLike) -> bool:
    return 0x61 <= _code(c) <= 0x7A


def is_upper_alpha_ascii(c: CharLike) -> bool:
    return 0x41 <= _code(c) <= 0x5A


def is_alpha_ascii(c: CharLike) -> bool:
    """Return True for an ASCII letter."""
    return is_lower_alpha_ascii(c) or is_upper_alpha_ascii(c)


def is_numeric_ascii(c: CharLike) -> bool:
    """Return True for an ASCII decimal digit."""
    return 0x30 <= _code(c) <= 0x39


def is_hex_digit(c: CharLike) -> bool:
    """Return True for an ASCII hexadecimal digit."""
    code = _code(c)
    return is_numeric_ascii(code) or 0x61 <= code <= 0x66 or 0x41 <= code <= 0x46


def is_alpha_numeric_ascii(c: CharLike) -> bool:
    return is_alpha_ascii(c) or is_numeric_ascii(c)


def is_word_char_ascii(c: CharLike) -> bool:
    """Return True for an ASCII letter, digit or underscore."""
    return is_alpha_numeric_ascii(c) or _code(c) == 0x5F


def is_valid_identifier_begin(c: CharLike) -> bool:
    return is_alpha_ascii(c) or _code(c) == 0x5F


_WHITESPACE = frozenset(b" \t\n\r\f\v")
_WHITESPACE_ONE_LINE = frozenset(b" \t\f\v")


def is_whitespace_ascii(c: CharLike) -> bool:
    """Return True for ASCII space, tab, newline, CR, form feed or VT."""
    return _code(c) in _WHITESPACE


def is_whitespace_ascii_one_line(c: CharLike) -> bool:
    return _code(c) in _WHITESPACE_ONE_LINE


def is_control_ascii(c: CharLike) -> bool:
    return _code(c) <= 31


def is_printable_ascii(c: CharLike) -> bool:
    return 32 <= _code(c) <= 126


def is_punctuation_ascii(c: CharLike) -> bool:
    code = _code(c)
    return (
        33 <= code <= 47
        or 58 <= code <= 64
        or 91 <= code <= 96
        or 123 <= code <= 125
    )


def is_number_separator(
    is_start_of_block: bool, is_hex: bool, data: Union[str, bytes], pos: int
) -> bool:
    """Return True if ``data[pos]`` is an underscore separating digits."""
    if _code(data[pos]) != 0x5F:
        return False
    if is_start_of_block:
        return False
    if pos + 1 == len(data):
        return False
    following = data[pos + 1]
    digit = is_hex_digit if is_hex else is_numeric_ascii
    return digit(following)


def skip_whitespaces_utf8(data: bytes, pos: int) -> int:
    """Return the position after ASCII and UTF-8 whitespace starting at ``pos``."""
    end = len(data)
    while pos < end:
        b0 = data[pos]
        if is_whitespace_ascii(b0):
            pos += 1
            continue
        if pos + 1 < end and b0 == 0xC2 and data[pos + 1] in (0x85, 0xA0):
            pos += 2
            continue
        if pos + 2 < end:
            b1, b2 = data[pos + 1], data[pos + 2]
            three_byte = (
                (b0 == 0xE1 and b1 == 0xA0 and b2 == 0x8E)
                or (
                    b0 == 0xE2
                    and (
                        (
                            b1 == 0x80
                            and (
                                0x80 <= b2 <= 0x8A
                                or 0xA8 <= b2 <= 0xA9
                                or 0x8B <= b2 <= 0x8D
                                or b2 == 0xAF
                            )
                        )
                        or (b1 == 0x81 and b2 in (0x9F, 0xA0))
                    )
                )
                or (b0 == 0xE3 and b1 == 0x80 and b2 == 0x80)
                or (b0 == 0xEF and b1 == 0xBB and b2 == 0xBF)
            )
            if three_byte:
                pos += 3
                continue
        break
    return pos


def is_valid_identifier(text: str) -> bool:
    """Return True for a non-empty word starting with a letter or underscore, other than NULL."""
    if not text or not is_valid_identifier_begin(text[0]):
        return False
    if not all(is_word_char_ascii(c) for c in text[1:]):
        return False
    return to_upper(text) != "NULL"


def is_all_ascii(data: Union[bytes, bytearray, str]) -> bool:
    """Return True if every byte or character is below 0x80."""
    return all(_code(c) < 0x80 for c in data)


def ordinal_suffix(n: int) -> str:
    """Return the English ordinal suffix for a non-negative integer."""
    if n < 0:
        raise ValueError("ordinal_suffix requires a non-negative integer")
    last_digit = n % 10
    if last_digit < 1 or last_digit > 3 or (n > 10 and (n // 10) % 10 == 1):
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}[last_digit]


def trim(text: str, char: Union[str, Callable[[str], bool]] = " ") -> str:
    """Strip ``char`` (or characters matching a predicate) from both ends."""
    if callable(char):
        start = 0
        while start < len(text) and char(text[start]):
            start += 1
        stop = len(text)
        while stop > start and char(text[stop - 1]):
            stop -= 1
        return text[start:stop]
    if len(char) != 1:
        raise ValueError("trim expects a single character")
    return text.strip(char)


def equals_case_insensitive(a: str, b: str) -> bool:
    """Compare two characters ignoring ASCII case."""
    return a == b or (is_alpha_ascii(a) and chr(ord(a) ^ 0x20) == b)