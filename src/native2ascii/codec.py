"""``\\uXXXX`` escape codec over UTF-16 code units."""

from __future__ import annotations

import re

# Uppercase hex digits are not part of a token.
_TOKEN_RE = re.compile(r"(\\u[0-9a-f]{4})")


def escape_if_needed(code_unit: int) -> str | None:
    """Return the escape token for *code_unit*, or None if it is ASCII."""
    if code_unit <= 0x7F:
        return None
    return f"\\u{code_unit & 0xFFFF:04x}"


def unescape_all(text: str) -> str:
    """Replace every ``\\uXXXX`` token in *text* with the code unit it names."""
    parts = _TOKEN_RE.split(text)
    # re.split with one capture group puts the matched tokens at odd indices
    for i in range(1, len(parts), 2):
        parts[i] = chr(int(parts[i][2:], 16))
    return from_code_units("".join(parts))


def to_code_units(text: str) -> str:
    """Split supplementary characters into their two surrogate halves.

    The result has one character per UTF-16 code unit.
    """
    if text.isascii():
        return text
    data = text.encode("utf-16-le", "surrogatepass")
    return "".join(
        chr(int.from_bytes(data[i : i + 2], "little")) for i in range(0, len(data), 2)
    )


def from_code_units(text: str) -> str:
    """Recombine adjacent surrogate halves into supplementary characters.

    Lone surrogates are kept as they are.
    """
    if text.isascii():
        return text
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")
