"""native2ascii: convert text to and from ``\\uXXXX`` escaped ASCII."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from native2ascii.grammars import CommentGrammar

__version__ = "0.1.0"


def encode(
    text: str,
    comment_language: str | None = None,
    grammars: Mapping[str, CommentGrammar] | None = None,
) -> str:
    """Escape non-ASCII code units of *text* as ``\\uXXXX``.

    With *comment_language*, text inside that language's comments is left
    as-is. Raises UnknownLanguageTag if the tag is not in *grammars*
    (the built-in registry by default).
    """
    from native2ascii.codec import escape_if_needed, from_code_units, to_code_units
    from native2ascii.grammars import get_grammar
    from native2ascii.scanner import Scanner

    if not comment_language:
        out = []
        for ch in to_code_units(text):
            token = escape_if_needed(ord(ch))
            out.append(ch if token is None else token)
        return from_code_units("".join(out))

    grammar = get_grammar(comment_language, grammars)
    return Scanner(text, grammar).encode()


def decode(text: str) -> str:
    """Turn every ``\\uXXXX`` token in *text* back into its character."""
    from native2ascii.codec import unescape_all

    return unescape_all(text)
