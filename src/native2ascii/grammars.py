"""Comment grammars: delimiter sets per source language tag."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from native2ascii.errors import GrammarError, UnknownLanguageTag


@dataclass(frozen=True, slots=True)
class Delimiters:
    """Strings that open and close one kind of comment."""

    starts: tuple[str, ...]
    ends: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class CommentGrammar:
    """Multi-line and single-line comment syntax of one language."""

    tag: str
    multi_line: Delimiters
    single_line: Delimiters


def _builtin_grammars() -> dict[str, CommentGrammar]:
    return {
        "default": CommentGrammar(
            tag="default",
            multi_line=Delimiters(starts=("/*",), ends=("*/",)),
            single_line=Delimiters(starts=("//",), ends=("\n",)),
        ),
        "python": CommentGrammar(
            tag="python",
            multi_line=Delimiters(starts=("'''", '"""'), ends=("'''", '"""')),
            single_line=Delimiters(starts=("#",), ends=("\n",)),
        ),
    }


GRAMMARS: Mapping[str, CommentGrammar] = MappingProxyType(_builtin_grammars())


def get_grammar(tag: str, registry: Mapping[str, CommentGrammar] | None = None) -> CommentGrammar:
    """Look up the grammar registered for *tag*."""
    if registry is None:
        registry = GRAMMARS
    try:
        return registry[tag]
    except KeyError:
        raise UnknownLanguageTag(tag, registry.keys()) from None


def build_registry(extra: Any = None) -> Mapping[str, CommentGrammar]:
    """Return a new read-only registry of the built-ins plus *extra* grammars.

    *extra* has the shape of the ``[languages]`` table of a config file::

        {"sql": {"multi_line": {"starts": ["/*"], "ends": ["*/"]},
                 "single_line": {"starts": ["--"]}}}

    User grammars replace built-ins of the same tag.
    """
    if extra is not None and not isinstance(extra, Mapping):
        raise GrammarError(None, "languages must be a table of language tables")
    grammars = _builtin_grammars()
    for tag, table in (extra or {}).items():
        grammars[str(tag)] = _grammar_from_table(str(tag), table)
    return MappingProxyType(grammars)


def _grammar_from_table(tag: str, table: Any) -> CommentGrammar:
    if not isinstance(table, Mapping):
        raise GrammarError(tag, f"language {tag!r} must be a table")
    return CommentGrammar(
        tag=tag,
        multi_line=_delimiters_from_table(tag, table, "multi_line", default_ends=None),
        single_line=_delimiters_from_table(tag, table, "single_line", default_ends=("\n",)),
    )


def _delimiters_from_table(
    tag: str,
    table: Mapping[str, Any],
    key: str,
    default_ends: tuple[str, ...] | None,
) -> Delimiters:
    section = table.get(key)
    if not isinstance(section, Mapping):
        raise GrammarError(tag, f"language {tag!r} is missing a {key} table")

    starts = _string_list(tag, key, "starts", section.get("starts"))
    if not starts:
        raise GrammarError(tag, f"{key}.starts of language {tag!r} must not be empty")

    raw_ends = section.get("ends")
    if raw_ends is None and default_ends is not None:
        ends = default_ends
    else:
        ends = _string_list(tag, key, "ends", raw_ends)
        if not ends:
            raise GrammarError(tag, f"{key}.ends of language {tag!r} must not be empty")

    return Delimiters(starts=starts, ends=ends)


def _string_list(tag: str, key: str, field: str, value: Any) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise GrammarError(tag, f"{key}.{field} of language {tag!r} must be a list of non-empty strings")
    return tuple(value)
