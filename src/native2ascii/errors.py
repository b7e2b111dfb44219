"""Error types raised by the transcoding core."""

from __future__ import annotations

from collections.abc import Iterable


class UnknownLanguageTag(Exception):
    """Raised when a comment language tag has no registered grammar."""

    def __init__(self, tag: str, known: Iterable[str] = ()) -> None:
        self.tag = tag
        self.known = tuple(sorted(known))
        super().__init__(self.format())

    def format(self) -> str:
        result = f"error: unknown comment language {self.tag!r}"
        if self.known:
            result += f"\n  known languages: {', '.join(self.known)}"
        return result


class GrammarError(Exception):
    """Raised when a user-defined comment grammar is malformed."""

    def __init__(self, tag: str | None, message: str) -> None:
        self.tag = tag
        self.message = message
        super().__init__(self.format())

    def format(self, filename: str = "native2ascii.toml") -> str:
        table = "languages" if self.tag is None else f"languages.{self.tag}"
        return f"error: {self.message}\n  --> {filename}: [{table}]"
