"""Comment-aware scanner: decides per code unit whether to escape it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from native2ascii.codec import escape_if_needed, from_code_units, to_code_units
from native2ascii.grammars import CommentGrammar


class ScanState(Enum):
    CODE = auto()
    MULTI_LINE_COMMENT = auto()
    SINGLE_LINE_COMMENT = auto()


@dataclass(frozen=True, slots=True)
class Region:
    """Half-open range of code units [start, end) sharing one scan state."""

    state: ScanState
    start: int
    end: int


class Scanner:
    """Track comment regions over a source string in one left-to-right pass.

    Positions are UTF-16 code unit offsets, so a supplementary character
    occupies two positions. Ending inside a comment is not an error.
    """

    def __init__(self, source: str, grammar: CommentGrammar) -> None:
        self._units = to_code_units(source)
        self._grammar = grammar
        self._pos = 0
        self._state = ScanState.CODE

    def states(self) -> list[ScanState]:
        """Return the scan state after the transition at each position."""
        self._pos = 0
        self._state = ScanState.CODE
        result: list[ScanState] = []
        while self._pos < len(self._units):
            self._step()
            result.append(self._state)
            self._pos += 1
        return result

    def encode(self) -> str:
        """Escape non-ASCII code units that lie outside comments."""
        out: list[str] = []
        for ch, state in zip(self._units, self.states()):
            token = escape_if_needed(ord(ch)) if state == ScanState.CODE else None
            out.append(ch if token is None else token)
        return from_code_units("".join(out))

    def regions(self) -> list[Region]:
        """Group consecutive positions with the same state into regions."""
        result: list[Region] = []
        start = 0
        states = self.states()
        for i in range(1, len(states) + 1):
            if i == len(states) or states[i] != states[start]:
                result.append(Region(states[start], start, i))
                start = i
        return result

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _step(self) -> None:
        ml = self._grammar.multi_line
        sl = self._grammar.single_line

        if self._state == ScanState.CODE and self._at_any(ml.starts):
            self._state = ScanState.MULTI_LINE_COMMENT
        elif self._state == ScanState.CODE and self._at_any(sl.starts):
            self._state = ScanState.SINGLE_LINE_COMMENT
        elif self._at_any(ml.ends):
            # Fires in every state, so a stray end delimiter in code or in a
            # single-line comment also lands in CODE.
            self._state = ScanState.CODE
        elif self._state == ScanState.SINGLE_LINE_COMMENT and self._at_any(sl.ends):
            self._state = ScanState.CODE

    def _at_any(self, delimiters: tuple[str, ...]) -> bool:
        return any(self._units.startswith(d, self._pos) for d in delimiters)
