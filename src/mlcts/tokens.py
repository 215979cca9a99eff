"""
Tokens, syllables and parses produced by the MLCTS tokenizer.

Usage:
    from mlcts.tokens import TokenKind, Token, Syllable, Parse

    parses = tokenize("kambha")
    for p in parses:
        print(p.mlcts, p.syllable_count, p.implicit_stacks)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator


class TokenKind(enum.Enum):
    INITIAL_CONSONANT = "initial"
    MEDIAL = "medial"
    VOWEL_SIGN = "vowel"
    FINAL_CONSONANT = "final"
    TONE_MARK = "tone"
    STACK_MARKER = "stack"
    WORD_BOUNDARY_HINT = "boundary"


@dataclass(frozen=True, slots=True)
class Token:
    """One MLCTS grapheme with its span in the input."""

    kind: TokenKind
    text: str  # MLCTS grapheme; "" for implicit tokens
    start: int
    end: int
    variant: int = 0  # index into the catalog's Myanmar candidates
    closed: bool = False  # vowel signs only: closed by a stacked coda

    @property
    def implicit(self) -> bool:
        return self.start == self.end

    def __repr__(self) -> str:
        extra = ""
        if self.variant:
            extra += f" v{self.variant}"
        if self.closed:
            extra += " closed"
        return f"Token({self.kind.value} {self.text!r} {self.start}:{self.end}{extra})"


@dataclass(frozen=True, slots=True)
class Syllable:
    """An ordered run of tokens forming one Burmese syllable."""

    tokens: tuple[Token, ...]

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def _of_kind(self, kind: TokenKind) -> list[Token]:
        return [t for t in self.tokens if t.kind is kind]

    def _first(self, kind: TokenKind) -> Token | None:
        for t in self.tokens:
            if t.kind is kind:
                return t
        return None

    @property
    def start(self) -> int:
        return self.tokens[0].start

    @property
    def end(self) -> int:
        return self.tokens[-1].end

    @property
    def text(self) -> str:
        return "".join(t.text for t in self.tokens)

    @property
    def initial(self) -> Token | None:
        return self._first(TokenKind.INITIAL_CONSONANT)

    @property
    def stacked(self) -> list[Token]:
        """Consonants written under the initial, top to bottom."""
        return self._of_kind(TokenKind.INITIAL_CONSONANT)[1:]

    @property
    def medials(self) -> list[Token]:
        return self._of_kind(TokenKind.MEDIAL)

    @property
    def vowel(self) -> Token | None:
        return self._first(TokenKind.VOWEL_SIGN)

    @property
    def final(self) -> Token | None:
        return self._first(TokenKind.FINAL_CONSONANT)

    @property
    def tone(self) -> Token | None:
        return self._first(TokenKind.TONE_MARK)

    @property
    def implicit_stack(self) -> bool:
        return any(
            t.kind is TokenKind.STACK_MARKER and t.implicit for t in self.tokens
        )

    @property
    def variant_count(self) -> int:
        return sum(1 for t in self.tokens if t.variant)

    @property
    def sort_key(self) -> tuple:
        return (
            self.text,
            tuple((t.kind.value, t.text, t.variant, t.closed) for t in self.tokens),
        )

    def __repr__(self) -> str:
        return f"Syllable({self.text!r} {self.start}:{self.end})"


@dataclass(frozen=True, slots=True)
class Parse:
    """One complete segmentation of a word into syllables."""

    syllables: tuple[Syllable, ...]

    def __iter__(self) -> Iterator[Syllable]:
        return iter(self.syllables)

    def __len__(self) -> int:
        return len(self.syllables)

    @property
    def start(self) -> int:
        return self.syllables[0].start

    @property
    def end(self) -> int:
        return self.syllables[-1].end

    @property
    def syllable_count(self) -> int:
        return len(self.syllables)

    @property
    def tokens(self) -> list[Token]:
        return [t for s in self.syllables for t in s.tokens]

    @property
    def mlcts(self) -> str:
        return "|".join(s.text for s in self.syllables)

    @property
    def implicit_stacks(self) -> int:
        return sum(1 for s in self.syllables if s.implicit_stack)

    @property
    def variant_count(self) -> int:
        return sum(s.variant_count for s in self.syllables)

    @property
    def sort_key(self) -> tuple:
        return tuple(s.sort_key for s in self.syllables)

    def __repr__(self) -> str:
        return f"Parse({self.mlcts!r})"


@dataclass(frozen=True, slots=True)
class GraphemeCluster:
    """The Myanmar rendering of one syllable."""

    text: str
    syllable_index: int = 0

    @property
    def codepoints(self) -> list[str]:
        return [f"U+{ord(ch):04X}" for ch in self.text]

    def __str__(self) -> str:
        return self.text
