"""
Segment an MLCTS word into candidate syllable parses.

Graphemes are matched longest-first and never split. The only ambiguity
is where one syllable ends and the next begins:

    kana  →  ka|na   or   kan|a
    kambha → kam|bha  or  ka|m+bha (implicit stack)

Every segmentation is returned; choosing between them is the resolver's
job. The tokenizer knows syllable shape but not Myanmar spelling rules,
so some of its parses may still be rejected by the generator.

Usage:
    from mlcts.tokenizer import tokenize, TokenizerConfig

    for parse in tokenize("kambha"):
        print(parse.mlcts)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from mlcts.catalog import (
    ALPHABET, CLOSED_PREFIX, FINAL_KEYS, FINAL_MAP, FINALS_BY_NUCLEUS,
    IMPLICIT_INITIAL, INDEPENDENT_VOWELS, INITIAL_KEYS, INITIAL_MAP,
    NUCLEUS_KEYS, SEPARATORS, SONORANTS,
    STACK_MARKER, TONE_MARKS, can_stack, longest_match,
)
from mlcts.errors import AmbiguityOverflow, LexError
from mlcts.tokens import Parse, Syllable, Token, TokenKind


@dataclass(frozen=True, slots=True)
class TokenizerConfig:
    max_candidates: int = 256
    implicit_stacking: bool = True
    # None leaves the choice to the caller: the Transliterator switches
    # variants on whenever it has a dictionary to choose between them.
    expand_variants: bool | None = None

    def __post_init__(self):
        if self.max_candidates < 1:
            raise ValueError(f"max_candidates must be positive, got {self.max_candidates}")

    @classmethod
    def from_dict(cls, raw: dict) -> TokenizerConfig:
        """Build from a [tokenizer] config table; unknown keys are an error."""
        unknown = set(raw) - {"max_candidates", "implicit_stacking", "expand_variants"}
        if unknown:
            raise ValueError(f"unknown tokenizer settings: {sorted(unknown)}")
        return cls(**raw)


def scan(word: str, offset: int = 0) -> None:
    """Raise LexError at the first character outside the MLCTS alphabet."""
    for i, ch in enumerate(word):
        if ch.lower() not in ALPHABET:
            raise LexError(offset + i, ch, word)


def tokenize(
    word: str,
    *,
    offset: int = 0,
    config: TokenizerConfig | None = None,
) -> list[Parse]:
    """Return every syllable segmentation of a single MLCTS word.

    `offset` is the word's position in the full input, used for token spans
    and error offsets. Raises LexError at the furthest offset reached when
    the word cannot be segmented at all. Whitespace is not part of a word.
    """
    config = config or TokenizerConfig()
    scan(word, offset)
    if not word:
        return []
    segmenter = _Segmenter(word.lower(), offset, config)
    parses = segmenter.run()
    if not parses:
        pos = segmenter.furthest
        raise LexError(offset + pos, word[pos:pos + 1], word, reason="cannot segment at")
    return parses


# ── Segmentation ────────────────────────────────────────────────────

def _spells_independent_vowel(syllable: Syllable) -> bool:
    """True if an open syllable's rhyme has its own vowel letter."""
    vowel = syllable.vowel
    if syllable.final is not None or vowel.closed:
        return False
    tone = syllable.tone.text if syllable.tone else ""
    return (vowel.text, tone) in INDEPENDENT_VOWELS


# A syllable candidate: the syllable, where the next one starts, and
# whether the next onset must be a stacked coda.
_Option = tuple[Syllable, int, bool]


class _Segmenter:
    """Depth-first search over syllable boundaries, memoised by position."""

    def __init__(self, text: str, offset: int, config: TokenizerConfig):
        self.text = text
        self.offset = offset
        self.config = config
        self._memo: dict[tuple[int, bool], list[tuple[Syllable, ...]]] = {}
        # Rightmost position a syllable was tried at.
        self.furthest = 0

    def run(self) -> list[Parse]:
        return [Parse(syllables=s) for s in self._parse_from(0, False)]

    def _parse_from(self, pos: int, after_closed: bool) -> list[tuple[Syllable, ...]]:
        key = (pos, after_closed)
        if key in self._memo:
            return self._memo[key]
        self.furthest = max(self.furthest, pos)

        if pos == len(self.text):
            # A closed vowel needs a following stacked onset.
            result = [] if after_closed else [()]
            self._memo[key] = result
            return result

        # Every memoised state is reachable from the start, so a suffix
        # list over the bound means the full word is over it too.
        limit = self.config.max_candidates
        result: list[tuple[Syllable, ...]] = []
        for syllable, end, closes in self._syllables_at(pos, after_closed):
            for rest in self._parse_from(end, closes):
                result.append((syllable, *rest))
                if len(result) > limit:
                    raise AmbiguityOverflow(limit, self.text)
        self._memo[key] = result
        return result

    # ── Token helpers ───────────────────────────────────────────────

    def _tok(self, kind: TokenKind, start: int, end: int, variant: int = 0,
             closed: bool = False) -> Token:
        return Token(
            kind=kind,
            text=self.text[start:end],
            start=self.offset + start,
            end=self.offset + end,
            variant=variant,
            closed=closed,
        )

    def _variants(self, candidates: list[str]) -> range:
        if self.config.expand_variants:
            return range(len(candidates))
        return range(1)

    # ── Onsets ──────────────────────────────────────────────────────

    def _onsets(self, pos: int, after_closed: bool) -> Iterator[tuple[list[Token], int]]:
        """Yield (onset tokens, position after the onset)."""
        text = self.text
        lead: list[Token] = []
        p = pos

        # Aspirating medial: "h" written before a sonorant.
        if longest_match(INITIAL_KEYS, text, p) == "h":
            nxt = longest_match(INITIAL_KEYS, text, p + 1)
            if nxt in SONORANTS:
                lead.append(self._tok(TokenKind.MEDIAL, p, p + 1))
                p += 1

        head = longest_match(INITIAL_KEYS, text, p)
        if head is None:
            # Vowel-initial syllable: silent အ carrier, or as variant 1 an
            # independent vowel letter.
            if not lead and not after_closed and longest_match(NUCLEUS_KEYS, text, p):
                for v in self._variants([IMPLICIT_INITIAL, "independent"]):
                    yield [self._tok(TokenKind.INITIAL_CONSONANT, p, p, v)], p
            return

        head_end = p + len(head)
        for v in self._variants(INITIAL_MAP[head]):
            first = [*lead, self._tok(TokenKind.INITIAL_CONSONANT, p, head_end, v)]
            for chain, q, stacked in self._stack_chain(head, head_end, after_closed):
                if after_closed and not stacked:
                    continue
                if stacked and not after_closed and pos != 0:
                    continue
                yield first + chain, q

    def _stack_chain(self, top: str, pos: int, after_closed: bool
                     ) -> Iterator[tuple[list[Token], int, bool]]:
        """Yield (stack tokens, end position, stacked?) after a consonant."""
        text = self.text

        if text.startswith(STACK_MARKER, pos):
            sub = longest_match(INITIAL_KEYS, text, pos + 1)
            if sub is None:
                return
            marker = self._tok(TokenKind.STACK_MARKER, pos, pos + 1)
            sub_end = pos + 1 + len(sub)
            for v in self._variants(INITIAL_MAP[sub]):
                tokens = [marker, self._tok(TokenKind.INITIAL_CONSONANT, pos + 1, sub_end, v)]
                for rest, end, _ in self._stack_chain(sub, sub_end, False):
                    yield tokens + rest, end, True
            return

        yield [], pos, False

        if after_closed and self.config.implicit_stacking:
            sub = longest_match(INITIAL_KEYS, text, pos)
            if sub is not None and can_stack(top, sub):
                marker = self._tok(TokenKind.STACK_MARKER, pos, pos)
                sub_end = pos + len(sub)
                for v in self._variants(INITIAL_MAP[sub]):
                    yield [marker, self._tok(TokenKind.INITIAL_CONSONANT, pos, sub_end, v)], sub_end, True

    def _medials(self, pos: int) -> tuple[list[Token], int]:
        tokens = []
        if self.text.startswith(("y", "r"), pos):
            tokens.append(self._tok(TokenKind.MEDIAL, pos, pos + 1))
            pos += 1
        if self.text.startswith("w", pos):
            tokens.append(self._tok(TokenKind.MEDIAL, pos, pos + 1))
            pos += 1
        return tokens, pos

    # ── Syllables ───────────────────────────────────────────────────

    def _syllables_at(self, pos: int, after_closed: bool) -> Iterator[_Option]:
        for onset, p in self._onsets(pos, after_closed):
            medials, q = self._medials(p)
            nucleus = longest_match(NUCLEUS_KEYS, self.text, q)
            if nucleus is None:
                continue
            r = q + len(nucleus)
            head = [*onset, *medials]
            independent = onset[0].implicit and onset[0].variant == 1
            for option in self._rhymes(head, nucleus, q, r):
                if independent and not _spells_independent_vowel(option[0]):
                    continue
                yield option

    def _rhymes(self, head: list[Token], nucleus: str, q: int, r: int) -> Iterator[_Option]:
        """Yield syllables completing `head` with the nucleus at q:r.

        Finals come first so that consonant-as-final parses precede
        consonant-as-initial ones.
        """
        text = self.text

        fin = longest_match(FINAL_KEYS, text, r)
        if fin is not None and fin in FINALS_BY_NUCLEUS[nucleus]:
            fin_end = r + len(fin)
            for v in self._variants(FINAL_MAP[fin]):
                vowel = self._tok(TokenKind.VOWEL_SIGN, q, r)
                final = self._tok(TokenKind.FINAL_CONSONANT, r, fin_end, v)
                tail, end = self._tail(fin_end)
                yield Syllable((*head, vowel, final, *tail)), end, False

        vowel = self._tok(TokenKind.VOWEL_SIGN, q, r)
        tail, end = self._tail(r)
        yield Syllable((*head, vowel, *tail)), end, False

        if nucleus in CLOSED_PREFIX and self._stacked_coda_at(r):
            closed = self._tok(TokenKind.VOWEL_SIGN, q, r, closed=True)
            yield Syllable((*head, closed)), r, True

    def _tail(self, pos: int) -> tuple[list[Token], int]:
        """Optional tone mark, then optional separator."""
        tokens = []
        if self.text.startswith(TONE_MARKS, pos):
            tokens.append(self._tok(TokenKind.TONE_MARK, pos, pos + 1))
            pos += 1
        if self.text.startswith(SEPARATORS, pos):
            tokens.append(self._tok(TokenKind.WORD_BOUNDARY_HINT, pos, pos + 1))
            pos += 1
        return tokens, pos

    def _stacked_coda_at(self, pos: int) -> bool:
        """True if a stacked onset (explicit or implicit) can start at pos."""
        top = longest_match(INITIAL_KEYS, self.text, pos)
        if top is None:
            return False
        after = pos + len(top)
        if self.text.startswith(STACK_MARKER, after):
            return True
        if not self.config.implicit_stacking:
            return False
        sub = longest_match(INITIAL_KEYS, self.text, after)
        return sub is not None and can_stack(top, sub)
