"""
Choose one rendering among a word's candidate parses.

Every candidate is rendered and scored; structurally invalid candidates
drop out. Dictionary support raises a candidate's score, structural
cost (syllables, implicit stacks, non-primary spellings) lowers it.

Usage:
    from mlcts.resolver import resolve, rank

    best = resolve(tokenize("kambha"), dictionary)
    for scored in rank(tokenize("kambha"), dictionary):
        print(scored.text, scored.score)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Sequence

from mlcts.dictionary import Dictionary
from mlcts.errors import InvalidStructure, NoValidParse
from mlcts.generator import render_clusters
from mlcts.syllables import split_syllables
from mlcts.tokens import GraphemeCluster, Parse

logger = logging.getLogger(__name__)

# Decimal places kept when comparing scores.
SCORE_PRECISION = 9


@dataclass(frozen=True, slots=True)
class ScoringWeights:
    word_match_bonus: float = 10.0
    syllable_match_bonus: float = 1.0
    mlcts_syllable_bonus: float = 0.5
    syllable_penalty: float = 1.0
    stack_penalty: float = 0.75
    variant_penalty: float = 0.25

    @classmethod
    def from_dict(cls, raw: dict) -> ScoringWeights:
        """Build from a [resolver] config table; unknown keys are an error."""
        known = {f.name for f in fields(cls)}
        unknown = set(raw) - known
        if unknown:
            raise ValueError(f"unknown resolver weights: {sorted(unknown)}")
        return cls(**{k: float(v) for k, v in raw.items()})


@dataclass(frozen=True, slots=True)
class ScoredParse:
    """A valid candidate with its rendering and score breakdown."""

    parse: Parse
    clusters: tuple[GraphemeCluster, ...]
    score: float
    word_match: bool = False
    syllable_matches: int = 0
    mlcts_syllable_matches: int = 0

    @property
    def text(self) -> str:
        return "".join(c.text for c in self.clusters)

    @property
    def rank_key(self) -> tuple:
        return (-self.score, self.parse.syllable_count, self.parse.sort_key)


def score(parse: Parse, dictionary: Dictionary | None = None,
          weights: ScoringWeights | None = None) -> ScoredParse:
    """Render and score one candidate. Raises InvalidStructure."""
    weights = weights or ScoringWeights()
    clusters = tuple(render_clusters(parse))
    text = "".join(c.text for c in clusters)

    word_match = False
    syllable_matches = 0
    mlcts_matches = 0
    if dictionary is not None:
        word_match = dictionary.contains_myanmar(text)
        syllable_matches = sum(
            1 for s in split_syllables(text) if dictionary.has_myanmar_syllable(s)
        )
        mlcts_matches = sum(
            1 for s in parse.syllables if dictionary.has_mlcts_syllable(s.text)
        )

    value = (
        weights.word_match_bonus * word_match
        + weights.syllable_match_bonus * syllable_matches
        + weights.mlcts_syllable_bonus * mlcts_matches
        - weights.syllable_penalty * parse.syllable_count
        - weights.stack_penalty * parse.implicit_stacks
        - weights.variant_penalty * parse.variant_count
    )
    return ScoredParse(
        parse=parse,
        clusters=clusters,
        score=round(value, SCORE_PRECISION),
        word_match=word_match,
        syllable_matches=syllable_matches,
        mlcts_syllable_matches=mlcts_matches,
    )


def rank(
    candidates: Sequence[Parse],
    dictionary: Dictionary | None = None,
    *,
    weights: ScoringWeights | None = None,
    text: str = "",
) -> list[ScoredParse]:
    """Score every valid candidate, best first.

    Raises NoValidParse when no candidate survives. `text` is only used
    in the error.
    """
    if not text and candidates:
        text = "".join(s.text for s in candidates[0].syllables)

    scored: list[ScoredParse] = []
    errors: list[InvalidStructure] = []
    for parse in candidates:
        try:
            scored.append(score(parse, dictionary, weights))
        except InvalidStructure as e:
            errors.append(e)

    if not scored:
        raise NoValidParse(text, errors)

    scored.sort(key=lambda s: s.rank_key)
    logger.debug(
        "%r: %d candidates, %d valid, best %r (%.3f)",
        text, len(candidates), len(scored), scored[0].parse.mlcts, scored[0].score,
    )
    return scored


def resolve(
    candidates: Sequence[Parse],
    dictionary: Dictionary | None = None,
    *,
    weights: ScoringWeights | None = None,
    text: str = "",
) -> Parse:
    """Return the best candidate parse."""
    return rank(candidates, dictionary, weights=weights, text=text)[0].parse
