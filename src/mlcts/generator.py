"""
Compose Myanmar grapheme clusters from tokenized MLCTS syllables.

Each syllable is checked against Burmese syllable structure and then written
in Unicode storage order:

    initial, (virama + subscript)*, ya-pin|ya-yit, wa-hswe, ha-hto,
    vowel sign, final + asat, tone

Usage:
    from mlcts.generator import render, render_parse

    cluster = render(syllable)           # GraphemeCluster
    text = render_parse(parse)           # full word
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mlcts.catalog import (
    AA, ASAT, CLOSED_PREFIX, DOT_BELOW, FINAL_MAP, FINALS_BY_NUCLEUS,
    GREAT_SA, IMPLICIT_INITIAL, INDEPENDENT_VOWELS, INITIAL_MAP, MEDIAL_MAP,
    MEDIAL_ORDER, NASAL_FINALS, OPEN_RHYMES, SONORANTS, TALL_AA, TALL_AA_HOSTS,
    VIRAMA, VISARGA, can_stack,
)
from mlcts.errors import InvalidStructure
from mlcts.tokens import GraphemeCluster, Parse, Syllable, Token, TokenKind

# Subscript levels allowed under one initial.
MAX_STACK_DEPTH = 1


@dataclass(slots=True)
class _Layout:
    """A syllable's tokens sorted into their structural slots."""

    initial: Token | None = None
    stack: list[Token] = field(default_factory=list)
    aspirated: bool = False
    medials: list[Token] = field(default_factory=list)
    vowel: Token | None = None
    final: Token | None = None
    tone: Token | None = None
    boundary: bool = False

    @property
    def chain(self) -> list[Token]:
        """Initial followed by its subscripts, top to bottom."""
        return [self.initial, *self.stack] if self.initial else []


# ── Structure ───────────────────────────────────────────────────────

def _layout(syllable: Syllable, index: int) -> _Layout:
    """Sort tokens into slots, rejecting anything out of order."""
    lay = _Layout()
    pending_stack = False

    def fail(reason: str) -> InvalidStructure:
        return InvalidStructure(index, reason)

    for tok in syllable.tokens:
        if lay.boundary:
            raise fail("tokens after the syllable boundary")
        kind = tok.kind

        if kind is TokenKind.INITIAL_CONSONANT:
            if lay.initial is None:
                if lay.medials or lay.vowel:
                    raise fail("initial consonant after medial or vowel")
                lay.initial = tok
            elif pending_stack:
                lay.stack.append(tok)
                pending_stack = False
            else:
                raise fail("more than one initial consonant")

        elif kind is TokenKind.STACK_MARKER:
            if lay.initial is None or pending_stack or lay.medials or lay.vowel:
                raise fail("misplaced stack marker")
            pending_stack = True

        elif kind is TokenKind.MEDIAL:
            if tok.text not in MEDIAL_MAP:
                raise fail(f"unknown medial {tok.text!r}")
            if tok.text == "h":
                if lay.initial is not None or lay.aspirated:
                    raise fail("aspiration must precede the initial consonant")
                lay.aspirated = True
                continue
            if lay.initial is None or pending_stack or lay.vowel:
                raise fail(f"medial {tok.text!r} out of place")
            if lay.medials and MEDIAL_ORDER[lay.medials[-1].text] >= MEDIAL_ORDER[tok.text]:
                raise fail("medials out of order")
            lay.medials.append(tok)

        elif kind is TokenKind.VOWEL_SIGN:
            if lay.vowel is not None:
                raise fail("more than one vowel")
            if lay.initial is None:
                raise fail("vowel without an initial consonant")
            if pending_stack:
                raise fail("stack marker without a subscript consonant")
            lay.vowel = tok

        elif kind is TokenKind.FINAL_CONSONANT:
            if lay.vowel is None or lay.final is not None or lay.tone is not None:
                raise fail("final consonant out of place")
            lay.final = tok

        elif kind is TokenKind.TONE_MARK:
            if lay.vowel is None or lay.tone is not None:
                raise fail("tone mark out of place")
            lay.tone = tok

        elif kind is TokenKind.WORD_BOUNDARY_HINT:
            if lay.vowel is None:
                raise fail("boundary before the vowel")
            lay.boundary = True

        else:
            raise fail(f"unhandled token kind {kind!r}")

    if pending_stack:
        raise fail("stack marker without a subscript consonant")
    if lay.initial is None:
        raise fail("missing initial consonant")
    if lay.vowel is None:
        raise fail("missing vowel")
    return lay


def _check(lay: _Layout, index: int) -> None:
    """Orthographic constraints that need the whole syllable."""

    def fail(reason: str) -> InvalidStructure:
        return InvalidStructure(index, reason)

    for tok in lay.chain:
        if tok.text == "":
            if lay.stack or lay.medials or lay.aspirated:
                raise fail("implicit initial cannot take medials or stacking")
            if tok.variant not in (0, 1):
                raise fail(f"no variant {tok.variant} for the implicit initial")
            continue
        if tok.text not in INITIAL_MAP:
            raise fail(f"unknown consonant {tok.text!r}")
        if not 0 <= tok.variant < len(INITIAL_MAP[tok.text]):
            raise fail(f"no variant {tok.variant} for {tok.text!r}")

    if len(lay.stack) > MAX_STACK_DEPTH:
        raise fail(f"stacking depth {len(lay.stack)} exceeds {MAX_STACK_DEPTH}")
    chain = lay.chain
    for top, bottom in zip(chain, chain[1:]):
        if not can_stack(top.text, bottom.text):
            raise fail(f"{bottom.text!r} cannot be stacked under {top.text!r}")

    host = chain[-1].text
    if lay.aspirated:
        if lay.stack or lay.initial.text not in SONORANTS:
            raise fail(f"{lay.initial.text!r} cannot take the aspirating medial")
    for med in lay.medials:
        if med.text == host or (host in ("y", "r") and med.text in ("y", "r")):
            raise fail(f"medial {med.text!r} on {host!r}")

    nucleus = lay.vowel.text
    if nucleus not in OPEN_RHYMES:
        raise fail(f"unknown vowel {nucleus!r}")
    if lay.vowel.closed:
        if nucleus not in CLOSED_PREFIX:
            raise fail(f"vowel {nucleus!r} cannot be closed")
        if lay.final is not None:
            raise fail("closed vowel followed by a final")
        if lay.tone is not None:
            raise fail("closed vowel cannot take a tone")

    if lay.final is not None:
        fin = lay.final.text
        if fin not in FINALS_BY_NUCLEUS[nucleus]:
            raise fail(f"final {fin!r} not allowed after {nucleus!r}")
        if not 0 <= lay.final.variant < len(FINAL_MAP[fin]):
            raise fail(f"no variant {lay.final.variant} for final {fin!r}")
        if fin not in NASAL_FINALS and lay.tone is not None:
            raise fail(f"final {fin!r} cannot take a tone")

    if lay.tone is not None and lay.tone.text not in OPEN_RHYMES[nucleus]:
        raise fail(f"unknown tone mark {lay.tone.text!r}")

    if lay.initial.text == "" and lay.initial.variant == 1 and _independent_vowel(lay) is None:
        raise fail(f"no independent vowel letter for {nucleus!r} in this syllable")


def validate(syllable: Syllable, index: int = 0) -> None:
    """Raise InvalidStructure if the syllable is not well formed."""
    _check(_layout(syllable, index), index)


# ── Rendering ───────────────────────────────────────────────────────

def _independent_vowel(lay: _Layout) -> str | None:
    """The vowel letter spelling an open vowel-initial syllable, if any."""
    if lay.final is not None or lay.vowel.closed:
        return None
    tone = lay.tone.text if lay.tone else ""
    return INDEPENDENT_VOWELS.get((lay.vowel.text, tone))


def _letter(tok: Token) -> str:
    if tok.text == "":
        return IMPLICIT_INITIAL
    return INITIAL_MAP[tok.text][tok.variant]


def _final_form(tok: Token, tone: str) -> str:
    form = FINAL_MAP[tok.text][tok.variant]
    if tone == ".":
        if form.endswith(ASAT):
            return form[:-1] + DOT_BELOW + ASAT
        return form + DOT_BELOW
    if tone == ":":
        return form + VISARGA
    return form


def _onset(lay: _Layout) -> str:
    out = [_letter(lay.initial)]
    prev = lay.initial
    for sub in lay.stack:
        if prev.text == "s" and sub.text == "s":
            out[-1] = GREAT_SA
        else:
            if prev.text == "ng":
                out.append(ASAT)
            out.append(VIRAMA)
            out.append(_letter(sub))
        prev = sub
    for med in sorted(lay.medials, key=lambda m: MEDIAL_ORDER[m.text]):
        out.append(MEDIAL_MAP[med.text])
    if lay.aspirated:
        out.append(MEDIAL_MAP["h"])
    return "".join(out)


def _rhyme(lay: _Layout) -> str:
    nucleus = lay.vowel.text
    tone = lay.tone.text if lay.tone else ""
    if lay.final is None and not lay.vowel.closed:
        sign = OPEN_RHYMES[nucleus][tone]
    else:
        sign = CLOSED_PREFIX[nucleus]
        if lay.final is not None:
            sign += _final_form(lay.final, tone)

    if not lay.medials and not lay.aspirated and _letter(lay.chain[-1]) in TALL_AA_HOSTS:
        sign = sign.replace(AA, TALL_AA)
    return sign


def render(syllable: Syllable, index: int = 0) -> GraphemeCluster:
    """Render one syllable; raises InvalidStructure, never renders partially."""
    lay = _layout(syllable, index)
    _check(lay, index)
    if lay.initial.text == "" and lay.initial.variant == 1:
        return GraphemeCluster(_independent_vowel(lay), syllable_index=index)
    return GraphemeCluster(_onset(lay) + _rhyme(lay), syllable_index=index)


def render_clusters(parse: Parse) -> list[GraphemeCluster]:
    return [render(s, i) for i, s in enumerate(parse.syllables)]


def render_parse(parse: Parse) -> str:
    """Render a whole parse to Myanmar text."""
    return "".join(c.text for c in render_clusters(parse))
