"""
Split Myanmar text into orthographic syllables.

A syllable starts at a consonant that is neither killed (followed by
asat or virama) nor stacked (preceded by virama), at an independent
vowel, or at any non-Myanmar character. Stacked bottoms therefore stay
with their top:

    တက္ကသိုလ်  →  တက္က | သိုလ်

from_my() romanizes Myanmar text back to MLCTS one syllable at a time,
using the same catalog the transliterator writes with.
"""

from __future__ import annotations

import logging
import re

from mlcts.catalog import (
    AA, ASAT, CLOSED_PREFIX, DIGITS, DOT_BELOW, FINALS, GREAT_SA,
    IMPLICIT_INITIAL, INDEPENDENT_VOWELS, INITIAL_MAP, INITIALS, MEDIALS,
    OPEN_RHYMES, TALL_AA, VIRAMA, VISARGA,
)

logger = logging.getLogger(__name__)

_SYLLABLE_START = re.compile(
    r"(?<!္)[က-အ](?![်္])"
    r"|[a-zA-Z0-9ဣ-ဧဩဪ၌၍၏၀-။"
    r"!-/:-@\[-`{-~\s]"
)


def split_syllables(text: str) -> list[str]:
    """Return the syllables of `text`, in order. Concatenation gives back `text`."""
    starts = [m.start() for m in _SYLLABLE_START.finditer(text)]
    if not starts or starts[0] != 0:
        starts.insert(0, 0)
    bounds = starts + [len(text)]
    return [text[a:b] for a, b in zip(bounds, bounds[1:]) if a < b]


# ── Myanmar → MLCTS ─────────────────────────────────────────────────

_LETTERS = {mya: lat for lat, candidates, _note in INITIALS for mya in candidates}
_LETTERS[IMPLICIT_INITIAL] = ""
_MEDIAL_LETTERS = {mya[0]: lat for lat, mya, _note in MEDIALS}
_OPEN_SIGNS = {
    sign: nucleus + tone
    for nucleus, tones in OPEN_RHYMES.items()
    for tone, sign in tones.items()
}
_CLOSED_SIGNS = sorted(CLOSED_PREFIX.items(), key=lambda kv: len(kv[1]), reverse=True)
_FINAL_FORMS = {form: lat for lat, forms, _note in FINALS for form in forms}
_INDEPENDENT = sorted(
    ((letter, nucleus + tone) for (nucleus, tone), letter in INDEPENDENT_VOWELS.items()),
    key=lambda kv: len(kv[0]), reverse=True,
)
_ASCII_DIGITS = {mya: d for d, mya in DIGITS.items()}
_KINZI = INITIAL_MAP["ng"][0] + ASAT + VIRAMA
_SA = INITIAL_MAP["s"][0]


def _final(coda: str) -> str | None:
    """MLCTS final (with tone) for a killed consonant or anusvara, or None."""
    for form, fin in _FINAL_FORMS.items():
        if coda == form:
            return fin
        if coda == form + VISARGA:
            return fin + ":"
        creaky = form[:-1] + DOT_BELOW + ASAT if form.endswith(ASAT) else form + DOT_BELOW
        if coda in (creaky, form + DOT_BELOW):
            return fin + "."
    return None


def _romanize(text: str) -> str:
    for letter, rhyme in _INDEPENDENT:
        if text == letter:
            return rhyme

    if not text or text[0] not in _LETTERS:
        raise ValueError(f"no consonant at the start of {text!r}")
    onset = _LETTERS[text[0]]
    pos = 1
    aspirated = False
    while pos < len(text) and text[pos] in _MEDIAL_LETTERS:
        medial = _MEDIAL_LETTERS[text[pos]]
        if medial == "h":
            aspirated = True
        else:
            onset += medial
        pos += 1
    if aspirated:
        onset = "h" + onset

    rest = text[pos:]
    if rest in _OPEN_SIGNS:
        return onset + _OPEN_SIGNS[rest]

    for nucleus, prefix in _CLOSED_SIGNS:
        if not rest.startswith(prefix):
            continue
        coda = rest[len(prefix):]
        fin = _final(coda)
        if fin is not None:
            return onset + nucleus + fin
        # A stacked coda: its top closes this vowel, its bottom opens the next.
        if coda.startswith(_KINZI):
            return onset + nucleus + "ng" + _romanize(coda[len(_KINZI):])
        if coda.startswith(GREAT_SA):
            return onset + nucleus + "s" + _romanize(_SA + coda[1:])
        if len(coda) > 2 and coda[1] == VIRAMA and coda[0] in _LETTERS:
            return onset + nucleus + _LETTERS[coda[0]] + _romanize(coda[2:])

    raise ValueError(f"cannot romanize {text!r}")


def parse_syllable(syllable: str) -> str:
    """Romanize one orthographic syllable, as split by split_syllables().

    A syllable carrying a stacked bottom romanizes the bottom too:
    ကမ္ဘာ → kambha. Raises ValueError for anything that is not a
    Burmese syllable.
    """
    return _romanize(syllable.replace(TALL_AA, AA))


def from_my(text: str) -> str:
    """Romanize Myanmar text to MLCTS.

    Myanmar digits become ASCII digits. Syllables that do not parse
    (punctuation, spaces, other scripts) are copied through unchanged.
    """
    out = []
    for syllable in split_syllables(text):
        if syllable in _ASCII_DIGITS:
            out.append(_ASCII_DIGITS[syllable])
            continue
        try:
            out.append(parse_syllable(syllable))
        except ValueError as e:
            logger.debug("Keeping %r as is: %s", syllable, e)
            out.append(syllable)
    return "".join(out)
