"""
MLCTS grapheme catalog for the Myanmar transliterator.

Principles:
- One entry per MLCTS glyph unit: initial consonants, medials, vowel nuclei,
  finals, tone marks, the explicit stacking marker and syllable separators
- Digraphs checked before single characters (longest match first)
- Letters whose MLCTS spelling is shared by several Myanmar letters list
  every candidate; the first one is the primary spelling, the rest are
  only tried when variant expansion is switched on

Usage:
    from mlcts.catalog import INITIALS, FINALS, get_sorted_keys
"""

from __future__ import annotations

# Myanmar characters by Unicode codepoint, for reference and readability.
_ = chr

ASAT = _(0x103A)        # ်  killer, silences a final consonant
VIRAMA = _(0x1039)      # ္  stacking sign, joins a subscript consonant
DOT_BELOW = _(0x1037)   # ့  creaky tone
VISARGA = _(0x1038)     # း  high tone
ANUSVARA = _(0x1036)    # ံ  nasal final
AA = _(0x102C)          # ာ
TALL_AA = _(0x102B)     # ါ
GREAT_SA = _(0x103F)    # ဿ  ligature for သ္သ
IMPLICIT_INITIAL = _(0x1021)  # အ  carrier of vowel-initial syllables

STACK_MARKER = "+"
SEPARATORS = ("-", "'")
TONE_MARKS = (".", ":")

# ── Initial consonants ──────────────────────────────────────────────
# Each entry: (mlcts, [myanmar_candidates], notes)
# Sorted longest-first within each group for greedy matching.

INITIALS = [
    # Aspirated and breathy digraphs
    ("hk",  [_(0x1001)],             "kha  - ခ"),
    ("hc",  [_(0x1006)],             "hsa  - ဆ"),
    ("ht",  [_(0x1011), _(0x100C)],  "AMBIG: hta/retroflex - ထ or ဌ"),
    ("hp",  [_(0x1016)],             "hpa  - ဖ"),
    ("gh",  [_(0x1003)],             "gha  - ဃ"),
    ("jh",  [_(0x1008)],             "jha  - ဈ"),
    ("dh",  [_(0x1013), _(0x100E)],  "AMBIG: dha/retroflex - ဓ or ဎ"),
    ("bh",  [_(0x1018)],             "bha  - ဘ"),

    # Nasal digraphs
    ("ng",  [_(0x1004)],             "nga  - င"),
    ("ny",  [_(0x100A), _(0x1009)],  "AMBIG: nya - ည or ဉ"),

    # ── Single characters ───────────────────────────────────────────
    ("k",   [_(0x1000)],             "ka   - က"),
    ("g",   [_(0x1002)],             "ga   - ဂ"),
    ("c",   [_(0x1005)],             "sa   - စ"),
    ("j",   [_(0x1007)],             "za   - ဇ"),
    ("t",   [_(0x1010), _(0x100B)],  "AMBIG: ta/retroflex - တ or ဋ"),
    ("d",   [_(0x1012), _(0x100D)],  "AMBIG: da/retroflex - ဒ or ဍ"),
    ("n",   [_(0x1014), _(0x100F)],  "AMBIG: na/retroflex - န or ဏ"),
    ("p",   [_(0x1015)],             "pa   - ပ"),
    ("b",   [_(0x1017)],             "ba   - ဗ"),
    ("m",   [_(0x1019)],             "ma   - မ"),
    ("y",   [_(0x101A)],             "ya   - ယ"),
    ("r",   [_(0x101B)],             "ra   - ရ"),
    ("l",   [_(0x101C), _(0x1020)],  "AMBIG: la - လ or ဠ"),
    ("w",   [_(0x101D)],             "wa   - ဝ"),
    ("s",   [_(0x101E)],             "tha  - သ"),
    ("h",   [_(0x101F)],             "ha   - ဟ"),
]

# Consonants that can carry the aspirating medial (ha-hto).
# MLCTS writes it as a leading "h": hm, hn, hny, hng, hl, hy, hr, hw.
SONORANTS = frozenset({"m", "n", "ny", "ng", "l", "y", "r", "w"})

# ── Medials ─────────────────────────────────────────────────────────
# Storage order in Myanmar text: ya-pin, ya-yit, wa-hswe, ha-hto.

MEDIALS = [
    ("y",   [_(0x103B)],             "ya-pin  - ျ"),
    ("r",   [_(0x103C)],             "ya-yit  - ြ"),
    ("w",   [_(0x103D)],             "wa-hswe - ွ"),
    ("h",   [_(0x103E)],             "ha-hto  - ှ"),
]

MEDIAL_ORDER = {"y": 0, "r": 0, "w": 1, "h": 2}

# ── Vowel nuclei ────────────────────────────────────────────────────

NUCLEI = ["au", "ai", "ui", "a", "i", "u", "e"]

# Open syllables: nucleus -> {tone_mark: vowel sign}.
# "" is the plain (low) tone, "." creaky, ":" high.
OPEN_RHYMES: dict[str, dict[str, str]] = {
    "a":  {".": "",                                 "": AA,
           ":": AA + VISARGA},
    "i":  {".": _(0x102D),                          "": _(0x102E),
           ":": _(0x102E) + VISARGA},
    "u":  {".": _(0x102F),                          "": _(0x1030),
           ":": _(0x1030) + VISARGA},
    "e":  {".": _(0x1031) + DOT_BELOW,              "": _(0x1031),
           ":": _(0x1031) + VISARGA},
    "ai": {".": _(0x1032) + DOT_BELOW,              "": _(0x101A) + ASAT,
           ":": _(0x1032)},
    "au": {".": _(0x1031) + AA + DOT_BELOW,         "": _(0x1031) + AA + ASAT,
           ":": _(0x1031) + AA},
    "ui": {".": _(0x102D) + _(0x102F) + DOT_BELOW,  "": _(0x102D) + _(0x102F),
           ":": _(0x102D) + _(0x102F) + VISARGA},
}

# Closed syllables: the vowel sign written in front of the final consonant.
CLOSED_PREFIX: dict[str, str] = {
    "a":  "",
    "i":  _(0x102D),
    "u":  _(0x102F),
    "au": _(0x1031) + AA,
    "ui": _(0x102D) + _(0x102F),
}

# Independent vowel letters: (nucleus, tone_mark) -> letter. They spell a
# whole open syllable and are only tried as variants of the အ carrier.
INDEPENDENT_VOWELS: dict[tuple[str, str], str] = {
    ("i", "."):  _(0x1023),              # ဣ
    ("i", ""):   _(0x1024),              # ဤ
    ("u", "."):  _(0x1025),              # ဥ
    ("u", ""):   _(0x1026),              # ဦ
    ("u", ":"):  _(0x1026) + VISARGA,    # ဦး
    ("e", ""):   _(0x1027),              # ဧ
    ("au", ":"): _(0x1029),              # ဩ
    ("au", ""):  _(0x102A),              # ဪ
}

# ── Final consonants ────────────────────────────────────────────────
# The killed form, asat included. Nasal finals may take a tone mark.

FINALS = [
    ("ng",  [_(0x1004) + ASAT],                  "-ng  - င်"),
    ("ny",  [_(0x100A) + ASAT, _(0x1009) + ASAT], "AMBIG: -ny - ည် or ဉ်"),
    ("k",   [_(0x1000) + ASAT],                  "-k   - က်"),
    ("c",   [_(0x1005) + ASAT],                  "-c   - စ်"),
    ("t",   [_(0x1010) + ASAT, _(0x100B) + ASAT], "AMBIG: -t - တ် or ဋ်"),
    ("n",   [_(0x1014) + ASAT, _(0x100F) + ASAT], "AMBIG: -n - န် or ဏ်"),
    ("p",   [_(0x1015) + ASAT],                  "-p   - ပ်"),
    ("m",   [_(0x1019) + ASAT, ANUSVARA],        "AMBIG: -m - မ် or ံ"),

    # Killed stops and liquids, mostly in Pali and loan spellings
    ("ht",  [_(0x1011) + ASAT],                  "-ht  - ထ်"),
    ("g",   [_(0x1002) + ASAT],                  "-g   - ဂ်"),
    ("j",   [_(0x1007) + ASAT],                  "-j   - ဇ်"),
    ("d",   [_(0x1012) + ASAT],                  "-d   - ဒ်"),
    ("b",   [_(0x1017) + ASAT],                  "-b   - ဗ်"),
    ("s",   [_(0x101E) + ASAT],                  "-s   - သ်"),
    ("l",   [_(0x101C) + ASAT],                  "-l   - လ်"),
]

# Only nasal finals carry a tone mark.
NASAL_FINALS = frozenset({"ng", "ny", "n", "m"})

FINALS_BY_NUCLEUS: dict[str, frozenset[str]] = {
    "a":  frozenset({"k", "c", "ng", "ny", "t", "n", "p", "m",
                     "ht", "g", "j", "d", "b", "s", "l"}),
    "i":  frozenset({"t", "n", "p", "m", "d", "b", "s", "l"}),
    "u":  frozenset({"t", "n", "p", "m", "d", "b", "s", "l"}),
    "au": frozenset({"k", "ng"}),
    "ui": frozenset({"k", "ng", "l"}),
    "e":  frozenset(),
    "ai": frozenset(),
}

# ── Stacking ────────────────────────────────────────────────────────
# top consonant -> consonants allowed underneath it.
# A top "ng" is written as kinzi (င်္) and may sit on any consonant.

STACK_PAIRS: dict[str, frozenset[str]] = {
    "k":  frozenset({"k", "hk"}),
    "g":  frozenset({"g", "gh"}),
    "c":  frozenset({"c", "hc"}),
    "j":  frozenset({"j", "jh"}),
    "ny": frozenset({"c", "hc", "j", "jh"}),
    "t":  frozenset({"t", "ht"}),
    "d":  frozenset({"d", "dh"}),
    "n":  frozenset({"t", "ht", "d", "dh", "n"}),
    "p":  frozenset({"p", "hp"}),
    "b":  frozenset({"b", "bh"}),
    "m":  frozenset({"p", "hp", "b", "bh", "m"}),
    "s":  frozenset({"s"}),
    "l":  frozenset({"l"}),
}

# Consonants that take the tall aa (ါ) instead of ာ.
TALL_AA_HOSTS = frozenset({
    _(0x1001), _(0x1002), _(0x1004), _(0x1012), _(0x1015), _(0x101D),
})

# ASCII digits pass through as Myanmar digits.
DIGITS = {str(d): _(0x1040 + d) for d in range(10)}


# ── Convenience accessors ───────────────────────────────────────────

def get_mapping_dict(table: list[tuple[str, list[str], str]]) -> dict[str, list[str]]:
    """Return a table as a dict of mlcts_key -> list of myanmar candidates."""
    return {lat: mya for lat, mya, _note in table}


def get_sorted_keys(table: list[tuple[str, list[str], str]]) -> list[str]:
    """Return mlcts keys sorted longest-first for greedy matching."""
    return sorted((lat for lat, _mya, _note in table), key=len, reverse=True)


def get_ambiguous_keys(table: list[tuple[str, list[str], str]]) -> set[str]:
    """Return the set of mlcts keys that have more than one Myanmar spelling."""
    return {lat for lat, mya, _note in table if len(mya) > 1}


INITIAL_MAP = get_mapping_dict(INITIALS)
FINAL_MAP = get_mapping_dict(FINALS)
MEDIAL_MAP = {lat: mya[0] for lat, mya, _note in MEDIALS}

INITIAL_KEYS = get_sorted_keys(INITIALS)
FINAL_KEYS = get_sorted_keys(FINALS)
NUCLEUS_KEYS = sorted(NUCLEI, key=len, reverse=True)

# Every character that may appear inside an MLCTS word.
ALPHABET = frozenset(
    "".join(INITIAL_KEYS) + "".join(NUCLEI)
    + STACK_MARKER + "".join(SEPARATORS) + "".join(TONE_MARKS)
)


def longest_match(keys: list[str], text: str, pos: int) -> str | None:
    """Return the longest key that matches text at pos, or None.

    keys must already be sorted longest-first.
    """
    for key in keys:
        if text.startswith(key, pos):
            return key
    return None


def can_stack(top: str, bottom: str) -> bool:
    """True if the consonant `bottom` may be written under `top`."""
    if top == "ng":
        return bottom in INITIAL_MAP
    return bottom in STACK_PAIRS.get(top, ())


# ── Quick sanity check ──────────────────────────────────────────────

if __name__ == "__main__":
    print("=== MLCTS Grapheme Catalog ===\n")

    for title, table in (("Initials", INITIALS), ("Finals", FINALS)):
        print(f"{title}:")
        for lat, mya, note in sorted(table, key=lambda x: (-len(x[0]), x[0])):
            candidates = " / ".join(mya)
            ambig = " [AMBIG]" if len(mya) > 1 else ""
            print(f"  {lat:>4s} → {candidates}{ambig}  ({note})")
        print()

    print(f"Ambiguous initials: {sorted(get_ambiguous_keys(INITIALS))}")
    print(f"Stackable tops:     {sorted(STACK_PAIRS)}")
