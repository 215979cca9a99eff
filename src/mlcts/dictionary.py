"""
Reference dictionary of attested Myanmar spellings and their MLCTS forms.

Loads the tabular asset built from the myG2P lexicon (myg2p-dict-mlcts.csv)
or any CSV/TSV with the same columns. The dictionary is built once and
never changes afterwards; the resolver only reads from it.

Usage:
    from mlcts.dictionary import Dictionary

    d = Dictionary.from_file("data/myg2p-dict-mlcts.csv")
    print(d.summary())
    d.contains_myanmar("ကမ္ဘာ")
    d.lookup_mlcts("kambha")
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from mlcts.syllables import parse_syllable, split_syllables

logger = logging.getLogger(__name__)

# Header aliases, first match wins.
_MYANMAR_COLUMNS = ("myanmar_spelling", "myanmar_word", "myanmar")
_MLCTS_COLUMNS = ("mlcts_spelling", "mlcts_romanization", "mlcts")

# Characters ignored when comparing MLCTS spellings.
_MLCTS_NOISE = str.maketrans("", "", "-'+| \t")


def normalize_mlcts(text: str) -> str:
    """Lower-case and drop separators, stack markers and spaces."""
    return text.lower().translate(_MLCTS_NOISE)


def _split_field(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    if "|" in value:
        parts = value.split("|")
    else:
        parts = value.split()
    return tuple(p.strip() for p in parts if p.strip())


@dataclass(frozen=True, slots=True)
class DictionaryEntry:
    """One attested word."""

    myanmar: str
    mlcts: str
    syllable_count: int = 0
    gloss: str = ""
    myanmar_syllables: tuple[str, ...] = ()
    mlcts_syllables: tuple[str, ...] = ()


class Dictionary:
    """
    Immutable lookup over attested Myanmar / MLCTS pairs.

    Four indexes, all frozen after construction:
    - myanmar spellings              (whole-word matches)
    - mlcts spellings → entries      (reverse lookup)
    - myanmar syllables              (per-syllable support)
    - mlcts syllables                (per-syllable support)
    """

    __slots__ = ("_entries", "_myanmar", "_by_mlcts", "_myanmar_syllables",
                 "_mlcts_syllables", "_source")

    def __init__(self, entries: Iterable[DictionaryEntry] = (), source: str = ""):
        entries = tuple(entries)
        by_mlcts: dict[str, list[DictionaryEntry]] = {}
        myanmar_syllables: set[str] = set()
        mlcts_syllables: set[str] = set()

        for e in entries:
            by_mlcts.setdefault(normalize_mlcts(e.mlcts), []).append(e)
            myanmar_syllables.update(e.myanmar_syllables or split_syllables(e.myanmar))
            derived = e.mlcts_syllables or _romanize_syllables(e)
            if derived:
                mlcts_syllables.update(normalize_mlcts(s) for s in derived)
            elif e.syllable_count == 1:
                mlcts_syllables.add(normalize_mlcts(e.mlcts))

        self._entries = entries
        self._myanmar = frozenset(e.myanmar for e in entries)
        self._by_mlcts: Mapping[str, tuple[DictionaryEntry, ...]] = MappingProxyType(
            {k: tuple(v) for k, v in by_mlcts.items()}
        )
        self._myanmar_syllables = frozenset(myanmar_syllables)
        self._mlcts_syllables = frozenset(mlcts_syllables)
        self._source = source

    # ── Construction ────────────────────────────────────────────────

    @classmethod
    def from_file(cls, path: str | Path, *, delimiter: str | None = None) -> Dictionary:
        """Load a CSV or TSV file with a header row.

        The delimiter defaults to a tab for .tsv/.tab files and a comma otherwise.
        """
        path = Path(path)
        if delimiter is None:
            delimiter = "\t" if path.suffix.lower() in (".tsv", ".tab") else ","

        with path.open(encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f, delimiter=delimiter)
            d = cls.from_rows(reader, source=str(path))

        logger.info("Loaded %d dictionary entries from %s", len(d), path)
        return d

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, str]], *, source: str = "") -> Dictionary:
        """Build from header-keyed rows (e.g. csv.DictReader output)."""
        return cls(_entries_from_rows(rows), source=source)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]], *, source: str = "") -> Dictionary:
        """Build from (myanmar, mlcts) pairs."""
        entries = []
        for myanmar, mlcts in pairs:
            syllables = tuple(split_syllables(myanmar))
            entries.append(DictionaryEntry(
                myanmar=myanmar,
                mlcts=mlcts,
                syllable_count=len(syllables),
                myanmar_syllables=syllables,
            ))
        return cls(entries, source=source)

    # ── Lookup ──────────────────────────────────────────────────────

    def contains_myanmar(self, spelling: str) -> bool:
        return spelling in self._myanmar

    def contains_mlcts(self, spelling: str) -> bool:
        return normalize_mlcts(spelling) in self._by_mlcts

    def contains(self, spelling: str) -> bool:
        """True if `spelling` is an attested Myanmar or MLCTS spelling."""
        return self.contains_myanmar(spelling) or self.contains_mlcts(spelling)

    def has_myanmar_syllable(self, syllable: str) -> bool:
        return syllable in self._myanmar_syllables

    def has_mlcts_syllable(self, syllable: str) -> bool:
        return normalize_mlcts(syllable) in self._mlcts_syllables

    def lookup_mlcts(self, spelling: str) -> list[DictionaryEntry]:
        """All entries whose MLCTS spelling matches, in file order."""
        return list(self._by_mlcts.get(normalize_mlcts(spelling), ()))

    @property
    def entries(self) -> tuple[DictionaryEntry, ...]:
        return self._entries

    @property
    def source(self) -> str:
        return self._source

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DictionaryEntry]:
        return iter(self._entries)

    def summary(self) -> str:
        lines = [f"Dictionary ({self._source or 'in-memory'})"]
        lines.append(f"  Entries:            {len(self._entries):,}")
        lines.append(f"  Myanmar spellings:  {len(self._myanmar):,}")
        lines.append(f"  MLCTS spellings:    {len(self._by_mlcts):,}")
        lines.append(f"  Myanmar syllables:  {len(self._myanmar_syllables):,}")
        lines.append(f"  MLCTS syllables:    {len(self._mlcts_syllables):,}")
        return "\n".join(lines)


def _romanize_syllables(entry: DictionaryEntry) -> tuple[str, ...]:
    """MLCTS for each Myanmar syllable, if together they spell the entry's MLCTS."""
    try:
        parts = tuple(
            parse_syllable(s) for s in entry.myanmar_syllables or split_syllables(entry.myanmar)
        )
    except ValueError:
        return ()
    if normalize_mlcts("".join(parts)) != normalize_mlcts(entry.mlcts):
        return ()
    return parts


def _pick(row: Mapping[str, str], names: tuple[str, ...]) -> str | None:
    for name in names:
        value = row.get(name)
        if value is not None:
            return value.strip()
    return None


def _entries_from_rows(rows: Iterable[Mapping[str, str]]) -> Iterator[DictionaryEntry]:
    skipped = 0
    for line_no, row in enumerate(rows, start=2):
        myanmar = _pick(row, _MYANMAR_COLUMNS)
        mlcts = _pick(row, _MLCTS_COLUMNS)
        if myanmar is None or mlcts is None:
            raise ValueError(
                f"dictionary row {line_no} has no Myanmar or MLCTS column "
                f"(expected one of {_MYANMAR_COLUMNS} and {_MLCTS_COLUMNS})"
            )
        if not myanmar or not mlcts:
            skipped += 1
            continue

        myanmar_syllables = _split_field(row.get("myanmar_syllables"))
        mlcts_syllables = _split_field(row.get("mlcts_syllables"))
        count_raw = (row.get("syllable_count") or "").strip()
        if count_raw:
            try:
                syllable_count = int(count_raw)
            except ValueError:
                raise ValueError(
                    f"dictionary row {line_no}: bad syllable_count {count_raw!r}"
                ) from None
        else:
            syllable_count = len(myanmar_syllables or split_syllables(myanmar))

        yield DictionaryEntry(
            myanmar=myanmar,
            mlcts=mlcts,
            syllable_count=syllable_count,
            gloss=(row.get("gloss") or "").strip(),
            myanmar_syllables=myanmar_syllables,
            mlcts_syllables=mlcts_syllables,
        )

    if skipped:
        logger.warning("Skipped %d dictionary rows with an empty spelling", skipped)
