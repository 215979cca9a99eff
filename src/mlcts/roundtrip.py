"""
Round-trip check: feed each dictionary entry's MLCTS spelling through the
transliterator and compare with its Myanmar spelling.

This tells us:
- What % of attested words come back exactly
- Which words come back differently (spelling conventions, variants,
  segmentation choices)
- Which words fail outright, broken down by error type

Usage:
    from mlcts import Dictionary, Transliterator
    from mlcts.roundtrip import check_round_trip

    d = Dictionary.from_file("data/myg2p-dict-mlcts.csv")
    report = check_round_trip(Transliterator(d))
    print(report.summary())
    report.write_mismatches("mismatches.tsv")
"""

from __future__ import annotations

import csv
import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from mlcts.dictionary import Dictionary
from mlcts.engine import Transliterator

logger = logging.getLogger(__name__)


@dataclass
class RoundTripReport:
    """Aggregated round-trip statistics."""

    total: int = 0
    matched: int = 0
    mismatches: list[tuple[str, str, str]] = field(
        default_factory=list
    )  # (mlcts, expected, got)
    failures: list[tuple[str, str, str]] = field(
        default_factory=list
    )  # (mlcts, expected, error message)
    failure_types: Counter = field(default_factory=Counter)  # error class → count

    @property
    def rate(self) -> float:
        return self.matched / self.total if self.total else 0.0

    def summary(self) -> str:
        if self.total == 0:
            return "No entries checked."

        pct = lambda n, d: f"{100*n/d:.1f}%" if d > 0 else "N/A"

        lines = [
            "═══ Round-trip Report ═══",
            "",
            f"Entries checked:  {self.total}",
            f"Matched:          {self.matched:5d}  ({pct(self.matched, self.total)})",
            f"Mismatched:       {len(self.mismatches):5d}  ({pct(len(self.mismatches), self.total)})",
            f"Failed:           {len(self.failures):5d}  ({pct(len(self.failures), self.total)})",
        ]

        if self.failure_types:
            lines.append("")
            lines.append("─── Failures by type ───")
            for name, count in self.failure_types.most_common():
                lines.append(f"  {name:20s}  {count:,}")

        if self.mismatches:
            lines.append("")
            lines.append("─── Sample mismatches ───")
            for mlcts, expected, got in self.mismatches[:15]:
                lines.append(f"  {mlcts:20s}  expected: {expected}  got: {got}")

        return "\n".join(lines)

    def write_mismatches(self, path: str | Path) -> None:
        """Write every mismatch and failure to a TSV file for manual review.

        Columns: kind, mlcts, expected, got
        """
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, delimiter="\t")
            writer.writerow(["kind", "mlcts", "expected", "got"])
            for mlcts, expected, got in self.mismatches:
                writer.writerow(["mismatch", mlcts, expected, got])
            for mlcts, expected, message in self.failures:
                writer.writerow(["error", mlcts, expected, message])


def check_round_trip(
    transliterator: Transliterator,
    dictionary: Dictionary | None = None,
    *,
    limit: int | None = None,
    workers: int = 1,
) -> RoundTripReport:
    """
    Transliterate each entry's MLCTS spelling and compare with its Myanmar one.

    Args:
        transliterator: Engine to test (its own dictionary is used by default)
        dictionary: Entries to check, if different from the engine's
        limit: Only check the first N entries
        workers: Thread pool size for the batch conversion
    """
    dictionary = dictionary if dictionary is not None else transliterator.dictionary
    if dictionary is None:
        raise ValueError("round-trip check needs a dictionary")

    entries = list(dictionary.entries)
    if limit is not None:
        entries = entries[:limit]

    results = transliterator.transliterate_batch(
        [e.mlcts for e in entries], workers=workers
    )

    report = RoundTripReport()
    for entry, result in zip(entries, results):
        report.total += 1
        if not result.ok:
            report.failures.append((entry.mlcts, entry.myanmar, str(result.error)))
            report.failure_types[type(result.error).__name__] += 1
        elif result.output == entry.myanmar:
            report.matched += 1
        else:
            report.mismatches.append((entry.mlcts, entry.myanmar, result.output))

    logger.info(
        "Round trip: %d/%d matched (%.1f%%)",
        report.matched, report.total, 100 * report.rate,
    )
    return report
