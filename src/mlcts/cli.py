#!/usr/bin/env python3
"""
MLCTS → Myanmar transliteration CLI.

Loads settings from mlcts.toml by default, or override with flags:

    python -m mlcts.cli --convert "mranma"
    python -m mlcts.cli --convert "kambha" --dict data/myg2p-dict-mlcts.csv
    python -m mlcts.cli --candidates "kana"
    python -m mlcts.cli --batch words.txt --workers 4
    python -m mlcts.cli --round-trip --mismatches data/mismatches.tsv
    python -m mlcts.cli --from-my "မြန်မာ"
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path


def _find_default_config() -> Path | None:
    """Look for mlcts.toml in CWD."""
    candidate = Path("mlcts.toml")
    if candidate.exists():
        return candidate
    return None


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Transliterate MLCTS romanization to Myanmar script"
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="Path to TOML config file (default: auto-detect mlcts.toml)",
    )
    parser.add_argument(
        "--dict",
        nargs="+",
        metavar="FILE",
        help="Dictionary CSV/TSV file(s) (overrides config)",
    )
    parser.add_argument(
        "--convert",
        metavar="TEXT",
        help="Transliterate a text",
    )
    parser.add_argument(
        "--candidates",
        metavar="WORD",
        help="List every valid rendering of a word with its score",
    )
    parser.add_argument(
        "--from-my",
        metavar="TEXT",
        help="Romanize Myanmar text to MLCTS",
    )
    parser.add_argument(
        "--batch",
        metavar="FILE",
        help="Transliterate a file, one text per line ('-' for stdin)",
    )
    parser.add_argument(
        "--round-trip",
        action="store_true",
        help="Check the dictionary's MLCTS spellings against its Myanmar ones",
    )
    parser.add_argument(
        "--mismatches",
        metavar="FILE",
        help="Write round-trip mismatches to a TSV file (use with --round-trip)",
    )
    parser.add_argument(
        "--max-candidates",
        type=int,
        metavar="N",
        help="Bound on candidate parses per word (overrides config)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        metavar="N",
        help="Threads for --batch and --round-trip (default: 1)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="More logging (-v info, -vv debug)",
    )
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    # ── Build engine ─────────────────────────────────────────────────────

    from mlcts.engine import Transliterator
    from mlcts.errors import MlctsError

    config_path = Path(args.config) if args.config else _find_default_config()
    if config_path is not None:
        engine = Transliterator.from_config(config_path)
    else:
        engine = Transliterator()

    if args.dict:
        engine.dictionary = None
        engine.add_dictionary(*args.dict)
    if args.max_candidates is not None:
        engine.tokenizer_config = replace(
            engine.tokenizer_config, max_candidates=args.max_candidates
        )

    status = 0

    # ── Convert ──────────────────────────────────────────────────────────

    if args.convert:
        try:
            print(engine.transliterate(args.convert))
        except MlctsError as e:
            print(f"error: {e}", file=sys.stderr)
            status = 1

    # ── Candidates ───────────────────────────────────────────────────────

    if args.candidates:
        try:
            ranked = engine.candidates(args.candidates)
        except MlctsError as e:
            print(f"error: {e}", file=sys.stderr)
            status = 1
        else:
            print(f"═══ Candidates for '{args.candidates}' ═══")
            for s in ranked:
                flags = " [dict]" if s.word_match else ""
                print(f"  {s.score:8.3f}  {s.text:12s}  {s.parse.mlcts}{flags}")
            print()

    # ── Romanize ─────────────────────────────────────────────────────────

    if args.from_my:
        from mlcts.syllables import from_my

        print(from_my(args.from_my))

    # ── Batch ────────────────────────────────────────────────────────────

    if args.batch:
        if args.batch == "-":
            lines = sys.stdin.read().splitlines()
        else:
            lines = Path(args.batch).read_text(encoding="utf-8").splitlines()
        for result in engine.transliterate_batch(lines, workers=args.workers):
            if result.ok:
                print(result.output)
            else:
                print(f"error: {result.source!r}: {result.error}", file=sys.stderr)
                print()

    # ── Round trip ───────────────────────────────────────────────────────

    if args.round_trip:
        from mlcts.roundtrip import check_round_trip

        if engine.dictionary is None:
            parser.error("--round-trip needs a dictionary (--dict or config)")
        print(engine.summary())
        print()
        report = check_round_trip(engine, workers=args.workers)
        print(report.summary())
        if args.mismatches:
            report.write_mismatches(Path(args.mismatches))
            print(f"\nMismatches written to {args.mismatches}")

    if not (args.convert or args.candidates or args.from_my or args.batch
            or args.round_trip):
        print(engine.summary())

    return status


if __name__ == "__main__":
    sys.exit(main())
