"""
MLCTS → Myanmar transliteration engine with TOML-based configuration.

Runs the tokenizer, generator and resolver over every word of an input
text. Whitespace is copied through unchanged and runs of ASCII digits
become Myanmar digits.

Usage:
    from mlcts.engine import Transliterator

    engine = Transliterator.from_config()        # loads mlcts.toml
    engine.transliterate("mranma")               # 'မြန်မာ', raises on error
    result = engine.convert("kxa")               # never raises
    print(result.ok, result.error)

    # Or build manually:
    engine = Transliterator()
    engine.add_dictionary("data/myg2p-dict-mlcts.csv")
"""

from __future__ import annotations

import glob
import logging
import re
import tomllib
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterable

from mlcts.catalog import DIGITS
from mlcts.dictionary import Dictionary
from mlcts.errors import MlctsError
from mlcts.resolver import ScoredParse, ScoringWeights, rank
from mlcts.tokenizer import TokenizerConfig, tokenize

logger = logging.getLogger(__name__)

_CHUNK = re.compile(r"\s+|\S+")


@dataclass(slots=True)
class WordResult:
    """One transliterated word and the candidates it was chosen from."""

    source: str
    start: int
    candidates: list[ScoredParse]  # best first

    @property
    def chosen(self) -> ScoredParse:
        return self.candidates[0]

    @property
    def output(self) -> str:
        return self.chosen.text


@dataclass(slots=True)
class ConversionResult:
    """Outcome of converting one input text: an output or an error."""

    source: str
    output: str | None = None
    error: MlctsError | None = None
    words: list[WordResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        d: dict = {"source": self.source, "ok": self.ok}
        if self.ok:
            d["output"] = self.output
        else:
            d.update(self.error.to_dict())
        return d

    def __repr__(self) -> str:
        if self.ok:
            return f"ConversionResult({self.source!r} → {self.output!r})"
        return f"ConversionResult({self.source!r} ✗ {type(self.error).__name__})"


class Transliterator:
    """Converts MLCTS text to Myanmar script.

    Holds a read-only Dictionary and the tokenizer / resolver settings;
    safe to share between threads.
    """

    def __init__(
        self,
        dictionary: Dictionary | None = None,
        *,
        tokenizer_config: TokenizerConfig | None = None,
        weights: ScoringWeights | None = None,
    ):
        self.dictionary = dictionary
        self.tokenizer_config = tokenizer_config or TokenizerConfig()
        self.weights = weights or ScoringWeights()

    # ── Construction helpers ─────────────────────────────────────────────

    def add_dictionary(self, *paths: str | Path) -> None:
        """Load dictionary files (globs allowed), merged with any already loaded."""
        resolved = _expand_paths(paths)
        if not resolved:
            return
        entries = list(self.dictionary.entries) if self.dictionary else []
        sources = [self.dictionary.source] if self.dictionary and self.dictionary.source else []
        for path in resolved:
            d = Dictionary.from_file(path)
            entries.extend(d.entries)
            sources.append(d.source)
        self.dictionary = Dictionary(entries, source=", ".join(sources))

    @classmethod
    def from_config(cls, config_path: str | Path = "mlcts.toml") -> Transliterator:
        """Build a Transliterator from a TOML config file.

        Paths in the config are resolved relative to the config file's
        directory.  Glob patterns in paths are expanded.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config not found: {config_path}")

        with config_path.open("rb") as f:
            cfg = tomllib.load(f)

        base_dir = config_path.parent
        engine = cls(
            tokenizer_config=TokenizerConfig.from_dict(cfg.get("tokenizer", {})),
            weights=ScoringWeights.from_dict(cfg.get("resolver", {})),
        )

        dict_cfg = cfg.get("dictionary", {})
        dict_paths = list(dict_cfg.get("paths", []))
        if "path" in dict_cfg:
            dict_paths.insert(0, dict_cfg["path"])
        if dict_paths:
            resolved = _resolve_config_paths(dict_paths, base_dir)
            if resolved:
                engine.add_dictionary(*resolved)

        logger.info("Configured from %s", config_path)
        return engine

    @property
    def effective_tokenizer_config(self) -> TokenizerConfig:
        """The tokenizer settings with expand_variants decided.

        Left unset, spelling variants are generated only when a dictionary
        is loaded, since without one the primary spelling always wins.
        """
        cfg = self.tokenizer_config
        if cfg.expand_variants is None:
            return replace(cfg, expand_variants=self.dictionary is not None)
        return cfg

    # ── Conversion ───────────────────────────────────────────────────────

    def candidates(self, word: str, offset: int = 0) -> list[ScoredParse]:
        """All valid renderings of one MLCTS word, best first."""
        parses = tokenize(word, offset=offset, config=self.effective_tokenizer_config)
        return rank(parses, self.dictionary, weights=self.weights, text=word)

    def analyze(self, text: str) -> ConversionResult:
        """Convert `text`, keeping per-word candidates. Raises MlctsError."""
        pieces: list[str] = []
        words: list[WordResult] = []
        for m in _CHUNK.finditer(text):
            chunk = m.group()
            if chunk.isspace():
                pieces.append(chunk)
            elif chunk.isascii() and chunk.isdigit():
                pieces.append("".join(DIGITS[ch] for ch in chunk))
            else:
                word = WordResult(chunk, m.start(), self.candidates(chunk, m.start()))
                words.append(word)
                pieces.append(word.output)
        return ConversionResult(source=text, output="".join(pieces), words=words)

    def transliterate(self, text: str) -> str:
        """Convert `text` to Myanmar script. Raises MlctsError on failure."""
        return self.analyze(text).output

    def convert(self, text: str) -> ConversionResult:
        """Like transliterate(), but failures are returned, not raised."""
        try:
            return self.analyze(text)
        except MlctsError as e:
            logger.debug("Failed to convert %r: %s", text, e)
            return ConversionResult(source=text, error=e)

    def transliterate_batch(
        self, texts: Iterable[str], *, workers: int = 1,
    ) -> list[ConversionResult]:
        """Convert many texts; one failure never affects the others.

        Results come back in input order. With workers > 1 the texts are
        spread over a thread pool.
        """
        texts = list(texts)
        if workers > 1 and len(texts) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = list(pool.map(self.convert, texts))
        else:
            results = [self.convert(t) for t in texts]

        failed = sum(1 for r in results if not r.ok)
        logger.info("Converted %d/%d texts", len(results) - failed, len(results))
        return results

    # ── Introspection ────────────────────────────────────────────────────

    def summary(self) -> str:
        cfg = self.tokenizer_config
        lines = ["Transliterator"]
        lines.append(f"  max_candidates:    {cfg.max_candidates}")
        lines.append(f"  implicit_stacking: {cfg.implicit_stacking}")
        variants = cfg.expand_variants
        if variants is None:
            variants = f"auto ({self.dictionary is not None})"
        lines.append(f"  expand_variants:   {variants}")
        if self.dictionary is not None:
            for sub_line in self.dictionary.summary().split("\n"):
                lines.append(f"  {sub_line}")
        else:
            lines.append("  (no dictionary)")
        return "\n".join(lines)


# ── Path helpers ─────────────────────────────────────────────────────────

def _expand_paths(paths: tuple[str | Path, ...]) -> list[Path]:
    """Expand globs and return the matching Paths in sorted order."""
    result = []
    for p in paths:
        p_str = str(p)
        if "*" in p_str or "?" in p_str:
            result.extend(Path(m) for m in sorted(glob.glob(p_str)))
        else:
            result.append(Path(p))
    return result


def _resolve_config_paths(raw_paths: list[str], base_dir: Path) -> list[Path]:
    """Resolve config paths relative to base_dir."""
    return [Path(p) if Path(p).is_absolute() else base_dir / p for p in raw_paths]
