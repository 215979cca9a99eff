"""mlcts: MLCTS romanization to Myanmar script transliteration."""

from mlcts.tokens import TokenKind, Token, Syllable, Parse, GraphemeCluster
from mlcts.errors import (
    MlctsError, LexError, AmbiguityOverflow, InvalidStructure, NoValidParse,
)
from mlcts.tokenizer import tokenize, TokenizerConfig
from mlcts.generator import render, render_parse, validate
from mlcts.resolver import resolve, rank, ScoringWeights, ScoredParse
from mlcts.dictionary import Dictionary, DictionaryEntry
from mlcts.syllables import from_my, parse_syllable, split_syllables
from mlcts.engine import Transliterator, ConversionResult
from mlcts.roundtrip import check_round_trip

__all__ = [
    "TokenKind", "Token", "Syllable", "Parse", "GraphemeCluster",
    "MlctsError", "LexError", "AmbiguityOverflow", "InvalidStructure", "NoValidParse",
    "tokenize", "TokenizerConfig",
    "render", "render_parse", "validate",
    "resolve", "rank", "ScoringWeights", "ScoredParse",
    "Dictionary", "DictionaryEntry",
    "split_syllables", "from_my", "parse_syllable",
    "Transliterator", "ConversionResult",
    "check_round_trip",
]
