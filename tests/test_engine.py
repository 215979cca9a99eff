"""Tests for the Transliterator facade (engine.py)."""

import pytest
from unittest.mock import MagicMock

from mlcts.dictionary import Dictionary
from mlcts.engine import ConversionResult, Transliterator
from mlcts.errors import AmbiguityOverflow, LexError, NoValidParse
from mlcts.tokenizer import TokenizerConfig


# ── Helpers ───────────────────────────────────────────────────────────────────

def _mock_dictionary(myanmar_words: set[str]) -> MagicMock:
    """A dictionary stand-in that only knows whole Myanmar words."""
    d = MagicMock(spec=Dictionary)
    d.contains_myanmar.side_effect = lambda s: s in myanmar_words
    d.has_myanmar_syllable.return_value = False
    d.has_mlcts_syllable.return_value = False
    return d


def _write_config(tmp_path, body: str):
    path = tmp_path / "mlcts.toml"
    path.write_text(body, encoding="utf-8")
    return path


# ── Conversion ────────────────────────────────────────────────────────────────

def test_transliterate_single_syllable():
    assert Transliterator().transliterate("ka.") == "\u1000"


def test_transliterate_words_and_whitespace():
    engine = Transliterator()
    assert engine.transliterate("ka.  ka\tpa") == "\u1000  \u1000\u102C\t\u1015\u102B"


def test_transliterate_digits():
    assert Transliterator().transliterate("ka. 2024") == "\u1000 \u1042\u1040\u1042\u1044"


def test_transliterate_empty():
    assert Transliterator().transliterate("") == ""


def test_transliterate_uses_dictionary(sample_dictionary):
    assert Transliterator().transliterate("kambha") == "\u1000\u1019\u103A\u1018\u102C"
    assert Transliterator(sample_dictionary).transliterate("kambha") == "\u1000\u1019\u1039\u1018\u102C"


def test_transliterate_with_mock_dictionary():
    d = _mock_dictionary({"\u1000\u1014\u103A\u1021\u102C"})          # ကန်အာ
    assert Transliterator(d).transliterate("kana") == "\u1000\u1014\u103A\u1021\u102C"
    d.contains_myanmar.assert_any_call("\u1000\u102C\u1014\u102C")


def test_dictionary_switches_variants_on():
    d = Dictionary.from_pairs([("\u101E\u102F\u1036\u1038", "sum:")])        # သုံး
    assert Transliterator().transliterate("sum:") == "\u101E\u102F\u1019\u103A\u1038"   # သုမ်း
    assert Transliterator(d).transliterate("sum:") == "\u101E\u102F\u1036\u1038"
    assert Transliterator(d).effective_tokenizer_config.expand_variants is True
    assert Transliterator().effective_tokenizer_config.expand_variants is False


def test_explicit_variant_setting_wins():
    d = Dictionary.from_pairs([("\u1000\u1036", "kam")])            # ကံ
    engine = Transliterator(d, tokenizer_config=TokenizerConfig(expand_variants=False))
    assert engine.transliterate("kam") == "\u1000\u1019\u103A"                # ကမ်
    assert Transliterator(d).transliterate("kam") == "\u1000\u1036"


def test_dictionary_word_with_killed_liquid():
    d = Dictionary.from_pairs([("\u1017\u102D\u102F\u101C\u103A", "buil")])         # ဗိုလ်
    result = Transliterator(d).convert("buil")
    assert result.ok
    assert result.output == "\u1017\u102D\u102F\u101C\u103A"


def test_dictionary_selects_independent_vowel():
    d = Dictionary.from_pairs([("\u1026\u1038", "u:")])              # ဦး
    assert Transliterator(d).transliterate("u:") == "\u1026\u1038"


def test_unsegmentable_word_raises_lex_error():
    with pytest.raises(LexError) as exc:
        Transliterator().transliterate("ka. ka+")
    assert exc.value.offset == 6
    assert Transliterator().convert("kk").to_dict()["offset"] == 0


def test_transliterate_raises_with_absolute_offset():
    with pytest.raises(LexError) as exc:
        Transliterator().transliterate("ka. kxa")
    assert exc.value.offset == 5


def test_transliterate_raises_no_valid_parse():
    with pytest.raises(NoValidParse):
        Transliterator().transliterate("kak.")


def test_transliterate_raises_overflow():
    engine = Transliterator(tokenizer_config=TokenizerConfig(max_candidates=2))
    with pytest.raises(AmbiguityOverflow):
        engine.transliterate("kanakana")


def test_convert_never_raises():
    result = Transliterator().convert("kxa")
    assert not result.ok
    assert result.output is None
    assert isinstance(result.error, LexError)
    d = result.to_dict()
    assert d["ok"] is False
    assert d["error"] == "LexError"
    assert d["offset"] == 1


def test_convert_keeps_word_candidates():
    result = Transliterator().convert("kana ka.")
    assert result.ok
    assert result.to_dict() == {"source": "kana ka.", "ok": True, "output": result.output}
    assert [w.source for w in result.words] == ["kana", "ka."]
    assert [w.start for w in result.words] == [0, 5]
    assert len(result.words[0].candidates) == 2
    assert result.words[0].chosen.parse.mlcts == "ka|na"


def test_candidates():
    ranked = Transliterator().candidates("kambha")
    assert [s.parse.mlcts for s in ranked] == ["kam|bha", "ka|mbha"]


# ── Batch ─────────────────────────────────────────────────────────────────────

def test_batch_isolates_failures():
    results = Transliterator().transliterate_batch(["ka.", "kxa", "mranma", "kak."])
    assert [r.ok for r in results] == [True, False, True, False]
    assert results[0].output == "\u1000"
    assert results[2].output == "\u1019\u103C\u1014\u103A\u1019\u102C"
    assert isinstance(results[3].error, NoValidParse)


def test_batch_with_threads_keeps_order():
    texts = ["ka.", "kxa", "mranma", "pa", "kyaung:"] * 4
    engine = Transliterator()
    serial = engine.transliterate_batch(texts)
    threaded = engine.transliterate_batch(texts, workers=4)
    assert [r.output for r in threaded] == [r.output for r in serial]
    assert [r.source for r in threaded] == texts


def test_batch_accepts_generators():
    results = Transliterator().transliterate_batch(t for t in ["ka.", "pa"])
    assert [r.output for r in results] == ["\u1000", "\u1015\u102B"]


def test_conversion_result_repr():
    assert "LexError" in repr(ConversionResult(source="x", error=LexError(0, "x")))


# ── Construction ──────────────────────────────────────────────────────────────

def test_from_config(tmp_path):
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "d.csv").write_text(
        "myanmar,mlcts\n\u1000\u1019\u1039\u1018\u102C,kambha\n", encoding="utf-8"
    )
    path = _write_config(tmp_path, (
        '[dictionary]\npath = "data/d.csv"\n\n'
        "[tokenizer]\nmax_candidates = 64\nexpand_variants = false\n\n"
        "[resolver]\nstack_penalty = 0.5\n"
    ))
    engine = Transliterator.from_config(path)
    assert engine.tokenizer_config.max_candidates == 64
    assert engine.weights.stack_penalty == 0.5
    assert len(engine.dictionary) == 1
    assert engine.transliterate("kambha") == "\u1000\u1019\u1039\u1018\u102C"


def test_from_config_without_dictionary(tmp_path):
    engine = Transliterator.from_config(_write_config(tmp_path, "[tokenizer]\n"))
    assert engine.dictionary is None


def test_from_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Transliterator.from_config(tmp_path / "nope.toml")


def test_from_config_rejects_unknown_settings(tmp_path):
    path = _write_config(tmp_path, "[tokenizer]\nmax_candidate = 3\n")
    with pytest.raises(ValueError):
        Transliterator.from_config(path)


def test_add_dictionary_merges(tmp_path):
    (tmp_path / "a.csv").write_text("myanmar,mlcts\n\u1015\u102B,pa\n", encoding="utf-8")
    (tmp_path / "b.csv").write_text("myanmar,mlcts\n\u1012\u102B,da\n", encoding="utf-8")
    engine = Transliterator()
    engine.add_dictionary(tmp_path / "a.csv")
    engine.add_dictionary(str(tmp_path / "b*.csv"))
    assert len(engine.dictionary) == 2
    assert engine.dictionary.contains_mlcts("da")


def test_summary(sample_dictionary):
    assert "(no dictionary)" in Transliterator().summary()
    assert "auto" in Transliterator().summary()
    assert "Entries:" in Transliterator(sample_dictionary).summary()
