"""Tests for the MLCTS tokenizer (tokenizer.py)."""

import pytest

from mlcts.errors import AmbiguityOverflow, LexError
from mlcts.tokenizer import TokenizerConfig, scan, tokenize
from mlcts.tokens import TokenKind


def _mlcts(parses) -> list[str]:
    return [p.mlcts for p in parses]


def _kinds(syllable) -> list[TokenKind]:
    return [t.kind for t in syllable.tokens]


# ── Lexical scan ──────────────────────────────────────────────────────────────

def test_lex_error_offset():
    with pytest.raises(LexError) as exc:
        tokenize("kxa")
    assert exc.value.offset == 1
    assert exc.value.char == "x"
    assert exc.value.stage == "tokenizer"


def test_lex_error_offset_is_absolute():
    with pytest.raises(LexError) as exc:
        tokenize("kxa", offset=5)
    assert exc.value.offset == 6


def test_lex_error_on_whitespace():
    with pytest.raises(LexError):
        scan("ka ka")


def test_scan_accepts_tone_stack_and_separators():
    scan("k+ka.-ka:'ka")


def test_uppercase_is_lowered():
    parses = tokenize("KA.")
    assert _mlcts(parses) == ["ka."]


def test_empty_word():
    assert tokenize("") == []


# ── Single syllables ──────────────────────────────────────────────────────────

def test_single_syllable_with_tone():
    parses = tokenize("ka.")
    assert len(parses) == 1
    assert parses[0].syllable_count == 1
    assert _kinds(parses[0].syllables[0]) == [
        TokenKind.INITIAL_CONSONANT, TokenKind.VOWEL_SIGN, TokenKind.TONE_MARK,
    ]


def test_digraphs_are_never_split():
    (parse,) = tokenize("hka")
    assert parse.syllables[0].initial.text == "hk"
    (parse,) = tokenize("nga")
    assert parse.syllables[0].initial.text == "ng"


def test_vowel_digraph_is_one_nucleus():
    (parse,) = tokenize("kau")
    assert parse.syllables[0].vowel.text == "au"


def test_aspirating_medial_before_sonorant():
    (parse,) = tokenize("hma")
    syl = parse.syllables[0]
    assert syl.tokens[0].kind is TokenKind.MEDIAL
    assert syl.tokens[0].text == "h"
    assert syl.initial.text == "m"


def test_h_before_vowel_is_a_consonant():
    (parse,) = tokenize("ha")
    assert parse.syllables[0].initial.text == "h"
    assert parse.syllables[0].medials == []


def test_medials_y_and_w():
    (parse,) = tokenize("kywa")
    assert [m.text for m in parse.syllables[0].medials] == ["y", "w"]


def test_final_and_tone():
    (parse,) = tokenize("kyaung:")
    syl = parse.syllables[0]
    assert syl.final.text == "ng"
    assert syl.tone.text == ":"


def test_vowel_initial_syllable_has_implicit_initial():
    (parse,) = tokenize("a")
    initial = parse.syllables[0].initial
    assert initial.text == ""
    assert initial.implicit


@pytest.mark.parametrize("word,offset", [("k", 0), ("+", 0), ("kk", 0), ("-ka", 0), ("ka+", 2)])
def test_unsegmentable_word_reports_offset(word, offset):
    with pytest.raises(LexError) as exc:
        tokenize(word)
    assert exc.value.offset == offset
    assert exc.value.char == word[offset]
    assert "cannot segment" in str(exc.value)


def test_unsegmentable_offset_is_absolute():
    with pytest.raises(LexError) as exc:
        tokenize("ka+", offset=4)
    assert exc.value.offset == 6


# ── Segmentation forks ────────────────────────────────────────────────────────

def test_two_way_segmentation():
    parses = tokenize("kana")
    assert _mlcts(parses) == ["kan|a", "ka|na"]


def test_final_is_only_offered_where_the_nucleus_allows_it():
    # "e" takes no final, so "n" must start the next syllable.
    assert _mlcts(tokenize("kena")) == ["ke|na"]


def test_killed_stop_and_liquid_finals():
    assert _mlcts(tokenize("kabha")) == ["kab|ha", "ka|bha"]
    (parse,) = tokenize("buil")
    assert parse.syllables[0].final.text == "l"


def test_implicit_stack_fork():
    parses = tokenize("kambha")
    assert _mlcts(parses) == ["kam|bha", "ka|mbha"]
    stacked = parses[1]
    assert stacked.implicit_stacks == 1
    assert stacked.syllables[0].vowel.closed
    assert [t.text for t in stacked.syllables[1].stacked] == ["bh"]


def test_implicit_stacking_can_be_switched_off():
    config = TokenizerConfig(implicit_stacking=False)
    assert _mlcts(tokenize("kambha", config=config)) == ["kam|bha"]


def test_explicit_stack_at_word_start():
    (parse,) = tokenize("k+ka.")
    syl = parse.syllables[0]
    assert _kinds(syl) == [
        TokenKind.INITIAL_CONSONANT, TokenKind.STACK_MARKER,
        TokenKind.INITIAL_CONSONANT, TokenKind.VOWEL_SIGN, TokenKind.TONE_MARK,
    ]
    assert not syl.implicit_stack


def test_explicit_stack_closes_previous_syllable():
    parses = tokenize("kak+ka.")
    assert _mlcts(parses) == ["ka|k+ka."]
    assert parses[0].syllables[0].vowel.closed
    assert parses[0].implicit_stacks == 0


def test_explicit_stack_after_open_syllable_is_rejected():
    # "e" cannot be closed by a stacked coda.
    with pytest.raises(LexError) as exc:
        tokenize("kek+ka.")
    assert exc.value.offset == 2


def test_separator_fixes_the_boundary():
    assert _mlcts(tokenize("ka-na")) == ["ka-|na"]
    assert _mlcts(tokenize("kan-a")) == ["kan-|a"]
    last = tokenize("ka-na")[0].syllables[0].tokens[-1]
    assert last.kind is TokenKind.WORD_BOUNDARY_HINT


def test_apostrophe_separator():
    assert _mlcts(tokenize("kan'a")) == ["kan'|a"]


def test_deterministic_order():
    assert _mlcts(tokenize("mranmakana")) == _mlcts(tokenize("mranmakana"))


# ── Spans ─────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("word", ["kana", "kambha", "mranma", "kak+ka.", "ka-na", "a"])
def test_tokens_partition_the_word(word):
    for parse in tokenize(word, offset=3):
        tokens = parse.tokens
        assert tokens[0].start == 3
        assert tokens[-1].end == 3 + len(word)
        for prev, tok in zip(tokens, tokens[1:]):
            assert tok.start == prev.end


# ── Variants and bounds ───────────────────────────────────────────────────────

def test_variants_only_when_enabled():
    assert TokenizerConfig().expand_variants is None
    assert len(tokenize("ta")) == 1
    parses = tokenize("ta", config=TokenizerConfig(expand_variants=True))
    assert sorted(p.syllables[0].initial.variant for p in parses) == [0, 1]


def test_final_variants():
    parses = tokenize("kam", config=TokenizerConfig(expand_variants=True))
    finals = sorted(p.syllables[0].final.variant for p in parses if p.syllables[0].final)
    assert finals == [0, 1]


def test_independent_vowel_variant():
    config = TokenizerConfig(expand_variants=True)
    parses = tokenize("u:", config=config)
    assert sorted(p.syllables[0].initial.variant for p in parses) == [0, 1]


def test_independent_vowel_only_for_open_rhymes():
    config = TokenizerConfig(expand_variants=True)
    # No letter spells "ai", and a final rules the letter out.
    assert len(tokenize("ai", config=config)) == 1
    assert {p.syllables[0].initial.variant for p in tokenize("an", config=config)} == {0}


def test_ambiguity_overflow():
    with pytest.raises(AmbiguityOverflow) as exc:
        tokenize("kanakanakana", config=TokenizerConfig(max_candidates=4))
    assert exc.value.limit == 4


def test_max_candidates_must_be_positive():
    with pytest.raises(ValueError):
        TokenizerConfig(max_candidates=0)


def test_config_from_dict_rejects_unknown_keys():
    assert TokenizerConfig.from_dict({"max_candidates": 10}).max_candidates == 10
    with pytest.raises(ValueError, match="unknown"):
        TokenizerConfig.from_dict({"max_candidate": 10})
