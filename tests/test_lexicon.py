# tests/test_lexicon.py
import pytest

from lexicon import Lexicon, dedupe_key
from pattern_core import Lexeme, VerbFeatures


def test_incomplete_entries_are_excluded(make_lexeme):
    lexicon = Lexicon([
        make_lexeme("p1", "hospital", "병원", "PLACE"),
        make_lexeme("p2", "park", "", "PLACE"),
        make_lexeme("p3", "station", "역", "PLANET"),
    ])
    assert len(lexicon) == 1
    assert "p1" in lexicon
    assert lexicon.excluded == {"p2": "incomplete", "p3": "incomplete"}


def test_duplicate_ids_and_words_keep_first(make_lexeme):
    lexicon = Lexicon([
        make_lexeme("p1", "hospital", "병원", "PLACE"),
        make_lexeme("p1", "park", "공원", "PLACE"),
        make_lexeme("p2", "Hospital ", "병원", "PLACE"),
        make_lexeme("n1", "hospital", "병원", "NOUN"),
    ])
    assert [lexeme.id for lexeme in lexicon] == ["p1", "n1"]
    assert lexicon.get("p1").en == "hospital"
    assert lexicon.excluded["p2"] == "duplicate_word"


def test_dedupe_key_normalizes_accents_and_spacing(make_lexeme):
    first = make_lexeme("a", "café", "카페", "PLACE")
    second = make_lexeme("b", "Cafe", "카페", "PLACE")
    assert dedupe_key(first) == dedupe_key(second) == "PLACE:cafe"


def test_by_pos_keeps_snapshot_order(make_lexeme):
    lexicon = Lexicon([
        make_lexeme("t1", "today", "오늘", "TIME"),
        make_lexeme("p1", "park", "공원", "PLACE"),
        make_lexeme("i1", "pen", "펜", "ITEM"),
        make_lexeme("p2", "school", "학교", "PLACE"),
    ])
    assert [lexeme.id for lexeme in lexicon.by_pos(["PLACE", "ITEM"])] == ["p1", "i1", "p2"]
    assert lexicon.pos_counts() == {"TIME": 1, "PLACE": 2, "ITEM": 1}


def test_from_records_accepts_pack_keys():
    lexicon = Lexicon.from_records([
        {"id": "tooth", "en": "tooth", "ko": "치아", "pos": "noun", "irregularPlural": "teeth",
         "semanticCategory": "BODY_PART"},
    ])
    lexeme = lexicon.get("tooth")
    assert lexeme.pos == "NOUN"
    assert lexeme.irregular_plural == "teeth"
    assert lexeme.semantic_category == "BODY_PART"


def test_verb_features_reject_unknown_values():
    with pytest.raises(ValueError):
        VerbFeatures(tense="pluperfect")
    assert VerbFeatures.from_dict({}) is None
    assert VerbFeatures(person="third").is_third_singular
    assert not VerbFeatures(person="third", number="plural").is_third_singular


def test_lexeme_usability():
    assert Lexeme(id="x", en="go", ko="가다", pos="VERB").is_usable()
    assert not Lexeme(id="", en="go", ko="가다", pos="VERB").is_usable()
