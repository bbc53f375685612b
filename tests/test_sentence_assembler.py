# tests/test_sentence_assembler.py
import pytest

from pattern_schemas import PatternSchema, SchemaRegistry, SlotSpec
from sentence_assembler import SentenceAssembler


@pytest.fixture
def assembler():
    return SentenceAssembler()


@pytest.fixture
def seed():
    return SchemaRegistry.with_seed()


def test_hospital_question(assembler, where_schema, make_lexeme):
    hospital = make_lexeme("p1", "hospital", "병원", "PLACE")
    sentence = assembler.assemble(where_schema, {"PLACE": hospital})
    assert sentence.english == "Where is the hospital?"
    assert sentence.korean == "병원 어디 있어?"
    assert sentence.used_lexemes == [hospital]
    assert (sentence.filled_slots, sentence.total_slots) == (1, 1)


def test_omitted_optional_slot_leaves_clean_text(assembler, seed):
    sentence = assembler.assemble(seed.get("GREETING-NICE-TO-MEET"), {"PERSON": None})
    assert sentence.english == "Nice to meet you!"
    assert sentence.korean == "만나서 반가워!"
    assert sentence.filled_slots == 0


def test_particles_follow_the_filled_word(assembler, seed, make_lexeme):
    schema = seed.get("DAILY-LIKE-FOOD")
    bread = assembler.assemble(schema, {"FOOD": make_lexeme("f1", "bread", "빵", "ITEM")})
    apple = assembler.assemble(schema, {"FOOD": make_lexeme("f2", "apple", "사과", "ITEM")})
    assert bread.korean == "빵을 정말 좋아해."
    assert apple.korean == "사과를 정말 좋아해."


def test_verb_morphology_in_both_languages(assembler, seed, make_lexeme):
    sentence = assembler.assemble(seed.get("DIARY-PAST-WENT"), {
        "VERB": make_lexeme("v1", "go", "가다", "VERB"),
        "PLACE": make_lexeme("p1", "hospital", "병원", "PLACE"),
        "TIME": make_lexeme("t1", "yesterday", "어제", "TIME"),
    })
    assert sentence.english == "I went to the hospital yesterday."
    assert sentence.korean == "어제 병원에 갔어."


def test_plural_slot_uses_irregular_plural(assembler, seed, make_lexeme):
    tooth = make_lexeme("n1", "tooth", "치아", "NOUN", irregular_plural="teeth")
    sentence = assembler.assemble(seed.get("HAVE-PLURAL-NOUN"), {"NOUN": tooth})
    assert sentence.english == "I have two teeth."
    assert sentence.korean == "치아 두 개 있어."


def test_idioms_drop_article_before_home_and_school(assembler, seed, make_lexeme):
    schema = seed.get("GO-PLACE-TIME")
    tomorrow = make_lexeme("t1", "tomorrow", "내일", "TIME")
    home = assembler.assemble(schema, {"PLACE": make_lexeme("p1", "home", "집", "PLACE"), "TIME": tomorrow})
    school = assembler.assemble(schema, {"PLACE": make_lexeme("p2", "school", "학교", "PLACE"), "TIME": None})
    assert home.english == "I'm going home tomorrow."
    assert home.korean == "내일 집에 갈 거야."
    assert school.english == "I'm going to school."
    assert school.korean == "학교에 갈 거야."


def test_article_matches_following_sound(assembler, make_lexeme):
    schema = PatternSchema(
        id="ORDER",
        category="daily",
        surface="Can I get a [DRINK], please?",
        ko_surface="[DRINK] 한 잔 주세요.",
        slots=[SlotSpec(name="DRINK", accept=("ITEM",))],
    )
    juice = make_lexeme("i1", "orange juice", "오렌지 주스", "ITEM")
    sentence = assembler.assemble(schema, {"DRINK": juice})
    assert sentence.english == "Can I get an orange juice, please?"
    assert sentence.korean == "오렌지 주스 한 잔 주세요."


def test_unbound_required_slot_fails(assembler, where_schema):
    sentence, reason = assembler.assemble_with_reason(where_schema, {})
    assert sentence is None
    assert reason == "required slot [PLACE] is unbound"


def test_placeholder_without_slot_fails(assembler, make_lexeme):
    schema = PatternSchema(id="BROKEN", category="directions", surface="Where is the [SPOT]?",
                           ko_surface="[SPOT] 어디 있어?",
                           slots=[SlotSpec(name="PLACE", accept=("PLACE",))])
    sentence, reason = assembler.assemble_with_reason(
        schema, {"PLACE": make_lexeme("p1", "park", "공원", "PLACE")})
    assert sentence is None
    assert "[SPOT]" in reason


def test_leftover_placeholder_in_word_fails(assembler, where_schema, make_lexeme):
    odd = make_lexeme("p1", "[PLACE]", "장소", "PLACE")
    assert assembler.assemble(where_schema, {"PLACE": odd}) is None


def test_doubled_article_fails(assembler, make_lexeme):
    schema = PatternSchema(id="SAW", category="daily", surface="I saw the [PLACE].",
                           ko_surface="[PLACE]을/를 봤어.",
                           slots=[SlotSpec(name="PLACE", accept=("PLACE",))])
    sentence, reason = assembler.assemble_with_reason(
        schema, {"PLACE": make_lexeme("p1", "the park", "공원", "PLACE")})
    assert sentence is None
    assert reason.startswith("doubled article")


def test_naturalize_english_capitalizes_and_terminates(assembler):
    assert assembler.naturalize_english("i am  at the home ") == "I am at home."
    assert assembler.naturalize_korean("  집에 있어 ") == "집에 있어."
