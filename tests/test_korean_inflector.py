# tests/test_korean_inflector.py
import pytest

from korean_inflector import KoreanInflector
from pattern_core import VerbFeatures

PAST = VerbFeatures(tense="past", aspect="simple", person="first", number="singular")
PRESENT_THIRD = VerbFeatures(tense="present", aspect="simple", person="third", number="singular")
PRESENT_FIRST = VerbFeatures(tense="present", aspect="simple", person="first", number="singular")
FUTURE = VerbFeatures(tense="future", aspect="simple", person="first", number="singular")


@pytest.fixture
def korean():
    return KoreanInflector()


@pytest.mark.parametrize("verb, expected", [
    ("가다", "갔어"),
    ("오다", "왔어"),
    ("먹다", "먹었어"),
    ("마시다", "마셨어"),
    ("공부하다", "공부했어"),
    ("만들다", "만들었어"),
    ("걷다", "걸었어"),
])
def test_past_simple(korean, verb, expected):
    assert korean.inflect(verb, PAST) == expected


def test_present_perfect_uses_past_form(korean):
    features = VerbFeatures(tense="present", aspect="perfect", person="first", number="singular")
    assert korean.inflect("만들다", features) == "만들었어"


@pytest.mark.parametrize("verb, expected", [
    ("가다", "가요"),
    ("마시다", "마셔요"),
    ("만들다", "만들어요"),
    ("공부하다", "공부해요"),
    ("듣다", "들어요"),
])
def test_present_third_person_is_polite(korean, verb, expected):
    assert korean.inflect(verb, PRESENT_THIRD) == expected


def test_present_first_person_is_casual(korean):
    assert korean.inflect("가다", PRESENT_FIRST) == "가"
    assert korean.inflect("듣다", PRESENT_FIRST) == "들어"


@pytest.mark.parametrize("verb, expected", [
    ("가다", "갈 거야"),
    ("먹다", "먹을 거야"),
    ("만들다", "만들 거야"),
    ("공부하다", "공부할 거야"),
])
def test_future_simple(korean, verb, expected):
    assert korean.inflect(verb, FUTURE) == expected


def test_progressive(korean):
    past = VerbFeatures(tense="past", aspect="progressive")
    present = VerbFeatures(tense="present", aspect="progressive")
    assert korean.inflect("공부하다", past) == "공부하고 있었어"
    assert korean.inflect("읽다", present) == "읽고 있어"


def test_unsupported_requests_return_verb_unchanged(korean):
    assert korean.inflect("가다") == "가다"
    assert korean.inflect("가다", VerbFeatures(tense="future", aspect="progressive")) == "가다"
    assert korean.inflect("", PAST) == ""


def test_has_batchim(korean):
    assert korean.has_batchim("병원")
    assert not korean.has_batchim("커피")
    assert not korean.has_batchim("cafe")
    assert not korean.has_batchim("")


@pytest.mark.parametrize("word, marker, expected", [
    ("병원", "을/를", "을"),
    ("커피", "을/를", "를"),
    ("학교", "이/가", "가"),
    ("책", "이/가", "이"),
    ("친구", "과/와", "와"),
    ("집", "으로/로", "으로"),
    ("서울", "으로/로", "로"),
    ("학교", "으로/로", "로"),
])
def test_choose_particle(korean, word, marker, expected):
    assert korean.choose_particle(word, marker) == expected
