# tests/test_word_transformer.py
import pytest

from pattern_core import VerbFeatures
from word_transformer import EnglishInflector

PRESENT_THIRD = VerbFeatures(tense="present", aspect="simple", person="third", number="singular")
PRESENT_FIRST = VerbFeatures(tense="present", aspect="simple", person="first", number="singular")
PAST = VerbFeatures(tense="past", aspect="simple", person="first", number="singular")


@pytest.fixture
def inflector():
    return EnglishInflector()


@pytest.mark.parametrize("verb, expected", [
    ("go", "goes"),
    ("have", "has"),
    ("watch", "watches"),
    ("study", "studies"),
    ("play", "plays"),
    ("eat", "eats"),
])
def test_present_third_person(inflector, verb, expected):
    assert inflector.inflect(verb, PRESENT_THIRD) == expected


def test_present_other_persons_keep_base(inflector):
    assert inflector.inflect("go", PRESENT_FIRST) == "go"
    assert inflector.inflect("go", VerbFeatures(person="third", number="plural")) == "go"
    assert inflector.inflect("go") == "go"


@pytest.mark.parametrize("verb, expected", [
    ("go", "went"),
    ("eat", "ate"),
    ("study", "studied"),
    ("bake", "baked"),
    ("stop", "stopped"),
    ("visit", "visited"),
])
def test_simple_past(inflector, verb, expected):
    assert inflector.inflect(verb, PAST) == expected


def test_progressive_forms(inflector):
    past_first = VerbFeatures(tense="past", aspect="progressive", person="first", number="singular")
    present_first = VerbFeatures(tense="present", aspect="progressive", person="first", number="singular")
    present_third = VerbFeatures(tense="present", aspect="progressive", person="third", number="singular")
    present_plural = VerbFeatures(tense="present", aspect="progressive", person="first", number="plural")
    future = VerbFeatures(tense="future", aspect="progressive")

    assert inflector.inflect("study", past_first) == "was studying"
    assert inflector.inflect("make", present_first) == "am making"
    assert inflector.inflect("run", present_third) == "is running"
    assert inflector.inflect("see", present_plural) == "are seeing"
    assert inflector.inflect("go", future) == "will be going"


def test_perfect_forms(inflector):
    assert inflector.inflect("make", VerbFeatures(tense="present", aspect="perfect", person="first")) == "have made"
    assert inflector.inflect("eat", VerbFeatures(tense="present", aspect="perfect", person="third")) == "has eaten"
    assert inflector.inflect("go", VerbFeatures(tense="past", aspect="perfect")) == "had gone"
    assert inflector.inflect("do", VerbFeatures(tense="future", aspect="perfect")) == "will have done"


def test_future_simple(inflector):
    assert inflector.inflect("cook", VerbFeatures(tense="future", aspect="simple")) == "will cook"


def test_negative_forms(inflector):
    negative = dict(polarity="negative")
    assert inflector.inflect("go", VerbFeatures(person="third", **negative)) == "does not go"
    assert inflector.inflect("go", VerbFeatures(person="first", **negative)) == "do not go"
    assert inflector.inflect("go", VerbFeatures(tense="past", **negative)) == "did not go"
    assert inflector.inflect("go", VerbFeatures(tense="future", **negative)) == "will not go"
    assert inflector.inflect("be", VerbFeatures(person="third", **negative)) == "is not"
    assert inflector.inflect(
        "go", VerbFeatures(aspect="progressive", person="third", **negative)) == "is not going"


def test_phrasal_verb_inflects_head_only(inflector):
    assert inflector.inflect("pick up", PRESENT_THIRD) == "picks up"
    assert inflector.inflect("pick up", PAST) == "picked up"


@pytest.mark.parametrize("noun, expected", [
    ("bus", "buses"),
    ("box", "boxes"),
    ("city", "cities"),
    ("day", "days"),
    ("knife", "knives"),
    ("leaf", "leaves"),
    ("roof", "roofs"),
    ("cafe", "cafes"),
    ("safe", "safes"),
    ("giraffe", "giraffes"),
    ("tooth", "teeth"),
    ("sheep", "sheep"),
    ("meeting room", "meeting rooms"),
])
def test_pluralize(inflector, noun, expected):
    assert inflector.pluralize(noun) == expected


def test_pluralize_uses_irregular_override(inflector):
    assert inflector.pluralize("cactus", "cacti") == "cacti"


@pytest.mark.parametrize("word, expected", [
    ("apple", "an"),
    ("hour", "an"),
    ("umbrella", "an"),
    ("university", "a"),
    ("banana", "a"),
])
def test_article_for(inflector, word, expected):
    assert inflector.article_for(word) == expected
