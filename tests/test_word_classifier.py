# tests/test_word_classifier.py
import pytest

from word_classifier import SemanticClassifier


@pytest.fixture
def classifier():
    return SemanticClassifier()


def test_classify_english_and_korean(classifier):
    assert "BEVERAGE" in classifier.classify("Coffee")
    assert "BEVERAGE" in classifier.classify("커피")
    assert "FOOD" in classifier.classify("빵")
    assert classifier.classify("spaceship") == frozenset()
    assert classifier.classify("") == frozenset()


def test_word_can_belong_to_several_categories(classifier):
    categories = classifier.classify("key")
    assert {"NON_CONSUMABLE", "TOOL"} <= categories


def test_categories_for_adds_explicit_category(classifier, make_lexeme):
    lexeme = make_lexeme("d1", "orange juice", "오렌지 주스", "ITEM", semantic_category="beverage")
    assert classifier.categories_for(lexeme) == frozenset({"BEVERAGE"})


def test_can_perform_action(classifier):
    assert classifier.can_perform_action("drink", "coffee")
    assert not classifier.can_perform_action("drink", "bread")
    assert not classifier.can_perform_action("eat", "key")
    assert classifier.can_perform_action("eat", "apple")
    assert classifier.can_perform_action("visit", "anything")


def test_suggest_verb_for_object(classifier):
    assert classifier.suggest_verb_for_object("milk") == "drink"
    assert classifier.suggest_verb_for_object("pizza") == "eat"
    assert classifier.suggest_verb_for_object("cloud") is None


def test_custom_tables_replace_builtins():
    classifier = SemanticClassifier({"snack": ["chips"]})
    assert classifier.classify("Chips") == frozenset({"SNACK"})
    assert classifier.classify("coffee") == frozenset()


def test_time_words_are_split_by_tense(classifier):
    assert classifier.classify("yesterday") == frozenset({"PAST_TIME"})
    assert classifier.classify("Next Monday") == frozenset({"FUTURE_TIME"})
    assert classifier.classify("오늘 오후") == frozenset({"PAST_TIME", "FUTURE_TIME"})


def test_can_perform_action_for_cooking_preparing_and_reading(classifier):
    assert not classifier.can_perform_action("make", "water")
    assert classifier.can_perform_action("make", "coffee")
    assert classifier.can_perform_action("prepare", "report")
    assert not classifier.can_perform_action("cook", "key")
    assert not classifier.can_perform_action("read", "bread")
    assert classifier.can_perform_action("read", "book")


def test_can_perform_action_uses_given_categories(classifier):
    assert not classifier.can_perform_action("drink", "orange juice")
    assert classifier.can_perform_action("drink", "orange juice", {"BEVERAGE"})
