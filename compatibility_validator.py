"""
Compatibility Validator Module
Rejects generated sentences with leftover placeholders or nonsensical word pairs.
"""
import re
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from pattern_core import ForbiddenCombination, Lexeme, NOMINAL_POS, POS_TAGS
from word_classifier import SemanticClassifier
from word_transformer import EnglishInflector


def _combo(verbs: Iterable[str], objects: Iterable[str] = (), categories: Iterable[str] = (),
           reason: str = '', schema_ids: Optional[Iterable[str]] = None) -> ForbiddenCombination:
    return ForbiddenCombination(
        verbs=frozenset(verbs),
        objects=frozenset(objects),
        object_categories=frozenset(categories),
        reason=reason,
        schema_ids=frozenset(schema_ids) if schema_ids is not None else None,
    )


EAT_FORMS = ('eat', 'eats', 'ate', 'eaten', 'eating')
DRINK_FORMS = ('drink', 'drinks', 'drank', 'drunk', 'drinking')

# Slots holding the thing a verb acts on; places and people are not objects
OBJECT_POS = ('ITEM', 'NOUN')


class CompatibilityValidator:
    """Checks assembled sentences for completeness and semantic sense."""

    # ============================================================================
    # CONFIGURATION: Forbidden verb/object pairs
    # ============================================================================

    FORBIDDEN_COMBINATIONS = (
        _combo(EAT_FORMS, ('water', 'coffee', 'tea', 'milk', 'juice'), ('BEVERAGE',),
               "liquids are drunk, not eaten"),
        _combo(DRINK_FORMS, ('bread', 'sandwich', 'rice', 'meat', 'apple'), ('FOOD',),
               "solid food is eaten, not drunk"),
        _combo(DRINK_FORMS, ('book', 'phone'), ('NON_CONSUMABLE',),
               "objects cannot be drunk"),
        _combo(EAT_FORMS, (), ('NON_CONSUMABLE',),
               "objects cannot be eaten"),
        _combo(('go', 'goes', 'went', 'gone', 'going'), ('teeth', 'hair', 'eyes'), ('BODY_PART',),
               "body parts are not destinations"),
        _combo(('schedule', 'schedules', 'scheduled', 'reschedule', 'rescheduled'),
               ('meeting room', 'conference room', 'head office'), (),
               "a place is booked, not scheduled"),
        _combo(('confirm', 'confirms', 'confirmed'), ('head office', 'meeting room'), (),
               "a place cannot be confirmed"),
        _combo(('have', 'has', 'had'), ('meeting room', 'conference room'), (),
               "a room is booked, not had"),
    )

    # ============================================================================
    # CONFIGURATION: Place affinity
    # ============================================================================

    # Place -> (activities that happen there, activities that do not).
    # A known place rejects every activity missing from its first list.
    PLACE_ACTIVITY_MAP = {
        'hospital': (
            {'visit', 'go', 'come', 'walk', 'drive', 'work', 'wait', 'study'},
            {'make', 'cook', 'play', 'sleep', 'meet'},
        ),
        'bathroom': ({'go', 'come', 'walk', 'wait', 'wash'}, {'meet'}),
        'restroom': ({'go', 'come', 'walk', 'wait', 'wash'}, {'meet'}),
        'toilet': ({'go', 'come', 'walk', 'wait', 'wash'}, {'meet'}),
        'school': (
            {'study', 'learn', 'teach', 'read', 'go', 'come', 'walk', 'drive', 'work', 'meet'},
            {'sleep', 'cook', 'make'},
        ),
        'office': (
            {'work', 'meet', 'study', 'read', 'go', 'come', 'walk', 'drive'},
            {'cook', 'sleep', 'play', 'make'},
        ),
        'home': (
            {'make', 'cook', 'study', 'work', 'sleep', 'go', 'come', 'walk', 'drive', 'prepare',
             'eat', 'drink', 'read', 'play', 'wait'},
            set(),
        ),
        'kitchen': (
            {'make', 'cook', 'prepare', 'work', 'eat', 'drink', 'go', 'come', 'walk'},
            {'study', 'sleep'},
        ),
        'library': (
            {'study', 'work', 'read', 'go', 'come', 'walk', 'drive', 'wait'},
            {'cook', 'make', 'sleep', 'play'},
        ),
    }
    # Korean names share the English entries
    PLACE_ALIASES = {
        '병원': 'hospital',
        '화장실': 'bathroom',
        '학교': 'school',
        '사무실': 'office',
        '집': 'home',
        '부엌': 'kitchen',
        '도서관': 'library',
    }

    # Activity a schema implies without binding a verb
    SCHEMA_ACTIVITIES = {
        'MEET-PERSON-PLACE': 'meet',
    }

    BRACKET_PLACEHOLDER = re.compile(r"\[[A-Za-z_][A-Za-z0-9_]*\]|\{\{\s*[A-Za-z_][A-Za-z0-9_]*\s*\}\}")
    UPPERCASE_WORD = re.compile(r"\b[A-Z][A-Z0-9_]+\b")

    def __init__(self, classifier: Optional[SemanticClassifier] = None,
                 inflector: Optional[EnglishInflector] = None,
                 forbidden: Optional[Sequence[ForbiddenCombination]] = None,
                 place_activities: Optional[Dict[str, Tuple[Iterable[str], Iterable[str]]]] = None,
                 schema_activities: Optional[Dict[str, str]] = None):
        """
        Initialize the validator.

        Args:
            classifier: Semantic classifier for category-based pairs
            inflector: English inflector used to expand verb and noun forms
            forbidden: Replacement forbidden-pairs table
            place_activities: Replacement place -> (allowed, disallowed) activity map
            schema_activities: Replacement schema id -> implied activity map
        """
        self.classifier = classifier or SemanticClassifier()
        self.inflector = inflector or EnglishInflector()
        self.forbidden = tuple(forbidden) if forbidden is not None else self.FORBIDDEN_COMBINATIONS
        source = place_activities if place_activities is not None else self.PLACE_ACTIVITY_MAP
        self.place_activities = {
            place.lower(): (frozenset(allowed), frozenset(disallowed))
            for place, (allowed, disallowed) in source.items()
        }
        self.schema_activities = dict(schema_activities if schema_activities is not None
                                      else self.SCHEMA_ACTIVITIES)

    # ===== (a) completeness =====

    def check_placeholders(self, text: str, slot_names: Iterable[str] = ()) -> bool:
        """
        Check that no placeholder survived assembly.

        Args:
            text: Assembled sentence
            slot_names: Slot names of the schema, flagged if left as bare uppercase words

        Returns:
            True when the text is complete
        """
        if self.BRACKET_PLACEHOLDER.search(text):
            return False
        suspicious = set(slot_names) | set(POS_TAGS)
        return not any(word in suspicious for word in self.UPPERCASE_WORD.findall(text))

    # ===== (b) verb / object affinity =====

    def verb_forms(self, lexeme: Lexeme) -> Set[str]:
        head = lexeme.en.lower().split(' ', 1)[0]
        inflector = self.inflector
        return {
            lexeme.en.lower(), head,
            inflector.third_person(head), inflector.past(head),
            inflector.past_participle(head), inflector.present_participle(head),
        }

    def object_forms(self, lexeme: Lexeme) -> Set[str]:
        word = lexeme.en.lower()
        forms = {word, self.inflector.pluralize(word).lower()}
        if lexeme.irregular_plural:
            forms.add(lexeme.irregular_plural.lower())
        return forms

    def _forbidden_reason(self, verb: Lexeme, obj: Lexeme, schema_id: Optional[str]) -> Optional[str]:
        verb_forms = self.verb_forms(verb)
        object_forms = self.object_forms(obj)
        object_categories: Optional[FrozenSet[str]] = None
        for combo in self.forbidden:
            if not combo.applies_to(schema_id) or not combo.verbs & verb_forms:
                continue
            if combo.objects & object_forms:
                return combo.reason
            if combo.object_categories:
                if object_categories is None:
                    object_categories = self.classifier.categories_for(obj)
                if combo.object_categories & object_categories:
                    return combo.reason
        return None

    def check_verb_object(self, lexemes: Iterable[Lexeme], schema_id: Optional[str] = None) -> List[str]:
        """
        Find forbidden verb/object pairs among the bound lexemes.

        A pair fails when it matches the forbidden table, or when the object
        (an ITEM or NOUN) is outside what the verb can act on.

        Returns:
            Reasons for every forbidden pair (empty when all pairs are fine)
        """
        lexemes = [lexeme for lexeme in lexemes if lexeme is not None]
        verbs = [lexeme for lexeme in lexemes if lexeme.pos == 'VERB']
        objects = [lexeme for lexeme in lexemes if lexeme.pos in NOMINAL_POS]
        problems = []
        for verb in verbs:
            head = verb.en.lower().split(' ', 1)[0]
            for obj in objects:
                reason = self._forbidden_reason(verb, obj, schema_id)
                if not reason and obj.pos in OBJECT_POS and not self.classifier.can_perform_action(
                        head, obj.en, self.classifier.categories_for(obj)):
                    reason = f"cannot {head} {obj.en}"
                if reason:
                    problems.append(f"{verb.en} + {obj.en}: {reason}")
        return problems

    # ===== (c) place affinity =====

    def check_place_affinity(self, lexemes: Iterable[Lexeme], schema_id: Optional[str] = None) -> List[str]:
        """
        Find places bound together with an activity that does not happen there.

        Returns:
            One message per violated place/activity pair
        """
        lexemes = [lexeme for lexeme in lexemes if lexeme is not None]
        activities = {lexeme.en.lower().split(' ', 1)[0] for lexeme in lexemes if lexeme.pos == 'VERB'}
        implied = self.schema_activities.get(schema_id)
        if implied:
            activities.add(implied)
        if not activities:
            return []

        problems = []
        for place in (lexeme for lexeme in lexemes if lexeme.pos == 'PLACE'):
            entry = self._place_entry(place)
            if entry is None:
                # Unknown places are allowed
                continue
            allowed, disallowed = entry
            for activity in sorted(activities):
                if activity in disallowed or activity not in allowed:
                    problems.append(f"cannot {activity} at the {place.en}")
        return problems

    def _place_entry(self, place: Lexeme) -> Optional[Tuple[FrozenSet[str], FrozenSet[str]]]:
        for name in (place.en.lower(), place.ko.lower()):
            entry = self.place_activities.get(name) or self.place_activities.get(self.PLACE_ALIASES.get(name, ''))
            if entry:
                return entry
        return None

    # ===== combined =====

    def find_problems(self, used_lexemes: Iterable[Lexeme], schema_id: Optional[str] = None,
                      texts: Iterable[str] = (), slot_names: Iterable[str] = ()) -> List[Tuple[str, str]]:
        """
        Run every check and collect the failures.

        Args:
            used_lexemes: Lexemes bound into the sentence
            schema_id: Schema that produced the sentence
            texts: Assembled strings to scan for placeholders
            slot_names: Slot names of the schema

        Returns:
            List of (check name, message) tuples
        """
        used_lexemes = list(used_lexemes)
        slot_names = list(slot_names)
        problems = []
        for text in texts:
            if not self.check_placeholders(text, slot_names):
                problems.append(('unfilled_placeholder', text))
        for message in self.check_verb_object(used_lexemes, schema_id):
            problems.append(('forbidden_combination', message))
        for message in self.check_place_affinity(used_lexemes, schema_id):
            problems.append(('place_affinity', message))
        return problems

    def is_valid(self, used_lexemes: Iterable[Lexeme], schema_id: Optional[str] = None,
                 texts: Iterable[str] = (), slot_names: Iterable[str] = ()) -> bool:
        return not self.find_problems(used_lexemes, schema_id, texts, slot_names)
