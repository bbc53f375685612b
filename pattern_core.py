"""
Pattern Core Module
Shared vocabulary, data records and errors for bilingual sentence generation.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


# ============================================================================
# Closed vocabularies
# ============================================================================

POS_TAGS = ("NOUN", "VERB", "PLACE", "PERSON", "ITEM", "TIME", "PRON")

# POS values that behave like nouns for pluralization and object checks
NOMINAL_POS = ("NOUN", "PLACE", "PERSON", "ITEM")

CATEGORY_TAGS = ("daily", "directions", "school", "business")

LEVELS = ("beginner", "intermediate", "advanced")

TENSES = ("present", "past", "future")
ASPECTS = ("simple", "progressive", "perfect")
POLARITIES = ("affirmative", "negative")
PERSONS = ("first", "second", "third")
NUMBERS = ("singular", "plural")
COUNTABILITIES = ("countable", "uncountable", "both")


class GenerationPreconditionError(RuntimeError):
    """Raised when the generator is used before its lexicon or registry exist."""


@dataclass(frozen=True)
class VerbFeatures:
    """Partial verb feature request; unset fields fall back to defaults."""
    tense: Optional[str] = None
    aspect: Optional[str] = None
    polarity: Optional[str] = None
    person: Optional[str] = None
    number: Optional[str] = None

    def __post_init__(self):
        allowed = {
            'tense': TENSES,
            'aspect': ASPECTS,
            'polarity': POLARITIES,
            'person': PERSONS,
            'number': NUMBERS,
        }
        for name, values in allowed.items():
            value = getattr(self, name)
            if value is not None and value not in values:
                raise ValueError(f"Unknown {name} '{value}' (expected one of {', '.join(values)})")

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> Optional['VerbFeatures']:
        """Build features from pack JSON; returns None for an empty mapping."""
        if not data:
            return None
        return cls(
            tense=data.get('tense'),
            aspect=data.get('aspect'),
            polarity=data.get('polarity'),
            person=data.get('person'),
            number=data.get('number'),
        )

    @property
    def is_third_singular(self) -> bool:
        return self.person == 'third' and self.number != 'plural'

    @property
    def is_negative(self) -> bool:
        return self.polarity == 'negative'


@dataclass(frozen=True)
class Lexeme:
    """A bilingual vocabulary entry."""
    id: str
    en: str
    ko: str
    pos: str
    tags: Tuple[str, ...] = ()
    semantic_category: Optional[str] = None
    countability: Optional[str] = None
    irregular_plural: Optional[str] = None
    register: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict) -> 'Lexeme':
        """Build a lexeme from a pack record (camelCase keys accepted)."""
        return cls(
            id=str(data.get('id') or '').strip(),
            en=(data.get('en') or '').strip(),
            ko=(data.get('ko') or '').strip(),
            pos=(data.get('pos') or '').strip().upper(),
            tags=tuple(data.get('tags') or ()),
            semantic_category=data.get('semanticCategory') or data.get('semantic_category'),
            countability=data.get('countability'),
            irregular_plural=data.get('irregularPlural') or data.get('irregular_plural'),
            register=data.get('register'),
        )

    def is_usable(self) -> bool:
        """True when the entry can take part in generation."""
        return bool(self.id and self.en and self.ko and self.pos in POS_TAGS)


@dataclass
class GeneratedSentence:
    """One generated English/Korean sentence pair."""
    text: str
    korean: str
    used_lexeme_ids: List[str]
    schema_id: str
    confidence: float
    category: Optional[str] = None
    slot_fill: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            'text': self.text,
            'korean': self.korean,
            'usedLexemeIds': list(self.used_lexeme_ids),
            'schemaId': self.schema_id,
            'confidence': round(self.confidence, 4),
            'category': self.category,
        }


@dataclass(frozen=True)
class ForbiddenCombination:
    """Verb forms that must never be paired with the listed objects."""
    verbs: frozenset
    objects: frozenset = frozenset()
    object_categories: frozenset = frozenset()
    reason: str = ''
    schema_ids: Optional[frozenset] = None

    def applies_to(self, schema_id: Optional[str]) -> bool:
        return self.schema_ids is None or schema_id in self.schema_ids
