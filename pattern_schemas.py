"""
Pattern Schemas Module
Defines bilingual sentence templates with typed slots and the schema registry.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

from pattern_core import VerbFeatures


@dataclass(frozen=True)
class SlotSpec:
    """A named position in a template, restricted to certain parts of speech."""
    name: str
    accept: Tuple[str, ...]
    required: bool = True
    semantic_constraint: Optional[str] = None
    morph: Optional[VerbFeatures] = None
    noun_number: Optional[str] = None  # 'plural' asks the assembler to pluralize
    prefer_tags: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict) -> 'SlotSpec':
        accept = data.get('accept') or ()
        if isinstance(accept, str):
            accept = (accept,)
        return cls(
            name=data['name'],
            accept=tuple(pos.upper() for pos in accept),
            required=data.get('required', True),
            semantic_constraint=data.get('semanticConstraint') or data.get('semantic_constraint'),
            morph=VerbFeatures.from_dict(data.get('morph')),
            noun_number=data.get('nounNumber') or data.get('noun_number'),
            prefer_tags=tuple(data.get('preferTags') or data.get('prefer_tags') or ()),
        )


@dataclass(frozen=True)
class LiteralToken:
    """Fixed text between slots."""
    text: str


@dataclass(frozen=True)
class SlotToken:
    """Reference to a slot by name."""
    name: str


TemplateToken = Union[LiteralToken, SlotToken]

# Accepts the canonical [SLOT] marker and the legacy {{SLOT}} marker
SLOT_MARKER = re.compile(r"\[([A-Za-z_][A-Za-z0-9_]*)\]|\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


def parse_surface(surface: str) -> Tuple[TemplateToken, ...]:
    """
    Split a template surface into literal and slot tokens.

    Args:
        surface: Template text such as "Where is the [PLACE]?"

    Returns:
        Tuple of LiteralToken / SlotToken in reading order
    """
    tokens: List[TemplateToken] = []
    position = 0
    for match in SLOT_MARKER.finditer(surface or ''):
        if match.start() > position:
            tokens.append(LiteralToken(surface[position:match.start()]))
        tokens.append(SlotToken(match.group(1) or match.group(2)))
        position = match.end()
    if surface and position < len(surface):
        tokens.append(LiteralToken(surface[position:]))
    return tuple(tokens)


@dataclass
class PatternSchema:
    """A bilingual sentence template."""
    id: str
    category: str
    surface: str
    ko_surface: Optional[str]
    slots: List[SlotSpec] = field(default_factory=list)
    level: str = 'beginner'
    _en_tokens: Optional[Tuple[TemplateToken, ...]] = field(default=None, init=False, repr=False, compare=False)
    _ko_tokens: Optional[Tuple[TemplateToken, ...]] = field(default=None, init=False, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict, category: Optional[str] = None) -> 'PatternSchema':
        """Build a schema from a pack pattern record."""
        return cls(
            id=str(data.get('id') or '').strip(),
            category=data.get('category') or category or '',
            surface=data.get('surface') or '',
            ko_surface=data.get('koSurface') or data.get('ko_surface'),
            slots=[SlotSpec.from_dict(slot) for slot in data.get('slots') or () if isinstance(slot, dict)],
            level=data.get('level') or 'beginner',
        )

    @property
    def en_tokens(self) -> Tuple[TemplateToken, ...]:
        if self._en_tokens is None:
            self._en_tokens = parse_surface(self.surface)
        return self._en_tokens

    @property
    def ko_tokens(self) -> Tuple[TemplateToken, ...]:
        if self._ko_tokens is None:
            self._ko_tokens = parse_surface(self.ko_surface or '')
        return self._ko_tokens

    def placeholders(self) -> List[str]:
        """Slot names referenced by the English surface, in order."""
        return [token.name for token in self.en_tokens if isinstance(token, SlotToken)]

    def ko_placeholders(self) -> List[str]:
        """Slot names referenced by the Korean surface, in order."""
        return [token.name for token in self.ko_tokens if isinstance(token, SlotToken)]

    def get_slot(self, name: str) -> Optional[SlotSpec]:
        for slot in self.slots:
            if slot.name == name:
                return slot
        return None

    def required_slots(self) -> List[SlotSpec]:
        return [slot for slot in self.slots if slot.required]

    def has_korean(self) -> bool:
        return bool(self.ko_surface and self.ko_surface.strip())


class SchemaRegistry:
    """Append-only catalog of pattern schemas, deduplicated by id."""

    def __init__(self, schemas: Optional[Iterable[PatternSchema]] = None):
        self._schemas: List[PatternSchema] = []
        self._ids = set()
        if schemas:
            self.register(schemas)

    @classmethod
    def with_seed(cls) -> 'SchemaRegistry':
        """Registry pre-loaded with the built-in schema library."""
        return cls(create_seed_schemas())

    def register(self, schemas: Iterable[PatternSchema]) -> int:
        """
        Append schemas whose ids are new.

        Args:
            schemas: Schemas to add (entries without an id are skipped)

        Returns:
            Number of schemas actually added
        """
        added = 0
        for schema in schemas:
            if not schema or not schema.id or schema.id in self._ids:
                continue
            self._ids.add(schema.id)
            self._schemas.append(schema)
            added += 1
        return added

    def get_all(self) -> List[PatternSchema]:
        return list(self._schemas)

    def get(self, schema_id: str) -> Optional[PatternSchema]:
        for schema in self._schemas:
            if schema.id == schema_id:
                return schema
        return None

    def get_by_category(self, tags: Iterable[str]) -> List[PatternSchema]:
        """Schemas whose category is one of the given tags, in registry order."""
        wanted = set(tags)
        return [schema for schema in self._schemas if schema.category in wanted]

    def clear(self):
        self._schemas = []
        self._ids = set()

    def __len__(self) -> int:
        return len(self._schemas)


def _slot(name: str, *accept: str, **options) -> SlotSpec:
    return SlotSpec(name=name, accept=tuple(accept), **options)


def create_seed_schemas() -> List[PatternSchema]:
    """Create the built-in bilingual schema library."""
    first_singular = dict(person='first', number='singular')

    schemas = [
        # ===== Directions =====
        PatternSchema(
            id="WH-BE-PLACE",
            category="directions",
            surface="Where is the [PLACE]?",
            ko_surface="[PLACE] 어디 있어?",
            slots=[_slot("PLACE", "PLACE")],
        ),
        PatternSchema(
            id="HOW-GET-PLACE",
            category="directions",
            surface="How do I get to the [PLACE]?",
            ko_surface="[PLACE]에 어떻게 가?",
            slots=[_slot("PLACE", "PLACE")],
        ),
        PatternSchema(
            id="BUS-TO-PLACE",
            category="directions",
            surface="Which bus goes to the [PLACE]?",
            ko_surface="[PLACE]에 가는 버스가 뭐야?",
            slots=[_slot("PLACE", "PLACE")],
            level='intermediate',
        ),
        PatternSchema(
            id="PLACE-NEAR-LANDMARK",
            category="directions",
            surface="Is the [PLACE] near the [LANDMARK]?",
            ko_surface="[PLACE]이/가 [LANDMARK] 근처에 있어?",
            slots=[_slot("PLACE", "PLACE"), _slot("LANDMARK", "PLACE")],
            level='intermediate',
        ),

        # ===== Daily life =====
        PatternSchema(
            id="GREETING-NICE-TO-MEET",
            category="daily",
            surface="Nice to meet you, [PERSON]!",
            ko_surface="[PERSON], 만나서 반가워!",
            slots=[_slot("PERSON", "PERSON", required=False)],
        ),
        PatternSchema(
            id="DAILY-LIKE-FOOD",
            category="daily",
            surface="I really like [FOOD].",
            ko_surface="[FOOD]을/를 정말 좋아해.",
            slots=[_slot("FOOD", "ITEM", "NOUN", semantic_constraint="FOOD")],
        ),
        PatternSchema(
            id="DAILY-HAVE-ITEM",
            category="daily",
            surface="I have my [ITEM] with me.",
            ko_surface="[ITEM] 가지고 있어.",
            slots=[_slot("ITEM", "ITEM", semantic_constraint="TOOL")],
        ),
        PatternSchema(
            id="DAILY-DRANK-BEVERAGE",
            category="daily",
            surface="I drank [DRINK] this morning.",
            ko_surface="오늘 아침에 [DRINK]을/를 마셨어.",
            slots=[_slot("DRINK", "ITEM", "NOUN", semantic_constraint="BEVERAGE")],
        ),
        PatternSchema(
            id="MEET-PERSON-PLACE",
            category="daily",
            surface="I'm meeting my [PERSON] at the [PLACE].",
            ko_surface="[PLACE]에서 [PERSON]을/를 만나고 있어.",
            slots=[_slot("PERSON", "PERSON"), _slot("PLACE", "PLACE")],
        ),
        PatternSchema(
            id="GO-PLACE-TIME",
            category="daily",
            surface="I'm going to the [PLACE] [TIME].",
            ko_surface="[TIME] [PLACE]에 갈 거야.",
            slots=[
                _slot("PLACE", "PLACE"),
                _slot("TIME", "TIME", required=False, semantic_constraint="FUTURE_TIME"),
            ],
        ),
        PatternSchema(
            id="DIARY-PAST-WENT",
            category="daily",
            surface="I [VERB] to the [PLACE] [TIME].",
            ko_surface="[TIME] [PLACE]에 [VERB].",
            slots=[
                _slot("VERB", "VERB", semantic_constraint="MOVEMENT",
                      morph=VerbFeatures(tense='past', aspect='simple', **first_singular)),
                _slot("PLACE", "PLACE"),
                _slot("TIME", "TIME", required=False, semantic_constraint="PAST_TIME"),
            ],
            level='intermediate',
        ),
        PatternSchema(
            id="PAST-PROGRESSIVE",
            category="daily",
            surface="I [VERB] at the [PLACE] [TIME].",
            ko_surface="[TIME] [PLACE]에서 [VERB].",
            slots=[
                _slot("VERB", "VERB", semantic_constraint="ACTIVITY",
                      morph=VerbFeatures(tense='past', aspect='progressive', **first_singular)),
                _slot("PLACE", "PLACE"),
                _slot("TIME", "TIME", required=False, semantic_constraint="PAST_TIME"),
            ],
            level='intermediate',
        ),
        PatternSchema(
            id="PRESENT-PERFECT",
            category="daily",
            surface="I [VERB] the [OBJECT].",
            ko_surface="[OBJECT]을/를 [VERB].",
            slots=[
                _slot("VERB", "VERB", semantic_constraint="TRANSITIVE",
                      morph=VerbFeatures(tense='present', aspect='perfect', **first_singular)),
                _slot("OBJECT", "ITEM", "NOUN"),
            ],
            level='intermediate',
        ),
        PatternSchema(
            id="HE-SHE-DOES",
            category="daily",
            surface="He [VERB] [OBJECT] every day.",
            ko_surface="그는 매일 [OBJECT]을/를 [VERB].",
            slots=[
                _slot("VERB", "VERB", semantic_constraint="TRANSITIVE",
                      morph=VerbFeatures(tense='present', aspect='simple', person='third', number='singular')),
                _slot("OBJECT", "ITEM"),
            ],
        ),
        PatternSchema(
            id="SHE-DOES-NOT",
            category="daily",
            surface="She [VERB] [OBJECT] on weekends.",
            ko_surface="그녀는 주말에 [OBJECT]을/를 안 [VERB].",
            slots=[
                _slot("VERB", "VERB", semantic_constraint="TRANSITIVE",
                      morph=VerbFeatures(tense='present', aspect='simple', polarity='negative',
                                         person='third', number='singular')),
                _slot("OBJECT", "ITEM"),
            ],
            level='intermediate',
        ),
        PatternSchema(
            id="WE-WILL-VERB",
            category="daily",
            surface="We [VERB] [OBJECT] tomorrow.",
            ko_surface="우리는 내일 [OBJECT]을/를 [VERB].",
            slots=[
                _slot("VERB", "VERB", semantic_constraint="TRANSITIVE",
                      morph=VerbFeatures(tense='future', aspect='simple', person='first', number='plural')),
                _slot("OBJECT", "ITEM", semantic_constraint="COOKABLE"),
            ],
        ),
        PatternSchema(
            id="HAVE-PLURAL-NOUN",
            category="daily",
            surface="I have two [NOUN].",
            ko_surface="[NOUN] 두 개 있어.",
            slots=[_slot("NOUN", "NOUN", "ITEM", noun_number='plural')],
        ),

        # ===== School =====
        PatternSchema(
            id="NEED-ITEM-TIME",
            category="school",
            surface="Do I need to bring my [ITEM] [TIME]?",
            ko_surface="[TIME] [ITEM]을/를 가져가야 해?",
            slots=[
                _slot("ITEM", "ITEM", semantic_constraint="TOOL", prefer_tags=('school',)),
                _slot("TIME", "TIME", required=False, semantic_constraint="FUTURE_TIME"),
            ],
        ),
        PatternSchema(
            id="STUDY-AT-PLACE",
            category="school",
            surface="I [VERB] at the [PLACE] after class.",
            ko_surface="수업 끝나고 [PLACE]에서 [VERB].",
            slots=[
                _slot("VERB", "VERB", semantic_constraint="ACTIVITY",
                      morph=VerbFeatures(tense='present', aspect='progressive', **first_singular)),
                _slot("PLACE", "PLACE", prefer_tags=('school',)),
            ],
            level='intermediate',
        ),
        PatternSchema(
            id="FINISHED-HOMEWORK-TIME",
            category="school",
            surface="I finished my homework [TIME].",
            ko_surface="[TIME] 숙제를 끝냈어.",
            slots=[_slot("TIME", "TIME", semantic_constraint="PAST_TIME")],
        ),

        # ===== Business =====
        PatternSchema(
            id="BOOK-VENUE",
            category="business",
            surface="I need to book the [VENUE].",
            ko_surface="[VENUE]을/를 예약해야 해.",
            slots=[_slot("VENUE", "PLACE", semantic_constraint="BUSINESS_VENUE")],
        ),
        PatternSchema(
            id="WILL-HANDLE-DOCUMENT",
            category="business",
            surface="I [VERB] the [DOCUMENT] [TIME].",
            ko_surface="[TIME] [DOCUMENT]을/를 [VERB].",
            slots=[
                _slot("VERB", "VERB", semantic_constraint="BUSINESS_ACTION",
                      morph=VerbFeatures(tense='future', aspect='simple', **first_singular)),
                _slot("DOCUMENT", "ITEM", "NOUN", semantic_constraint="BUSINESS_ITEM"),
                _slot("TIME", "TIME", required=False, semantic_constraint="FUTURE_TIME"),
            ],
            level='advanced',
        ),
        PatternSchema(
            id="MEETING-WITH-PERSON",
            category="business",
            surface="I have a meeting with the [PERSON] [TIME].",
            ko_surface="[TIME] [PERSON]과/와 회의가 있어.",
            slots=[
                _slot("PERSON", "PERSON", prefer_tags=('business',)),
                _slot("TIME", "TIME", required=False, semantic_constraint="FUTURE_TIME"),
            ],
            level='intermediate',
        ),
    ]

    return schemas
