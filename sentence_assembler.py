"""
Sentence Assembler Module
Renders bound templates in both languages and naturalizes the surface text.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from compatibility_validator import CompatibilityValidator
from korean_inflector import KoreanInflector
from pattern_core import Lexeme, NOMINAL_POS
from pattern_schemas import PatternSchema, SlotSpec, SlotToken, TemplateToken
from word_transformer import EnglishInflector


@dataclass
class AssembledSentence:
    """English/Korean strings rendered from one schema binding."""
    schema: PatternSchema
    english: str
    korean: str
    bindings: Dict[str, Optional[Lexeme]] = field(default_factory=dict)

    @property
    def total_slots(self) -> int:
        return len(self.schema.slots)

    @property
    def filled_slots(self) -> int:
        return sum(1 for slot in self.schema.slots if self.bindings.get(slot.name) is not None)

    @property
    def used_lexemes(self) -> List[Lexeme]:
        return [self.bindings[slot.name] for slot in self.schema.slots
                if self.bindings.get(slot.name) is not None]


class SentenceAssembler:
    """Fills templates and post-processes the result into natural sentences."""

    # Fixed English phrasings that read wrong with a generic article
    IDIOM_FIXUPS = (
        (r"\b(go|goes|went|going|come|comes|came|coming|get|gets|got|getting) to (?:the )?home\b", r"\1 home"),
        (r"\bat the home\b", "at home"),
        (r"\b(go|goes|went|going) to the (school|work|church|bed)\b", r"\1 to \2"),
        (r"\bat the (school|work)\b", r"at \1"),
    )

    DOUBLED_ARTICLE = re.compile(r"\b(a|an|the) (a|an|the)\b", re.IGNORECASE)
    ARTICLE_BEFORE_WORD = re.compile(r"\b(a|an|A|An) ([A-Za-z]+)")
    TERMINAL_PUNCTUATION = ('.', '!', '?')

    def __init__(self, english: Optional[EnglishInflector] = None,
                 korean: Optional[KoreanInflector] = None,
                 validator: Optional[CompatibilityValidator] = None):
        self.english = english or EnglishInflector()
        self.korean = korean or KoreanInflector()
        self.validator = validator or CompatibilityValidator(inflector=self.english)
        self._idioms = [(re.compile(pattern, re.IGNORECASE), repl) for pattern, repl in self.IDIOM_FIXUPS]
        self._markers = sorted(self.korean.PARTICLE_MARKERS, key=len, reverse=True)

    # ===== slot surface forms =====

    def english_form(self, slot: SlotSpec, lexeme: Lexeme) -> str:
        if lexeme.pos == 'VERB' and slot.morph:
            return self.english.inflect(lexeme.en, slot.morph)
        if slot.noun_number == 'plural' and lexeme.pos in NOMINAL_POS:
            return self.english.pluralize(lexeme.en, lexeme.irregular_plural)
        return lexeme.en

    def korean_form(self, slot: SlotSpec, lexeme: Lexeme) -> str:
        if lexeme.pos == 'VERB' and slot.morph:
            return self.korean.inflect(lexeme.ko, slot.morph)
        return lexeme.ko

    # ===== rendering =====

    def _render(self, tokens: Tuple[TemplateToken, ...], values: Mapping[str, str],
                resolve_particles: bool = False) -> str:
        parts = []
        previous_slot_value = None
        for token in tokens:
            if isinstance(token, SlotToken):
                value = values.get(token.name, '')
                parts.append(value)
                previous_slot_value = value
                continue
            text = token.text
            if resolve_particles and previous_slot_value is not None:
                for marker in self._markers:
                    if text.startswith(marker):
                        particle = self.korean.choose_particle(previous_slot_value, marker) if previous_slot_value else ''
                        text = particle + text[len(marker):]
                        break
            parts.append(text)
            previous_slot_value = None
        return ''.join(parts)

    # ===== naturalization =====

    @staticmethod
    def _tidy(text: str) -> str:
        text = re.sub(r"\s{2,}", " ", text)
        text = re.sub(r"\s+([,.!?])", r"\1", text)
        text = re.sub(r",\s*([.!?])", r"\1", text)
        text = re.sub(r"^\s*,\s*", "", text)
        return text.strip()

    def _fix_articles(self, text: str) -> str:
        def repl(match):
            article = self.english.article_for(match.group(2))
            if match.group(1)[0].isupper():
                article = article.capitalize()
            return f"{article} {match.group(2)}"
        return self.ARTICLE_BEFORE_WORD.sub(repl, text)

    def _finish(self, text: str) -> str:
        if text and not text.endswith(self.TERMINAL_PUNCTUATION):
            text += '.'
        return text

    def naturalize_english(self, text: str) -> str:
        """Apply idiom fixups, a/an correction, spacing, capitalization and punctuation."""
        text = self._tidy(text)
        for pattern, repl in self._idioms:
            text = pattern.sub(repl, text)
        text = self._fix_articles(text)
        if text:
            text = text[0].upper() + text[1:]
        return self._finish(text)

    def naturalize_korean(self, text: str) -> str:
        return self._finish(self._tidy(text))

    # ===== assembly =====

    def assemble_with_reason(self, schema: PatternSchema,
                             bindings: Mapping[str, Optional[Lexeme]]) -> Tuple[Optional[AssembledSentence], Optional[str]]:
        """
        Render a schema with bound lexemes.

        Args:
            schema: Template to fill
            bindings: Slot name -> lexeme (None for omitted optional slots)

        Returns:
            (AssembledSentence, None) on success, (None, reason) on failure
        """
        en_values: Dict[str, str] = {}
        ko_values: Dict[str, str] = {}

        for name in set(schema.placeholders()) | set(schema.ko_placeholders()):
            slot = schema.get_slot(name)
            if slot is None:
                return None, f"placeholder [{name}] has no slot"
            lexeme = bindings.get(name)
            if lexeme is None:
                if slot.required:
                    return None, f"required slot [{name}] is unbound"
                en_values[name] = ''
                ko_values[name] = ''
                continue
            en_values[name] = self.english_form(slot, lexeme)
            ko_values[name] = self.korean_form(slot, lexeme)

        english = self.naturalize_english(self._render(schema.en_tokens, en_values))
        korean = self.naturalize_korean(self._render(schema.ko_tokens, ko_values, resolve_particles=True))

        slot_names = [slot.name for slot in schema.slots]
        for text in (english, korean):
            if not self.validator.check_placeholders(text, slot_names):
                return None, f"unfilled placeholder in '{text}'"
        if self.DOUBLED_ARTICLE.search(english):
            return None, f"doubled article in '{english}'"

        return AssembledSentence(schema=schema, english=english, korean=korean, bindings=dict(bindings)), None

    def assemble(self, schema: PatternSchema,
                 bindings: Mapping[str, Optional[Lexeme]]) -> Optional[AssembledSentence]:
        sentence, _ = self.assemble_with_reason(schema, bindings)
        return sentence
