"""
Sentence Generator Module
Fills bilingual templates from a lexicon, validates and ranks the results.
"""
import random
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence

from compatibility_validator import CompatibilityValidator
from confidence_scorer import ConfidenceScorer, ScoringContext
from diagnostics import TraceLog
from intent_classifier import IntentAnalysis, IntentClassifier, load_tokenizer
from korean_inflector import KoreanInflector
from lexicon import Lexicon
from pattern_core import GeneratedSentence, GenerationPreconditionError, Lexeme
from pattern_schemas import PatternSchema, SchemaRegistry
from sentence_assembler import SentenceAssembler
from slot_resolver import SlotResolver
from word_classifier import SemanticClassifier
from word_transformer import EnglishInflector


@dataclass
class GenerationParams:
    """What to generate. Every field is optional."""
    schema_ids: Optional[Sequence[str]] = None
    tags: Optional[Sequence[str]] = None
    limit: int = 20
    user_input: Optional[str] = None
    exclude_schema_ids: Optional[Sequence[str]] = None
    per_schema: int = 1


class SentenceGenerator:
    """Generates English/Korean sentence pairs from templates and vocabulary."""

    # ============================================================================
    # CONFIGURATION: Generation Bounds
    # ============================================================================

    # Default number of sentences returned per call
    DEFAULT_LIMIT = 20

    # Hard cap on slot bindings tried per schema. Keeps every call bounded
    # no matter how large the lexicon grows.
    MAX_COMBINATIONS_PER_SCHEMA = 10

    # Candidates considered per slot when enumerating bindings
    MAX_CANDIDATES_PER_SLOT = 3

    # ============================================================================
    # CONFIGURATION: Schema Selection
    # ============================================================================

    # Schema ids never used for generation
    EXCLUDED_SCHEMA_IDS = frozenset()

    def __init__(self, lexicon: Optional[Lexicon], registry: Optional[SchemaRegistry],
                 classifier: Optional[SemanticClassifier] = None,
                 english: Optional[EnglishInflector] = None,
                 korean: Optional[KoreanInflector] = None,
                 validator: Optional[CompatibilityValidator] = None,
                 scorer: Optional[ConfidenceScorer] = None,
                 intent_classifier: Optional[IntentClassifier] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize the generator.

        Args:
            lexicon: Vocabulary snapshot (required)
            registry: Schema registry (required)
            classifier: Semantic classifier shared by resolver and validator
            english: English inflector
            korean: Korean inflector
            validator: Compatibility validator
            scorer: Confidence scorer
            intent_classifier: Free-text intent classifier
            rng: Seeded random source for varied slot choices; None keeps lexicon order
        """
        if lexicon is None or registry is None:
            raise GenerationPreconditionError(
                "SentenceGenerator needs an initialized lexicon and schema registry")
        self.lexicon = lexicon
        self.registry = registry
        self.classifier = classifier or SemanticClassifier()
        self.english = english or EnglishInflector()
        self.korean = korean or KoreanInflector()
        self.validator = validator or CompatibilityValidator(self.classifier, self.english)
        self.assembler = SentenceAssembler(self.english, self.korean, self.validator)
        self.resolver = SlotResolver(lexicon, self.classifier, rng)

        nlp = None
        if scorer is None or intent_classifier is None:
            nlp = load_tokenizer()
        self.scorer = scorer or ConfidenceScorer(nlp)
        self.intent_classifier = intent_classifier or IntentClassifier(nlp)

        self.last_trace = TraceLog()
        self.last_analysis = IntentAnalysis()

    # ===== schema selection =====

    def _select_schemas(self, params: GenerationParams, tags: Sequence[str],
                        trace: TraceLog) -> List[PatternSchema]:
        """Resolve candidate schemas in registry order."""
        if params.schema_ids:
            wanted = set(params.schema_ids)
            schemas = [schema for schema in self.registry.get_all() if schema.id in wanted]
            for missing in sorted(wanted - {schema.id for schema in schemas}):
                trace.record('unknown_schema', missing)
        elif tags:
            schemas = self.registry.get_by_category(tags)
        else:
            schemas = self.registry.get_all()

        excluded = set(self.EXCLUDED_SCHEMA_IDS) | set(params.exclude_schema_ids or ())
        selected = []
        for schema in schemas:
            if schema.id in excluded:
                trace.record('excluded_schema', schema.id)
                continue
            if not schema.has_korean():
                trace.record('missing_korean', schema.id)
                continue
            selected.append(schema)
        return selected

    # ===== binding =====

    def _unfillable_slots(self, schema: PatternSchema) -> List[str]:
        return [slot.name for slot in schema.required_slots() if not self.resolver.has_candidate(slot)]

    def _iter_bindings(self, schema: PatternSchema,
                       trace: TraceLog) -> Iterator[Dict[str, Optional[Lexeme]]]:
        """
        Enumerate slot bindings depth-first, never reusing a lexeme in one binding.

        Yields at most MAX_COMBINATIONS_PER_SCHEMA bindings.
        """
        slots = schema.slots
        produced = 0

        def walk(index: int, bound: Dict[str, Optional[Lexeme]], used: set):
            nonlocal produced
            if produced >= self.MAX_COMBINATIONS_PER_SCHEMA:
                return
            if index == len(slots):
                produced += 1
                yield dict(bound)
                return
            slot = slots[index]
            options = self.resolver.candidates(slot, used)[:self.MAX_CANDIDATES_PER_SLOT]
            if not options:
                if slot.required:
                    trace.record('slot_unfillable', schema.id, slot.name)
                    return
                bound[slot.name] = None
                yield from walk(index + 1, bound, used)
                del bound[slot.name]
                return
            for lexeme in options:
                if produced >= self.MAX_COMBINATIONS_PER_SCHEMA:
                    return
                bound[slot.name] = lexeme
                used.add(lexeme.id)
                yield from walk(index + 1, bound, used)
                used.discard(lexeme.id)
                del bound[slot.name]

        yield from walk(0, {}, set())

    # ===== generation =====

    def generate(self, params: Optional[GenerationParams] = None) -> List[GeneratedSentence]:
        """
        Generate sentence pairs.

        Args:
            params: Schema ids, tags, free-text intent, limit and exclusions

        Returns:
            Up to ``limit`` sentences sorted by confidence (highest first);
            an empty list means the vocabulary cannot satisfy the request
        """
        if self.lexicon is None or self.registry is None:
            raise GenerationPreconditionError("generate() called before lexicon/registry initialization")

        params = params or GenerationParams()
        limit = self.DEFAULT_LIMIT if params.limit is None else params.limit
        per_schema = max(1, params.per_schema or 1)
        trace = TraceLog()

        analysis = IntentAnalysis()
        if params.user_input:
            analysis = self.intent_classifier.analyze(params.user_input)
        tags = list(params.tags) if params.tags else list(analysis.tags)
        context = ScoringContext(keywords=analysis.keywords, tags=tags)

        results: List[GeneratedSentence] = []
        seen_texts = set()

        if limit > 0:
            for schema in self._select_schemas(params, tags, trace):
                if len(results) >= limit:
                    break

                missing = self._unfillable_slots(schema)
                if missing:
                    trace.record('missing_words', schema.id, ', '.join(missing))
                    continue

                accepted = 0
                for bindings in self._iter_bindings(schema, trace):
                    sentence, reason = self.assembler.assemble_with_reason(schema, bindings)
                    if sentence is None:
                        trace.record('assembly_failed', schema.id, reason)
                        continue

                    problems = self.validator.find_problems(sentence.used_lexemes, schema.id)
                    if problems:
                        check, message = problems[0]
                        trace.record(check, schema.id, f"{sentence.english} ({message})")
                        continue

                    key = sentence.english.lower()
                    if key in seen_texts:
                        trace.record('duplicate', schema.id, sentence.english)
                        continue
                    seen_texts.add(key)

                    results.append(GeneratedSentence(
                        text=sentence.english,
                        korean=sentence.korean,
                        used_lexeme_ids=[lexeme.id for lexeme in sentence.used_lexemes],
                        schema_id=schema.id,
                        confidence=self.scorer.score(sentence, context),
                        category=schema.category,
                        slot_fill={name: lexeme.id for name, lexeme in bindings.items() if lexeme is not None},
                    ))
                    trace.record_success(schema.id, sentence.english)
                    accepted += 1
                    if accepted >= per_schema or len(results) >= limit:
                        break

                if not accepted and not trace.template_fail_counts.get(schema.id):
                    trace.record('no_valid_sentence', schema.id)

        # Stable sort keeps input order among equal scores
        results.sort(key=lambda sentence: sentence.confidence, reverse=True)

        self.last_trace = trace
        self.last_analysis = analysis
        return results

    def get_statistics(self) -> dict:
        """
        Get statistics about the most recent generate() call.

        Returns:
            Dictionary with rejection and template counters
        """
        stats = self.last_trace.summary()
        stats.update({
            'lexicon_size': len(self.lexicon),
            'schema_count': len(self.registry),
            'trace_entries': len(self.last_trace.entries),
            'intent_tags': list(self.last_analysis.tags),
        })
        return stats
