"""
Slot Resolver Module
Chooses lexicon entries for template slots.
"""
import random
from typing import Collection, Iterable, List, Optional

from lexicon import Lexicon
from pattern_core import Lexeme, NOMINAL_POS
from pattern_schemas import SlotSpec
from word_classifier import SemanticClassifier


class SlotResolver:
    """Picks eligible lexemes for slots without reusing a word in one sentence."""

    def __init__(self, lexicon: Lexicon, classifier: Optional[SemanticClassifier] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize the resolver.

        Args:
            lexicon: Vocabulary snapshot to draw from
            classifier: Semantic classifier for constrained slots
            rng: Optional seeded random source; without it selection follows lexicon order
        """
        self.lexicon = lexicon
        self.classifier = classifier or SemanticClassifier()
        self.rng = rng

    def _eligible(self, accept: Iterable[str], used_ids: Collection[str],
                  semantic_constraint: Optional[str]) -> List[Lexeme]:
        pool = [lexeme for lexeme in self.lexicon.by_pos(accept) if lexeme.id not in used_ids]
        if semantic_constraint:
            wanted = semantic_constraint.upper()
            pool = [lexeme for lexeme in pool if wanted in self.classifier.categories_for(lexeme)]
        return pool

    def pick(self, accepted_pos: Iterable[str], used_ids: Collection[str] = (),
             semantic_constraint: Optional[str] = None) -> Optional[Lexeme]:
        """
        Pick the first eligible lexeme.

        Args:
            accepted_pos: Allowed parts of speech
            used_ids: Lexeme ids already bound in the current sentence
            semantic_constraint: Category the lexeme must belong to

        Returns:
            Lexeme or None when the slot cannot be filled
        """
        pool = self._eligible(accepted_pos, used_ids, semantic_constraint)
        if not pool:
            return None
        if self.rng is not None:
            return self.rng.choice(pool)
        return pool[0]

    def candidates(self, slot: SlotSpec, used_ids: Collection[str] = ()) -> List[Lexeme]:
        """
        All eligible lexemes for a slot, best first.

        Args:
            slot: Slot to fill
            used_ids: Lexeme ids already bound in the current sentence

        Returns:
            Ordered candidate list (possibly empty)
        """
        pool = self._eligible(slot.accept, used_ids, slot.semantic_constraint)

        if slot.noun_number == 'plural':
            # Uncountable nouns have no plural form
            pool = [
                lexeme for lexeme in pool
                if not (lexeme.pos in NOMINAL_POS and lexeme.countability == 'uncountable')
            ]

        if self.rng is not None:
            pool = list(pool)
            self.rng.shuffle(pool)

        if slot.prefer_tags:
            preferred = set(slot.prefer_tags)
            pool.sort(key=lambda lexeme: 0 if preferred.intersection(lexeme.tags) else 1)

        return pool

    def has_candidate(self, slot: SlotSpec) -> bool:
        """True when at least one lexeme could fill the slot."""
        return bool(self.candidates(slot))
