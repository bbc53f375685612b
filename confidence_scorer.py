"""
Confidence Scorer Module
Ranks generated sentences against the user's intent.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from intent_classifier import is_hangul, load_tokenizer
from sentence_assembler import AssembledSentence


@dataclass
class ScoringContext:
    """What the caller asked for: intent keywords and resolved category tags."""
    keywords: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)


class ConfidenceScorer:
    """Heuristic ranking score in [0, 1]; not a correctness guarantee."""

    BASE_SCORE = 0.5
    KEYWORD_WEIGHT = 0.2
    CATEGORY_WEIGHT = 0.15
    FILL_WEIGHT = 0.15

    def __init__(self, nlp=None):
        self.nlp = nlp or load_tokenizer()

    def _tokens(self, text: str) -> List[str]:
        return [token.lower_ for token in self.nlp(text) if not token.is_punct and not token.is_space]

    def keyword_overlap(self, sentence: AssembledSentence, keywords: List[str]) -> float:
        """Share of intent keywords found in the English or Korean output."""
        if not keywords:
            return 0.0
        english = set(self._tokens(sentence.english))
        korean = self._tokens(sentence.korean)
        matched = 0
        for keyword in keywords:
            keyword = keyword.lower()
            if keyword in english:
                matched += 1
            elif is_hangul(keyword) and any(token.startswith(keyword) for token in korean):
                matched += 1
        return matched / len(keywords)

    def score(self, sentence: AssembledSentence, context: Optional[ScoringContext] = None) -> float:
        """
        Score one assembled sentence.

        Args:
            sentence: Candidate produced by the assembler
            context: Intent keywords and tags (None scores on fill ratio alone)

        Returns:
            Confidence clamped to [0, 1]
        """
        context = context or ScoringContext()
        score = self.BASE_SCORE
        score += self.KEYWORD_WEIGHT * self.keyword_overlap(sentence, context.keywords)
        if context.tags and sentence.schema.category in context.tags:
            score += self.CATEGORY_WEIGHT
        total = sentence.total_slots
        fill_ratio = sentence.filled_slots / total if total else 1.0
        score += self.FILL_WEIGHT * fill_ratio
        return max(0.0, min(1.0, score))
