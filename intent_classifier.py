"""
Intent Classifier Module
Maps free-text user intent (Korean or English) to category tags and keywords.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import spacy

from pattern_core import CATEGORY_TAGS


def load_tokenizer():
    """Blank English pipeline: tokenizer and stop words only, no model download."""
    return spacy.blank("en")


def is_hangul(text: str) -> bool:
    return any('가' <= char <= '힣' for char in text)


@dataclass
class IntentAnalysis:
    """Result of analysing one free-text intent."""
    tags: List[str] = field(default_factory=list)
    intent_type: str = 'statement'  # question / request / statement
    keywords: List[str] = field(default_factory=list)
    confidence: float = 0.0


class IntentClassifier:
    """Keyword-table classifier for free-text intent."""

    # ============================================================================
    # CONFIGURATION: Keyword tables
    # ============================================================================

    TAG_KEYWORDS = {
        'directions': [
            '어디', '어떻게', '버스', '정류장', '역', '길', '가는', '지하철', '택시', '위치',
            'where', 'bus', 'station', 'subway', 'taxi', 'directions', 'way',
        ],
        'daily': [
            '카페', '주문', '음식', '친구', '안녕', '반가워', '만나서', '커피', '점심', '저녁', '주세요',
            'cafe', 'order', 'food', 'friend', 'hello', 'hi', 'nice', 'coffee', 'lunch', 'dinner',
        ],
        'school': [
            '숙제', '과제', '시험', '공부', '학교', '수업', '도서관',
            'homework', 'assignment', 'exam', 'test', 'study', 'school', 'class', 'library',
        ],
        'business': [
            '회의', '업무', '계약', '제안', '보고', '미팅', '사무실', '예약',
            'meeting', 'business', 'contract', 'proposal', 'report', 'office', 'book',
        ],
    }

    QUESTION_KEYWORDS = ['어디', '어떻게', '언제', '무엇', '뭐', '누구', '왜', 'where', 'how', 'when', 'what', 'who', 'why']
    REQUEST_KEYWORDS = ['해주세요', '도와주세요', '알려주세요', '주세요', '부탁', 'please', 'can you', 'could you']

    # Standalone Korean particles carry no topic
    KOREAN_PARTICLES = {'은', '는', '이', '가', '을', '를', '에', '에서', '로', '으로', '도', '와', '과', '의'}
    # Particles stripped from the end of a Korean word, longest first
    PARTICLE_SUFFIXES = ('에서', '으로', '에게', '까지', '부터', '은', '는', '을', '를', '에', '로', '도', '와', '과', '의', '이', '가')

    MAX_KEYWORDS = 5

    # Confidence bonuses applied on top of the base
    BASE_CONFIDENCE = 0.5
    QUESTION_BONUS = 0.3
    REQUEST_BONUS = 0.2
    DOMAIN_BONUS = 0.2

    def __init__(self, nlp=None, tag_keywords: Optional[Dict[str, Sequence[str]]] = None):
        """
        Initialize the classifier.

        Args:
            nlp: spaCy pipeline used for tokenization (blank English by default)
            tag_keywords: Replacement tag -> keyword table
        """
        self.nlp = nlp or load_tokenizer()
        self.tag_keywords = {tag: [kw.lower() for kw in words]
                             for tag, words in (tag_keywords or self.TAG_KEYWORDS).items()}

    def tokenize(self, text: str) -> List[str]:
        """Lowercased word tokens without punctuation or whitespace."""
        if not text:
            return []
        return [token.lower_ for token in self.nlp(text) if not token.is_punct and not token.is_space]

    def _matches(self, token: str, keyword: str) -> bool:
        if token == keyword:
            return True
        if not is_hangul(keyword) or not token.startswith(keyword):
            return False
        # Korean words carry attached particles, so compare by prefix.
        # A one-syllable keyword only matches with a bare particle after it.
        if len(keyword) == 1:
            return token[1:] in self.PARTICLE_SUFFIXES
        return True

    def classify(self, text: str) -> List[str]:
        """
        Map text to category tags.

        Args:
            text: Free-text user intent

        Returns:
            Tags ordered by number of keyword hits (empty when nothing matched)
        """
        tokens = self.tokenize(text)
        lowered = (text or '').lower()
        scores = {}
        for tag, keywords in self.tag_keywords.items():
            hits = 0
            for keyword in keywords:
                if ' ' in keyword:
                    hits += keyword in lowered
                elif any(self._matches(token, keyword) for token in tokens):
                    hits += 1
            if hits:
                scores[tag] = hits
        order = {tag: index for index, tag in enumerate(CATEGORY_TAGS)}
        return sorted(scores, key=lambda tag: (-scores[tag], order.get(tag, len(order))))

    def strip_particle(self, word: str) -> str:
        """Remove one trailing particle from a Korean word, keeping at least two syllables."""
        if not is_hangul(word):
            return word
        for suffix in self.PARTICLE_SUFFIXES:
            if word.endswith(suffix) and len(word) - len(suffix) >= 2:
                return word[:-len(suffix)]
        return word

    def extract_keywords(self, text: str) -> List[str]:
        """Content words of the intent, particles and stop words removed."""
        if not text:
            return []
        keywords = []
        for token in self.nlp(text):
            if token.is_punct or token.is_space or token.is_stop or token.like_num:
                continue
            word = token.lower_
            if word in self.KOREAN_PARTICLES:
                continue
            word = self.strip_particle(word)
            if len(word) <= 1 or word in keywords:
                continue
            keywords.append(word)
            if len(keywords) >= self.MAX_KEYWORDS:
                break
        return keywords

    def intent_type(self, text: str) -> str:
        lowered = (text or '').lower()
        tokens = self.tokenize(text)
        if lowered.rstrip().endswith('?') or any(
                self._matches(token, keyword) for keyword in self.QUESTION_KEYWORDS for token in tokens):
            return 'question'
        if any(keyword in lowered for keyword in self.REQUEST_KEYWORDS):
            return 'request'
        return 'statement'

    def analyze(self, text: str) -> IntentAnalysis:
        """
        Full analysis: tags, intent type, keywords and a confidence estimate.

        Args:
            text: Free-text user intent

        Returns:
            IntentAnalysis (empty for blank input)
        """
        if not text or not text.strip():
            return IntentAnalysis()
        tags = self.classify(text)
        intent_type = self.intent_type(text)
        confidence = self.BASE_CONFIDENCE
        if intent_type == 'question':
            confidence += self.QUESTION_BONUS
        elif intent_type == 'request':
            confidence += self.REQUEST_BONUS
        if tags:
            confidence += self.DOMAIN_BONUS
        return IntentAnalysis(
            tags=tags,
            intent_type=intent_type,
            keywords=self.extract_keywords(text),
            confidence=min(confidence, 1.0),
        )
