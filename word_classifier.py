"""
Word Classifier Module
Maps vocabulary entries to coarse semantic categories.
"""
from typing import Dict, FrozenSet, Iterable, Mapping, Optional

from pattern_core import Lexeme


class SemanticClassifier:
    """Classifies English and Korean words into semantic categories."""

    # ============================================================================
    # CONFIGURATION: Object Categories
    # ============================================================================

    BEVERAGE = {
        'coffee', 'tea', 'water', 'juice', 'milk', 'soda', 'wine', 'beer',
        '커피', '차', '물', '주스', '우유', '소다', '와인', '맥주',
    }
    FOOD = {
        'bread', 'apple', 'banana', 'lunch', 'dinner', 'breakfast', 'rice', 'meat',
        'pasta', 'pizza', 'sandwich', 'cake', 'cookie',
        '빵', '사과', '바나나', '점심', '저녁', '아침', '밥', '고기',
        '파스타', '피자', '샌드위치', '케이크', '쿠키',
    }
    # Things someone can make or prepare in a kitchen
    COOKABLE = {
        'coffee', 'tea', 'food', 'lunch', 'dinner', 'breakfast', 'bread', 'rice',
        'pasta', 'pizza', 'sandwich', 'cake', 'cookie',
        '커피', '차', '음식', '점심', '저녁', '아침', '빵', '밥',
        '파스타', '피자', '샌드위치', '케이크', '쿠키',
    }
    NON_CONSUMABLE = {
        'key', 'book', 'phone', 'pen', 'computer', 'chair', 'table', 'car', 'house',
        'window', 'door', 'wall', 'floor', 'ceiling', 'bag', 'wallet', 'watch',
        '열쇠', '책', '전화기', '펜', '컴퓨터', '의자', '테이블', '자동차', '집',
        '창문', '문', '벽', '바닥', '천장', '가방', '지갑', '시계',
    }
    TOOL = {
        'key', 'pen', 'book', 'phone', 'computer', 'bag', 'wallet', 'watch',
        'notebook', 'textbook', 'laptop', 'umbrella',
        '열쇠', '펜', '책', '전화기', '컴퓨터', '가방', '지갑', '시계',
        '공책', '교과서', '노트북', '우산',
    }
    BODY_PART = {
        'tooth', 'teeth', 'hair', 'eye', 'eyes', 'hand', 'hands', 'foot', 'feet',
        '치아', '머리카락', '눈', '손', '발',
    }

    # ============================================================================
    # CONFIGURATION: Verb and Venue Classes
    # ============================================================================

    MOVEMENT = {
        'go', 'come', 'walk', 'drive', 'run', 'return', 'travel',
        '가다', '오다', '걷다', '운전하다', '달리다', '돌아가다', '여행하다',
    }
    ACTIVITY = {
        'study', 'work', 'read', 'cook', 'wait', 'sleep', 'play', 'eat', 'drink', 'exercise',
        '공부하다', '일하다', '읽다', '요리하다', '기다리다', '자다', '놀다', '먹다', '마시다', '운동하다',
    }
    TRANSITIVE = {
        'eat', 'drink', 'make', 'take', 'bring', 'have', 'read', 'buy', 'cook', 'prepare',
        'need', 'like', 'want', 'finish',
        '먹다', '마시다', '만들다', '가져가다', '가져오다', '가지다', '읽다', '사다', '요리하다',
        '준비하다', '좋아하다', '원하다', '끝내다',
    }
    BUSINESS_VENUE = {
        'meeting room', 'conference room', 'office', 'head office',
        '회의실', '사무실', '본사',
    }
    BUSINESS_ITEM = {
        'report', 'contract', 'proposal', 'schedule', 'presentation', 'document',
        '보고서', '계약서', '제안서', '일정', '발표 자료', '문서',
    }
    BUSINESS_ACTION = {
        'review', 'send', 'sign', 'prepare', 'confirm', 'schedule',
        '검토하다', '보내다', '서명하다', '준비하다', '확인하다',
    }

    # ============================================================================
    # CONFIGURATION: Time Expressions
    # ============================================================================

    # Times that fit a sentence about the past; "today" style words are in both tables
    PAST_TIME = {
        'yesterday', 'last night', 'last week', 'last weekend', 'earlier', 'this morning',
        'today', 'this afternoon', 'after school',
        '어제', '어젯밤', '지난주', '지난 주말', '아까', '오늘 아침', '오늘', '오늘 오후', '방과 후',
    }
    FUTURE_TIME = {
        'tomorrow', 'tonight', 'later', 'next week', 'next monday', 'next month', 'this weekend',
        'today', 'this afternoon', 'after school',
        '내일', '오늘 밤', '나중에', '다음 주', '다음 주 월요일', '다음 달', '이번 주말',
        '오늘', '오늘 오후', '방과 후',
    }

    CATEGORY_NAMES = (
        'BEVERAGE', 'FOOD', 'COOKABLE', 'NON_CONSUMABLE', 'TOOL', 'BODY_PART',
        'MOVEMENT', 'ACTIVITY', 'TRANSITIVE', 'BUSINESS_VENUE', 'BUSINESS_ITEM', 'BUSINESS_ACTION',
        'PAST_TIME', 'FUTURE_TIME',
    )

    # Object category -> verb that naturally takes it
    SUGGESTED_VERBS = (
        ('BEVERAGE', 'drink'),
        ('FOOD', 'eat'),
        ('COOKABLE', 'make'),
        ('TOOL', 'have'),
    )

    def __init__(self, tables: Optional[Mapping[str, Iterable[str]]] = None):
        """
        Initialize the classifier.

        Args:
            tables: Optional category -> words mapping replacing the built-in tables
        """
        if tables is None:
            tables = {name: getattr(self, name) for name in self.CATEGORY_NAMES}
        self.tables: Dict[str, FrozenSet[str]] = {
            name.upper(): frozenset(word.lower() for word in words)
            for name, words in tables.items()
        }

    def classify(self, word: str) -> FrozenSet[str]:
        """
        Return every category the word belongs to.

        Args:
            word: English or Korean word (exact match, case-insensitive)

        Returns:
            Frozen set of category names, empty when unknown
        """
        if not word:
            return frozenset()
        key = word.strip().lower()
        return frozenset(name for name, words in self.tables.items() if key in words)

    def categories_for(self, lexeme: Lexeme) -> FrozenSet[str]:
        """Categories of a lexeme from both glosses plus its explicit category."""
        categories = set(self.classify(lexeme.en)) | set(self.classify(lexeme.ko))
        if lexeme.semantic_category:
            categories.add(lexeme.semantic_category.upper())
        return frozenset(categories)

    def is_in_category(self, word: str, category: str) -> bool:
        return category.upper() in self.classify(word)

    def can_perform_action(self, verb: str, obj: str,
                           categories: Optional[Iterable[str]] = None) -> bool:
        """
        Check whether a verb can sensibly take the object.

        Args:
            verb: English verb (base or past form)
            obj: English object word
            categories: Known categories of the object (defaults to classifying obj)

        Returns:
            False when the object contradicts the verb's requirements
        """
        verb = verb.lower()
        categories = self.classify(obj) if categories is None else frozenset(categories)

        if verb in ('drink', 'drank'):
            if 'NON_CONSUMABLE' in categories:
                return False
            return 'BEVERAGE' in categories
        if verb in ('eat', 'ate'):
            if 'NON_CONSUMABLE' in categories:
                return False
            return 'FOOD' in categories
        if verb in ('cook', 'cooked'):
            return 'COOKABLE' in categories
        if verb in ('prepare', 'prepared') and 'BUSINESS_ITEM' in categories:
            return True
        if verb in ('make', 'made', 'prepare', 'prepared'):
            return 'COOKABLE' in categories or 'TOOL' in categories
        if verb == 'read':
            return not categories & {'BEVERAGE', 'FOOD'}
        return True

    def suggest_verb_for_object(self, obj: str) -> Optional[str]:
        """Suggest the verb that fits an object's category, if any."""
        categories = self.classify(obj)
        for category, verb in self.SUGGESTED_VERBS:
            if category in categories:
                return verb
        return None
