"""
Lexicon Module
Read-only, ordered snapshot of bilingual vocabulary entries.
"""
from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from unidecode import unidecode

from pattern_core import Lexeme


def dedupe_key(lexeme: Lexeme) -> str:
    """Key used to collapse the same English word entered twice for one POS."""
    normalized = ' '.join(unidecode(lexeme.en).lower().split())
    return f"{lexeme.pos}:{normalized}"


class Lexicon:
    """Ordered vocabulary snapshot used by the generator."""

    def __init__(self, lexemes: Iterable[Lexeme] = ()):
        """
        Build the snapshot, keeping only entries usable for generation.

        Args:
            lexemes: Candidate entries in the desired iteration order
        """
        self._entries: List[Lexeme] = []
        self._by_id: Dict[str, Lexeme] = {}
        self._by_pos: Dict[str, List[Lexeme]] = defaultdict(list)
        # id -> reason for every entry left out of the snapshot
        self.excluded: Dict[str, str] = {}

        seen_keys = set()
        for lexeme in lexemes:
            if not lexeme.is_usable():
                self.excluded[lexeme.id or f"<unnamed {len(self.excluded)}>"] = 'incomplete'
                continue
            if lexeme.id in self._by_id:
                self.excluded[lexeme.id] = 'duplicate_id'
                continue
            key = dedupe_key(lexeme)
            if key in seen_keys:
                self.excluded[lexeme.id] = 'duplicate_word'
                continue
            seen_keys.add(key)
            self._entries.append(lexeme)
            self._by_id[lexeme.id] = lexeme
            self._by_pos[lexeme.pos].append(lexeme)

    @classmethod
    def from_records(cls, records: Iterable[Dict]) -> 'Lexicon':
        """Build a lexicon from pack-style dictionaries."""
        return cls(Lexeme.from_dict(record) for record in records)

    def __iter__(self) -> Iterator[Lexeme]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, lexeme_id: str) -> bool:
        return lexeme_id in self._by_id

    def get(self, lexeme_id: str) -> Optional[Lexeme]:
        return self._by_id.get(lexeme_id)

    def by_pos(self, accept: Iterable[str]) -> List[Lexeme]:
        """Entries whose POS is accepted, in snapshot order."""
        wanted = set(accept)
        return [lexeme for lexeme in self._entries if lexeme.pos in wanted]

    def pos_counts(self) -> Dict[str, int]:
        return {pos: len(entries) for pos, entries in self._by_pos.items()}

    def entries(self) -> Tuple[Lexeme, ...]:
        return tuple(self._entries)
