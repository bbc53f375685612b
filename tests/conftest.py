# tests/conftest.py
import json
import os

import pytest

from lexicon import Lexicon
from pattern_core import Lexeme
from pattern_schemas import PatternSchema, SchemaRegistry, SlotSpec

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@pytest.fixture
def make_lexeme():
    """Factory for lexemes with sensible defaults."""
    def _make(lexeme_id, en, ko, pos, **extra):
        return Lexeme(id=lexeme_id, en=en, ko=ko, pos=pos, **extra)
    return _make


@pytest.fixture
def where_schema():
    return PatternSchema(
        id="WH-BE-PLACE",
        category="directions",
        surface="Where is the [PLACE]?",
        ko_surface="[PLACE] 어디 있어?",
        slots=[SlotSpec(name="PLACE", accept=("PLACE",), required=True)],
    )


@pytest.fixture
def hospital_lexicon(make_lexeme):
    return Lexicon([make_lexeme("p1", "hospital", "병원", "PLACE")])


@pytest.fixture
def seed_registry():
    return SchemaRegistry.with_seed()


@pytest.fixture(scope="session")
def packs_dir():
    """The data packs shipped with the repository."""
    return os.path.join(REPO_ROOT, "packs")


@pytest.fixture
def write_pack(tmp_path):
    """Write a pack dictionary to tmp_path and return its path."""
    def _write(data, name="pack.json"):
        path = tmp_path / name
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
        return path
    return _write


@pytest.fixture
def minimal_pack():
    return {
        "packId": "mini",
        "version": "1.0.0",
        "category": "daily",
        "lexemes": [
            {"id": "go", "en": "go", "ko": "가다", "pos": "VERB"},
            {"id": "bring", "en": "bring", "ko": "가져오다", "pos": "VERB"},
            {"id": "school", "en": "school", "ko": "학교", "pos": "PLACE"},
            {"id": "after-school", "en": "after school", "ko": "방과 후", "pos": "TIME"},
            {"id": "friend", "en": "friend", "ko": "친구", "pos": "PERSON"},
        ],
        "patterns": [
            {
                "id": "MINI-SEE-PERSON",
                "surface": "I see my [PERSON] [TIME].",
                "koSurface": "[TIME] [PERSON]을/를 봐.",
                "slots": [
                    {"name": "PERSON", "accept": ["PERSON"]},
                    {"name": "TIME", "accept": ["TIME"], "required": False},
                ],
            }
        ],
    }
