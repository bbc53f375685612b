# tests/test_pack_loader.py
import copy

import pytest

from pack_loader import (PackLoadError, discover_packs, lexemes_from_pack, load_packs, read_pack,
                         schemas_from_pack, validate_pack)
from pattern_schemas import create_seed_schemas


def test_minimal_pack_is_valid(minimal_pack):
    report = validate_pack(minimal_pack, "mini.json")
    assert report.ok
    assert report.warnings == []


def test_shipped_packs_have_no_errors(packs_dir):
    for path in discover_packs([packs_dir]):
        report = validate_pack(read_pack(path), path.name)
        assert report.errors == [], path.name


def test_structural_errors(minimal_pack):
    pack = copy.deepcopy(minimal_pack)
    pack["version"] = "v1"
    pack["lexemes"].append({"id": "go", "en": "", "ko": "가다", "pos": "ADVERB"})
    pack["patterns"].append({"id": "NO-KO", "surface": "Hi [NAME]."})
    report = validate_pack(pack, "bad.json")

    assert not report.ok
    joined = "\n".join(report.errors)
    assert "invalid version 'v1'" in joined
    assert "missing en" in joined
    assert "unknown pos 'ADVERB'" in joined
    assert "lexeme id 'go' appears 2 times" in joined
    assert "missing koSurface" in joined
    assert "placeholder [NAME] has no slot" in joined


def test_invalid_morph_is_an_error(minimal_pack):
    pack = copy.deepcopy(minimal_pack)
    pack["patterns"][0]["slots"][0]["morph"] = {"tense": "someday"}
    report = validate_pack(pack, "morph.json")
    assert any("Unknown tense 'someday'" in error for error in report.errors)


def test_warnings_do_not_block_loading(minimal_pack):
    pack = copy.deepcopy(minimal_pack)
    pack["category"] = "travel"
    pack["patterns"][0]["koSurface"] = "[PERSON]을/를 봐."
    report = validate_pack(pack, "warn.json")
    assert report.ok
    assert len(report.warnings) == 2


def test_non_object_pack():
    report = validate_pack(["not", "a", "pack"], "list.json")
    assert report.errors == ["list.json: pack must be a JSON object"]


def test_non_object_entries_are_errors(minimal_pack):
    pack = copy.deepcopy(minimal_pack)
    pack["lexemes"].append("hospital")
    pack["patterns"].append(["WH-BE-PLACE"])
    pack["patterns"][0]["slots"].append(None)
    report = validate_pack(pack, "odd.json")

    assert "odd.json: lexeme #6 must be a JSON object" in report.errors
    assert "odd.json: pattern #2 must be a JSON object" in report.errors
    assert "odd.json: pattern MINI-SEE-PERSON has a slot without name or accept" in report.errors
    assert [lexeme.id for lexeme in lexemes_from_pack(pack)] == ["go", "bring", "school", "after-school", "friend"]
    assert [schema.id for schema in schemas_from_pack(pack)] == ["MINI-SEE-PERSON"]


def test_lexemes_inherit_pack_category(minimal_pack):
    lexemes = lexemes_from_pack(minimal_pack)
    assert all(lexeme.tags == ("daily",) for lexeme in lexemes)


def test_load_packs(write_pack, minimal_pack):
    path = write_pack(minimal_pack)
    bundle = load_packs([path])

    assert bundle.packs == ["mini"]
    assert len(bundle.lexicon) == 5
    assert len(bundle.registry) == len(create_seed_schemas()) + 1
    assert bundle.registry.get("MINI-SEE-PERSON").category == "daily"
    assert bundle.report.ok


def test_load_packs_without_seed(write_pack, minimal_pack):
    bundle = load_packs([write_pack(minimal_pack)], include_seed=False)
    assert [schema.id for schema in bundle.registry.get_all()] == ["MINI-SEE-PERSON"]


def test_broken_pack_is_skipped_unless_strict(write_pack, minimal_pack):
    broken = copy.deepcopy(minimal_pack)
    broken["packId"] = "broken"
    broken["version"] = "latest"
    write_pack(minimal_pack, "a.json")
    path = write_pack(broken, "b.json")

    bundle = load_packs([path.parent])
    assert bundle.packs == ["mini"]
    assert bundle.report.errors

    with pytest.raises(PackLoadError):
        load_packs([path.parent], strict=True)


def test_unreadable_packs(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(PackLoadError):
        load_packs([bad])
    with pytest.raises(PackLoadError):
        read_pack(tmp_path / "missing.json")


def test_discover_packs_sorts_directory_entries(write_pack, minimal_pack, tmp_path):
    write_pack(minimal_pack, "b.json")
    write_pack(minimal_pack, "a.json")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    assert [path.name for path in discover_packs([tmp_path])] == ["a.json", "b.json"]
