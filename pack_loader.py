"""
Pack Loader Module
Reads JSON data packs into a lexicon snapshot and a schema registry.
"""
import json
import re
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Union

from lexicon import Lexicon
from pattern_core import CATEGORY_TAGS, Lexeme, POS_TAGS, VerbFeatures
from pattern_schemas import PatternSchema, SchemaRegistry, create_seed_schemas, parse_surface, SlotToken

SEMVER = re.compile(r"^\d+\.\d+\.\d+(?:[-+][0-9A-Za-z.-]+)?$")


class PackLoadError(Exception):
    """Raised when a pack file cannot be read or fails validation in strict mode."""


@dataclass
class ValidationReport:
    """Errors make a pack unusable; warnings flag data-quality problems."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def extend(self, other: 'ValidationReport'):
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


@dataclass
class PackBundle:
    """Everything loaded from a set of packs."""
    lexicon: Lexicon
    registry: SchemaRegistry
    packs: List[str] = field(default_factory=list)
    report: ValidationReport = field(default_factory=ValidationReport)


def _slot_names(surface: str) -> List[str]:
    return [token.name for token in parse_surface(surface or '') if isinstance(token, SlotToken)]


def validate_pack(data: Dict, source: str = '') -> ValidationReport:
    """
    Check a parsed pack for structural problems.

    Args:
        data: Parsed pack JSON
        source: Label used in messages (usually the file name)

    Returns:
        ValidationReport with errors and warnings
    """
    report = ValidationReport()
    if not isinstance(data, dict):
        report.errors.append(f"{source or '<pack>'}: pack must be a JSON object")
        return report
    label = source or data.get('packId') or '<pack>'
    if not data.get('packId'):
        report.errors.append(f"{label}: missing packId")
    version = str(data.get('version') or '')
    if not SEMVER.match(version):
        report.errors.append(f"{label}: invalid version '{version}' (expected semver such as 1.0.0)")
    category = data.get('category')
    if category and category not in CATEGORY_TAGS:
        report.warnings.append(f"{label}: unknown category '{category}'")

    lexemes = data.get('lexemes') or []
    if not isinstance(lexemes, list):
        report.errors.append(f"{label}: lexemes must be a list")
        lexemes = []
    ids = Counter()
    for index, record in enumerate(lexemes):
        if not isinstance(record, dict):
            report.errors.append(f"{label}: lexeme #{index + 1} must be a JSON object")
            continue
        where = f"{label}: lexeme #{index + 1} ({record.get('id') or record.get('en') or '?'})"
        for key in ('id', 'en', 'ko', 'pos'):
            if not str(record.get(key) or '').strip():
                report.errors.append(f"{where} missing {key}")
        pos = str(record.get('pos') or '').upper()
        if pos and pos not in POS_TAGS:
            report.errors.append(f"{where} has unknown pos '{record.get('pos')}'")
        if record.get('id'):
            ids[record['id']] += 1
    for lexeme_id, count in ids.items():
        if count > 1:
            report.errors.append(f"{label}: lexeme id '{lexeme_id}' appears {count} times")

    patterns = data.get('patterns') or []
    if not isinstance(patterns, list):
        report.errors.append(f"{label}: patterns must be a list")
        patterns = []
    pattern_ids = Counter()
    for index, pattern in enumerate(patterns):
        if not isinstance(pattern, dict):
            report.errors.append(f"{label}: pattern #{index + 1} must be a JSON object")
            continue
        where = f"{label}: pattern {pattern.get('id') or '#' + str(index + 1)}"
        if not pattern.get('id'):
            report.errors.append(f"{where} missing id")
        else:
            pattern_ids[pattern['id']] += 1
        surface = pattern.get('surface') or ''
        ko_surface = pattern.get('koSurface') or ''
        if not surface:
            report.errors.append(f"{where} missing surface")
        if not ko_surface:
            report.errors.append(f"{where} missing koSurface")

        slot_names = set()
        for slot in pattern.get('slots') or []:
            if not isinstance(slot, dict) or not slot.get('name') or not slot.get('accept'):
                report.errors.append(f"{where} has a slot without name or accept")
                continue
            slot_names.add(slot['name'])
            try:
                VerbFeatures.from_dict(slot.get('morph'))
            except ValueError as e:
                report.errors.append(f"{where} slot {slot['name']}: {e}")

        en_names = _slot_names(surface)
        ko_names = _slot_names(ko_surface)
        for name in sorted(set(en_names) - slot_names):
            report.errors.append(f"{where} placeholder [{name}] has no slot")
        if surface and ko_surface and Counter(en_names) != Counter(ko_names):
            report.warnings.append(
                f"{where} placeholder mismatch: surface has {len(en_names)}, koSurface has {len(ko_names)}")
    for pattern_id, count in pattern_ids.items():
        if count > 1:
            report.warnings.append(f"{label}: pattern id '{pattern_id}' appears {count} times")

    return report


def read_pack(path: Union[str, Path]) -> Dict:
    """Parse one pack file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        raise PackLoadError(f"Pack not found: {path}")
    except json.JSONDecodeError as e:
        raise PackLoadError(f"Invalid JSON in {path}: {e}")


def lexemes_from_pack(data: Dict) -> List[Lexeme]:
    """Lexemes of a pack; entries without tags inherit the pack category."""
    category = data.get('category')
    lexemes = []
    for record in data.get('lexemes') or []:
        if not isinstance(record, dict):
            continue
        if category and not record.get('tags'):
            record = dict(record, tags=[category])
        lexemes.append(Lexeme.from_dict(record))
    return lexemes


def schemas_from_pack(data: Dict) -> List[PatternSchema]:
    return [PatternSchema.from_dict(pattern, data.get('category'))
            for pattern in data.get('patterns') or [] if isinstance(pattern, dict)]


def discover_packs(paths: Iterable[Union[str, Path]]) -> List[Path]:
    """Expand directories into their *.json files (sorted by name)."""
    found = []
    for path in paths:
        path = Path(path)
        if path.is_dir():
            found.extend(sorted(path.glob('*.json')))
        else:
            found.append(path)
    return found


def load_packs(paths: Iterable[Union[str, Path]], include_seed: bool = True,
               strict: bool = False) -> PackBundle:
    """
    Load packs into a lexicon and registry.

    Args:
        paths: Pack files or directories of pack files
        include_seed: Register the built-in schema library first
        strict: Raise PackLoadError on the first pack with errors instead of skipping it

    Returns:
        PackBundle with the lexicon, registry, loaded pack ids and combined report
    """
    registry = SchemaRegistry(create_seed_schemas() if include_seed else ())
    lexemes: List[Lexeme] = []
    report = ValidationReport()
    loaded = []

    for path in discover_packs(paths):
        data = read_pack(path)
        pack_report = validate_pack(data, path.name)
        report.extend(pack_report)
        if not pack_report.ok:
            if strict:
                raise PackLoadError("; ".join(pack_report.errors))
            continue
        lexemes.extend(lexemes_from_pack(data))
        registry.register(schemas_from_pack(data))
        loaded.append(data['packId'])

    return PackBundle(lexicon=Lexicon(lexemes), registry=registry, packs=loaded, report=report)
