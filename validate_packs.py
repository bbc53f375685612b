#!/usr/bin/env python3
"""
Pack Validation Script
Checks vocabulary/pattern packs for common data-quality issues.
"""
import argparse
import os
import re
import sys
from collections import defaultdict

from spellchecker import SpellChecker
from unidecode import unidecode

from lexicon import Lexicon, dedupe_key
from pack_loader import (PackLoadError, discover_packs, lexemes_from_pack, read_pack,
                         schemas_from_pack, validate_pack)
from pattern_schemas import SchemaRegistry
from slot_resolver import SlotResolver
from word_classifier import SemanticClassifier

DEFAULT_PACK_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'packs')
WORD_PATTERN = re.compile(r"[A-Za-z]+")


def _report_list(target, header, items, limit=10):
    target.append(header)
    for item in items[:limit]:
        target.append(f"  {item}")
    if len(items) > limit:
        target.append(f"  ... and {len(items) - limit} more")


def validate_packs(paths, spellcheck=False) -> bool:
    """Validate pack files for common issues."""

    issues = []
    warnings = []

    files = discover_packs(paths)
    print(f"Validating {len(files)} pack files...")
    print()

    # Check 1: Structure
    print("🔍 Checking pack structure...")
    lexemes = []
    registry = SchemaRegistry.with_seed()
    structural_errors = []
    for path in files:
        try:
            data = read_pack(path)
        except PackLoadError as e:
            structural_errors.append(str(e))
            continue
        report = validate_pack(data, path.name)
        structural_errors.extend(report.errors)
        warnings.extend(report.warnings)
        lexemes.extend(lexemes_from_pack(data))
        registry.register(schemas_from_pack(data))
    if structural_errors:
        _report_list(issues, f"Found {len(structural_errors)} structural errors:", structural_errors, limit=25)
    else:
        print("  ✓ All packs are well-formed")

    # Check 2: Duplicate words across packs
    print("🔍 Checking for duplicate words...")
    by_key = defaultdict(list)
    for lexeme in lexemes:
        if lexeme.en and lexeme.pos:
            by_key[dedupe_key(lexeme)].append(lexeme.id)
    duplicates = [f"{key} -> {', '.join(ids)}" for key, ids in by_key.items() if len(ids) > 1]
    if duplicates:
        _report_list(warnings, f"Found {len(duplicates)} duplicate words (first entry wins):", duplicates)
    else:
        print("  ✓ No duplicates found")

    # Check 3: English glosses outside ASCII
    print("🔍 Checking English glosses for unusual characters...")
    unusual = [f"{lexeme.id}: '{lexeme.en}' (ASCII: '{unidecode(lexeme.en)}')"
               for lexeme in lexemes if lexeme.en and unidecode(lexeme.en) != lexeme.en]
    if unusual:
        _report_list(warnings, f"Found {len(unusual)} English glosses with non-ASCII characters:", unusual)
    else:
        print("  ✓ No unusual characters found")

    # Check 4: Spelling
    if spellcheck:
        print("🔍 Spell-checking English glosses...")
        checker = SpellChecker(language='en')
        misspelled = []
        for lexeme in lexemes:
            tokens = [token.lower() for token in WORD_PATTERN.findall(unidecode(lexeme.en or ''))]
            for token in sorted(checker.unknown(tokens)):
                suggestion = checker.correction(token)
                hint = f" (did you mean '{suggestion}'?)" if suggestion and suggestion != token else ''
                misspelled.append(f"{lexeme.id}: '{token}'{hint}")
        if misspelled:
            _report_list(warnings, f"Found {len(misspelled)} possibly misspelled words:", misspelled)
        else:
            print("  ✓ No spelling issues found")

    # Check 5: Schemas the vocabulary cannot fill
    print("🔍 Checking that every schema can be filled...")
    classifier = SemanticClassifier()
    resolver = SlotResolver(Lexicon(lexemes), classifier)
    unfillable = []
    for schema in registry.get_all():
        missing = [slot.name for slot in schema.required_slots() if not resolver.has_candidate(slot)]
        if missing:
            unfillable.append(f"{schema.id}: no words for {', '.join(missing)}")
    if unfillable:
        _report_list(warnings, f"Found {len(unfillable)} schemas the vocabulary cannot fill:", unfillable, limit=25)
    else:
        print("  ✓ Every schema has candidates")

    # Check 6: Items with no semantic category
    print("🔍 Checking semantic coverage of items...")
    uncategorized = []
    for lexeme in lexemes:
        if lexeme.pos in ('ITEM', 'NOUN') and lexeme.en and not classifier.categories_for(lexeme):
            uncategorized.append(f"{lexeme.id}: '{lexeme.en}'")
    if uncategorized:
        _report_list(warnings, f"Found {len(uncategorized)} items outside every semantic category "
                               f"(they only fill unconstrained slots):", uncategorized)
    else:
        print("  ✓ Every item has a semantic category")

    # Check 7: Objects whose natural verb is missing
    print("🔍 Checking that objects have a matching verb...")
    verbs = {lexeme.en.lower() for lexeme in lexemes if lexeme.pos == 'VERB' and lexeme.en}
    unpaired = []
    for lexeme in lexemes:
        if lexeme.pos not in ('ITEM', 'NOUN') or not lexeme.en:
            continue
        verb = classifier.suggest_verb_for_object(lexeme.en)
        if verb and verb not in verbs:
            unpaired.append(f"{lexeme.id}: '{lexeme.en}' usually takes '{verb}', which no pack defines")
        elif verb and not classifier.can_perform_action(verb, lexeme.en):
            unpaired.append(f"{lexeme.id}: '{lexeme.en}' is listed in contradictory categories")
    if unpaired:
        _report_list(warnings, f"Found {len(unpaired)} objects without a matching verb:", unpaired)
    else:
        print("  ✓ Every object has a matching verb")

    # Print results
    print()
    print("=" * 60)
    print("VALIDATION RESULTS")
    print("=" * 60)
    print()

    if not issues and not warnings:
        print("✅ All checks passed! Packs look good.")
        return True

    if issues:
        print("❌ CRITICAL ISSUES FOUND:")
        print()
        for issue in issues:
            print(issue)
        print()

    if warnings:
        print("⚠️  WARNINGS:")
        print()
        for warning in warnings:
            print(warning)
        print()

    if issues:
        print("❌ Validation FAILED - please fix critical issues")
        return False
    print("⚠️  Validation passed with warnings")
    return True


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Validate vocabulary/pattern packs.")
    parser.add_argument('paths', nargs='*', default=[DEFAULT_PACK_DIR],
                        help=f'Pack files or directories (default: {DEFAULT_PACK_DIR})')
    parser.add_argument('--spellcheck', action='store_true',
                        help='Spell-check English glosses with pyspellchecker')
    args = parser.parse_args(argv)
    success = validate_packs(args.paths, spellcheck=args.spellcheck)
    return 0 if success else 1


if __name__ == '__main__':
    sys.exit(main())
