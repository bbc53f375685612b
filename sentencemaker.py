#!/usr/bin/env python3
"""
SentenceMaker - Korean/English Pattern Sentence Generator
Generates bilingual practice sentences from data packs and slot templates.
"""
import argparse
import json
import os
import random
import sys
import time
from typing import List

from diagnostics import configure_logging
from pack_loader import PackLoadError, load_packs
from pattern_core import GeneratedSentence, GenerationPreconditionError
from sentence_generator import GenerationParams, SentenceGenerator

DEFAULT_PACK_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'packs')


def format_duration(seconds: float) -> str:
    """Return duration formatted as HHh MMm SS.SSSs or milliseconds."""
    if seconds is None:
        return "00h 00m 00.000s"
    if seconds < 1:
        return f"{seconds * 1000:.1f} ms"
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds - hours * 3600 - minutes * 60
    return f"{hours:02d}h {minutes:02d}m {secs:06.3f}s"


def split_list(value: str) -> List[str]:
    """Parse a comma separated CLI value."""
    return [item.strip() for item in (value or '').split(',') if item.strip()]


def save_sentences(sentences: List[GeneratedSentence], output_file: str):
    """
    Save generated sentences to a file.

    Args:
        sentences: Generated sentence pairs
        output_file: Path to output file (.json writes JSON, anything else tab-separated text)
    """
    output_dir = os.path.dirname(output_file)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)

    with open(output_file, 'w', encoding='utf-8') as f:
        if output_file.endswith('.json'):
            json.dump([sentence.to_dict() for sentence in sentences], f, ensure_ascii=False, indent=2)
            f.write('\n')
        else:
            for sentence in sentences:
                f.write(f"{sentence.text}\t{sentence.korean}\t{sentence.schema_id}\t{sentence.confidence:.3f}\n")
    print(f"\nSentences saved to: {output_file}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate Korean/English practice sentences from vocabulary packs.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python sentencemaker.py
  python sentencemaker.py --tags directions,daily --limit 5
  python sentencemaker.py --intent "병원에 어떻게 가?"
  python sentencemaker.py --schema WH-BE-PLACE,HOW-GET-PLACE -o output/sentences.json
        """
    )
    parser.add_argument(
        '-p', '--packs',
        action='append',
        default=None,
        help=f'Pack file or directory of packs (repeatable, default: {DEFAULT_PACK_DIR})'
    )
    parser.add_argument(
        '--schema',
        default='',
        help='Comma separated schema ids to use'
    )
    parser.add_argument(
        '--tags',
        default='',
        help='Comma separated category tags (daily, directions, school, business)'
    )
    parser.add_argument(
        '--intent',
        default=None,
        help='Free-text intent in Korean or English used to pick categories and rank results'
    )
    parser.add_argument(
        '--limit',
        type=int,
        default=SentenceGenerator.DEFAULT_LIMIT,
        help=f'Maximum sentences to generate (default: {SentenceGenerator.DEFAULT_LIMIT})'
    )
    parser.add_argument(
        '--per-schema',
        type=int,
        default=1,
        help='Sentences kept per schema (default: 1)'
    )
    parser.add_argument(
        '--exclude',
        default='',
        help='Comma separated schema ids to skip'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Seed for varied word choice (default: deterministic lexicon order)'
    )
    parser.add_argument(
        '-o', '--output',
        default=None,
        help='Output file for generated sentences (.json or tab-separated text)'
    )
    parser.add_argument(
        '--trace-log',
        default=None,
        help='Append rejection trace entries to this file'
    )
    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Suppress progress output'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log every rejection as it happens'
    )
    return parser


def print_summary(sentences: List[GeneratedSentence], stats: dict, stage_times: dict, elapsed: float):
    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(f"Lexicon entries:         {stats['lexicon_size']}")
    print(f"Registered schemas:      {stats['schema_count']}")
    if stats.get('intent_tags'):
        print(f"Intent tags:             {', '.join(stats['intent_tags'])}")
    print(f"Total sentences:         {len(sentences)}")

    rejections = stats.get('rejections', {})
    if rejections:
        print(f"\nRejections: {rejections.get('rejected', 0)}")
        for key, count in sorted(rejections.items()):
            if key.startswith('rejected_'):
                print(f"  - {key[len('rejected_'):]}: {count}")

    failures = stats.get('template_failures', {})
    if failures:
        print("\nTop template failures:")
        for schema_id, count in sorted(failures.items(), key=lambda x: x[1], reverse=True)[:5]:
            print(f"  - {schema_id}: {count}")

    print("\n" + "-" * 60)
    print("TIMING BREAKDOWN")
    print("-" * 60)
    print(f"Load packs:              {format_duration(stage_times['load_packs'])}")
    print(f"Initialize generator:    {format_duration(stage_times['init_generator'])}")
    print(f"Generate sentences:      {format_duration(stage_times['generate_sentences'])}")
    print("-" * 60)
    print(f"TOTAL TIME:              {format_duration(elapsed)}")
    print("=" * 60)


def main(argv=None) -> int:
    """Main entry point for the sentence generator."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    pack_paths = args.packs or [DEFAULT_PACK_DIR]

    if not args.quiet:
        print("=" * 60)
        print("SentenceMaker - Korean/English Pattern Sentence Generator")
        print("=" * 60)
        print("\nConfiguration:")
        print(f"  Packs: {', '.join(pack_paths)}")
        print(f"  Schemas: {args.schema or 'all'}")
        print(f"  Tags: {args.tags or ('from intent' if args.intent else 'all')}")
        print(f"  Intent: {args.intent or '-'}")
        print(f"  Limit: {args.limit}")
        print(f"  Seed: {args.seed if args.seed is not None else 'none (deterministic)'}")
        print("=" * 60)

    start_time = time.time()
    stage_times = {}

    try:
        stage_start = time.time()
        bundle = load_packs(pack_paths)
        stage_times['load_packs'] = time.time() - stage_start
    except PackLoadError as e:
        print(f"Error: {e}")
        return 1

    if not args.quiet:
        print(f"\nLoaded {len(bundle.packs)} packs: {len(bundle.lexicon)} words, "
              f"{len(bundle.registry)} schemas ({format_duration(stage_times['load_packs'])})")
        for error in bundle.report.errors:
            print(f"  ❌ {error}")
        for warning in bundle.report.warnings:
            print(f"  ⚠️  {warning}")

    stage_start = time.time()
    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        generator = SentenceGenerator(bundle.lexicon, bundle.registry, rng=rng)
        stage_times['init_generator'] = time.time() - stage_start

        stage_start = time.time()
        sentences = generator.generate(GenerationParams(
            schema_ids=split_list(args.schema) or None,
            tags=split_list(args.tags) or None,
            limit=args.limit,
            user_input=args.intent,
            exclude_schema_ids=split_list(args.exclude) or None,
            per_schema=args.per_schema,
        ))
        stage_times['generate_sentences'] = time.time() - stage_start
    except GenerationPreconditionError as e:
        print(f"Error: {e}")
        return 1

    if not sentences:
        print("\nNo sentences could be generated from the current vocabulary.")
    else:
        print()
        for index, sentence in enumerate(sentences, 1):
            print(f"{index:3}. [{sentence.confidence:.2f}] {sentence.text}")
            print(f"     {sentence.korean}  ({sentence.schema_id})")

    if args.trace_log:
        try:
            generator.last_trace.flush(args.trace_log)
        except OSError as e:
            print(f"Warning: could not write trace log: {e}")

    if args.output:
        try:
            save_sentences(sentences, args.output)
        except OSError as e:
            print(f"Error saving sentences: {e}")
            return 1

    if not args.quiet:
        print_summary(sentences, generator.get_statistics(), stage_times, time.time() - start_time)

    return 0


if __name__ == '__main__':
    sys.exit(main())
