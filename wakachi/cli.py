"""
CLI interface for wakachi.

Usage:
    wakachi "パンを食べた"
    wakachi -d "食べたかった"
    wakachi --json "食べました"
    echo "パンを食べた" | wakachi --simple
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from wakachi import __version__, settings
from wakachi.characters import as_hiragana
from wakachi.dictionary import PrependPolicy, load_dictionary
from wakachi.output import sentence_to_list
from wakachi.raw_types import MatchedDefinition, Sentence


# ============================================================================
# Output Formatting
# ============================================================================

def format_default(sentence: Sentence) -> str:
    """
    Default output: just the split.

    Shows: word1 | word2 | word3
    """
    return " | ".join(word.original for word in sentence)


def _first_gloss(definition: MatchedDefinition) -> str:
    for sense in definition.entry.senses:
        if sense.glossary:
            return sense.glossary[0]
    return ""


def format_simple(sentence: Sentence) -> str:
    """Tab-separated output: word, reading, first gloss, conjugation."""
    lines = []
    for word in sentence:
        if not word.definitions:
            lines.append(f"{word.original}\t-\t-\t-")
            continue
        best = word.definitions[0]
        conjugation = best.conjugation.name if best.conjugation else "-"
        reading = as_hiragana(best.entry.readings[0])
        lines.append(f"{word.original}\t{reading}\t{_first_gloss(best)}\t{conjugation}")
    return "\n".join(lines)


def format_detailed(sentence: Sentence) -> str:
    """
    Detailed output with every matched definition.

    Format per definition: word【reading】 ← headword, then the conjugation
    undone (if any) and the numbered senses.
    """
    lines = [format_default(sentence), "─" * 40]

    for word in sentence:
        if not word.definitions:
            lines.append(f"{word.original} (no match)")
            continue

        for definition in word.definitions:
            entry = definition.entry
            headword = entry.kanji[0] if entry.kanji else entry.readings[0]
            reading = as_hiragana(entry.readings[0])

            parts = [f"{word.original}【{reading}】"]
            if headword != word.original:
                parts.append(f"← {headword}")
            lines.append(" ".join(parts))

            if definition.conjugation:
                rule = definition.conjugation
                lines.append(f"  └─ {rule.name} ({rule.ending} → {rule.base or '∅'}, {rule.pos})")

            for i, sense in enumerate(entry.senses, start=1):
                lines.append(f"     {i}. {sense}")

    return "\n".join(lines)


def format_json(sentence: Sentence) -> str:
    """Format words as JSON with full definitions."""
    return json.dumps(sentence_to_list(sentence), ensure_ascii=False, indent=2)


# ============================================================================
# Main
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wakachi",
        description="Japanese word segmentation with dictionary definitions",
    )
    parser.add_argument(
        "text",
        nargs="?",
        help="Japanese text to segment (read from stdin if omitted)",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--detail", "-d",
        action="store_true",
        help="Show every definition and conjugation",
    )
    output.add_argument(
        "--json", "-j",
        action="store_true",
        help="Output as JSON",
    )
    output.add_argument(
        "--simple", "-s",
        action="store_true",
        help="Simple output format (word, reading, gloss, conjugation)",
    )
    parser.add_argument(
        "--jmdict",
        help=f"Path to JMdict XML (default: {settings.JMDICT_PATH})",
    )
    parser.add_argument(
        "--conjugations",
        help=f"Path to conjugation table (default: {settings.CONJUGATIONS_PATH})",
    )
    parser.add_argument(
        "--policy",
        choices=[p.value for p in PrependPolicy],
        help=f"Priority policy for shared readings (default: {settings.PREPEND_POLICY})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log dictionary loading progress",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"wakachi {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO if args.verbose else logging.WARNING,
        format=settings.LOG_FORMAT,
    )

    if args.text is None:
        # Read from stdin
        text = sys.stdin.read().strip()
    else:
        text = args.text

    if not text:
        parser.print_help()
        return 1

    try:
        dictionary = load_dictionary(
            jmdict_path=args.jmdict,
            conjugations_path=args.conjugations,
            policy=PrependPolicy(args.policy) if args.policy else None,
        )
        sentence = dictionary.parse(text)

        if args.json:
            print(format_json(sentence))
        elif args.simple:
            print(format_simple(sentence))
        elif args.detail:
            print(format_detailed(sentence))
        else:
            # Default: simple splitting output
            print(format_default(sentence))

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
