"""
Plain-data views of segmentation results, shared by the CLI and the server.
"""

from typing import Any, Dict, List, Optional

from wakachi.characters import as_hiragana
from wakachi.raw_types import ConjugationRule, MatchedDefinition, Sentence, Word


def conjugation_to_dict(rule: Optional[ConjugationRule]) -> Optional[Dict[str, str]]:
    if rule is None:
        return None
    return {
        "ending": rule.ending,
        "base": rule.base,
        "pos": rule.pos,
        "name": rule.name,
    }


def definition_to_dict(definition: MatchedDefinition) -> Dict[str, Any]:
    entry = definition.entry
    return {
        "kanji": list(entry.kanji),
        "readings": list(entry.readings),
        "kana": as_hiragana(entry.readings[0]),
        "sense": [
            {"glossary": list(sense.glossary), "pos": list(sense.pos)}
            for sense in entry.senses
        ],
        "conjugation": conjugation_to_dict(definition.conjugation),
    }


def word_to_dict(word: Word) -> Dict[str, Any]:
    return {
        "original": word.original,
        "definitions": [definition_to_dict(d) for d in word.definitions],
    }


def sentence_to_list(sentence: Sentence) -> List[Dict[str, Any]]:
    """Serialize a sentence as a list of word objects (JSON-ready)."""
    return [word_to_dict(word) for word in sentence]
