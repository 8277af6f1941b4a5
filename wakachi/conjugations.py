"""
Conjugation table and resolver.

The table is a tab-separated file with one suffix substitution per row:

    ending  base    pos     name
    た      る      v1      Past form

`pos` is a JMdict part-of-speech entity name (v1) or its expansion
(Ichidan verb). It is resolved against the entities declared by the
loaded JMdict, so rules use the same tag vocabulary as lexicon senses.
A tag that JMdict doesn't declare aborts loading.

Only a single substitution is undone; 食べさせられた is not traced back
through several rules.
"""

import csv
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from wakachi.dictionary import DictionaryIndex
from wakachi.raw_types import (
    ConjugationRule,
    ConjugationTableError,
    MatchedDefinition,
    UnknownPartOfSpeechError,
)

logger = logging.getLogger(__name__)

TABLE_COLUMNS = ("ending", "base", "pos", "name")


# ============================================================================
# Loading
# ============================================================================

def resolve_pos(tag: str, entities: Dict[str, str]) -> str:
    """
    Map a table tag onto the lexicon's tag vocabulary.

    Args:
        tag: Entity name ("v1") or expanded value ("Ichidan verb")
        entities: Entity name -> expansion, as declared by JMdict

    Raises:
        UnknownPartOfSpeechError: If the tag is neither
    """
    if tag in entities:
        return entities[tag]
    if tag in entities.values():
        return tag
    raise UnknownPartOfSpeechError(f"unknown part of speech {tag!r}")


def load_conjugation_table(
    path: Optional[Path] = None,
    entities: Optional[Dict[str, str]] = None,
) -> Tuple[ConjugationRule, ...]:
    """
    Load conjugation rules from a tab-separated table.

    Args:
        path: Table to read. Uses the bundled table if not specified.
        entities: JMdict entity map used to resolve the pos column

    Returns:
        Rules in table order

    Raises:
        FileNotFoundError: If the table doesn't exist
        ConjugationTableError: If a row is malformed
        UnknownPartOfSpeechError: If a row names an unknown part of speech
    """
    if path is None:
        from wakachi.settings import DEFAULT_CONJUGATIONS_PATH
        path = DEFAULT_CONJUGATIONS_PATH
    path = Path(path)
    if entities is None:
        entities = {}

    rules: List[ConjugationRule] = []

    with open(path, 'r', encoding='utf-8', newline='') as f:
        reader = csv.reader(f, delimiter='\t')
        header_seen = False
        for line_no, row in enumerate(reader, start=1):
            if not row or not "".join(row).strip() or row[0].startswith('#'):
                continue
            if not header_seen:
                header_seen = True
                if tuple(cell.strip() for cell in row) == TABLE_COLUMNS:
                    continue

            if len(row) != len(TABLE_COLUMNS):
                raise ConjugationTableError(
                    f"{path}:{line_no}: expected {len(TABLE_COLUMNS)} columns, got {len(row)}"
                )

            ending, base, tag, name = (cell.strip() for cell in row)
            try:
                pos = resolve_pos(tag, entities)
                rules.append(ConjugationRule(ending=ending, base=base, pos=pos, name=name))
            except ConjugationTableError as e:
                raise type(e)(f"{path}:{line_no}: {e}") from e

    logger.info(f"Loaded {len(rules)} conjugation rules from {path}")
    return tuple(rules)


# ============================================================================
# Resolving
# ============================================================================

def resolve(
    index: DictionaryIndex,
    rules: Tuple[ConjugationRule, ...],
    candidate: str,
) -> List[MatchedDefinition]:
    """
    Find every way candidate could be an inflected form of an indexed entry.

    Each rule whose ending closes candidate is tried: the ending is swapped
    for the rule's base and the result is looked up. An entry matches when
    one of its senses carries the rule's part of speech. Results follow
    rule order, then index order.

    Example:
        >>> [(d.entry.kanji, d.conjugation.name) for d in resolve(index, rules, "食べた")]
        [(('食べる',), 'Past form')]
    """
    matches: List[MatchedDefinition] = []

    for rule in rules:
        if not candidate.endswith(rule.ending):
            continue

        probe = candidate[:len(candidate) - len(rule.ending)] + rule.base
        for entry in index.lookup(probe):
            if entry.has_pos(rule.pos):
                matches.append(MatchedDefinition(entry=entry, conjugation=rule))

    return matches
