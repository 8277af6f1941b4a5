"""
Dictionary index for wakachi.

The index maps every surface form (kanji spelling or kana reading) to the
ordered list of lexicon entries that can produce it. It is built once from
the full entry list and stored as a marisa_trie.RecordTrie, which has no
mutation API, so any number of callers can share it without locking.

Priority order under a shared key is fixed at build time:
- kanji keys keep encounter order
- reading keys put kana-only entries (and, by default, particles) first,
  so short grammatical readings outrank compounds spelled the same in kana
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import marisa_trie

from wakachi.raw_types import ConjugationRule, LexiconEntry

logger = logging.getLogger(__name__)

# ============================================================================
# Binary Record Schema
# ============================================================================
# Each record stores:
#   - rank: uint32 - position of the entry under this key
#   - entry_id: uint32 - index into DictionaryIndex.entries
#
# marisa_trie does not keep insertion order for records sharing a key, so
# lookups sort on rank.

RECORD_FORMAT = "<II"


class PrependPolicy(Enum):
    """When an entry is put ahead of earlier entries under a reading key."""
    KANA_ONLY = "kana-only"
    KANA_OR_PARTICLE = "kana-or-particle"

    def should_prepend(self, entry: LexiconEntry) -> bool:
        if not entry.kanji:
            return True
        return self is PrependPolicy.KANA_OR_PARTICLE and entry.is_particle


class DictionaryIndex:
    """
    Read-only surface form index.

    Use build_index() to create one.
    """

    __slots__ = ('_trie', '_entries', '_size')

    def __init__(self, trie: marisa_trie.RecordTrie, entries: Tuple[LexiconEntry, ...], size: int):
        self._trie = trie
        self._entries = entries
        self._size = size

    @property
    def entries(self) -> Tuple[LexiconEntry, ...]:
        return self._entries

    def lookup(self, surface: str) -> Tuple[LexiconEntry, ...]:
        """
        Look up a surface form.

        Args:
            surface: The text to look up

        Returns:
            Matching entries in priority order (empty if absent)
        """
        try:
            records = self._trie.get(surface)
        except UnicodeEncodeError:
            # Lone surrogates can't be stored as keys, so they never match
            return ()

        if not records:
            return ()

        return tuple(self._entries[entry_id] for _, entry_id in sorted(records))

    def __contains__(self, surface: str) -> bool:
        try:
            return surface in self._trie
        except UnicodeEncodeError:
            return False

    def __len__(self) -> int:
        """Number of distinct surface forms."""
        return self._size

    def __repr__(self) -> str:
        return f"DictionaryIndex({len(self._entries)} entries)"


def build_index(
    entries: Iterable[LexiconEntry],
    policy: PrependPolicy = PrependPolicy.KANA_OR_PARTICLE,
) -> DictionaryIndex:
    """
    Build the surface form index.

    Args:
        entries: Lexicon entries, in the order they appear in the lexicon
        policy: Which entries get prepended under a shared reading

    Returns:
        The immutable DictionaryIndex
    """
    entries = tuple(entries)
    buckets: Dict[str, List[int]] = {}

    for entry_id, entry in enumerate(entries):
        for kanji in entry.kanji:
            bucket = buckets.setdefault(kanji, [])
            if entry_id not in bucket:
                bucket.append(entry_id)

        prepend = policy.should_prepend(entry)
        for reading in entry.readings:
            bucket = buckets.setdefault(reading, [])
            if entry_id in bucket:
                continue
            if prepend:
                bucket.insert(0, entry_id)
            else:
                bucket.append(entry_id)

    def generate_items():
        for surface, bucket in buckets.items():
            for rank, entry_id in enumerate(bucket):
                yield (surface, (rank, entry_id))

    trie = marisa_trie.RecordTrie(RECORD_FORMAT, generate_items())
    logger.info(f"Indexed {len(entries)} entries under {len(buckets)} surface forms")

    return DictionaryIndex(trie, entries, len(buckets))


# ============================================================================
# Loaded Dictionary
# ============================================================================

@dataclass(frozen=True, slots=True)
class Dictionary:
    """An index together with the conjugation table it is used with."""
    index: DictionaryIndex
    rules: Tuple[ConjugationRule, ...]

    def lookup(self, surface: str) -> Tuple[LexiconEntry, ...]:
        return self.index.lookup(surface)

    def parse(self, text: str):
        """Segment text into a Sentence."""
        from wakachi.tokenizer import parse_sentence
        return parse_sentence(self.index, self.rules, text)


# Module-level singleton, with the (jmdict_path, conjugations_path, policy)
# it was built from
_DICTIONARY: Optional[Dictionary] = None
_DICTIONARY_CONFIG: Optional[Tuple[Path, Path, PrependPolicy]] = None
_LOAD_LOCK = threading.Lock()


def is_dictionary_loaded() -> bool:
    """Check if dictionary is loaded."""
    return _DICTIONARY is not None


def _matches_cached(
    jmdict_path: Optional[Path],
    conjugations_path: Optional[Path],
    policy: Optional[PrependPolicy],
) -> bool:
    """Whether the cached dictionary satisfies the requested configuration.

    Arguments left as None accept whatever the cache was built with.
    """
    if _DICTIONARY is None:
        return False
    if jmdict_path is None and conjugations_path is None and policy is None:
        return True
    if _DICTIONARY_CONFIG is None:
        return False

    cached_jmdict, cached_table, cached_policy = _DICTIONARY_CONFIG
    return (
        (jmdict_path is None or Path(jmdict_path).resolve() == cached_jmdict)
        and (conjugations_path is None or Path(conjugations_path).resolve() == cached_table)
        and (policy is None or policy == cached_policy)
    )


def load_dictionary(
    jmdict_path: Optional[Path] = None,
    conjugations_path: Optional[Path] = None,
    policy: Optional[PrependPolicy] = None,
) -> Dictionary:
    """
    Load JMdict and the conjugation table, and build the index.

    The result is cached. A later call returns the cached Dictionary unless
    it explicitly asks for a different file or policy, in which case the
    dictionary is rebuilt and replaces the cached one. If the rebuild fails
    the previous dictionary stays cached.

    Args:
        jmdict_path: Path to the JMdict XML file. Uses settings if not specified.
        conjugations_path: Path to the conjugation table. Uses settings if not specified.
        policy: Prepend policy. Uses settings if not specified.

    Raises:
        FileNotFoundError: If the JMdict file doesn't exist
        UnknownPartOfSpeechError: If a conjugation rule names an unknown tag
    """
    global _DICTIONARY, _DICTIONARY_CONFIG

    with _LOAD_LOCK:
        if _matches_cached(jmdict_path, conjugations_path, policy):
            return _DICTIONARY

        from wakachi import settings
        from wakachi.conjugations import load_conjugation_table
        from wakachi.lexicon import read_jmdict

        if jmdict_path is None:
            jmdict_path = settings.JMDICT_PATH
        if conjugations_path is None:
            conjugations_path = settings.CONJUGATIONS_PATH
        if policy is None:
            policy = PrependPolicy(settings.PREPEND_POLICY)

        if _DICTIONARY is not None:
            logger.info(f"Rebuilding dictionary for {jmdict_path} ({policy.value})")

        jmdict = read_jmdict(jmdict_path)
        rules = load_conjugation_table(conjugations_path, jmdict.entities)
        index = build_index(jmdict.entries, policy)

        _DICTIONARY = Dictionary(index=index, rules=rules)
        _DICTIONARY_CONFIG = (Path(jmdict_path).resolve(), Path(conjugations_path).resolve(), policy)
        return _DICTIONARY


def unload_dictionary():
    """Drop the cached dictionary."""
    global _DICTIONARY, _DICTIONARY_CONFIG
    with _LOAD_LOCK:
        _DICTIONARY = None
        _DICTIONARY_CONFIG = None
