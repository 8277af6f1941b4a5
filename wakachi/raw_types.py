"""
Lightweight data structures for the segmentation engine.

Lexicon entries come from the JMdict loader (see wakachi.lexicon) and are
never mutated after loading. Words and sentences are created fresh for
every call to parse_sentence.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

# Expanded JMdict entity for the `prt` part of speech
PARTICLE_TAG = "particle"


class ConjugationTableError(ValueError):
    """Raised when a conjugation table row is malformed."""
    pass


class UnknownPartOfSpeechError(ConjugationTableError):
    """Raised when a conjugation rule names a part of speech the lexicon doesn't know."""
    pass


# =============================================================================
# Lexicon Entries
# =============================================================================

@dataclass(frozen=True, slots=True)
class Sense:
    """One meaning of a lexicon entry."""
    glossary: Tuple[str, ...] = ()
    pos: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return ", ".join(self.glossary)


@dataclass(frozen=True, slots=True)
class LexiconEntry:
    """
    One dictionary headword.

    Attributes:
        kanji: Kanji spellings, may be empty (e.g. "パン", "を")
        readings: Kana readings, at least one
        senses: Meanings, at least one
    """
    kanji: Tuple[str, ...]
    readings: Tuple[str, ...]
    senses: Tuple[Sense, ...]

    def __post_init__(self):
        if not self.readings:
            raise ValueError("lexicon entry needs at least one reading")
        if not self.senses:
            raise ValueError("lexicon entry needs at least one sense")

    @property
    def is_particle(self) -> bool:
        """True if any sense is tagged as a particle."""
        return self.has_pos(PARTICLE_TAG)

    def has_pos(self, tag: str) -> bool:
        """Check whether any sense carries the given part-of-speech tag."""
        return any(tag in sense.pos for sense in self.senses)

    def __str__(self) -> str:
        first_gloss = self.senses[0].glossary[0] if self.senses[0].glossary else ""
        return f"{list(self.kanji)} {list(self.readings)} {first_gloss}"

    def detailed(self) -> str:
        """Multi-line description with every sense numbered."""
        lines = []
        if self.kanji:
            lines.append(", ".join(self.kanji))
        lines.append(", ".join(self.readings))
        for i, sense in enumerate(self.senses, start=1):
            lines.append(f"{i}. {sense}")
        return "\n".join(lines) + "\n"


# =============================================================================
# Conjugation Rules
# =============================================================================

@dataclass(frozen=True, slots=True)
class ConjugationRule:
    """
    A single suffix substitution undoing one inflection.

    Attributes:
        ending: Inflected suffix as it appears in text (e.g. "た")
        base: Suffix restoring the dictionary form (e.g. "る"), may be empty
        pos: Part-of-speech tag the base entry must carry
        name: Display label (e.g. "Past form")
    """
    ending: str
    base: str
    pos: str
    name: str

    def __post_init__(self):
        if not self.ending:
            raise ConjugationTableError(f"conjugation rule {self.name!r} has an empty ending")


# =============================================================================
# Segmentation Output
# =============================================================================

@dataclass(frozen=True, slots=True)
class MatchedDefinition:
    """A lexicon entry matched for a word, plus the rule undone to reach it."""
    entry: LexiconEntry
    conjugation: Optional[ConjugationRule] = None

    @property
    def is_conjugated(self) -> bool:
        return self.conjugation is not None


@dataclass(frozen=True, slots=True)
class Word:
    """
    One output token.

    An empty definitions tuple means no dictionary match was found.
    """
    original: str
    definitions: Tuple[MatchedDefinition, ...] = ()

    @property
    def is_match(self) -> bool:
        return bool(self.definitions)

    def __repr__(self) -> str:
        return f"Word({self.original!r}, definitions={len(self.definitions)})"


@dataclass(frozen=True, slots=True)
class Sentence:
    """Ordered, gapless sequence of words covering an input string."""
    words: Tuple[Word, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Word]:
        return iter(self.words)

    def __len__(self) -> int:
        return len(self.words)

    def __getitem__(self, i: int) -> Word:
        return self.words[i]

    @property
    def text(self) -> str:
        """The input the sentence was parsed from."""
        return "".join(word.original for word in self.words)
