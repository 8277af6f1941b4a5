"""
Tokenizer module for wakachi.

Greedy longest match with backtracking. At each position the whole span up
to the next delimiter is tried first; on a miss the span is shortened by
one character at a time. A single character that still doesn't match is
emitted on its own, which guarantees progress on unknown text.

Offsets are code point offsets into the str, so spans never split a
character.
"""

from typing import List, Tuple

from wakachi.characters import is_delimiter
from wakachi.conjugations import resolve
from wakachi.dictionary import DictionaryIndex
from wakachi.raw_types import ConjugationRule, MatchedDefinition, Sentence, Word


def find_definitions(
    index: DictionaryIndex,
    rules: Tuple[ConjugationRule, ...],
    candidate: str,
) -> List[MatchedDefinition]:
    """Direct index matches first, then matches through a conjugation rule."""
    definitions = [MatchedDefinition(entry=entry) for entry in index.lookup(candidate)]
    definitions.extend(resolve(index, rules, candidate))
    return definitions


def find_window_end(text: str, start: int) -> int:
    """Offset of the next delimiter at or after start, or len(text)."""
    for i in range(start, len(text)):
        if is_delimiter(text[i]):
            return i
    return len(text)


def parse_sentence(
    index: DictionaryIndex,
    rules: Tuple[ConjugationRule, ...],
    text: str,
) -> Sentence:
    """
    Segment text into a Sentence.

    Args:
        index: Dictionary index to match against
        rules: Conjugation table
        text: Raw text, may be empty

    Returns:
        Sentence whose words concatenate back to text

    Example:
        >>> [w.original for w in parse_sentence(index, rules, "パンを食べた。")]
        ['パン', 'を', '食べた', '。']
    """
    words: List[Word] = []
    position = 0
    length = len(text)

    while position < length:
        # Runs of delimiters become one unmatched word
        if is_delimiter(text[position]):
            end = position + 1
            while end < length and is_delimiter(text[end]):
                end += 1
            words.append(Word(original=text[position:end]))
            position = end
            continue

        end = find_window_end(text, position)
        while True:
            candidate = text[position:end]
            definitions = find_definitions(index, rules, candidate)
            if definitions or end - position == 1:
                words.append(Word(original=candidate, definitions=tuple(definitions)))
                position = end
                break
            end -= 1

    return Sentence(words=tuple(words))
