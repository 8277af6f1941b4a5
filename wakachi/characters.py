"""
Character helpers: kana script conversion and sentence delimiters.
"""

# Characters that end a match window. They are never looked up and are
# grouped into their own words.
DELIMITERS = frozenset(['。', '、', '！', '？', '!', '?', '「', '」', '『', '』'])

# Offset between a katakana code point and its hiragana counterpart
KANA_OFFSET = 0x60

HIRAGANA_FIRST, HIRAGANA_LAST = 'ぁ', 'ゖ'
KATAKANA_FIRST, KATAKANA_LAST = 'ァ', 'ヶ'


def is_delimiter(char: str) -> bool:
    return char in DELIMITERS


def _kata_to_hira(char: str) -> str:
    if KATAKANA_FIRST <= char <= KATAKANA_LAST:
        return chr(ord(char) - KANA_OFFSET)
    return char


def _hira_to_kata(char: str) -> str:
    if HIRAGANA_FIRST <= char <= HIRAGANA_LAST:
        return chr(ord(char) + KANA_OFFSET)
    return char


def as_hiragana(text: str) -> str:
    """
    Convert katakana to hiragana.

    Characters outside the katakana block (including the long vowel mark ー)
    are returned unchanged.

    Example:
        >>> as_hiragana("パンを")
        'ぱんを'
    """
    return "".join(_kata_to_hira(char) for char in text)


def as_katakana(text: str) -> str:
    """Convert hiragana to katakana, leaving everything else unchanged."""
    return "".join(_hira_to_kata(char) for char in text)


def is_hiragana(text: str) -> bool:
    """Check if text is non-empty and entirely hiragana."""
    return bool(text) and all(HIRAGANA_FIRST <= char <= HIRAGANA_LAST for char in text)


def is_katakana(text: str) -> bool:
    """Check if text is non-empty and entirely katakana (ー counts as katakana)."""
    return bool(text) and all(
        KATAKANA_FIRST <= char <= KATAKANA_LAST or char == 'ー' for char in text
    )


def is_kana(text: str) -> bool:
    """Check if text is non-empty and made only of hiragana and katakana."""
    return bool(text) and all(is_hiragana(char) or is_katakana(char) for char in text)
