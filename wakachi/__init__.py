"""
wakachi: Japanese word segmentation with dictionary definitions

Splits unsegmented Japanese text into words and attaches JMdict entries to
each one, including entries reached by undoing a conjugation.

Basic Usage:
    import wakachi

    # Segment text with the default dictionary (JMdict + bundled rules)
    for word in wakachi.parse("パンを食べた"):
        for definition in word.definitions:
            print(word.original, definition.entry, definition.conjugation)

Engine Usage:
    index = wakachi.build_index(entries)
    sentence = wakachi.parse_sentence(index, rules, "パンを食べた")
"""

import time
from typing import Tuple

from wakachi.conjugations import load_conjugation_table, resolve
from wakachi.dictionary import (
    Dictionary,
    DictionaryIndex,
    PrependPolicy,
    build_index,
    load_dictionary,
)
from wakachi.raw_types import (
    ConjugationRule,
    ConjugationTableError,
    LexiconEntry,
    MatchedDefinition,
    Sense,
    Sentence,
    UnknownPartOfSpeechError,
    Word,
)
from wakachi.tokenizer import parse_sentence

__version__ = "0.1.0"


# =============================================================================
# Main API
# =============================================================================

def parse(text: str) -> Sentence:
    """
    Segment text using the default dictionary.

    The dictionary is loaded on first use (see wakachi.settings for paths).

    Args:
        text: Japanese text, may be empty

    Returns:
        Sentence whose words concatenate back to text

    Example:
        >>> [w.original for w in wakachi.parse("パンを食べた")]
        ['パン', 'を', '食べた']
    """
    return load_dictionary().parse(text)


def warm_up(verbose: bool = False) -> Tuple[float, dict]:
    """
    Pre-load the dictionary.

    Parsing JMdict takes several seconds, so servers call this at startup.

    Args:
        verbose: If True, print timing information

    Returns:
        Tuple of (total_time_seconds, timing_details_dict)
    """
    timings = {}
    total_start = time.perf_counter()

    if verbose:
        print("Loading wakachi dictionary...")

    t0 = time.perf_counter()
    dictionary = load_dictionary()
    timings['dictionary'] = (time.perf_counter() - t0) * 1000

    if verbose:
        print(f"  Dictionary:     {timings['dictionary']:>7.1f}ms "
              f"({len(dictionary.index):,} surface forms, {len(dictionary.rules)} rules)")

    total_time = time.perf_counter() - total_start
    timings['total'] = total_time * 1000

    if verbose:
        print(f"Total warm-up:    {timings['total']:>7.1f}ms")

    return total_time, timings


def get_version() -> str:
    """Get the library version."""
    return __version__


# =============================================================================
# Async API
# =============================================================================

# Thread pool for async operations
_executor = None
_executor_lock = None


def _get_executor():
    """Get or create the thread pool executor."""
    global _executor, _executor_lock
    import threading
    from concurrent.futures import ThreadPoolExecutor

    if _executor_lock is None:
        _executor_lock = threading.Lock()

    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="wakachi")

    return _executor


class AnalysisTimeoutError(Exception):
    """Raised when async parsing times out."""
    pass


async def parse_async(text: str, timeout: float = 30.0) -> Sentence:
    """
    Segment text in a worker thread.

    The index is read-only, so concurrent calls share it safely.

    Args:
        text: Japanese text
        timeout: Maximum time in seconds (default 30s)

    Raises:
        AnalysisTimeoutError: If parsing exceeds timeout
    """
    import asyncio

    loop = asyncio.get_running_loop()
    executor = _get_executor()

    try:
        future = loop.run_in_executor(executor, parse, text)
        return await asyncio.wait_for(future, timeout=timeout)
    except asyncio.TimeoutError:
        raise AnalysisTimeoutError(f"Parsing timed out after {timeout}s")


def shutdown():
    """
    Shutdown the thread pool executor.

    Call this when your application is shutting down to cleanly
    release resources.
    """
    global _executor
    if _executor is not None:
        _executor.shutdown(wait=True)
        _executor = None


# =============================================================================
# Module-level exports
# =============================================================================

__all__ = [
    # Data classes
    "Sense",
    "LexiconEntry",
    "ConjugationRule",
    "MatchedDefinition",
    "Word",
    "Sentence",
    "Dictionary",
    "DictionaryIndex",
    "PrependPolicy",
    # Engine
    "build_index",
    "parse_sentence",
    "resolve",
    "load_conjugation_table",
    "load_dictionary",
    # Sync API
    "parse",
    "warm_up",
    "get_version",
    # Async API
    "parse_async",
    "shutdown",
    # Exceptions
    "AnalysisTimeoutError",
    "ConjugationTableError",
    "UnknownPartOfSpeechError",
    # Version
    "__version__",
]
