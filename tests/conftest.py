"""
Shared fixtures: a toy index and a small JMdict snippet.
"""

from pathlib import Path

import pytest

from wakachi import dictionary as dictionary_module
from wakachi.dictionary import Dictionary, build_index
from wakachi.raw_types import ConjugationRule, LexiconEntry, Sense

DATA_DIR = Path(__file__).parent / "data"
JMDICT_SNIPPET = DATA_DIR / "JMdict_e-snippet.xml"

NOUN = "noun (common) (futsuumeishi)"
PARTICLE = "particle"
ICHIDAN = "Ichidan verb"

# Expansions JMdict declares for every tag the bundled conjugation table uses
BUNDLED_TABLE_ENTITIES = {
    "adj-i": "adjective (keiyoushi)",
    "v1": "Ichidan verb",
    "v5b": "Godan verb with 'bu' ending",
    "v5g": "Godan verb with 'gu' ending",
    "v5k": "Godan verb with 'ku' ending",
    "v5k-s": "Godan verb - Iku/Yuku special class",
    "v5m": "Godan verb with 'mu' ending",
    "v5n": "Godan verb with 'nu' ending",
    "v5r": "Godan verb with 'ru' ending",
    "v5r-i": "Godan verb with 'ru' ending (irregular verb)",
    "v5s": "Godan verb with 'su' ending",
    "v5t": "Godan verb with 'tsu' ending",
    "v5u": "Godan verb with 'u' ending",
    "vk": "Kuru verb - special class",
    "vs": "noun or participle which takes the aux. verb suru",
    "vs-i": "suru verb - included",
}


def make_entry(kanji=(), readings=(), glosses=("gloss",), pos=()):
    """Helper: single-sense LexiconEntry."""
    return LexiconEntry(
        kanji=tuple(kanji),
        readings=tuple(readings),
        senses=(Sense(glossary=tuple(glosses), pos=tuple(pos)),),
    )


@pytest.fixture
def bread():
    return make_entry(readings=["パン"], glosses=["bread"], pos=[NOUN])


@pytest.fixture
def wo():
    return make_entry(readings=["を"], glosses=["indicates direct object of action"], pos=[PARTICLE])


@pytest.fixture
def taberu():
    return make_entry(kanji=["食べる"], readings=["たべる"], glosses=["to eat"], pos=[ICHIDAN])


@pytest.fixture
def past_form():
    return ConjugationRule(ending="た", base="る", pos=ICHIDAN, name="Past form")


@pytest.fixture
def toy_entries(bread, wo, taberu):
    return [bread, wo, taberu]


@pytest.fixture
def toy_index(toy_entries):
    return build_index(toy_entries)


@pytest.fixture
def toy_rules(past_form):
    return (past_form,)


@pytest.fixture
def toy_dictionary(toy_index, toy_rules):
    return Dictionary(index=toy_index, rules=toy_rules)


@pytest.fixture(autouse=True)
def fresh_dictionary_cache():
    """Make sure no test sees a dictionary cached by another."""
    dictionary_module.unload_dictionary()
    yield
    dictionary_module.unload_dictionary()
