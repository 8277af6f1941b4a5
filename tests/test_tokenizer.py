"""
Tests for tokenizer.py - greedy longest match segmentation.
"""

import pytest

from wakachi.characters import DELIMITERS
from wakachi.dictionary import build_index
from wakachi.raw_types import MatchedDefinition, Sentence, Word
from wakachi.tokenizer import find_definitions, find_window_end, parse_sentence

from conftest import NOUN, make_entry


def originals(sentence: Sentence):
    return [word.original for word in sentence]


class TestScenarios:
    """Toy index: パン, を, 食べる and the た -> る Ichidan rule."""

    def test_empty_input(self, toy_index, toy_rules):
        sentence = parse_sentence(toy_index, toy_rules, "")
        assert len(sentence) == 0
        assert sentence.text == ""

    def test_lone_delimiter(self, toy_index, toy_rules):
        sentence = parse_sentence(toy_index, toy_rules, "。")
        assert list(sentence) == [Word(original="。")]

    def test_dictionary_forms(self, toy_index, toy_rules, bread, wo, taberu):
        sentence = parse_sentence(toy_index, toy_rules, "パンを食べる")

        assert originals(sentence) == ["パン", "を", "食べる"]
        assert [w.definitions for w in sentence] == [
            (MatchedDefinition(bread),),
            (MatchedDefinition(wo),),
            (MatchedDefinition(taberu),),
        ]

    def test_conjugated_form(self, toy_index, toy_rules, taberu, past_form):
        sentence = parse_sentence(toy_index, toy_rules, "パンを食べた")

        assert originals(sentence) == ["パン", "を", "食べた"]
        assert sentence[2].definitions == (MatchedDefinition(taberu, past_form),)
        assert sentence[2].definitions[0].is_conjugated

    def test_unknown_latin(self, toy_index, toy_rules):
        sentence = parse_sentence(toy_index, toy_rules, "latin")

        assert originals(sentence) == ["l", "a", "t", "i", "n"]
        assert not any(word.is_match for word in sentence)


class TestLongestMatch:
    """Greedy match and shrinking."""

    def test_longest_entry_wins(self):
        short = make_entry(kanji=["日本"], readings=["にほん"], glosses=["Japan"], pos=[NOUN])
        long = make_entry(kanji=["日本語"], readings=["にほんご"], glosses=["Japanese"], pos=[NOUN])
        index = build_index([short, long])

        sentence = parse_sentence(index, (), "日本語")

        assert originals(sentence) == ["日本語"]
        assert sentence[0].definitions[0].entry is long

    def test_shrinks_one_character_at_a_time(self):
        short = make_entry(kanji=["日本"], readings=["にほん"], glosses=["Japan"], pos=[NOUN])
        index = build_index([short])

        assert originals(parse_sentence(index, (), "日本人")) == ["日本", "人"]

    def test_unmatched_character_between_matches(self, toy_index, toy_rules):
        sentence = parse_sentence(toy_index, toy_rules, "パンxを")

        assert originals(sentence) == ["パン", "x", "を"]
        assert [w.is_match for w in sentence] == [True, False, True]

    def test_direct_matches_before_conjugations(self, past_form, taberu):
        # A noun spelled like a conjugated form
        homograph = make_entry(kanji=["食べた"], readings=["たべた"], glosses=["homograph"], pos=[NOUN])
        index = build_index([taberu, homograph])

        sentence = parse_sentence(index, (past_form,), "食べた")

        assert sentence[0].definitions == (
            MatchedDefinition(homograph),
            MatchedDefinition(taberu, past_form),
        )

    def test_multiple_definitions_keep_index_order(self):
        topic = make_entry(readings=["は"], glosses=["topic marker"], pos=["particle"])
        feather = make_entry(kanji=["羽"], readings=["は"], glosses=["feather"], pos=[NOUN])
        index = build_index([feather, topic])

        sentence = parse_sentence(index, (), "は")

        assert [d.entry for d in sentence[0].definitions] == [topic, feather]


class TestDelimiters:
    """Delimiters bound match windows and form their own words."""

    def test_delimiter_run_is_one_word(self, toy_index, toy_rules):
        sentence = parse_sentence(toy_index, toy_rules, "パン。！？を")

        assert originals(sentence) == ["パン", "。！？", "を"]
        assert sentence[1].definitions == ()

    def test_quotes(self, toy_index, toy_rules):
        sentence = parse_sentence(toy_index, toy_rules, "「パン」を食べた。")

        assert originals(sentence) == ["「", "パン", "」", "を", "食べた", "。"]

    def test_match_never_spans_delimiter(self):
        across = make_entry(readings=["パン。パン"], glosses=["never matched"], pos=[NOUN])
        bread = make_entry(readings=["パン"], glosses=["bread"], pos=[NOUN])
        index = build_index([across, bread])

        assert originals(parse_sentence(index, (), "パン。パン")) == ["パン", "。", "パン"]

    def test_delimiters_are_never_looked_up(self):
        period = make_entry(readings=["。"], glosses=["full stop"], pos=[NOUN])
        index = build_index([period])

        sentence = parse_sentence(index, (), "。")

        assert sentence[0].definitions == ()

    def test_no_word_mixes_delimiters_and_text(self, toy_index, toy_rules):
        text = "「パンを食べた」！？latin、を。"
        for word in parse_sentence(toy_index, toy_rules, text):
            kinds = {char in DELIMITERS for char in word.original}
            assert len(kinds) == 1

    def test_find_window_end(self):
        assert find_window_end("パン。を", 0) == 2
        assert find_window_end("パン。を", 3) == 4
        assert find_window_end("", 0) == 0


class TestTotality:
    """Any str comes back as a lossless sentence."""

    @pytest.mark.parametrize("text", [
        "",
        "パンを食べた",
        "latin",
        "。。。",
        "パン\ud800を",
        "\udfff",
        "🍞を食べた",
        "パン\nを\t食べた ",
        "「」",
    ])
    def test_round_trip(self, toy_index, toy_rules, text):
        sentence = parse_sentence(toy_index, toy_rules, text)
        assert sentence.text == text
        assert all(word.original for word in sentence)

    def test_lone_surrogate_is_unmatched_word(self, toy_index, toy_rules):
        sentence = parse_sentence(toy_index, toy_rules, "パン\ud800を")

        assert originals(sentence) == ["パン", "\ud800", "を"]
        assert not sentence[1].is_match

    def test_astral_character_is_one_word(self, toy_index, toy_rules):
        sentence = parse_sentence(toy_index, toy_rules, "🍞を")
        assert originals(sentence) == ["🍞", "を"]

    def test_calls_do_not_share_output(self, toy_index, toy_rules):
        first = parse_sentence(toy_index, toy_rules, "パン")
        second = parse_sentence(toy_index, toy_rules, "パン")
        assert first == second
        assert first is not second


class TestFindDefinitions:

    def test_combines_direct_and_conjugated(self, toy_index, toy_rules, taberu, past_form):
        assert find_definitions(toy_index, toy_rules, "食べた") == [MatchedDefinition(taberu, past_form)]
        assert find_definitions(toy_index, toy_rules, "食べる") == [MatchedDefinition(taberu)]
        assert find_definitions(toy_index, toy_rules, "食べ") == []
