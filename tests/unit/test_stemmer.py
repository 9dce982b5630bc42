"""
Unit tests for the Stemmer facade.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from src.czech.dictionary import DictionaryEntry, DictionaryIndex
from src.czech.rules import RuleTable
from src.czech.stemmer import Stemmer, StemmerContext

WORDS = [
    "dělati", "hradu", "hradem", "hrady", "zámky", "ženou", "krásnější",
    "nejkrásnější", "nedělat", "nedělati", "kopec", "xyzzy", "", "!",
]


class TestStem:
    """Test stem() behaviour"""

    def test_infinitive_example(self, infinitive_context):
        """Suffix -i after t on dělati, dělat/A in the dictionary"""
        stemmer = Stemmer(infinitive_context)

        assert stemmer.stem("dělati") == "dělat"
        assert stemmer.stem("xyzzy") == "xyzzy"

    def test_rule_stripping_too_much_falls_back(self):
        """Stripping -ti leaves "děla", which is not in the dictionary"""
        rules = RuleTable.from_records([
            {"flag": "A", "type": "suffix", "strip": "ti", "add": "", "condition": "ti"},
        ])
        dictionary = DictionaryIndex([DictionaryEntry("dělat", frozenset({"A"}))])
        stemmer = Stemmer(StemmerContext(rules, dictionary))

        result = stemmer.analyze("dělati")

        assert not result.stemmed
        assert stemmer.stem("dělati") == "dělati"

    def test_callable(self, stemmer):
        """The stemmer itself is a pipeline stage"""
        assert stemmer("hradem") == "hrad"

    def test_identity_fallback(self, stemmer):
        assert stemmer.stem("xyzzy") == "xyzzy"
        assert stemmer.stem("") == ""
        assert stemmer.stem("...") == "..."

    def test_dictionary_priority(self, stemmer, mini_context):
        """Every dictionary word stems to itself"""
        for entry in mini_context.dictionary:
            assert stemmer.stem(entry.base_form) == entry.base_form

    @pytest.mark.parametrize("word", WORDS)
    def test_idempotent(self, stemmer, word):
        once = stemmer.stem(word)

        assert stemmer.stem(once) == once

    def test_deterministic_across_instances(self, mini_context):
        first = Stemmer(mini_context)
        second = Stemmer(mini_context, cache_size=0)

        assert [first.stem(w) for w in WORDS] == [second.stem(w) for w in WORDS]


class TestAnalyze:
    """Test the stemmed / not stemmed signal"""

    def test_stemmed(self, stemmer):
        result = stemmer.analyze("hradem")

        assert result.stemmed
        assert result.word == "hradem"
        assert result.text == "hrad"

    def test_not_stemmed(self, stemmer):
        result = stemmer.analyze("xyzzy")

        assert not result.stemmed
        assert result.text == "xyzzy"


class TestCaseFolding:
    """Case is left to the caller unless fold_case is on"""

    def test_default_keeps_case(self, stemmer):
        """Not in the dictionary and no rule matches: returned unchanged"""
        assert stemmer.stem("Kopec") == "Kopec"
        assert stemmer.stem("Hradem") == "Hradem"

    def test_capitalised(self, mini_context):
        stemmer = Stemmer(mini_context, fold_case=True)

        result = stemmer.analyze("Hradem")

        assert result.stemmed
        assert result.word == "Hradem"
        assert result.text == "hrad"

    def test_upper_case(self, mini_context):
        stemmer = Stemmer(mini_context, fold_case=True)

        assert stemmer.stem("ZÁMKY") == "zámek"

    def test_unknown_capitalised_word_unchanged(self, mini_context):
        stemmer = Stemmer(mini_context, fold_case=True)

        assert stemmer.stem("Xyzzy") == "Xyzzy"


class TestCache:
    """Test the read-through LRU cache"""

    def test_repeated_word_hits_cache(self, stemmer):
        stemmer.stem("hradem")
        stemmer.stem("hradem")
        stemmer.stem("hradu")

        info = stemmer.cache_info()
        assert info.hits == 1
        assert info.misses == 2

    def test_cache_is_bounded(self, mini_context):
        stemmer = Stemmer(mini_context, cache_size=2)

        for word in ["hradu", "hradem", "hrady", "ženou"]:
            stemmer.stem(word)

        assert stemmer.cache_info().currsize == 2

    def test_cache_disabled(self, mini_context):
        stemmer = Stemmer(mini_context, cache_size=0)

        assert stemmer.stem("hradem") == "hrad"
        assert stemmer.cache_info() is None

    def test_cached_result_is_the_same(self, stemmer):
        assert stemmer.analyze("ženou") is stemmer.analyze("ženou")


class TestConcurrency:
    """Shared context, many worker threads"""

    def test_parallel_stemming(self, mini_context):
        stemmer = Stemmer(mini_context)
        expected = [Stemmer(mini_context, cache_size=0).stem(w) for w in WORDS]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: [stemmer.stem(w) for w in WORDS], range(32)))

        assert all(result == expected for result in results)


class TestLogging:
    """Decisions are logged at DEBUG only"""

    def test_decisions_logged(self, stemmer, caplog):
        with caplog.at_level(logging.DEBUG, logger="src.czech.stemmer"):
            stemmer.stem("hradem")
            stemmer.stem("xyzzy")

        assert "hradem -> hrad (H)" in caplog.text
        assert "NOT STEMMED xyzzy" in caplog.text

    def test_dictionary_hit_logged(self, stemmer, caplog):
        with caplog.at_level(logging.DEBUG, logger="src.czech.stemmer"):
            stemmer.stem("hrad")

        assert "hrad -> hrad (dictionary)" in caplog.text

    def test_silent_above_debug(self, stemmer, caplog):
        with caplog.at_level(logging.INFO, logger="src.czech.stemmer"):
            stemmer.stem("hradem")

        assert caplog.records == []
