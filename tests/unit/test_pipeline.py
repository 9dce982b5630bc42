"""
Unit tests for tokenizer, trimmer, stop words and index/query pipelines.
"""

import pytest

from src.czech.index_builder import build_term_index
from src.czech.pipeline import Pipeline, build_index_pipeline, build_query_pipeline
from src.czech.stopwords import STOP_WORDS, generate_stop_word_filter, stop_word_filter
from src.czech.tokenizer import tokenize
from src.czech.trimmer import generate_trimmer, trim


class TestTokenizer:
    """Test splitting text into raw tokens"""

    def test_basic_tokenization(self):
        assert tokenize("Hrad stojí na kopci") == ["hrad", "stojí", "na", "kopci"]

    def test_lowercase_conversion(self):
        """Czech capitals are lowercased too"""
        assert tokenize("ŽENY Řeší ČÁST") == ["ženy", "řeší", "část"]

    def test_hyphens_split(self):
        assert tokenize("česko-slovenský") == ["česko", "slovenský"]

    def test_punctuation_kept(self):
        """Trimming is a pipeline stage, not the tokenizer's job"""
        assert tokenize("(hrady), zámky!") == ["(hrady),", "zámky!"]

    def test_empty_string(self):
        assert tokenize("") == []
        assert tokenize("   ") == []
        assert tokenize("\n\t") == []


class TestTrimmer:
    """Test non-word character trimming"""

    def test_punctuation(self):
        assert trim("(hrady),") == "hrady"
        assert trim("„zámky“") == "zámky"

    def test_inner_characters_kept(self):
        assert trim("TCP/IP") == "TCP/IP"

    def test_czech_letters_are_word_characters(self):
        for word in ["ěščřžýáíéůú", "ĚŠČŘŽÝÁÍÉŮÚ", "ďťň"]:
            assert trim(word) == word

    def test_digits_are_trimmed(self):
        assert trim("2024") == ""
        assert trim("bm25") == "bm"

    def test_custom_characters(self):
        trimmer = generate_trimmer("a-z0-9")

        assert trimmer("(bm25)") == "bm25"


class TestStopWords:
    """Test stop-word filtering"""

    def test_common_words(self):
        for word in ["a", "je", "že", "protože", "protoze", "který", "být"]:
            assert word in STOP_WORDS
            assert stop_word_filter(word) is None

    def test_content_words_pass(self):
        assert stop_word_filter("hrad") == "hrad"

    def test_custom_list(self):
        custom = generate_stop_word_filter(["hrad"])

        assert custom("hrad") is None
        assert custom("a") == "a"


class TestPipeline:
    """Test pipeline composition"""

    def test_stages_run_in_order(self):
        pipeline = Pipeline(str.strip, str.upper)

        assert pipeline.run([" a ", "b"]) == ["A", "B"]

    def test_none_and_empty_drop_token(self):
        pipeline = Pipeline(lambda t: None if t == "x" else t, lambda t: "" if t == "y" else t)

        assert pipeline.run(["x", "y", "z"]) == ["z"]

    def test_dropped_token_skips_later_stages(self):
        seen = []

        def record(token):
            seen.append(token)
            return token

        Pipeline(stop_word_filter, record).run(["a", "hrad"])

        assert seen == ["hrad"]

    def test_add(self):
        pipeline = Pipeline(str.strip).add(str.upper)

        assert len(pipeline) == 2
        assert pipeline.run([" a "]) == ["A"]

    def test_empty_pipeline_is_identity(self):
        assert Pipeline().run(["a", "b"]) == ["a", "b"]


class TestCzechPipelines:
    """Index and query pipelines over the fixture data"""

    def test_index_pipeline_stages(self, stemmer):
        pipeline = build_index_pipeline(stemmer)

        assert list(pipeline) == [trim, stop_word_filter, stemmer]

    def test_index_pipeline(self, stemmer):
        pipeline = build_index_pipeline(stemmer)

        tokens = pipeline.run_string("Hrady a zámky, které jsou nejkrásnější!")

        assert tokens == ["hrad", "zámek", "krásný"]

    def test_numbers_dropped(self, stemmer):
        pipeline = build_index_pipeline(stemmer)

        assert pipeline.run_string("hrad 1348") == ["hrad"]

    def test_query_pipeline_stems_only(self, stemmer):
        pipeline = build_query_pipeline(stemmer)

        assert list(pipeline) == [stemmer]
        assert pipeline.run_string("hradech ženou") == ["hrad", "žena"]

    @pytest.mark.parametrize("word", ["hradem", "zámky", "ženě", "nejkrásnější", "dělati", "xyzzy"])
    def test_index_and_query_agree(self, stemmer, word):
        """A query term matches the indexed form of the same word"""
        indexed = build_index_pipeline(stemmer).run_string(word)
        queried = build_query_pipeline(stemmer).run_string(word)

        assert indexed == queried


class TestBuildTermIndex:
    """Test term frequency aggregation"""

    def test_inflections_aggregate(self, stemmer):
        index = build_term_index(["Hrady a zámky", "O hradech"], build_index_pipeline(stemmer))

        assert index == {"term_frequencies": {"hrad": 2, "zámek": 1}}

    def test_empty_input(self, stemmer):
        assert build_term_index([], build_index_pipeline(stemmer)) == {"term_frequencies": {}}
