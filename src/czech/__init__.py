"""
Czech language support for search indexing.

Normalizes Czech tokens so that queries match across inflected forms.

Components:
- rules: Hunspell affix rules (.aff) in analysing direction
- dictionary: base forms and their affix flags (.dic)
- engine: candidate generation and dictionary validation
- stemmer: word -> stem facade with identity fallback and LRU cache
- resources: reading .aff/.dic files from disk with spylls
- trimmer, stopwords, tokenizer: token clean-up stages
- pipeline: explicit index/query pipelines sharing one stemmer
- index_builder: term-frequency aggregation over the index pipeline

Language data is loaded once (load_context) into an immutable
StemmerContext and shared by every stemmer and pipeline.
"""

from .errors import LanguageDataError, MalformedRuleData, MalformedDictionaryData
from .rules import AffixRule, Condition, RuleTable, StripType, check_affix_blocks, rules_from_aff
from .dictionary import DictionaryEntry, DictionaryIndex, check_entry_count, dictionary_from_dic
from .engine import MAX_AFFIX_DEPTH, AffixEngine, StemCandidate, StemResult
from .stemmer import Stemmer, StemmerContext
from .resources import AffixData, load_context, read_affix_data, read_dictionary, read_rules
from .trimmer import trim
from .stopwords import STOP_WORDS, stop_word_filter
from .tokenizer import tokenize
from .pipeline import Pipeline, build_index_pipeline, build_query_pipeline
from .index_builder import build_term_index

__all__ = [
    "LanguageDataError",
    "MalformedRuleData",
    "MalformedDictionaryData",
    "AffixRule",
    "Condition",
    "RuleTable",
    "StripType",
    "check_affix_blocks",
    "rules_from_aff",
    "DictionaryEntry",
    "DictionaryIndex",
    "check_entry_count",
    "dictionary_from_dic",
    "MAX_AFFIX_DEPTH",
    "AffixEngine",
    "StemCandidate",
    "StemResult",
    "Stemmer",
    "StemmerContext",
    "AffixData",
    "load_context",
    "read_affix_data",
    "read_rules",
    "read_dictionary",
    "trim",
    "STOP_WORDS",
    "stop_word_filter",
    "tokenize",
    "Pipeline",
    "build_index_pipeline",
    "build_query_pipeline",
    "build_term_index",
]
