"""Unit test configuration - language data fixtures"""

import os
import tempfile
from pathlib import Path

import pytest

# src.main configures file logging on import; keep test logs out of the repo
os.environ.setdefault("LOG_FILE", str(Path(tempfile.gettempdir()) / "czech-search-tests" / "czech-search.log"))

from src.czech.dictionary import DictionaryEntry, DictionaryIndex
from src.czech.resources import load_context
from src.czech.rules import RuleTable
from src.czech.stemmer import Stemmer, StemmerContext


@pytest.fixture(scope="session")
def mini_context(aff_path, dic_path) -> StemmerContext:
    """
    Language data loaded from tests/fixtures/cs.

    Loaded once per session: the context is immutable, so sharing it
    between tests is exactly how production code uses it.
    """
    return load_context(aff_path, dic_path)


@pytest.fixture
def stemmer(mini_context) -> Stemmer:
    """Fresh stemmer (empty cache) over the shared context"""
    return Stemmer(mini_context)


@pytest.fixture
def infinitive_context() -> StemmerContext:
    """
    Minimal hand-built data, same rule as mini.aff's "SFX A 0 i t":
        rule A: suffix, strip "i", add "", condition "ti", not combinable
        dictionary: dělat/A
    """
    rules = RuleTable.from_records([
        {"flag": "A", "type": "suffix", "strip": "i", "add": "", "condition": "ti", "combinable": False},
    ])
    dictionary = DictionaryIndex([DictionaryEntry("dělat", frozenset({"A"}))])
    return StemmerContext(rules, dictionary)
