"""
Czech stemmer backed by Hunspell affix rules and dictionary.

Reduces inflected forms to the dictionary base form so that search queries
match across inflections:
- "dělati" → "dělat"
- "hradem" → "hrad"
- "nejkrásnější" → "krásný"

Words that cannot be stemmed are returned unchanged: indexing must never
lose a token.

Language data is loaded once into a StemmerContext and shared by reference.
Nothing here mutates it, so a Stemmer can be called from any number of
threads.
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache

from .dictionary import DictionaryIndex
from .engine import AffixEngine, StemResult
from .rules import RuleTable

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 10000


@dataclass(frozen=True)
class StemmerContext:
    """Immutable language data shared by every stemming call"""
    rules: RuleTable
    dictionary: DictionaryIndex
    engine: AffixEngine = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "engine", AffixEngine(self.rules, self.dictionary))


class Stemmer:
    """
    Single-word-in, single-word-out stemmer used as a pipeline stage.

    Args:
        context: Loaded rules and dictionary
        cache_size: Size of the word -> result LRU cache (0 disables it)
        fold_case: Retry capitalised / upper-case words in lower case
            when the original form has no stem

    Example:
        >>> stemmer = Stemmer(load_context("cs_CZ.aff", "cs_CZ.dic"))
        >>> stemmer("dělati")
        'dělat'
        >>> stemmer("xyzzy")
        'xyzzy'
    """

    def __init__(self, context: StemmerContext, cache_size: int = DEFAULT_CACHE_SIZE, fold_case: bool = False):
        self.context = context
        self.fold_case = fold_case
        self.cache_size = cache_size

        # lru_cache is internally locked, safe to share between workers
        if cache_size > 0:
            self._analyze = lru_cache(maxsize=cache_size)(self._analyze_uncached)
        else:
            self._analyze = self._analyze_uncached

    def analyze(self, word: str) -> StemResult:
        """Stem `word`, telling a validated stem apart from the fallback"""
        return self._analyze(word)

    def stem(self, word: str) -> str:
        """Stem of `word`, or `word` itself when no stem validates"""
        return self._analyze(word).text

    __call__ = stem

    def cache_info(self):
        """LRU statistics (hits, misses, maxsize, currsize), None without cache"""
        if self.cache_size > 0:
            return self._analyze.cache_info()
        return None

    def _analyze_uncached(self, word: str) -> StemResult:
        engine = self.context.engine
        result = engine.analyze(word)

        if not result.stemmed and self.fold_case:
            lowered = word.lower()
            if lowered != word:
                folded = engine.analyze(lowered)
                if folded.stemmed:
                    result = StemResult(word, folded.stem)

        if logger.isEnabledFor(logging.DEBUG):
            if result.stemmed:
                logger.debug(f"{word} -> {result.text} ({' '.join(result.stem.flags) or 'dictionary'})")
            else:
                logger.debug(f"NOT STEMMED {word}")

        return result

    def __repr__(self) -> str:
        return f"Stemmer(rules={len(self.context.rules)}, dictionary={len(self.context.dictionary)}, cache_size={self.cache_size})"
