"""
Affix engine: generates stem candidates and validates them against the dictionary.

Candidate order (first licensed candidate wins, no scoring):
1. The word itself, if it is a dictionary entry
2. One rule applied, rules in declaration order
3. Two rules applied: a combinable rule, then a combinable rule of another
   flag on the result. Longer chains are never tried.

A candidate is licensed only if its text is a dictionary entry AND that entry
lists the flag of every rule used to derive it. The same base form reached
through a rule it is not flagged for is rejected.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .dictionary import DictionaryIndex
from .rules import AffixRule, RuleTable

# Maximum number of affix rules combined on one word
MAX_AFFIX_DEPTH = 2


@dataclass(frozen=True)
class StemCandidate:
    """Possible stem and the rules applied to reach it (empty = dictionary hit)"""
    text: str
    rules: Tuple[AffixRule, ...] = ()

    @property
    def flags(self) -> Tuple[str, ...]:
        return tuple(rule.flag for rule in self.rules)


@dataclass(frozen=True)
class StemResult:
    """Outcome of stemming one word; `stem` is None when nothing validated"""
    word: str
    stem: Optional[StemCandidate] = None

    @property
    def stemmed(self) -> bool:
        return self.stem is not None

    @property
    def text(self) -> str:
        return self.stem.text if self.stem is not None else self.word


class AffixEngine:
    """Stateless candidate search over an immutable rule table and dictionary"""

    def __init__(self, rules: RuleTable, dictionary: DictionaryIndex):
        self.rules = rules
        self.dictionary = dictionary

    def candidates(self, word: str) -> Iterator[StemCandidate]:
        """Unvalidated affix-derived candidates in search order"""
        frontier: List[StemCandidate] = [StemCandidate(word)]

        for depth in range(MAX_AFFIX_DEPTH):
            deeper: List[StemCandidate] = []
            for base in frontier:
                used_flags = base.flags
                for rule in self.rules.matching(base.text):
                    if depth and not (rule.combinable and rule.flag not in used_flags):
                        continue
                    candidate = StemCandidate(rule.apply(base.text), base.rules + (rule,))
                    yield candidate
                    if rule.combinable:
                        deeper.append(candidate)
            frontier = deeper

    def is_licensed(self, candidate: StemCandidate) -> bool:
        if not self.dictionary.contains(candidate.text):
            return False
        flags = self.dictionary.flags_for(candidate.text)
        return all(rule.flag in flags for rule in candidate.rules)

    def analyze(self, word: str) -> StemResult:
        """
        Find the stem of `word`.

        Never raises; an out-of-vocabulary word gives an unstemmed result.

        Examples:
            >>> engine.analyze("dělati").text      # SFX A: -ti, dělat/A
            'dělat'
            >>> engine.analyze("xyzzy").stemmed
            False
        """
        if self.dictionary.contains(word):
            return StemResult(word, StemCandidate(word))

        for candidate in self.candidates(word):
            if self.is_licensed(candidate):
                return StemResult(word, candidate)

        return StemResult(word)
