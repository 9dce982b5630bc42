"""
Dictionary index of base word forms (Hunspell .dic format).

Format:
    3                 <- approximate entry count
    dělat/A
    hrad/HS  po:noun  <- morphological fields are ignored

Entries are read by spylls (flag formats, AF aliases, morphology); this
module keeps only what the stemmer needs: base form -> licensed flags.

Lookups are exact and case-sensitive; callers fold case before asking.
"""

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional

from spylls.hunspell.data.dic import Dic

from .errors import MalformedDictionaryData
from .rules import RuleTable

logger = logging.getLogger(__name__)

_NO_FLAGS: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class DictionaryEntry:
    """Known base form and the affix flags licensed for it"""
    base_form: str
    flags: FrozenSet[str] = _NO_FLAGS


class DictionaryIndex:
    """Exact-match hash index of base forms -> flags. Immutable after construction."""

    def __init__(self, entries: Iterable[DictionaryEntry]):
        index: Dict[str, FrozenSet[str]] = {}
        for entry in entries:
            # Homonyms ("hrad/H" and "hrad/S") share one set of flags
            existing = index.get(entry.base_form)
            index[entry.base_form] = entry.flags if existing is None else existing | entry.flags
        self._index = index

    def contains(self, word: str) -> bool:
        return word in self._index

    def flags_for(self, word: str) -> FrozenSet[str]:
        return self._index.get(word, _NO_FLAGS)

    def entry(self, word: str) -> Optional[DictionaryEntry]:
        flags = self._index.get(word)
        return None if flags is None else DictionaryEntry(word, flags)

    def __contains__(self, word: object) -> bool:
        return word in self._index

    def __iter__(self) -> Iterator[DictionaryEntry]:
        return (DictionaryEntry(word, flags) for word, flags in self._index.items())

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"DictionaryIndex(entries={len(self._index)})"


def check_entry_count(content: bytes) -> None:
    """
    Require the approximate entry count on the first non-empty line.

    Raises:
        MalformedDictionaryData: data is empty or starts with something else
    """
    for line_number, line in enumerate(content.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        if not line.isdigit():
            raise MalformedDictionaryData(
                f"Expected entry count, got {line.decode('utf-8', 'replace')!r}", line_number
            )
        return
    raise MalformedDictionaryData("Dictionary data is empty (missing entry count)")


def dictionary_from_dic(dic: Dic, rules: Optional[RuleTable] = None) -> DictionaryIndex:
    """
    Build the index from dictionary data read by spylls.

    Args:
        dic: spylls Dic
        rules: Rule table the dictionary belongs to; flags it does not
            define are dropped. Without it all flags are kept.

    Returns:
        DictionaryIndex
    """
    entries: List[DictionaryEntry] = []
    unknown_flags = set()

    for word in dic.words:
        flags = frozenset(word.flags)
        if rules is not None and flags:
            known = frozenset(flag for flag in flags if flag in rules)
            unknown_flags.update(flags - known)
            flags = known
        entries.append(DictionaryEntry(word.stem, flags))

    if unknown_flags:
        logger.debug(f"Ignored flags without affix rules: {' '.join(sorted(unknown_flags))}")

    index = DictionaryIndex(entries)
    logger.debug(f"Indexed {len(index)} dictionary entries")
    return index
