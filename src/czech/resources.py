"""Load Hunspell .aff/.dic files from disk into a StemmerContext."""

import logging
import re
from pathlib import Path
from typing import Any, NamedTuple, Union

from spylls.hunspell import readers
from spylls.hunspell.data.aff import Aff
from spylls.hunspell.readers import FileReader

from .dictionary import DictionaryIndex, check_entry_count, dictionary_from_dic
from .errors import MalformedDictionaryData, MalformedRuleData
from .rules import RuleTable, check_affix_blocks, rules_from_aff
from .stemmer import StemmerContext

logger = logging.getLogger(__name__)

# What spylls raises on data it cannot read (unknown SET codec, bad regexp in a condition, ...)
_READ_ERRORS = (ValueError, IndexError, KeyError, LookupError, re.error)


class AffixData(NamedTuple):
    """Affix file as read by spylls, plus the rule table built from it"""
    aff: Aff
    context: Any  # spylls reader context: encoding, flag format, AF aliases
    rules: RuleTable


def read_affix_data(path: Union[str, Path]) -> AffixData:
    """
    Read an affix file with spylls, honouring its SET encoding.

    Raises:
        FileNotFoundError: the file does not exist
        MalformedRuleData: the file cannot be read into well-formed rules
    """
    block_order = check_affix_blocks(Path(path).read_bytes())
    try:
        aff, context = readers.read_aff(FileReader(str(path)))
    except _READ_ERRORS as e:
        raise MalformedRuleData(f"Cannot read affix file {path}: {e}") from e
    return AffixData(aff, context, rules_from_aff(aff, block_order))


def read_rules(path: Union[str, Path]) -> RuleTable:
    """Read an affix file into a RuleTable"""
    return read_affix_data(path).rules


def read_dictionary(path: Union[str, Path], affix_data: AffixData) -> DictionaryIndex:
    """Read a dictionary file in the encoding and flag format of its affix file"""
    check_entry_count(Path(path).read_bytes())
    try:
        dic = readers.read_dic(
            FileReader(str(path), encoding=affix_data.context.encoding),
            aff=affix_data.aff,
            context=affix_data.context,
        )
    except _READ_ERRORS as e:
        raise MalformedDictionaryData(f"Cannot read dictionary file {path}: {e}") from e
    return dictionary_from_dic(dic, affix_data.rules)


def load_context(aff_path: Union[str, Path], dic_path: Union[str, Path]) -> StemmerContext:
    """
    Load language data for the stemmer.

    Args:
        aff_path: Hunspell affix file (e.g. cs_CZ.aff)
        dic_path: Hunspell dictionary file (e.g. cs_CZ.dic)

    Returns:
        StemmerContext ready to share between stemmers

    Raises:
        FileNotFoundError: a file does not exist
        MalformedRuleData: affix file cannot be parsed
        MalformedDictionaryData: dictionary file cannot be parsed
    """
    affix_data = read_affix_data(aff_path)
    rules = affix_data.rules
    dictionary = read_dictionary(dic_path, affix_data)
    logger.info(
        f"Loaded Czech language data ({rules.encoding}): {len(rules)} affix rules ({len(rules.flags)} flags), "
        f"{len(dictionary)} dictionary entries"
    )
    return StemmerContext(rules, dictionary)
