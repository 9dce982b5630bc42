"""
Affix rule table built from Hunspell affix data (.aff).

Hunspell describes affixes in the generating direction: starting from a
dictionary base form, remove STRIP from the end, append AFFIX, provided the
base form matches CONDITION:

    SFX A N 1
    SFX A   0   i    t          # dělat -> dělati

The stemmer runs the other way, so every rule is stored in the analysing
direction (surface form -> base form):

    strip_text = "i"            # removed from the surface word
    add_text   = ""             # appended to what is left
    condition  = "ti"           # tested against the surface word

Reading the file itself (SET encodings, FLAG formats, AF aliases) is left to
spylls. This module checks the PFX/SFX block structure, which spylls does not
validate, and rewrites each base-form condition into the equivalent condition
on the surface word, so candidate generation never has to reconstruct base
forms before checking applicability.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from spylls.hunspell.data.aff import Aff, Affix

from .errors import MalformedRuleData

logger = logging.getLogger(__name__)

# Hunspell writes an empty strip/affix as "0"
EMPTY_AFFIX = "0"


class StripType(str, Enum):
    """Which end of the word a rule works on"""
    PREFIX = "PFX"
    SUFFIX = "SFX"

    @classmethod
    def parse(cls, value: str) -> "StripType":
        normalized = value.strip().upper()
        if normalized in ("PFX", "PREFIX"):
            return cls.PREFIX
        if normalized in ("SFX", "SUFFIX"):
            return cls.SUFFIX
        raise ValueError(f"Unknown strip type: {value!r}")


class _Atom(NamedTuple):
    """One position of a condition: any char (chars=None), a set, or a negated set"""
    chars: Optional[FrozenSet[str]]
    negated: bool = False

    def matches(self, char: str) -> bool:
        if self.chars is None:
            return True
        return (char in self.chars) != self.negated

    def __str__(self) -> str:
        if self.chars is None:
            return "."
        if len(self.chars) == 1 and not self.negated:
            return next(iter(self.chars))
        return "[" + ("^" if self.negated else "") + "".join(sorted(self.chars)) + "]"


def _literal(text: str) -> Tuple[_Atom, ...]:
    return tuple(_Atom(frozenset(char)) for char in text)


def _parse_atoms(pattern: str, line_number: Optional[int] = None) -> Tuple[_Atom, ...]:
    atoms = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                raise MalformedRuleData(f"Unterminated character class in condition {pattern!r}", line_number)
            body = pattern[i + 1:end]
            negated = body.startswith("^")
            if negated:
                body = body[1:]
            if not body:
                raise MalformedRuleData(f"Empty character class in condition {pattern!r}", line_number)
            atoms.append(_Atom(frozenset(body), negated))
            i = end + 1
        elif char == "]":
            raise MalformedRuleData(f"Unbalanced ']' in condition {pattern!r}", line_number)
        elif char == ".":
            atoms.append(_Atom(None))
            i += 1
        else:
            atoms.append(_Atom(frozenset(char)))
            i += 1
    return tuple(atoms)


@dataclass(frozen=True)
class Condition:
    """
    Applicability pattern anchored at one end of a word.

    Suffix conditions are matched against the last len(atoms) characters,
    prefix conditions against the first ones. An empty condition always
    matches.
    """
    atoms: Tuple[_Atom, ...]
    strip_type: StripType

    @classmethod
    def parse(cls, pattern: str, strip_type: StripType, line_number: Optional[int] = None) -> "Condition":
        return cls(_parse_atoms(pattern, line_number), strip_type)

    @property
    def pattern(self) -> str:
        return "".join(str(atom) for atom in self.atoms)

    def matches(self, word: str) -> bool:
        size = len(self.atoms)
        if len(word) < size:
            return False
        segment = word[len(word) - size:] if self.strip_type is StripType.SUFFIX else word[:size]
        return all(atom.matches(char) for atom, char in zip(self.atoms, segment))

    def accepts_text(self, text: str) -> bool:
        """True if the condition positions that overlap `text` (at the anchored end) accept it"""
        overlap = min(len(self.atoms), len(text))
        if self.strip_type is StripType.SUFFIX:
            pairs = zip(self.atoms[len(self.atoms) - overlap:], text[len(text) - overlap:])
        else:
            pairs = zip(self.atoms[:overlap], text[:overlap])
        return all(atom.matches(char) for atom, char in pairs)

    def __str__(self) -> str:
        return self.pattern or "."


@dataclass(frozen=True)
class AffixRule:
    """Single affix-stripping rule in the analysing direction (surface -> base)"""
    flag: str
    strip_type: StripType
    combinable: bool
    strip_text: str
    add_text: str
    condition: Condition

    def is_applicable(self, word: str) -> bool:
        # Something of the word must remain once strip_text is gone
        if len(word) <= len(self.strip_text):
            return False
        if self.strip_type is StripType.SUFFIX:
            if not word.endswith(self.strip_text):
                return False
        elif not word.startswith(self.strip_text):
            return False
        return self.condition.matches(word)

    def apply(self, word: str) -> str:
        """Strip and add. Caller must check is_applicable() first."""
        if self.strip_type is StripType.SUFFIX:
            return word[:len(word) - len(self.strip_text)] + self.add_text
        return self.add_text + word[len(self.strip_text):]

    def __str__(self) -> str:
        strip = self.strip_text or EMPTY_AFFIX
        add = self.add_text or EMPTY_AFFIX
        return f"{self.strip_type.value} {self.flag} -{strip} +{add} /{self.condition}"


def _parse_combinable(value: object, number: int) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.upper() in ("Y", "N"):
        return value.upper() == "Y"
    raise MalformedRuleData(f"Rule record {number}: combinable must be a bool or Y/N, got {value!r}")


class RuleTable:
    """
    Immutable collection of affix rules.

    Rules keep their declaration order, which decides the order in which
    stem candidates are generated. Lookups by strip text avoid scanning the
    whole table for every word.
    """

    def __init__(
        self,
        rules: Iterable[AffixRule],
        flag_format: str = "short",
        encoding: str = "ISO8859-1",
    ):
        self._rules: Tuple[AffixRule, ...] = tuple(rules)
        self.flag_format = flag_format
        self.encoding = encoding

        by_flag: Dict[str, List[AffixRule]] = {}
        suffixes: Dict[str, List[int]] = {}
        prefixes: Dict[str, List[int]] = {}
        for position, rule in enumerate(self._rules):
            by_flag.setdefault(rule.flag, []).append(rule)
            index = suffixes if rule.strip_type is StripType.SUFFIX else prefixes
            index.setdefault(rule.strip_text, []).append(position)

        self._by_flag = {flag: tuple(grouped) for flag, grouped in by_flag.items()}
        self._suffix_index = {text: tuple(positions) for text, positions in suffixes.items()}
        self._prefix_index = {text: tuple(positions) for text, positions in prefixes.items()}
        self._longest_strip = max((len(rule.strip_text) for rule in self._rules), default=0)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, object]], **kwargs) -> "RuleTable":
        """
        Build a table from structured records already in analysing direction.

        Each record needs: flag, type ("PFX"/"SFX" or "prefix"/"suffix"),
        strip, add, condition. `combinable` is a bool or "Y"/"N" and
        defaults to False.

        Example:
            >>> table = RuleTable.from_records([
            ...     {"flag": "A", "type": "suffix", "strip": "i", "add": "",
            ...      "condition": "ti", "combinable": False},
            ... ])
            >>> [str(rule) for rule in table.lookup("A")]
            ['SFX A -i +0 /ti']
        """
        rules = []
        for number, record in enumerate(records, start=1):
            missing = [key for key in ("flag", "type", "strip", "add", "condition") if key not in record]
            if missing:
                raise MalformedRuleData(f"Rule record {number} is missing fields: {', '.join(missing)}")
            try:
                strip_type = StripType.parse(str(record["type"]))
            except ValueError as e:
                raise MalformedRuleData(f"Rule record {number}: {e}") from e

            flag = str(record["flag"])
            if not flag:
                raise MalformedRuleData(f"Rule record {number} has an empty flag")

            rule = AffixRule(
                flag=flag,
                strip_type=strip_type,
                combinable=_parse_combinable(record.get("combinable", False), number),
                strip_text=str(record["strip"]),
                add_text=str(record["add"]),
                condition=Condition.parse(str(record["condition"]), strip_type),
            )
            if not rule.condition.accepts_text(rule.strip_text):
                raise MalformedRuleData(
                    f"Rule record {number}: strip text {rule.strip_text!r} can never satisfy condition {rule.condition}"
                )
            rules.append(rule)
        return cls(rules, **kwargs)

    def lookup(self, flag: str) -> Tuple[AffixRule, ...]:
        """All rules for a flag in declaration order (empty if unknown)"""
        return self._by_flag.get(flag, ())

    def matching(self, word: str) -> Iterator[AffixRule]:
        """Rules applicable to `word`, in declaration order"""
        positions: List[int] = []
        longest = min(len(word) - 1, self._longest_strip)
        for length in range(longest + 1):
            positions.extend(self._suffix_index.get(word[len(word) - length:], ()))
            positions.extend(self._prefix_index.get(word[:length], ()))

        for position in sorted(positions):
            rule = self._rules[position]
            if rule.is_applicable(word):
                yield rule

    @property
    def flags(self) -> FrozenSet[str]:
        return frozenset(self._by_flag)

    def __contains__(self, flag: object) -> bool:
        return flag in self._by_flag

    def __iter__(self) -> Iterator[AffixRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleTable(rules={len(self._rules)}, flags={len(self._by_flag)}, format={self.flag_format})"


@dataclass
class _Block:
    strip_type: StripType
    flag: bytes
    declared: int
    line_number: int
    seen: int = 0

    @property
    def remaining(self) -> int:
        return self.declared - self.seen

    def unfinished(self, line_number: int) -> MalformedRuleData:
        return MalformedRuleData(
            f"{self.strip_type.value} {self.flag.decode('utf-8', 'replace')} declares {self.declared} rules "
            f"but only {self.seen} follow",
            line_number,
        )


def _open_block(fields: List[bytes], line_number: int) -> _Block:
    if len(fields) < 4:
        raise MalformedRuleData(f"{fields[0].decode()} needs 3 fields, got {len(fields) - 1}", line_number)
    if fields[2].upper() not in (b"Y", b"N"):
        raise MalformedRuleData(f"Cross product must be Y or N, got {fields[2].decode('utf-8', 'replace')!r}", line_number)
    if not fields[3].isdigit():
        raise MalformedRuleData(f"Rule count must be a number, got {fields[3].decode('utf-8', 'replace')!r}", line_number)
    return _Block(StripType(fields[0].decode()), fields[1], int(fields[3]), line_number)


def check_affix_blocks(content: bytes) -> List[StripType]:
    """
    Validate the PFX/SFX block structure of raw .aff data.

    Every block header must be followed by exactly the number of rule lines
    it declares, each with strip, affix and condition. Works on bytes so the
    check does not depend on the SET encoding.

    Returns:
        Block types in file order (spylls keeps prefixes and suffixes in
        separate tables, this restores their interleaving)

    Raises:
        MalformedRuleData: malformed header, or block length not matching its count
    """
    order: List[StripType] = []
    block: Optional[_Block] = None

    for line_number, line in enumerate(content.splitlines(), start=1):
        fields = line.split()
        if not fields or fields[0].startswith(b"#"):
            continue

        if block is not None and block.remaining > 0:
            if fields[0] == block.strip_type.value.encode() and len(fields) > 1 and fields[1] == block.flag:
                if len(fields) < 5:
                    raise MalformedRuleData(
                        f"{block.strip_type.value} rule needs strip, affix and condition", line_number
                    )
                block.seen += 1
                continue
            raise block.unfinished(line_number)

        if fields[0] in (b"PFX", b"SFX"):
            block = _open_block(fields, line_number)
            order.append(block.strip_type)

    if block is not None and block.remaining > 0:
        raise block.unfinished(block.line_number)
    return order


def _surface_condition(base_condition: Condition, base_strip: str, affix: str) -> Condition:
    """
    Rewrite a condition on the base form into one on the surface form.

    The base form is stem + base_strip (suffix case); positions of the
    condition that fall on base_strip were already checked at load time, the
    rest fall on the stem, which is followed by the affix in the surface form.
    """
    atoms = base_condition.atoms
    overlap = min(len(atoms), len(base_strip))
    if base_condition.strip_type is StripType.SUFFIX:
        surface_atoms = atoms[:len(atoms) - overlap] + _literal(affix)
    else:
        surface_atoms = _literal(affix) + atoms[overlap:]
    return Condition(surface_atoms, base_condition.strip_type)


def _text(value: str) -> str:
    return "" if value == EMPTY_AFFIX else value


def _rule_from_affix(affix: Affix, strip_type: StripType) -> AffixRule:
    strip = _text(affix.strip)
    added = _text(affix.add)

    base_condition = Condition.parse(affix.condition, strip_type)
    if not base_condition.accepts_text(strip):
        raise MalformedRuleData(
            f"{strip_type.value} {affix.flag}: strip characters {strip!r} incompatible with condition {affix.condition!r}"
        )

    # Continuation flags (affix.flags) are not followed by the stemmer
    return AffixRule(
        flag=affix.flag,
        strip_type=strip_type,
        combinable=affix.crossproduct,
        strip_text=added,
        add_text=strip,
        condition=_surface_condition(base_condition, strip, added),
    )


def rules_from_aff(aff: Aff, block_order: Sequence[StripType] = ()) -> RuleTable:
    """
    Convert affix data read by spylls into a RuleTable.

    Args:
        aff: spylls Aff with PFX/SFX tables
        block_order: Block types in file order, from check_affix_blocks().
            Without it all prefix rules come before all suffix rules.

    Returns:
        RuleTable with rules in declaration order

    Raises:
        MalformedRuleData: a condition is malformed or contradicts its strip characters
    """
    tables = {
        StripType.PREFIX: iter(aff.PFX.values()),
        StripType.SUFFIX: iter(aff.SFX.values()),
    }
    groups = []
    for strip_type in block_order:
        affixes = next(tables[strip_type], None)
        if affixes is not None:
            groups.append((strip_type, affixes))
    for strip_type, remaining in tables.items():
        groups.extend((strip_type, affixes) for affixes in remaining)

    table = RuleTable(
        (_rule_from_affix(affix, strip_type) for strip_type, affixes in groups for affix in affixes),
        flag_format=aff.FLAG,
        encoding=aff.SET,
    )
    logger.debug(f"Converted {len(table)} affix rules for {len(table.flags)} flags ({table.flag_format} flags)")
    return table
