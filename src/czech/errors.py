"""
Load-time errors for Czech language data.

Stemming itself never raises: an unknown word simply comes back unchanged.
These exceptions only surface while parsing affix rules or dictionary entries
at startup, so the host can refuse to start (or run without stemming).
"""

from typing import Optional


class LanguageDataError(ValueError):
    """Affix or dictionary data could not be parsed"""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MalformedRuleData(LanguageDataError):
    """Affix rule data (.aff) is not well-formed"""


class MalformedDictionaryData(LanguageDataError):
    """Dictionary data (.dic) is not well-formed"""
