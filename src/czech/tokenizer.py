"""
Tokenizer for Czech text.

Tokenization:
1. Lowercase conversion
2. Split on whitespace and hyphens ("česko-slovenský" → "česko", "slovenský")
3. Return raw tokens

Punctuation is left attached to tokens; the trimmer stage of the index
pipeline removes it. Query terms go through the same tokenizer so both sides
see the same token boundaries.
"""

from typing import List

from nltk.tokenize import RegexpTokenizer

# Separators, not tokens: gaps=True splits on the pattern
_splitter = RegexpTokenizer(r"[\s\-]+", gaps=True)


def tokenize(text: str) -> List[str]:
    """
    Split text into lowercase tokens.

    Args:
        text: Input text

    Returns:
        List of lowercase tokens (may still carry punctuation)

    Examples:
        >>> tokenize("Hrad stojí na kopci.")
        ['hrad', 'stojí', 'na', 'kopci.']

        >>> tokenize("česko-slovenský slovník")
        ['česko', 'slovenský', 'slovník']

        >>> tokenize("   ")
        []
    """
    if not text:
        return []

    return _splitter.tokenize(text.lower())
