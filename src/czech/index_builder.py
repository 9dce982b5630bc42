"""
Term index builder - aggregates stemmed term frequencies from text chunks.
"""

import logging
from collections import defaultdict
from typing import Dict, List

from .pipeline import Pipeline

logger = logging.getLogger(__name__)


def build_term_index(texts: List[str], pipeline: Pipeline) -> Dict[str, Dict[str, int]]:
    """
    Build a term-frequency index from texts using the index pipeline.

    Args:
        texts: List of text strings (documents or chunks)
        pipeline: Index pipeline (trim → stop words → stem)

    Returns:
        Dict with structure:
        {
            "term_frequencies": {
                "term1": count1,
                ...
            }
        }

    Example:
        >>> build_term_index(["Hrady a zámky", "O hradech"], index_pipeline)
        {'term_frequencies': {'hrad': 2, 'zámek': 1}}
    """
    term_frequencies = defaultdict(int)

    for text in texts:
        for term in pipeline.run_string(text):
            term_frequencies[term] += 1

    # Plain dict for JSON serialization
    result = {
        "term_frequencies": dict(term_frequencies)
    }

    logger.debug(f"Built term index: {len(result['term_frequencies'])} unique terms from {len(texts)} texts")

    return result
