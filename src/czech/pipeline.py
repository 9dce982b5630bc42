"""
Token pipelines for indexing and search.

A pipeline is an ordered sequence of transforms `str -> Optional[str]`
assembled explicitly at setup time. A transform returning None or "" drops
the token; later stages never see it.

Index pipeline:  trim → stop-word filter → stem
Query pipeline:  stem

Both pipelines must share one Stemmer: a query term only matches an indexed
term if both were stemmed by identical logic.
"""

from typing import Callable, Iterable, Iterator, List, Optional

from .stemmer import Stemmer
from .stopwords import stop_word_filter
from .tokenizer import tokenize
from .trimmer import trim

Transform = Callable[[str], Optional[str]]


class Pipeline:
    """Ordered composition of token transforms"""

    def __init__(self, *transforms: Transform):
        self._transforms: List[Transform] = list(transforms)

    def add(self, *transforms: Transform) -> "Pipeline":
        self._transforms.extend(transforms)
        return self

    def run(self, tokens: Iterable[str]) -> List[str]:
        """
        Pass every token through all stages in order.

        Example:
            >>> Pipeline(str.strip, str.upper).run([" a ", "b"])
            ['A', 'B']
        """
        result = []
        for token in tokens:
            for transform in self._transforms:
                token = transform(token)
                if not token:
                    break
            else:
                result.append(token)
        return result

    def run_string(self, text: str) -> List[str]:
        """Tokenize `text` and run the tokens through the pipeline"""
        return self.run(tokenize(text))

    def __iter__(self) -> Iterator[Transform]:
        return iter(self._transforms)

    def __len__(self) -> int:
        return len(self._transforms)

    def __repr__(self) -> str:
        names = ", ".join(getattr(t, "__name__", type(t).__name__) for t in self._transforms)
        return f"Pipeline({names})"


def build_index_pipeline(stemmer: Stemmer) -> Pipeline:
    return Pipeline(trim, stop_word_filter, stemmer)


def build_query_pipeline(stemmer: Stemmer) -> Pipeline:
    # Query terms are only stemmed; stop words in a query still match nothing
    return Pipeline(stemmer)
