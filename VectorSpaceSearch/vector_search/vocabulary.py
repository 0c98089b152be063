"""
Vocabulary and inverse document frequency construction.
"""
import math
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from loguru import logger

from .errors import EmptyCorpusError
from .vector import MultidimensionalVector


class Vocabulary:
    """
    Ordered, immutable set of terms.

    The position of a term is the dimension index it occupies in every
    vector built against this vocabulary.
    """

    def __init__(self, terms: Sequence[str], document_frequencies: Optional[Dict[str, int]] = None):
        self._terms: Tuple[str, ...] = tuple(terms)
        self._positions: Dict[str, int] = {term: i for i, term in enumerate(self._terms)}
        if len(self._positions) != len(self._terms):
            raise ValueError("Vocabulary terms must be unique")
        self._document_frequencies = dict(document_frequencies or {})

    @property
    def terms(self) -> Tuple[str, ...]:
        return self._terms

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator[str]:
        return iter(self._terms)

    def __contains__(self, term) -> bool:
        return term in self._positions

    def __repr__(self) -> str:
        return f"Vocabulary({len(self._terms)} terms)"

    def index_of(self, term: str) -> int:
        """
        Get the dimension index of a term.

        Raises:
            KeyError: If the term is not in the vocabulary
        """
        return self._positions[term]

    def document_frequency(self, term: str) -> int:
        """Number of documents that contain the term, 0 if unknown."""
        return self._document_frequencies.get(term, 0)


def compute_idf(document_frequencies: Sequence[int], document_count: int) -> MultidimensionalVector:
    """
    Calculate the IDF vector.
    IDF(t) = log10(N / DF(t))

    Args:
        document_frequencies: Document frequency of every term, in vocabulary order
        document_count: Number of documents in the corpus

    Returns:
        IDF vector aligned to the given order
    """
    if document_count <= 0:
        raise EmptyCorpusError("Cannot compute IDF for a corpus without documents")
    return MultidimensionalVector(math.log10(document_count / df) for df in document_frequencies)


class VocabularyBuilder:
    """
    Collects document frequencies over a corpus and builds the vocabulary.

    Terms are ordered by first encounter across documents in the order the
    documents are added.
    """

    def __init__(self, stop_words: Iterable[str] = ()):
        self.stop_words = {word.lower() for word in stop_words}
        self.document_frequencies: Dict[str, int] = {}  # insertion order is vocabulary order
        self.document_count = 0

    def add_document(self, terms: Iterable[str]) -> int:
        """
        Count the distinct terms of one document.

        Args:
            terms: Preprocessed terms of the document

        Returns:
            Number of distinct vocabulary terms in the document
        """
        added: List[str] = []
        seen = set()
        for term in terms:
            if not term or term in self.stop_words or term in seen:
                continue
            seen.add(term)
            added.append(term)

        for term in added:
            self.document_frequencies[term] = self.document_frequencies.get(term, 0) + 1

        self.document_count += 1
        return len(added)

    def build(self) -> Tuple[Vocabulary, MultidimensionalVector]:
        """
        Build the vocabulary and its IDF vector.

        Returns:
            (vocabulary, idf_vector)

        Raises:
            EmptyCorpusError: If no document was added
        """
        if self.document_count == 0:
            raise EmptyCorpusError("Cannot build a vocabulary from an empty corpus")

        vocabulary = Vocabulary(list(self.document_frequencies), self.document_frequencies)
        idf_vector = compute_idf(list(self.document_frequencies.values()), self.document_count)

        logger.debug("Built vocabulary of {} terms from {} documents",
                     len(vocabulary), self.document_count)
        return vocabulary, idf_vector
