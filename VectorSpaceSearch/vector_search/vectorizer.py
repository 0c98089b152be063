"""
Maps documents and queries to TF-IDF weighted vectors over a vocabulary.
"""
from collections import Counter
from typing import Iterable, Optional

from ..preprocessing.preprocess import PreprocessingPipeline, create_pipeline
from .errors import DimensionMismatchError
from .vector import MultidimensionalVector
from .vocabulary import Vocabulary


class Vectorizer:
    """
    Builds weighted vectors for a fixed vocabulary and IDF vector.

    The same instance is used for documents at build time and for queries
    at query time.
    """

    def __init__(self, vocabulary: Vocabulary, idf_vector: MultidimensionalVector,
                 pipeline: Optional[PreprocessingPipeline] = None):
        """
        Initialize the vectorizer.

        Args:
            vocabulary: Vocabulary defining the dimension order
            idf_vector: IDF vector aligned to the vocabulary
            pipeline: Pipeline used to normalize raw text and tokens
        """
        if len(vocabulary) != len(idf_vector):
            raise DimensionMismatchError(
                f"IDF vector has {len(idf_vector)} entries for {len(vocabulary)} terms"
            )
        self.vocabulary = vocabulary
        self.idf_vector = idf_vector
        self.pipeline = pipeline or create_pipeline()

    def term_frequency_vector(self, terms: Iterable[str]) -> MultidimensionalVector:
        """
        Count the occurrences of every vocabulary term.
        Terms outside the vocabulary are ignored.

        Args:
            terms: Normalized terms

        Returns:
            Raw term frequency vector in vocabulary order
        """
        counts = Counter(term for term in terms if term in self.vocabulary)
        return MultidimensionalVector(counts.get(term, 0) for term in self.vocabulary)

    def vectorize(self, terms: Iterable[str]) -> MultidimensionalVector:
        """
        Compute the TF-IDF vector of normalized terms.

        Args:
            terms: Normalized terms

        Returns:
            hadamard(tf, idf)
        """
        return self.term_frequency_vector(terms).hadamard(self.idf_vector)

    def vectorize_text(self, text: str) -> MultidimensionalVector:
        return self.vectorize(self.pipeline.process_text(text))

    def vectorize_tokens(self, tokens: Iterable[str]) -> MultidimensionalVector:
        """Vectorize tokens already split on whitespace by the caller."""
        return self.vectorize(self.pipeline.process_tokens(tokens))
