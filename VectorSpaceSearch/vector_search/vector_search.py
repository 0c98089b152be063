"""
Vector-space search: index construction and cosine similarity ranking.
"""
from collections.abc import Sequence
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Mapping, NamedTuple, Optional, Tuple

from loguru import logger

from ..preprocessing.document import Document
from ..preprocessing.preprocess import PreprocessingPipeline, create_pipeline
from .errors import DuplicateDocumentError, EmptyCorpusError, InputError
from .vector import MultidimensionalVector, compute_cosine_similarity
from .vectorizer import Vectorizer
from .vocabulary import Vocabulary, VocabularyBuilder

DEFAULT_SIMILARITY_THRESHOLD = 1e-3
DEFAULT_MAX_RESULTS = 10


class QueryStatus(Enum):
    OK = "ok"
    NO_RESULTS = "no_results"


class RankedResult(NamedTuple):
    rank: int
    similarity: float
    identifier: str


class SearchResults(Sequence):
    """
    Ordered results of a single query.

    Behaves as a read-only sequence of RankedResult. ``status`` is
    QueryStatus.NO_RESULTS whenever the sequence is empty, and ``reason``
    says why.
    """

    def __init__(self, results: Iterable[RankedResult] = (), query_terms: Iterable[str] = (),
                 reason: Optional[str] = None):
        self.results: Tuple[RankedResult, ...] = tuple(results)
        self.query_terms: Tuple[str, ...] = tuple(query_terms)
        self.status = QueryStatus.OK if self.results else QueryStatus.NO_RESULTS
        self.reason = reason if not self.results else None
        if not self.results and self.reason is None:
            self.reason = "no document reached the similarity threshold"

    @classmethod
    def empty(cls, reason: str, query_terms: Iterable[str] = ()) -> 'SearchResults':
        return cls((), query_terms, reason)

    @property
    def no_results(self) -> bool:
        return self.status is QueryStatus.NO_RESULTS

    def __getitem__(self, index):
        return self.results[index]

    def __len__(self) -> int:
        return len(self.results)

    def __eq__(self, other) -> bool:
        if isinstance(other, SearchResults):
            return self.results == other.results and self.status is other.status
        return NotImplemented

    def __repr__(self) -> str:
        return f"SearchResults(status={self.status.value}, results={list(self.results)!r})"


def check_max_results(max_results: int) -> int:
    if max_results < 1:
        raise InputError(f"max_results must be at least 1, got {max_results}")
    return max_results


def rank_documents(query_vector: MultidimensionalVector,
                   document_vectors: Mapping[str, MultidimensionalVector],
                   similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
                   max_results: int = DEFAULT_MAX_RESULTS) -> List[RankedResult]:
    """
    Rank documents by similarity to query vector.

    Args:
        query_vector: Weighted query vector with non-zero norm
        document_vectors: Weighted document vectors by identifier
        similarity_threshold: Results below this similarity are dropped
        max_results: Number of top results to return

    Returns:
        Ranked results, best first, ties broken by identifier ascending
    """
    check_max_results(max_results)

    similarities = []

    for identifier, document_vector in document_vectors.items():
        # A document without vocabulary terms cannot match anything
        if document_vector.is_zero():
            continue
        similarity = compute_cosine_similarity(document_vector, query_vector)
        if similarity < similarity_threshold:
            continue
        similarities.append((identifier, similarity))

    similarities.sort(key=lambda item: (-item[1], item[0]))

    return [
        RankedResult(rank, similarity, identifier)
        for rank, (identifier, similarity) in enumerate(similarities[:max_results], start=1)
    ]


def rank(query_terms: Iterable[str], vocabulary: Vocabulary, idf_vector: MultidimensionalVector,
         document_vectors: Mapping[str, MultidimensionalVector],
         similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
         max_results: int = DEFAULT_MAX_RESULTS) -> SearchResults:
    """
    Answer a query against a set of document vectors.

    Degenerate queries (no vocabulary terms, or a query vector of zero norm)
    produce an empty result with QueryStatus.NO_RESULTS instead of an error.

    Args:
        query_terms: Normalized query terms
        vocabulary: Corpus vocabulary
        idf_vector: IDF vector aligned to the vocabulary
        document_vectors: Weighted document vectors by identifier
        similarity_threshold: Results below this similarity are dropped
        max_results: Number of top results to return

    Returns:
        SearchResults

    Raises:
        InputError: If max_results is below 1
    """
    check_max_results(max_results)
    query_terms = list(query_terms)

    if not any(term in vocabulary for term in query_terms):
        logger.debug("Query {} has no vocabulary terms", query_terms)
        return SearchResults.empty("query contains no vocabulary terms", query_terms)

    query_vector = Vectorizer(vocabulary, idf_vector).vectorize(query_terms)
    if query_vector.is_zero():
        logger.debug("Query {} has a zero weighted vector", query_terms)
        return SearchResults.empty("query terms occur in every document", query_terms)

    results = rank_documents(query_vector, document_vectors, similarity_threshold, max_results)
    return SearchResults(results, query_terms)


class Index:
    """
    Immutable vector-space index over a corpus.

    Holds the vocabulary, the IDF vector and one weighted vector per document.
    Nothing is modified after construction, so any number of queries can be
    answered against the same index.
    """

    def __init__(self, vocabulary: Vocabulary, idf_vector: MultidimensionalVector,
                 document_vectors: Dict[str, MultidimensionalVector],
                 pipeline: PreprocessingPipeline,
                 similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
                 max_results: int = DEFAULT_MAX_RESULTS):
        self._vocabulary = vocabulary
        self._idf_vector = idf_vector
        self._document_vectors = dict(document_vectors)
        self._pipeline = pipeline
        self.similarity_threshold = similarity_threshold
        self.max_results = check_max_results(max_results)

    @property
    def vocabulary(self) -> Vocabulary:
        return self._vocabulary

    @property
    def idf_vector(self) -> MultidimensionalVector:
        return self._idf_vector

    @property
    def document_count(self) -> int:
        return len(self._document_vectors)

    def vocabulary_size(self) -> int:
        return len(self._vocabulary)

    def document_identifiers(self) -> FrozenSet[str]:
        return frozenset(self._document_vectors)

    def document_vector(self, identifier: str) -> MultidimensionalVector:
        """
        Get the weighted vector of a document.

        Raises:
            KeyError: If no document has the identifier
        """
        return self._document_vectors[identifier]

    def normalize_query(self, query: str) -> List[str]:
        return self._pipeline.process_text(query)

    def query(self, query: str, max_results: Optional[int] = None) -> SearchResults:
        """
        Search for documents matching the query.

        Args:
            query: Raw query text
            max_results: Overrides the index's result limit

        Returns:
            SearchResults, empty with QueryStatus.NO_RESULTS when nothing matches

        Raises:
            InputError: If max_results is below 1
        """
        results = rank(
            self.normalize_query(query),
            self._vocabulary,
            self._idf_vector,
            self._document_vectors,
            similarity_threshold=self.similarity_threshold,
            max_results=self.max_results if max_results is None else max_results,
        )
        logger.debug("Query {!r}: {} result(s)", query, len(results))
        return results


def build_index(documents: Iterable[Tuple[str, str]], stop_words: Optional[Iterable[str]] = None,
                similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
                max_results: int = DEFAULT_MAX_RESULTS) -> Index:
    """
    Build an index from raw documents.

    Args:
        documents: (identifier, raw text) pairs in corpus order
        stop_words: Terms excluded from the vocabulary
        similarity_threshold: Query results below this similarity are dropped
        max_results: Number of results returned per query

    Returns:
        Index

    Raises:
        EmptyCorpusError: If no document is given
        DuplicateDocumentError: If an identifier occurs twice
        InputError: If max_results is below 1
    """
    check_max_results(max_results)
    stop_words = set(stop_words or ())
    pipeline = create_pipeline(stop_words)
    builder = VocabularyBuilder(stop_words)

    # First pass: document frequencies
    corpus: Dict[str, List[str]] = {}
    for identifier, text in documents:
        if identifier in corpus:
            raise DuplicateDocumentError(f"Duplicate document identifier: {identifier}")
        terms = Document(identifier, text).preprocess(pipeline).get_preprocessed_terms()
        corpus[identifier] = terms
        builder.add_document(terms)

    if not corpus:
        raise EmptyCorpusError("Cannot build an index without documents")

    vocabulary, idf_vector = builder.build()

    # Second pass: weighted document vectors
    vectorizer = Vectorizer(vocabulary, idf_vector, pipeline)
    document_vectors = {
        identifier: vectorizer.vectorize(terms) for identifier, terms in corpus.items()
    }

    logger.info("Indexed {} documents, vocabulary size {}", len(document_vectors), len(vocabulary))
    return Index(vocabulary, idf_vector, document_vectors, pipeline,
                 similarity_threshold=similarity_threshold, max_results=max_results)
