"""
Vector-space search module: TF-IDF weighted term vectors ranked by cosine similarity.
"""
from .errors import (
    SearchEngineError,
    InputError,
    EmptyCorpusError,
    DuplicateDocumentError,
    DimensionMismatchError,
    ZeroVectorError,
)
from .vector import MultidimensionalVector, compute_cosine_similarity
from .vocabulary import Vocabulary, VocabularyBuilder, compute_idf
from .vectorizer import Vectorizer
from .vector_search import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_SIMILARITY_THRESHOLD,
    Index,
    QueryStatus,
    RankedResult,
    SearchResults,
    build_index,
    rank,
    rank_documents,
)
