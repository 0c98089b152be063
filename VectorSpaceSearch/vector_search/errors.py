"""
Exceptions raised by the vector-space search engine.
"""


class SearchEngineError(Exception):
    """Base class for search engine errors."""


class InputError(SearchEngineError, ValueError):
    """Raised when the input given to the index builder is unusable."""


class EmptyCorpusError(InputError):
    """Raised when an index is requested for a corpus without documents."""


class DuplicateDocumentError(InputError):
    """Raised when two documents share the same identifier."""


class DimensionMismatchError(SearchEngineError, ValueError):
    """Raised when two vectors of different lengths are combined."""


class ZeroVectorError(SearchEngineError, ArithmeticError):
    """Raised when cosine similarity is requested for a zero-norm vector."""
