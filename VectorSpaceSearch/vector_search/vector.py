"""
Fixed-dimension real-valued vectors used for document and query representation.
"""
import math
from typing import Iterable, Iterator, Tuple

from .errors import DimensionMismatchError, ZeroVectorError


class MultidimensionalVector:
    """
    Immutable vector of float values.

    All binary operations require both operands to have the same length,
    since every vector is aligned to the same vocabulary order.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[float]):
        """
        Initialize a vector.

        Args:
            values: Vector components in dimension order
        """
        self._values: Tuple[float, ...] = tuple(float(value) for value in values)

    @classmethod
    def zeros(cls, length: int) -> 'MultidimensionalVector':
        return cls([0.0] * length)

    @classmethod
    def ones(cls, length: int) -> 'MultidimensionalVector':
        """Identity element of the Hadamard product."""
        return cls([1.0] * length)

    @property
    def values(self) -> Tuple[float, ...]:
        return self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __getitem__(self, index):
        return self._values[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, MultidimensionalVector):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        return f"MultidimensionalVector({list(self._values)!r})"

    def _check_length(self, other: 'MultidimensionalVector'):
        if len(self) != len(other):
            raise DimensionMismatchError(
                f"Vector lengths have to match: {len(self)} != {len(other)}"
            )

    def norm(self) -> float:
        """
        Euclidean norm of the vector.

        Returns:
            sqrt(sum(v[i]^2)), 0.0 for the zero vector
        """
        return math.sqrt(sum(value * value for value in self._values))

    def is_zero(self) -> bool:
        return not any(self._values)

    def dot(self, other: 'MultidimensionalVector') -> float:
        """
        Dot product of two vectors.

        Args:
            other: Vector of the same length

        Returns:
            sum(a[i] * b[i])
        """
        self._check_length(other)
        return sum(a * b for a, b in zip(self._values, other._values))

    def hadamard(self, other: 'MultidimensionalVector') -> 'MultidimensionalVector':
        """
        Elementwise product of two vectors.

        Args:
            other: Vector of the same length

        Returns:
            New vector with components a[i] * b[i]
        """
        self._check_length(other)
        return MultidimensionalVector(a * b for a, b in zip(self._values, other._values))

    def similarity(self, other: 'MultidimensionalVector') -> float:
        """
        Cosine similarity between two vectors.

        Args:
            other: Vector of the same length

        Returns:
            dot(a, b) / (norm(a) * norm(b))

        Raises:
            ZeroVectorError: If either vector has zero norm
        """
        dot_product = self.dot(other)
        norm_product = self.norm() * other.norm()
        if norm_product == 0:
            raise ZeroVectorError("Cosine similarity is undefined for a zero vector")
        return dot_product / norm_product


def compute_cosine_similarity(vec1: MultidimensionalVector, vec2: MultidimensionalVector) -> float:
    """
    Compute cosine similarity between two vectors.

    Args:
        vec1: First vector
        vec2: Second vector

    Returns:
        Cosine similarity score
    """
    return vec1.similarity(vec2)
