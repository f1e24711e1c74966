"""Position weight matrix."""

from typing import Optional, Sequence

import numpy as np

from .base import BaseMotif
from ..errors import DegenerateMotifError
from ..utils.config import NUCLEOTIDES


class PWM(BaseMotif):
    """Position weight matrix of nucleotide frequencies.

    One row per motif position, columns A, C, G, T. Rows hold
    non-negative frequencies and need not be normalized. The matrix is
    read-only once constructed.
    """

    def __init__(self, matrix: Sequence[Sequence[float]], name: str = "motif"):
        """
        Args:
            matrix: n x 4 frequencies (A, C, G, T columns), n >= 1
            name: Motif identifier
        """
        super().__init__(name=name)

        mat = np.array(matrix, dtype=float)
        if mat.ndim != 2 or mat.shape[1] != 4:
            raise ValueError(f"PWM must be an n x 4 matrix, got shape {mat.shape}")
        if mat.shape[0] == 0:
            raise ValueError("PWM must have at least one row")
        if not np.all(np.isfinite(mat)):
            raise ValueError("PWM frequencies must be finite")
        if np.any(mat < 0):
            raise ValueError("PWM frequencies must be non-negative")

        empty_rows = np.flatnonzero(mat.max(axis=1) == 0)
        if empty_rows.size:
            raise DegenerateMotifError(int(empty_rows[0]), "all frequencies are zero")

        mat.setflags(write=False)
        self._matrix = mat

    @property
    def size(self) -> int:
        return self._matrix.shape[0]

    @property
    def matrix(self) -> np.ndarray:
        """Read-only n x 4 frequency matrix."""
        return self._matrix

    def row(self, index: int) -> np.ndarray:
        return self._matrix[index]

    def reverse_complement(self, name: Optional[str] = None) -> "PWM":
        """Motif of the opposite strand.

        Rows are reversed and the A<->T, C<->G columns swapped; with
        columns in A, C, G, T order that is a reversal of both axes.
        """
        return PWM(self._matrix[::-1, ::-1].copy(), name=name or f"{self.name}_rc")

    def consensus(self) -> str:
        """Most frequent base at every position (first on ties)."""
        return ''.join(NUCLEOTIDES[i] for i in self._matrix.argmax(axis=1))

    def __eq__(self, other) -> bool:
        if not isinstance(other, PWM):
            return NotImplemented
        return np.array_equal(self._matrix, other._matrix)

    def __hash__(self) -> int:
        # Consistent with __eq__: the name is not part of a motif's identity;
        # adding 0.0 folds -0.0 into 0.0
        return hash((self._matrix.shape, (self._matrix + 0.0).tobytes()))

