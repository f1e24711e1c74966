"""Background nucleotide model."""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..utils.config import NUCLEOTIDES, UNIFORM_BACKGROUND


@dataclass(frozen=True)
class Background:
    """Genome-wide A, C, G, T frequencies used as the null model.

    Frequencies must be positive; they are not required to sum to 1.
    """
    a: float
    c: float
    g: float
    t: float

    def __post_init__(self):
        for base, freq in zip(NUCLEOTIDES, self.as_tuple()):
            if not np.isfinite(freq) or freq <= 0:
                raise ValueError(f"Background frequency of {base} must be positive, got {freq}")

    @classmethod
    def uniform(cls) -> "Background":
        return cls(*UNIFORM_BACKGROUND)

    @classmethod
    def from_frequencies(cls, freqs: Sequence[float]) -> "Background":
        """Build from an (A, C, G, T) sequence of frequencies."""
        if len(freqs) != 4:
            raise ValueError(f"Expected 4 background frequencies, got {len(freqs)}")
        return cls(*(float(f) for f in freqs))

    def as_tuple(self):
        return (self.a, self.c, self.g, self.t)

    def as_array(self) -> np.ndarray:
        """Return frequencies as a float array in A, C, G, T order."""
        return np.array(self.as_tuple(), dtype=float)

    def normalized(self) -> np.ndarray:
        """Return frequencies rescaled to sum to 1."""
        freqs = self.as_array()
        return freqs / freqs.sum()
