"""Abstract base class for motif matrices."""

from abc import ABC, abstractmethod
from typing import Any, Dict

import numpy as np


class BaseMotif(ABC):
    """Abstract base class for motif representations.

    The scanner only needs the motif width and the per-row base
    frequencies; every concrete matrix representation provides these.
    """

    def __init__(self, name: str):
        """Initialize the motif.

        Args:
            name: Name/identifier for the motif
        """
        self.name = name

    @property
    @abstractmethod
    def size(self) -> int:
        """Motif width (number of rows)."""
        pass

    @abstractmethod
    def row(self, index: int) -> np.ndarray:
        """Return the A, C, G, T frequencies of one motif position.

        Args:
            index: 0-indexed motif position

        Returns:
            Length-4 float array
        """
        pass

    def __len__(self) -> int:
        return self.size

    def get_motif_info(self) -> Dict[str, Any]:
        """Get information about the motif.

        Returns:
            Dictionary with motif metadata
        """
        return {
            "name": self.name,
            "size": self.size,
            "type": self.__class__.__name__,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', size={self.size})"
