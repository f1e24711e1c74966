"""DNA/IUPAC alphabet definitions and sequence utilities."""

import random
from typing import List, Optional

import numpy as np

from ..errors import InvalidSymbolError
from ..utils.config import IUPAC_SYMBOLS, NUCLEOTIDES

IUPAC_CODES = {
    'A': ['A'],
    'C': ['C'],
    'G': ['G'],
    'T': ['T'],
    'N': ['A', 'C', 'G', 'T'],  # Any
    'V': ['A', 'C', 'G'],  # Not T
    'H': ['A', 'C', 'T'],  # Not G
    'D': ['A', 'G', 'T'],  # Not C
    'B': ['C', 'G', 'T'],  # Not A
    'M': ['A', 'C'],  # Amino
    'K': ['G', 'T'],  # Keto
    'W': ['A', 'T'],  # Weak
    'S': ['C', 'G'],  # Strong
    'Y': ['C', 'T'],  # Pyrimidine
    'R': ['A', 'G'],  # Purine
}

IUPAC_COMPLEMENT = {
    'A': 'T', 'C': 'G', 'G': 'C', 'T': 'A', 'N': 'N',
    'V': 'B', 'H': 'D', 'D': 'H', 'B': 'V',
    'M': 'K', 'K': 'M', 'W': 'W', 'S': 'S', 'Y': 'R', 'R': 'Y',
}

# Column index of every symbol in a score table
SYMBOL_INDEX = {symbol: i for i, symbol in enumerate(IUPAC_SYMBOLS)}

# Column indices (into NUCLEOTIDES) of the bases each symbol stands for
SYMBOL_BASES = {
    symbol: [NUCLEOTIDES.index(b) for b in bases]
    for symbol, bases in IUPAC_CODES.items()
}

_INVALID = -1
_ENCODING = np.full(256, _INVALID, dtype=np.int16)
for _symbol, _index in SYMBOL_INDEX.items():
    _ENCODING[ord(_symbol)] = _index
    _ENCODING[ord(_symbol.lower())] = _index


def encode_sequence(sequence: str) -> np.ndarray:
    """Encode a DNA sequence as column indices of the score table.

    Lower-case (soft-masked) symbols encode like their upper-case form.

    Args:
        sequence: DNA sequence over the 15-symbol IUPAC alphabet

    Returns:
        int16 array of symbol indices, one per sequence position

    Raises:
        InvalidSymbolError: at the first character outside the alphabet
    """
    if not sequence:
        return np.empty(0, dtype=np.int16)
    # Non-ASCII characters become '?' one-for-one, keeping positions intact
    raw = np.frombuffer(sequence.encode("ascii", errors="replace"), dtype=np.uint8)
    codes = _ENCODING[raw]
    invalid = np.flatnonzero(codes == _INVALID)
    if invalid.size:
        position = int(invalid[0])
        raise InvalidSymbolError(position, sequence[position])
    return codes


def first_invalid_position(sequence: str) -> Optional[int]:
    """Return the index of the first non-IUPAC character, or None."""
    for i, char in enumerate(sequence.upper()):
        if char not in IUPAC_CODES:
            return i
    return None


def reverse_complement(seq: str) -> str:
    """Return reverse complement of a DNA/IUPAC sequence."""
    try:
        return ''.join(IUPAC_COMPLEMENT[b] for b in reversed(seq.upper()))
    except KeyError:
        position = first_invalid_position(seq)
        raise InvalidSymbolError(position, seq[position]) from None


def sample_iupac(pattern: str, rng: Optional[random.Random] = None) -> str:
    """Sample a single concrete sequence from an IUPAC pattern.

    Args:
        pattern: DNA sequence with IUPAC codes
        rng: Random generator (module-level random if None)

    Returns:
        A single concrete DNA sequence
    """
    rng = rng or random
    result: List[str] = []
    for i, char in enumerate(pattern.upper()):
        if char not in IUPAC_CODES:
            raise InvalidSymbolError(i, pattern[i])
        result.append(rng.choice(IUPAC_CODES[char]))

    return ''.join(result)
