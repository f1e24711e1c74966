"""Per-symbol score tables and suffix upper bounds for look-ahead scanning."""

import numpy as np

from ..errors import DegenerateMotifError
from ..models.background import Background
from ..models.base import BaseMotif
from ..sequences.alphabet import SYMBOL_BASES, SYMBOL_INDEX
from ..utils.config import IUPAC_SYMBOLS, PSEUDOCOUNT


def score_table(background: Background, motif: BaseMotif) -> np.ndarray:
    """Log-likelihood ratio contribution of every symbol at every motif row.

    Column ``SYMBOL_INDEX[s]`` holds the contribution of symbol ``s``:

    - A/C/G/T: ``log(m / b)``, with ``m`` replaced by the pseudocount
      when the stored frequency is exactly zero
    - ambiguity codes: ``log(sum(m) / sum(b))`` over the bases the code
      stands for
    - N: exactly 0, whatever the background

    Args:
        background: Background nucleotide model
        motif: Motif matrix (any ``BaseMotif``)

    Returns:
        n x 15 float array
    """
    bg = background.as_array()
    freqs = np.array([motif.row(i) for i in range(motif.size)], dtype=float)
    matches = np.where(freqs == 0, PSEUDOCOUNT, freqs)

    table = np.zeros((motif.size, len(IUPAC_SYMBOLS)), dtype=float)
    for symbol, bases in SYMBOL_BASES.items():
        if symbol == 'N':
            continue
        col = SYMBOL_INDEX[symbol]
        if len(bases) == 1:
            table[:, col] = np.log(matches[:, bases[0]] / bg[bases[0]])
        else:
            table[:, col] = np.log(matches[:, bases].sum(axis=1) / bg[bases].sum())
    return table


def row_optimal_scores(table: np.ndarray) -> np.ndarray:
    """Best contribution any symbol can make at each motif row.

    For a normalized PWM under a uniform background this is the ratio of
    the most frequent base; taking the maximum over the whole row keeps
    the bound sound for skewed backgrounds, ties and unnormalized rows.
    """
    return table.max(axis=1)


def suffix_bounds_from_table(table: np.ndarray) -> np.ndarray:
    """Suffix bounds of an already computed score table.

    Raises:
        DegenerateMotifError: if a row has no finite optimal score
    """
    optimal = row_optimal_scores(table)
    bad_rows = np.flatnonzero(~np.isfinite(optimal))
    if bad_rows.size:
        raise DegenerateMotifError(int(bad_rows[0]))

    prefix = np.concatenate([[0.0], np.cumsum(optimal)])
    return prefix[-1] - prefix[:-1]


def optimal_scores_suffix(background: Background, motif: BaseMotif) -> np.ndarray:
    """Best attainable score of every motif suffix.

    Entry ``d`` is the maximum cumulative score over rows ``[d, n)``,
    computed as ``total - prefix[d]`` from the prefix sums (leading zero
    included) of the per-row optimal contributions. Being a difference
    of float sums, an entry can fall a few ulps short of the true
    suffix maximum; the scanner allows for that.

    Args:
        background: Background nucleotide model
        motif: Motif matrix

    Returns:
        Array of n suffix bounds

    Raises:
        DegenerateMotifError: if a row has no finite optimal score
    """
    return suffix_bounds_from_table(score_table(background, motif))
