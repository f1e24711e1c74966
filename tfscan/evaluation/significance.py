"""Significance of spacing-constraint bins."""

from dataclasses import dataclass, asdict
from typing import Dict, List

from scipy import stats

from .spacing import SpacingResult


@dataclass
class BinSignificance:
    """Poisson test of one spacing bin."""
    same_orientation: bool
    offset: int
    count: int
    expected: float
    p_value: float
    p_adjusted: float

    def to_dict(self) -> Dict:
        return asdict(self)


def expected_overlap(n1: int, n2: int, sequence_length: int, bin_width: int) -> float:
    """Expected overlap count of one bin if sites were placed at random.

    A motif-1 site covers ``2w + 1`` of the ``sequence_length`` positions,
    so each motif-2 site falls in some window with probability
    ``(2w + 1) * n1 / sequence_length``.
    """
    if sequence_length <= 0:
        return 0.0
    prob = (2 * bin_width + 1) * n1 / sequence_length
    return prob * n2


def spacing_pvalue(
    overlap: int,
    n1: int,
    n2: int,
    sequence_length: int,
    bin_width: int,
) -> float:
    """P(X > overlap) for X ~ Poisson(expected overlap).

    Args:
        overlap: Observed overlap count of the bin
        n1: Number of motif-1 sites (both strands)
        n2: Number of motif-2 sites (both strands)
        sequence_length: Length of the scanned sequence
        bin_width: Half-width w of the bin window

    Returns:
        Upper-tail p-value
    """
    mu = expected_overlap(n1, n2, sequence_length, bin_width)
    if mu <= 0:
        return 1.0
    return float(stats.poisson.sf(overlap, mu))


def benjamini_hochberg(p_values: List[float]) -> List[float]:
    """Apply Benjamini-Hochberg FDR correction.

    Args:
        p_values: List of p-values

    Returns:
        List of adjusted p-values, in input order
    """
    n = len(p_values)
    if n == 0:
        return []

    order = sorted(range(n), key=lambda i: p_values[i])

    adjusted = [0.0] * n
    prev_adj = 1.0
    for rank in range(n, 0, -1):
        i = order[rank - 1]
        prev_adj = min(prev_adj, p_values[i] * n / rank)
        adjusted[i] = prev_adj

    return adjusted


def annotate_spacing_result(result: SpacingResult, bin_width: int) -> List[BinSignificance]:
    """Poisson p-values for every ranked bin of a spacing analysis.

    Adjusted p-values are corrected over the ranked bins only.
    """
    expected = expected_overlap(
        result.n_motif1, result.n_motif2, result.sequence_length, bin_width
    )
    raw = [
        spacing_pvalue(b.count, result.n_motif1, result.n_motif2, result.sequence_length, bin_width)
        for b in result.bins
    ]
    adjusted = benjamini_hochberg(raw)

    return [
        BinSignificance(
            same_orientation=b.same_orientation,
            offset=b.offset,
            count=b.count,
            expected=expected,
            p_value=p,
            p_adjusted=p_adj,
        )
        for b, p, p_adj in zip(result.bins, raw, adjusted)
    ]
