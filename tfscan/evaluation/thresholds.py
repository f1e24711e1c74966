"""Conversion between p-values and motif score thresholds.

The null distribution of the log-likelihood ratio score is that of a
random n-mer whose bases are drawn independently from the background.
It is computed exactly on a grid of width ``resolution``; per-row
contributions are floored onto the grid, so a word with true score
``t`` sits on a grid score ``g`` with ``g <= t < g + n * resolution``.
Both conversions account for that offset so that they never understate
how often a threshold is reached.
"""

import logging
from typing import Tuple

import numpy as np

from ..models.background import Background
from ..models.pwm import PWM
from ..search.bounds import score_table
from ..utils.config import NUCLEOTIDES, SCORE_RESOLUTION

logger = logging.getLogger(__name__)


def _base_table(background: Background, pwm: PWM) -> np.ndarray:
    # The first four table columns are the unambiguous bases
    return score_table(background, pwm)[:, :len(NUCLEOTIDES)]


def _grid_distribution(
    table: np.ndarray,
    probs: np.ndarray,
    resolution: float,
) -> Tuple[np.ndarray, np.ndarray]:
    steps = np.floor(table / resolution).astype(np.int64)
    lows = steps.min(axis=1)

    dist = np.ones(1)
    for row_steps, low in zip(steps, lows):
        shifts = row_steps - low
        new = np.zeros(len(dist) + int(shifts.max()))
        for base, shift in enumerate(shifts):
            new[shift:shift + len(dist)] += probs[base] * dist
        dist = new

    scores = (int(lows.sum()) + np.arange(len(dist))) * resolution
    return scores, dist


def _sequential_sum(values: np.ndarray) -> float:
    """Left-to-right float sum, the order the scanner accumulates rows in."""
    return float(sum(values.tolist()))


def score_distribution(
    background: Background,
    pwm: PWM,
    resolution: float = SCORE_RESOLUTION,
) -> Tuple[np.ndarray, np.ndarray]:
    """Distribution of the motif score over random background words.

    Args:
        background: Background nucleotide model (normalized internally)
        pwm: Position weight matrix
        resolution: Grid step in score units

    Returns:
        Tuple of (ascending grid scores, probability of each score)
    """
    if resolution <= 0:
        raise ValueError(f"Resolution must be positive, got {resolution}")
    return _grid_distribution(_base_table(background, pwm), background.normalized(), resolution)


def _tail(probs: np.ndarray) -> np.ndarray:
    """P(S >= score) for every grid score."""
    tail = np.cumsum(probs[::-1])[::-1]
    # Rescale so the lowest score has tail exactly 1
    return tail / tail[0]


def pvalue_to_score(
    p_value: float,
    background: Background,
    pwm: PWM,
    resolution: float = SCORE_RESOLUTION,
) -> float:
    """Score threshold reached by at most a fraction ``p_value`` of words.

    The first attainable grid score ``g`` whose grid tail is at most
    ``p_value`` is located. Every word on a lower grid score ``g'``
    scores below ``g' + n * resolution``, so the threshold is placed
    there (capped at the best attainable score). When ``g`` is the
    lowest grid score every word qualifies and the lowest attainable
    score is returned.

    If even the best-scoring words are more frequent than ``p_value``,
    the threshold admits only the top grid score's words, whose
    frequency then exceeds ``p_value``.

    Args:
        p_value: Upper-tail probability, in (0, 1]
        background: Background nucleotide model
        pwm: Position weight matrix
        resolution: Grid step in score units

    Returns:
        Score threshold
    """
    if not 0 < p_value <= 1:
        raise ValueError(f"p-value must be in (0, 1], got {p_value}")
    if resolution <= 0:
        raise ValueError(f"Resolution must be positive, got {resolution}")

    table = _base_table(background, pwm)
    scores, probs = _grid_distribution(table, background.normalized(), resolution)
    # Only scores some word can attain; the tail is flat in between
    support = np.flatnonzero(probs > 0)
    passing = np.flatnonzero(_tail(probs)[support] <= p_value)
    k = int(passing[0]) if passing.size else len(support) - 1

    if k == 0:
        threshold = _sequential_sum(table.min(axis=1))
    else:
        below = float(scores[support[k - 1]]) + pwm.size * resolution
        threshold = min(below, _sequential_sum(table.max(axis=1)))

    logger.debug("%s: p=%g -> score threshold %.3f", pwm.name, p_value, threshold)
    return threshold


def score_to_pvalue(
    score: float,
    background: Background,
    pwm: PWM,
    resolution: float = SCORE_RESOLUTION,
) -> float:
    """Probability that a random background word scores at least ``score``.

    Exact up to the grid: words scoring within ``n * resolution`` below
    ``score`` may be counted, words scoring ``score`` or more never go
    uncounted.
    """
    table = _base_table(background, pwm)
    if score > _sequential_sum(table.max(axis=1)):
        return 0.0
    if score <= _sequential_sum(table.min(axis=1)):
        return 1.0

    if resolution <= 0:
        raise ValueError(f"Resolution must be positive, got {resolution}")
    scores, probs = _grid_distribution(table, background.normalized(), resolution)
    idx = int(np.searchsorted(scores, score - pwm.size * resolution, side="left"))
    if idx >= len(scores):
        return 0.0
    return float(min(1.0, _tail(probs)[idx]))
