"""Look-ahead (branch-and-bound) evaluation of a single motif alignment."""

import math
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from .bounds import score_table, suffix_bounds_from_table
from ..models.background import Background
from ..models.pwm import PWM

# Relative slack on the early-abort test; float sums of the row scores
# may differ from the suffix bounds by a few ulps
BOUND_TOLERANCE = 1e-9


@dataclass(frozen=True)
class Matched:
    """Every motif row was scored and the threshold was reached."""
    score: float


@dataclass(frozen=True)
class Rejected:
    """The alignment was abandoned once the threshold became unreachable."""
    depth: int  # number of motif rows scored before abandoning
    score: float  # accumulated score at that point


LookAheadResult = Union[Matched, Rejected]


class LookAheadScanner:
    """Scores motif alignments row by row, stopping as soon as the running
    score plus the best possible remainder falls below the threshold.

    The score table and suffix bounds are computed once per
    (background, PWM) pair and shared by every start position. Early
    aborts leave a small slack so that a window scoring exactly the
    threshold is never pruned; the final comparison is exact.
    """

    def __init__(self, background: Background, pwm: PWM):
        self.background = background
        self.pwm = pwm
        self.size = pwm.size

        table = score_table(background, pwm)
        self.suffix_bounds = suffix_bounds_from_table(table)

        # Plain lists: indexing numpy scalars in the per-row loop is slow
        self._table = table.tolist()
        # Best remaining score after row d has been scored
        self._remaining = np.append(self.suffix_bounds[1:], 0.0).tolist()
        self._tolerance = BOUND_TOLERANCE * (1.0 + self.size * float(np.abs(table).max()))

    def search(self, codes: Sequence[int], start: int, threshold: float) -> LookAheadResult:
        """Evaluate the alignment beginning at ``start``.

        Args:
            codes: Encoded sequence (see ``encode_sequence``)
            start: 0-indexed alignment start; ``start + size`` must not
                exceed ``len(codes)``
            threshold: Minimum full score for a match

        Returns:
            ``Matched(score)`` if the full score reaches ``threshold``,
            otherwise ``Rejected(depth, score)``
        """
        table = self._table
        remaining = self._remaining
        last = self.size - 1
        slack = self._tolerance * (1.0 + abs(threshold)) if math.isfinite(threshold) else 0.0

        score = 0.0
        for d in range(last):
            score += table[d][codes[start + d]]
            if score < threshold - remaining[d] - slack:
                return Rejected(depth=d + 1, score=score)
        score += table[last][codes[start + last]]
        if score < threshold:
            return Rejected(depth=self.size, score=score)
        return Matched(score=score)

    def full_score(self, codes: Sequence[int], start: int) -> float:
        """Score all motif rows at ``start`` without pruning."""
        table = self._table
        score = 0.0
        for d in range(self.size):
            score += table[d][codes[start + d]]
        return score
