"""Motif scanning entry points built on the look-ahead scanner.

None of these search the reverse strand. To find reverse-strand sites,
scan with ``pwm.reverse_complement()`` and add ``pwm.size - 1`` to each
position to report the 3' coordinate of the site.
"""

import logging
import math
import threading
from typing import Iterator, List, Optional

import numpy as np

from .lookahead import LookAheadScanner, Matched
from ..errors import ScanCancelledError
from ..models.background import Background
from ..models.pwm import PWM
from ..sequences.alphabet import encode_sequence

logger = logging.getLogger(__name__)


def _check_threshold(threshold: float) -> float:
    threshold = float(threshold)
    if math.isnan(threshold):
        raise ValueError("Threshold must be a number, got NaN")
    return threshold


def _check_cancelled(cancel_event: Optional[threading.Event], position: int) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise ScanCancelledError(position)


class MatchStream:
    """Lazy, restartable stream of match positions on the forward strand.

    Iterating scans start positions in ascending order and yields every
    position whose full score reaches the threshold. Each new iteration
    starts over from position 0, so consumers that only need the first
    few matches can stop early without paying for the rest.
    """

    def __init__(
        self,
        background: Background,
        pwm: PWM,
        sequence: str,
        threshold: float,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.background = background
        self.pwm = pwm
        self.threshold = _check_threshold(threshold)
        self.cancel_event = cancel_event
        self.sequence_length = len(sequence)
        self.n_candidates = max(0, len(sequence) - pwm.size + 1)
        # Motif rows scored by the most recent iteration
        self.rows_scored = 0

        if self.n_candidates:
            self._codes = encode_sequence(sequence).tolist()
            self._scanner = LookAheadScanner(background, pwm)
        else:
            self._codes = []
            self._scanner = None

    def __iter__(self) -> Iterator[int]:
        if not self.n_candidates:
            return
        search = self._scanner.search
        codes = self._codes
        threshold = self.threshold
        size = self.pwm.size
        self.rows_scored = 0
        for i in range(self.n_candidates):
            _check_cancelled(self.cancel_event, i)
            result = search(codes, i, threshold)
            if isinstance(result, Matched):
                self.rows_scored += size
                yield i
            else:
                self.rows_scored += result.depth

    def __repr__(self) -> str:
        return (
            f"MatchStream(pwm='{self.pwm.name}', length={self.sequence_length}, "
            f"threshold={self.threshold:.3f})"
        )


def find_tfbs(
    background: Background,
    pwm: PWM,
    sequence: str,
    threshold: float,
    cancel_event: Optional[threading.Event] = None,
) -> MatchStream:
    """Find binding sites with look-ahead pruning, lazily.

    Args:
        background: Background nucleotide model
        pwm: Position weight matrix
        sequence: DNA sequence (IUPAC symbols allowed)
        threshold: Minimum log-likelihood ratio score of a site
        cancel_event: Checked once per start position; when set the
            scan raises ScanCancelledError

    Returns:
        Restartable iterable of ascending match positions

    Raises:
        InvalidSymbolError: if the sequence holds a non-IUPAC character
    """
    return MatchStream(background, pwm, sequence, threshold, cancel_event)


def find_tfbs_all(
    background: Background,
    pwm: PWM,
    sequence: str,
    threshold: float,
    cancel_event: Optional[threading.Event] = None,
) -> List[int]:
    """Find binding sites with look-ahead pruning.

    Same as ``find_tfbs`` but returns every position at once.
    """
    stream = find_tfbs(background, pwm, sequence, threshold, cancel_event)
    positions = list(stream)
    logger.debug(
        "%s: %d candidates, %d matches at threshold %.3f (%d rows scored)",
        pwm.name, stream.n_candidates, len(positions), stream.threshold, stream.rows_scored,
    )
    return positions


def match_scores(background: Background, pwm: PWM, sequence: str) -> np.ndarray:
    """Full (unpruned) score of the motif at every start position.

    Returns:
        Array of ``len(sequence) - pwm.size + 1`` scores (empty if the
        sequence is shorter than the motif)
    """
    n_candidates = len(sequence) - pwm.size + 1
    if n_candidates <= 0:
        return np.empty(0, dtype=float)

    codes = encode_sequence(sequence).tolist()
    scanner = LookAheadScanner(background, pwm)
    return np.array([scanner.full_score(codes, i) for i in range(n_candidates)], dtype=float)


def find_tfbs_naive(
    background: Background,
    pwm: PWM,
    sequence: str,
    threshold: float,
) -> List[int]:
    """Find binding sites by scoring every position in full.

    Reference implementation for ``find_tfbs``; both return the same
    positions for any input.
    """
    threshold = _check_threshold(threshold)
    scores = match_scores(background, pwm, sequence)
    positions = [i for i, score in enumerate(scores.tolist()) if score >= threshold]
    logger.debug(
        "%s (naive): %d candidates, %d matches at threshold %.3f",
        pwm.name, len(scores), len(positions), threshold,
    )
    return positions


def max_match_score(
    background: Background,
    pwm: PWM,
    sequence: str,
    cancel_event: Optional[threading.Event] = None,
) -> float:
    """Highest full motif score over all start positions.

    The look-ahead threshold is the best score seen so far, so later
    positions are pruned against the running maximum.

    Returns:
        Maximum score, or -inf if the sequence is shorter than the motif
    """
    n_candidates = len(sequence) - pwm.size + 1
    best = -math.inf
    if n_candidates <= 0:
        return best

    codes = encode_sequence(sequence).tolist()
    scanner = LookAheadScanner(background, pwm)
    for i in range(n_candidates):
        _check_cancelled(cancel_event, i)
        result = scanner.search(codes, i, best)
        if isinstance(result, Matched):
            best = result.score

    logger.debug("%s: max match score %.3f over %d candidates", pwm.name, best, n_candidates)
    return best
