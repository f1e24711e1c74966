"""Spacing constraints between the binding sites of two motifs.

For every candidate offset ``i`` and orientation combination, counts the
motif-1 sites ``x`` that have at least one motif-2 site within
``[x + i - w, x + i + w]``. Reverse-strand sites are reported at their
3' coordinate (scan position + motif width - 1), so offsets between two
reverse-strand sites mirror those between forward-strand sites.
"""

import logging
from dataclasses import dataclass, asdict, field
from typing import Callable, Dict, Iterable, List, Set

from tqdm import tqdm

from ..models.background import Background
from ..models.pwm import PWM
from ..search.drivers import find_tfbs_all
from ..utils.config import TOP_SPACING_BINS
from .thresholds import pvalue_to_score

logger = logging.getLogger(__name__)

ScoreFunction = Callable[[float, Background, PWM], float]


@dataclass
class SpacingBin:
    """Overlap count of one (orientation, offset) bin."""
    same_orientation: bool
    offset: int
    count: int


@dataclass
class SpacingResult:
    """Ranked spacing bins plus the counts needed for significance."""
    bins: List[SpacingBin]
    n_motif1: int  # motif-1 sites, both strands
    n_motif2: int  # motif-2 sites, both strands
    sequence_length: int
    thresholds: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return asdict(self)

    @property
    def top(self) -> SpacingBin:
        if not self.bins:
            raise ValueError("No spacing bins")
        return self.bins[0]


def bin_offsets(bin_width: int, bin_bound: int) -> List[int]:
    """Symmetric bin centers spaced ``2w + 1`` apart within ``[-k, k]``.

    The non-positive half starts at ``-k``; the positive half is its
    mirror. A center at 0 appears once.
    """
    if bin_width < 0 or bin_bound < 0:
        raise ValueError(
            f"Bin width and bound must be non-negative, got {bin_width}, {bin_bound}"
        )
    half = list(range(-bin_bound, 1, 2 * bin_width + 1))
    mirror = [-i for i in reversed(half) if i != 0]
    return half + mirror


def count_overlaps(
    positions1: Iterable[int],
    positions2: Set[int],
    bin_width: int,
    offset: int,
) -> int:
    """Number of motif-1 sites with a motif-2 site in their offset window.

    Presence is counted once per motif-1 site, however many motif-2 sites
    fall in its window.
    """
    span = range(-bin_width, bin_width + 1)
    count = 0
    for x in positions1:
        center = x + offset
        if any(center + j in positions2 for j in span):
            count += 1
    return count


def spacing_constraint(
    pwm1: PWM,
    pwm2: PWM,
    background: Background,
    p_value: float,
    bin_width: int,
    bin_bound: int,
    sequence: str,
    score_fn: ScoreFunction = pvalue_to_score,
    top: int = TOP_SPACING_BINS,
    show_progress: bool = False,
) -> SpacingResult:
    """Rank relative offsets at which sites of two motifs co-occur.

    Args:
        pwm1: First motif
        pwm2: Second motif
        background: Background nucleotide model
        p_value: Site p-value, converted to a score threshold per motif
        bin_width: Half-width w of every offset bin
        bin_bound: Largest absolute offset k considered
        sequence: DNA sequence to scan
        score_fn: p-value to score threshold conversion
        top: Number of ranked bins to keep
        show_progress: Show a progress bar over offsets

    Returns:
        SpacingResult with the ``top`` bins by overlap count
    """
    offsets = bin_offsets(bin_width, bin_bound)

    th1 = score_fn(p_value, background, pwm1)
    th2 = score_fn(p_value, background, pwm2)
    m1 = pwm1.size
    m2 = pwm2.size

    forward1 = find_tfbs_all(background, pwm1, sequence, th1)
    reverse1 = [x + (m1 - 1) for x in find_tfbs_all(background, pwm1.reverse_complement(), sequence, th1)]
    forward2 = set(find_tfbs_all(background, pwm2, sequence, th2))
    reverse2 = {x + (m2 - 1) for x in find_tfbs_all(background, pwm2.reverse_complement(), sequence, th2)}

    logger.info(
        "Sites found: %s %d+/%d-, %s %d+/%d-",
        pwm1.name, len(forward1), len(reverse1), pwm2.name, len(forward2), len(reverse2),
    )

    same = []
    opposite = []
    for i in tqdm(offsets, desc="Offsets", disable=not show_progress):
        n_ff = count_overlaps(forward1, forward2, bin_width, i)
        n_rr = count_overlaps(reverse1, reverse2, bin_width, -i)
        n_fr = count_overlaps(forward1, reverse2, bin_width, i)
        n_rf = count_overlaps(reverse1, forward2, bin_width, -i)
        same.append(SpacingBin(same_orientation=True, offset=i, count=n_ff + n_rr))
        opposite.append(SpacingBin(same_orientation=False, offset=i, count=n_fr + n_rf))

    ranked = sorted(same + opposite, key=lambda b: b.count, reverse=True)

    return SpacingResult(
        bins=ranked[:top],
        n_motif1=len(forward1) + len(reverse1),
        n_motif2=len(forward2) + len(reverse2),
        sequence_length=len(sequence),
        thresholds={"motif1": th1, "motif2": th2},
    )
