"""Threshold, spacing and significance analysis for tfscan."""

from .thresholds import pvalue_to_score, score_to_pvalue, score_distribution
from .spacing import (
    SpacingBin,
    SpacingResult,
    bin_offsets,
    count_overlaps,
    spacing_constraint,
)
from .significance import (
    BinSignificance,
    annotate_spacing_result,
    benjamini_hochberg,
    spacing_pvalue,
)
