"""Look-ahead motif scanning for tfscan."""

from .bounds import optimal_scores_suffix, score_table, suffix_bounds_from_table
from .lookahead import LookAheadScanner, Matched, Rejected
from .drivers import (
    MatchStream,
    find_tfbs,
    find_tfbs_all,
    find_tfbs_naive,
    match_scores,
    max_match_score,
)
