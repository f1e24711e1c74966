"""Tests for the scanning entry points."""

import itertools
import math
import threading

import numpy as np
import pytest

from tfscan.errors import InvalidSymbolError, ScanCancelledError
from tfscan.models.background import Background
from tfscan.models.pwm import PWM
from tfscan.search.drivers import (
    find_tfbs,
    find_tfbs_all,
    find_tfbs_naive,
    match_scores,
    max_match_score,
)
from tfscan.sequences.alphabet import reverse_complement

LOG4 = math.log(4)
MAX_AC = 2 * LOG4


def random_sequence(rng, length, alphabet="ACGT"):
    return ''.join(rng.choice(list(alphabet), size=length))


def separating_thresholds(scores):
    """Thresholds halfway between consecutive distinct scores, plus both ends."""
    distinct = np.unique(scores)
    mids = (distinct[:-1] + distinct[1:]) / 2
    return [distinct[0] - 1.0] + mids.tolist() + [distinct[-1] + 1.0]


class TestScenarios:
    @pytest.mark.parametrize("threshold", [MAX_AC - 1e-6, 2.0, 0.0])
    def test_ac_motif_in_aacgt(self, uniform_bg, ac_pwm, threshold):
        assert find_tfbs_all(uniform_bg, ac_pwm, "AACGT", threshold) == [1]
        assert find_tfbs_naive(uniform_bg, ac_pwm, "AACGT", threshold) == [1]

    def test_ac_motif_at_its_maximum_score(self, uniform_bg, ac_pwm):
        # The threshold is the exact score of the "AC" window
        best = max_match_score(uniform_bg, ac_pwm, "AACGT")
        assert best == pytest.approx(MAX_AC)
        assert find_tfbs_all(uniform_bg, ac_pwm, "AACGT", best) == [1]
        assert find_tfbs_naive(uniform_bg, ac_pwm, "AACGT", best) == [1]

    def test_ac_motif_absent(self, uniform_bg, ac_pwm):
        assert find_tfbs_all(uniform_bg, ac_pwm, "TTTT", 2.0) == []
        assert find_tfbs_naive(uniform_bg, ac_pwm, "TTTT", 2.0) == []

    def test_low_threshold_admits_partial_match(self, uniform_bg, ac_pwm):
        # "AA" scores log(4) + log(pseudocount / 0.25), about -6.44
        assert find_tfbs_all(uniform_bg, ac_pwm, "AACGT", -7.0) == [0, 1]

    def test_lowercase_sequence(self, uniform_bg, ac_pwm):
        assert find_tfbs_all(uniform_bg, ac_pwm, "aacgt", 2.0) == [1]

    def test_ambiguity_code_match(self, uniform_bg):
        pwm = PWM([[0.5, 0, 0.5, 0]], name="R")
        # R = A/G scores log(2); N scores 0; C scores very low
        assert find_tfbs_all(uniform_bg, pwm, "RNCA", 0.5) == [0, 3]
        assert find_tfbs_all(uniform_bg, pwm, "RNCA", 0.0) == [0, 1, 3]


class TestBoundaries:
    def test_sequence_equal_to_motif_width(self, uniform_bg, ac_pwm):
        assert find_tfbs_all(uniform_bg, ac_pwm, "AC", 2.0) == [0]
        assert find_tfbs_all(uniform_bg, ac_pwm, "CA", 2.0) == []

    def test_sequence_shorter_than_motif(self, uniform_bg, ac_pwm):
        assert find_tfbs_all(uniform_bg, ac_pwm, "A", 0.0) == []
        assert find_tfbs_naive(uniform_bg, ac_pwm, "A", 0.0) == []
        assert max_match_score(uniform_bg, ac_pwm, "A") == -math.inf
        assert match_scores(uniform_bg, ac_pwm, "").size == 0

    def test_short_sequence_is_not_validated(self, uniform_bg, ac_pwm):
        assert find_tfbs_all(uniform_bg, ac_pwm, "X", 0.0) == []

    def test_invalid_symbol_aborts_scan(self, uniform_bg, ac_pwm):
        with pytest.raises(InvalidSymbolError) as exc:
            find_tfbs_all(uniform_bg, ac_pwm, "ACAXAC", 2.0)
        assert exc.value.position == 3
        with pytest.raises(InvalidSymbolError):
            find_tfbs_naive(uniform_bg, ac_pwm, "ACAXAC", 2.0)
        with pytest.raises(InvalidSymbolError):
            max_match_score(uniform_bg, ac_pwm, "ACAXAC")

    def test_nan_threshold_rejected(self, uniform_bg, ac_pwm):
        with pytest.raises(ValueError):
            find_tfbs(uniform_bg, ac_pwm, "ACAC", float("nan"))


class TestMatchStream:
    def test_lazy_prefix(self, uniform_bg, ac_pwm):
        stream = find_tfbs(uniform_bg, ac_pwm, "AC" * 50, 2.0)
        assert list(itertools.islice(stream, 3)) == [0, 2, 4]

    def test_restartable(self, uniform_bg, ac_pwm):
        stream = find_tfbs(uniform_bg, ac_pwm, "ACGTAC", 2.0)
        assert list(stream) == [0, 4]
        assert list(stream) == [0, 4]

    def test_rows_scored_counts_pruning(self, uniform_bg, ac_pwm):
        stream = find_tfbs(uniform_bg, ac_pwm, "TTTTT", 2.0)
        assert list(stream) == []
        # Every candidate is abandoned after its first row
        assert stream.rows_scored == stream.n_candidates == 4

    def test_cancelled_before_start(self, uniform_bg, ac_pwm):
        event = threading.Event()
        event.set()
        with pytest.raises(ScanCancelledError) as exc:
            find_tfbs_all(uniform_bg, ac_pwm, "ACAC", 2.0, cancel_event=event)
        assert exc.value.position == 0

    def test_cancelled_mid_scan(self, uniform_bg, ac_pwm):
        event = threading.Event()
        stream = iter(find_tfbs(uniform_bg, ac_pwm, "ACACAC", 2.0, cancel_event=event))
        assert next(stream) == 0
        event.set()
        with pytest.raises(ScanCancelledError) as exc:
            next(stream)
        assert exc.value.position == 1

    def test_max_score_cancelled(self, uniform_bg, ac_pwm):
        event = threading.Event()
        event.set()
        with pytest.raises(ScanCancelledError):
            max_match_score(uniform_bg, ac_pwm, "ACAC", cancel_event=event)


class TestEquivalence:
    @pytest.mark.parametrize("seed", range(5))
    def test_pruned_matches_naive(self, seed):
        rng = np.random.RandomState(seed)
        bg = Background(*rng.dirichlet([4] * 4))
        pwm = PWM(rng.dirichlet([0.4] * 4, size=rng.randint(1, 10)))
        sequence = random_sequence(rng, 400, alphabet="ACGT" * 6 + "NRYKMSWBDHV")

        scores = match_scores(bg, pwm, sequence)
        for threshold in separating_thresholds(scores):
            pruned = find_tfbs_all(bg, pwm, sequence, threshold)
            naive = find_tfbs_naive(bg, pwm, sequence, threshold)
            assert pruned == naive
            assert pruned == sorted(set(pruned))

    @pytest.mark.parametrize("seed", range(20))
    def test_thresholds_at_attained_scores(self, seed):
        rng = np.random.RandomState(seed)
        bg = Background(*rng.dirichlet([4] * 4))
        pwm = PWM(rng.dirichlet([0.4] * 4, size=rng.randint(2, 14)))
        sequence = random_sequence(rng, 300)

        scores = match_scores(bg, pwm, sequence)
        distinct = np.unique(scores)
        for threshold in distinct[-30:].tolist() + distinct[:5].tolist():
            assert find_tfbs_all(bg, pwm, sequence, threshold) == \
                find_tfbs_naive(bg, pwm, sequence, threshold)

    def test_unnormalized_rows(self, uniform_bg, rng):
        # Frequencies below the background make every row's best score negative
        pwm = PWM(rng.dirichlet([1] * 4, size=6) * 0.1)
        sequence = random_sequence(rng, 300, alphabet="ACGTN")
        scores = match_scores(uniform_bg, pwm, sequence)
        for threshold in separating_thresholds(scores):
            assert find_tfbs_all(uniform_bg, pwm, sequence, threshold) == \
                find_tfbs_naive(uniform_bg, pwm, sequence, threshold)


class TestMaxMatchScore:
    def test_ac_motif(self, uniform_bg, ac_pwm):
        assert max_match_score(uniform_bg, ac_pwm, "AACGT") == pytest.approx(MAX_AC)

    def test_max_score_is_a_valid_threshold(self, rng):
        pwm = PWM(rng.dirichlet([0.5] * 4, size=9))
        bg = Background(0.3, 0.2, 0.2, 0.3)
        sequence = random_sequence(rng, 400)
        best = max_match_score(bg, pwm, sequence)
        hits = find_tfbs_all(bg, pwm, sequence, best)
        assert hits
        assert hits == find_tfbs_naive(bg, pwm, sequence, best)

    @pytest.mark.parametrize("seed", range(3))
    def test_agrees_with_full_scores(self, seed):
        rng = np.random.RandomState(seed)
        bg = Background(*rng.dirichlet([4] * 4))
        pwm = PWM(rng.dirichlet([0.5] * 4, size=8))
        sequence = random_sequence(rng, 500)
        expected = match_scores(bg, pwm, sequence).max()
        assert max_match_score(bg, pwm, sequence) == pytest.approx(expected)


class TestReverseStrand:
    def test_palindromic_site(self, uniform_bg, one_hot_pwm):
        pwm = one_hot_pwm("GATC")
        sequence = "AAGATCAA"
        assert find_tfbs_all(uniform_bg, pwm, sequence, 5.0) == [2]
        rc_hits = find_tfbs_all(uniform_bg, pwm.reverse_complement(), sequence, 5.0)
        # Reported at the 3' coordinate of the reverse-strand site
        assert [x + pwm.size - 1 for x in rc_hits] == [5]

    def test_reverse_strand_only_site(self, uniform_bg, one_hot_pwm):
        pwm = one_hot_pwm("GAT")
        sequence = "CCATCC"
        assert find_tfbs_all(uniform_bg, pwm, sequence, 4.0) == []
        assert find_tfbs_all(uniform_bg, pwm.reverse_complement(), sequence, 4.0) == [2]

    @pytest.mark.parametrize("seed", range(3))
    def test_rc_motif_equals_rc_sequence(self, seed):
        rng = np.random.RandomState(seed)
        bg = Background(0.3, 0.2, 0.2, 0.3)
        pwm = PWM(rng.dirichlet([0.5] * 4, size=6))
        sequence = random_sequence(rng, 300, alphabet="ACGTN")
        n = pwm.size

        scores = match_scores(bg, pwm.reverse_complement(), sequence)
        for threshold in separating_thresholds(scores):
            via_motif = {x + n - 1 for x in find_tfbs_all(bg, pwm.reverse_complement(), sequence, threshold)}
            via_sequence = {
                len(sequence) - 1 - j
                for j in find_tfbs_all(bg, pwm, reverse_complement(sequence), threshold)
            }
            assert via_motif == via_sequence
