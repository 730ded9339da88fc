# ==============================================
# Tests for SkewDetector
# ==============================================

import random

import pytest

from recordsize_advisor.analysis import (
    DEFAULT_BIN_TABLE,
    KiB,
    MiB,
    SizeAggregator,
    SkewDetector,
    SkewThresholds,
)


def _state(sizes):
    return SizeAggregator().observe_all(sizes).seal()


class TestSkewRule:
    def test_many_small_files_most_bytes_large(self, scenario_b_sizes):
        result = SkewDetector().detect(_state(scenario_b_sizes()))
        assert result.is_skewed
        assert result.small_count_fraction == pytest.approx(10_000 / 10_010)
        assert result.large_byte_fraction == pytest.approx(
            10 * 100 * MiB / (10_000 * 4096 + 10 * 100 * MiB)
        )

    def test_even_count_split_is_not_skewed(self, scenario_a_sizes):
        """50% small files is below the 60% count requirement."""
        result = SkewDetector().detect(_state(scenario_a_sizes))
        assert not result.is_skewed
        assert result.small_count_fraction == pytest.approx(0.5)

    def test_small_files_only_is_not_skewed(self):
        """Count condition alone is not enough."""
        result = SkewDetector().detect(_state([4096] * 100))
        assert result.small_count_fraction == 1.0
        assert result.large_byte_fraction == 0.0
        assert not result.is_skewed

    def test_large_bytes_only_is_not_skewed(self):
        """Byte condition alone is not enough."""
        result = SkewDetector().detect(_state([200 * MiB] * 5 + [100] * 2))
        assert result.large_byte_fraction > 0.99
        assert not result.is_skewed

    def test_medium_files_count_as_neither(self):
        """128 KiB .. 1 MiB files are neither small nor large."""
        result = SkewDetector().detect(_state([512 * KiB] * 10))
        assert result.small_count_fraction == 0.0
        assert result.large_byte_fraction == 0.0

    def test_overflow_counts_as_large(self):
        result = SkewDetector().detect(_state([100] * 9 + [2 * 1024 * MiB]))
        assert result.large_byte_fraction > 0.99
        assert result.is_skewed

    def test_empty_files_do_not_divide_by_zero(self):
        result = SkewDetector().detect(_state([0, 0, 0]))
        assert result.large_byte_fraction == 0.0
        assert not result.is_skewed

    def test_flag_matches_rule_on_random_streams(self):
        """is_skewed iff count > 0.60 and bytes > 0.80."""
        rng = random.Random(5)
        detector = SkewDetector()
        for _ in range(200):
            n_small = rng.randint(0, 50)
            n_large = rng.randint(0, 5)
            n_mid = rng.randint(0, 10)
            sizes = (
                [rng.randint(0, 64 * KiB) for _ in range(n_small)]
                + [rng.randint(1 * MiB + 1, 50 * MiB) for _ in range(n_large)]
                + [rng.randint(64 * KiB + 1, 1 * MiB) for _ in range(n_mid)]
            )
            if not sizes:
                continue
            result = detector.detect(_state(sizes))
            expected = result.small_count_fraction > 0.60 and result.large_byte_fraction > 0.80
            assert result.is_skewed == expected


class TestModalSmallBin:
    def test_most_populated_small_bin(self):
        sizes = [100] * 3 + [3000] * 7 + [60 * KiB] * 5
        result = SkewDetector().detect(_state(sizes))
        assert DEFAULT_BIN_TABLE.thresholds[result.modal_small_bin] == 4 * KiB

    def test_ties_go_to_lowest_threshold(self):
        sizes = [2000] * 4 + [30 * KiB] * 4
        result = SkewDetector().detect(_state(sizes))
        assert DEFAULT_BIN_TABLE.thresholds[result.modal_small_bin] == 2 * KiB

    def test_large_files_ignored(self):
        sizes = [10 * MiB] * 50 + [8000] * 2
        result = SkewDetector().detect(_state(sizes))
        assert DEFAULT_BIN_TABLE.thresholds[result.modal_small_bin] == 8 * KiB

    def test_no_small_files_falls_back_to_bin_zero(self):
        result = SkewDetector().detect(_state([10 * MiB]))
        assert result.modal_small_bin == 0


class TestPolicies:
    def _state_with_counts(self, n_small, n_large):
        return _state([4096] * n_small + [500 * MiB] * n_large)

    def test_canonical_values(self):
        thresholds = SkewThresholds.for_policy("canonical")
        assert thresholds.min_small_count_fraction == 0.60
        assert thresholds.min_large_byte_fraction == 0.80
        assert thresholds.min_small_files == 0

    def test_count_floor_values(self):
        thresholds = SkewThresholds.for_policy("count-floor")
        assert thresholds.min_small_count_fraction == 0.40
        assert thresholds.min_small_files == 5000

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            SkewThresholds.for_policy("aggressive")

    def test_count_floor_needs_5000_small_files(self):
        detector = SkewDetector(SkewThresholds.count_floor())
        assert not detector.detect(self._state_with_counts(100, 50)).is_skewed
        assert detector.detect(self._state_with_counts(6000, 5000)).is_skewed

    def test_count_floor_accepts_lower_count_share(self):
        """50% small files: skewed under count-floor, not under canonical."""
        state = self._state_with_counts(6000, 6000)
        assert SkewDetector(SkewThresholds.count_floor()).detect(state).is_skewed
        assert not SkewDetector().detect(state).is_skewed

    def test_thresholds_recorded_on_result(self):
        thresholds = SkewThresholds(small_max_bytes=16 * KiB, large_min_bytes=8 * MiB)
        result = SkewDetector(thresholds).detect(_state([100]))
        assert result.small_max_bytes == 16 * KiB
        assert result.large_min_bytes == 8 * MiB
