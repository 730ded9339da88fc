# ==============================================
# Tests for PercentileFinder
# ==============================================

import random

import pytest

from recordsize_advisor.analysis import (
    AggregateState,
    DEFAULT_BIN_TABLE,
    KiB,
    MiB,
    PercentileFinder,
    SizeAggregator,
)


def _finder(sizes, table=DEFAULT_BIN_TABLE):
    return PercentileFinder(SizeAggregator(table).observe_all(sizes).seal())


class TestCumulativeFraction:
    def test_running_byte_share(self, coarse_table):
        finder = _finder([500, 500, 1000 * KiB, 2 * MiB], coarse_table)
        total = 1000 + 1000 * KiB + 2 * MiB
        assert finder.cumulative_fraction(0) == pytest.approx(1000 / total)
        assert finder.cumulative_fraction(1) == pytest.approx(1000 / total)
        assert finder.cumulative_fraction(2) == pytest.approx((1000 + 1000 * KiB) / total)
        assert finder.cumulative_fraction(3) == pytest.approx(1.0)

    def test_overflow_index_includes_overflow_bytes(self, coarse_table):
        finder = _finder([10, 64 * MiB], coarse_table)
        assert finder.cumulative_fraction(3) < 0.01
        assert finder.cumulative_fraction(coarse_table.overflow) == pytest.approx(1.0)

    def test_zero_total_bytes_gives_zero(self):
        finder = _finder([0, 0, 0])
        assert finder.cumulative_fraction(0) == 0.0


class TestFindPercentile:
    def test_byte_weighted_not_count_weighted(self):
        """One large file outweighs many small ones."""
        finder = _finder([100] * 1000 + [500 * MiB])
        index = finder.find_percentile(0.5)
        assert DEFAULT_BIN_TABLE.thresholds[index] == 512 * MiB

    def test_first_bin_reaching_threshold(self, coarse_table):
        finder = _finder([60 * KiB, 400 * KiB], coarse_table)
        # bin 1 holds 60/460 ≈ 13%, bin 2 brings it to 100%
        assert finder.find_percentile(0.10) == 1
        assert finder.find_percentile(0.50) == 2

    def test_exact_threshold_counts_as_reached(self, coarse_table):
        finder = _finder([1000, 1000 * KiB], coarse_table)
        # Two files: 1000 B in bin 0 and 1000 KiB in bin 2
        share = finder.cumulative_fraction(0)
        assert finder.find_percentile(share) == 0

    def test_overflow_when_only_overflow_reaches(self, coarse_table):
        finder = _finder([1, 100 * MiB], coarse_table)
        assert finder.find_percentile(0.9) == coarse_table.overflow

    def test_all_empty_files_resolve_to_overflow(self):
        finder = _finder([0] * 10)
        assert finder.find_percentile(0.5) == DEFAULT_BIN_TABLE.overflow

    @pytest.mark.parametrize("bad", [0.0, 1.0, -0.1, 1.5])
    def test_threshold_out_of_range(self, bad):
        with pytest.raises(ValueError):
            _finder([1]).find_percentile(bad)

    def test_monotonic_in_threshold(self):
        rng = random.Random(3)
        for _ in range(20):
            sizes = [rng.choice([0, 100, 4096, 70000, 3 * MiB, 200 * MiB, 2048 * MiB]) for _ in range(50)]
            finder = _finder(sizes)
            p50 = finder.find_percentile(0.50)
            p70 = finder.find_percentile(0.70)
            p90 = finder.find_percentile(0.90)
            assert p50 <= p70 <= p90


class TestRows:
    def test_rows_only_non_empty_bins(self, coarse_table):
        finder = _finder([10, 10, 2 * MiB, 40 * MiB], coarse_table)
        rows = finder.rows()
        assert [row.index for row in rows] == [0, 3, coarse_table.overflow]
        assert rows[-1].is_overflow
        assert rows[-1].threshold is None

    def test_row_percentages(self, coarse_table):
        finder = _finder([512, 512, 1536, 1536 * KiB], coarse_table)
        rows = {row.index: row for row in finder.rows()}
        total = 512 + 512 + 1536 + 1536 * KiB
        assert rows[0].file_percent == pytest.approx(50.0)
        assert rows[0].space_percent == pytest.approx(1024 / total * 100)
        assert rows[3].cumulative_percent == pytest.approx(100.0)

    def test_no_rows_for_empty_state(self):
        finder = PercentileFinder(AggregateState(bin_table=DEFAULT_BIN_TABLE))
        assert finder.rows() == []
