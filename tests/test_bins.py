# ==============================================
# Tests for BinTable
# ==============================================

import pytest

from recordsize_advisor.analysis import BinTable, DEFAULT_BIN_TABLE, GiB, KiB, MiB


class TestDefaultTable:
    def test_has_22_bins_from_512_to_1gib(self):
        """Default table spans 512 B to 1 GiB in powers of two."""
        assert len(DEFAULT_BIN_TABLE) == 22
        assert DEFAULT_BIN_TABLE.thresholds[0] == 512
        assert DEFAULT_BIN_TABLE.largest == 1 * GiB

    def test_thresholds_double(self):
        thresholds = DEFAULT_BIN_TABLE.thresholds
        assert all(b == 2 * a for a, b in zip(thresholds, thresholds[1:]))


class TestAssign:
    def test_zero_goes_to_bin_zero(self):
        assert DEFAULT_BIN_TABLE.assign(0) == 0

    def test_threshold_is_inclusive(self):
        """A size equal to a threshold belongs to that bin, not the next."""
        index = DEFAULT_BIN_TABLE.assign(128 * KiB)
        assert DEFAULT_BIN_TABLE.thresholds[index] == 128 * KiB

    def test_one_above_threshold_goes_to_next_bin(self):
        index = DEFAULT_BIN_TABLE.assign(128 * KiB + 1)
        assert DEFAULT_BIN_TABLE.thresholds[index] == 256 * KiB

    def test_above_largest_is_overflow(self):
        index = DEFAULT_BIN_TABLE.assign(1 * GiB + 1)
        assert index == DEFAULT_BIN_TABLE.overflow
        assert DEFAULT_BIN_TABLE.is_overflow(index)

    def test_largest_threshold_is_not_overflow(self):
        assert not DEFAULT_BIN_TABLE.is_overflow(DEFAULT_BIN_TABLE.assign(1 * GiB))

    def test_smallest_bin_with_threshold_at_least_size(self, coarse_table):
        assert coarse_table.assign(1) == 0
        assert coarse_table.assign(1025) == 1
        assert coarse_table.assign(64 * KiB) == 1
        assert coarse_table.assign(2 * MiB) == 3
        assert coarse_table.assign(17 * MiB) == coarse_table.overflow


class TestRanges:
    def test_indices_at_most(self):
        """Small bins of the default table: 512 B .. 64 KiB."""
        assert list(DEFAULT_BIN_TABLE.indices_at_most(64 * KiB)) == list(range(8))

    def test_indices_above(self):
        """Large bins of the default table: 2 MiB .. 1 GiB."""
        assert list(DEFAULT_BIN_TABLE.indices_above(1 * MiB)) == list(range(12, 22))

    def test_threshold_of_overflow_raises(self):
        with pytest.raises(IndexError):
            DEFAULT_BIN_TABLE.threshold(DEFAULT_BIN_TABLE.overflow)


class TestValidation:
    def test_empty_table_rejected(self):
        with pytest.raises(ValueError):
            BinTable(())

    def test_non_increasing_rejected(self):
        with pytest.raises(ValueError):
            BinTable((1024, 1024, 4096))

    def test_decreasing_rejected(self):
        with pytest.raises(ValueError):
            BinTable((4096, 1024))

    def test_list_input_becomes_tuple(self):
        table = BinTable([1, 2, 3])
        assert table.thresholds == (1, 2, 3)
        assert table == BinTable((1, 2, 3))
