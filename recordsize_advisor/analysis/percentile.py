# ==============================================
# PercentileFinder
# ==============================================
#
# PURPOSE:
#   Turn per-bin byte totals into a cumulative distribution and
#   resolve a percentile to the bin where it is reached.
#
# WEIGHTING:
#   The CDF is weighted by BYTES, not by file count. One huge file
#   can outweigh millions of tiny ones: blocks are sized for where
#   the data lives.
#
# CLASS: PercentileFinder
# -----------------------
#   Stateless beyond the state it reads.
#
#   - cumulative_fraction(index) -> float
#       sum(per_bin_bytes[0..index]) / total_bytes
#       (overflow index → includes overflow bytes, i.e. 1.0)
#
#   - find_percentile(threshold) -> int
#       First bin with cumulative_fraction >= threshold, scanning
#       in ascending order; overflow index if none.
#
#   - rows() -> list[BinRow]
#       Counts, bytes and percentages per non-empty bin.
#
# ==============================================

from itertools import accumulate
from typing import List

from .decision import BinRow
from .size_stats import AggregateState


class PercentileFinder:
    def __init__(self, state: AggregateState):
        self.state = state
        # Running byte sums; the last entry includes the overflow tier
        self._cumulative = list(accumulate(state.per_bin_bytes + (state.overflow_bytes,)))

    def cumulative_bytes(self, index: int) -> int:
        return self._cumulative[min(index, self.state.bin_table.overflow)]

    def cumulative_fraction(self, index: int) -> float:
        """
        Fraction of all bytes held by bins 0..index.

        Returns:
            A value between 0.0 and 1.0, or 0.0 when total_bytes is zero
        """
        if self.state.total_bytes == 0:
            return 0.0
        return self.cumulative_bytes(index) / self.state.total_bytes

    def find_percentile(self, threshold: float) -> int:
        """
        Find the bin where the space-weighted CDF reaches a threshold.

        Args:
            threshold: Target fraction, strictly between 0 and 1

        Returns:
            The bin index, or the overflow index if only the overflow
            tier reaches the threshold (also the answer when every
            file is empty)

        Raises:
            ValueError: If threshold is outside (0, 1)
        """
        if not 0.0 < threshold < 1.0:
            raise ValueError(f"Percentile threshold must be in (0, 1), got {threshold}")

        if self.state.total_bytes > 0:
            for index in range(len(self.state.bin_table)):
                if self.cumulative_fraction(index) >= threshold:
                    return index
        return self.state.bin_table.overflow

    def rows(self) -> List[BinRow]:
        """
        Build the distribution table rows.

        Only bins holding at least one file are listed; the overflow
        row comes last when it is non-empty.
        """
        state = self.state
        table = state.bin_table
        rows = []
        for index in range(len(table) + 1):
            count = state.count_at(index)
            if count == 0:
                continue
            rows.append(
                BinRow(
                    index=index,
                    threshold=None if table.is_overflow(index) else table.threshold(index),
                    count=count,
                    bytes=state.bytes_at(index),
                    file_percent=state.file_fraction(index) * 100,
                    space_percent=state.space_fraction(index) * 100,
                    cumulative_percent=self.cumulative_fraction(index) * 100,
                )
            )
        return rows
