# ==============================================
# BinTable
# ==============================================
#
# PURPOSE:
#   The ordered, fixed list of byte-size thresholds that every
#   other component uses to bucket file sizes. It is the only
#   place bin boundaries are defined.
#
# CLASS: BinTable (frozen dataclass)
# ----------------------------------
#   Attributes:
#   -----------
#   - thresholds: tuple[int, ...]   → Strictly increasing upper bounds
#
#   Bin i covers (thresholds[i-1], thresholds[i]]; bin 0 covers
#   [0, thresholds[0]]. Sizes above the last threshold land in the
#   overflow tier, whose index is len(thresholds).
#
#   Methods:
#   --------
#   - assign(size: int) -> int
#       Index of the smallest bin whose threshold is >= size,
#       or the overflow index.
#   - is_overflow(index: int) -> bool
#   - threshold(index: int) -> int
#   - indices_at_most(limit: int) -> range
#   - indices_above(limit: int) -> range
#
# ==============================================

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Tuple

KiB = 1024
MiB = 1024 * KiB
GiB = 1024 * MiB


@dataclass(frozen=True)
class BinTable:
    """
    Immutable table of bin thresholds.

    Passed explicitly to the aggregator, the mapper and the skew
    detector so tests can swap in a coarser table.
    """

    thresholds: Tuple[int, ...]

    def __post_init__(self):
        thresholds = tuple(int(t) for t in self.thresholds)
        if not thresholds:
            raise ValueError("A bin table needs at least one threshold")
        if thresholds[0] < 0:
            raise ValueError("Bin thresholds must be non-negative")
        for lower, upper in zip(thresholds, thresholds[1:]):
            if upper <= lower:
                raise ValueError(
                    f"Bin thresholds must be strictly increasing ({lower} >= {upper})"
                )
        object.__setattr__(self, "thresholds", thresholds)

    def __len__(self) -> int:
        return len(self.thresholds)

    @property
    def overflow(self) -> int:
        """Index of the implicit overflow tier (one past the last bin)."""
        return len(self.thresholds)

    @property
    def largest(self) -> int:
        return self.thresholds[-1]

    def is_overflow(self, index: int) -> bool:
        return index >= len(self.thresholds)

    def assign(self, size: int) -> int:
        """
        Route a size to its bin.

        A size equal to a threshold belongs to that bin (inclusive
        upper bound).

        Args:
            size: Non-negative size in bytes

        Returns:
            The bin index, or ``self.overflow`` for sizes above the last threshold
        """
        return bisect_left(self.thresholds, size)

    def threshold(self, index: int) -> int:
        if self.is_overflow(index):
            raise IndexError("The overflow tier has no threshold")
        return self.thresholds[index]

    def indices_at_most(self, limit: int) -> range:
        """Indices of bins whose threshold is <= limit."""
        return range(bisect_right(self.thresholds, limit))

    def indices_above(self, limit: int) -> range:
        """Indices of regular bins whose threshold is > limit (overflow excluded)."""
        return range(bisect_right(self.thresholds, limit), len(self.thresholds))


# 512 B, 1 KiB, 2 KiB ... 1 GiB
DEFAULT_THRESHOLDS = tuple(512 << shift for shift in range(22))

DEFAULT_BIN_TABLE = BinTable(DEFAULT_THRESHOLDS)
