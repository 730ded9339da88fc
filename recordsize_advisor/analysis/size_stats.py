# ==============================================
# AggregateState
# ==============================================
#
# PURPOSE:
#   Frozen data class holding the per-bin statistics of one run.
#   This is the "evidence" the percentile finder, the skew detector
#   and the recommendation engine read.
#
# CLASS: AggregateState (frozen dataclass)
# ----------------------------------------
#   Attributes:
#   -----------
#   - bin_table: BinTable            → Table the sizes were bucketed with
#   - total_files: int               → Number of files observed
#   - total_bytes: int               → Sum of all observed sizes
#   - per_bin_count: tuple[int, ...] → Files per regular bin
#   - per_bin_bytes: tuple[int, ...] → Bytes per regular bin
#   - overflow_count: int            → Files above the largest threshold
#   - overflow_bytes: int            → Bytes above the largest threshold
#
#   Invariants:
#   -----------
#     sum(per_bin_count) + overflow_count == total_files
#     sum(per_bin_bytes) + overflow_bytes == total_bytes
#
#   Computed Properties / Methods:
#   ------------------------------
#   - is_empty -> bool
#   - count_at(index) / bytes_at(index)   (overflow index allowed)
#   - file_fraction(index) / space_fraction(index)
#   - to_dict() -> dict
#
# ==============================================

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .bins import BinTable


@dataclass(frozen=True)
class AggregateState:
    """
    Sealed statistics of a size stream.

    Built by SizeAggregator; never mutated afterwards.
    """

    bin_table: BinTable
    total_files: int = 0
    total_bytes: int = 0
    per_bin_count: Tuple[int, ...] = ()
    per_bin_bytes: Tuple[int, ...] = ()
    overflow_count: int = 0
    overflow_bytes: int = 0

    def __post_init__(self):
        if not self.per_bin_count:
            object.__setattr__(self, "per_bin_count", (0,) * len(self.bin_table))
        if not self.per_bin_bytes:
            object.__setattr__(self, "per_bin_bytes", (0,) * len(self.bin_table))
        if len(self.per_bin_count) != len(self.bin_table) or len(self.per_bin_bytes) != len(self.bin_table):
            raise ValueError("Per-bin tallies must have one entry per bin")

    @property
    def is_empty(self) -> bool:
        return self.total_files == 0

    def count_at(self, index: int) -> int:
        """Number of files in a bin; the overflow index is accepted."""
        if self.bin_table.is_overflow(index):
            return self.overflow_count
        return self.per_bin_count[index]

    def bytes_at(self, index: int) -> int:
        """Bytes in a bin; the overflow index is accepted."""
        if self.bin_table.is_overflow(index):
            return self.overflow_bytes
        return self.per_bin_bytes[index]

    def file_fraction(self, index: int) -> float:
        """
        Share of all files that fall in a bin.

        Returns:
            A value between 0.0 and 1.0 (0.0 when no files were seen)
        """
        if self.total_files == 0:
            return 0.0
        return self.count_at(index) / self.total_files

    def space_fraction(self, index: int) -> float:
        """
        Share of all bytes that fall in a bin.

        Returns:
            A value between 0.0 and 1.0 (0.0 when total_bytes is zero)
        """
        if self.total_bytes == 0:
            return 0.0
        return self.bytes_at(index) / self.total_bytes

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the state to a JSON-serializable dictionary.

        Returns:
            Totals plus the per-bin tallies keyed by threshold.
        """
        return {
            "total_files": self.total_files,
            "total_bytes": self.total_bytes,
            "thresholds": list(self.bin_table.thresholds),
            "per_bin_count": list(self.per_bin_count),
            "per_bin_bytes": list(self.per_bin_bytes),
            "overflow_count": self.overflow_count,
            "overflow_bytes": self.overflow_bytes,
        }
