# ==============================================
# RecordsizeMapper
# ==============================================
#
# PURPOSE:
#   Convert a byte value, or a bin of the BinTable, into one of the
#   recordsize values ZFS accepts.
#
# CLASS: RecordsizeMapper
# -----------------------
#   Stateless once built.
#
#   Methods:
#   --------
#   - map(size_bytes: int) -> Recordsize
#       Smallest ladder value >= size_bytes, else the top (1M).
#
#   - map_bin(index: int) -> Recordsize
#       map(threshold[index]); the overflow tier maps to 1M.
#
# ==============================================

from typing import Sequence

from .bins import BinTable, DEFAULT_BIN_TABLE
from .decision import Recordsize


class RecordsizeMapper:
    """
    Maps byte values and bins onto the recordsize ladder.

    Policy: the smallest ladder value >= the byte value; anything
    above the top of the ladder gets the top (1M).
    """

    def __init__(
        self,
        bin_table: BinTable = DEFAULT_BIN_TABLE,
        ladder: Sequence[Recordsize] = tuple(Recordsize),
    ):
        self.bin_table = bin_table
        self.ladder = tuple(sorted(ladder, key=lambda r: r.bytes))

    @property
    def largest(self) -> Recordsize:
        return self.ladder[-1]

    def map(self, size_bytes: int) -> Recordsize:
        """
        Map a byte value to a recordsize.

        Args:
            size_bytes: Non-negative byte value

        Returns:
            The smallest ladder value that holds size_bytes, or the
            largest ladder value

        Raises:
            ValueError: If size_bytes is negative
        """
        if size_bytes < 0:
            raise ValueError(f"Cannot map a negative size ({size_bytes})")
        for recordsize in self.ladder:
            if size_bytes <= recordsize.bytes:
                return recordsize
        return self.largest

    def map_bin(self, index: int) -> Recordsize:
        """Map a bin (by its threshold) or the overflow tier to a recordsize."""
        if self.bin_table.is_overflow(index):
            return self.largest
        return self.map(self.bin_table.threshold(index))
