# ==============================================
# SizeAggregator
# ==============================================
#
# PURPOSE:
#   Observe a stream of file sizes, one at a time, and tally
#   per-bin counts and bytes. This is the "observation engine":
#   it watches sizes go by and builds the evidence.
#
# CLASS: SizeAggregator
# ---------------------
#   Stateful — accumulates counters until the stream is sealed.
#
#   Constructor:
#   ------------
#   - __init__(bin_table: BinTable = DEFAULT_BIN_TABLE)
#
#   Methods:
#   --------
#   - observe(size: int) -> None
#       Route one size into its bin (or the overflow tier).
#       O(log bins) time, no per-sample storage.
#
#   - observe_all(sizes: Iterable[int]) -> SizeAggregator
#       Fold a whole stream.
#
#   - snapshot() -> AggregateState
#       Consistent state for the prefix seen so far.
#
#   - seal() -> AggregateState
#       End of stream. Raises EmptyDataset when nothing was observed.
#
#   Memory:
#   -------
#   Two lists of len(bin_table) + 1 integers, the last slot being
#   the overflow tier. Nothing grows with the number of samples.
#
# ==============================================

from typing import Iterable

from .bins import BinTable, DEFAULT_BIN_TABLE
from .errors import EmptyDataset, InvalidSample
from .size_stats import AggregateState


class SizeAggregator:
    """
    Single-pass, constant-memory accumulator of file sizes.

    The result only depends on the multiset of sizes, never on
    their order.
    """

    def __init__(self, bin_table: BinTable = DEFAULT_BIN_TABLE):
        """
        Initialize the SizeAggregator.

        Args:
            bin_table: Thresholds used to bucket sizes. Defaults to the
                       22 power-of-two bins from 512 B to 1 GiB.
        """
        self.bin_table = bin_table
        # One slot per bin plus the overflow tier at index len(bin_table)
        self._counts = [0] * (len(bin_table) + 1)
        self._bytes = [0] * (len(bin_table) + 1)
        self.total_files: int = 0
        self.total_bytes: int = 0
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def observe(self, size: int) -> None:
        """
        Add one file size to the tallies.

        Args:
            size: File size in bytes (zero is valid and goes to bin 0)

        Raises:
            InvalidSample: If size is negative or not an integer
            RuntimeError: If the stream was already sealed
        """
        if self._sealed:
            raise RuntimeError("Cannot observe sizes after the stream has been sealed")
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise InvalidSample(size, position=self.total_files)

        index = self.bin_table.assign(size)
        self._counts[index] += 1
        self._bytes[index] += size

        self.total_files += 1
        self.total_bytes += size

    def observe_all(self, sizes: Iterable[int]) -> "SizeAggregator":
        """
        Observe every size of an iterable, in order.

        The iterable is consumed lazily, so generators of any length work.

        Args:
            sizes: Stream of file sizes

        Returns:
            self, to allow ``SizeAggregator().observe_all(sizes).seal()``
        """
        for size in sizes:
            self.observe(size)
        return self

    def snapshot(self) -> AggregateState:
        """
        Build a state from the samples observed so far.

        Every prefix of the stream satisfies the count and byte
        invariants, so a snapshot taken mid-stream is a valid
        (partial) result.
        """
        overflow = self.bin_table.overflow
        return AggregateState(
            bin_table=self.bin_table,
            total_files=self.total_files,
            total_bytes=self.total_bytes,
            per_bin_count=tuple(self._counts[:overflow]),
            per_bin_bytes=tuple(self._bytes[:overflow]),
            overflow_count=self._counts[overflow],
            overflow_bytes=self._bytes[overflow],
        )

    def seal(self) -> AggregateState:
        """
        Mark the end of the stream and return the final state.

        Returns:
            The immutable AggregateState

        Raises:
            EmptyDataset: If no file was observed (the empty state is
                          attached to the exception)
        """
        self._sealed = True
        state = self.snapshot()
        if state.is_empty:
            raise EmptyDataset(state)
        return state
