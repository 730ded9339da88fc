# ==============================================
# SkewDetector
# ==============================================
#
# PURPOSE:
#   Decide whether the file-count distribution and the byte
#   distribution disagree so much that a single recordsize is a
#   forced compromise.
#
# WHY THIS CLASS EXISTS:
#   A right-skewed tree (lots of tiny files, most bytes in a few
#   huge ones) makes the byte-weighted percentiles point at 1M
#   while most writes hit small files. When that happens the
#   engine protects the write-heavy and mixed tiers.
#
# CLASS: SkewDetector
# -------------------
#   Stateless — takes an AggregateState in, returns a SkewResult.
#
#   Constructor:
#   ------------
#   - __init__(thresholds: SkewThresholds = None)
#
#   Methods:
#   --------
#   - detect(state: AggregateState) -> SkewResult
#       small = bins with threshold <= small_max_bytes (64 KiB)
#       large = bins with threshold >  large_min_bytes (1 MiB) + overflow
#
#       small_count_fraction = small files / total_files
#       large_byte_fraction  = large bytes / total_bytes
#
#       SKEWED when BOTH:
#         small_count_fraction > min_small_count_fraction (0.60)
#         large_byte_fraction  > min_large_byte_fraction  (0.80)
#       and, if a floor is configured, small files >= min_small_files
#
#   - modal_small_bin(state) -> int
#       Small bin with the most files (ties → lowest threshold).
#
# ==============================================

from .decision import SkewResult, SkewThresholds
from .size_stats import AggregateState


class SkewDetector:
    """
    Applies the count-vs-bytes rule to an AggregateState.
    """

    def __init__(self, thresholds: SkewThresholds = None):
        """
        Initialize the SkewDetector with configurable thresholds.

        Args:
            thresholds: Optional SkewThresholds. If not provided, the
                       canonical policy is used (60% of files small,
                       80% of bytes large).
        """
        self.thresholds = thresholds or SkewThresholds.canonical()

    def detect(self, state: AggregateState) -> SkewResult:
        """
        Evaluate the skew rule.

        Args:
            state: Sealed statistics of the run

        Returns:
            A SkewResult with both fractions and the modal small bin
        """
        thresholds = self.thresholds
        table = state.bin_table
        small_bins = table.indices_at_most(thresholds.small_max_bytes)
        large_bins = table.indices_above(thresholds.large_min_bytes)

        small_count = sum(state.per_bin_count[i] for i in small_bins)
        large_bytes = sum(state.per_bin_bytes[i] for i in large_bins) + state.overflow_bytes

        small_count_fraction = small_count / state.total_files if state.total_files > 0 else 0.0
        large_byte_fraction = large_bytes / state.total_bytes if state.total_bytes > 0 else 0.0

        is_skewed = (
            small_count_fraction > thresholds.min_small_count_fraction
            and large_byte_fraction > thresholds.min_large_byte_fraction
            and small_count >= thresholds.min_small_files
        )

        if is_skewed:
            reason = (
                f"{small_count_fraction*100:.0f}% of files are small but "
                f"{large_byte_fraction*100:.0f}% of the space is in large files."
            )
        else:
            reason = (
                f"Small files: {small_count_fraction*100:.1f}% of count, "
                f"large files: {large_byte_fraction*100:.1f}% of space. No skew."
            )

        return SkewResult(
            is_skewed=is_skewed,
            small_count_fraction=small_count_fraction,
            large_byte_fraction=large_byte_fraction,
            modal_small_bin=self.modal_small_bin(state),
            small_max_bytes=thresholds.small_max_bytes,
            large_min_bytes=thresholds.large_min_bytes,
            reason=reason,
        )

    def modal_small_bin(self, state: AggregateState) -> int:
        """
        Find the small bin holding the most files.

        Ties go to the lowest threshold. Falls back to bin 0 when the
        table has no small bin at all.
        """
        small_bins = state.bin_table.indices_at_most(self.thresholds.small_max_bytes)
        if not small_bins:
            return 0
        # Highest count first, then the lowest index
        return max(small_bins, key=lambda i: (state.per_bin_count[i], -i))
