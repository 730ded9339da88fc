# ==============================================
# Decision (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of the analysis and the
#   thresholds that control it.
#
# WHY THIS FILE EXISTS:
#   Separating data classes from logic keeps the detector and the
#   engine small. These classes are also what the renderer and the
#   JSON output read.
#
# ENUMS:
# ------
# - Recordsize(Enum): 4k, 8k, 16k, 32k, 64k, 128k, 256k, 512k, 1M
#     The fixed ladder of recordsize values, smallest first.
#
# - WorkloadTier(Enum): sequential-write, mixed, sequential-read
#     The three sequential workload shapes a recommendation is made for.
#
# CLASSES:
# --------
# - SkewThresholds (dataclass)   → Limits used by the SkewDetector
# - SkewResult (dataclass)       → Output of the SkewDetector
# - TierRecommendation (dataclass) → Recordsize for one workload tier
# - DatasetSplit (dataclass)     → Suggested large/small dataset pair
# - BinRow (dataclass)           → One row of the distribution table
#
# ==============================================

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .bins import KiB, MiB


class Recordsize(Enum):
    """
    Enumeration of the recordsize values the advisor can recommend.

    Members are declared in ascending order, so ``list(Recordsize)``
    is the ladder.
    """
    R4K = "4k"
    R8K = "8k"
    R16K = "16k"
    R32K = "32k"
    R64K = "64k"
    R128K = "128k"
    R256K = "256k"
    R512K = "512k"
    R1M = "1M"

    @property
    def bytes(self) -> int:
        return _RECORDSIZE_BYTES[self.value]

    def __str__(self) -> str:
        return self.value


_RECORDSIZE_BYTES = {
    "4k": 4 * KiB,
    "8k": 8 * KiB,
    "16k": 16 * KiB,
    "32k": 32 * KiB,
    "64k": 64 * KiB,
    "128k": 128 * KiB,
    "256k": 256 * KiB,
    "512k": 512 * KiB,
    "1M": 1 * MiB,
}


class WorkloadTier(Enum):
    """
    Sequential workload shapes, each tied to a space percentile.

    - SEQUENTIAL_WRITE: whole-file writes (downloads, builds, logs) → P50
    - MIXED: unknown or mixed workload → P70
    - SEQUENTIAL_READ: read-heavy data (media, backups, archives) → P90
    """
    SEQUENTIAL_WRITE = "sequential-write"
    MIXED = "mixed"
    SEQUENTIAL_READ = "sequential-read"


@dataclass(frozen=True)
class SkewThresholds:
    """
    Configurable limits that control skew detection.

    A distribution is skewed when many files are small while most
    bytes sit in large files. Two policies are known; pick one with
    ``SkewThresholds.for_policy`` instead of mixing their values.
    """

    small_max_bytes: int = 64 * KiB
    """Bins with a threshold <= this value hold "small" files."""

    large_min_bytes: int = 1 * MiB
    """Bins with a threshold > this value (plus overflow) hold "large" files."""

    min_small_count_fraction: float = 0.60
    """Share of files that must be small (strictly greater than)."""

    min_large_byte_fraction: float = 0.80
    """Share of bytes that must be in large files (strictly greater than)."""

    min_small_files: int = 0
    """Absolute floor on the number of small files. 0 disables the floor."""

    @classmethod
    def canonical(cls) -> "SkewThresholds":
        return cls()

    @classmethod
    def count_floor(cls) -> "SkewThresholds":
        return cls(min_small_count_fraction=0.40, min_small_files=5000)

    @classmethod
    def for_policy(cls, policy: str) -> "SkewThresholds":
        """
        Look up a named policy.

        Args:
            policy: "canonical" or "count-floor"

        Raises:
            ValueError: For an unknown policy name
        """
        factories = {
            "canonical": cls.canonical,
            "count-floor": cls.count_floor,
        }
        if policy not in factories:
            raise ValueError(
                f"Unknown skew policy {policy!r} (expected one of: {', '.join(factories)})"
            )
        return factories[policy]()


SKEW_POLICIES = ("canonical", "count-floor")


@dataclass(frozen=True)
class SkewResult:
    """Outcome of the skew check."""

    is_skewed: bool
    small_count_fraction: float
    large_byte_fraction: float
    modal_small_bin: int
    small_max_bytes: int = 64 * KiB
    large_min_bytes: int = 1 * MiB
    reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_skewed": self.is_skewed,
            "small_count_fraction": self.small_count_fraction,
            "large_byte_fraction": self.large_byte_fraction,
            "modal_small_bin": self.modal_small_bin,
            "small_max_bytes": self.small_max_bytes,
            "large_min_bytes": self.large_min_bytes,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class TierRecommendation:
    """
    The recordsize chosen for one workload tier.

    ``naive`` is what the percentile bin maps to; ``recordsize`` is
    what is actually recommended (they differ only when a skew
    override was applied).
    """

    tier: WorkloadTier
    percentile: float
    bin_index: int  # may be the overflow index
    cumulative_fraction: float
    naive: Recordsize
    recordsize: Recordsize

    @property
    def overridden(self) -> bool:
        return self.naive is not self.recordsize

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tier": self.tier.value,
            "percentile": self.percentile,
            "bin_index": self.bin_index,
            "cumulative_fraction": self.cumulative_fraction,
            "naive": self.naive.value,
            "recordsize": self.recordsize.value,
            "overridden": self.overridden,
        }


@dataclass(frozen=True)
class DatasetSplit:
    """Suggested pair of child datasets for a skewed distribution."""

    large_files: Recordsize
    small_files: Recordsize

    def to_dict(self) -> Dict[str, str]:
        return {"large_files": self.large_files.value, "small_files": self.small_files.value}


@dataclass(frozen=True)
class BinRow:
    """
    One row of the distribution table.

    ``threshold`` is None for the overflow row. Percentages are
    0–100, not fractions.
    """

    index: int
    threshold: Optional[int]
    count: int
    bytes: int
    file_percent: float
    space_percent: float
    cumulative_percent: float

    @property
    def is_overflow(self) -> bool:
        return self.threshold is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "threshold": self.threshold,
            "count": self.count,
            "bytes": self.bytes,
            "file_percent": self.file_percent,
            "space_percent": self.space_percent,
            "cumulative_percent": self.cumulative_percent,
        }
