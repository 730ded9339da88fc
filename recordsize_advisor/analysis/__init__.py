# ==============================================
# CORE: SIZE DISTRIBUTION ANALYSIS
# ==============================================
#
# This package turns a stream of file sizes into the evidence
# used to pick a ZFS recordsize.
#
# Two-step process:
#   Step 1 (Aggregation):    Observe sizes → per-bin counts and bytes
#   Step 2 (Interpretation): CDF percentiles + skew check → recordsizes
#
# Modules:
# --------
# - bins.py               → Fixed table of size thresholds (BinTable)
# - errors.py             → InvalidSample, EmptyDataset
# - size_stats.py         → Sealed per-bin statistics (AggregateState)
# - size_aggregator.py    → Observe sizes one at a time, O(bins) memory
# - percentile.py         → Space-weighted CDF and percentile lookup
# - recordsize_mapper.py  → Byte value / bin → recordsize ladder value
# - skew_detector.py      → Count-vs-bytes imbalance check
# - decision.py           → Data classes for results and thresholds
#
# ==============================================

from .bins import BinTable, DEFAULT_BIN_TABLE, KiB, MiB, GiB
from .errors import RecordsizeError, InvalidSample, EmptyDataset
from .size_stats import AggregateState
from .size_aggregator import SizeAggregator
from .percentile import PercentileFinder
from .recordsize_mapper import RecordsizeMapper
from .skew_detector import SkewDetector
from .decision import (
    BinRow,
    DatasetSplit,
    Recordsize,
    SkewResult,
    SkewThresholds,
    TierRecommendation,
    WorkloadTier,
)

__all__ = [
    "BinTable",
    "DEFAULT_BIN_TABLE",
    "KiB",
    "MiB",
    "GiB",
    "RecordsizeError",
    "InvalidSample",
    "EmptyDataset",
    "AggregateState",
    "SizeAggregator",
    "PercentileFinder",
    "RecordsizeMapper",
    "SkewDetector",
    "BinRow",
    "DatasetSplit",
    "Recordsize",
    "SkewResult",
    "SkewThresholds",
    "TierRecommendation",
    "WorkloadTier",
]
