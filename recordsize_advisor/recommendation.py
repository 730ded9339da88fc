# ==============================================
# RecommendationEngine — Final Orchestrator
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS that ties the analysis components
#   together. Callers feed it sizes (or a sealed state) and get a
#   RecordsizeReport back. Everything else is internal.
#
# HOW IT CONNECTS THE COMPONENTS:
#
#   sizes ──► SizeAggregator ──► AggregateState (sealed)
#                                   │
#                  ┌────────────────┼─────────────────┐
#                  ▼                                  ▼
#          PercentileFinder                      SkewDetector
#          P50 / P70 / P90 bins                  SkewResult
#                  │                                  │
#                  ▼                                  │
#          RecordsizeMapper ──► naive recordsizes     │
#                  │                                  │
#                  └──────────► overrides ◄───────────┘
#                                   │
#                                   ▼
#                           RecordsizeReport
#
# ORDER OF OPERATIONS (recommend):
# --------------------------------
#   1. Empty state          → empty report, nothing else computed
#   2. Percentile bins      → 0.50 write, 0.70 mixed, 0.90 read
#   3. Map bins             → naive recordsizes
#   4. Skew check           → if skewed: write=128k, mixed=256k
#                              (read is never overridden)
#   5. Collapse             → one value when all three tiers agree
#   6. Random I/O reference → static table, attached unconditionally
#   7. Dataset split        → only when skewed: 1M + modal small bin
#
# CLASS: RecordsizeReport (dataclass)
# -----------------------------------
#   Everything a renderer needs without recomputation: the state,
#   the tier recommendations, the skew result, the split, the
#   per-bin rows and the random I/O reference.
#
# ==============================================

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from recordsize_advisor.analysis.bins import BinTable, DEFAULT_BIN_TABLE
from recordsize_advisor.analysis.decision import (
    BinRow,
    DatasetSplit,
    Recordsize,
    SkewResult,
    SkewThresholds,
    TierRecommendation,
    WorkloadTier,
)
from recordsize_advisor.analysis.errors import EmptyDataset
from recordsize_advisor.analysis.percentile import PercentileFinder
from recordsize_advisor.analysis.recordsize_mapper import RecordsizeMapper
from recordsize_advisor.analysis.size_aggregator import SizeAggregator
from recordsize_advisor.analysis.size_stats import AggregateState
from recordsize_advisor.analysis.skew_detector import SkewDetector
from recordsize_advisor.config import AppConfig


# Rough application block sizes for random I/O. Not derived from the
# observed distribution.
RANDOM_IO_REFERENCE: Dict[str, str] = {
    "PostgreSQL": "8k",
    "MySQL/InnoDB": "16k",
    "SQLite": "4k",
    "MongoDB (WiredTiger)": "4k",
    "VM disk images": "4k-16k",
    "BitTorrent": "16k",
    "Elasticsearch": "4k",
    "Redis (AOF)": "4k",
}

DEFAULT_PERCENTILE_TARGETS: Dict[WorkloadTier, float] = {
    WorkloadTier.SEQUENTIAL_WRITE: 0.50,
    WorkloadTier.MIXED: 0.70,
    WorkloadTier.SEQUENTIAL_READ: 0.90,
}


@dataclass
class RecordsizeReport:
    """
    Result of one analysis run.

    For an empty dataset only ``state`` is filled in; ``is_empty`` is
    True and every other field is empty.
    """

    state: AggregateState
    tiers: Dict[WorkloadTier, TierRecommendation] = field(default_factory=dict)
    skew: Optional[SkewResult] = None
    split: Optional[DatasetSplit] = None
    rows: List[BinRow] = field(default_factory=list)
    random_io_reference: Dict[str, str] = field(default_factory=dict)
    partial: bool = False  # True when the stream was cut short

    @classmethod
    def empty(cls, state: AggregateState, partial: bool = False) -> "RecordsizeReport":
        return cls(state=state, partial=partial)

    @property
    def is_empty(self) -> bool:
        return self.state.is_empty

    @property
    def is_skewed(self) -> bool:
        return self.skew is not None and self.skew.is_skewed

    @property
    def unified(self) -> Optional[Recordsize]:
        """The single recordsize when all three tiers agree, else None."""
        values = {rec.recordsize for rec in self.tiers.values()}
        if len(values) == 1:
            return values.pop()
        return None

    @property
    def recommendations(self) -> Dict[str, Recordsize]:
        """
        Final recommendations, collapsed when the tiers agree.

        Returns:
            {} for an empty dataset, {"all": value} when unified,
            otherwise one entry per tier keyed by the tier name
        """
        if not self.tiers:
            return {}
        unified = self.unified
        if unified is not None:
            return {"all": unified}
        return {tier.value: rec.recordsize for tier, rec in self.tiers.items()}

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the report to a JSON-compatible dictionary.
        """
        if self.is_empty:
            return {
                "status": "empty",
                "message": "No files found in the specified directory.",
                "partial": self.partial,
                "state": self.state.to_dict(),
            }
        return {
            "status": "ok",
            "partial": self.partial,
            "state": self.state.to_dict(),
            "recommendations": {name: value.value for name, value in self.recommendations.items()},
            "tiers": {tier.value: rec.to_dict() for tier, rec in self.tiers.items()},
            "skew": self.skew.to_dict() if self.skew else None,
            "split": self.split.to_dict() if self.split else None,
            "rows": [row.to_dict() for row in self.rows],
            "random_io_reference": dict(self.random_io_reference),
        }


class RecommendationEngine:
    """
    Orchestrates percentiles, mapping and skew detection into a report.
    """

    # Applied to the write and mixed tiers of a skewed distribution
    SKEWED_OVERRIDES: Dict[WorkloadTier, Recordsize] = {
        WorkloadTier.SEQUENTIAL_WRITE: Recordsize.R128K,
        WorkloadTier.MIXED: Recordsize.R256K,
    }

    SPLIT_LARGE_RECORDSIZE = Recordsize.R1M

    def __init__(
        self,
        bin_table: BinTable = DEFAULT_BIN_TABLE,
        skew_thresholds: Optional[SkewThresholds] = None,
        percentile_targets: Optional[Mapping[WorkloadTier, float]] = None,
    ):
        """
        Initialize the engine.

        Args:
            bin_table: Thresholds shared by the aggregator, mapper and detector
            skew_thresholds: Skew policy. Defaults to the canonical 60%/80% rule.
            percentile_targets: Space percentile per tier. Defaults to
                                0.50 / 0.70 / 0.90.
        """
        self.bin_table = bin_table
        self.mapper = RecordsizeMapper(bin_table)
        self.skew_detector = SkewDetector(skew_thresholds)
        targets = dict(DEFAULT_PERCENTILE_TARGETS)
        targets.update(percentile_targets or {})
        for tier, target in targets.items():
            if not 0.0 < target < 1.0:
                raise ValueError(f"Percentile target for {tier.value} must be in (0, 1), got {target}")
        self.percentile_targets = targets

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        bin_table: BinTable = DEFAULT_BIN_TABLE,
    ) -> "RecommendationEngine":
        return cls(
            bin_table=bin_table,
            skew_thresholds=config.skew.to_thresholds(),
            percentile_targets=config.percentiles.as_targets(),
        )

    def new_aggregator(self) -> SizeAggregator:
        """Aggregator using the same bin table as the engine."""
        return SizeAggregator(self.bin_table)

    def analyze(self, sizes: Iterable[int]) -> RecordsizeReport:
        """
        Aggregate a size stream and build its report in one call.

        Args:
            sizes: Iterable of non-negative file sizes

        Raises:
            InvalidSample: If a negative or non-integer size shows up
        """
        aggregator = self.new_aggregator()
        aggregator.observe_all(sizes)
        return self.finish(aggregator)

    def finish(self, aggregator: SizeAggregator, partial: bool = False) -> RecordsizeReport:
        """
        Seal an aggregator and build the report.

        Args:
            aggregator: The aggregator fed by the caller
            partial: Set when the stream was interrupted before its end

        Returns:
            A RecordsizeReport (an empty one on EmptyDataset)
        """
        try:
            state = aggregator.seal()
        except EmptyDataset as empty:
            return RecordsizeReport.empty(empty.state, partial=partial)
        return self.recommend(state, partial=partial)

    def recommend(self, state: AggregateState, partial: bool = False) -> RecordsizeReport:
        """
        Build the full report for a sealed state.

        Args:
            state: Sealed statistics
            partial: Marks a report built from a cut-short stream

        Returns:
            The RecordsizeReport
        """
        # STEP 1: Nothing to analyze
        if state.is_empty:
            return RecordsizeReport.empty(state, partial=partial)

        if state.bin_table != self.bin_table:
            raise ValueError("The state was aggregated with a different bin table")

        finder = PercentileFinder(state)

        # STEP 4 first: the overrides below depend on it
        skew = self.skew_detector.detect(state)

        # STEPS 2-4: percentile → bin → recordsize, then overrides
        tiers: Dict[WorkloadTier, TierRecommendation] = {}
        for tier in WorkloadTier:
            target = self.percentile_targets[tier]
            bin_index = finder.find_percentile(target)
            naive = self.mapper.map_bin(bin_index)
            recordsize = naive
            if skew.is_skewed and tier in self.SKEWED_OVERRIDES:
                recordsize = self.SKEWED_OVERRIDES[tier]
            tiers[tier] = TierRecommendation(
                tier=tier,
                percentile=target,
                bin_index=bin_index,
                cumulative_fraction=finder.cumulative_fraction(bin_index),
                naive=naive,
                recordsize=recordsize,
            )

        # STEP 7: Dataset split for skewed trees
        split = None
        if skew.is_skewed:
            split = DatasetSplit(
                large_files=self.SPLIT_LARGE_RECORDSIZE,
                small_files=self.mapper.map_bin(skew.modal_small_bin),
            )

        # STEPS 5-6: collapse is exposed by the report; reference table is static
        return RecordsizeReport(
            state=state,
            tiers=tiers,
            skew=skew,
            split=split,
            rows=finder.rows(),
            random_io_reference=dict(RANDOM_IO_REFERENCE),
            partial=partial,
        )
