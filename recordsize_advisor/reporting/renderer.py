# ==============================================
# ReportRenderer
# ==============================================
#
# PURPOSE:
#   Draw a RecordsizeReport on a rich Console. Sections, in order:
#
#   1. Histograms      → by total size and by file count, side by side
#   2. Data table      → files, space and cumulative space per bin
#   3. Recommendations → unified value, or one per sequential tier
#   4. Random I/O      → static application block size reference
#   5. Skew warning    → only when skewed, with the dataset split
#   6. Footer note
#
#   Colours: bars are green above 66% of the largest bin, yellow
#   above 33%, red otherwise. Cumulative space is green from 70%,
#   yellow from 50%.
#
# ==============================================

from typing import List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from recordsize_advisor.analysis.decision import TierRecommendation, WorkloadTier
from recordsize_advisor.recommendation import RecordsizeReport
from .formatting import bin_label, human_readable

BAR_CHAR = "█"
SEPARATOR = "-" * 95

# Display order and wording of the sequential tiers
TIER_DISPLAY: List[Tuple[WorkloadTier, str, str, List[str]]] = [
    (
        WorkloadTier.SEQUENTIAL_READ,
        "Read-heavy",
        "optimize for data volume",
        [
            "Media libraries, backups, archives, static data.",
            "Small files use variable-size blocks, no penalty on reads.",
        ],
    ),
    (
        WorkloadTier.MIXED,
        "Mixed / Unknown",
        "balanced",
        ["Mixed or uncertain workload. Middle ground."],
    ),
    (
        WorkloadTier.SEQUENTIAL_WRITE,
        "Write-heavy (seq.)",
        "whole-file writes",
        [
            "Downloads, rendering, compilation, log rotation.",
            "I/O size matches file size, protect against RMW on bulk data.",
        ],
    ),
]


class ReportRenderer:
    """
    Renders a RecordsizeReport to a rich Console.
    """

    def __init__(self, console: Optional[Console] = None, histogram_width: int = 35):
        self.console = console or Console()
        self.histogram_width = histogram_width

    def render(self, report: RecordsizeReport) -> None:
        if report.is_empty:
            self.console.print("No files found in the specified directory.")
            return

        if report.partial:
            self.console.print(
                "[yellow]⚠ Scan interrupted: the report only covers the files seen so far.[/yellow]"
            )
        self.console.print(f"\nProcessed {report.state.total_files:,} files! Generating report...")

        self.render_histograms(report)
        self.render_table(report)
        self.render_recommendations(report)
        self.render_random_io(report)
        if report.is_skewed:
            self.render_skew_warning(report)

        self.console.print(f"\n{SEPARATOR}")
        self.console.print(
            "NOTE: These are suggestions based on file size distribution.\n"
            "      Always benchmark your specific workload."
        )

    # ======================================
    # Histograms
    # ======================================
    def render_histograms(self, report: RecordsizeReport) -> None:
        state = report.state
        table = state.bin_table
        indices = list(range(len(table)))
        if state.overflow_count > 0:
            indices.append(table.overflow)

        max_bytes = max(state.bytes_at(i) for i in indices)
        max_count = max(state.count_at(i) for i in indices)

        grid = Table(box=None, show_edge=False, pad_edge=False)
        grid.add_column("", min_width=15, no_wrap=True)
        grid.add_column("by total size", min_width=self.histogram_width, no_wrap=True)
        grid.add_column("by file count", min_width=self.histogram_width, no_wrap=True)

        for index in indices:
            count = state.count_at(index)
            grid.add_row(
                bin_label(table, index),
                self._bar(state.bytes_at(index), max_bytes, count),
                self._bar(count, max_count, count),
            )

        self.console.print("\nHistograms")
        self.console.print(SEPARATOR)
        self.console.print(grid)

    def _bar(self, value: int, maximum: int, count: int) -> Text:
        # A bin with files always gets at least one block, even when
        # they are all empty.
        if count == 0 or maximum <= 0:
            return Text("")
        length = max(1, int(value / maximum * self.histogram_width + 0.5))
        return Text(BAR_CHAR * length, style=self._share_style(value / maximum * 100))

    @staticmethod
    def _share_style(percent: float) -> str:
        if percent > 66:
            return "green"
        if percent > 33:
            return "yellow"
        return "red"

    @staticmethod
    def _cumulative_style(percent: float) -> str:
        if percent >= 70:
            return "green"
        if percent >= 50:
            return "yellow"
        return "red"

    # ======================================
    # Data table
    # ======================================
    def render_table(self, report: RecordsizeReport) -> None:
        state = report.state
        table = Table(box=box.SIMPLE_HEAD, show_edge=False)
        table.add_column("Size Range", no_wrap=True)
        table.add_column("Files", justify="right")
        table.add_column("% Files", justify="right")
        table.add_column("Total Size", justify="right")
        table.add_column("% Space", justify="right")
        table.add_column("% Cumul.", justify="right")

        for row in report.rows:
            table.add_row(
                bin_label(state.bin_table, row.index),
                f"{row.count:,}",
                f"{row.file_percent:.1f}%",
                human_readable(row.bytes),
                f"{row.space_percent:.1f}%",
                Text(f"{row.cumulative_percent:.1f}%", style=self._cumulative_style(row.cumulative_percent)),
            )

        table.add_section()
        table.add_row("TOTAL", f"{state.total_files:,}", "", human_readable(state.total_bytes), "", "")

        self.console.print("\nData Table")
        self.console.print(SEPARATOR)
        self.console.print(table)

    # ======================================
    # Recommendations
    # ======================================
    def render_recommendations(self, report: RecordsizeReport) -> None:
        console = self.console
        console.print("\n[bold]Recommendations[/bold]")
        console.print(SEPARATOR)

        unified = report.unified
        if unified is not None:
            console.print(f"  [bold]All sequential workloads agree:  recordsize={unified}[/bold]\n")
            console.print("  Read-heavy, mixed, and sequential write workloads all point to the same value.")
            console.print(f"\n  > zfs set recordsize={unified} <pool>/<dataset>")
            return

        for tier, title, focus, lines in TIER_DISPLAY:
            rec = report.tiers[tier]
            console.print(
                f"  [bold]{title + ':':<24} recordsize={str(rec.recordsize):<5}[/bold]"
                f"  (space P{rec.percentile * 100:.0f}: {focus})"
            )
            for line in lines:
                console.print(f"    {line}")
            if rec.overridden:
                console.print(f"    {self._override_note(rec)}")
            console.print("")

    @staticmethod
    def _override_note(rec: TierRecommendation) -> str:
        return (
            f"Adjusted for skew: the space percentile alone suggests recordsize={rec.naive}."
        )

    def render_random_io(self, report: RecordsizeReport) -> None:
        console = self.console
        console.print("  [bold]Write-heavy (random I/O):[/bold]  match your application block size")
        console.print("    When I/O is much smaller than file size, recordsize must match the")
        console.print("    application block size, not the file size. Suggested values:\n")

        table = Table(box=None, show_header=False, pad_edge=False, padding=(0, 1, 0, 6))
        table.add_column("Workload", no_wrap=True)
        table.add_column("Block size", no_wrap=True)
        for workload, block_size in report.random_io_reference.items():
            table.add_row(workload, block_size)
        console.print(table)

    # ======================================
    # Skew warning
    # ======================================
    def render_skew_warning(self, report: RecordsizeReport) -> None:
        console = self.console
        skew = report.skew
        style = "bright_yellow"

        console.print("\n[bold bright_yellow]Heavily Skewed Distribution[/bold bright_yellow]")
        console.print(SEPARATOR, style=style)
        console.print(
            f"  File count is concentrated in small files "
            f"({skew.small_count_fraction * 100:.0f}% of files are <= {human_readable(skew.small_max_bytes)})",
            style=style,
        )
        console.print(
            f"  while data volume is concentrated in large files "
            f"({skew.large_byte_fraction * 100:.0f}% of space is in files > {human_readable(skew.large_min_bytes)}).",
            style=style,
        )
        console.print("  The two metrics point to opposite recordsizes, so a single value is always", style=style)
        console.print("  a compromise. The write-heavy and mixed recommendations have been adjusted", style=style)
        console.print("  downward to protect small-file write performance.", style=style)

        if report.split is not None:
            console.print("\n  If possible, split into separate ZFS datasets:\n", style=style)
            console.print(
                f"    > zfs create -o recordsize={str(report.split.large_files):<5} pool/data/large_files",
                style=style,
            )
            console.print(
                f"    > zfs create -o recordsize={str(report.split.small_files):<5} pool/data/small_files",
                style=style,
            )
