# ==============================================
# ScanProgress
# ==============================================
#
# PURPOSE:
#   Show a progress bar while the walker produces sizes, without
#   holding on to any of them.
#
# CLASS: ScanProgress
# -------------------
#   Stateful: counts the sizes it has passed through (``seen``).
#
#   Methods:
#   --------
#   - track(sizes: Iterable[int]) -> Iterator[int]
#       Yields every size unchanged. Refreshes the bar every
#       ``update_every`` files (727 by default). When disabled it is
#       a plain pass-through.
#
# ==============================================

from typing import Iterable, Iterator, Optional

from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn, TimeElapsedColumn


class ScanProgress:
    """
    Progress bar wrapped around a size stream.

    The total comes from a file-count estimate, which is only a
    display hint: the bar grows its total when more files show up
    than estimated and never touches the sizes it passes through.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        estimate: int = 0,
        update_every: int = 727,
        enabled: bool = True,
    ):
        self.console = console or Console(stderr=True)
        self.estimate = max(estimate, 0)
        self.update_every = max(update_every, 1)
        self.enabled = enabled
        self.seen = 0

    def track(self, sizes: Iterable[int]) -> Iterator[int]:
        """
        Yield every size unchanged while updating the bar.

        Args:
            sizes: The stream coming from the walker

        Yields:
            The same sizes, in the same order
        """
        self.seen = 0
        if not self.enabled:
            for size in sizes:
                self.seen += 1
                yield size
            return

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=48),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TextColumn("Processed: {task.completed:,.0f}"),
            TimeElapsedColumn(),
            console=self.console,
        ) as progress:
            task = progress.add_task("Scanning", total=self.estimate or None)
            total = self.estimate
            for size in sizes:
                self.seen += 1
                if self.seen % self.update_every == 0:
                    if self.seen > total:
                        total = self.seen
                    progress.update(task, completed=self.seen, total=total or None)
                yield size
            progress.update(task, completed=self.seen, total=self.seen, description="Done")
