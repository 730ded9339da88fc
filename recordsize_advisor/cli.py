# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides command-line interface to analyze a directory.
#   This is how users interact with the system.
#
# USAGE:
# ------
#   recordsize-advisor /tank/media
#   recordsize-advisor /tank/media --json
#   recordsize-advisor /tank/db --skew-policy count-floor --no-color
#   python -m recordsize_advisor /tank/media
#
# EXIT STATUS:
# ------------
#   0   → report printed (also for an empty directory)
#   1   → target is missing or not a directory
#   2   → the size stream produced an invalid sample
#   130 → interrupted before any file was seen
#
# IMPLEMENTATION:
# ---------------
# - argparse for parsing, config from get_config() overridden by flags
# - FileSizeWalker → ScanProgress → SizeAggregator → RecommendationEngine
# - Report on stdout (rich or JSON), status lines on stderr
#
# ==============================================

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from recordsize_advisor import __version__
from recordsize_advisor.analysis.decision import SKEW_POLICIES
from recordsize_advisor.analysis.errors import InvalidSample
from recordsize_advisor.config import get_config
from recordsize_advisor.recommendation import RecommendationEngine
from recordsize_advisor.reporting import ReportRenderer, ScanProgress
from recordsize_advisor.traversal import FileSizeWalker, estimate_file_count


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recordsize-advisor",
        description=(
            "Analyze the file size distribution of a directory tree and "
            "recommend a ZFS recordsize for read-heavy, mixed and write-heavy workloads."
        ),
    )
    parser.add_argument("directory", metavar="DIR", help="Directory to analyze")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--no-progress", action="store_true", help="Do not show the progress bar")
    parser.add_argument(
        "--skew-policy",
        choices=SKEW_POLICIES,
        default=None,
        help="Skew detection policy (default: from SKEW_POLICY, else canonical)",
    )
    parser.add_argument(
        "--follow-symlinks", action="store_true", help="Follow symbolic links while walking"
    )
    parser.add_argument(
        "--one-file-system", action="store_true", help="Do not cross filesystem boundaries"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the advisor.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        The process exit status
    """
    args = build_parser().parse_args(argv)
    try:
        config = get_config()
    except ValueError as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        return 1

    target = Path(args.directory)
    if not target.is_dir():
        print(f"✗ Error: '{target}' is not a valid directory.", file=sys.stderr)
        return 1

    color = config.display.color and not args.no_color
    show_progress = config.display.progress and not args.no_progress and not args.json
    out = Console(no_color=not color, highlight=False)
    err = Console(stderr=True, no_color=not color, highlight=False)

    if args.skew_policy is not None:
        config = replace(config, skew=replace(config.skew, policy=args.skew_policy))
    try:
        engine = RecommendationEngine.from_config(config)
    except ValueError as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        return 1

    print(f"Analyzing files in: {target}", file=sys.stderr)

    estimate = 0
    if show_progress:
        try:
            estimate = estimate_file_count(target)
        except KeyboardInterrupt:
            print("\n⚠ Interrupted while counting files", file=sys.stderr)
            return 130
        print(f"Assume analyzing entire dataset of {estimate:,} inodes.", file=sys.stderr)
        print(
            "(If analyzing a subdir of ZFS dataset, estimate will be conservative!)\n",
            file=sys.stderr,
        )

    walker = FileSizeWalker(
        target,
        follow_symlinks=args.follow_symlinks,
        one_file_system=args.one_file_system,
    )
    progress = ScanProgress(
        err,
        estimate=estimate,
        update_every=config.display.progress_update_every,
        enabled=show_progress,
    )
    aggregator = engine.new_aggregator()

    interrupted = False
    try:
        aggregator.observe_all(progress.track(walker))
    except InvalidSample as e:
        print(f"✗ {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        interrupted = True
        print("\n⚠ Interrupted, reporting on the files seen so far", file=sys.stderr)

    report = engine.finish(aggregator, partial=interrupted)
    if interrupted and report.is_empty:
        return 130

    if walker.stats.errors:
        print(
            f"⚠ {walker.stats.errors} entries could not be read and were skipped",
            file=sys.stderr,
        )

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        ReportRenderer(out, histogram_width=config.display.histogram_width).render(report)

    return 0


if __name__ == "__main__":
    sys.exit(main())
