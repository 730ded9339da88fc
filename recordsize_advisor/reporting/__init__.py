# ==============================================
# REPORTING: Terminal output
# ==============================================
#
# This package draws a RecordsizeReport and the scan progress
# with rich. It never computes statistics itself; everything comes
# from the report.
#
# Modules:
# --------
# - formatting.py  → Human-readable sizes and bin labels
# - renderer.py    → Histograms, data table, recommendations, warnings
# - progress.py    → Progress bar wrapped around the size stream
#
# ==============================================

from .formatting import human_readable, bin_label
from .renderer import ReportRenderer
from .progress import ScanProgress

__all__ = ["human_readable", "bin_label", "ReportRenderer", "ScanProgress"]
