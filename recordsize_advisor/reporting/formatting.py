# ==============================================
# Formatting Helpers
# ==============================================
#
# PURPOSE:
#   Turn byte counts and bin indices into the short strings shown
#   in histograms, tables and warnings.
#
# FUNCTIONS:
# ----------
# - human_readable(num_bytes) -> str   → "0 B", "1.5 KiB", "2.0 GiB"
# - bin_label(bin_table, index) -> str → "<= 4.0 KiB", "> 1.0 GiB"
#
# ==============================================

from recordsize_advisor.analysis.bins import BinTable

UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")


def human_readable(num_bytes: float) -> str:
    """
    Format a byte count with binary units.

    Examples:
        human_readable(0)       → "0 B"
        human_readable(500)     → "500.0 B"
        human_readable(1536)    → "1.5 KiB"
        human_readable(2 ** 30) → "1.0 GiB"
    """
    if num_bytes == 0:
        return "0 B"
    value = float(num_bytes)
    tier = 0
    while value >= 1024 and tier < len(UNITS) - 1:
        value /= 1024
        tier += 1
    return f"{value:.1f} {UNITS[tier]}"


def bin_label(bin_table: BinTable, index: int) -> str:
    """
    Display name of a bin: "<= 4.0 KiB", or "> 1.0 GiB" for overflow.
    """
    if bin_table.is_overflow(index):
        return f"> {human_readable(bin_table.largest)}"
    return f"<= {human_readable(bin_table.threshold(index))}"
