# ==============================================
# ZFS Recordsize Advisor
# ==============================================
#
# Package Structure (core engine + outer layers):
#
# recordsize_advisor/
# ├── analysis/         # Core: bins, aggregation, CDF, mapping, skew
# ├── traversal/        # Walk a directory tree, estimate its file count
# ├── reporting/        # Render a report to the terminal (rich)
# ├── config.py         # Configuration management
# ├── recommendation.py # Final orchestrator class
# └── cli.py            # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
