# ==============================================
# TRAVERSAL: Produce the size stream
# ==============================================
#
# This package walks a directory tree and yields one size per
# regular file. It is the only producer of samples for the core.
#
# Modules:
# --------
# - walker.py          → FileSizeWalker, WalkStats
# - inode_estimate.py  → Rough file count for progress display only
#
# ==============================================

from .walker import FileSizeWalker, WalkStats
from .inode_estimate import estimate_file_count

__all__ = ["FileSizeWalker", "WalkStats", "estimate_file_count"]
