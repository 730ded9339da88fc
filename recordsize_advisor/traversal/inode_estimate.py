# ==============================================
# File-Count Estimate
# ==============================================
#
# PURPOSE:
#   Give the progress bar a total before the walk starts.
#
# FUNCTIONS:
# ----------
# - used_inodes(path) -> int
#     statvfs f_files - f_ffree for the filesystem holding path,
#     0 when the filesystem does not report inodes.
#
# - estimate_file_count(path) -> int
#     used_inodes(), or an exact count by walking the tree when no
#     inode data is available.
#
#   The estimate is for display only. It counts the whole
#   filesystem, so it is high when path is a subdirectory.
#
# ==============================================

import os
import sys
from typing import Union

from .walker import FileSizeWalker


def used_inodes(path: Union[str, os.PathLike]) -> int:
    """
    Number of inodes in use on the filesystem holding path.

    Returns 0 when the filesystem does not report inode counts
    (Btrfs, some network filesystems) or statvfs is unavailable.
    """
    try:
        st = os.statvfs(path)
    except (AttributeError, OSError):
        return 0
    return max(st.f_files - st.f_ffree, 0)


def estimate_file_count(path: Union[str, os.PathLike]) -> int:
    """
    Rough number of files to expect under path, for progress display.

    Uses the filesystem's used-inode count, which over-counts when
    path is only part of the filesystem. Falls back to an exact
    count by walking the tree when no inode count is available.
    Never use this value in statistics.

    Args:
        path: Directory about to be scanned

    Returns:
        The estimate (0 for an empty tree)
    """
    estimate = used_inodes(path)
    if estimate > 0:
        return estimate

    print("⚠ Counting files (no inode estimate available)...", file=sys.stderr)
    return sum(1 for _ in FileSizeWalker(path))
