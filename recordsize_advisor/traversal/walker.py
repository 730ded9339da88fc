# ==============================================
# FileSizeWalker
# ==============================================
#
# PURPOSE:
#   Walk a directory tree and yield the apparent size (st_size) of
#   every regular file, like `find DIR -type f -printf "%s\n"`.
#
# BEHAVIOUR:
#   - Depth-first, using os.scandir (one open directory at a time)
#   - Symlinks are not followed unless follow_symlinks=True; when they
#     are, directories already visited are skipped (loop protection)
#   - one_file_system=True stays on the root's device (find -xdev)
#   - Unreadable directories and entries that vanish mid-walk are
#     counted in WalkStats.errors and skipped
#
# ==============================================

import os
from dataclasses import dataclass
from typing import Iterator, Set, Tuple, Union


@dataclass
class WalkStats:
    files: int = 0
    directories: int = 0
    skipped: int = 0  # symlinks, sockets, devices, other mounts
    errors: int = 0


class FileSizeWalker:
    """
    Iterable of file sizes under a root directory.

    Iterating twice walks the tree twice; ``stats`` describes the
    most recent walk.
    """

    def __init__(
        self,
        root: Union[str, os.PathLike],
        follow_symlinks: bool = False,
        one_file_system: bool = False,
    ):
        self.root = os.fspath(root)
        self.follow_symlinks = follow_symlinks
        self.one_file_system = one_file_system
        self.stats = WalkStats()

    def __iter__(self) -> Iterator[int]:
        self.stats = WalkStats()
        stats = self.stats

        root_stat = os.stat(self.root, follow_symlinks=True)
        root_dev = root_stat.st_dev if self.one_file_system else None
        visited: Set[Tuple[int, int]] = {(root_stat.st_dev, root_stat.st_ino)}

        stack = [self.root]
        while stack:
            path = stack.pop()
            try:
                entries = os.scandir(path)
            except OSError:
                stats.errors += 1
                continue
            stats.directories += 1

            with entries:
                for entry in entries:
                    try:
                        if entry.is_dir(follow_symlinks=self.follow_symlinks):
                            if self._should_descend(entry, root_dev, visited):
                                stack.append(entry.path)
                            else:
                                stats.skipped += 1
                            continue
                        if not entry.is_file(follow_symlinks=self.follow_symlinks):
                            stats.skipped += 1
                            continue
                        size = entry.stat(follow_symlinks=self.follow_symlinks).st_size
                    except OSError:
                        stats.errors += 1
                        continue

                    stats.files += 1
                    yield size

    def _should_descend(self, entry: os.DirEntry, root_dev, visited: Set[Tuple[int, int]]) -> bool:
        if root_dev is None and not self.follow_symlinks:
            return True
        entry_stat = entry.stat(follow_symlinks=self.follow_symlinks)
        if root_dev is not None and entry_stat.st_dev != root_dev:
            return False
        if self.follow_symlinks:
            key = (entry_stat.st_dev, entry_stat.st_ino)
            if key in visited:
                return False
            visited.add(key)
        return True
