import os
import logging
from pathlib import Path
from typing import Iterator, Set, Optional, List

from .. import config
from ..exceptions import FileOperationError


class DiskScanner:
    """
    Enumerates candidate files under a source root.
    Traversal order is stable (case-insensitive name order, files of a
    directory before its subdirectories) so report indices are reproducible.
    """

    def collect(self,
                root: Path,
                recursive: bool = True,
                skip_dirs: Optional[Set[Path]] = None) -> List[Path]:
        """Materializes the traversal so the driver knows the total up front."""
        return list(self.iter_files(root, recursive, skip_dirs))

    def iter_files(self,
                   root: Path,
                   recursive: bool = True,
                   skip_dirs: Optional[Set[Path]] = None) -> Iterator[Path]:
        """Depth-first walker using os.scandir for speed."""
        skip_dirs = skip_dirs or set()
        stack = [root]
        while stack:
            current = stack.pop()
            if skip_dirs and any(sd == current or sd in current.parents for sd in skip_dirs):
                logging.debug(f"Skipping {current}")
                continue

            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError as e:
                raise FileOperationError(f"Cannot list {current}: {e}") from e

            # Sort for stable traversal order
            entries.sort(key=lambda e: e.name.lower())

            dirs = []
            files = []
            for e in entries:
                if e.is_dir(follow_symlinks=False):
                    dirs.append(Path(e.path))
                elif e.is_file(follow_symlinks=False):
                    if e.name.endswith(config.PARTIAL_SUFFIX):
                        # Leftover of an interrupted copy
                        continue
                    files.append(Path(e.path))

            if recursive:
                # Push dirs to stack (reversed so we process A before Z)
                for d in reversed(dirs):
                    stack.append(d)

            for f in files:
                yield f
