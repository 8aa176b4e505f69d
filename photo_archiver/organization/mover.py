import os
import shutil
import logging
import tempfile
from pathlib import Path

from .. import config
from ..exceptions import FileOperationError


class FileMover:
    """Filesystem mutations used by the placement engine."""

    def ensure_parent(self, dest: Path):
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError(f"Cannot create {dest.parent}: {e}") from e

    def copy(self, src: Path, dest: Path) -> int:
        """
        Copies src to dest preserving its modification time and returns the
        bytes written. The data lands in a hidden ".partial" file first and
        is renamed into place only once complete.
        """
        tmp = None
        placed = False
        try:
            # Short temp name: dest.name may already be near the filesystem limit
            fd, tmp_name = tempfile.mkstemp(prefix=".", suffix=config.PARTIAL_SUFFIX, dir=dest.parent)
            os.close(fd)
            tmp = Path(tmp_name)
            shutil.copy2(src, tmp)
            written = tmp.stat().st_size
            os.replace(tmp, dest)
            placed = True
        except OSError as e:
            raise FileOperationError(f"Failed to copy {src} -> {dest}: {e}") from e
        finally:
            if tmp is not None and not placed:
                tmp.unlink(missing_ok=True)

        logging.debug(f"Copied {written} bytes {src} -> {dest}")
        return written

    def remove(self, dest: Path):
        try:
            dest.unlink()
        except OSError as e:
            raise FileOperationError(f"Failed to remove {dest}: {e}") from e
        logging.debug(f"Removed {dest}")
