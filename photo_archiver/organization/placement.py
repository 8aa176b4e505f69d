import logging
from pathlib import Path
from typing import Optional

from ..models import PlacementReport
from ..scanning.hasher import FileHasher
from .mover import FileMover
from .rules import DestinationPlanner, embedded_fingerprint


class PlacementEngine:
    """
    Decides, per file, whether to write, skip or repair its destination and
    carries that decision out.

      absent          -> write
      exists, valid   -> skip
      exists, invalid -> delete the stale copy, then write

    A media destination is valid when the fingerprint in its name matches
    its bytes. Sidecars carry no fingerprint and are valid whenever present.
    A dry run computes and reports the same decisions but touches nothing.
    """
    def __init__(self,
                 dest_root: Path,
                 dry_run: bool = False,
                 planner: Optional[DestinationPlanner] = None,
                 mover: Optional[FileMover] = None,
                 hasher: Optional[FileHasher] = None):
        self.dest_root = dest_root
        self.dry_run = dry_run
        self.hasher = hasher or FileHasher()
        self.planner = planner or DestinationPlanner(hasher=self.hasher)
        self.mover = mover or FileMover()

    def place(self, src: Path, index: int, total: int) -> PlacementReport:
        dest = self.planner.plan(src, self.dest_root)
        if not self.dry_run:
            self.mover.ensure_parent(dest.path)

        exists = dest.path.exists()
        invalid = False
        if exists and dest.is_media:
            invalid = not self.is_valid(dest.path)
            if invalid:
                logging.warning(f"Existing {dest.path} does not match its fingerprint")
                if not self.dry_run:
                    self.mover.remove(dest.path)

        bytes_written = 0
        if (not exists or invalid) and not self.dry_run:
            bytes_written = self.mover.copy(src, dest.path)

        return PlacementReport(
            index=index,
            total=total,
            src_path=src,
            dest_path=dest.path,
            time_source=dest.time_source,
            exists=exists,
            is_media=dest.is_media,
            invalid=invalid,
            bytes_written=bytes_written,
            dry_run=self.dry_run,
        )

    def is_valid(self, path: Path) -> bool:
        return embedded_fingerprint(path) == self.hasher.fingerprint(path)
