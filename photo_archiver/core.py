import logging
from pathlib import Path
from typing import Set, Optional

from tqdm import tqdm

from .organization.placement import PlacementEngine
from .reporting import ReportWriter, RunSummary, format_report_line
from .scanning.filesystem import DiskScanner


class PhotoArchiverApp:
    def __init__(self, dest_root: Path, dry_run: bool = False):
        self.dest_root = dest_root
        self.dry_run = dry_run
        self.scanner = DiskScanner()
        self.engine = PlacementEngine(dest_root, dry_run=dry_run)

    def organize(self,
                 src_root: Path,
                 recursive: bool = True,
                 skip_dirs: Optional[Set[Path]] = None,
                 report_csv: Optional[Path] = None,
                 progress: bool = False) -> RunSummary:
        """
        Places every file under src_root into the dated tree, one at a time,
        in traversal order. Stops at the first fatal error; already placed
        files stay where they are and a re-run picks up the rest.
        """
        skip_dirs = set(skip_dirs or set())
        # Never feed our own output back in when dest lives inside src
        if self.dest_root == src_root or src_root in self.dest_root.parents:
            skip_dirs.add(self.dest_root)

        logging.info(f"Scanning {src_root} (recursive={recursive})...")
        files = self.scanner.collect(src_root, recursive=recursive, skip_dirs=skip_dirs)
        total = len(files)
        logging.info(f"Found {total} files.")

        summary = RunSummary(total=total)
        with ReportWriter(report_csv) as writer:
            bar = tqdm(files, desc="Organizing", unit="file", disable=not progress)
            for index, path in enumerate(bar, start=1):
                report = self.engine.place(path, index, total)
                tqdm.write(format_report_line(report))
                writer.write(report)
                summary.add(report)

        summary.log(self.dry_run)
        return summary
