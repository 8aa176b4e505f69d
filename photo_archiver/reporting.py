import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .models import PlacementReport

CSV_HEADERS = [
    "Index",
    "Total",
    "Source Path",
    "Destination Path",
    "Exists",
    "Media",
    "Invalid",
    "Bytes Written",
    "Time Source",
    "Action",
    "Dry Run",
]


def yes_no(flag: bool) -> str:
    return "y" if flag else "n"


def format_report_line(report: PlacementReport) -> str:
    """
    One line per placed file, e.g.

    [   3/  10] (exists? n) (media? y) (invalid? n) (wrote     2048b) (time from       exif) DSCF1234.JPG  ->  /Pictures/2020/08/...
    """
    prefix = "(dry run) " if report.dry_run else ""
    return (
        f"{prefix}[{report.index:4d}/{report.total:4d}] "
        f"(exists? {yes_no(report.exists)}) "
        f"(media? {yes_no(report.is_media)}) "
        f"(invalid? {yes_no(report.invalid)}) "
        f"(wrote {report.bytes_written:8d}b) "
        f"(time from {report.time_source.value:>10}) "
        f"{report.src_path.name}  ->  {report.dest_path}"
    )


@dataclass
class RunSummary:
    total: int = 0
    written: int = 0
    skipped: int = 0
    repaired: int = 0
    bytes_written: int = 0

    def add(self, report: PlacementReport):
        action = report.action
        if action == "skip":
            self.skipped += 1
        elif action == "repair":
            self.repaired += 1
        else:
            self.written += 1
        self.bytes_written += report.bytes_written

    def log(self, dry_run: bool = False):
        verb = "Would process" if dry_run else "Processed"
        logging.info(
            f"{verb} {self.total} files: {self.written} new, {self.repaired} repaired, "
            f"{self.skipped} already in place ({self.bytes_written} bytes written)"
        )


class ReportWriter:
    """
    Optional CSV audit log with one row per placement report.
    Rows are flushed as they are written so an aborted run still leaves a
    record of everything placed before the failure.
    """
    def __init__(self, output_csv: Optional[Path]):
        self.output_csv = output_csv
        self._file = None
        self._writer = None

    def __enter__(self):
        if self.output_csv:
            logging.info(f"Writing report to {self.output_csv}")
            self._file = open(self.output_csv, "w", newline="", encoding="utf-8")
            self._writer = csv.writer(self._file)
            self._writer.writerow(CSV_HEADERS)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._file:
            self._file.close()
            self._file = None
            self._writer = None

    def write(self, report: PlacementReport):
        if self._writer is None:
            return
        self._writer.writerow([
            report.index,
            report.total,
            str(report.src_path),
            str(report.dest_path),
            yes_no(report.exists),
            yes_no(report.is_media),
            yes_no(report.invalid),
            report.bytes_written,
            report.time_source.value,
            report.action,
            yes_no(report.dry_run),
        ])
        self._file.flush()
