from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class TimestampSource(str, Enum):
    """Where a resolved capture time came from. Reporting only."""
    EXIF = "exif"                # EXIF date with UTC offset
    EXIF_NO_TZ = "exif_no_tz"    # EXIF date, no offset tag
    FILENAME = "filename"        # parsed from a previously organized filename
    CTIME = "ctime"              # filesystem times


@dataclass(frozen=True)
class FilenameInfo:
    """
    Fragments captured from a recognized legacy filename.
    All fields empty means no pattern matched.
    """
    year: str = ""
    month: str = ""
    day: str = ""
    hour: str = ""
    minute: str = ""
    second: str = ""
    tz_offset: str = ""
    hash: str = ""
    orig_name: str = ""

    @property
    def matched(self) -> bool:
        return bool(self.orig_name)


@dataclass(frozen=True)
class Destination:
    """Where a source file belongs in the organized tree."""
    path: Path
    time_source: TimestampSource
    is_media: bool
    fingerprint: Optional[str] = None


@dataclass(frozen=True)
class PlacementReport:
    """
    Outcome of placing a single file. One of these backs every report line.
    """
    index: int
    total: int
    src_path: Path
    dest_path: Path
    time_source: TimestampSource
    exists: bool
    is_media: bool
    invalid: bool
    bytes_written: int
    dry_run: bool

    @property
    def action(self) -> str:
        if self.exists and not self.invalid:
            return "skip"
        if self.invalid:
            return "repair"
        return "write"
