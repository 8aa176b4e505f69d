"""
Capture-time resolution.

Sources are tried in a fixed order and the first one that yields a date
wins:

1. EXIF, for formats that carry it (``exif`` / ``exif_no_tz``)
2. a date recovered from a previously organized filename (``filename``)
3. the earlier of the file's creation and modification times (``ctime``)

Missing or unparsable dates fall through to the next tier with a warning;
only I/O failures abort.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

from .. import config
from ..exceptions import MetadataExtractionError
from ..models import FilenameInfo, TimestampSource
from .extract import MetadataExtractor


class TimestampResolver:
    def __init__(self, extractor: Optional[MetadataExtractor] = None):
        self.extractor = extractor or MetadataExtractor()

    def resolve(self, path: Path, info: FilenameInfo) -> Tuple[datetime, TimestampSource]:
        if path.suffix.lower() in config.EXIF_EXTS:
            exif = self.extractor.get_capture_time(path)
            if exif is not None:
                dt, has_tz = exif
                return dt, TimestampSource.EXIF if has_tz else TimestampSource.EXIF_NO_TZ

        if info.matched:
            dt = self._from_filename(info)
            if dt is not None:
                return dt, TimestampSource.FILENAME
            logging.warning(f"Unparsable date in filename {path.name}, using file times")

        return self._from_file_times(path), TimestampSource.CTIME

    def _from_filename(self, info: FilenameInfo) -> Optional[datetime]:
        stamp = f"{info.year}.{info.month}.{info.day}_{info.hour}.{info.minute}.{info.second}"
        fmt = "%Y.%m.%d_%H.%M.%S"
        if info.tz_offset:
            stamp += info.tz_offset
            fmt += "%z"
        try:
            return datetime.strptime(stamp, fmt)
        except ValueError:
            return None

    def _from_file_times(self, path: Path) -> datetime:
        try:
            st = path.stat()
        except OSError as e:
            raise MetadataExtractionError(f"Cannot stat {path}: {e}") from e

        # st_birthtime exists on macOS/BSD (and Windows on 3.12+); elsewhere
        # st_ctime is the closest thing we have
        created = getattr(st, 'st_birthtime', st.st_ctime)
        ts = min(created, st.st_mtime)
        return datetime.fromtimestamp(ts).astimezone()

