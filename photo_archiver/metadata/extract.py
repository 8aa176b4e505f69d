import logging
from pathlib import Path
from datetime import datetime
from typing import Optional, Tuple

import exifread

from .. import config
from ..exceptions import MetadataExtractionError


class MetadataExtractor:
    """
    Reads the "date taken" of image files with 'exifread'.

    Missing or garbled metadata is not an error here: callers get None and
    move on to their next source of truth. Only failing to read the file at
    all is raised.
    """

    def get_capture_time(self, path: Path) -> Optional[Tuple[datetime, bool]]:
        """
        Returns:
            (capture_datetime, has_tz) or None if no usable date tag exists.
            The datetime is timezone-aware exactly when has_tz is True.
        """
        tags = self._read_tags(path)
        if not tags:
            return None

        for date_tag, offset_tag in config.EXIF_DATE_TAGS:
            if date_tag not in tags:
                continue
            dt = self._parse_exif_date(str(tags[date_tag]))
            if dt is None:
                logging.warning(f"Unparsable {date_tag} '{tags[date_tag]}' in {path}")
                continue

            if offset_tag in tags:
                aware = self._apply_offset(dt, str(tags[offset_tag]))
                if aware is not None:
                    return aware, True
                logging.warning(f"Ignoring unparsable {offset_tag} '{tags[offset_tag]}' in {path}")
            return dt, False

        logging.debug(f"No date tag in EXIF data of {path}")
        return None

    def _read_tags(self, path: Path) -> dict:
        try:
            f = path.open('rb')
        except OSError as e:
            raise MetadataExtractionError(f"Cannot open {path}: {e}") from e

        with f:
            try:
                # details=False skips makernotes, which we never need
                return exifread.process_file(f, details=False)
            except OSError as e:
                raise MetadataExtractionError(f"Cannot read {path}: {e}") from e
            except Exception as e:
                # exifread raises assorted errors on corrupt blocks
                logging.warning(f"ExifRead failed for {path}: {e}")
                return {}

    def _parse_exif_date(self, dt_str: str) -> Optional[datetime]:
        """EXIF format is "YYYY:MM:DD HH:MM:SS"; some writers pad with NULs."""
        try:
            return datetime.strptime(dt_str.strip().strip('\x00'), config.EXIF_DATE_FORMAT)
        except ValueError:
            return None

    def _apply_offset(self, dt: datetime, offset_str: str) -> Optional[datetime]:
        """Offset tags look like "+01:00"."""
        try:
            tz = datetime.strptime(offset_str.strip().strip('\x00'), "%z").tzinfo
        except ValueError:
            return None
        return dt.replace(tzinfo=tz)
