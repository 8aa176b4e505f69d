import re
import logging
from pathlib import Path
from datetime import datetime
from typing import Optional

from .. import config
from ..exceptions import InvalidDestinationError
from ..metadata.filename import parse_filename
from ..metadata.timestamp import TimestampResolver
from ..models import Destination
from ..scanning.hasher import FileHasher

# Leading "<stamp>-" of a name this planner produced, offset optional
_STAMP_PREFIX = re.compile(r'^\d{4}\.\d{2}\.\d{2}_\d{2}\.\d{2}\.\d{2}(?:[+-]\d{4})?-')


def is_media(path: Path) -> bool:
    """Everything but known sidecar formats is treated as media."""
    return path.suffix.lower() not in config.SIDECAR_EXTS


def format_stamp(dt: datetime) -> str:
    """YYYY.MM.DD_hh.mm.ss, plus +hhmm when the datetime knows its offset."""
    stamp = config.STAMP_FORMAT.format(
        year=dt.year, month=dt.month, day=dt.day,
        hour=dt.hour, minute=dt.minute, second=dt.second,
    )
    if dt.utcoffset() is not None:
        stamp += dt.strftime("%z")
    return stamp


def embedded_fingerprint(path: Path) -> str:
    """
    Pulls the fingerprint back out of an organized media filename:
    "<stamp>-<fingerprint>-<name>". The stamp is stripped first, so a
    negative offset ("-0500") is never taken for a field separator.
    """
    name = path.name
    m = _STAMP_PREFIX.match(name)
    rest = name[m.end():] if m else name.split(config.NAME_DELIMITER, 1)[-1]

    parts = rest.split(config.NAME_DELIMITER, 1)
    if len(parts) < 2:
        raise InvalidDestinationError(
            f"Expected '{config.NAME_DELIMITER}'-separated stamp, fingerprint and name in {path}"
        )
    fingerprint = parts[0]
    if len(fingerprint) != config.FINGERPRINT_LENGTH:
        raise InvalidDestinationError(
            f"Expected a {config.FINGERPRINT_LENGTH} character fingerprint but found '{fingerprint}' in {path}"
        )
    return fingerprint


class DestinationPlanner:
    """
    Works out where a source file goes:
    <dest_root>/<YYYY>/<MM>/<stamp>-<fingerprint>-<name> for media,
    <dest_root>/<YYYY>/<MM>/<name> for sidecars.
    """
    def __init__(self,
                 resolver: Optional[TimestampResolver] = None,
                 hasher: Optional[FileHasher] = None):
        self.resolver = resolver or TimestampResolver()
        self.hasher = hasher or FileHasher()

    def plan(self, src: Path, dest_root: Path) -> Destination:
        info = parse_filename(src.name)
        dt, time_source = self.resolver.resolve(src, info)

        folder = dest_root / config.FOLDER_PATTERN.format(year=dt.year, month=dt.month)

        if not is_media(src):
            # Sidecar names already point at their media file; hashing the
            # sidecar itself would only break that link.
            return Destination(folder / src.name, time_source, is_media=False)

        fingerprint = self.hasher.fingerprint(src)
        # Re-processing an organized file recovers its pre-organization name
        name = info.orig_name if info.matched else src.name
        new_name = config.NAME_DELIMITER.join([format_stamp(dt), fingerprint, name])
        logging.debug(f"{src.name}: {time_source.value} {dt.isoformat()} -> {new_name}")

        return Destination(folder / new_name, time_source, is_media=True, fingerprint=fingerprint)
