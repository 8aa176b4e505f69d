"""
Recognizes the filenames earlier runs of the archiver produced.

Each naming convention is an independent matcher; they are tried in order and
the first hit wins. Matching is purely syntactic: "2021.13.45" is captured
as-is and left for the timestamp resolver to reject.
"""
import re
from dataclasses import dataclass
from typing import List, Optional

from ..models import FilenameInfo

_DATE = r'(?P<year>\d{4})\.(?P<month>\d{2})\.(?P<day>\d{2})'
_TIME = r'(?P<hour>\d{2})\.(?P<minute>\d{2})\.(?P<second>\d{2})'


@dataclass(frozen=True)
class FilenamePattern:
    label: str
    regex: re.Pattern

    def match(self, name: str) -> Optional[FilenameInfo]:
        m = self.regex.match(name)
        if not m:
            return None
        # Optional groups that did not participate come back as None
        fields = {k: v or "" for k, v in m.groupdict().items()}
        return FilenameInfo(**fields)


LEGACY_PATTERNS: List[FilenamePattern] = [
    # 2021.01.29_17.17.31_60132e3223bcaafe_IMG_E8373.JPG
    FilenamePattern(
        "underscore-hash",
        re.compile(_DATE + '_' + _TIME + r'_(?P<hash>[0-9a-f]+)_(?P<orig_name>.+)$'),
    ),
    # 2008.05.17-12.52.06_IMG_3761 (1).jpeg
    FilenamePattern(
        "plain",
        re.compile(_DATE + '-' + _TIME + r'_(?P<orig_name>.+)$'),
    ),
    # 2022.07.06_14.21.40+0000-c273bdc6833b42d7-DSCF0033.JPG.xmp
    FilenamePattern(
        "current",
        re.compile(_DATE + '_' + _TIME + r'(?P<tz_offset>[+-]\d{4})?-(?P<hash>[0-9a-f]+)-(?P<orig_name>.+)$'),
    ),
]


def parse_filename(name: str) -> FilenameInfo:
    """
    Extracts date, offset, hash and original-name fragments from a bare
    filename. Returns an empty FilenameInfo when no known pattern matches.
    """
    for pattern in LEGACY_PATTERNS:
        info = pattern.match(name)
        if info is not None:
            return info
    return FilenameInfo()
