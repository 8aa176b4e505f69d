import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from PIL import Image

from photo_archiver.models import TimestampSource

EXIF_IFD = 0x8769
DATE_TIME_ORIGINAL = 0x9003
OFFSET_TIME_ORIGINAL = 0x9011


def make_jpeg(path: Path, date: str = None, offset: str = None, color: str = "red") -> Path:
    """Writes a tiny JPEG, optionally carrying DateTimeOriginal/OffsetTimeOriginal."""
    exif = Image.Exif()
    ifd = {}
    if date:
        ifd[DATE_TIME_ORIGINAL] = date
    if offset:
        ifd[OFFSET_TIME_ORIGINAL] = offset
    if ifd:
        exif[EXIF_IFD] = ifd

    with Image.new("RGB", (8, 8), color=color) as im:
        im.save(path, exif=exif)
    return path


def set_mtime(path: Path, when: datetime):
    ts = when.timestamp()
    os.utime(path, (ts, ts))


class FixedResolver:
    """Stands in for TimestampResolver with a known answer."""
    def __init__(self, dt: datetime, source: TimestampSource = TimestampSource.EXIF):
        self.dt = dt
        self.source = source

    def resolve(self, path, info):
        return self.dt, self.source


@pytest.fixture
def src_dir(tmp_path):
    d = tmp_path / "src"
    d.mkdir()
    return d


@pytest.fixture
def dest_dir(tmp_path):
    d = tmp_path / "dest"
    d.mkdir()
    return d


@pytest.fixture
def plus_one():
    return timezone(timedelta(hours=1))
