import pytest

from photo_archiver.metadata.filename import LEGACY_PATTERNS, parse_filename
from photo_archiver.models import FilenameInfo


def test_underscore_hash_format():
    info = parse_filename("2021.01.29_17.17.31_60132e3223bcaafe_IMG_E8373.JPG")
    assert info == FilenameInfo(
        year="2021", month="01", day="29",
        hour="17", minute="17", second="31",
        hash="60132e3223bcaafe", orig_name="IMG_E8373.JPG",
    )
    assert info.matched


def test_plain_format_has_no_hash():
    info = parse_filename("2008.05.17-12.52.06_IMG_3761 (1).jpeg")
    assert info.orig_name == "IMG_3761 (1).jpeg"
    assert (info.year, info.month, info.day) == ("2008", "05", "17")
    assert (info.hour, info.minute, info.second) == ("12", "52", "06")
    assert info.hash == ""
    assert info.tz_offset == ""


def test_current_format_with_offset():
    info = parse_filename("2022.07.06_14.21.40+0000-c273bdc6833b42d7-DSCF0033.JPG.xmp")
    assert info.tz_offset == "+0000"
    assert info.hash == "c273bdc6833b42d7"
    assert info.orig_name == "DSCF0033.JPG.xmp"


def test_current_format_with_negative_offset_and_dashed_name():
    info = parse_filename("2019.12.31_23.59.59-0500-0123456789abcdef-my-holiday.jpg")
    assert info.tz_offset == "-0500"
    assert info.hash == "0123456789abcdef"
    assert info.orig_name == "my-holiday.jpg"


def test_current_format_without_offset():
    info = parse_filename("2021.01.01_05.23.11-66f4c6bbab77a615-DSCF4325.JPG")
    assert info.tz_offset == ""
    assert info.hash == "66f4c6bbab77a615"
    assert info.orig_name == "DSCF4325.JPG"


@pytest.mark.parametrize("name", [
    "DSCF1234.JPG",
    "IMG_2021.01.29.jpg",
    "2021-01-29_17-17-31_IMG.jpg",
    "foo.jpg.xmp",
    "",
])
def test_unrecognized_names_give_empty_info(name):
    info = parse_filename(name)
    assert info == FilenameInfo()
    assert not info.matched


def test_matching_is_syntactic_only():
    info = parse_filename("2021.13.45_25.61.99_abc_x.jpg")
    assert info.month == "13"
    assert info.day == "45"
    assert info.orig_name == "x.jpg"


def test_first_pattern_wins():
    name = "2021.01.29_17.17.31_60132e3223bcaafe_IMG_E8373.JPG"
    hits = [p.label for p in LEGACY_PATTERNS if p.match(name)]
    assert hits[0] == "underscore-hash"
    assert parse_filename(name).hash == "60132e3223bcaafe"
