import pytest
import xxhash

from photo_archiver import config
from photo_archiver.exceptions import FileHashError
from photo_archiver.scanning.filesystem import DiskScanner
from photo_archiver.scanning.hasher import FileHasher


@pytest.fixture
def small_window(monkeypatch):
    """Shrinks the hash window so its boundary is cheap to test."""
    monkeypatch.setattr(config, "MAX_HASHABLE_BYTES", 32)
    monkeypatch.setattr(config, "HASH_CHUNK_SIZE", 5)
    return 32


def test_fingerprint_format(tmp_path):
    p = tmp_path / "sample.bin"
    p.write_bytes(b"hello world" * 10)

    fp = FileHasher().fingerprint(p)

    assert len(fp) == 16
    assert fp == fp.lower()
    assert fp == xxhash.xxh64(b"hello world" * 10).hexdigest()


def test_empty_file_hashes_empty_prefix(tmp_path):
    p = tmp_path / "empty.jpg"
    p.write_bytes(b"")
    assert FileHasher().fingerprint(p) == xxhash.xxh64(b"").hexdigest()


def test_bytes_beyond_window_are_ignored(tmp_path, small_window):
    prefix = bytes(range(small_window))
    a = tmp_path / "a.bin"
    b = tmp_path / "b.bin"
    a.write_bytes(prefix + b"tail one")
    b.write_bytes(prefix + b"a completely different and longer tail")

    hasher = FileHasher()
    assert hasher.fingerprint(a) == hasher.fingerprint(b)
    assert hasher.fingerprint(a) == xxhash.xxh64(prefix).hexdigest()


def test_bytes_inside_window_matter(tmp_path, small_window):
    data = bytearray(range(small_window))
    a = tmp_path / "a.bin"
    a.write_bytes(bytes(data))
    data[small_window - 1] ^= 0xFF
    b = tmp_path / "b.bin"
    b.write_bytes(bytes(data))

    hasher = FileHasher()
    assert hasher.fingerprint(a) != hasher.fingerprint(b)


def test_short_file_hashes_whole_content(tmp_path, small_window):
    p = tmp_path / "short.bin"
    p.write_bytes(b"tiny")
    assert FileHasher().fingerprint(p) == xxhash.xxh64(b"tiny").hexdigest()


def test_fingerprint_ignores_metadata(tmp_path):
    a = tmp_path / "a.jpg"
    b = tmp_path / "sub" / "renamed.mov"
    b.parent.mkdir()
    a.write_bytes(b"same bytes")
    b.write_bytes(b"same bytes")
    assert FileHasher().fingerprint(a) == FileHasher().fingerprint(b)


def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(FileHashError):
        FileHasher().fingerprint(tmp_path / "nope.jpg")


def test_directory_is_fatal(tmp_path):
    with pytest.raises(FileHashError):
        FileHasher().fingerprint(tmp_path)


def _tree(root):
    skip_dir = root / "skip"
    skip_dir.mkdir()
    (skip_dir / "skip.jpg").write_text("skip")

    sub = root / "a"
    sub.mkdir()
    (sub / "b.jpg").write_text("b")
    (root / "c.jpg").write_text("c")
    (root / "B.jpg").write_text("B")
    (root / ".c.jpg.x1y2.partial").write_text("half")
    return skip_dir, sub


def test_scanner_recurses_in_stable_order(tmp_path):
    skip_dir, sub = _tree(tmp_path)

    files = DiskScanner().collect(tmp_path)

    assert files == [tmp_path / "B.jpg", tmp_path / "c.jpg", sub / "b.jpg", skip_dir / "skip.jpg"]


def test_scanner_skips_dirs(tmp_path):
    skip_dir, sub = _tree(tmp_path)

    files = DiskScanner().collect(tmp_path, skip_dirs={skip_dir})

    assert (skip_dir / "skip.jpg") not in files
    assert (sub / "b.jpg") in files


def test_scanner_flat(tmp_path):
    _, sub = _tree(tmp_path)

    files = DiskScanner().collect(tmp_path, recursive=False)

    assert files == [tmp_path / "B.jpg", tmp_path / "c.jpg"]


def test_scanner_ignores_partial_copies(tmp_path):
    _tree(tmp_path)
    names = [p.name for p in DiskScanner().collect(tmp_path)]
    assert not any(n.endswith(config.PARTIAL_SUFFIX) for n in names)


def test_empty_read_of_nonempty_file_is_fatal(tmp_path, monkeypatch):
    import io
    import photo_archiver.scanning.hasher as hasher_module

    p = tmp_path / "vanishing.jpg"
    p.write_bytes(b"not empty")
    monkeypatch.setattr(hasher_module, "open", lambda path, mode: io.BytesIO(b""), raising=False)

    with pytest.raises(FileHashError, match="Read 0 bytes"):
        FileHasher().fingerprint(p)
