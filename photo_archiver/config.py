"""
Configuration constants for the photo archiver.
"""

# --- File Type Definitions ---
RAW_EXTS = {'.cr2', '.cr3', '.nef', '.arw', '.orf', '.rw2', '.dng', '.raf', '.pef', '.srw'}
JPEG_EXTS = {'.jpg', '.jpeg', '.jpe'}
HEIF_EXTS = {'.heic', '.heif'}
TIFF_EXTS = {'.tif', '.tiff'}
SIDECAR_EXTS = {'.xmp', '.vrd', '.dop', '.dpp', '.pp3', '.aae', '.thm'}

# Formats exifread can pull a "date taken" tag out of.
# CR3 is ISO-BMFF, not TIFF, so it is left to the filename/ctime tiers.
EXIF_EXTS = JPEG_EXTS | HEIF_EXTS | TIFF_EXTS | (RAW_EXTS - {'.cr3'})

# --- Metadata Parsing ---
# (date tag, matching UTC offset tag), tried in order
EXIF_DATE_TAGS = [
    ('EXIF DateTimeOriginal', 'EXIF OffsetTimeOriginal'),
    ('EXIF DateTimeDigitized', 'EXIF OffsetTimeDigitized'),
]
EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"

# --- Hashing ---
# Only the first 10 MiB of a file feed its fingerprint.
MAX_HASHABLE_BYTES = 10 * 1024 * 1024
HASH_CHUNK_SIZE = 64 * 1024  # 64 KB chunks for reading
FINGERPRINT_LENGTH = 16

# --- Organization ---
FOLDER_PATTERN = "{year:04d}/{month:02d}"
STAMP_FORMAT = "{year:04d}.{month:02d}.{day:02d}_{hour:02d}.{minute:02d}.{second:02d}"
NAME_DELIMITER = "-"
PARTIAL_SUFFIX = ".partial"

# --- Output ---
LOG_FILE_NAME = "organizer.log"
