"""
Custom exception hierarchy for the photo archiver.

Every exception defined here is fatal for the whole run: the driver stops on
the first one rather than leave a half-organized destination tree behind.
Conditions the timestamp resolver can recover from (missing EXIF tags,
unparsable dates, unrecognized filenames) never raise.
"""


class PhotoArchiverError(Exception):
    """Base exception for all photo archiver errors."""
    pass


class MetadataExtractionError(PhotoArchiverError):
    """Raised when a file's metadata cannot be read at all (I/O failure)."""
    pass


class FileHashError(PhotoArchiverError):
    """Raised when file fingerprinting fails."""
    pass


class FileOperationError(PhotoArchiverError):
    """Raised when directory creation, copy or delete operations fail."""
    pass


class InvalidDestinationError(PhotoArchiverError):
    """Raised when an existing destination filename has no embedded fingerprint."""
    pass


class DirectoryError(PhotoArchiverError):
    """Raised when a required source or destination directory is missing."""
    pass
