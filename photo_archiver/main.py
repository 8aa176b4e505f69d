import argparse
import logging
import sys
from pathlib import Path

from . import config
from .core import PhotoArchiverApp
from .exceptions import DirectoryError, PhotoArchiverError

EPILOG = """
Files are organised into <dest>/<year>/<month>/ and renamed to start with the
date and time they were taken, followed by a hash of the file:

    DSCF1234.JPG  (taken 2020-08-27 11:00:00 +01:00)
        -> 2020/08/2020.08.27_11.00.00+0100-b46976ab6907346a-DSCF1234.JPG

The date comes from EXIF data where available, then from a name given by an
earlier run, and finally from the file's creation/modification time. Only the
first 10MB of a file are hashed. Sidecar files (.xmp etc.) keep their name.

Re-running is safe: files already in place with a matching hash are skipped,
and copies whose hash no longer matches are replaced.

If a file has no EXIF data and has been copied around so that its file times
no longer reflect when it was taken, its date will be wrong. Keep a backup.
"""


def setup_logging(dest_root: Path, verbose: bool, dry_run: bool):
    """Logs to stderr, and to a file in the destination unless this is a dry run."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stderr)]
    if not dry_run:
        handlers.append(logging.FileHandler(dest_root / config.LOG_FILE_NAME, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="photo-archiver",
        description="Organise photos and videos into a dated directory tree.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    p.add_argument("src", type=Path, help="Directory containing images/videos to read")
    p.add_argument("dest", type=Path, help="Existing directory to organise them into")

    p.add_argument("--dry-run", action="store_true", help="Print what would be done without touching disk")
    p.add_argument("--flat", action="store_true", help="Only read the top level of src, no subdirectories")
    p.add_argument("--skip-dirs-file", type=Path, default=None, help="File containing paths to ignore")
    p.add_argument("--report-csv", type=Path, default=None, help="Also write every report line to this CSV file")
    p.add_argument("--progress", action="store_true", help="Show a progress bar on stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return p.parse_args(argv)


def validate_dir(path: Path) -> Path:
    if not path.exists():
        raise DirectoryError(f"Directory does not exist: {path}")
    if not path.is_dir():
        raise DirectoryError(f"Expected this to be a directory, but it wasn't: {path}")
    return path.resolve()


def load_skip_dirs(skip_file: Path) -> set[Path]:
    if not skip_file or not skip_file.exists():
        return set()

    skips = set()
    with skip_file.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                skips.add(Path(line).resolve())
    return skips


def main(argv=None) -> int:
    args = parse_args(argv)

    # 1. Setup
    try:
        src_root = validate_dir(args.src)
        dest_root = validate_dir(args.dest)
    except DirectoryError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    setup_logging(dest_root, args.verbose, args.dry_run)

    logging.info("=== Photo Archiver Started ===")
    logging.info(f"Source: {src_root}")
    logging.info(f"Dest:   {dest_root}")
    if args.dry_run:
        logging.info("DRY RUN: nothing will be written, removed or created")

    skip_dirs = load_skip_dirs(args.skip_dirs_file) if args.skip_dirs_file else set()

    # 2. Execution
    app = PhotoArchiverApp(dest_root, dry_run=args.dry_run)

    try:
        app.organize(
            src_root=src_root,
            recursive=not args.flat,
            skip_dirs=skip_dirs,
            report_csv=args.report_csv,
            progress=args.progress,
        )
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1
    except PhotoArchiverError as e:
        logging.error(f"Aborting: {e}")
        return 1
    except Exception:
        logging.exception("Fatal error during organization.")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
