import argparse
import logging
import sys
from typing import List, Optional

from . import config
from .core import ExifReportApp
from .exceptions import ExifReportError
from .metadata.extract import MetadataExtractor
from .reporting.writer import ReportWriter
from .scanning.filesystem import FileCollector


def setup_logging(verbose: bool):
    """Logs go to stderr; stdout is reserved for the report."""
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    # Silence chatty libraries ("File format not recognized" etc.)
    logging.getLogger("exifread").setLevel(logging.ERROR)


def separator_arg(value: str) -> str:
    if not value:
        raise argparse.ArgumentTypeError("separator must not be empty")
    return value


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(
        prog="exif-report",
        description="Export EXIF capture time and GPS position of JPEG/TIFF files as a flat table."
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {config.VERSION}")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = p.add_subparsers(dest="command", required=True)

    extract = sub.add_parser(
        "extract",
        help="Extract the EXIF information from the given directory or file.",
        description="Extract the EXIF information from the given directory or file. If a directory is given, "
                    "all files in that directory and all sub-directories will be parsed. "
                    "Defaults to the current working directory."
    )
    extract.add_argument("path", nargs="?", default=".", help="File or directory to scan (default: .)")
    extract.add_argument("-s", "--separator", type=separator_arg, default=config.DEFAULT_SEPARATOR,
                         help="Separator like , or ;")
    extract.add_argument("--no-directories", dest="directories", action="store_false",
                         help="Don't include the full file path and only add the filename to the output.")
    extract.add_argument("-w", "--workers", type=int, default=config.DEFAULT_MAX_WORKERS,
                         help=f"Number of parallel workers (default: {config.DEFAULT_MAX_WORKERS})")
    extract.add_argument("--keep-going", action="store_true",
                         help="Skip files that fail instead of aborting; failures are summarised on stderr")
    extract.add_argument("--ignore-case", action="store_true",
                         help="Match file extensions case-insensitively (JPG, TIFF, ...)")
    extract.add_argument("--progress", action="store_true", help="Show a progress bar on stderr")

    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    setup_logging(args.verbose)

    app = ExifReportApp(
        collector=FileCollector(max_workers=args.workers, case_sensitive=not args.ignore_case),
        extractor=MetadataExtractor(max_workers=args.workers, show_progress=args.progress),
        writer=ReportWriter(sys.stdout),
    )

    try:
        report = app.run(
            args.path,
            separator=args.separator,
            include_directories=args.directories,
            fail_fast=not args.keep_going,
        )
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        sys.exit(1)
    except ExifReportError as e:
        logging.error(f"{type(e).__name__}: {e}")
        sys.exit(1)

    if not report.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
