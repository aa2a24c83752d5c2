import logging
from typing import List, Optional, Sequence, Tuple

from . import config
from .exceptions import DataError
from .metadata.extract import MetadataExtractor
from .models import ExtractionReport, FileFailure, MetadataRecord
from .reporting.columns import build_header, compute_depth
from .reporting.rows import format_row
from .reporting.writer import ReportWriter
from .scanning.filesystem import FileCollector


def build_report(records: Sequence[MetadataRecord],
                 separator: str = config.DEFAULT_SEPARATOR,
                 include_directories: bool = True,
                 fail_fast: bool = True) -> Tuple[List[str], List[str], List[FileFailure]]:
    """
    Formats every record up front. Returns (header, rows, failures).

    With fail_fast, a record that can't be formatted raises before any row is
    handed out. Otherwise it is dropped and listed in failures.
    """
    depth = compute_depth(records)
    header = build_header(depth, include_directories)

    rows = []
    failures = []
    for record in records:
        try:
            rows.append(format_row(record, depth, separator, include_directories))
        except DataError as e:
            if fail_fast:
                raise
            logging.warning(f"Skipping {record.path}: {e}")
            failures.append(FileFailure(record.path, e))

    return header, rows, failures


class ExifReportApp:
    def __init__(self,
                 collector: Optional[FileCollector] = None,
                 extractor: Optional[MetadataExtractor] = None,
                 writer: Optional[ReportWriter] = None):
        self.collector = collector or FileCollector()
        self.extractor = extractor or MetadataExtractor()
        self.writer = writer or ReportWriter()

    def run(self,
            root: str,
            separator: str = config.DEFAULT_SEPARATOR,
            include_directories: bool = True,
            fail_fast: bool = True) -> ExtractionReport:
        """
        Executes the report pipeline.
        1. Collect image paths
        2. Extract metadata
        3. Format header and rows
        4. Write

        Nothing is written unless steps 1-3 succeed (or, without fail_fast,
        until every failure has been set aside).
        """
        logging.info(f"Scanning {root}...")
        paths = self.collector.collect(root)

        report = self.extractor.extract(paths, fail_fast=fail_fast)

        header, rows, format_failures = build_report(
            report.records, separator, include_directories, fail_fast
        )
        if format_failures:
            failed = {f.path for f in format_failures}
            report.records = [r for r in report.records if r.path not in failed]
            report.failures = sorted(report.failures + format_failures, key=lambda f: f.path)

        self.writer.write(header, rows, separator)

        if report.failures:
            logging.warning(f"{len(report.failures)} of {len(paths)} files could not be reported:")
            for failure in report.failures:
                logging.warning(f"  {failure.path}: {failure.error}")

        return report
