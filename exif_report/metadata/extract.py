import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional, Sequence

from tqdm import tqdm

from .. import config
from ..exceptions import ExifReportError, ParseError
from ..models import ExtractionReport, FileFailure, MetadataRecord, PathSegments
from .service import ExifReadService, MetadataService


class MetadataExtractor:
    """
    Runs the metadata service over every collected file.

    Modes:
      - fail_fast=True: the first broken file aborts the batch and nothing is returned.
      - fail_fast=False: broken files are reported as failures, the rest continue.
    """

    def __init__(self,
                 service: Optional[MetadataService] = None,
                 max_workers: int = config.DEFAULT_MAX_WORKERS,
                 show_progress: bool = False):
        self.service = service if service is not None else ExifReadService()
        self.max_workers = max(1, min(max_workers, config.MAX_WORKERS_LIMIT))
        self.show_progress = show_progress

    def extract(self, paths: Sequence[PathSegments], fail_fast: bool = True) -> ExtractionReport:
        report = ExtractionReport()
        if not paths:
            return report

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_path = {executor.submit(self._extract_one, p): p for p in paths}
            try:
                # Results are gathered here, on the calling thread only
                for future in tqdm(as_completed(future_to_path), total=len(future_to_path),
                                   desc="Reading EXIF", disable=not self.show_progress):
                    path = future_to_path[future]
                    try:
                        report.records.append(future.result())
                    except ExifReportError as e:
                        if fail_fast:
                            raise
                        logging.warning(f"Skipping {path}: {e}")
                        report.failures.append(FileFailure(path, e))
            except BaseException:
                for future in future_to_path:
                    future.cancel()
                raise

        # Completion order is arbitrary; report in path order
        report.records.sort(key=lambda r: r.path)
        report.failures.sort(key=lambda f: f.path)

        logging.info(f"Extracted metadata from {len(report.records)} files "
                     f"({len(report.failures)} failed)")
        return report

    def _extract_one(self, path: PathSegments) -> MetadataRecord:
        try:
            metadata = self.service.parse(path.source or path.joined())
        except ExifReportError:
            raise
        except Exception as e:
            raise ParseError(f"Failed to read metadata from {path}: {e}") from e

        return MetadataRecord.from_metadata(metadata, path)
