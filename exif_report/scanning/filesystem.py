import os
import stat
import logging
from concurrent.futures import ThreadPoolExecutor, FIRST_COMPLETED, wait
from typing import Iterable, List, Optional, Tuple

from .. import config
from ..exceptions import FileSystemError
from ..models import PathSegments


def strip_trailing_separator(path: str) -> str:
    """'photos/' -> 'photos'. A bare root ('/') is left alone."""
    stripped = path.rstrip(os.sep)
    if os.altsep:
        stripped = stripped.rstrip(os.altsep)
    return stripped or path


class FileCollector:
    """
    Finds every JPEG/TIFF under a root path.

    Directories are listed by a fixed-size thread pool fed from a work queue,
    so the number of open directory handles never exceeds `max_workers`.
    Only the coordinating thread touches the queue and the result list.
    """

    def __init__(self,
                 max_workers: int = config.DEFAULT_MAX_WORKERS,
                 extensions: Optional[Iterable[str]] = None,
                 case_sensitive: bool = True):
        self.max_workers = max(1, min(max_workers, config.MAX_WORKERS_LIMIT))
        self.case_sensitive = case_sensitive

        exts = config.IMAGE_EXTS if extensions is None else set(extensions)
        self.extensions = set(exts) if case_sensitive else {e.lower() for e in exts}

    def collect(self, root: str) -> List[PathSegments]:
        """
        Returns the segments of every matching file, sorted by path.

        A root that names a file is returned as-is, without the extension
        check; the caller asked for that file explicitly.
        """
        root = strip_trailing_separator(str(root))

        try:
            st = os.stat(root)
        except OSError as e:
            raise FileSystemError(f"Cannot stat {root}: {e}") from e

        if not stat.S_ISDIR(st.st_mode):
            return [PathSegments.from_path(root)]

        found = self._walk(root)
        found.sort()
        logging.info(f"Found {len(found)} image files under {root}")
        return found

    def is_image(self, name: str) -> bool:
        # Everything after the final '.'; a name without a dot is its own extension.
        ext = name.rpartition('.')[2]
        if not self.case_sensitive:
            ext = ext.lower()
        return ext in self.extensions

    def _walk(self, root: str) -> List[PathSegments]:
        found: List[PathSegments] = []

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            pending = {executor.submit(self._list_directory, root)}
            try:
                while pending:
                    done, pending = wait(pending, return_when=FIRST_COMPLETED)
                    for future in done:
                        subdirs, files = future.result()
                        found.extend(PathSegments.from_path(f) for f in files)
                        for d in subdirs:
                            pending.add(executor.submit(self._list_directory, d))
            except BaseException:
                # Fail fast: drop queued listings, running ones finish on shutdown.
                for future in pending:
                    future.cancel()
                raise

        return found

    def _list_directory(self, path: str) -> Tuple[List[str], List[str]]:
        """Lists one directory. Returns (sub-directories, matching files)."""
        subdirs = []
        files = []
        try:
            with os.scandir(path) as it:
                for entry in it:
                    entry_path = os.path.join(path, entry.name)
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(entry_path)
                    elif self.is_image(entry.name):
                        files.append(entry_path)
                    else:
                        logging.debug(f"Ignoring {entry_path}: neither a JPEG nor a TIFF file")
        except OSError as e:
            raise FileSystemError(f"Cannot read directory {path}: {e}") from e

        return subdirs, files
