from typing import List, Sequence

from .. import config
from ..models import MetadataRecord
from .escaping import fill


def compute_depth(records: Sequence[MetadataRecord]) -> int:
    """
    Deepest path in the batch, counting directories and the filename.
    An empty batch has no files to align, so it gets depth 1 (no directory columns).
    """
    if not records:
        return 1
    return max(len(r.path) for r in records)


def build_header(depth: int, include_directories: bool = True) -> List[str]:
    directories = fill(depth - 1, config.DIRECTORY_COLUMN) if include_directories else []
    return directories + list(config.FIXED_COLUMNS)
