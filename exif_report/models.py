import os
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, List, Mapping, Optional, Tuple

from .exceptions import ExifReportError, ParseError


@dataclass(frozen=True, order=True)
class PathSegments:
    """
    A file's location as an ordered list of names: directories first,
    filename last. `source` keeps the path the file was found under so it
    can be opened again.
    """
    parts: Tuple[str, ...]
    source: str = field(default='', compare=False)

    def __post_init__(self):
        if not self.parts:
            raise ValueError("PathSegments needs at least a filename")

    @classmethod
    def from_path(cls, path: str) -> "PathSegments":
        """Splits on the path separator, dropping empty names and a leading '.'."""
        normalized = path.replace(os.altsep, os.sep) if os.altsep else path
        parts = [p for p in normalized.split(os.sep) if p]
        if parts and parts[0] == '.':
            parts = parts[1:]
        return cls(tuple(parts), source=path)

    @property
    def directories(self) -> Tuple[str, ...]:
        return self.parts[:-1]

    @property
    def filename(self) -> str:
        return self.parts[-1]

    def joined(self) -> str:
        return '/'.join(self.parts)

    def __len__(self) -> int:
        return len(self.parts)

    def __str__(self) -> str:
        return self.joined()


def _as_number(value: Any, name: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ParseError(f"{name} is not numeric: {value!r}")
    return float(value)


def _as_triplet(value: Any, name: str) -> Tuple[Optional[float], ...]:
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise ParseError(f"{name} must be a list of numbers, got {value!r}")
    if not 1 <= len(value) <= 3 or value[0] is None:
        raise ParseError(f"{name} must hold degrees and optional minutes/seconds, got {value!r}")
    return tuple(_as_number(v, name) for v in value)


@dataclass(frozen=True)
class RawGpsInfo:
    """
    GPS block as decoded from the file. Values are kept exactly as stored;
    hemisphere references are validated when the row is formatted.
    """
    latitude_ref: str
    latitude: Tuple[Optional[float], ...]
    longitude_ref: str
    longitude: Tuple[Optional[float], ...]
    altitude: Optional[float] = None
    altitude_ref: Optional[float] = None

    @classmethod
    def from_metadata(cls, gps: Mapping[str, Any]) -> "RawGpsInfo":
        if not isinstance(gps, Mapping):
            raise ParseError(f"GPSInfo must be a mapping, got {type(gps).__name__}")

        for key in ('GPSLatitude', 'GPSLongitude'):
            if gps.get(key) is None:
                raise ParseError(f"GPSInfo is missing {key}")

        # Missing references become '' and fail the N/E check like any unknown value.
        return cls(
            latitude_ref=str(gps.get('GPSLatitudeRef') or ''),
            latitude=_as_triplet(gps['GPSLatitude'], 'GPSLatitude'),
            longitude_ref=str(gps.get('GPSLongitudeRef') or ''),
            longitude=_as_triplet(gps['GPSLongitude'], 'GPSLongitude'),
            altitude=_as_number(gps.get('GPSAltitude'), 'GPSAltitude'),
            altitude_ref=_as_number(gps.get('GPSAltitudeRef'), 'GPSAltitudeRef'),
        )


@dataclass(frozen=True)
class MetadataRecord:
    """One successfully decoded image."""
    date_time: Optional[str]
    gps: Optional[RawGpsInfo]
    path: PathSegments

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, Any], path: PathSegments) -> "MetadataRecord":
        """Validates the decoder's mapping once, so downstream code can trust the shape."""
        if not isinstance(metadata, Mapping):
            raise ParseError(f"Metadata for {path} must be a mapping, got {type(metadata).__name__}")

        date_time = metadata.get('DateTime')
        gps = metadata.get('GPSInfo')
        try:
            gps_info = RawGpsInfo.from_metadata(gps) if gps else None
        except ParseError as e:
            raise ParseError(f"Invalid GPSInfo in {path}: {e}") from e

        return cls(
            date_time=None if date_time is None else str(date_time),
            gps=gps_info,
            path=path,
        )


@dataclass(frozen=True)
class GpsCoordinate:
    latitude: float
    longitude: float
    altitude: float


@dataclass(frozen=True)
class FileFailure:
    path: PathSegments
    error: ExifReportError


@dataclass
class ExtractionReport:
    """Outcome of a batch: the records that decoded and the files that didn't."""
    records: List[MetadataRecord] = field(default_factory=list)
    failures: List[FileFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
