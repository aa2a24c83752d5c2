from typing import List, Optional, Sequence

from ..exceptions import DataError
from ..models import GpsCoordinate, MetadataRecord
from .escaping import escape, fill


def to_decimal_degrees(dms: Sequence[Optional[float]]) -> float:
    """[degrees, minutes?, seconds?] -> decimal degrees. Missing parts count as 0."""
    degrees = dms[0]
    minutes = dms[1] if len(dms) > 1 else None
    seconds = dms[2] if len(dms) > 2 else None
    return degrees + (minutes / 60 if minutes else 0) + (seconds / 3600 if seconds else 0)


def gps_coordinate(record: MetadataRecord) -> Optional[GpsCoordinate]:
    """
    Derives the coordinate for a record, or None when it has no GPS block.

    Only the northern/eastern hemispheres are supported; any other reference
    raises DataError instead of guessing a sign.
    """
    gps = record.gps
    if gps is None:
        return None

    if gps.latitude_ref != 'N':
        raise DataError(f"File {record.path.joined()} uses unknown latitude reference {gps.latitude_ref}.")
    if gps.longitude_ref != 'E':
        raise DataError(f"File {record.path.joined()} uses unknown longitude reference {gps.longitude_ref}.")

    # GPSAltitudeRef is subtracted as a number, not applied as a sign flag.
    altitude = (gps.altitude or 0) - (gps.altitude_ref or 0)

    return GpsCoordinate(
        latitude=to_decimal_degrees(gps.latitude),
        longitude=to_decimal_degrees(gps.longitude),
        altitude=altitude,
    )


def format_row(record: MetadataRecord,
               depth: int,
               separator: str,
               include_directories: bool = True) -> str:
    """
    One report line. Directory columns are padded to depth - 1 so that files
    from shallow folders line up with the deepest ones.
    """
    columns: List[str] = []

    if include_directories:
        directories = record.path.directories
        columns.extend(escape(d, separator) for d in directories)
        columns.extend(fill(depth - 1 - len(directories)))

    columns.append(escape(record.path.filename, separator))
    columns.append(escape(record.date_time or '', separator))

    coord = gps_coordinate(record)
    if coord is None:
        columns.extend(fill(3))
    else:
        columns.extend(escape(v, separator) for v in (coord.latitude, coord.longitude, coord.altitude))

    return separator.join(columns)
