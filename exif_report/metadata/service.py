import logging
from typing import Any, Dict, Mapping, Protocol

import exifread

from .. import config
from ..exceptions import ParseError

# exifread tag name -> key in the GPSInfo mapping
GPS_FIELDS = {
    'GPS GPSLatitudeRef': 'GPSLatitudeRef',
    'GPS GPSLatitude': 'GPSLatitude',
    'GPS GPSLongitudeRef': 'GPSLongitudeRef',
    'GPS GPSLongitude': 'GPSLongitude',
    'GPS GPSAltitude': 'GPSAltitude',
    'GPS GPSAltitudeRef': 'GPSAltitudeRef',
}

TEXT_FIELDS = {'GPSLatitudeRef', 'GPSLongitudeRef'}
LIST_FIELDS = {'GPSLatitude', 'GPSLongitude'}


class MetadataService(Protocol):
    """Anything that can turn an image path into a metadata mapping."""

    def parse(self, path: str) -> Mapping[str, Any]:
        ...


class ExifReadService:
    """
    Decodes JPEG/TIFF metadata with exifread and reshapes the tags into:

        {"DateTime": str, "GPSInfo": {"GPSLatitudeRef": "N", "GPSLatitude": [d, m, s], ...}}

    Keys are omitted when the file doesn't carry them.
    """

    def parse(self, path: str) -> Dict[str, Any]:
        try:
            with open(path, 'rb') as f:
                header = f.read(4)
                if not self._is_supported_header(header):
                    raise ParseError(f"{path} is neither a JPEG nor a TIFF file")
                f.seek(0)
                # details=False skips MakerNotes and thumbnails
                tags = exifread.process_file(f, details=False)
        except ParseError:
            raise
        except Exception as e:
            raise ParseError(f"EXIF read failed for {path}: {e}") from e

        if not tags:
            logging.debug(f"No EXIF tags found for {path}")

        try:
            return self.to_metadata(tags)
        except (ArithmeticError, TypeError, ValueError) as e:
            raise ParseError(f"Unreadable EXIF values in {path}: {e}") from e

    def to_metadata(self, tags: Mapping[str, Any]) -> Dict[str, Any]:
        """Converts exifread's tag dictionary to the plain metadata mapping."""
        data: Dict[str, Any] = {}

        if config.DATE_TAG in tags:
            data['DateTime'] = str(tags[config.DATE_TAG]).strip()

        gps: Dict[str, Any] = {}
        for tag_name, key in GPS_FIELDS.items():
            if tag_name not in tags:
                continue
            tag = tags[tag_name]
            if key in TEXT_FIELDS:
                gps[key] = str(tag).strip()
            elif key in LIST_FIELDS:
                gps[key] = [_ratio_to_float(v) for v in tag.values]
            elif tag.values:
                gps[key] = _ratio_to_float(tag.values[0])

        # A GPS block without a position fix (e.g. only GPSVersionID) counts as no GPS.
        if 'GPSLatitude' in gps and 'GPSLongitude' in gps:
            data['GPSInfo'] = gps
        elif gps:
            logging.debug(f"Ignoring GPS block without latitude/longitude: {sorted(gps)}")

        return data

    def _is_supported_header(self, header: bytes) -> bool:
        return header.startswith(config.JPEG_MAGIC) or header in config.TIFF_MAGICS


def _ratio_to_float(value: Any) -> float:
    """exifread stores rationals as Ratio(num, den); plain ints pass through."""
    num = getattr(value, 'num', value)
    den = getattr(value, 'den', 1)
    if den == 0:
        raise ValueError(f"rational with zero denominator: {num}/{den}")
    return num / den
