"""
Custom exception hierarchy for the EXIF report generator.

Every error that aborts a run derives from ExifReportError so the CLI can
report it in one place.
"""


class ExifReportError(Exception):
    """Base exception for all EXIF report errors."""
    pass


class FileSystemError(ExifReportError):
    """Raised when the scan root cannot be stat'ed or a directory cannot be listed."""
    pass


class ParseError(ExifReportError):
    """Raised when metadata cannot be decoded from a file."""
    pass


class DataError(ExifReportError):
    """Raised when decoded metadata holds values the report cannot represent."""
    pass
