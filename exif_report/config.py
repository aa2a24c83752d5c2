"""
Configuration constants for the EXIF report generator.
"""

# --- File Type Definitions ---
# Extensions are compared without the leading dot, exactly as they appear
# after the final '.' in a file name.
JPEG_EXTS = {'jpg', 'jpeg'}
TIFF_EXTS = {'tif', 'tiff'}
IMAGE_EXTS = JPEG_EXTS | TIFF_EXTS

# Magic bytes used to reject files that only pretend to be images
JPEG_MAGIC = b'\xff\xd8'
TIFF_MAGICS = (b'II*\x00', b'MM\x00*')

# --- Metadata Parsing ---
DATE_TAG = 'Image DateTime'

# --- Report Layout ---
DEFAULT_SEPARATOR = ','
DIRECTORY_COLUMN = 'Directory[index]'
FIXED_COLUMNS = ['Filename', 'DateTime', 'Latitude', 'Longitude', 'Altitude']

# --- Concurrency ---
# Directory listings and EXIF reads are I/O bound; keep the pool small so
# large trees don't exhaust file descriptors.
DEFAULT_MAX_WORKERS = 4
MAX_WORKERS_LIMIT = 32

VERSION = '1.0.0'
