"""Classify route filenames by track format and compression."""

from __future__ import annotations

from typing import NamedTuple

from archive_tracks.errors import MalformedFilenameError, UnsupportedFormatError
from archive_tracks.models.track import TrackFormat

COMPRESSION_SUFFIX = "gz"


class DetectedFormat(NamedTuple):
    """Track format and compression flag derived from a filename."""

    track_format: TrackFormat
    compressed: bool


def detect_format(filename: str) -> DetectedFormat:
    """Split a route filename on "." and classify it.

    "name.ext" is uncompressed and "name.ext.gz" is compressed. Any other
    shape is rejected, as is an extension outside gpx/tcx/fit.

    Args:
        filename: Route filename; directory components are allowed but must
            not contain dots

    Returns:
        DetectedFormat for the file

    Raises:
        MalformedFilenameError: If the name does not have two or three parts
        UnsupportedFormatError: If the format extension is not recognized
    """
    parts = filename.split(".")

    if len(parts) == 2:
        compressed = False
    elif len(parts) == 3 and parts[2] == COMPRESSION_SUFFIX:
        compressed = True
    else:
        raise MalformedFilenameError(f"malformed filename: {filename!r}", filename=filename)

    tag = parts[1]
    try:
        track_format = TrackFormat(tag)
    except ValueError as e:
        raise UnsupportedFormatError(f"unsupported format: {tag!r}", filename=filename) from e

    return DetectedFormat(track_format=track_format, compressed=compressed)
