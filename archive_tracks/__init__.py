"""Decode activity route files from a bulk workout export into normalized tracks."""

from archive_tracks.errors import ExternalToolError, TrackDecodeError, TrackFormatError, TrackIOError
from archive_tracks.ingestion.track_parser import TrackParser
from archive_tracks.models.activity import ActivityRecord
from archive_tracks.models.track import Sample, TcxProfile, Track, TrackFormat

__all__ = [
    "ActivityRecord",
    "ExternalToolError",
    "Sample",
    "TcxProfile",
    "Track",
    "TrackDecodeError",
    "TrackFormat",
    "TrackFormatError",
    "TrackIOError",
    "TrackParser",
]
