"""Normalized track data models.

A Track is the decoded route of one activity: an ordered, immutable sequence
of Samples in source-file order. Optional readings (elevation, heart rate,
cadence, time) are None when the source omits them, so a genuine zero reading
is never confused with a missing field.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class TrackFormat(StrEnum):
    """Route file formats found in an export archive."""

    GPX = "gpx"
    TCX = "tcx"
    FIT = "fit"


class TcxProfile(StrEnum):
    """Element path used to locate trackpoints in a TCX document.

    STANDARD matches native TCX exports
    (Activities/Activity/Lap/Track/Trackpoint). ALTERNATE matches TCX written
    by the FIT transcoder (Courses/Course/Track/Trackpoint).
    """

    STANDARD = "standard"
    ALTERNATE = "alternate"


@dataclass(frozen=True)
class Sample:
    """One instant along a track.

    Attributes:
        latitude: Latitude in signed decimal degrees
        longitude: Longitude in signed decimal degrees
        elevation: Elevation in meters, None when absent
        time: Sample timestamp, None when absent
        heart_rate: Heart rate in beats per minute, None when absent
        cadence: Cadence, None when absent
    """

    latitude: float
    longitude: float
    elevation: float | None = None
    time: datetime | None = None
    heart_rate: int | None = None
    cadence: int | None = None


@dataclass(frozen=True)
class Track:
    """Ordered samples decoded from one route file.

    Attributes:
        source_format: Format the samples were decoded from
        samples: Samples in source-file order
    """

    source_format: TrackFormat
    samples: tuple[Sample, ...] = ()

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples)

    def __getitem__(self, index: int) -> Sample:
        return self.samples[index]

    @property
    def is_empty(self) -> bool:
        return not self.samples
