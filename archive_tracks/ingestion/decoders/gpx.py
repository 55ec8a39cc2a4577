"""GPX track decoder.

Reads every trk/trkseg/trkpt in document order. Latitude and longitude
attributes are required on each point; elevation, time and the Garmin
TrackPointExtension heart rate and cadence are optional.
"""

from __future__ import annotations

import gpxpy
import gpxpy.gpx
from lxml import etree
from loguru import logger

from archive_tracks.errors import MalformedGpxError
from archive_tracks.ingestion.decoders.common import as_utc, local_name, parse_reading, parse_root
from archive_tracks.models.track import Sample, Track, TrackFormat

# Local names used by Garmin's TrackPointExtension (v1 and v2) for sensor data.
HEART_RATE_TAGS = frozenset({"hr", "heartrate"})
CADENCE_TAGS = frozenset({"cad", "cadence"})


def _extension_readings(point: gpxpy.gpx.GPXTrackPoint) -> tuple[int | None, int | None]:
    """Extract heart rate and cadence from a point's vendor extensions."""
    heart_rate: int | None = None
    cadence: int | None = None

    for extension in point.extensions:
        for element in extension.iter():
            name = local_name(element.tag).lower()
            if name in HEART_RATE_TAGS and heart_rate is None:
                heart_rate = parse_reading(element.text, "heart rate", MalformedGpxError)
            elif name in CADENCE_TAGS and cadence is None:
                cadence = parse_reading(element.text, "cadence", MalformedGpxError)

    return heart_rate, cadence


def _to_sample(point: gpxpy.gpx.GPXTrackPoint, index: int) -> Sample:
    if point.latitude is None or point.longitude is None:
        raise MalformedGpxError(f"trackpoint {index} is missing lat/lon attributes")

    heart_rate, cadence = _extension_readings(point)
    return Sample(
        latitude=float(point.latitude),
        longitude=float(point.longitude),
        elevation=float(point.elevation) if point.elevation is not None else None,
        time=as_utc(point.time) if point.time is not None else None,
        heart_rate=heart_rate,
        cadence=cadence,
    )


def decode_gpx(file_bytes: bytes) -> Track:
    """Decode GPX bytes into a Track.

    Args:
        file_bytes: Uncompressed GPX document

    Returns:
        Track with one Sample per trackpoint, in document order

    Raises:
        MalformedGpxError: If the markup is ill-formed, the root is not <gpx>,
            or a trackpoint lacks coordinates
    """
    # gpxpy neither checks the root element name nor honours the declared
    # encoding, so lxml parses the bytes and gpxpy reads the re-serialized text.
    root = parse_root(file_bytes, "gpx", MalformedGpxError)

    try:
        gpx = gpxpy.parse(etree.tostring(root, encoding="unicode"))
    except (gpxpy.gpx.GPXException, ValueError) as e:
        raise MalformedGpxError(f"Failed to parse GPX file: {e}") from e

    samples: list[Sample] = []
    for track in gpx.tracks:
        for segment in track.segments:
            for point in segment.points:
                samples.append(_to_sample(point, len(samples)))

    logger.debug(f"Decoded {len(samples)} GPX trackpoints from {len(gpx.tracks)} track(s)")
    return Track(source_format=TrackFormat.GPX, samples=tuple(samples))
