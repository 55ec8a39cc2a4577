"""TCX track decoder.

Native TCX exports and TCX produced by transcoding a FIT file place their
trackpoints under different element paths. The caller selects the path with
a TcxProfile; the document is never sniffed to choose one, and a document
shaped for the other profile simply yields an empty Track.
"""

from __future__ import annotations

from lxml import etree
from loguru import logger

from archive_tracks.errors import MalformedTcxError
from archive_tracks.ingestion.decoders.common import parse_float, parse_reading, parse_root, parse_timestamp
from archive_tracks.models.track import Sample, TcxProfile, Track, TrackFormat

TRACKPOINT_PATHS: dict[TcxProfile, str] = {
    TcxProfile.STANDARD: "{*}Activities/{*}Activity/{*}Lap/{*}Track/{*}Trackpoint",
    TcxProfile.ALTERNATE: "{*}Courses/{*}Course/{*}Track/{*}Trackpoint",
}


def _optional_text(element: etree._Element, path: str) -> str | None:
    text = element.findtext(path)
    if text is None or not text.strip():
        return None
    return text.strip()


def _coordinate(position: etree._Element, tag: str, index: int) -> float:
    text = _optional_text(position, f"{{*}}{tag}")
    if text is None:
        raise MalformedTcxError(f"trackpoint {index} is missing Position/{tag}")
    return parse_float(text, tag, MalformedTcxError)


def _to_sample(trackpoint: etree._Element, index: int) -> Sample:
    position = trackpoint.find("{*}Position")
    if position is None:
        raise MalformedTcxError(f"trackpoint {index} is missing Position")

    altitude = _optional_text(trackpoint, "{*}AltitudeMeters")
    timestamp = _optional_text(trackpoint, "{*}Time")

    return Sample(
        latitude=_coordinate(position, "LatitudeDegrees", index),
        longitude=_coordinate(position, "LongitudeDegrees", index),
        elevation=parse_float(altitude, "AltitudeMeters", MalformedTcxError) if altitude is not None else None,
        time=parse_timestamp(timestamp, MalformedTcxError) if timestamp is not None else None,
        heart_rate=parse_reading(trackpoint.findtext("{*}HeartRateBpm/{*}Value"), "heart rate", MalformedTcxError),
        cadence=parse_reading(trackpoint.findtext("{*}Cadence"), "cadence", MalformedTcxError),
    )


def decode_tcx(file_bytes: bytes, profile: TcxProfile = TcxProfile.STANDARD) -> Track:
    """Decode TCX bytes into a Track.

    Args:
        file_bytes: Uncompressed TCX document
        profile: STANDARD for native exports, ALTERNATE for transcoder output

    Returns:
        Track with one Sample per trackpoint found on the profile's path

    Raises:
        MalformedTcxError: If the markup is ill-formed, the root is not
            <TrainingCenterDatabase>, or a trackpoint lacks coordinates
    """
    root = parse_root(file_bytes, "TrainingCenterDatabase", MalformedTcxError)

    trackpoints = root.findall(TRACKPOINT_PATHS[profile])
    samples = tuple(_to_sample(trackpoint, index) for index, trackpoint in enumerate(trackpoints))

    logger.debug(f"Decoded {len(samples)} TCX trackpoints using {profile} profile")
    return Track(source_format=TrackFormat.TCX, samples=samples)
