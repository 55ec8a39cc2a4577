"""FIT track decoding by delegation to an external transcoder."""

from __future__ import annotations

from loguru import logger

from archive_tracks.ingestion.decoders.gpx import decode_gpx
from archive_tracks.ingestion.decoders.tcx import decode_tcx
from archive_tracks.integrations.gpsbabel.transcoder import TranscodeKind, Transcoder
from archive_tracks.models.track import TcxProfile, Track, TrackFormat


def decode_fit(
    file_bytes: bytes,
    transcoder: Transcoder,
    output_kind: TranscodeKind = TranscodeKind.GTRNCTR,
) -> Track:
    """Decode FIT bytes by transcoding them to markup first.

    TCX output is read with the ALTERNATE profile, since transcoded documents
    are course-shaped rather than activity-shaped.

    Args:
        file_bytes: Uncompressed FIT file
        transcoder: Converter from garmin_fit to ``output_kind``
        output_kind: GTRNCTR (TCX) or GPX

    Returns:
        Track tagged as FIT

    Raises:
        ExternalToolError: If transcoding fails; no decode is attempted
        TrackIOError: If the transcoder cannot stage its input
        TrackFormatError: If the transcoder's output is empty or malformed
    """
    if output_kind is TranscodeKind.GARMIN_FIT:
        raise ValueError("FIT output_kind must be a markup format")

    markup = transcoder.transcode(file_bytes, TranscodeKind.GARMIN_FIT, output_kind)

    if output_kind is TranscodeKind.GPX:
        decoded = decode_gpx(markup)
    else:
        decoded = decode_tcx(markup, TcxProfile.ALTERNATE)

    logger.debug(f"Decoded {len(decoded)} FIT samples via {output_kind}")
    return Track(source_format=TrackFormat.FIT, samples=decoded.samples)
