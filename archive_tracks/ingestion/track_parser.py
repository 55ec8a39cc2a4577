"""Resolve, unwrap and decode one activity's route file."""

from __future__ import annotations

from typing import assert_never

from loguru import logger

from archive_tracks.errors import TrackDecodeError
from archive_tracks.ingestion.archive_store import ArchiveStore
from archive_tracks.ingestion.compression import decompress
from archive_tracks.ingestion.decoders import decode_fit, decode_gpx, decode_tcx
from archive_tracks.ingestion.format_detector import detect_format
from archive_tracks.integrations.gpsbabel.transcoder import TranscodeKind, Transcoder
from archive_tracks.models.activity import ActivityRecord
from archive_tracks.models.track import TcxProfile, Track, TrackFormat


class TrackParser:
    """Turns activity records into decoded tracks.

    Stages run in order and each completes before the next starts:
    archive read, filename classification, decompression, format decode.
    The first failure propagates with the route filename attached; no
    partial Track is ever returned.
    """

    def __init__(
        self,
        store: ArchiveStore,
        transcoder: Transcoder,
        *,
        fit_output_kind: TranscodeKind = TranscodeKind.GTRNCTR,
    ) -> None:
        self._store = store
        self._transcoder = transcoder
        self._fit_output_kind = fit_output_kind

    def parse(self, activity: ActivityRecord) -> Track | None:
        """Decode an activity's route.

        Args:
            activity: Index record for the activity

        Returns:
            The decoded Track (possibly empty), or None when the activity has
            no route file

        Raises:
            TrackDecodeError: If any stage fails
        """
        if not activity.has_route:
            logger.debug(f"Activity '{activity.title}' has no route file")
            return None

        filename = activity.filename
        try:
            raw = self._store.read(filename)
            track = self.decode_bytes(filename, raw)
        except TrackDecodeError as e:
            if e.filename is None:
                e.filename = filename
            raise

        logger.info(f"Parsed {filename}: {len(track)} samples ({track.source_format})")
        return track

    def decode_bytes(self, filename: str, raw: bytes) -> Track:
        """Decode raw route file bytes, using ``filename`` to pick the format."""
        detected = detect_format(filename)
        data = decompress(raw, detected.compressed)
        return self._decode(detected.track_format, data)

    def _decode(self, track_format: TrackFormat, data: bytes) -> Track:
        if track_format is TrackFormat.GPX:
            return decode_gpx(data)
        if track_format is TrackFormat.TCX:
            return decode_tcx(data, TcxProfile.STANDARD)
        if track_format is TrackFormat.FIT:
            return decode_fit(data, self._transcoder, self._fit_output_kind)
        assert_never(track_format)
