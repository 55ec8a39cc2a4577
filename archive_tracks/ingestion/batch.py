"""Decode many activities on a bounded worker pool."""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from loguru import logger

from archive_tracks.errors import TrackDecodeError
from archive_tracks.ingestion.track_parser import TrackParser
from archive_tracks.models.activity import ActivityRecord
from archive_tracks.models.track import Track


@dataclass(frozen=True)
class ActivityResult:
    """Outcome of decoding one activity.

    Exactly one of these holds: ``error`` is set (the decode failed), or
    ``track`` is set, or both are None (the activity has no route).
    """

    activity: ActivityRecord
    track: Track | None = None
    error: TrackDecodeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _parse_one(parser: TrackParser, activity: ActivityRecord) -> ActivityResult:
    try:
        track = parser.parse(activity)
    except TrackDecodeError as e:
        logger.warning(f"Failed to parse route for '{activity.title}': {e}")
        return ActivityResult(activity=activity, error=e)
    return ActivityResult(activity=activity, track=track)


def parse_activities(
    activities: Sequence[ActivityRecord],
    parser: TrackParser,
    *,
    max_workers: int = 4,
) -> list[ActivityResult]:
    """Decode each activity independently.

    A decode failure is captured in that activity's result and never stops
    the rest of the batch. Unexpected exceptions still propagate.

    Args:
        activities: Records to decode
        parser: Shared track parser
        max_workers: Upper bound on concurrent decodes

    Returns:
        One ActivityResult per record, in input order
    """
    if max_workers < 1:
        raise ValueError("max_workers must be >= 1")

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="track-decode") as executor:
        results = list(executor.map(lambda activity: _parse_one(parser, activity), activities))

    failed = sum(1 for result in results if not result.ok)
    logger.info(f"Parsed {len(results)} activities ({failed} failed)")
    return results
