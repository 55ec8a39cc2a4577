"""Helpers shared by the markup-based track decoders."""

from __future__ import annotations

from datetime import datetime, timezone

from lxml import etree

from archive_tracks.errors import TrackFormatError


def parse_root(
    file_bytes: bytes,
    expected_root: str,
    error_cls: type[TrackFormatError],
) -> etree._Element:
    """Parse markup bytes and check the root element's local name.

    Raises:
        error_cls: If the document is ill-formed or rooted at another element
    """
    # lxml parsers are not safe to share across threads, so build one per call.
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(file_bytes, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise error_cls(f"ill-formed document: {e}") from e

    if root is None:
        raise error_cls("empty document")

    root_name = local_name(root.tag)
    if root_name != expected_root:
        raise error_cls(f"unexpected root element <{root_name}>, expected <{expected_root}>")
    return root


def local_name(tag: object) -> str:
    # Comments and processing instructions have non-string tags.
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(text: str, error_cls: type[TrackFormatError]) -> datetime:
    try:
        return as_utc(datetime.fromisoformat(text.strip().replace("Z", "+00:00")))
    except ValueError as e:
        raise error_cls(f"invalid timestamp {text!r}: {e}") from e


def parse_float(text: str, field: str, error_cls: type[TrackFormatError]) -> float:
    try:
        return float(text)
    except ValueError as e:
        raise error_cls(f"invalid {field} value {text!r}") from e


def parse_reading(text: str | None, field: str, error_cls: type[TrackFormatError]) -> int | None:
    """Parse an optional non-negative integer reading such as heart rate.

    Blank or missing text is treated as absent.
    """
    if text is None or not text.strip():
        return None
    try:
        value = round(float(text))
    except (ValueError, OverflowError) as e:
        raise error_cls(f"invalid {field} value {text!r}") from e
    if value < 0:
        raise error_cls(f"negative {field} value {text!r}")
    return value
