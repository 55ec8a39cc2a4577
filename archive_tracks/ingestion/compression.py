"""Reverse the optional gzip wrapper on route files."""

from __future__ import annotations

import zlib

from archive_tracks.errors import DecompressionError


def decompress(data: bytes, compressed: bool) -> bytes:
    """Decompress a single-member gzip stream, or pass bytes through.

    Args:
        data: Raw route file bytes
        compressed: Whether the filename carried the gzip suffix

    Returns:
        Decompressed bytes, or ``data`` itself when not compressed

    Raises:
        DecompressionError: If the stream is corrupt, truncated or not gzip
    """
    if not compressed:
        return data

    # Single member only: bytes after the first member's trailer are rejected.
    decompressor = zlib.decompressobj(wbits=16 + zlib.MAX_WBITS)
    try:
        output = decompressor.decompress(data)
        output += decompressor.flush()
    except zlib.error as e:
        raise DecompressionError(f"decompression failed: {e}") from e

    if not decompressor.eof:
        raise DecompressionError("decompression failed: truncated gzip stream")
    if decompressor.unused_data:
        raise DecompressionError("decompression failed: trailing data after gzip member")
    return output
