"""Read route files out of an unpacked export archive."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from archive_tracks.errors import ArchiveReadError, RouteFileNotFoundError


class ArchiveStore:
    """Resolves route filenames relative to the export's root directory."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root)

    def resolve(self, filename: str) -> Path:
        return self._root / filename

    def read(self, filename: str) -> bytes:
        """Read a route file's full contents.

        Args:
            filename: Path relative to the archive root (e.g. "activities/123.gpx.gz")

        Returns:
            Raw file bytes

        Raises:
            RouteFileNotFoundError: If the file does not exist
            ArchiveReadError: If the file exists but cannot be read
        """
        path = self.resolve(filename)
        try:
            data = path.read_bytes()
        except FileNotFoundError as e:
            raise RouteFileNotFoundError(f"route file not found: {path}", filename=filename) from e
        except OSError as e:
            raise ArchiveReadError(f"could not read {path}: {e}", filename=filename) from e

        logger.debug(f"Read {len(data)} bytes from {path}")
        return data
