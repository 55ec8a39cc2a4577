"""External transcoding of binary route files via GPSBabel.

FIT files are not decoded in-process. Their bytes are staged in a temporary
file, GPSBabel converts them to TCX (or GPX) on standard output, and the
captured output is handed to the markup decoders.
"""

from __future__ import annotations

import os
import subprocess
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from enum import StrEnum
from pathlib import Path
from typing import Protocol

from loguru import logger

from archive_tracks.errors import TempFileError, TranscoderUnavailableError, TranscodingFailedError

STDERR_TAIL_CHARS = 2000


class TranscodeKind(StrEnum):
    """GPSBabel format names used with -i / -o."""

    GARMIN_FIT = "garmin_fit"
    GTRNCTR = "gtrnctr"
    GPX = "gpx"


TEMP_SUFFIXES: dict[TranscodeKind, str] = {
    TranscodeKind.GARMIN_FIT: ".fit",
    TranscodeKind.GTRNCTR: ".tcx",
    TranscodeKind.GPX: ".gpx",
}


class Transcoder(Protocol):
    """Converts route file bytes from one format to another."""

    def transcode(self, data: bytes, from_kind: TranscodeKind, to_kind: TranscodeKind) -> bytes: ...


@contextmanager
def staged_input(data: bytes, *, suffix: str = "", directory: Path | None = None) -> Iterator[Path]:
    """Write bytes to a uniquely named temporary file for the block's lifetime.

    The file is removed when the block exits, whether it returns, raises or is
    interrupted.

    Raises:
        TempFileError: If the file cannot be created or written
    """
    try:
        fd, name = tempfile.mkstemp(suffix=suffix, dir=directory)
    except OSError as e:
        raise TempFileError(f"could not create temporary file: {e}") from e

    path = Path(name)
    try:
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
        except OSError as e:
            raise TempFileError(f"could not write temporary file {path}: {e}") from e
        yield path
    finally:
        with suppress(FileNotFoundError):
            path.unlink()


class GpsBabelTranscoder:
    """Transcoder backed by the gpsbabel executable.

    Each call stages its input in its own temporary file, so one instance can
    be shared across worker threads.
    """

    def __init__(
        self,
        executable: str = "gpsbabel",
        *,
        timeout_seconds: float = 60.0,
        temp_dir: Path | None = None,
    ) -> None:
        self._executable = executable
        self._timeout_seconds = timeout_seconds
        self._temp_dir = temp_dir

    def command(self, input_path: Path, from_kind: TranscodeKind, to_kind: TranscodeKind) -> list[str]:
        return [
            self._executable,
            "-t",
            "-i",
            str(from_kind),
            "-f",
            str(input_path),
            "-o",
            str(to_kind),
            "-F",
            "-",  # Write to stdout
        ]

    def transcode(self, data: bytes, from_kind: TranscodeKind, to_kind: TranscodeKind) -> bytes:
        """Convert ``data`` from ``from_kind`` to ``to_kind``.

        Args:
            data: Input file contents (already decompressed)
            from_kind: GPSBabel input format
            to_kind: GPSBabel output format

        Returns:
            Bytes gpsbabel wrote to standard output. Empty or garbage output on
            a zero exit is returned as-is and left for the decoder to reject.

        Raises:
            TempFileError: If the input cannot be staged on disk
            TranscoderUnavailableError: If gpsbabel cannot be launched
            TranscodingFailedError: If gpsbabel exits non-zero or times out
        """
        with staged_input(data, suffix=TEMP_SUFFIXES[from_kind], directory=self._temp_dir) as input_path:
            command = self.command(input_path, from_kind, to_kind)
            logger.debug(f"Running transcoder: {' '.join(command)}")

            try:
                completed = subprocess.run(
                    command,
                    capture_output=True,
                    timeout=self._timeout_seconds,
                    check=False,
                )
            except subprocess.TimeoutExpired as e:
                logger.error(f"gpsbabel timed out after {self._timeout_seconds}s converting {from_kind} to {to_kind}")
                raise TranscodingFailedError(f"transcoding failed: gpsbabel timed out after {self._timeout_seconds}s") from e
            except OSError as e:
                logger.error(f"Could not launch gpsbabel at {self._executable!r}: {e}")
                raise TranscoderUnavailableError(f"transcoder unavailable: {self._executable}: {e}") from e

        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace")[-STDERR_TAIL_CHARS:]
            logger.error(f"gpsbabel exited with status {completed.returncode}: {stderr.strip()}")
            raise TranscodingFailedError(
                f"transcoding failed: gpsbabel exited with status {completed.returncode}",
                returncode=completed.returncode,
                stderr=stderr,
            )

        logger.debug(f"gpsbabel produced {len(completed.stdout)} bytes of {to_kind}")
        return completed.stdout
