"""Track decoding error types.

Every failure while turning an activity's route file into a Track is raised
as a TrackDecodeError subclass. Three families let callers tell apart:
- TrackIOError: the bytes could not be read, decompressed or staged on disk
- TrackFormatError: the filename or document is not a valid route file
- ExternalToolError: the FIT transcoder is missing or failed

Errors are fatal to one activity only and are never retried.
"""

from enum import StrEnum


class DecodeStage(StrEnum):
    """Pipeline stage that raised an error."""

    ARCHIVE = "archive"
    FILENAME = "filename"
    DECOMPRESS = "decompress"
    TRANSCODE = "transcode"
    DECODE = "decode"


class TrackDecodeError(Exception):
    """Base exception for route file decoding failures.

    Attributes:
        code: Machine readable error code (e.g. "MALFORMED_GPX")
        stage: Pipeline stage that failed
        message: Human readable detail
        filename: Route filename, attached by the track parser when known
    """

    stage: DecodeStage = DecodeStage.DECODE

    def __init__(self, code: str, message: str, *, filename: str | None = None) -> None:
        self.code = code
        self.message = message
        self.filename = filename
        super().__init__(message)

    def __str__(self) -> str:
        prefix = f"{self.filename}: " if self.filename else ""
        return f"{prefix}[{self.stage}] {self.code}: {self.message}"


class TrackIOError(TrackDecodeError):
    """Raised when route bytes cannot be read, decompressed or staged."""


class RouteFileNotFoundError(TrackIOError):
    stage = DecodeStage.ARCHIVE

    def __init__(self, message: str = "route file not found", *, filename: str | None = None) -> None:
        super().__init__("ROUTE_FILE_NOT_FOUND", message, filename=filename)


class ArchiveReadError(TrackIOError):
    stage = DecodeStage.ARCHIVE

    def __init__(self, message: str, *, filename: str | None = None) -> None:
        super().__init__("ARCHIVE_READ_FAILED", message, filename=filename)


class DecompressionError(TrackIOError):
    stage = DecodeStage.DECOMPRESS

    def __init__(self, message: str = "decompression failed", *, filename: str | None = None) -> None:
        super().__init__("DECOMPRESSION_FAILED", message, filename=filename)


class TempFileError(TrackIOError):
    """Raised when the scoped temporary file for transcoding cannot be written."""

    stage = DecodeStage.TRANSCODE

    def __init__(self, message: str, *, filename: str | None = None) -> None:
        super().__init__("TEMP_FILE_FAILED", message, filename=filename)


class TrackFormatError(TrackDecodeError):
    """Raised when a filename or document is not a valid route file."""


class MalformedFilenameError(TrackFormatError):
    stage = DecodeStage.FILENAME

    def __init__(self, message: str = "malformed filename", *, filename: str | None = None) -> None:
        super().__init__("MALFORMED_FILENAME", message, filename=filename)


class UnsupportedFormatError(TrackFormatError):
    stage = DecodeStage.FILENAME

    def __init__(self, message: str = "unsupported format", *, filename: str | None = None) -> None:
        super().__init__("UNSUPPORTED_FORMAT", message, filename=filename)


class MalformedGpxError(TrackFormatError):
    def __init__(self, message: str = "malformed GPX", *, filename: str | None = None) -> None:
        super().__init__("MALFORMED_GPX", message, filename=filename)


class MalformedTcxError(TrackFormatError):
    def __init__(self, message: str = "malformed TCX", *, filename: str | None = None) -> None:
        super().__init__("MALFORMED_TCX", message, filename=filename)


class ExternalToolError(TrackDecodeError):
    """Raised when the external transcoder is missing or fails."""

    stage = DecodeStage.TRANSCODE


class TranscoderUnavailableError(ExternalToolError):
    def __init__(self, message: str, *, filename: str | None = None) -> None:
        super().__init__("TRANSCODER_UNAVAILABLE", message, filename=filename)


class TranscodingFailedError(ExternalToolError):
    """Raised on a non-zero transcoder exit or a timeout.

    Attributes:
        returncode: Process exit status, None when the process timed out
        stderr: Decoded tail of the transcoder's standard error
    """

    def __init__(
        self,
        message: str = "transcoding failed",
        *,
        returncode: int | None = None,
        stderr: str = "",
        filename: str | None = None,
    ) -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__("TRANSCODING_FAILED", message, filename=filename)
