from archive_tracks.integrations.gpsbabel.transcoder import GpsBabelTranscoder, TranscodeKind, Transcoder

__all__ = ["GpsBabelTranscoder", "TranscodeKind", "Transcoder"]
