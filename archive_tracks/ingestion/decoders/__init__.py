from archive_tracks.ingestion.decoders.fit import decode_fit
from archive_tracks.ingestion.decoders.gpx import decode_gpx
from archive_tracks.ingestion.decoders.tcx import decode_tcx

__all__ = ["decode_fit", "decode_gpx", "decode_tcx"]
