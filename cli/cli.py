"""CLI for decoding a bulk activity export.

Reads the export's activity index, decodes every route file and prints a
per-activity summary.
"""

from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from archive_tracks.config.settings import settings
from archive_tracks.core.logger import setup_logger
from archive_tracks.errors import TrackDecodeError
from archive_tracks.ingestion.archive_store import ArchiveStore
from archive_tracks.ingestion.batch import ActivityResult, parse_activities
from archive_tracks.ingestion.index_reader import IndexFormatError, read_activity_index
from archive_tracks.ingestion.track_parser import TrackParser
from archive_tracks.integrations.gpsbabel.transcoder import GpsBabelTranscoder, TranscodeKind

console = Console()

app = typer.Typer(
    name="archive-tracks",
    help="Decode route files from a bulk workout export",
    add_completion=False,
)


def _build_parser(archive_path: Path, gpsbabel_path: str) -> TrackParser:
    transcoder = GpsBabelTranscoder(
        gpsbabel_path,
        timeout_seconds=settings.transcoder_timeout_seconds,
        temp_dir=settings.temp_dir,
    )
    return TrackParser(
        ArchiveStore(archive_path),
        transcoder,
        fit_output_kind=TranscodeKind(settings.fit_output_format),
    )


def _result_row(result: ActivityResult) -> list[str]:
    activity = result.activity
    title = escape(activity.title)
    activity_type = escape(activity.activity_type)
    date = activity.date.strftime("%Y-%m-%d %H:%M") if activity.date else "-"
    if result.error is not None:
        return [date, title, activity_type, "-", "-", f"[red]{result.error.code}[/red]"]
    if result.track is None:
        return [date, title, activity_type, "-", "-", "[dim]no route[/dim]"]
    track = result.track
    return [date, title, activity_type, str(track.source_format), str(len(track)), "[green]ok[/green]"]


@app.command()
def parse(
    archive_path: Path = typer.Argument(settings.archive_path, help="Root directory of the unpacked export"),
    activities_file: str = typer.Option(settings.activities_file, "--index", "-i", help="Index CSV under the archive root"),
    gpsbabel_path: str = typer.Option(settings.gpsbabel_path, "--gpsbabel", help="Path to the gpsbabel executable"),
    workers: int = typer.Option(settings.max_workers, "--workers", "-w", min=1, help="Concurrent decodes"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_file: Path | None = typer.Option(settings.log_file, "--log-file", help="Also write logs to this file"),
) -> None:
    """Decode every activity listed in the export's index."""
    setup_logger(level="DEBUG" if debug else settings.log_level, log_file=log_file)

    index_path = archive_path / activities_file
    try:
        activities = read_activity_index(index_path)
    except (OSError, IndexFormatError) as e:
        console.print(Panel(Text(f"Could not read activity index {index_path}", style="bold red"), subtitle=str(e), border_style="red"))
        raise typer.Exit(1) from e

    results = parse_activities(activities, _build_parser(archive_path, gpsbabel_path), max_workers=workers)

    table = Table(title=f"Activities in {archive_path}")
    for column in ("Date", "Title", "Type", "Format", "Points", "Status"):
        table.add_column(column)
    for result in results:
        table.add_row(*_result_row(result))
    console.print(table)

    failures = [result for result in results if not result.ok]
    for result in failures:
        console.print(f"[red]✗[/red] {escape(str(result.error))}")

    console.print(f"\n{len(results)} activities, {len(failures)} failed")
    if failures:
        raise typer.Exit(1)


@app.command()
def decode(
    route_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Route file (.gpx, .tcx, .fit, optionally .gz)"),
    gpsbabel_path: str = typer.Option(settings.gpsbabel_path, "--gpsbabel", help="Path to the gpsbabel executable"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_file: Path | None = typer.Option(settings.log_file, "--log-file", help="Also write logs to this file"),
) -> None:
    """Decode a single route file and print its samples."""
    setup_logger(level="DEBUG" if debug else settings.log_level, log_file=log_file)

    parser = _build_parser(route_file.parent, gpsbabel_path)
    try:
        track = parser.decode_bytes(route_file.name, route_file.read_bytes())
    except TrackDecodeError as e:
        e.filename = e.filename or route_file.name
        logger.error(f"Decode failed: {e}")
        console.print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    table = Table(title=f"{route_file.name} ({track.source_format}, {len(track)} samples)")
    for column in ("Time", "Lat", "Lon", "Ele", "HR", "Cad"):
        table.add_column(column)
    for sample in track:
        table.add_row(
            sample.time.isoformat() if sample.time else "-",
            f"{sample.latitude:.6f}",
            f"{sample.longitude:.6f}",
            f"{sample.elevation:.1f}" if sample.elevation is not None else "-",
            str(sample.heart_rate) if sample.heart_rate is not None else "-",
            str(sample.cadence) if sample.cadence is not None else "-",
        )
    console.print(table)


if __name__ == "__main__":
    app()
