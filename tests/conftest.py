"""Root conftest for all tests.

Provides builders for small GPX and TCX documents plus an archive laid out
like an unpacked export.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

GPX_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1" '
    'xmlns:gpxtpx="http://www.garmin.com/xmlschemas/TrackPointExtension/v1">\n'
)

TCX_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<TrainingCenterDatabase xmlns="http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2">\n'
)

PointSpec = dict[str, object]


def _gpx_point(point: PointSpec) -> str:
    attrs = ""
    if point.get("lat") is not None:
        attrs += f' lat="{point["lat"]}"'
    if point.get("lon") is not None:
        attrs += f' lon="{point["lon"]}"'

    children = ""
    if point.get("ele") is not None:
        children += f"<ele>{point['ele']}</ele>"
    if point.get("time") is not None:
        children += f"<time>{point['time']}</time>"
    if point.get("hr") is not None or point.get("cad") is not None:
        children += "<extensions><gpxtpx:TrackPointExtension>"
        if point.get("hr") is not None:
            children += f"<gpxtpx:hr>{point['hr']}</gpxtpx:hr>"
        if point.get("cad") is not None:
            children += f"<gpxtpx:cad>{point['cad']}</gpxtpx:cad>"
        children += "</gpxtpx:TrackPointExtension></extensions>"
    return f"<trkpt{attrs}>{children}</trkpt>"


def build_gpx(points: list[PointSpec]) -> bytes:
    body = "".join(_gpx_point(point) for point in points)
    return f"{GPX_HEADER}<trk><name>Morning Run</name><trkseg>{body}</trkseg></trk></gpx>\n".encode()


def _tcx_point(point: PointSpec) -> str:
    children = ""
    if point.get("time") is not None:
        children += f"<Time>{point['time']}</Time>"
    if point.get("lat") is not None or point.get("lon") is not None:
        children += "<Position>"
        if point.get("lat") is not None:
            children += f"<LatitudeDegrees>{point['lat']}</LatitudeDegrees>"
        if point.get("lon") is not None:
            children += f"<LongitudeDegrees>{point['lon']}</LongitudeDegrees>"
        children += "</Position>"
    if point.get("ele") is not None:
        children += f"<AltitudeMeters>{point['ele']}</AltitudeMeters>"
    if point.get("hr") is not None:
        children += f"<HeartRateBpm><Value>{point['hr']}</Value></HeartRateBpm>"
    if point.get("cad") is not None:
        children += f"<Cadence>{point['cad']}</Cadence>"
    return f"<Trackpoint>{children}</Trackpoint>"


def build_activity_tcx(points: list[PointSpec]) -> bytes:
    body = "".join(_tcx_point(point) for point in points)
    return (
        f"{TCX_HEADER}<Activities><Activity Sport=\"Biking\"><Id>2020-06-01T10:00:00Z</Id>"
        f"<Lap StartTime=\"2020-06-01T10:00:00Z\"><Track>{body}</Track></Lap>"
        f"</Activity></Activities></TrainingCenterDatabase>\n"
    ).encode()


def build_course_tcx(points: list[PointSpec]) -> bytes:
    body = "".join(_tcx_point(point) for point in points)
    return (
        f"{TCX_HEADER}<Courses><Course><Name>Converted</Name>"
        f"<Track>{body}</Track></Course></Courses></TrainingCenterDatabase>\n"
    ).encode()


@pytest.fixture
def gpx_document() -> Callable[[list[PointSpec]], bytes]:
    return build_gpx


@pytest.fixture
def activity_tcx() -> Callable[[list[PointSpec]], bytes]:
    return build_activity_tcx


@pytest.fixture
def course_tcx() -> Callable[[list[PointSpec]], bytes]:
    return build_course_tcx


@pytest.fixture
def archive_root(tmp_path: Path) -> Path:
    """Empty export root with an activities/ subdirectory."""
    (tmp_path / "activities").mkdir()
    return tmp_path


@pytest.fixture
def gpsbabel_stub(tmp_path: Path) -> Callable[..., Path]:
    """Write an executable shell script standing in for gpsbabel.

    The script records the input path it was given (the value after -f) in
    ``input_path.txt`` next to itself, prints ``stdout`` and
    exits with ``exit_code``.
    """

    def _make(stdout: bytes = b"", exit_code: int = 0, stderr: str = "") -> Path:
        stub_dir = tmp_path / "stub"
        stub_dir.mkdir(exist_ok=True)
        output_file = stub_dir / "output.bin"
        output_file.write_bytes(stdout)
        script = stub_dir / "gpsbabel"
        script.write_text(
            "#!/bin/sh\n"
            'while [ "$#" -gt 0 ]; do\n'
            f'  if [ "$1" = "-f" ]; then echo "$2" > "{stub_dir}/input_path.txt"; fi\n'
            "  shift\n"
            "done\n"
            f'cat "{output_file}"\n'
            f'echo "{stderr}" >&2\n'
            f"exit {exit_code}\n"
        )
        script.chmod(0o755)
        return script

    return _make
