from datetime import datetime
from pathlib import Path

import pytest

from archive_tracks.ingestion.index_reader import IndexFormatError, parse_activity_rows, read_activity_index

HEADER = (
    "Activity ID,Activity Date,Activity Name,Activity Type,Activity Description,Elapsed Time,Distance,"
    "Relative Effort,Commute,Activity Gear,Filename,Athlete Weight,Bike Weight,Elapsed Time,Moving Time,"
    "Distance,Max Speed,Average Speed,Elevation Gain,Elevation Loss,Elevation Low,Elevation High\n"
)

RIDE_ROW = (
    '3456789012,"Jun 1, 2020, 10:00:00 AM",Morning Ride,Ride,"Hills, then coffee",3600,30.5,,false,,'
    'activities/3456789012.fit.gz,,,"3,600","3,412","30,512.4",,,"412.0",410.5,12.0,"1,204.3"\n'
)

ROW_ROW = '3456789013,"Jun 2, 2020, 6:05:09 PM",Evening Row,Rowing,,1800,0,,false,,,,,"1,800","1,800",0,,,,,,\n'


def test_parse_rows_maps_columns() -> None:
    records = parse_activity_rows([HEADER, RIDE_ROW])

    assert len(records) == 1
    ride = records[0]
    assert ride.date == datetime(2020, 6, 1, 10, 0, 0)
    assert ride.title == "Morning Ride"
    assert ride.activity_type == "Ride"
    assert ride.description == "Hills, then coffee"
    assert ride.filename == "activities/3456789012.fit.gz"
    assert ride.elapsed_time == 3600
    assert ride.moving_time == 3412
    assert ride.distance == pytest.approx(30512.4)
    assert ride.elevation_gain == pytest.approx(412.0)
    assert ride.elevation_loss == pytest.approx(410.5)
    assert ride.elevation_min == pytest.approx(12.0)
    assert ride.elevation_max == pytest.approx(1204.3)
    assert ride.has_route


def test_stationary_activity_has_no_route() -> None:
    row = parse_activity_rows([HEADER, ROW_ROW])[0]

    assert row.date == datetime(2020, 6, 2, 18, 5, 9)
    assert row.filename == ""
    assert not row.has_route
    assert row.elevation_gain is None


def test_short_row_is_rejected() -> None:
    with pytest.raises(IndexFormatError) as exc_info:
        parse_activity_rows([HEADER, "1,2,3\n"])

    assert exc_info.value.row_number == 2


def test_bad_date_is_rejected() -> None:
    with pytest.raises(IndexFormatError, match="invalid activity date"):
        parse_activity_rows([HEADER, RIDE_ROW.replace("Jun 1, 2020, 10:00:00 AM", "2020-06-01")])


def test_read_activity_index(tmp_path: Path) -> None:
    index = tmp_path / "activities.csv"
    index.write_text(HEADER + RIDE_ROW + ROW_ROW, encoding="utf-8")

    records = read_activity_index(index)

    assert [record.title for record in records] == ["Morning Ride", "Evening Row"]
