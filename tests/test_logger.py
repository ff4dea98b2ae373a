import re
import time

import pytest

from breathe.logger import (
    Readings,
    current_time,
    format_row,
    format_timestamp,
    log_sensor_data,
)

READINGS = Readings(
    pm1=1.5,
    pm25=2.25,
    pm4=3.125,
    pm10=4.0,
    avp=0.5,
    env_temp=21.75,
    env_hum=45.5,
    env_pressure=101325.0,
    env_altitude=12.25,
)
STAMP = 1_700_000_000


def test_current_time_without_elapsed_time():
    assert current_time(STAMP, 5000, 5000) == STAMP


def test_current_time_truncates_to_seconds():
    assert current_time(1000, 0, 5999) == 1005


def test_current_time_survives_counter_wrap():
    assert current_time(STAMP, 0xFFFFFC18, 1000) == STAMP + 2


def test_format_timestamp_shape_and_round_trip():
    text = format_timestamp(STAMP)
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", text)
    assert int(time.mktime(time.strptime(text, "%Y-%m-%d %H:%M:%S"))) == STAMP


def test_format_row_fields():
    row = format_row(STAMP, READINGS)
    assert row.endswith("\n")
    fields = row.rstrip("\n").split(",")
    assert len(fields) == 10
    assert fields[0] == format_timestamp(STAMP)
    assert fields[1] == "1.500"
    for text, value in zip(fields[1:], READINGS.values()):
        assert float(text) == pytest.approx(value, abs=5e-4)


def test_log_sensor_data_appends(tmp_path):
    path = tmp_path / "data.csv"
    log_sensor_data(path, READINGS, STAMP)
    log_sensor_data(path, Readings(), STAMP + 1)
    lines = path.read_text().splitlines(keepends=True)
    assert lines == [format_row(STAMP, READINGS), format_row(STAMP + 1, Readings())]


def test_log_sensor_data_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        log_sensor_data(tmp_path / "missing" / "data.csv", READINGS, STAMP)