"""Append sensor readings to a CSV data file."""

from __future__ import annotations

import logging
import shutil
import time
from dataclasses import dataclass
from pathlib import Path

DATA_FILE_PATH = "/data.csv"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Readings:
    """The latest values from the particulate and environmental sensors."""

    pm1: float = 0.0
    pm25: float = 0.0
    pm4: float = 0.0
    pm10: float = 0.0
    avp: float = 0.0
    env_temp: float = 0.0
    env_hum: float = 0.0
    env_pressure: float = 0.0
    env_altitude: float = 0.0

    def values(self) -> tuple[float, ...]:
        return (
            self.pm1,
            self.pm25,
            self.pm4,
            self.pm10,
            self.avp,
            self.env_temp,
            self.env_hum,
            self.env_pressure,
            self.env_altitude,
        )


def current_time(epoch_time: int, start_ms: int, now_ms: int) -> int:
    """Unix time from a synchronised epoch and a 32-bit millisecond counter."""
    elapsed_ms = (now_ms - start_ms) & 0xFFFFFFFF
    return epoch_time + elapsed_ms // 1000


def format_timestamp(timestamp: float) -> str:
    """Format a Unix time as local ``YYYY-MM-DD HH:MM:SS``."""
    return time.strftime(TIMESTAMP_FORMAT, time.localtime(timestamp))


def format_row(timestamp: float, readings: Readings) -> str:
    """One CSV line: the timestamp followed by the readings to three decimals."""
    fields = [format_timestamp(timestamp)]
    fields.extend(f"{value:.3f}" for value in readings.values())
    return ",".join(fields) + "\n"


def log_sensor_data(path: str | Path, readings: Readings, timestamp: float) -> None:
    """Append one row of readings to the CSV file at ``path``."""
    path = Path(path)
    with path.open("a", encoding="ascii", newline="") as data_file:
        data_file.write(format_row(timestamp, readings))
    log.info("Data logged successfully.")
    usage = shutil.disk_usage(path.parent)
    log.info("Storage usage: %d/%d bytes", usage.used, usage.total)