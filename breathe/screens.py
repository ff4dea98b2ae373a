"""Text content of the device's data, configuration and menu screens."""

from __future__ import annotations

from .logger import Readings

MIN_INTERVAL_MS = 100
MAX_INTERVAL_MS = 5000
MIN_BAR_WIDTH = 10
MAX_BAR_WIDTH = 220


def map_range(value: int, in_min: int, in_max: int, out_min: int, out_max: int) -> int:
    """Linearly rescale an integer, truncating toward zero."""
    if in_max == in_min:
        raise ZeroDivisionError("input range is empty")
    numerator = (value - in_min) * (out_max - out_min)
    denominator = in_max - in_min
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        quotient = -quotient
    return quotient + out_min


def menu_labels() -> list[tuple[int, int, str]]:
    """The bottom menu as ``(x, y, label)`` entries."""
    return [(35, 225, ".Data."), (132, 225, ".Cfg."), (229, 225, ".Freq.")]


def info_screen_lines(readings: Readings, total_bytes: int, used_bytes: int) -> list[str]:
    """Lines of the data screen, top to bottom."""
    free_bytes = total_bytes - used_bytes
    free_percent = free_bytes / total_bytes * 100.0 if total_bytes > 0 else 0.0
    return [
        "SPS30 Sensor:",
        f"PM1.0: {readings.pm1:.1f}  PM2.5: {readings.pm25:.1f}  "
        f"PM4.0: {readings.pm4:.1f}  PM10: {readings.pm10:.1f}",
        f"Avg Particle Size: {readings.avp:.1f}",
        "Environmental Data:",
        f"Temp: {readings.env_temp:.1f} C  Hum: {readings.env_hum:.1f}%",
        f"Pressure: {readings.env_pressure:.6f} atm  Altitude: {readings.env_altitude:.2f} m",
        f"SD Storage:{free_percent:.1f}% free",
    ]


def config_screen_lines(time_interval: int) -> list[str]:
    """Lines of the configuration screen, top to bottom."""
    return [
        "Configuration Tab",
        "Sampling Interval (ms):",
        f"{time_interval} ms",
    ]


def bar_width(time_interval: int) -> int:
    """Width in pixels of the bar showing the sampling interval."""
    return map_range(
        time_interval, MIN_INTERVAL_MS, MAX_INTERVAL_MS, MIN_BAR_WIDTH, MAX_BAR_WIDTH
    )