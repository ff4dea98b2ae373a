"""Common sensor event and description types shared by sensor drivers."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum

SENSORS_GRAVITY_EARTH = 9.80665
SENSORS_GRAVITY_MOON = 1.6
SENSORS_GRAVITY_SUN = 275.0
SENSORS_GRAVITY_STANDARD = SENSORS_GRAVITY_EARTH
SENSORS_MAGFIELD_EARTH_MAX = 60.0
SENSORS_MAGFIELD_EARTH_MIN = 30.0
SENSORS_PRESSURE_SEALEVELHPA = 1013.25
SENSORS_DPS_TO_RADS = 0.017453293
SENSORS_GAUSS_TO_MICROTESLA = 100

EVENT_SIZE = 36
NAME_CAPACITY = 12


class SensorType(IntEnum):
    ACCELEROMETER = 1
    MAGNETIC_FIELD = 2
    ORIENTATION = 3
    GYROSCOPE = 4
    LIGHT = 5
    PRESSURE = 6
    PROXIMITY = 8
    GRAVITY = 9
    LINEAR_ACCELERATION = 10
    ROTATION_VECTOR = 11
    RELATIVE_HUMIDITY = 12
    AMBIENT_TEMPERATURE = 13
    VOLTAGE = 15
    CURRENT = 16
    COLOR = 17


def _word(value: float) -> int:
    """The 32-bit pattern of ``value`` stored as a single-precision float."""
    return struct.unpack("<I", struct.pack("<f", value))[0]


@dataclass(frozen=True)
class SensorVector:
    """A three-axis value; orientation sensors read it as roll, pitch, heading."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    status: int = 0

    @property
    def v(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @property
    def roll(self) -> float:
        return self.x

    @property
    def pitch(self) -> float:
        return self.y

    @property
    def heading(self) -> float:
        return self.z


@dataclass(frozen=True)
class SensorColor:
    """RGB components together with a packed 24-bit RGBA value."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    rgba: int = 0

    @property
    def c(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class SensorEvent:
    """One reading from a sensor; ``data`` holds up to four raw values."""

    sensor_id: int
    type: int
    timestamp: int = 0
    data: tuple[float, ...] = field(default=(0.0, 0.0, 0.0, 0.0))
    version: int = EVENT_SIZE
    reserved0: int = 0

    def __post_init__(self) -> None:
        values = tuple(float(value) for value in self.data)
        if len(values) > 4:
            raise ValueError(f"an event holds at most 4 values, got {len(values)}")
        object.__setattr__(self, "data", values + (0.0,) * (4 - len(values)))

    def _vector(self) -> SensorVector:
        status = struct.unpack("<b", struct.pack("<f", self.data[3])[:1])[0]
        return SensorVector(self.data[0], self.data[1], self.data[2], status)

    @property
    def acceleration(self) -> SensorVector:
        """Acceleration in m/s²."""
        return self._vector()

    @property
    def magnetic(self) -> SensorVector:
        """Magnetic field in µT."""
        return self._vector()

    @property
    def orientation(self) -> SensorVector:
        """Orientation in degrees."""
        return self._vector()

    @property
    def gyro(self) -> SensorVector:
        """Angular rate in rad/s."""
        return self._vector()

    @property
    def temperature(self) -> float:
        """Temperature in °C."""
        return self.data[0]

    @property
    def distance(self) -> float:
        """Distance in cm."""
        return self.data[0]

    @property
    def light(self) -> float:
        """Illuminance in lux."""
        return self.data[0]

    @property
    def pressure(self) -> float:
        """Pressure in hPa."""
        return self.data[0]

    @property
    def relative_humidity(self) -> float:
        """Relative humidity in percent."""
        return self.data[0]

    @property
    def current(self) -> float:
        """Current in mA."""
        return self.data[0]

    @property
    def voltage(self) -> float:
        """Voltage in V."""
        return self.data[0]

    @property
    def color(self) -> SensorColor:
        return SensorColor(self.data[0], self.data[1], self.data[2], _word(self.data[3]))


@dataclass(frozen=True)
class SensorInfo:
    """Static description of a sensor."""

    name: str
    version: int
    sensor_id: int
    type: int
    max_value: float
    min_value: float
    resolution: float
    min_delay: int = 0

    def __post_init__(self) -> None:
        if len(self.name.encode("utf-8")) >= NAME_CAPACITY:
            raise ValueError(
                f"sensor name must be shorter than {NAME_CAPACITY} bytes: {self.name!r}"
            )


class Sensor(ABC):
    """Base class of sensors that report readings as ``SensorEvent``."""

    def __init__(self) -> None:
        self._auto_range = False

    def enable_auto_range(self, enabled: bool) -> None:
        """Ask the sensor to choose its range by itself, where it can."""
        self._auto_range = bool(enabled)

    @abstractmethod
    def get_event(self) -> SensorEvent:
        """Return the latest reading."""

    @abstractmethod
    def get_sensor(self) -> SensorInfo:
        """Return the description of this sensor."""