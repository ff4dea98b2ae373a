"""SHT3x and DHT12 temperature and humidity sensors on an I2C bus."""

from __future__ import annotations

import os
import time
from enum import IntEnum
from typing import Callable, Protocol

I2C_SLAVE = 0x0703

SHT3X_I2C_ADDR = 0x44
SHT3X_MEASURE_COMMAND = bytes((0x2C, 0x06))

DHT12_I2C_ADDR = 0x5C


class _Bus(Protocol):
    def write(self, address: int, data: bytes) -> None: ...

    def read(self, address: int, length: int) -> bytes: ...


class I2CBus:
    """A Linux i2c-dev bus, such as ``/dev/i2c-1``."""

    def __init__(self, bus_number: int = 1) -> None:
        self._fd = os.open(f"/dev/i2c-{bus_number}", os.O_RDWR)

    def _select(self, address: int) -> None:
        import fcntl

        fcntl.ioctl(self._fd, I2C_SLAVE, address)

    def write(self, address: int, data: bytes) -> None:
        """Write ``data`` to the device at ``address``."""
        self._select(address)
        data = bytes(data)
        written = os.write(self._fd, data)
        if written != len(data):
            raise OSError(f"wrote {written} of {len(data)} bytes to 0x{address:02x}")

    def read(self, address: int, length: int) -> bytes:
        """Read ``length`` bytes from the device at ``address``."""
        self._select(address)
        return os.read(self._fd, length)

    def close(self) -> None:
        os.close(self._fd)

    def __enter__(self) -> I2CBus:
        return self

    def __exit__(self, *args) -> None:
        self.close()


class TemperatureScale(IntEnum):
    CELSIUS = 1
    KELVIN = 2
    FAHRENHEIT = 3


def _read_exact(bus: _Bus, address: int, length: int) -> bytes:
    data = bytes(bus.read(address, length))
    if len(data) != length:
        raise OSError(
            f"expected {length} bytes from 0x{address:02x}, got {len(data)}"
        )
    return data


class Sht3x:
    """SHT3x sensor; ``update`` refreshes ``c_temp``, ``f_temp`` and ``humidity``."""

    def __init__(
        self,
        bus: _Bus,
        address: int = SHT3X_I2C_ADDR,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.bus = bus
        self.address = address
        self._sleep = sleep
        self.c_temp = 0.0
        self.f_temp = 0.0
        self.humidity = 0.0

    def update(self) -> None:
        """Take one measurement; raise OSError if the bus fails."""
        self.bus.write(self.address, SHT3X_MEASURE_COMMAND)
        self._sleep(0.2)
        data = _read_exact(self.bus, self.address, 6)
        self._sleep(0.05)
        self.c_temp = ((data[0] * 256.0 + data[1]) * 175) / 65535.0 - 45
        self.f_temp = self.c_temp * 1.8 + 32
        self.humidity = ((data[3] * 256.0 + data[4]) * 100) / 65535.0


class Dht12:
    """DHT12 sensor with a default temperature scale."""

    def __init__(
        self,
        bus: _Bus,
        scale: int = 0,
        address: int = 0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.bus = bus
        self.address = DHT12_I2C_ADDR if address == 0 or address > 126 else address
        self.scale = (
            TemperatureScale.CELSIUS
            if scale == 0 or scale > 3
            else TemperatureScale(scale)
        )
        self._sleep = sleep

    def _read(self) -> bytes:
        self.bus.write(self.address, b"\x00")
        data = _read_exact(self.bus, self.address, 5)
        self._sleep(0.05)
        if data[4] != data[0] + data[1] + data[2] + data[3]:
            raise ValueError("DHT12 checksum mismatch")
        return data

    def read_temperature(self, scale: int | None = None) -> float:
        """Read the temperature in ``scale``, or in the default scale."""
        chosen = self.scale if not scale else TemperatureScale(scale)
        data = self._read()
        celsius = data[2] + data[3] / 10
        if chosen is TemperatureScale.FAHRENHEIT:
            return celsius * 1.8 + 32
        if chosen is TemperatureScale.KELVIN:
            return celsius + 273.15
        return celsius

    def read_humidity(self) -> float:
        """Read the relative humidity in percent."""
        data = self._read()
        return data[0] + data[1] / 10