"""Driver for the QMP6988 barometric pressure and temperature sensor."""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Protocol

QMP6988_SLAVE_ADDRESS_L = 0x70
QMP6988_SLAVE_ADDRESS_H = 0x56
QMP6988_CHIP_ID = 0x5C

CHIP_ID_REG = 0xD1
RESET_REG = 0xE0
DEVICE_STAT_REG = 0xF3
CTRLMEAS_REG = 0xF4
CONFIG_REG = 0xF1
PRESSURE_MSB_REG = 0xF7
TEMPERATURE_MSB_REG = 0xFA

CALIBRATION_DATA_START = 0xA0
CALIBRATION_DATA_LENGTH = 25

SUBTRACTOR = 8388608
SETTLE_SECONDS = 0.02


class PowerMode(IntEnum):
    SLEEP = 0x00
    FORCED = 0x01
    NORMAL = 0x03


class Oversampling(IntEnum):
    SKIPPED = 0x00
    X1 = 0x01
    X2 = 0x02
    X4 = 0x03
    X8 = 0x04
    X16 = 0x05
    X32 = 0x06
    X64 = 0x07


class FilterCoefficient(IntEnum):
    OFF = 0x00
    COEFF_2 = 0x01
    COEFF_4 = 0x02
    COEFF_8 = 0x03
    COEFF_16 = 0x04
    COEFF_32 = 0x05


_POWER_MODE_BITS = {mode.value for mode in PowerMode}


class _Bus(Protocol):
    def write(self, address: int, data: bytes) -> None: ...

    def read(self, address: int, length: int) -> bytes: ...


def _signed(value: int, bits: int) -> int:
    """Interpret the low ``bits`` bits of ``value`` as two's complement."""
    value &= (1 << bits) - 1
    return value - (1 << bits) if value & (1 << (bits - 1)) else value


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


@dataclass(frozen=True)
class Calibration:
    """Compensation coefficients stored in the sensor's OTP memory."""

    coe_a0: int
    coe_a1: int
    coe_a2: int
    coe_b00: int
    coe_bt1: int
    coe_bt2: int
    coe_bp1: int
    coe_b11: int
    coe_bp2: int
    coe_b12: int
    coe_b21: int
    coe_bp3: int


@dataclass(frozen=True)
class IntCoefficients:
    """Fixed-point coefficients used by the compensation formulas."""

    a0: int
    b00: int
    a1: int
    a2: int
    bt1: int
    bt2: int
    bp1: int
    b11: int
    bp2: int
    b12: int
    b21: int
    bp3: int


def parse_calibration(raw: bytes) -> Calibration:
    """Decode the 25 calibration bytes read from 0xA0 onwards."""
    raw = bytes(raw)
    if len(raw) != CALIBRATION_DATA_LENGTH:
        raise ValueError(
            f"calibration data must be {CALIBRATION_DATA_LENGTH} bytes, got {len(raw)}"
        )

    def s16(index: int) -> int:
        return _signed((raw[index] << 8) | raw[index + 1], 16)

    a0 = _signed((raw[18] << 12) | (raw[19] << 4) | (raw[24] & 0x0F), 20)
    b00 = _signed((raw[0] << 12) | (raw[1] << 4) | ((raw[24] & 0xF0) >> 4), 20)
    return Calibration(
        coe_a0=a0,
        coe_a1=s16(20),
        coe_a2=s16(22),
        coe_b00=b00,
        coe_bt1=s16(2),
        coe_bt2=s16(4),
        coe_bp1=s16(6),
        coe_b11=s16(8),
        coe_bp2=s16(10),
        coe_b12=s16(12),
        coe_b21=s16(14),
        coe_bp3=s16(16),
    )


def _int_coefficients(cali: Calibration) -> IntCoefficients:
    return IntCoefficients(
        a0=cali.coe_a0,
        b00=cali.coe_b00,
        a1=_signed(3608 * cali.coe_a1 - 1731677965, 32),
        a2=_signed(16889 * cali.coe_a2 - 87619360, 32),
        bt1=2982 * cali.coe_bt1 + 107370906,
        bt2=329854 * cali.coe_bt2 + 108083093,
        bp1=19923 * cali.coe_bp1 + 1133836764,
        b11=2406 * cali.coe_b11 + 118215883,
        bp2=3079 * cali.coe_bp2 - 181579595,
        b12=6846 * cali.coe_b12 + 85590281,
        b21=13836 * cali.coe_b21 + 79333336,
        bp3=2915 * cali.coe_bp3 + 157155561,
    )


def conv_tx_02e(ik: IntCoefficients, dt: int) -> int:
    """Compensated temperature in units of 1/256 °C from raw value ``dt``."""
    wk1 = ik.a1 * dt
    wk2 = (ik.a2 * dt) >> 14
    wk2 = (wk2 * dt) >> 10
    wk2 = _cdiv(wk1 + wk2, 32767) >> 19
    return _signed((ik.a0 + wk2) >> 4, 16)


def get_pressure_02e(ik: IntCoefficients, dp: int, tx: int) -> int:
    """Compensated pressure in units of 1/16 Pa from raw ``dp`` and temperature ``tx``."""
    wk1 = ik.bt1 * tx
    wk2 = (ik.bp1 * dp) >> 5
    wk1 += wk2
    wk2 = (ik.bt2 * tx) >> 1
    wk2 = (wk2 * tx) >> 8
    wk3 = wk2
    wk2 = (ik.b11 * tx) >> 4
    wk2 = (wk2 * dp) >> 1
    wk3 += wk2
    wk2 = (ik.bp2 * dp) >> 13
    wk2 = (wk2 * dp) >> 1
    wk3 += wk2
    wk1 += wk3 >> 14
    wk2 = ik.b12 * tx
    wk2 = (wk2 * tx) >> 22
    wk2 = (wk2 * dp) >> 1
    wk3 = wk2
    wk2 = (ik.b21 * tx) >> 6
    wk2 = (wk2 * dp) >> 23
    wk2 = (wk2 * dp) >> 1
    wk3 += wk2
    wk2 = (ik.bp3 * dp) >> 12
    wk2 = (wk2 * dp) >> 23
    wk2 = wk2 * dp
    wk3 += wk2
    wk1 += wk3 >> 15
    wk1 = _cdiv(wk1, 32767)
    wk1 >>= 11
    wk1 += ik.b00
    return _signed(wk1, 32)


def calc_altitude(pressure: float, temp: float) -> float:
    """Altitude in metres from pressure in Pa and temperature in °C."""
    return ((101325 / pressure) ** (1 / 5.257) - 1) * (temp + 273.15) / 0.0065


class Qmp6988:
    """A QMP6988 sensor on an I2C bus.

    After ``update`` the attributes ``pressure`` (Pa), ``c_temp`` (°C) and
    ``altitude`` (m) hold the latest values.
    """

    def __init__(
        self,
        bus: _Bus,
        address: int = QMP6988_SLAVE_ADDRESS_H,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.bus = bus
        self.address = address
        self._sleep = sleep
        self.calibration: Calibration | None = None
        self.ik: IntCoefficients | None = None
        self.power_mode = PowerMode.SLEEP
        self.temperature = 0.0
        self.pressure = 0.0
        self.c_temp = 0.0
        self.altitude = 0.0

    def _read_registers(self, register: int, length: int) -> bytes:
        self.bus.write(self.address, bytes((register,)))
        data = bytes(self.bus.read(self.address, length))
        if len(data) != length:
            raise OSError(
                f"expected {length} bytes from register 0x{register:02x}, got {len(data)}"
            )
        return data

    def _write_register(self, register: int, value: int) -> None:
        self.bus.write(self.address, bytes((register, value & 0xFF)))

    def _exists(self) -> bool:
        try:
            self.bus.write(self.address, b"")
        except OSError:
            return False
        return True

    def _load_calibration(self) -> None:
        raw = b"".join(
            self._read_registers(CALIBRATION_DATA_START + offset, 1)
            for offset in range(CALIBRATION_DATA_LENGTH)
        )
        self.calibration = parse_calibration(raw)
        self.ik = _int_coefficients(self.calibration)

    def begin(self) -> bool:
        """Initialise the sensor; return False if it does not answer."""
        if not self._exists():
            return False
        self.reset()
        self._load_calibration()
        self.set_power_mode(PowerMode.NORMAL)
        self.set_filter(FilterCoefficient.COEFF_4)
        self.set_oversampling_p(Oversampling.X8)
        self.set_oversampling_t(Oversampling.X1)
        return True

    def reset(self) -> None:
        """Issue a soft reset."""
        self._write_register(RESET_REG, 0xE6)
        self._sleep(SETTLE_SECONDS)
        self._write_register(RESET_REG, 0x00)

    def set_power_mode(self, power_mode: int) -> None:
        """Select sleep, forced or normal mode."""
        self.power_mode = power_mode
        data = self._read_registers(CTRLMEAS_REG, 1)[0] & 0xFC
        if power_mode in _POWER_MODE_BITS:
            data |= power_mode
        self._write_register(CTRLMEAS_REG, data)
        self._sleep(SETTLE_SECONDS)

    def set_filter(self, filter_coefficient: int) -> None:
        """Set the IIR filter coefficient (only the two low bits are written)."""
        self._write_register(CONFIG_REG, filter_coefficient & 0x03)
        self._sleep(SETTLE_SECONDS)

    def set_oversampling_p(self, oversampling: int) -> None:
        """Set the pressure oversampling rate."""
        data = self._read_registers(CTRLMEAS_REG, 1)[0] & 0xE3
        data |= oversampling << 2
        self._write_register(CTRLMEAS_REG, data)
        self._sleep(SETTLE_SECONDS)

    def set_oversampling_t(self, oversampling: int) -> None:
        """Set the temperature oversampling rate."""
        data = self._read_registers(CTRLMEAS_REG, 1)[0] & 0x1F
        data |= oversampling << 5
        self._write_register(CTRLMEAS_REG, data)
        self._sleep(SETTLE_SECONDS)

    def _require_ik(self) -> IntCoefficients:
        if self.ik is None:
            raise RuntimeError("calibration not loaded; call begin() first")
        return self.ik

    def _compensate(self, raw: bytes) -> None:
        ik = self._require_ik()
        p_raw = ((raw[0] << 16) | (raw[1] << 8) | raw[2]) - SUBTRACTOR
        t_raw = ((raw[3] << 16) | (raw[4] << 8) | raw[5]) - SUBTRACTOR
        t_int = conv_tx_02e(ik, t_raw)
        p_int = get_pressure_02e(ik, p_raw, t_int)
        self.temperature = t_int / 256.0
        self.pressure = p_int / 16.0

    def calc_pressure(self) -> float:
        """Read and return the compensated pressure in Pa."""
        self._compensate(self._read_registers(PRESSURE_MSB_REG, 6))
        return self.pressure

    def calc_temperature(self) -> float:
        """Read and return the compensated temperature in °C."""
        raw = self._read_registers(PRESSURE_MSB_REG, 6)
        # The sensor's temperature registers are read again, as the device
        # expects, but the values come from the first burst read.
        with contextlib.suppress(OSError):
            self._read_registers(TEMPERATURE_MSB_REG, 3)
        self._compensate(raw)
        return self.temperature

    def update(self) -> None:
        """Refresh ``pressure``, ``c_temp`` and ``altitude``."""
        self.pressure = self.calc_pressure()
        self.c_temp = self.calc_temperature()
        self.altitude = calc_altitude(self.pressure, self.c_temp)