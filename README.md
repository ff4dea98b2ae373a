# breathe

Building blocks for a small air-quality station: drivers for temperature,
humidity and pressure sensors on an I²C bus, common sensor event types, a
CSV data logger, and the text shown on the station's screens.

No third-party libraries are needed.

## What is inside

| Module | Purpose |
| --- | --- |
| `breathe.sensors` | `I2CBus` (a Linux `/dev/i2c-N` bus), and the `Sht3x` and `Dht12` temperature/humidity sensors, with `TemperatureScale` for Celsius, Kelvin and Fahrenheit. |
| `breathe.qmp6988` | The `Qmp6988` barometer: `parse_calibration`, the fixed-point compensation `conv_tx_02e` and `get_pressure_02e`, `calc_altitude`, and the `PowerMode`, `Oversampling` and `FilterCoefficient` settings. |
| `breathe.sensor_types` | Common types: `SensorType`, `SensorVector`, `SensorColor`, `SensorEvent`, `SensorInfo` and the abstract `Sensor` base class. |
| `breathe.logger` | `Readings`, `current_time`, `format_timestamp`, `format_row` and `log_sensor_data`, which appends a CSV row to a file. |
| `breathe.screens` | `info_screen_lines`, `config_screen_lines`, `menu_labels`, `bar_width` and `map_range`. |

## Buses

The sensor drivers take any object with two methods:

- `write(address, data)` – send bytes to the device at `address`;
- `read(address, length)` – read `length` bytes from it.

`I2CBus(bus_number=1)` provides these on Linux by opening `/dev/i2c-<bus_number>`;
it is a context manager and has `close()`. Any other object with the same two
methods, such as a test double, works as well. Each driver also accepts a
`sleep` callable (default `time.sleep`) used for its settle delays.

## Temperature and humidity

```python
from breathe.sensors import I2CBus, Sht3x, Dht12, TemperatureScale

with I2CBus(1) as bus:
    sht = Sht3x(bus)            # address 0x44
    sht.update()
    print(sht.c_temp, sht.f_temp, sht.humidity)

    dht = Dht12(bus)            # address 0x5C, Celsius by default
    print(dht.read_temperature(TemperatureScale.KELVIN))
    print(dht.read_humidity())
```

`Sht3x.update()` raises `OSError` if the bus fails or returns too few bytes.
`Dht12` raises `OSError` for a short read and `ValueError` when the checksum
byte does not match. A `Dht12` scale or address of 0 (or out of range) falls
back to Celsius and 0x5C.

## Pressure and altitude

```python
from breathe.qmp6988 import Qmp6988, calc_altitude

baro = Qmp6988(bus)             # address 0x56
if baro.begin():                # False if the device does not answer
    baro.update()
    print(baro.pressure, baro.c_temp, baro.altitude)   # Pa, °C, m

altitude_m = calc_altitude(100_000.0, 20.0)
```

`begin()` resets the device, loads its calibration, selects normal mode,
an IIR filter of 4, 8× pressure and 1× temperature oversampling.
`calc_pressure()` and `calc_temperature()` raise `RuntimeError` if called
before the calibration is loaded. `parse_calibration(raw)` takes exactly 25
bytes and raises `ValueError` otherwise.

## Sensor types

`SensorEvent(sensor_id, type, timestamp=0, data=...)` holds up to four values
(padded with zeros, `ValueError` for more) and reads them back as
`acceleration`, `magnetic`, `orientation`, `gyro`, `temperature`, `pressure`,
`color` and so on. `SensorInfo` describes a sensor; its name must be shorter
than 12 bytes. Subclass `Sensor` and implement `get_event()` and
`get_sensor()`.

## Logging readings

`log_sensor_data(path, readings, timestamp)` appends one CSV line holding the
local time (`YYYY-MM-DD HH:MM:SS`) followed by PM1.0, PM2.5, PM4.0, PM10,
typical particle size, temperature, humidity, pressure and altitude from a
`Readings`, each with three decimals, then reports success and disk usage
through the `breathe.logger` logger. `current_time(epoch_time, start_ms, now_ms)`
adds the seconds elapsed on a 32-bit millisecond counter to a clock
synchronised at start-up.

## Screens

`info_screen_lines(readings, total_bytes, used_bytes)` and
`config_screen_lines(time_interval)` return the text of the data and
configuration screens, top to bottom; `menu_labels()` gives the bottom menu as
`(x, y, label)` entries. `bar_width(time_interval)` scales an interval between
100 and 5000 ms onto a bar 10 to 220 pixels wide using `map_range`, which
truncates toward zero and raises `ZeroDivisionError` for an empty input range.

## What the package does not do

- It has no driver for a particulate-matter sensor and no serial-port
  support; the PM values in `Readings` must come from elsewhere.
- It does not draw anything: the screen helpers only produce text and sizes.
- It has no command-line program and no main loop tying sensors, logger and
  screens together, and it does not set the clock from the network.