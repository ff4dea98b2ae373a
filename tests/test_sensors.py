import pytest

from breathe.sensors import Dht12, Sht3x, TemperatureScale


class FakeBus:
    def __init__(self, *responses):
        self.writes = []
        self.responses = list(responses)

    def write(self, address, data):
        self.writes.append((address, bytes(data)))

    def read(self, address, length):
        return self.responses.pop(0)


def no_sleep(seconds):
    pass


DHT_DATA = bytes((55, 3, 23, 4, 85))


def test_sht3x_sends_measure_command():
    bus = FakeBus(bytes(6))
    sensor = Sht3x(bus, sleep=no_sleep)
    sensor.update()
    assert bus.writes == [(0x44, b"\x2c\x06")]


def test_sht3x_zero_reading():
    sensor = Sht3x(FakeBus(bytes(6)), sleep=no_sleep)
    sensor.update()
    assert sensor.c_temp == pytest.approx(-45)
    assert sensor.f_temp == pytest.approx(-49)
    assert sensor.humidity == pytest.approx(0)


def test_sht3x_humidity_increases_with_raw_value():
    low = Sht3x(FakeBus(bytes((0, 0, 0, 0x10, 0, 0))), sleep=no_sleep)
    high = Sht3x(FakeBus(bytes((0, 0, 0, 0x80, 0, 0))), sleep=no_sleep)
    low.update()
    high.update()
    assert high.humidity > low.humidity


def test_sht3x_short_read_raises():
    sensor = Sht3x(FakeBus(bytes(4)), sleep=no_sleep)
    with pytest.raises(OSError):
        sensor.update()


def test_dht12_default_address_and_register():
    bus = FakeBus(DHT_DATA)
    sensor = Dht12(bus, sleep=no_sleep)
    sensor.read_humidity()
    assert bus.writes == [(0x5C, b"\x00")]


@pytest.mark.parametrize("address,expected", [(0, 0x5C), (127, 0x5C), (0x20, 0x20)])
def test_dht12_address_selection(address, expected):
    assert Dht12(FakeBus(), address=address).address == expected


@pytest.mark.parametrize("scale", [0, 4])
def test_dht12_invalid_scale_falls_back_to_celsius(scale):
    assert Dht12(FakeBus(), scale=scale).scale is TemperatureScale.CELSIUS


def test_dht12_temperature_celsius():
    sensor = Dht12(FakeBus(DHT_DATA), sleep=no_sleep)
    assert sensor.read_temperature() == pytest.approx(23.4)


def test_dht12_humidity():
    sensor = Dht12(FakeBus(DHT_DATA), sleep=no_sleep)
    assert sensor.read_humidity() == pytest.approx(55.3)


def test_dht12_kelvin_offset():
    sensor = Dht12(FakeBus(DHT_DATA, DHT_DATA), sleep=no_sleep)
    celsius = sensor.read_temperature(TemperatureScale.CELSIUS)
    kelvin = sensor.read_temperature(TemperatureScale.KELVIN)
    assert kelvin - celsius == pytest.approx(273.15)


def test_dht12_default_scale_is_used():
    bus = FakeBus(DHT_DATA, DHT_DATA)
    fahrenheit_sensor = Dht12(bus, scale=TemperatureScale.FAHRENHEIT, sleep=no_sleep)
    default = fahrenheit_sensor.read_temperature()
    explicit = fahrenheit_sensor.read_temperature(TemperatureScale.FAHRENHEIT)
    assert default == pytest.approx(explicit)
    assert default == pytest.approx(74.12)


def test_dht12_checksum_mismatch():
    sensor = Dht12(FakeBus(bytes((55, 3, 23, 4, 86))), sleep=no_sleep)
    with pytest.raises(ValueError):
        sensor.read_humidity()


def test_dht12_checksum_does_not_wrap():
    data = bytes((200, 0, 100, 0, (300) & 0xFF))
    sensor = Dht12(FakeBus(data), sleep=no_sleep)
    with pytest.raises(ValueError):
        sensor.read_humidity()


def test_dht12_short_read_raises():
    sensor = Dht12(FakeBus(bytes(3)), sleep=no_sleep)
    with pytest.raises(OSError):
        sensor.read_temperature()