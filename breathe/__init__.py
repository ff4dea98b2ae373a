"""Air-quality station sensors over I2C, sensor types, CSV logging and screen text."""

__version__ = "0.1.0"

__all__ = ["logger", "qmp6988", "screens", "sensor_types", "sensors"]