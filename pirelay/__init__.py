"""Remote control of Raspberry Pi peripherals over TCP, with a status web page."""

__version__ = "0.1.0"