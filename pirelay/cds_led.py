"""Light sensor (CdS cell) reading and an LED that follows it.

The board object must provide pin_mode(pin, mode), digital_read(pin)
and digital_write(pin, value).
"""

from __future__ import annotations

import threading

CDS_PIN = 5
LED_PIN = 4

INPUT = 0
OUTPUT = 1
LOW = 0
HIGH = 1


def cds_read(board, arg: int = 0) -> int:
    """Return the sensor level: LOW when light is detected, HIGH when dark."""
    board.pin_mode(CDS_PIN, INPUT)
    return board.digital_read(CDS_PIN)


def cds_ctrl(board, arg: int = 0, stop: threading.Event | None = None) -> int:
    """Light the LED while it is dark, until stop is set (forever without one)."""
    board.pin_mode(CDS_PIN, INPUT)
    board.pin_mode(LED_PIN, OUTPUT)
    while stop is None or not stop.is_set():
        if board.digital_read(CDS_PIN) == LOW:
            board.digital_write(LED_PIN, LOW)
        else:
            board.digital_write(LED_PIN, HIGH)
    return 0