"""Single-digit seven-segment display driven through a BCD decoder, with a buzzer.

The board object must provide setup(), pin_mode(pin, mode),
digital_write(pin, value), soft_tone_create(pin),
soft_tone_write(pin, frequency) and delay(milliseconds).
"""

from __future__ import annotations

import threading

GPIO_PINS = (2, 0, 16, 15)
SPEAKER_PIN = 26

OUTPUT = 1
LOW = 0
HIGH = 1

ALARM_FREQUENCY = 440
ALARM_MS = 400
STEP_MS = 1000
SETTLE_MS = 200

NUMBER_MAP = (
    (0, 0, 0, 0),
    (0, 0, 0, 1),
    (0, 0, 1, 0),
    (0, 0, 1, 1),
    (0, 1, 0, 0),
    (0, 1, 0, 1),
    (0, 1, 1, 0),
    (0, 1, 1, 1),
    (1, 0, 0, 0),
    (1, 0, 0, 1),
)

_gpio_lock = threading.Lock()


def _check_digit(num: int) -> None:
    if not 0 <= num <= 9:
        raise ValueError("number must be between 0 and 9")


def init_fnd(board) -> None:
    """Prepare the speaker and set the BCD pins to output."""
    board.setup()
    board.soft_tone_create(SPEAKER_PIN)
    for pin in GPIO_PINS:
        board.pin_mode(pin, OUTPUT)


def display_number(board, num: int) -> None:
    """Show a digit 0..9 on the display."""
    _check_digit(num)
    with _gpio_lock:
        for pin, bit in zip(GPIO_PINS, NUMBER_MAP[num]):
            board.digital_write(pin, HIGH if bit else LOW)


def clear_display(board) -> None:
    """Blank the display by driving every BCD pin high."""
    with _gpio_lock:
        for pin in GPIO_PINS:
            board.digital_write(pin, HIGH)


def countdown(board, start: int) -> int:
    """Count down from start to 0, one second per step, sounding an alarm at 0."""
    init_fnd(board)
    _check_digit(start)
    for current in range(start, -1, -1):
        print(f"Current number: {current}")
        display_number(board, current)
        if current == 0:
            with _gpio_lock:
                board.soft_tone_write(SPEAKER_PIN, ALARM_FREQUENCY)
                board.delay(ALARM_MS)
                board.soft_tone_write(SPEAKER_PIN, 0)
        board.delay(STEP_MS)
    clear_display(board)
    board.delay(SETTLE_MS)
    return 0