"""PWM brightness control for an LED.

The board object must provide setup(), pin_mode(pin, mode),
pwm_set_mode(mode), pwm_set_clock(divisor), pwm_set_range(range)
and pwm_write(pin, value).
"""

from __future__ import annotations

LED_PIN = 1
PWM_OUTPUT = 2
PWM_MODE_MS = 0
PWM_CLOCK = 384
PWM_RANGE = 1000

BRIGHTNESS_LEVELS = {
    0: 0,
    1: 100,
    2: 300,
    3: 1000,
}


def init_pwm(board) -> None:
    """Configure the LED pin for mark-space PWM with a 0..1000 range."""
    board.setup()
    board.pin_mode(LED_PIN, PWM_OUTPUT)
    board.pwm_set_mode(PWM_MODE_MS)
    board.pwm_set_clock(PWM_CLOCK)
    board.pwm_set_range(PWM_RANGE)


def led_ctrl(board, brightness: int) -> int:
    """Set the LED to level 0 (off) through 3 (brightest).

    An unknown level switches the LED off and raises ValueError.
    """
    init_pwm(board)
    duty = BRIGHTNESS_LEVELS.get(brightness)
    if duty is None:
        board.pwm_write(LED_PIN, 0)
        raise ValueError("brightness value must be 0 ~ 3")
    board.pwm_write(LED_PIN, duty)
    return 0