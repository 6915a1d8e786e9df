import pytest

from pirelay.led_pwm import LED_PIN, PWM_MODE_MS, PWM_OUTPUT, init_pwm, led_ctrl


class FakeBoard:
    def __init__(self):
        self.calls = []

    def setup(self):
        self.calls.append(("setup",))

    def pin_mode(self, pin, mode):
        self.calls.append(("pin_mode", pin, mode))

    def pwm_set_mode(self, mode):
        self.calls.append(("pwm_set_mode", mode))

    def pwm_set_clock(self, divisor):
        self.calls.append(("pwm_set_clock", divisor))

    def pwm_set_range(self, value):
        self.calls.append(("pwm_set_range", value))

    def pwm_write(self, pin, value):
        self.calls.append(("pwm_write", pin, value))


def test_init_pwm_configures_pin():
    board = FakeBoard()
    init_pwm(board)
    assert board.calls == [
        ("setup",),
        ("pin_mode", LED_PIN, PWM_OUTPUT),
        ("pwm_set_mode", PWM_MODE_MS),
        ("pwm_set_clock", 384),
        ("pwm_set_range", 1000),
    ]


@pytest.mark.parametrize("level, duty", [(0, 0), (1, 100), (2, 300), (3, 1000)])
def test_levels_write_duty(level, duty):
    board = FakeBoard()
    assert led_ctrl(board, level) == 0
    assert board.calls[-1] == ("pwm_write", LED_PIN, duty)


def test_brightness_increases_with_level():
    duties = []
    for level in range(4):
        board = FakeBoard()
        led_ctrl(board, level)
        duties.append(board.calls[-1][2])
    assert duties == sorted(duties)
    assert len(set(duties)) == 4


@pytest.mark.parametrize("level", [-1, 4])
def test_invalid_level_turns_off_and_raises(level):
    board = FakeBoard()
    with pytest.raises(ValueError):
        led_ctrl(board, level)
    assert board.calls[-1] == ("pwm_write", LED_PIN, 0)