import re
import socket
import threading

import pytest

from pirelay.server import (
    FunctionLocks,
    RemoteServer,
    device_libraries,
    log,
    parse_request,
)


class RecordingBoard:
    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        def record(*args):
            self.calls.append((name, args))
            return 0

        return record


def make_server(tmp_path):
    libraries = {"math": {"inc": lambda x: x + 1, "boom": lambda x: 1 // 0}}
    return RemoteServer(libraries, tmp_path / "server.log")


def test_parse_request_basic():
    assert parse_request(b"led_pwm ledCtrl 2\n") == ("led_pwm", "ledCtrl", 2)


def test_parse_request_mixed_whitespace_and_str():
    assert parse_request("\t lib \t func\n-7 extra") == ("lib", "func", -7)


@pytest.mark.parametrize("argstr, expected", [("12abc", 12), ("abc", 0), ("+5", 5)])
def test_parse_request_integer_prefix(argstr, expected):
    assert parse_request(f"lib func {argstr}")[2] == expected


@pytest.mark.parametrize("data", [b"", b"lib", b"lib func", b"  \n\t "])
def test_parse_request_incomplete(data):
    with pytest.raises(ValueError):
        parse_request(data)


def test_function_locks_shared_per_name():
    locks = FunctionLocks()
    assert locks.get("a") is locks.get("a")
    assert locks.get("a") is not locks.get("b")


def test_log_line_format(tmp_path):
    path = tmp_path / "out.log"
    log("hello", path)
    log("world", path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert re.fullmatch(r"\[\d{4}-\d\d-\d\d \d\d:\d\d:\d\d\] hello", lines[0])
    assert lines[1].endswith("] world")


def test_execute_success_and_log(tmp_path):
    server = make_server(tmp_path)
    assert server.execute("10.0.0.1", "math", "inc", 3) == "RESULT: 4\n"
    text = (tmp_path / "server.log").read_text(encoding="utf-8")
    assert "REQUEST from 10.0.0.1: lib=math, func=inc, arg=3" in text
    assert "RESPONSE to 10.0.0.1: 4" in text


def test_execute_releases_lock(tmp_path):
    server = make_server(tmp_path)
    server.execute("10.0.0.1", "math", "inc", 1)
    assert server.execute("10.0.0.1", "math", "inc", 1) == "RESULT: 2\n"
    assert server.locks.get("inc").locked() is False


def test_execute_missing_library(tmp_path):
    server = make_server(tmp_path)
    assert server.execute("10.0.0.1", "nope", "inc", 1) == "ERROR: cannot load dlib nope\n"
    assert "ERROR: dlopen error" in (tmp_path / "server.log").read_text(encoding="utf-8")


def test_execute_missing_function(tmp_path):
    server = make_server(tmp_path)
    reply = server.execute("10.0.0.1", "math", "dec", 1)
    assert reply == "ERROR: no func symbol at dlib, dec\n"
    assert "ERROR: dlsym error" in (tmp_path / "server.log").read_text(encoding="utf-8")


def test_execute_function_error(tmp_path):
    server = make_server(tmp_path)
    assert server.execute("10.0.0.1", "math", "boom", 1).startswith("ERROR: boom failed")


def test_handle_client_round_trip(tmp_path):
    server = make_server(tmp_path)
    server_side, client_side = socket.socketpair()
    client_side.settimeout(5)
    worker = threading.Thread(target=server.handle_client, args=(server_side, "10.0.0.1"))
    worker.start()
    try:
        client_side.sendall(b"math inc 3\n")
        assert client_side.recv(100) == b"RESULT: 4\n"
        client_side.sendall(b"oops\n")
        assert client_side.recv(100) == b"ERROR: invalid request format\n"
    finally:
        client_side.close()
        worker.join(5)
    assert not worker.is_alive()
    text = (tmp_path / "server.log").read_text(encoding="utf-8")
    assert "Disconnected client 10.0.0.1" in text


def test_device_libraries_names():
    libs = device_libraries(RecordingBoard())
    assert set(libs) == {"7seg_fnd", "buzzer_music", "cds_led", "led_pwm"}
    assert set(libs["led_pwm"]) == {"initPWM", "ledCtrl"}
    assert set(libs["cds_led"]) == {"cdsCtrl", "cdsRead"}


def test_device_led_ctrl_writes_pwm():
    board = RecordingBoard()
    libs = device_libraries(board)
    assert libs["led_pwm"]["ledCtrl"](3) == 0
    assert ("pwm_write", (1, 1000)) in board.calls


def test_device_function_error_through_server(tmp_path):
    board = RecordingBoard()
    server = RemoteServer(device_libraries(board), tmp_path / "server.log")
    assert server.execute("10.0.0.1", "led_pwm", "ledCtrl", 9).startswith("ERROR: ledCtrl failed")
    assert server.execute("10.0.0.1", "7seg_fnd", "displayNumber", 4) == "RESULT: 0\n"