"""TCP server that runs named device functions on request and logs each call."""

from __future__ import annotations

import argparse
import functools
import multiprocessing
import re
import socket
import sys
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, Mapping

from pirelay import buzzer_music, cds_led, http_server, led_pwm, seven_segment

PORT = 9081
BACKLOG = 5
BUF_SIZE = 8192
LOG_FILE = "server.log"

_log_lock = threading.Lock()
_SEPARATORS = re.compile(r"[ \t\n]+")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

Library = Mapping[str, Callable[[int], int]]


class FunctionLocks:
    """One lock per function name, so calls of the same function run one at a time."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def get(self, name: str) -> threading.Lock:
        """Return the lock for name, creating it on first use."""
        with self._guard:
            return self._locks.setdefault(name, threading.Lock())


def log(message: str, path: str | Path = LOG_FILE) -> None:
    """Append a timestamped line to the log file."""
    stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    with _log_lock:
        try:
            with open(path, "a", encoding="utf-8") as fp:
                fp.write(f"[{stamp}] {message}\n")
        except OSError as exc:
            print(f"log: {exc}", file=sys.stderr)


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_request(data: bytes | str) -> tuple[str, str, int]:
    """Split "libname funcname arg" into its parts; raise ValueError if incomplete."""
    text = data.decode("utf-8", "replace") if isinstance(data, bytes) else data
    tokens = [token for token in _SEPARATORS.split(text) if token]
    if len(tokens) < 3:
        raise ValueError("invalid request format")
    libname, funcname, argstr = tokens[:3]
    return libname, funcname, _atoi(argstr)


def _returning_zero(func: Callable[..., object], board) -> Callable[[int], int]:
    def call(arg: int) -> int:
        func(board)
        return 0

    return call


def device_libraries(board) -> dict[str, dict[str, Callable[[int], int]]]:
    """Return the callable device functions, keyed by library and function name."""
    return {
        "7seg_fnd": {
            "initFND": _returning_zero(seven_segment.init_fnd, board),
            "displayNumber": lambda arg: seven_segment.display_number(board, arg) or 0,
            "clearDisplay": _returning_zero(seven_segment.clear_display, board),
            "countdown": functools.partial(seven_segment.countdown, board),
        },
        "buzzer_music": {
            "play": functools.partial(buzzer_music.play, board),
        },
        "cds_led": {
            "cdsCtrl": functools.partial(cds_led.cds_ctrl, board),
            "cdsRead": functools.partial(cds_led.cds_read, board),
        },
        "led_pwm": {
            "initPWM": _returning_zero(led_pwm.init_pwm, board),
            "ledCtrl": functools.partial(led_pwm.led_ctrl, board),
        },
    }


class RemoteServer:
    """Runs device functions for connected clients, one thread per request."""

    def __init__(self, libraries: Mapping[str, Library], log_path: str | Path = LOG_FILE) -> None:
        self.libraries = libraries
        self.log_path = log_path
        self.locks = FunctionLocks()

    def _log(self, message: str) -> None:
        log(message, self.log_path)

    def execute(self, client_ip: str, libname: str, funcname: str, arg: int) -> str:
        """Run one function and return the reply line for the client."""
        with self.locks.get(funcname):
            self._log(
                f"REQUEST from {client_ip}: lib={libname}, func={funcname}, arg={arg}"
            )
            library = self.libraries.get(libname)
            if library is None:
                self._log(f"ERROR: dlopen error: no library named {libname}")
                return f"ERROR: cannot load dlib {libname}\n"
            func = library.get(funcname)
            if func is None:
                self._log(f"ERROR: dlsym error: no symbol {funcname} in {libname}")
                return f"ERROR: no func symbol at dlib, {funcname}\n"
            try:
                result = func(arg)
            except Exception as exc:
                self._log(f"ERROR: {funcname} failed: {exc}")
                return f"ERROR: {funcname} failed: {exc}\n"
            self._log(f"RESPONSE to {client_ip}: {result}")
            return f"RESULT: {result}\n"

    def _run_request(self, conn: socket.socket, client_ip: str, request: tuple[str, str, int]) -> None:
        reply = self.execute(client_ip, *request)
        try:
            conn.sendall(reply.encode("utf-8"))
        except OSError:
            pass

    def handle_client(self, conn: socket.socket, client_ip: str) -> None:
        """Read requests from one client until it disconnects."""
        with conn:
            while True:
                try:
                    data = conn.recv(BUF_SIZE - 1)
                except OSError:
                    break
                if not data:
                    break
                try:
                    request = parse_request(data)
                except ValueError:
                    try:
                        conn.sendall(b"ERROR: invalid request format\n")
                    except OSError:
                        break
                    continue
                threading.Thread(
                    target=self._run_request, args=(conn, client_ip, request), daemon=True
                ).start()
        self._log(f"Disconnected client {client_ip}")

    def serve_forever(self, port: int = PORT) -> None:
        """Accept clients forever, each served in its own thread."""
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
            server.bind(("", port))
            server.listen(BACKLOG)
            print(f"TCP Remote Server listening on port {port}", flush=True)
            while True:
                try:
                    conn, (client_ip, _) = server.accept()
                except OSError as exc:
                    print(f"client accept error: {exc}", file=sys.stderr)
                    continue
                threading.Thread(
                    target=self.handle_client, args=(conn, client_ip), daemon=True
                ).start()


class _SimulatedBoard:
    """In-memory board used when no GPIO hardware is attached."""

    def __init__(self) -> None:
        self.pins: dict[int, int] = {}
        self.tones: dict[int, int] = {}
        self.pwm_mode: int | None = None
        self.pwm_clock: int | None = None
        self.pwm_range: int | None = None

    def setup(self) -> None:
        self.pins.clear()

    def pin_mode(self, pin: int, mode: int) -> None:
        self.pins.setdefault(pin, 0)

    def digital_write(self, pin: int, value: int) -> None:
        self.pins[pin] = value

    def digital_read(self, pin: int) -> int:
        return self.pins.get(pin, 0)

    def soft_tone_create(self, pin: int) -> None:
        self.tones[pin] = 0

    def soft_tone_write(self, pin: int, frequency: int) -> None:
        self.tones[pin] = frequency

    def delay(self, milliseconds: int) -> None:
        time.sleep(milliseconds / 1000)

    def pwm_set_mode(self, mode: int) -> None:
        self.pwm_mode = mode

    def pwm_set_clock(self, divisor: int) -> None:
        self.pwm_clock = divisor

    def pwm_set_range(self, value: int) -> None:
        self.pwm_range = value

    def pwm_write(self, pin: int, value: int) -> None:
        self.pins[pin] = value


def main(argv: list[str] | None = None) -> int:
    """Start the HTTP server in a child process, then run the TCP server."""
    parser = argparse.ArgumentParser(description="Run device functions on request.")
    parser.add_argument("--port", "-p", type=int, default=PORT)
    parser.add_argument("--log", default=LOG_FILE, help="request log file")
    parser.add_argument("--no-http", action="store_true", help="do not start the HTTP server")
    args = parser.parse_args(argv)

    if not args.no_http:
        child = multiprocessing.Process(target=http_server.main, args=([],), daemon=True)
        child.start()
        print(f"HTTP Server Launched on PID: {child.pid}", flush=True)

    server = RemoteServer(device_libraries(_SimulatedBoard()), args.log)
    try:
        server.serve_forever(args.port)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"socket bind error: {exc}", file=sys.stderr)
        return 1
    return 0