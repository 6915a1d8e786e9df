# pirelay

A small remote-control stack for a Raspberry Pi with a handful of peripherals
attached: a 7-segment display, a buzzer, a light sensor with an LED, and a
PWM-dimmed LED.

It has two parts.

## Remote server: `pirelay-server`

Listens on TCP port 9081. Each message a client sends has the form

```
<library> <function> <integer argument>
```

The server runs the named device function in its own thread and answers
`RESULT: <value>`. It answers a line starting with `ERROR:` when the request
has fewer than three parts, when the library or function is unknown, or when
the function raises. Calls to the same function run one at a time; different
functions may run at the same time. Every request, response, error and
disconnect is appended with a timestamp to the log file.

Options:

- `--port`, `-p`: TCP port (default 9081)
- `--log`: log file (default `server.log`)
- `--no-http`: do not start the status web page in a child process

Library and function names accepted (from `pirelay.server.device_libraries`):

| library        | functions                                               |
|----------------|---------------------------------------------------------|
| `7seg_fnd`     | `initFND`, `displayNumber`, `clearDisplay`, `countdown` |
| `buzzer_music` | `play`                                                  |
| `cds_led`      | `cdsCtrl`, `cdsRead`                                    |
| `led_pwm`      | `initPWM`, `ledCtrl`                                    |

## Status web page: `pirelay-http`

A minimal HTTP server on port 8080 that answers one request per connection.
It serves `index.html` for `/`, `/index.html` and for any request that is not
a `GET`, and serves `server.log` as plain text for `/server.log`. Any other
path, or a missing file, gets `404 Not Found`.

Options:

- `--port`, `-p`: TCP port (default 8080)
- `--root`: directory holding `index.html` and `server.log` (default `.`)

`pirelay.http_server.build_response` builds the reply for a raw request
without opening a socket, and `request_path` extracts the path of a `GET`.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Usage

From the directory that holds `index.html`:

```
pirelay-server
```

To run only the web page:

```
pirelay-http
```

## Devices

The device modules take a `board` object that drives the pins, so they can be
used on real hardware or with a stand-in board:

- `pirelay.seven_segment`: `init_fnd`, `display_number`, `clear_display`,
  and `countdown`, which counts from a digit 0–9 down to zero, one step per
  second, and sounds a short 440 Hz alarm at zero. Digits outside 0–9 raise
  `ValueError`.
- `pirelay.buzzer_music`: `play` performs one of three built-in tunes
  (0, 1 or 2); `song_events` lists the frequency and duration of each note.
  Any other selection raises `ValueError`.
- `pirelay.cds_led`: `cds_read` reads the light sensor; `cds_ctrl` keeps the
  LED lit while it is dark, until an optional `threading.Event` is set.
- `pirelay.led_pwm`: `init_pwm` and `led_ctrl`, which sets the LED to off,
  dim, normal or full brightness for the levels 0–3; any other level switches
  the LED off and raises `ValueError`.

`pirelay.server.RemoteServer` takes a mapping of libraries to functions, so it
can be given `device_libraries(board)` for any board object.

## What it does not do

- There is no console client. Connect with any TCP tool (for example
  `nc <host> 9081`) and type requests one per line.
- `pirelay-server` does not drive real GPIO pins: it runs the device
  functions against an in-memory board. To control hardware, build a
  `RemoteServer` from `device_libraries(board)` with your own board object
  and call `serve_forever`.