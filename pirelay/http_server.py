"""A minimal HTTP server for the dashboard page and the request log."""

from __future__ import annotations

import argparse
import socket
import sys
from pathlib import Path

HTTP_PORT = 8080
BACKLOG = 5
BUF_SIZE = 2048

INDEX_FILE = "index.html"
LOG_FILE = "server.log"

NOT_FOUND = b"HTTP/1.1 404 Not Found\r\n\r\n"

_HTML = (INDEX_FILE, "text/html; charset=utf-8")
_ROUTES = {
    "/": _HTML,
    "/index.html": _HTML,
    "/server.log": (LOG_FILE, "text/plain; charset=utf-8"),
}


def request_path(request: bytes) -> str | None:
    """Return the path of a GET request, or None for anything else."""
    if not request.startswith(b"GET "):
        return None
    for token in request[4:].split(b" "):
        if token:
            return token.decode("latin-1")
    return None


def build_response(request: bytes, root: str | Path = ".") -> bytes:
    """Build the full HTTP response for a raw request, serving files from root."""
    path = request_path(request)
    route = _HTML if path is None else _ROUTES.get(path)
    if route is None:
        return NOT_FOUND
    name, content_type = route
    try:
        body = (Path(root) / name).read_bytes()
    except OSError:
        return NOT_FOUND
    header = (
        "HTTP/1.1 200 OK\r\n"
        f"Content-Type: {content_type}\r\n"
        f"Content-Length: {len(body)}\r\n\r\n"
    ).encode("ascii")
    return header + body


def serve(port: int = HTTP_PORT, root: str | Path = ".") -> None:
    """Accept connections forever, answering one request per connection."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        server.bind(("", port))
        server.listen(BACKLOG)
        print(f"HTTP Server listening on port {port}", flush=True)
        while True:
            try:
                conn, _ = server.accept()
            except OSError as exc:
                print(f"accept: {exc}", file=sys.stderr)
                continue
            with conn:
                try:
                    data = conn.recv(BUF_SIZE - 1)
                    if data:
                        conn.sendall(build_response(data, root))
                except OSError as exc:
                    print(f"connection: {exc}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Run the HTTP server from the command line."""
    parser = argparse.ArgumentParser(description="Serve index.html and server.log.")
    parser.add_argument("--port", "-p", type=int, default=HTTP_PORT)
    parser.add_argument("--root", default=".", help="directory holding the served files")
    args = parser.parse_args(argv)
    try:
        serve(args.port, args.root)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"bind: {exc}", file=sys.stderr)
        return 1
    return 0