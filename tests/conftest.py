"""
Pytest configuration and shared fixtures
"""

import io
import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import Mock

import pytest
import requests

from requester.config import Config


@pytest.fixture
def test_config():
    """Minimal test configuration"""
    return Config(
        {
            "http": {
                "timeout_seconds": 60,
                "default_headers": {},
                "allow_redirects": True,
                "verify": True,
            },
            "context": {"poll_interval_seconds": 0.01},
        }
    )


@pytest.fixture
def make_response():
    """
    Factory for real requests.Response objects backed by an in-memory body.

    Usage:
        def test_something(make_response):
            response = make_response(200, b'{"a": 1}', cookies={"session": "abc"})
    """

    def factory(
        status_code: int = 200,
        body: bytes = b"",
        headers: dict[str, str] | None = None,
        cookies: dict[str, str] | None = None,
        url: str = "http://example/ok",
        encoding: str | None = "utf-8",
    ) -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        response.raw = io.BytesIO(body)
        response.headers.update(headers or {})
        response.url = url
        response.encoding = encoding
        for name, value in (cookies or {}).items():
            response.cookies.set(name, value)
        return response

    return factory


@pytest.fixture
def mock_transport():
    """Transport double with the attributes Request configures"""
    transport = Mock()
    transport.timeout = 60
    transport.proxies = None
    return transport


class _TestHandler(BaseHTTPRequestHandler):
    """Routes used by the end-to-end tests"""

    def log_message(self, format, *args):
        pass

    def _reply(self, status: int, payload: object, extra_headers: dict[str, str] | None = None):
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        for key, value in (extra_headers or {}).items():
            self.send_header(key, value)
        self.end_headers()
        self.wfile.write(body)

    def _route(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length).decode("utf-8") if length else ""

        if self.path == "/ok":
            self._reply(200, {"a": 1}, {"Set-Cookie": "session=abc; Path=/"})
        elif self.path == "/missing":
            self._reply(404, {"a": 1})
        elif self.path == "/echo":
            self._reply(
                200,
                {"method": self.command, "headers": dict(self.headers.items()), "body": body},
            )
        elif self.path == "/slow":
            time.sleep(1.0)
            self._reply(200, {"slow": True})
        else:
            self._reply(500, {"error": "unknown route"})

    do_GET = _route
    do_POST = _route
    do_PUT = _route


@pytest.fixture(scope="module")
def http_server():
    """Local HTTP server; yields its base URL"""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _TestHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}"
    server.shutdown()
    server.server_close()
