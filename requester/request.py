"""
Fluent request builder

Configure a request through chained calls, register response handlers, then
execute it once:

    >>> data = Ref()
    >>> get("https://api.example.com/items").expect_code(200).decode(data).do()

Configuration errors are sticky: once one is recorded, later configuration
calls leave the builder untouched and do() raises that error without sending
anything. Handler registration is never blocked by a sticky error.
"""

import json
import threading
from concurrent.futures import Future, wait
from datetime import timedelta
from http.cookiejar import Cookie
from typing import IO, Any, Union

import requests
from requests.structures import CaseInsensitiveDict

from .config import Config, config
from .context import Context
from .exceptions import RequestError
from .handlers import (
    Handler,
    bytes_handler,
    close_body,
    cookies_handler,
    decode_handler,
    expect_code_handler,
    run_handlers,
    string_handler,
)
from .http_client import HttpClient
from .logging_config import get_module_logger
from .ref import Ref, check_destination

logger = get_module_logger("request")

Body = Union[bytes, IO[bytes]]


class Request:
    """
    Builder for one outgoing HTTP request and the handlers run on its response.

    Not safe for concurrent configuration; build and execute it from one
    thread. The transport may be shared between builders.
    """

    def __init__(
        self,
        method: str,
        url: str,
        http_client: Any | None = None,
        config_obj: Config | None = None,
    ):
        """
        Args:
            method: HTTP method (not validated until execution)
            url: Target URL (not validated until execution)
            http_client: Transport with a send(request) method (a fresh
                HttpClient with the configured default timeout if None)
            config_obj: Config object (uses global config if None)
        """
        self.config = config_obj or config
        self.method = method
        self.url = url
        self._headers: CaseInsensitiveDict = CaseInsensitiveDict(
            self.config.get("http.default_headers") or {}
        )
        self._body: Body | None = None
        self._http_client = http_client or HttpClient(config_obj=self.config)
        self._err: RequestError | None = None
        self._response: requests.Response | None = None
        self._handlers: list[Handler | None] = []

    def __repr__(self) -> str:
        return f"<Request {self.method} {self.url}>"

    @property
    def err(self) -> RequestError | None:
        """The sticky error, if any step failed"""
        return self._err

    @property
    def response(self) -> requests.Response | None:
        """The raw response; None until the request was sent"""
        return self._response

    @property
    def headers(self) -> CaseInsensitiveDict:
        return self._headers

    @property
    def body_source(self) -> Body | None:
        return self._body

    @property
    def transport(self) -> Any:
        return self._http_client

    @property
    def handlers(self) -> tuple[Handler | None, ...]:
        return tuple(self._handlers)

    # Configuration

    def proxy(self, proxy_url: str) -> "Request":
        """Route http and https traffic of the current transport through proxy_url"""
        if self._err is not None:
            return self
        self._http_client.proxies = {"http": proxy_url, "https": proxy_url}
        return self

    def timeout(self, duration: float | timedelta) -> "Request":
        """Set the timeout of the current transport (seconds or timedelta)"""
        if self._err is not None:
            return self
        if isinstance(duration, timedelta):
            duration = duration.total_seconds()
        self._http_client.timeout = duration
        return self

    def header(self, headers: dict[str, str]) -> "Request":
        """Replace the whole header collection"""
        if self._err is not None:
            return self
        self._headers = CaseInsensitiveDict(headers)
        return self

    def set_header(self, key: str, value: str) -> "Request":
        if self._err is not None:
            return self
        self._headers[key] = value
        return self

    def content_type(self, content_type: str) -> "Request":
        if self._err is not None:
            return self
        self._headers["Content-Type"] = content_type
        return self

    def http_client(self, client: Any) -> "Request":
        """Replace the transport collaborator"""
        if self._err is not None:
            return self
        self._http_client = client
        return self

    def body(self, body: str) -> "Request":
        if self._err is not None:
            return self
        self._body = body.encode("utf-8")
        return self

    def body_bytes(self, body: bytes) -> "Request":
        if self._err is not None:
            return self
        self._body = bytes(body)
        return self

    def body_reader(self, stream: IO[bytes]) -> "Request":
        """Send the contents of a readable binary file-like object"""
        if self._err is not None:
            return self
        self._body = stream
        return self

    def body_marshal(self, value: Any) -> "Request":
        """
        Serialize value as JSON and use it as the body.

        A serialization failure becomes the sticky error; the body is still
        assigned (empty) so the failure surfaces when do() is called.
        """
        if self._err is not None:
            return self
        data = b""
        try:
            data = json.dumps(value, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            self._err = RequestError("BodyMarshal", str(e))
        self._body = data
        return self

    # Handler registration

    def expect_code(self, code: int) -> "Request":
        """Fail with "expect code X, got Y" unless the status equals code"""
        self._handlers.append(expect_code_handler(code))
        return self

    def to_cookies(self, dest: Ref[list[Cookie]] | list[Cookie]) -> "Request":
        """Store the response cookies into dest"""
        check_destination(dest, list)
        self._handlers.append(cookies_handler(dest))
        return self

    def decode(self, dest: Ref[Any] | list[Any] | dict[str, Any]) -> "Request":
        """Parse the JSON body into dest"""
        check_destination(dest, list, dict)
        self._handlers.append(decode_handler(dest))
        return self

    def to_string(self, dest: Ref[str]) -> "Request":
        check_destination(dest)
        self._handlers.append(string_handler(dest))
        return self

    def to_bytes(self, dest: Ref[bytes] | bytearray) -> "Request":
        check_destination(dest, bytearray)
        self._handlers.append(bytes_handler(dest))
        return self

    # Execution

    def do(self) -> None:
        """
        Send the request and run the registered handlers.

        Raises:
            RequestError: The sticky error (nothing is sent), or the last
                error a handler returned
            requests.exceptions.RequestException: Invalid URL or transport
                failure; no handler runs
        """
        if self._err is not None:
            raise self._err

        self._response = self._http_client.send(self._new_request())
        self._finish()

    def do_with_context(self, ctx: Context) -> None:
        """
        Like do(), bound to a cancellation/deadline context.

        The transport timeout is capped by the time left on the context.
        Cancelling the context while the request is in flight unblocks the
        caller; once handlers have started they run to completion.

        Raises:
            RequestError: As for do()
            Cancelled: The context was cancelled before the response arrived
            DeadlineExceeded: The context deadline passed first
            requests.exceptions.RequestException: As for do()
        """
        if self._err is not None:
            raise self._err
        ctx_err = ctx.error()
        if ctx_err is not None:
            raise ctx_err

        request = self._new_request()
        timeout = self._context_timeout(ctx)

        future: Future = Future()
        worker = threading.Thread(
            target=self._send_into, args=(future, request, timeout), name="requester-send"
        )
        # An abandoned send must not keep the interpreter alive
        worker.daemon = True
        worker.start()

        poll_interval = self.config.get("context.poll_interval_seconds", 0.05)
        while not wait([future], timeout=poll_interval).done:
            ctx_err = ctx.error()
            if ctx_err is not None:
                future.add_done_callback(_close_late_response)
                logger.debug(f"{self.method} {self.url} abandoned: {ctx_err}")
                raise ctx_err

        try:
            self._response = future.result()
        except requests.exceptions.Timeout as e:
            ctx_err = ctx.error()
            if ctx_err is not None:
                raise ctx_err from e
            raise
        self._finish()

    def _send_into(self, future: Future, request: requests.Request, timeout: float | None) -> None:
        try:
            future.set_result(self._http_client.send(request, timeout))
        except Exception as e:
            future.set_exception(e)

    def _context_timeout(self, ctx: Context) -> float | None:
        timeout = getattr(self._http_client, "timeout", None)
        remaining = ctx.remaining()
        if remaining is None:
            return timeout
        if timeout is None:
            return remaining
        return min(timeout, remaining)

    def _new_request(self) -> requests.Request:
        return requests.Request(
            method=self.method, url=self.url, headers=self._headers, data=self._body
        )

    def _finish(self) -> None:
        response = self._response
        logger.debug(
            f"{self.method} {self.url} -> {getattr(response, 'status_code', None)}, "
            f"running {len(self._handlers)} handler(s)"
        )
        try:
            self._err = run_handlers(self._handlers, response, self._err)
        finally:
            # Responses are streamed; release the connection even when no handler read the body
            if response is not None:
                close_body(response)
        if self._err is not None:
            raise self._err


def _close_late_response(future: Future) -> None:
    if future.cancelled() or future.exception() is not None:
        return
    close_body(future.result())


def new(method: str, url: str, config_obj: Config | None = None) -> Request:
    """Create a builder for an arbitrary method"""
    return Request(method, url, config_obj=config_obj)


def get(url: str, config_obj: Config | None = None) -> Request:
    return Request("GET", url, config_obj=config_obj)


def post(url: str, config_obj: Config | None = None) -> Request:
    return Request("POST", url, config_obj=config_obj)
