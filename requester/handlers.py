"""
Response handlers

A handler is a callable taking the received response and returning either
None (success) or the RequestError describing what went wrong. Handlers write
their results into caller-supplied destinations (see requester.ref).

run_handlers() executes a chain against one response. Every handler runs even
after an earlier one failed; the last failure wins.
"""

from collections.abc import Callable, Iterable
from http.cookiejar import Cookie
from typing import Any

import requests

from .exceptions import RequestError
from .logging_config import get_module_logger
from .ref import Ref, assign

logger = get_module_logger("handlers")

Handler = Callable[[requests.Response | None], RequestError | None]

# Errors that can surface while reading a streamed body
READ_ERRORS = (requests.exceptions.RequestException, OSError, RuntimeError)

NIL_RESPONSE = "response is nil"


def run_handlers(
    handlers: Iterable[Handler | None],
    response: requests.Response | None,
    err: RequestError | None = None,
) -> RequestError | None:
    """
    Run handlers in order against one response.

    Args:
        handlers: Registered handlers; None entries are skipped
        response: The received response
        err: Error already recorded before the chain started

    Returns:
        The last error returned by a handler, or err if none failed
    """
    for handler in handlers:
        if handler is None:
            continue
        result = handler(response)
        if result is not None:
            logger.debug(f"Handler failed: {result}")
            err = result
    return err


def close_body(response: requests.Response) -> None:
    """Release the response body; failures are logged, never reported."""
    try:
        response.close()
    except (OSError, requests.exceptions.RequestException) as e:
        logger.warning(f"Failed to close response body for {response.url}: {e}")


def expect_code_handler(code: int) -> Handler:
    def handler(response: requests.Response | None) -> RequestError | None:
        if response is None:
            return RequestError("ExpectCode", NIL_RESPONSE)
        if response.status_code != code:
            return RequestError("ExpectCode", f"expect code {code}, got {response.status_code}")
        return None

    return handler


def cookies_handler(dest: Ref[list[Cookie]] | list[Cookie]) -> Handler:
    def handler(response: requests.Response | None) -> RequestError | None:
        if response is None:
            return RequestError("ToCookies", NIL_RESPONSE)
        assign(dest, list(response.cookies))
        return None

    return handler


def decode_handler(dest: Ref[Any] | list[Any] | dict[str, Any]) -> Handler:
    """Parse the body as JSON into dest, then close the body."""

    def handler(response: requests.Response | None) -> RequestError | None:
        if response is None:
            return RequestError("Decode", NIL_RESPONSE)
        try:
            assign(dest, response.json())
        except (*READ_ERRORS, ValueError, TypeError) as e:
            return RequestError("Decode", str(e))
        finally:
            close_body(response)
        return None

    return handler


def string_handler(dest: Ref[str]) -> Handler:
    """Read the whole body as text into dest, then close the body."""

    def handler(response: requests.Response | None) -> RequestError | None:
        if response is None:
            return RequestError("ToString", NIL_RESPONSE)
        try:
            # .text falls back to charset detection when no encoding was sent
            assign(dest, response.text)
        except READ_ERRORS as e:
            return RequestError("ToString", str(e))
        finally:
            close_body(response)
        return None

    return handler


def bytes_handler(dest: Ref[bytes] | bytearray) -> Handler:
    """Read the whole body as raw bytes into dest, then close the body."""

    def handler(response: requests.Response | None) -> RequestError | None:
        if response is None:
            return RequestError("ToBytes", NIL_RESPONSE)
        try:
            assign(dest, response.content or b"")
        except READ_ERRORS as e:
            return RequestError("ToBytes", str(e))
        finally:
            close_body(response)
        return None

    return handler
