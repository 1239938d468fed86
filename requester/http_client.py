"""HTTP transport used by request builders."""

from typing import Any

import requests

from .config import Config, config
from .logging_config import get_module_logger

logger = get_module_logger("http_client")


class HttpClient:
    """
    Transport collaborator for Request builders.

    Wraps a requests.Session. Any object with a compatible ``send`` method and
    mutable ``timeout``/``proxies`` attributes can be injected instead, which
    keeps the builder easy to mock in unit tests.
    """

    def __init__(
        self,
        timeout: float | None = None,
        proxies: dict[str, str] | None = None,
        session: requests.Session | None = None,
        config_obj: Config | None = None,
    ):
        """
        Initialize the transport

        Args:
            timeout: Request timeout in seconds (defaults to http.timeout_seconds)
            proxies: Optional scheme -> proxy URL mapping
            session: Optional requests.Session to send through
            config_obj: Config object (uses global config if None)
        """
        self.config = config_obj or config
        if timeout is None:
            timeout = self.config.get("http.timeout_seconds", 60)
        self.timeout = timeout
        self.proxies = proxies
        self.session = session or requests.Session()
        self.allow_redirects = self.config.get("http.allow_redirects", True)
        self.verify = self.config.get("http.verify", True)

    def send(self, request: requests.Request, timeout: float | None = None) -> requests.Response:
        """
        Prepare and send one request.

        The response is streamed: its body stays unread until a handler
        consumes it, and the caller is responsible for closing it.

        Args:
            request: Request to send
            timeout: Overrides the client timeout for this call only

        Returns:
            requests.Response object

        Raises:
            requests.exceptions.RequestException: On invalid URLs, connection
                failures and timeouts
        """
        prepared = self.session.prepare_request(request)
        # Picks up HTTP(S)_PROXY, NO_PROXY and REQUESTS_CA_BUNDLE like requests.request() does
        kwargs: dict[str, Any] = self.session.merge_environment_settings(
            prepared.url, dict(self.proxies or {}), True, self.verify, None
        )
        kwargs["timeout"] = self.timeout if timeout is None else timeout
        kwargs["allow_redirects"] = self.allow_redirects

        logger.debug(f"Sending {prepared.method} {prepared.url} (timeout={kwargs['timeout']})")
        return self.session.send(prepared, **kwargs)

    def close(self) -> None:
        """Close the underlying session and its pooled connections."""
        self.session.close()
