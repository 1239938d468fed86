"""
requester - fluent request builder over requests
"""

from .context import Context
from .exceptions import (
    Cancelled,
    ConfigurationError,
    DeadlineExceeded,
    RequesterError,
    RequestError,
)
from .http_client import HttpClient
from .ref import Ref
from .request import Request, get, new, post

__version__ = "0.1.0"

__all__ = [
    "Cancelled",
    "ConfigurationError",
    "Context",
    "DeadlineExceeded",
    "HttpClient",
    "Ref",
    "Request",
    "RequestError",
    "RequesterError",
    "get",
    "new",
    "post",
    "__version__",
]
