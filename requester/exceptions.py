"""
Custom exceptions for requester
"""


class RequesterError(Exception):
    """Base exception for all requester errors"""

    pass


class RequestError(RequesterError):
    """
    Error recorded by a configuration step or a response handler.

    Carries the name of the step that failed (e.g. "BodyMarshal", "ExpectCode")
    and a plain message. Consumers compare ``op`` for programmatic handling.
    """

    def __init__(self, op: str, message: str):
        self.op = op
        self.message = message
        super().__init__(f"{op}: {message}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RequestError):
            return NotImplemented
        return (self.op, self.message) == (other.op, other.message)

    def __hash__(self) -> int:
        return hash((self.op, self.message))

    def __repr__(self) -> str:
        return f"RequestError(op={self.op!r}, message={self.message!r})"


class Cancelled(RequesterError):
    """Raised when the context bound to a request was cancelled"""

    pass


class DeadlineExceeded(Cancelled):
    """Raised when the context deadline passed before the response arrived"""

    pass


class ConfigurationError(RequesterError):
    """
    Raised when required configuration values are missing or invalid.
    """

    def __init__(self, message: str, config_key: str | None = None):
        self.config_key = config_key
        if config_key:
            super().__init__(f"Configuration error for '{config_key}': {message}")
        else:
            super().__init__(f"Configuration error: {message}")
