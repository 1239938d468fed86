"""
Cancellation and deadline token for Request.do_with_context()
"""

import threading
import time

from .exceptions import Cancelled, DeadlineExceeded


class Context:
    """
    Carries a cancellation signal and an optional deadline.

    A context is done once cancel() was called or its deadline passed.
    It is safe to cancel from another thread.
    """

    def __init__(self, timeout: float | None = None):
        """
        Args:
            timeout: Seconds from now until the deadline (None for no deadline)
        """
        self._cancelled = threading.Event()
        self._deadline = None if timeout is None else time.monotonic() + timeout

    @classmethod
    def background(cls) -> "Context":
        """A context that is never done unless cancelled"""
        return cls()

    @classmethod
    def with_timeout(cls, timeout: float) -> "Context":
        return cls(timeout=timeout)

    @property
    def deadline(self) -> float | None:
        """Deadline on the time.monotonic() clock, if any"""
        return self._deadline

    def cancel(self) -> None:
        self._cancelled.set()

    def remaining(self) -> float | None:
        """Seconds left until the deadline (never negative), or None without one"""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def done(self) -> bool:
        return self._cancelled.is_set() or self.remaining() == 0.0

    def error(self) -> Cancelled | None:
        """The failure a done context reports, or None while it is still live"""
        if self._cancelled.is_set():
            return Cancelled("context canceled")
        if self.remaining() == 0.0:
            return DeadlineExceeded("context deadline exceeded")
        return None

    def wait(self, timeout: float | None = None) -> bool:
        """
        Block until cancelled, the deadline passes, or timeout elapses.

        Returns:
            True if the context is done
        """
        end = None if timeout is None else time.monotonic() + timeout
        while not self.done():
            wait_for = self.remaining()
            if end is not None:
                left = end - time.monotonic()
                if left <= 0:
                    break
                wait_for = left if wait_for is None else min(wait_for, left)
            self._cancelled.wait(wait_for)
        return self.done()
