"""Output destinations for response handlers."""

from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Ref(Generic[T]):
    """
    Mutable holder a handler writes its result into.

    Example:
        >>> body = Ref[str]()
        >>> get("https://example.com").to_string(body).do()
        >>> body.value
    """

    def __init__(self, value: T | None = None):
        self.value = value

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"


def check_destination(dest: Any, *containers: type) -> None:
    """
    Reject destinations a handler cannot write into.

    Args:
        dest: Destination passed by the caller
        containers: In-place container types accepted besides Ref

    Raises:
        TypeError: If dest is neither a Ref nor one of containers
    """
    allowed = (Ref, *containers)
    if not isinstance(dest, allowed):
        names = ", ".join(t.__name__ for t in allowed)
        raise TypeError(f"destination must be one of {names}, got {type(dest).__name__}")


def assign(dest: Any, value: Any) -> None:
    """
    Write value into dest in place.

    Raises:
        TypeError: If value does not fit a list, bytearray or dict destination
    """
    if isinstance(dest, Ref):
        dest.value = value
    elif isinstance(dest, list):
        if not isinstance(value, list):
            raise TypeError(f"cannot store {type(value).__name__} into list")
        dest[:] = value
    elif isinstance(dest, bytearray):
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(f"cannot store {type(value).__name__} into bytearray")
        dest[:] = value
    elif isinstance(dest, dict):
        if not isinstance(value, dict):
            raise TypeError(f"cannot store {type(value).__name__} into dict")
        dest.clear()
        dest.update(value)
    else:
        raise TypeError(f"unsupported destination {type(dest).__name__}")
