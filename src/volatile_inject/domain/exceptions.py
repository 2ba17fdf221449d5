from typing import Any, Hashable


class DIException(Exception):
    """Base exception for DI-related errors."""


class MissingBindingError(DIException, LookupError):
    """Raised when a key has no binding in any lifetime table.

    Attributes:
        key: The key that could not be resolved.
    """

    def __init__(self, key: Hashable) -> None:
        self.key = key
        super().__init__(f"No binding registered for key: {key!r}")


class LifetimeError(DIException):
    """Raised for invalid lifetime configurations.

    This occurs when:
    - A binding is declared with an unknown lifetime value.
    - An override is requested for an unsupported lifetime.
    """

    def __init__(self, lifetime: Any, reason: str = "Unknown lifetime") -> None:
        self.lifetime = lifetime
        super().__init__(f"{reason}: {lifetime!r}")
