"""Application layer - Key-indexed store of weakly held values."""

from typing import Any, Dict, Hashable, Iterator, Optional

from volatile_inject.application.weak_cache import select_reference_strategy
from volatile_inject.domain import ABSENT, ICacheHandle, IReferenceStrategy


class VolatileStore:
    """Map-like store whose values are held through cache handles.

    With the default weak strategy, entries vanish once their value has been
    garbage-collected; a collected entry is never resurrected.

    Attributes:
        _strategy: Reference strategy used to wrap stored values.
        _entries: Cache handles by key.

    Example:
        >>> store = VolatileStore()
        >>> store.set("a", service).get("a") is service
        True
    """

    def __init__(self, strategy: Optional[IReferenceStrategy] = None) -> None:
        """Initialize an empty store.

        Args:
            strategy: Reference strategy. Defaults to the one selected for the
                default configuration.
        """
        self._strategy = strategy or select_reference_strategy()
        self._entries: Dict[Hashable, ICacheHandle] = {}

    def set(self, key: Hashable, value: Any) -> "VolatileStore":
        """Store ``value`` under ``key``, replacing any previous entry.

        Returns:
            The store itself, for chaining.
        """
        self._entries[key] = self._strategy.wrap(value)
        return self

    def get(self, key: Hashable, default: Optional[Any] = None) -> Any:
        """Return the live value for ``key``, or ``default`` if unknown or collected."""
        handle = self._entries.get(key)
        if handle is None:
            return default
        value = self._strategy.read(handle)
        if value is ABSENT:
            del self._entries[key]
            return default
        return value

    def has(self, key: Hashable) -> bool:
        """Whether ``get(key)`` would return a live value."""
        return self.get(key, ABSENT) is not ABSENT

    def discard(self, key: Hashable) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> Iterator[Hashable]:
        """Iterate over keys whose values are still alive."""
        return iter([key for key in list(self._entries) if self.has(key)])

    def __contains__(self, key: Any) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        return sum(1 for _ in self.keys())

    def __repr__(self) -> str:
        return f"VolatileStore(keys={list(self.keys())!r})"
