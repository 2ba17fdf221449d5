"""Application layer - Weak and strong cache handles."""

import logging
import weakref
from typing import Any, Optional

from volatile_inject.domain import ABSENT, ICacheHandle, InjectorConfig, IReferenceStrategy
from volatile_inject.domain.config import WEAK_REFERENCES_AVAILABLE

logger = logging.getLogger(__name__)


class WeakCache(ICacheHandle):
    """Holds a single value behind a weak reference.

    The cache never keeps its value alive: once every other strong reference
    is gone the value may be collected and :meth:`read` returns ``ABSENT``.

    Raises:
        TypeError: If ``value`` does not support weak references.

    Example:
        >>> cache = WeakCache.create(service)
        >>> cache.read() is service
        True
        >>> del service
        >>> cache.read()
        ABSENT
    """

    def __init__(self, value: Any) -> None:
        self._ref = weakref.ref(value)

    @classmethod
    def create(cls, value: Any) -> "WeakCache":
        return cls(value)

    def read(self) -> Any:
        value = self._ref()
        if value is None:
            return ABSENT
        return value

    def __repr__(self) -> str:
        return f"WeakCache({self.read()!r})"


class StrongCache(ICacheHandle):
    """Holds a single value behind an ordinary reference; never reports collection."""

    def __init__(self, value: Any) -> None:
        self._value = value

    def read(self) -> Any:
        return self._value

    def __repr__(self) -> str:
        return f"StrongCache({self._value!r})"


class WeakReferenceStrategy(IReferenceStrategy):
    """Wraps values in :class:`WeakCache` handles.

    Values whose type cannot be weakly referenced (``int``, ``str``, ``tuple``,
    plain ``dict`` and ``list``...) are held strongly instead, so volatile
    bindings producing them keep singleton semantics.
    """

    supports_weak_references = True

    def wrap(self, value: Any) -> ICacheHandle:
        try:
            return WeakCache(value)
        except TypeError:
            logger.debug("%s does not support weak references, holding it strongly", type(value).__name__)
            return StrongCache(value)


class StrongReferenceStrategy(IReferenceStrategy):
    """Fallback strategy used when weak references are unavailable or disabled."""

    supports_weak_references = False

    def wrap(self, value: Any) -> ICacheHandle:
        return StrongCache(value)


def select_reference_strategy(config: Optional[InjectorConfig] = None) -> IReferenceStrategy:
    """Pick the reference strategy for ``config``.

    Args:
        config: Injector configuration. Defaults to ``InjectorConfig()``.

    Returns:
        A weak strategy when weak references are enabled and available,
        otherwise the strong fallback.
    """
    config = config or InjectorConfig()
    if config.weak_references and WEAK_REFERENCES_AVAILABLE:
        return WeakReferenceStrategy()
    logger.debug("Weak references disabled for %s, volatile bindings behave as singletons", config.name)
    return StrongReferenceStrategy()
