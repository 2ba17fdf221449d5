"""Application layer - Standalone lifetime combinators.

These wrap a factory with a caching policy and can be used without a module
or injector. Wrapped factories forward their arguments, so they also work as
binding factories that receive the injector.
"""

import functools
import logging
from typing import Any, Callable, Optional, TypeVar

from volatile_inject.application.weak_cache import select_reference_strategy
from volatile_inject.domain import ABSENT, ICacheHandle, InjectorConfig

T = TypeVar("T")

logger = logging.getLogger(__name__)

_UNSET = object()


def as_singleton(factory: Callable[..., T]) -> Callable[..., T]:
    """Invoke ``factory`` on the first call and return that result forever after.

    A factory that raises leaves nothing cached; the next call retries it.

    Example:
        >>> get_config = as_singleton(load_config)
        >>> get_config() is get_config()
        True
    """
    instance: Any = _UNSET

    @functools.wraps(factory)
    def singleton(*args: Any, **kwargs: Any) -> T:
        nonlocal instance
        if instance is _UNSET:
            instance = factory(*args, **kwargs)
        return instance

    return singleton


def as_prototype(factory: Callable[..., T]) -> Callable[..., T]:
    """Return ``factory`` unchanged: every call builds a new instance."""
    return factory


def as_volatile(factory: Callable[..., T], config: Optional[InjectorConfig] = None) -> Callable[..., T]:
    """Reuse the result of ``factory`` for as long as something else keeps it alive.

    When weak references are unavailable (or disabled through ``config``) this
    is exactly :func:`as_singleton`.

    Args:
        factory: The factory to wrap.
        config: Configuration deciding whether weak references are used.

    Example:
        >>> get_buffer = as_volatile(lambda: bytearray(1024 * 1024))
        >>> buffer = get_buffer()
        >>> get_buffer() is buffer
        True
    """
    strategy = select_reference_strategy(config)
    if not strategy.supports_weak_references:
        return as_singleton(factory)

    handle: Optional[ICacheHandle] = None

    @functools.wraps(factory)
    def volatile(*args: Any, **kwargs: Any) -> T:
        nonlocal handle
        instance = ABSENT if handle is None else strategy.read(handle)
        if instance is ABSENT:
            if handle is not None:
                logger.debug("Volatile instance of %r was collected, recreating", factory)
            instance = factory(*args, **kwargs)
            handle = strategy.wrap(instance)
        return instance

    return volatile
