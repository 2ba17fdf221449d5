import logging
from typing import Any, Dict, Hashable, Iterator, Optional, Type, TypeVar, overload

from volatile_inject.application.volatile_store import VolatileStore
from volatile_inject.application.weak_cache import select_reference_strategy
from volatile_inject.domain import (
    BindingRegistry,
    InjectorConfig,
    IResolver,
    MissingBindingError,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Lookup result for unbound keys; distinct from any value a factory may return.
_NOT_FOUND = object()


class Injector(IResolver):
    """Resolves keys against a frozen set of bindings.

    Each injector owns its own singleton and volatile caches, so two injectors
    built from the same module never share instances. Factories receive the
    injector itself and may resolve further keys through it; dependency cycles
    are not detected and end in ``RecursionError``.

    Injectors are not thread-safe. Concurrent first resolutions of the same
    singleton or volatile key may invoke its factory more than once.

    Attributes:
        _registry: Private snapshot of the bindings; singleton factories are
            dropped from it once their instance is cached.
        _singletons: Cached singleton instances by key.
        _volatiles: Weakly held volatile instances by key.
        _config: Configuration the injector was built with.

    Example:
        >>> injector = Injector(registry)
        >>> service = injector("service")
    """

    def __init__(self, registry: BindingRegistry, config: Optional[InjectorConfig] = None) -> None:
        """Initialize the injector over a snapshot of ``registry``.

        Args:
            registry: The bindings to resolve from. Later changes to it are not seen.
            config: Injector configuration. Defaults to ``InjectorConfig()``.
        """
        self._config = config or InjectorConfig()
        self._registry = registry.snapshot()
        self._singletons: Dict[Hashable, Any] = {}
        self._volatiles = VolatileStore(select_reference_strategy(self._config))

    @property
    def config(self) -> InjectorConfig:
        return self._config

    @overload
    def resolve(self, key: Type[T]) -> T: ...

    @overload
    def resolve(self, key: Hashable) -> Any: ...

    def resolve(self, key: Any) -> Any:
        """Resolve the instance bound to ``key``.

        Lookup order: live volatile instance, cached singleton, then the
        volatile, singleton and transient factories. Exceptions raised by a
        factory propagate unchanged and leave ``key`` uncached.

        Args:
            key: The key to resolve.

        Returns:
            The bound instance.

        Raises:
            MissingBindingError: If ``key`` is not bound in any table.

        Example:
            >>> injector("bar")
            'baz'
        """
        instance = self._lookup(key)
        if instance is _NOT_FOUND:
            raise MissingBindingError(key)
        return instance

    def get(self, key: Hashable, default: Optional[Any] = None) -> Any:
        """Resolve ``key``, returning ``default`` instead of raising when it is unbound."""
        instance = self._lookup(key)
        if instance is _NOT_FOUND:
            return default
        return instance

    def _lookup(self, key: Hashable) -> Any:
        instance = self._volatiles.get(key, _NOT_FOUND)
        if instance is not _NOT_FOUND:
            return instance

        if key in self._singletons:
            return self._singletons[key]

        factory = self._registry.volatile.get(key)
        if factory is not None:
            logger.debug("Creating volatile instance for %r in %s", key, self._config.name)
            instance = factory(self)
            self._volatiles.set(key, instance)
            return instance

        factory = self._registry.singleton.get(key)
        if factory is not None:
            logger.debug("Creating singleton instance for %r in %s", key, self._config.name)
            instance = factory(self)
            self._singletons[key] = instance
            del self._registry.singleton[key]
            return instance

        factory = self._registry.transient.get(key)
        if factory is not None:
            return factory(self)

        return _NOT_FOUND

    def keys(self) -> Iterator[Hashable]:
        seen = set()
        for key in list(self._registry.keys()) + list(self._singletons):
            if key not in seen:
                seen.add(key)
                yield key

    def __contains__(self, key: Any) -> bool:
        return key in self._singletons or key in self._registry

    def __repr__(self) -> str:
        return f"Injector(name={self._config.name!r}, keys={len(list(self.keys()))})"
