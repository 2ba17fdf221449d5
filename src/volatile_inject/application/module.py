import logging
from typing import Any, Hashable, Iterator, Mapping, Optional, Union

from volatile_inject.application.injector import Injector
from volatile_inject.domain import (
    Binding,
    BindingRegistry,
    Factory,
    InjectorConfig,
    Lifetime,
)

logger = logging.getLogger(__name__)

Definition = Union["Module", Mapping[Hashable, Binding]]


class Module:
    """Builder that accumulates bindings and produces injectors.

    Every ``bind_*`` call replaces any existing binding for the key, whatever
    its lifetime, and returns the module so declarations can be chained.

    Attributes:
        _registry: The accumulated bindings.
        _config: Configuration handed to injectors built from this module.

    Example:
        >>> injector = (
        ...     Module()
        ...     .bind_value("foo", "bar")
        ...     .bind_singleton("bar", lambda i: i("foo").replace("r", "z"))
        ...     .build_injector()
        ... )
        >>> injector("bar")
        'baz'
    """

    def __init__(self, config: Optional[InjectorConfig] = None) -> None:
        """Initialize an empty module.

        Args:
            config: Default configuration for injectors built from this module.
        """
        self._registry = BindingRegistry()
        self._config = config

    @property
    def config(self) -> Optional[InjectorConfig]:
        return self._config

    @property
    def registry(self) -> BindingRegistry:
        return self._registry

    def bind(self, key: Hashable, binding: Binding) -> "Module":
        """Register a declarative :class:`Binding` under ``key``."""
        if not isinstance(binding, Binding):
            raise TypeError(f"Expected a Binding for key {key!r}, got {type(binding).__name__}")
        self._registry.put(key, binding.lifetime, binding.factory)
        return self

    def bind_value(self, key: Hashable, value: Any) -> "Module":
        """Bind a pre-built value; it behaves as a singleton."""
        self._registry.put(key, Lifetime.SINGLETON, lambda _: value)
        return self

    def bind_singleton(self, key: Hashable, factory: Factory) -> "Module":
        self._registry.put(key, Lifetime.SINGLETON, factory)
        return self

    def bind_prototype(self, key: Hashable, factory: Factory) -> "Module":
        self._registry.put(key, Lifetime.TRANSIENT, factory)
        return self

    def bind_volatile(self, key: Hashable, factory: Factory) -> "Module":
        self._registry.put(key, Lifetime.VOLATILE, factory)
        return self

    def bind_singletons(self, factories: Mapping[Hashable, Factory]) -> "Module":
        """Register multiple singleton factories at once.

        Example:
            >>> module.bind_singletons({
            ...     DatabaseConfig: lambda i: DatabaseConfig.from_env(),
            ...     DatabaseConnection: lambda i: DatabaseConnection(i(DatabaseConfig)),
            ... })
        """
        for key, factory in factories.items():
            self.bind_singleton(key, factory)
        return self

    def bind_prototypes(self, factories: Mapping[Hashable, Factory]) -> "Module":
        """Register multiple transient factories at once."""
        for key, factory in factories.items():
            self.bind_prototype(key, factory)
        return self

    def bind_volatiles(self, factories: Mapping[Hashable, Factory]) -> "Module":
        """Register multiple volatile factories at once."""
        for key, factory in factories.items():
            self.bind_volatile(key, factory)
        return self

    def merge(self, *modules: Definition) -> "Module":
        """Copy the bindings of other modules into this one.

        Later modules win over earlier ones and over this module, regardless
        of the lifetime a key was bound with.

        Args:
            *modules: Modules or ``key -> Binding`` mappings.

        Returns:
            This module, to continue declaring bindings.
        """
        for module in modules:
            other = _as_module(module)
            logger.debug("Merging %d bindings into module", len(other._registry))
            self._registry.merge(other._registry)
        return self

    add = merge

    def build_injector(self, config: Optional[InjectorConfig] = None) -> Injector:
        """Snapshot the current bindings into a new :class:`Injector`.

        Each call returns an injector with fresh caches. Bindings added to the
        module afterwards are not seen by injectors already built.

        Args:
            config: Overrides the module's configuration for this injector.
        """
        config = config or self._config or InjectorConfig()
        logger.debug("Building %s with %d bindings", config.name, len(self._registry))
        return Injector(self._registry, config)

    create_injector = build_injector

    def lifetime_of(self, key: Hashable) -> Optional[Lifetime]:
        return self._registry.lifetime_of(key)

    def keys(self) -> Iterator[Hashable]:
        return self._registry.keys()

    def copy(self) -> "Module":
        module = Module(self._config)
        module._registry = self._registry.snapshot()
        return module

    def __contains__(self, key: Any) -> bool:
        return key in self._registry

    def __len__(self) -> int:
        return len(self._registry)

    def __repr__(self) -> str:
        return f"Module(keys={list(self.keys())!r})"


def _as_module(definition: Definition) -> Module:
    if isinstance(definition, Module):
        return definition
    module = Module()
    for key, binding in definition.items():
        module.bind(key, binding)
    return module


def create_module(*definitions: Definition, config: Optional[InjectorConfig] = None) -> Module:
    """Create a module from other modules and ``key -> Binding`` mappings.

    Later definitions override earlier ones.

    Example:
        >>> core = create_module({"service_a": Binding.volatile(lambda i: ServiceA())})
        >>> app = create_module(core, {"service_b": Binding.singleton(lambda i: ServiceB(i("service_a")))})
    """
    return Module(config).merge(*definitions)


def create_injector(*definitions: Definition, config: Optional[InjectorConfig] = None) -> Injector:
    """Shorthand for ``create_module(*definitions).build_injector()``."""
    return create_module(*definitions, config=config).build_injector()

