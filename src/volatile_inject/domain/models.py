from typing import Any, Callable, Dict, Hashable, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from volatile_inject.domain.enums import Lifetime
from volatile_inject.domain.exceptions import LifetimeError

# Factories receive the injector as their only argument.
Factory = Callable[..., Any]


def _coerce_lifetime(value: Any) -> Lifetime:
    try:
        return Lifetime(value)
    except ValueError:
        raise LifetimeError(value) from None


class Binding(BaseModel):
    """Value object pairing a lifetime policy with a factory.

    Attributes:
        lifetime: How long instances produced by the factory live.
        factory: Callable receiving the injector and returning the instance.

    Example:
        >>> module = create_module({
        ...     "config": Binding.value({"dsn": "sqlite://"}),
        ...     "db": Binding.singleton(lambda i: Database(i("config")["dsn"])),
        ... })
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    lifetime: Lifetime = Field(..., description="The lifetime policy of the binding.")
    factory: Factory = Field(..., description="Factory invoked with the injector to build an instance.")

    @field_validator("lifetime", mode="before")
    @classmethod
    def validate_lifetime(cls, value: Any) -> Lifetime:
        return _coerce_lifetime(value)

    @classmethod
    def singleton(cls, factory: Factory) -> "Binding":
        return cls(lifetime=Lifetime.SINGLETON, factory=factory)

    @classmethod
    def prototype(cls, factory: Factory) -> "Binding":
        return cls(lifetime=Lifetime.TRANSIENT, factory=factory)

    @classmethod
    def volatile(cls, factory: Factory) -> "Binding":
        return cls(lifetime=Lifetime.VOLATILE, factory=factory)

    @classmethod
    def value(cls, value: Any) -> "Binding":
        """Bind a pre-built value as a singleton."""
        return cls(lifetime=Lifetime.SINGLETON, factory=lambda _: value)


class BindingRegistry(BaseModel):
    """Three parallel key -> factory tables, one per lifetime.

    A key lives in at most one table: every write evicts the key from the
    other two first.

    Attributes:
        transient: Factories invoked on every resolution.
        singleton: Factories invoked once per injector.
        volatile: Factories invoked whenever the previous instance was collected.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    transient: Dict[Any, Factory] = Field(default_factory=dict, description="Transient factories by key.")
    singleton: Dict[Any, Factory] = Field(default_factory=dict, description="Singleton factories by key.")
    volatile: Dict[Any, Factory] = Field(default_factory=dict, description="Volatile factories by key.")

    def table(self, lifetime: Lifetime) -> Dict[Any, Factory]:
        """Return the mutable table backing ``lifetime``."""
        lifetime = _coerce_lifetime(lifetime)
        if lifetime == Lifetime.SINGLETON:
            return self.singleton
        if lifetime == Lifetime.VOLATILE:
            return self.volatile
        return self.transient

    def tables(self) -> List[Dict[Any, Factory]]:
        return [self.volatile, self.singleton, self.transient]

    def put(self, key: Hashable, lifetime: Lifetime, factory: Factory) -> None:
        """Bind ``key`` to ``factory`` under ``lifetime``, replacing any other binding."""
        table = self.table(lifetime)
        self.evict(key)
        table[key] = factory

    def evict(self, key: Hashable) -> bool:
        """Remove ``key`` from every table.

        Returns:
            True if a binding was removed.
        """
        removed = False
        for table in self.tables():
            if table.pop(key, None) is not None:
                removed = True
        return removed

    def lifetime_of(self, key: Hashable) -> Optional[Lifetime]:
        for lifetime in Lifetime:
            if key in self.table(lifetime):
                return lifetime
        return None

    def lookup(self, key: Hashable) -> Optional[Binding]:
        lifetime = self.lifetime_of(key)
        if lifetime is None:
            return None
        return Binding(lifetime=lifetime, factory=self.table(lifetime)[key])

    def merge(self, other: "BindingRegistry") -> None:
        """Copy every binding of ``other`` into this registry, ``other`` winning on conflicts."""
        if other is self:
            return
        for lifetime in Lifetime:
            for key, factory in list(other.table(lifetime).items()):
                self.put(key, lifetime, factory)

    def snapshot(self) -> "BindingRegistry":
        """Return a copy whose tables can be mutated independently."""
        return BindingRegistry.model_construct(
            transient=dict(self.transient),
            singleton=dict(self.singleton),
            volatile=dict(self.volatile),
        )

    def keys(self) -> Iterator[Hashable]:
        for table in self.tables():
            yield from table

    def __contains__(self, key: Any) -> bool:
        return any(key in table for table in self.tables())

    def __len__(self) -> int:
        return sum(len(table) for table in self.tables())
