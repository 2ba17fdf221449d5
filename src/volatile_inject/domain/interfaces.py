from abc import ABC, abstractmethod
from typing import Any, Hashable, Iterator, Optional, Type, TypeVar, overload

from volatile_inject.domain.sentinels import ABSENT

T = TypeVar("T")


class IResolver(ABC):
    """Abstract interface for key-based instance resolution.

    Resolvers are callable: ``resolver(key)`` is the same as ``resolver.resolve(key)``.
    """

    @overload
    def resolve(self, key: Type[T]) -> T: ...

    @overload
    def resolve(self, key: Hashable) -> Any: ...

    @abstractmethod
    def resolve(self, key: Any) -> Any:
        """Resolve and return the instance bound to ``key``.

        Args:
            key: The key to resolve.

        Raises:
            MissingBindingError: If nothing is bound to ``key``.
        """

    @abstractmethod
    def get(self, key: Hashable, default: Optional[Any] = None) -> Any:
        """Resolve ``key`` or return ``default`` when it is not bound.

        Args:
            key: The key to resolve.
            default: Value returned for unbound keys.
        """

    @abstractmethod
    def keys(self) -> Iterator[Hashable]:
        """Iterate over every key this resolver can answer."""

    def __call__(self, key: Any) -> Any:
        return self.resolve(key)


class ICacheHandle(ABC):
    """A single cached value behind a (possibly non-owning) reference."""

    @abstractmethod
    def read(self) -> Any:
        """Return the live value, or ``ABSENT`` once it has been collected."""

    @property
    def alive(self) -> bool:
        """Whether the cached value can still be read."""
        return self.read() is not ABSENT


class IReferenceStrategy(ABC):
    """Capability interface over the runtime's weak-reference support."""

    #: Whether handles produced by this strategy let their values be collected.
    supports_weak_references: bool = False

    @abstractmethod
    def wrap(self, value: Any) -> ICacheHandle:
        """Wrap ``value`` in a cache handle.

        Args:
            value: The value to hold.
        """

    def read(self, handle: ICacheHandle) -> Any:
        """Read a handle produced by :meth:`wrap`.

        Returns:
            The live value, or ``ABSENT`` if it has been collected.
        """
        return handle.read()
