"""
Application layer - Resolution engine and builders.

This layer contains the injector, the module builder, lifetime helpers and
the weak-reference caches backing volatile bindings.
It depends only on the Domain layer.
"""

from .injector import Injector
from .lifetimes import as_prototype, as_singleton, as_volatile
from .module import Module, create_injector, create_module
from .volatile_store import VolatileStore
from .weak_cache import (
    StrongCache,
    StrongReferenceStrategy,
    WeakCache,
    WeakReferenceStrategy,
    select_reference_strategy,
)

__all__ = [
    "Injector",
    "Module",
    "create_module",
    "create_injector",
    "as_singleton",
    "as_prototype",
    "as_volatile",
    "VolatileStore",
    "WeakCache",
    "StrongCache",
    "WeakReferenceStrategy",
    "StrongReferenceStrategy",
    "select_reference_strategy",
]
