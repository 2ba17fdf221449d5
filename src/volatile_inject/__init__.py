"""
volatile-inject: Minimal key-based dependency injection with transient,
singleton and garbage-collectable volatile lifetimes.

Public API exports for the volatile-inject package.
"""

# Application exports
from volatile_inject.application.injector import Injector
from volatile_inject.application.lifetimes import as_prototype, as_singleton, as_volatile
from volatile_inject.application.module import Module, create_injector, create_module
from volatile_inject.application.volatile_store import VolatileStore
from volatile_inject.application.weak_cache import WeakCache

# Domain exports
from volatile_inject.domain.config import InjectorConfig
from volatile_inject.domain.enums import Lifetime
from volatile_inject.domain.exceptions import DIException, LifetimeError, MissingBindingError
from volatile_inject.domain.models import Binding
from volatile_inject.domain.sentinels import ABSENT

__version__ = "0.1.0"

__all__ = [
    # Builders
    "Module",
    "create_module",
    "create_injector",
    "Injector",
    # Lifetime helpers
    "as_singleton",
    "as_prototype",
    "as_volatile",
    # Caches
    "WeakCache",
    "VolatileStore",
    "ABSENT",
    # Models
    "Binding",
    "Lifetime",
    "InjectorConfig",
    # Exceptions
    "DIException",
    "MissingBindingError",
    "LifetimeError",
]
