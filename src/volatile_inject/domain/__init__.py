"""
Domain layer - Core models and contracts.

This layer contains the binding model, lifetimes, configuration and errors.
It has no dependencies on other layers.
"""

from .config import InjectorConfig, weak_references_supported
from .enums import Lifetime
from .exceptions import DIException, LifetimeError, MissingBindingError
from .interfaces import ICacheHandle, IReferenceStrategy, IResolver
from .models import Binding, BindingRegistry, Factory
from .sentinels import ABSENT

__all__ = [
    # Enums
    "Lifetime",
    # Exceptions
    "DIException",
    "MissingBindingError",
    "LifetimeError",
    # Interfaces
    "IResolver",
    "ICacheHandle",
    "IReferenceStrategy",
    # Models
    "Binding",
    "BindingRegistry",
    "Factory",
    "InjectorConfig",
    "weak_references_supported",
    "ABSENT",
]
