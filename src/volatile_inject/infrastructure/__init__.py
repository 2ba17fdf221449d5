"""
Infrastructure layer - External integrations.

This layer contains integrations with external frameworks and tools.
It depends on both Application and Domain layers.

The FastAPI helpers live in ``volatile_inject.infrastructure.fastapi_integration``
and require the ``fastapi`` extra.
"""

from . import testing

__all__ = [
    "testing",
]
