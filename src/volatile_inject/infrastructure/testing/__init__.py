"""
Testing utilities module.

Provides helpers for testing applications wired with volatile-inject.
"""

from .utilities import TestModule, create_mock_injector

__all__ = [
    "TestModule",
    "create_mock_injector",
]
