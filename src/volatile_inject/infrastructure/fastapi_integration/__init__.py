"""
FastAPI integration module.

Provides helpers for resolving volatile-inject bindings from FastAPI endpoints.
"""

from .integration import (
    create_app_dependency,
    create_fastapi_dependency,
    inject_dependencies,
    install_injector,
)

__all__ = [
    "create_fastapi_dependency",
    "create_app_dependency",
    "install_injector",
    "inject_dependencies",
]
