import weakref

from pydantic import BaseModel, ConfigDict, Field


class _Probe:
    pass


def weak_references_supported() -> bool:
    """Probe the runtime for a working weak-reference primitive."""
    probe = _Probe()
    try:
        ref = weakref.ref(probe)
    except TypeError:
        return False
    return ref() is probe


WEAK_REFERENCES_AVAILABLE = weak_references_supported()


class InjectorConfig(BaseModel):
    """Configuration resolved once when an injector is built.

    Attributes:
        weak_references: Back volatile bindings with weak references. When False,
            volatile bindings behave as singletons.
        name: Label used in log messages and reprs.
    """

    model_config = ConfigDict(frozen=True)

    weak_references: bool = Field(
        default=WEAK_REFERENCES_AVAILABLE,
        description="Whether volatile bindings are backed by weak references.",
    )
    name: str = Field(default="injector", description="Label used in logs and reprs.")
