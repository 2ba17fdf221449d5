from enum import Enum


class Lifetime(str, Enum):
    """Defines how long a bound instance lives.

    Attributes:
        TRANSIENT: New instance created on each resolution.
        SINGLETON: Single instance per injector, created once.
        VOLATILE: Instance cached only while something else keeps it alive.
    """

    TRANSIENT = "transient"
    SINGLETON = "singleton"
    VOLATILE = "volatile"

    def __str__(self) -> str:
        return self.value
