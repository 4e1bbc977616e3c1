"""
Identifier generation for catalog entities.

Generated ids follow ``"<kind>-<suffix>"`` (``custom-``, ``category-``,
``global-custom-``, ``manufacturer-``, ``model-``).  Downstream consumers
rely on the ``global-custom-`` prefix to tell user-created global
attributes from predefined ones.  Uniqueness is the generator's job; the
store performs no collision detection.
"""

from abc import ABC, abstractmethod
from itertools import count
from uuid import uuid4

CATEGORY_PREFIX = "category"
CUSTOM_ATTRIBUTE_PREFIX = "custom"
GLOBAL_CUSTOM_PREFIX = "global-custom"
MANUFACTURER_PREFIX = "manufacturer"
MODEL_PREFIX = "model"


class IdGenerator(ABC):
    """Injectable id source for the store."""

    @abstractmethod
    def suffix(self) -> str:
        """Return a fresh suffix."""
        ...

    def new_id(self, prefix: str) -> str:
        return f"{prefix}-{self.suffix()}"


class UuidIdGenerator(IdGenerator):
    """Production generator: random 12-hex-digit suffixes."""

    def suffix(self) -> str:
        return uuid4().hex[:12]


class SequentialIdGenerator(IdGenerator):
    """Deterministic generator for tests and replay: 1, 2, 3, ..."""

    def __init__(self, start: int = 1):
        self._counter = count(start)

    def suffix(self) -> str:
        return str(next(self._counter))


def is_user_created_global(attribute_id: str) -> bool:
    """True for global attributes created through the store."""
    return attribute_id.startswith(f"{GLOBAL_CUSTOM_PREFIX}-")
