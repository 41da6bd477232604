"""
Engine enum constants accepted by the keyword wrappers.

Callers may pass the enum member itself or its name/value as a string in
any case, e.g. ``training_mode="train"`` or ``flattening_order="F"``.
"""

from enum import Enum
from typing import Union


class _ValueOfMixin:
    """Lenient lookup by member, name or value."""

    @classmethod
    def value_of(cls, key: Union[str, Enum]):
        if isinstance(key, cls):
            return key
        if isinstance(key, str):
            for member in cls:
                if key.lower() in (member.name.lower(), str(member.value).lower()):
                    return member
        raise ValueError(f"Unknown {cls.__name__}: {key!r}. Available: {[m.name for m in cls]}")


class LayerTrainingMode(_ValueOfMixin, Enum):
    """Whether layers run with training-time behaviour (dropout etc.)."""

    TRAIN = "train"
    TEST = "test"


class FlatteningOrder(_ValueOfMixin, Enum):
    """Order used when reshaping an array into a flat vector."""

    C = "c"  # row-major
    F = "f"  # column-major
