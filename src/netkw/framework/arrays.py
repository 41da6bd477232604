"""
Adapters for turning caller-supplied arrays into native engine tensors.

Callers may hand the wrappers a ``torch.Tensor``, a ``numpy.ndarray`` or a
plain nested list of numbers. Each is classified into one of two variants
and converted explicitly; no shape checks happen here.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union
import logging

import numpy as np
import torch

from ..config import ArrayConfig, get_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NativeArray:
    """An array that is already in the engine's representation."""

    value: torch.Tensor

    def to_native(self, config: Optional[ArrayConfig] = None) -> torch.Tensor:
        return self.value


@dataclass(frozen=True)
class RawSequence:
    """A nested numeric sequence or numpy array awaiting conversion."""

    value: Union[Sequence, np.ndarray]

    def to_native(self, config: Optional[ArrayConfig] = None) -> torch.Tensor:
        """
        Convert to a tensor using the configured dtype and device.

        Args:
            config: Array configuration, defaults to the active one

        Returns:
            A new tensor holding the sequence's values
        """
        config = config or get_config().arrays
        dtype = config.torch_dtype()

        if isinstance(self.value, np.ndarray):
            return torch.as_tensor(self.value, dtype=dtype, device=config.device)

        # Ragged or non-numeric input is rejected by torch itself
        return torch.tensor(self.value, dtype=dtype, device=config.device)


ArrayInput = Union[NativeArray, RawSequence]


def as_array_input(value: Any) -> ArrayInput:
    """Tag ``value`` as either a native array or a raw sequence."""
    if isinstance(value, (NativeArray, RawSequence)):
        return value
    if isinstance(value, torch.Tensor):
        return NativeArray(value)
    return RawSequence(value)


def to_native(value: Any, config: Optional[ArrayConfig] = None) -> Optional[torch.Tensor]:
    """
    Coerce a vector, matrix or tensor into a ``torch.Tensor``.

    Native tensors come back unchanged, so coercion is idempotent. ``None``
    stays ``None`` for optional arrays such as masks.

    Args:
        value: Tensor, numpy array, nested sequence or a tagged variant
        config: Array configuration, defaults to the active one

    Returns:
        The native tensor, or None
    """
    if value is None:
        return None

    tagged = as_array_input(value)
    if isinstance(tagged, RawSequence):
        logger.debug(f"Coercing {type(tagged.value).__name__} to tensor")
    return tagged.to_native(config)


# Name used throughout the network wrappers
vec_or_matrix_to_tensor = to_native
