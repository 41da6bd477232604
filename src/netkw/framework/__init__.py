"""
Framework glue for netkw.

This module provides the handle protocols, keyword dispatch, array coercion
and iterator helpers that the network wrappers are built from, without
owning any engine implementation.
"""

from .handles import DataSetIterator, GradientTable, MultiLayerNetworkHandle
from .arrays import (
    NativeArray, RawSequence, ArrayInput,
    as_array_input, to_native, vec_or_matrix_to_tensor
)
from .dispatch import (
    DispatchError, Rule, dispatch, require_keys, contains_many, supplied
)
from .iterators import reset_iterator, reset_if_empty

__all__ = [
    # Handles
    "DataSetIterator",
    "GradientTable",
    "MultiLayerNetworkHandle",

    # Arrays
    "NativeArray",
    "RawSequence",
    "ArrayInput",
    "as_array_input",
    "to_native",
    "vec_or_matrix_to_tensor",

    # Dispatch
    "DispatchError",
    "Rule",
    "dispatch",
    "require_keys",
    "contains_many",
    "supplied",

    # Iterators
    "reset_iterator",
    "reset_if_empty",
]
