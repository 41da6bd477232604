"""
netkw: keyword-argument wrappers for multi-layer network engines.

This package provides:
- Keyword dispatch onto engine method overloads
- Coercion of lists and numpy arrays into torch tensors
- Iterator reset helpers
- Gradient lookup tables
"""

from .config import NetKWConfig, get_config, set_config, load_config, configure_logging
from .constants import LayerTrainingMode, FlatteningOrder
from .framework import DispatchError, to_native
from . import nn

__all__ = [
    "NetKWConfig",
    "get_config",
    "set_config",
    "load_config",
    "configure_logging",
    "LayerTrainingMode",
    "FlatteningOrder",
    "DispatchError",
    "to_native",
    "nn",
]

# Version information
__version__ = "0.1.0"
