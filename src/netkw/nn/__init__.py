"""
Network-facing wrappers: multi-layer network API and gradient tables.
"""

from . import api
from . import gradient

__all__ = ["api", "gradient"]
