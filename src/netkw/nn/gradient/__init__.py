"""
Gradient lookup tables.
"""

from .default_gradient import (
    DefaultGradient,
    new_default_gradient,
    clear,
    flattening_order_for_variable,
    get_gradient_for,
    gradient,
    gradient_for_variable,
    set_gradient_for
)

__all__ = [
    "DefaultGradient",
    "new_default_gradient",
    "clear",
    "flattening_order_for_variable",
    "get_gradient_for",
    "gradient",
    "gradient_for_variable",
    "set_gradient_for"
]
