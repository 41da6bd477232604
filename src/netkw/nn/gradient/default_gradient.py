"""
Default gradient implementation: a lookup table of tensors keyed by
variable name, plus keyword accessors over any gradient table.
"""

from collections import OrderedDict
from typing import Dict, List, Optional, Union
import logging

import torch

from ...constants import FlatteningOrder
from ...framework.handles import GradientTable

logger = logging.getLogger(__name__)

OrderLike = Union[str, FlatteningOrder]


def _flatten(array: torch.Tensor, order: Optional[OrderLike]) -> torch.Tensor:
    """Flatten to 1-d, column-major when ``order`` is 'f'."""
    if order is not None and FlatteningOrder.value_of(order) is FlatteningOrder.F and array.dim() > 1:
        array = array.permute(*reversed(range(array.dim())))
    return array.reshape(-1)


class DefaultGradient:
    """
    Gradient lookup table.

    Variables keep insertion order. Each variable may carry the order in
    which it should be flattened into the full gradient vector.
    """

    def __init__(self, flattened_gradient: Optional[torch.Tensor] = None):
        self.flattened_gradient = flattened_gradient
        self._gradients: "OrderedDict[str, torch.Tensor]" = OrderedDict()
        self._flattening_orders: Dict[str, FlatteningOrder] = {}

    def gradient_for_variable(self) -> Dict[str, torch.Tensor]:
        """The live name -> gradient mapping."""
        return self._gradients

    def gradient(self, order: Optional[List[str]] = None) -> torch.Tensor:
        """
        The full gradient as one flat vector.

        Args:
            order: Variable names in the order to concatenate them. Without
                it the pre-flattened gradient is returned when one was given,
                otherwise all variables in insertion order.

        Returns:
            1-d tensor
        """
        if order is None:
            if self.flattened_gradient is not None:
                return self.flattened_gradient
            order = list(self._gradients)

        if not order:
            return torch.empty(0)

        return torch.cat([
            _flatten(self._gradients[name], self._flattening_orders.get(name))
            for name in order
        ])

    def get_gradient_for(self, variable: str) -> Optional[torch.Tensor]:
        return self._gradients.get(variable)

    def set_gradient_for(self, variable: str, gradient: torch.Tensor,
                         flattening_order: Optional[OrderLike] = None) -> Optional[torch.Tensor]:
        """Store ``gradient`` for ``variable``; returns the array it replaced."""
        previous = self._gradients.get(variable)
        self._gradients[variable] = gradient
        if flattening_order is not None:
            self._flattening_orders[variable] = FlatteningOrder.value_of(flattening_order)
        return previous

    def flattening_order_for_variable(self, variable: str) -> Optional[str]:
        """Flattening order for ``variable``, or None if not explicitly set."""
        order = self._flattening_orders.get(variable)
        return order.value if order is not None else None

    def clear(self) -> None:
        """Drop every stored array so they can be released."""
        self._gradients.clear()
        self._flattening_orders.clear()
        self.flattened_gradient = None
        logger.debug("Cleared gradient table")

    def __repr__(self) -> str:
        return f"DefaultGradient(variables={list(self._gradients)})"


_MISSING = object()


def new_default_gradient(flattened_gradient=_MISSING) -> DefaultGradient:
    """Create an empty table, optionally around a pre-flattened gradient vector."""
    if flattened_gradient is _MISSING:
        return DefaultGradient()
    return DefaultGradient(flattened_gradient)


def clear(*, grad: GradientTable) -> GradientTable:
    """Clear residual parameters; returns the table."""
    grad.clear()
    return grad


def flattening_order_for_variable(*, grad: GradientTable, variable: str) -> Optional[str]:
    """Flattening order for ``variable``, or None if it is not explicitly set."""
    return grad.flattening_order_for_variable(variable)


def get_gradient_for(*, grad: GradientTable, variable: str) -> Optional[torch.Tensor]:
    return grad.get_gradient_for(variable)


def gradient(*, grad: GradientTable, order: Optional[List[str]] = None) -> torch.Tensor:
    """The full gradient as one flat vector, in ``order`` when given."""
    if order is not None:
        return grad.gradient(order)
    return grad.gradient()


def gradient_for_variable(*, grad: GradientTable) -> Dict[str, torch.Tensor]:
    """The gradient lookup table itself."""
    return grad.gradient_for_variable()


def set_gradient_for(*, grad: GradientTable, variable: str, new_gradient: torch.Tensor,
                     flattening_order: Optional[OrderLike] = None) -> GradientTable:
    """
    Update the gradient for ``variable``.

    Args:
        grad: Gradient table
        variable: Variable name
        new_gradient: Gradient array
        flattening_order: Optional order ('c' or 'f') used when flattening

    Returns:
        The table
    """
    if flattening_order is not None:
        grad.set_gradient_for(variable, new_gradient, flattening_order)
    else:
        grad.set_gradient_for(variable, new_gradient)
    return grad
