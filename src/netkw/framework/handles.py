"""
Handle protocols for the engine objects the wrappers delegate to.

These protocols describe contracts with the deep-learning engine without
owning concrete implementations. The wrappers only ever call the methods
listed here, with the positional argument orderings of the engine's
overloads.
"""

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

import torch


@runtime_checkable
class DataSetIterator(Protocol):
    """Cursor over batches of labeled examples."""

    def reset(self) -> None:
        ...

    def has_next(self) -> bool:
        ...


@runtime_checkable
class GradientTable(Protocol):
    """Per-variable gradient lookup table."""

    def gradient_for_variable(self) -> Dict[str, torch.Tensor]:
        ...

    def gradient(self, order: Optional[List[str]] = None) -> torch.Tensor:
        ...

    def get_gradient_for(self, variable: str) -> Optional[torch.Tensor]:
        ...

    def set_gradient_for(self, variable: str, gradient: torch.Tensor,
                         flattening_order: Optional[str] = None) -> Optional[torch.Tensor]:
        ...

    def flattening_order_for_variable(self, variable: str) -> Optional[str]:
        ...

    def clear(self) -> None:
        ...


@runtime_checkable
class MultiLayerNetworkHandle(Protocol):
    """
    Method surface of an engine multi-layer network.

    Overloaded engine methods take ``*args``; the argument orderings used by
    the wrappers are given in each method's docstring.
    """

    # Lifecycle
    def initialize(self, dataset: Any) -> None: ...
    def initialize_layers(self, input: torch.Tensor) -> None: ...
    def init_gradients_view(self) -> None: ...
    def is_init_called(self) -> bool: ...
    def update(self, other: Any) -> None: ...

    # Evaluation
    def evaluate(self, *args) -> Any:
        """``(it)``, ``(it, labels)`` or ``(it, labels, top_n)``."""

    def evaluate_regression(self, iterator: DataSetIterator) -> Any: ...
    def evaluate_roc(self, iterator: DataSetIterator, threshold_steps: int) -> Any: ...
    def evaluate_roc_multi_class(self, iterator: DataSetIterator, threshold_steps: int) -> Any: ...

    def score_examples(self, data: Any, add_regularization_terms: bool) -> torch.Tensor:
        """``(dataset, reg)`` or ``(it, reg)``."""

    # Forward passes
    def output(self, *args) -> torch.Tensor:
        """``(x, train, fmask, lmask)``, ``(x, mode)``, ``(x, train)``, ``(it, train)``, ``(x)``, ``(it)``."""

    def feed_forward(self, *args) -> List[torch.Tensor]:
        """``(x, fmask, lmask)``, ``(x, train)``, ``(x)``, ``(train)`` or ``()``."""

    def feed_forward_to_layer(self, *args) -> List[torch.Tensor]:
        """``(idx, x, train)``, ``(idx, x)`` or ``(idx, train)``."""

    def compute_z(self, *args) -> List[torch.Tensor]:
        """``(x, training)`` or ``(training)``."""

    def activate_selected_layers(self, start: int, end: int, input: torch.Tensor) -> torch.Tensor: ...
    def activation_from_prev_layer(self, layer_idx: int, input: torch.Tensor, training: bool) -> torch.Tensor: ...
    def z_from_prev_layer(self, layer_idx: int, input: torch.Tensor, training: bool) -> torch.Tensor: ...
    def reconstruct(self, layer_output: torch.Tensor, layer_idx: int) -> torch.Tensor: ...

    # Pretraining and fine tuning
    def pretrain(self, iterator: DataSetIterator) -> None: ...

    def pretrain_layer(self, layer_idx: int, data: Any) -> None:
        """``(idx, it)`` or ``(idx, features)``."""

    def finetune(self) -> None: ...

    # Recurrent state
    def rnn_time_step(self, input: torch.Tensor) -> torch.Tensor: ...
    def rnn_activate_using_stored_state(self, input: torch.Tensor, training: bool,
                                        store_last_for_tbptt: bool) -> List[torch.Tensor]: ...
    def rnn_clear_previous_state(self) -> None: ...
    def rnn_get_previous_state(self, layer_idx: int) -> Dict[str, torch.Tensor]: ...
    def rnn_set_previous_state(self, layer_idx: int, state: Dict[str, torch.Tensor]) -> None: ...
    def update_rnn_state_with_tbptt_state(self) -> None: ...

    # Accessors
    def summary(self) -> str: ...
    def epsilon(self) -> torch.Tensor: ...
    def get_default_configuration(self) -> Any: ...
    def get_input(self) -> torch.Tensor: ...
    def input(self) -> torch.Tensor: ...

    def get_layer(self, key: Any) -> Any:
        """``(idx)`` or ``(name)``."""

    def get_layer_names(self) -> List[str]: ...
    def get_layers(self) -> List[Any]: ...
    def get_layer_wise_configurations(self) -> Any: ...
    def get_mask(self) -> torch.Tensor: ...
    def get_n_layers(self) -> int: ...
    def get_output_layer(self) -> Any: ...
    def get_updater(self) -> Any: ...
    def print_configuration(self) -> None: ...
    def clear_layer_mask_arrays(self) -> None: ...

    # Mutators
    def set_input(self, input: torch.Tensor) -> None: ...
    def set_labels(self, labels: torch.Tensor) -> None: ...
    def set_layers(self, layers: List[Any]) -> None: ...
    def set_layer_wise_configurations(self, conf: Any) -> None: ...
    def set_mask(self, mask: torch.Tensor) -> None: ...
    def set_parameters(self, params: torch.Tensor) -> None: ...
    def set_score(self, score: float) -> None: ...
    def set_updater(self, updater: Any) -> None: ...
