"""
Keyword wrappers around a multi-layer network handle.

Every function takes the network as ``mln=`` plus operation specific
keyword arguments. Where the engine offers several overloads, the
overload is chosen from which keywords were supplied, in the priority order
listed in the function's docstring; the first matching pattern wins.

Array arguments (``input``, ``features``, masks, ``labels``...) may be
tensors, numpy arrays or nested lists; they are coerced to tensors before
the call. Mutating operations return the network so calls can be chained.
"""

from typing import Any, Dict, Iterable, List, Optional

import torch

from ...constants import LayerTrainingMode
from ...framework.arrays import to_native
from ...framework.dispatch import Rule, dispatch, require_keys, supplied
from ...framework.handles import DataSetIterator, MultiLayerNetworkHandle
from ...framework.iterators import reset_if_empty, reset_iterator


def initialize(*, mln: MultiLayerNetworkHandle, dataset: Any) -> MultiLayerNetworkHandle:
    """
    Set the network's input and labels from a dataset.

    Args:
        mln: Network handle
        dataset: Engine dataset holding features and labels

    Returns:
        The network
    """
    mln.initialize(dataset)
    return mln


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def evaluate_classification(**opts) -> Any:
    """
    Evaluate classification performance over a dataset iterator.

    Patterns, in priority order:
        - ``mln, iterator, labels, top_n``: top-N accuracy as well as standard accuracy
        - ``mln, iterator, labels``: evaluation with label names
        - ``mln, iterator``: plain evaluation

    The iterator is always reset first.

    Keyword Args:
        mln: Network handle
        iterator: Dataset iterator
        labels: Collection of label names
        top_n: N for top-N accuracy

    Returns:
        The engine's evaluation object
    """
    rules = [
        Rule(("mln", "iterator", "labels", "top_n"),
             lambda o: o["mln"].evaluate(reset_iterator(o["iterator"]), list(o["labels"]), o["top_n"]),
             name="top-n evaluation"),
        Rule(("mln", "iterator", "labels"),
             lambda o: o["mln"].evaluate(reset_iterator(o["iterator"]), list(o["labels"])),
             name="labeled evaluation"),
        Rule(("mln", "iterator"),
             lambda o: o["mln"].evaluate(reset_iterator(o["iterator"])),
             name="plain evaluation"),
    ]
    return dispatch(opts, rules,
                    message="you must supply a mln and a dataset iterator to evaluate on",
                    operation="evaluate_classification")


def evaluate_regression(*, mln: MultiLayerNetworkHandle, iterator: DataSetIterator) -> Any:
    """Evaluate regression performance; the iterator is reset first."""
    return mln.evaluate_regression(reset_iterator(iterator))


def evaluate_roc(*, mln: MultiLayerNetworkHandle, iterator: DataSetIterator,
                 roc_threshold_steps: int) -> Any:
    """
    Evaluate a binary classifier with ROC.

    Args:
        mln: Network handle
        iterator: Dataset iterator, reset before use
        roc_threshold_steps: Number of threshold steps for the ROC curve
    """
    return mln.evaluate_roc(reset_iterator(iterator), roc_threshold_steps)


def evaluate_roc_multi_class(*, mln: MultiLayerNetworkHandle, iterator: DataSetIterator,
                             roc_threshold_steps: int) -> Any:
    """One-vs-all ROC evaluation for multi-class networks."""
    return mln.evaluate_roc_multi_class(reset_iterator(iterator), roc_threshold_steps)


def score_examples(**opts) -> torch.Tensor:
    """
    Score each example individually (test time only).

    Useful for autoencoder style architectures.

    Patterns, in priority order:
        - ``mln, dataset, add_regularization_terms``
        - ``mln, iterator, add_regularization_terms`` (iterator reset first)

    Keyword Args:
        mln: Network handle
        dataset: Engine dataset
        iterator: Dataset iterator
        add_regularization_terms: Add L1/L2 terms to each score

    Returns:
        Column vector of per-example scores
    """
    rules = [
        Rule(("mln", "dataset", "add_regularization_terms"),
             lambda o: o["mln"].score_examples(o["dataset"], o["add_regularization_terms"]),
             name="dataset"),
        Rule(("mln", "iterator", "add_regularization_terms"),
             lambda o: o["mln"].score_examples(reset_iterator(o["iterator"]), o["add_regularization_terms"]),
             name="iterator"),
    ]
    return dispatch(opts, rules,
                    message=("you must supply data in the form of a dataset or a dataset iterator. "
                             "you must also supply whether or not you want to add regularization "
                             "terms (L1, L2, dropout...)"),
                    operation="score_examples")


# ---------------------------------------------------------------------------
# Forward passes
# ---------------------------------------------------------------------------

def output(**opts) -> torch.Tensor:
    """
    Compute the network output, optionally with mask arrays.

    Patterns, in priority order:
        - ``mln, input, train, features_mask, labels_mask``
        - ``mln, input, training_mode``
        - ``mln, input, train``
        - ``mln, iterator, train``
        - ``mln, input``
        - ``mln, iterator``

    The iterator rules reset the iterator only if it is exhausted.

    Keyword Args:
        mln: Network handle
        input: Array to label
        iterator: Dataset iterator
        train: Training mode flag (affects dropout and similar)
        training_mode: ``LayerTrainingMode`` or its name
        features_mask: Mask for the features
        labels_mask: Mask for the labels

    Raises:
        DispatchError: if neither an input nor an iterator is supplied
    """
    rules = [
        Rule(("mln", "input", "train", "features_mask", "labels_mask"),
             lambda o: o["mln"].output(to_native(o["input"]), o["train"],
                                       to_native(o["features_mask"]), to_native(o["labels_mask"])),
             name="masked output"),
        Rule(("mln", "input", "training_mode"),
             lambda o: o["mln"].output(to_native(o["input"]), LayerTrainingMode.value_of(o["training_mode"])),
             name="training-mode output"),
        Rule(("mln", "input", "train"),
             lambda o: o["mln"].output(to_native(o["input"]), o["train"]),
             name="input + train"),
        Rule(("mln", "iterator", "train"),
             lambda o: o["mln"].output(reset_if_empty(o["iterator"]), o["train"]),
             name="iterator + train"),
        Rule(("mln", "input"),
             lambda o: o["mln"].output(to_native(o["input"])),
             name="input"),
        Rule(("mln", "iterator"),
             lambda o: o["mln"].output(reset_if_empty(o["iterator"])),
             name="iterator"),
    ]
    return dispatch(opts, rules,
                    message="you must supply atleast an input or iterator",
                    operation="output")


def feed_forward(**opts) -> List[torch.Tensor]:
    """
    Compute the activations from the input to the output layer.

    Mask arrays (which may be None) support one-to-many and many-to-one RNN
    designs and time series of varying lengths within a minibatch.

    Patterns, in priority order:
        - ``mln, input, features_mask, labels_mask``
        - ``mln, input, train``
        - ``mln, input``
        - ``mln, train``
        - otherwise the network's currently set input is used

    Returns:
        Activations for each layer
    """
    rules = [
        Rule(("mln", "input", "features_mask", "labels_mask"),
             lambda o: o["mln"].feed_forward(to_native(o["input"]),
                                             to_native(o["features_mask"]), to_native(o["labels_mask"])),
             name="masked"),
        Rule(("mln", "input", "train"),
             lambda o: o["mln"].feed_forward(to_native(o["input"]), o["train"]),
             name="input + train"),
        Rule(("mln", "input"),
             lambda o: o["mln"].feed_forward(to_native(o["input"])),
             name="input"),
        Rule(("mln", "train"),
             lambda o: o["mln"].feed_forward(o["train"]),
             name="train"),
        Rule(("mln",),
             lambda o: o["mln"].feed_forward(),
             name="current input"),
    ]
    return dispatch(opts, rules,
                    message="you must supply a mln",
                    operation="feed_forward")


def feed_forward_to_layer(**opts) -> List[torch.Tensor]:
    """
    Compute the activations from the input up to ``layer_idx``.

    Without ``input`` the network's currently set input is used. The
    returned list holds the original input at index 0.

    Patterns, in priority order:
        - ``mln, layer_idx, train, input``
        - ``mln, layer_idx, input``
        - ``mln, layer_idx, train``

    Raises:
        DispatchError: if neither ``train`` nor ``input`` is supplied
    """
    rules = [
        Rule(("mln", "layer_idx", "train", "input"),
             lambda o: o["mln"].feed_forward_to_layer(o["layer_idx"], to_native(o["input"]), o["train"]),
             name="layer + input + train"),
        Rule(("mln", "layer_idx", "input"),
             lambda o: o["mln"].feed_forward_to_layer(o["layer_idx"], to_native(o["input"])),
             name="layer + input"),
        Rule(("mln", "layer_idx", "train"),
             lambda o: o["mln"].feed_forward_to_layer(o["layer_idx"], o["train"]),
             name="layer + train"),
    ]
    return dispatch(opts, rules,
                    message="you must supply a mln, a layer-idx and either/both train and input",
                    operation="feed_forward_to_layer")


def compute_z(**opts) -> List[torch.Tensor]:
    """
    Compute the linear transformation (z) of every layer.

    With ``input`` supplied the activations are computed from that input,
    otherwise from the network's current input.

    Keyword Args:
        mln: Network handle
        training: Training mode flag
        input: Optional array to propagate
    """
    rules = [
        Rule(lambda o: "mln" in o and supplied(o, "input"),
             lambda o: o["mln"].compute_z(to_native(o["input"]), o.get("training")),
             name="input + training"),
        Rule(("mln",),
             lambda o: o["mln"].compute_z(o.get("training")),
             name="training"),
    ]
    return dispatch(opts, rules,
                    message="you must supply a mln",
                    operation="compute_z")


def activate_selected_layers(*, mln: MultiLayerNetworkHandle, from_idx: int, to_idx: int,
                             input: Any) -> torch.Tensor:
    """
    Activate a contiguous range of layers, e.g. for partial autoencoder passes.

    Args:
        mln: Network handle
        from_idx: First layer index
        to_idx: Last layer index
        input: Array to propagate

    Returns:
        Activation of the last selected layer
    """
    return mln.activate_selected_layers(from_idx, to_idx, to_native(input))


def activate_from_prev_layer(*, mln: MultiLayerNetworkHandle, current_layer_idx: int,
                             input: Any, training: bool) -> torch.Tensor:
    """Activation from the layer before ``current_layer_idx``, including preprocessing."""
    return mln.activation_from_prev_layer(current_layer_idx, to_native(input), training)


def z_from_prev_layer(**opts) -> torch.Tensor:
    """
    Linear transformation (z) from the previous layer, preprocessing applied.

    Requires ``mln, current_layer_idx, input, training``.
    """
    o = require_keys(opts, "mln", "current_layer_idx", "input", "training",
                     message=("you must supply the index of the current layer, an input array "
                              "and if this is for training or evaluation"))
    return o["mln"].z_from_prev_layer(o["current_layer_idx"], to_native(o["input"]), o["training"])


def reconstruct(**opts) -> torch.Tensor:
    """
    Reconstruct the input from the output of a given layer.

    Requires ``mln, layer_output, layer_idx``.

    Returns:
        Reconstruction sized relative to the last hidden layer
    """
    o = require_keys(opts, "mln", "layer_output", "layer_idx",
                     message="you must supply a layer and the input")
    return o["mln"].reconstruct(to_native(o["layer_output"]), o["layer_idx"])


# ---------------------------------------------------------------------------
# Layer initialisation and (pre)training
# ---------------------------------------------------------------------------

def initialize_layers(*, mln: MultiLayerNetworkHandle, input: Any) -> MultiLayerNetworkHandle:
    """Initialize the layers based on ``input``; returns the network."""
    mln.initialize_layers(to_native(input))
    return mln


def pre_train(*, mln: MultiLayerNetworkHandle, iterator: DataSetIterator) -> Any:
    """
    Layerwise pretraining of every pretrainable layer (VAEs, RBMs, autoencoders).

    Layers are pretrained one after the other; the engine resets the
    iterator between layers. For several epochs per layer wrap the iterator
    or call ``pre_train_layer`` per layer.
    """
    return mln.pretrain(reset_iterator(iterator))


def pre_train_layer(**opts) -> Any:
    """
    Unsupervised training of a single pretrainable layer.

    A no-op in the engine when the layer is not pretrainable.

    Patterns, in priority order:
        - ``mln, layer_idx, iterator`` (iterator reset first)
        - ``mln, layer_idx, features``
    """
    rules = [
        Rule(("mln", "layer_idx", "iterator"),
             lambda o: o["mln"].pretrain_layer(o["layer_idx"], reset_iterator(o["iterator"])),
             name="iterator"),
        Rule(("mln", "layer_idx", "features"),
             lambda o: o["mln"].pretrain_layer(o["layer_idx"], to_native(o["features"])),
             name="features"),
    ]
    return dispatch(opts, rules,
                    message=("you must supply the layer's index and either a dataset "
                             "iterator or an array of features to pretrain on"),
                    operation="pre_train_layer")


def fine_tune(mln: MultiLayerNetworkHandle) -> MultiLayerNetworkHandle:
    """Run SGD on the labels currently set; returns the fine tuned network."""
    mln.finetune()
    return mln


def init_gradients_view(mln: MultiLayerNetworkHandle) -> MultiLayerNetworkHandle:
    """
    Initialize the flattened gradients array and hand each layer its view.

    Called by the engine during fitting; returns the network.
    """
    mln.init_gradients_view()
    return mln


def update_mln(*, mln: MultiLayerNetworkHandle, other_mln: MultiLayerNetworkHandle) -> MultiLayerNetworkHandle:
    """Copy the parameters of ``other_mln`` into ``mln``; returns ``mln``."""
    mln.update(other_mln)
    return mln


# ---------------------------------------------------------------------------
# Recurrent state
# ---------------------------------------------------------------------------

def rnn_time_step(*, mln: MultiLayerNetworkHandle, input: Any) -> torch.Tensor:
    """
    Forward pass using the stored state of any RNN layers.

    The final step's activations are stored for the next call. ``input`` is
    ``[batch, features]`` or ``[batch, features, 1]`` for one step and
    ``[batch, features, time]`` for several.
    """
    return mln.rnn_time_step(to_native(input))


def rnn_activate_using_stored_state(**opts) -> List[torch.Tensor]:
    """
    Activations given the most recent RNN state, without modifying it.

    Requires ``mln, input, training, store_last_for_tbptt``.

    Returns:
        The input at index 0 followed by each layer's activation
    """
    o = require_keys(opts, "mln", "input", "training", "store_last_for_tbptt",
                     message=("you must supply a mln, the input to the model, if this is during "
                              "training or evaluation and if we want to store the previous state "
                              "for truncated backprop"))
    return o["mln"].rnn_activate_using_stored_state(to_native(o["input"]), o["training"],
                                                    o["store_last_for_tbptt"])


def rnn_clear_prev_state(mln: MultiLayerNetworkHandle) -> MultiLayerNetworkHandle:
    """Clear the stored state of every RNN layer; returns the network."""
    mln.rnn_clear_previous_state()
    return mln


def rnn_get_prev_state(*, mln: MultiLayerNetworkHandle, layer_idx: int) -> Dict[str, torch.Tensor]:
    """Stored state of the RNN layer at ``layer_idx``."""
    return mln.rnn_get_previous_state(layer_idx)


def rnn_set_prev_state(**opts) -> MultiLayerNetworkHandle:
    """
    Set the stored state of an RNN layer.

    Requires ``mln, layer_idx, state`` where state maps names to arrays.
    """
    o = require_keys(opts, "mln", "layer_idx", "state",
                     message=("you must supply a layer-index for the layer in question within the "
                              "mln and a map of the desired state"))
    o["mln"].rnn_set_previous_state(o["layer_idx"], o["state"])
    return o["mln"]


def update_rnn_state_with_tbptt_state(mln: MultiLayerNetworkHandle) -> MultiLayerNetworkHandle:
    """Replace the RNN state with the truncated BPTT state; returns the network."""
    mln.update_rnn_state_with_tbptt_state()
    return mln


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------

def summary(mln: MultiLayerNetworkHandle) -> str:
    """String describing the network architecture."""
    return mln.summary()


def get_epsilon(mln: MultiLayerNetworkHandle) -> torch.Tensor:
    return mln.epsilon()


def get_default_config(mln: MultiLayerNetworkHandle) -> Any:
    return mln.get_default_configuration()


def get_input(mln: MultiLayerNetworkHandle) -> torch.Tensor:
    return mln.get_input()


def get_mln_input(mln: MultiLayerNetworkHandle) -> torch.Tensor:
    """Input/feature matrix of the model."""
    return mln.input()


def get_layer(**opts) -> Any:
    """
    Look up a layer by position or name.

    Patterns, in priority order:
        - ``mln, layer_idx``
        - ``mln, layer_name``
    """
    rules = [
        Rule(("mln", "layer_idx"), lambda o: o["mln"].get_layer(o["layer_idx"]), name="index"),
        Rule(("mln", "layer_name"), lambda o: o["mln"].get_layer(o["layer_name"]), name="name"),
    ]
    return dispatch(opts, rules,
                    message="you must supply a mln and either the layer's name or index",
                    operation="get_layer")


def get_layer_names(mln: MultiLayerNetworkHandle) -> List[str]:
    return mln.get_layer_names()


def get_layers(mln: MultiLayerNetworkHandle) -> List[Any]:
    return mln.get_layers()


def get_layer_wise_config(mln: MultiLayerNetworkHandle) -> Any:
    """Configuration of each layer."""
    return mln.get_layer_wise_configurations()


def get_mask(mln: MultiLayerNetworkHandle) -> Optional[torch.Tensor]:
    return mln.get_mask()


def get_n_layers(mln: MultiLayerNetworkHandle) -> int:
    return mln.get_n_layers()


def get_output_layer(mln: MultiLayerNetworkHandle) -> Any:
    return mln.get_output_layer()


def get_updater(mln: MultiLayerNetworkHandle) -> Any:
    return mln.get_updater()


def is_init_called(mln: MultiLayerNetworkHandle) -> bool:
    return mln.is_init_called()


def print_config(mln: MultiLayerNetworkHandle) -> MultiLayerNetworkHandle:
    """Print the configuration; returns the network."""
    mln.print_configuration()
    return mln


def clear_layer_mask_arrays(mln: MultiLayerNetworkHandle) -> MultiLayerNetworkHandle:
    """Remove the mask arrays from all layers; returns the network."""
    mln.clear_layer_mask_arrays()
    return mln


# ---------------------------------------------------------------------------
# Mutators
# ---------------------------------------------------------------------------

def set_mln_input(*, mln: MultiLayerNetworkHandle, input: Any) -> MultiLayerNetworkHandle:
    """
    Set the network input.

    With layers not yet created this also initializes the network.
    """
    mln.set_input(to_native(input))
    return mln


def set_labels_mln(*, mln: MultiLayerNetworkHandle, labels: Any) -> MultiLayerNetworkHandle:
    mln.set_labels(to_native(labels))
    return mln


def set_layers(*, mln: MultiLayerNetworkHandle, layers: Iterable[Any]) -> MultiLayerNetworkHandle:
    """Set the layers in the order they appear in ``layers``."""
    mln.set_layers(list(layers))
    return mln


def set_layer_wise_config(*, mln: MultiLayerNetworkHandle, multi_layer_conf: Any) -> MultiLayerNetworkHandle:
    """
    Replace the multi-layer configuration.

    Normally the configuration is given when the network is built.
    """
    mln.set_layer_wise_configurations(multi_layer_conf)
    return mln


def set_mask(*, mln: MultiLayerNetworkHandle, mask: Any) -> MultiLayerNetworkHandle:
    mln.set_mask(to_native(mask))
    return mln


def set_parameters(*, mln: MultiLayerNetworkHandle, params: Any) -> MultiLayerNetworkHandle:
    """
    Set all weights and biases, output layer included.

    Args:
        mln: Network handle
        params: Row vector of length ``num_params``
    """
    mln.set_parameters(to_native(params))
    return mln


def set_score(*, mln: MultiLayerNetworkHandle, score: float) -> MultiLayerNetworkHandle:
    mln.set_score(score)
    return mln


def set_updater(*, mln: MultiLayerNetworkHandle, updater: Any) -> MultiLayerNetworkHandle:
    mln.set_updater(updater)
    return mln
