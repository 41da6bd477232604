#!/usr/bin/env python3
"""
Keyword Calls Example

This example drives a tiny torch-backed network through the keyword wrappers:
- Output with and without the train flag
- Feed forward to a layer
- Dispatch failures

Usage:
    python examples/keyword_calls_example.py
"""

import sys
import torch
import torch.nn as nn
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from netkw import DispatchError, configure_logging
from netkw.config import LoggingConfig
from netkw.nn.api import multi_layer_network as mln_api

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class TinyNetwork:
    """Just enough of a network handle for this example."""

    def __init__(self, *sizes):
        self.layers = nn.ModuleList(
            nn.Linear(n_in, n_out) for n_in, n_out in zip(sizes[:-1], sizes[1:])
        )
        self._input = None

    def _forward(self, x, upto, train=False):
        self.layers.train(train)
        activations = [x]
        with torch.no_grad():
            for layer in self.layers[:upto + 1]:
                activations.append(torch.tanh(layer(activations[-1])))
        return activations

    def output(self, x, train=False):
        return self._forward(x, len(self.layers) - 1, train)[-1]

    def feed_forward_to_layer(self, layer_idx, *args):
        if isinstance(args[0], torch.Tensor):
            x, train = args[0], (args[1] if len(args) > 1 else False)
        else:
            x, train = self._input, args[0]
        return self._forward(x, layer_idx, train)

    def set_input(self, x):
        self._input = x

    def get_n_layers(self):
        return len(self.layers)


def main():
    configure_logging(LoggingConfig(level="DEBUG"))

    net = TinyNetwork(3, 8, 8, 2)
    logger.info(f"Layers: {mln_api.get_n_layers(net)}")

    out = mln_api.output(mln=net, input=[[0.1, 0.2, 0.3]], train=False)
    logger.info(f"Output shape: {tuple(out.shape)}")

    mln_api.set_mln_input(mln=net, input=[[1.0, 0.0, -1.0]])
    activations = mln_api.feed_forward_to_layer(mln=net, layer_idx=1, train=True)
    logger.info(f"Activations returned (input included): {len(activations)}")

    try:
        mln_api.output(mln=net, train=True)
    except DispatchError as e:
        logger.info(f"Dispatch failed as expected: {e}")


if __name__ == "__main__":
    main()
