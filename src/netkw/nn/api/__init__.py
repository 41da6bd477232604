"""
Keyword wrappers over engine network handles.

Import the module and call through it, e.g.::

    from netkw.nn.api import multi_layer_network as mln_api
    mln_api.output(mln=net, input=[[0.1, 0.2]], train=False)
"""

from . import multi_layer_network

__all__ = ["multi_layer_network"]
