"""
Unit tests for the gradient lookup table and its keyword accessors.
"""

import unittest
from unittest.mock import MagicMock

import torch

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from netkw.framework.handles import GradientTable
from netkw.nn.gradient import default_gradient as dg


class TestDefaultGradient(unittest.TestCase):
    """Behaviour of the concrete table."""

    def setUp(self):
        self.grad = dg.new_default_gradient()
        self.w = torch.tensor([[1.0, 2.0], [3.0, 4.0]])
        self.b = torch.tensor([5.0, 6.0])

    def test_satisfies_protocol(self):
        self.assertIsInstance(self.grad, GradientTable)

    def test_set_and_get(self):
        dg.set_gradient_for(grad=self.grad, variable="W", new_gradient=self.w)
        self.assertIs(dg.get_gradient_for(grad=self.grad, variable="W"), self.w)
        self.assertIsNone(dg.get_gradient_for(grad=self.grad, variable="b"))

    def test_set_returns_table(self):
        result = dg.set_gradient_for(grad=self.grad, variable="W", new_gradient=self.w)
        self.assertIs(result, self.grad)

    def test_gradient_for_variable(self):
        dg.set_gradient_for(grad=self.grad, variable="W", new_gradient=self.w)
        table = dg.gradient_for_variable(grad=self.grad)
        self.assertEqual(list(table), ["W"])

    def test_flattening_order(self):
        dg.set_gradient_for(grad=self.grad, variable="W", new_gradient=self.w, flattening_order="f")
        dg.set_gradient_for(grad=self.grad, variable="b", new_gradient=self.b)
        self.assertEqual(dg.flattening_order_for_variable(grad=self.grad, variable="W"), "f")
        self.assertIsNone(dg.flattening_order_for_variable(grad=self.grad, variable="b"))

    def test_flat_gradient_insertion_order(self):
        dg.set_gradient_for(grad=self.grad, variable="W", new_gradient=self.w)
        dg.set_gradient_for(grad=self.grad, variable="b", new_gradient=self.b)
        flat = dg.gradient(grad=self.grad)
        self.assertEqual(flat.tolist(), [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])

    def test_flat_gradient_column_major(self):
        dg.set_gradient_for(grad=self.grad, variable="W", new_gradient=self.w, flattening_order="f")
        self.assertEqual(dg.gradient(grad=self.grad).tolist(), [1.0, 3.0, 2.0, 4.0])

    def test_flat_gradient_explicit_order(self):
        dg.set_gradient_for(grad=self.grad, variable="W", new_gradient=self.w)
        dg.set_gradient_for(grad=self.grad, variable="b", new_gradient=self.b)
        flat = dg.gradient(grad=self.grad, order=["b", "W"])
        self.assertEqual(flat.tolist(), [5.0, 6.0, 1.0, 2.0, 3.0, 4.0])

    def test_pre_flattened_gradient(self):
        flat = torch.arange(4.0)
        grad = dg.new_default_gradient(flattened_gradient=flat)
        self.assertIs(dg.gradient(grad=grad), flat)

    def test_clear(self):
        dg.set_gradient_for(grad=self.grad, variable="W", new_gradient=self.w, flattening_order="c")
        self.assertIs(dg.clear(grad=self.grad), self.grad)
        self.assertEqual(dict(dg.gradient_for_variable(grad=self.grad)), {})
        self.assertIsNone(dg.flattening_order_for_variable(grad=self.grad, variable="W"))
        self.assertEqual(dg.gradient(grad=self.grad).numel(), 0)


class TestKeywordDelegation(unittest.TestCase):
    """Optional arguments are only forwarded when supplied."""

    def setUp(self):
        self.grad = MagicMock(name="grad")

    def test_gradient_without_order(self):
        dg.gradient(grad=self.grad)
        self.grad.gradient.assert_called_once_with()

    def test_gradient_with_order(self):
        dg.gradient(grad=self.grad, order=["W"])
        self.grad.gradient.assert_called_once_with(["W"])

    def test_set_gradient_without_order(self):
        g = torch.ones(1)
        dg.set_gradient_for(grad=self.grad, variable="W", new_gradient=g)
        self.grad.set_gradient_for.assert_called_once_with("W", g)

    def test_set_gradient_with_order(self):
        g = torch.ones(1)
        dg.set_gradient_for(grad=self.grad, variable="W", new_gradient=g, flattening_order="c")
        self.grad.set_gradient_for.assert_called_once_with("W", g, "c")


if __name__ == "__main__":
    unittest.main()
