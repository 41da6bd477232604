"""
Unit tests for array coercion.
"""

import unittest

import numpy as np
import torch

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from netkw.config import ArrayConfig
from netkw.framework.arrays import (
    NativeArray, RawSequence, as_array_input, to_native, vec_or_matrix_to_tensor
)


class TestAsArrayInput(unittest.TestCase):
    """Classification into the two variants."""

    def test_tensor_is_native(self):
        t = torch.ones(2)
        tagged = as_array_input(t)
        self.assertIsInstance(tagged, NativeArray)
        self.assertIs(tagged.value, t)

    def test_list_and_ndarray_are_raw(self):
        self.assertIsInstance(as_array_input([1, 2]), RawSequence)
        self.assertIsInstance(as_array_input(np.zeros(3)), RawSequence)

    def test_tagged_values_pass_through(self):
        raw = RawSequence([1.0])
        self.assertIs(as_array_input(raw), raw)


class TestToNative(unittest.TestCase):

    def test_native_is_returned_unchanged(self):
        t = torch.arange(6).reshape(2, 3)
        self.assertIs(to_native(t), t)
        self.assertIs(to_native(to_native(t)), t)

    def test_nested_sequence(self):
        result = to_native([[1, 2], [3, 4]])
        self.assertIsInstance(result, torch.Tensor)
        self.assertEqual(result.dtype, torch.float32)
        self.assertTrue(torch.equal(result, torch.tensor([[1.0, 2.0], [3.0, 4.0]])))

    def test_coercion_is_idempotent(self):
        values = [[0.5, 1.5]]
        first = to_native(values)
        second = to_native(values)
        self.assertTrue(torch.equal(first, second))
        self.assertIs(to_native(first), first)

    def test_numpy_array(self):
        result = to_native(np.array([1.0, 2.0], dtype=np.float64))
        self.assertEqual(result.dtype, torch.float32)
        self.assertEqual(result.tolist(), [1.0, 2.0])

    def test_none_stays_none(self):
        self.assertIsNone(to_native(None))

    def test_explicit_config_dtype(self):
        result = to_native([1, 2, 3], ArrayConfig(dtype="int64"))
        self.assertEqual(result.dtype, torch.int64)

    def test_tagged_native(self):
        t = torch.zeros(1)
        self.assertIs(to_native(NativeArray(t)), t)

    def test_ragged_sequence_error_comes_from_torch(self):
        with self.assertRaises(ValueError):
            to_native([[1, 2], [3]])

    def test_alias(self):
        self.assertIs(vec_or_matrix_to_tensor, to_native)


if __name__ == "__main__":
    unittest.main()
