"""Unit tests for the dataset iterator reset helpers."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from netkw.framework.handles import DataSetIterator
from netkw.framework.iterators import reset_if_empty, reset_iterator


class ListIterator:
    """Minimal in-memory dataset iterator."""

    def __init__(self, batches):
        self.batches = list(batches)
        self.position = 0
        self.resets = 0

    def has_next(self):
        return self.position < len(self.batches)

    def next(self):
        batch = self.batches[self.position]
        self.position += 1
        return batch

    def reset(self):
        self.position = 0
        self.resets += 1


@pytest.fixture
def iterator():
    return ListIterator(["b0", "b1", "b2"])


def test_list_iterator_satisfies_protocol(iterator):
    assert isinstance(iterator, DataSetIterator)


def test_reset_iterator_always_rewinds(iterator):
    iterator.next()
    assert reset_iterator(iterator) is iterator
    assert iterator.position == 0
    assert iterator.resets == 1


def test_reset_iterator_on_fresh_iterator(iterator):
    reset_iterator(iterator)
    assert iterator.resets == 1


def test_reset_if_empty_leaves_position(iterator):
    iterator.next()
    assert reset_if_empty(iterator) is iterator
    assert iterator.position == 1
    assert iterator.resets == 0


def test_reset_if_empty_rewinds_exhausted(iterator):
    for _ in range(3):
        iterator.next()
    reset_if_empty(iterator)
    assert iterator.position == 0
    assert iterator.resets == 1
