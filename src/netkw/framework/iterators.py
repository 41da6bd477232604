"""
Dataset iterator reset helpers.

Which helper an operation uses is fixed per operation: evaluation,
pretraining and scoring always rewind; output only rewinds an exhausted
iterator.
"""

import logging

from .handles import DataSetIterator

logger = logging.getLogger(__name__)


def reset_iterator(iterator: DataSetIterator) -> DataSetIterator:
    """Rewind ``iterator`` unconditionally and return it."""
    iterator.reset()
    logger.debug("Reset dataset iterator")
    return iterator


def reset_if_empty(iterator: DataSetIterator) -> DataSetIterator:
    """Rewind ``iterator`` only when it has no batches left, then return it."""
    if not iterator.has_next():
        iterator.reset()
        logger.debug("Reset exhausted dataset iterator")
    return iterator
