"""
lazyseq - Lazy, immutable, possibly infinite sequences for Python

A sequence is a value: transformations return new sequences, and realizing
one builds a fresh cursor every time, so the same sequence can be taken from
any number of times with the same result.
"""

import logging

from .adapters import count, from_iterable, from_step, from_values, repeat, wrap
from .config import SequenceConfig, get_max_scan, set_max_scan
from .core import LazySequence
from .errors import (
    InvalidArgumentError,
    LazySeqError,
    NonTerminationError,
    OutOfRangeError,
)
from .protocols import Cursor, ProducerFactory

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "LazySequence",
    "Cursor",
    "ProducerFactory",
    "wrap",
    "from_step",
    "from_iterable",
    "from_values",
    "count",
    "repeat",
    "SequenceConfig",
    "set_max_scan",
    "get_max_scan",
    "LazySeqError",
    "InvalidArgumentError",
    "OutOfRangeError",
    "NonTerminationError",
]
