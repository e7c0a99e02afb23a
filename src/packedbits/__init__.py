"""Public API: the packed bit vector and its logging switch."""

from .bitvector import BitVector
from .helpers.coercion import is_truthy
from .debug import enable as enable_debug

__all__ = [
    "BitVector",
    "is_truthy",
    "enable_debug",
]

__version__ = "0.1.0"
