from .bitindex import BitIndex
from .coercion import is_truthy
from . import bitpacking

__all__ = [
    "BitIndex",
    "is_truthy",
    "bitpacking",
]
