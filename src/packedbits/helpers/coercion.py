from numbers import Integral
from typing import Any

import numpy as np


def is_truthy(value: Any) -> bool:
    """Decide whether `value` switches a bit on.

    ``None``, ``False`` and integer zero (numpy integers and ``np.False_``
    included) are off.  Everything else is on, including empty containers,
    strings and floats.
    """
    if value is None or value is False:
        return False
    if isinstance(value, np.bool_):
        return bool(value)
    if isinstance(value, Integral):
        return int(value) != 0
    return True
