import numpy as np


def to_list(x):
    """Convert any iterable to a Python list; arrays are unpacked into native scalars."""
    if isinstance(x, np.ndarray):
        return x.tolist() if x.ndim else [x.item()]
    return list(x)


def is_sequence(x) -> bool:
    """True for values that can be spliced element-wise (strings and bytes excluded)."""
    if isinstance(x, np.ndarray):
        return True
    if isinstance(x, (str, bytes)):
        return False
    try:
        iter(x)
    except TypeError:
        return False
    return True


def values_equal(a, b) -> bool:
    """Equality that tolerates numpy arrays on either side."""
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return isinstance(a, np.ndarray) and isinstance(b, np.ndarray) and bool(np.array_equal(a, b))
    if type(a) != type(b):
        return False
    return bool(a == b)
