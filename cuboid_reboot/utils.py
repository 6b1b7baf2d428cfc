"""Utility functions for integer range processing.

This module contains helper functions for checking coordinates against the
fixed-width integer ranges the engine guarantees, and for converting between
closed integer ranges and Python slices. Python integers never wrap, so every
bound the engine promises has to be checked explicitly here.
"""

import numpy as np

from cuboid_reboot.errors import SegmentOverflowError, ValidationError, VolumeOverflowError

# INTEGER LIMITS
I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1
U64_MAX = 2 ** 64 - 1


def require_int(value, name: str) -> int:
    """Return ``value`` if it is a plain integer, raising ValidationError otherwise.

    Booleans are rejected even though they subclass int, since ``True`` as a
    coordinate is almost always a bug upstream.
    """
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer, got bool")
    if isinstance(value, int):
        return value
    # numpy integer scalars
    if isinstance(value, np.integer):
        return int(value)
    raise ValidationError(f"{name} must be an integer, got {type(value).__name__}")

def check_i64(value: int, what: str = "value") -> int:
    """Raise SegmentOverflowError unless ``value`` fits a signed 64-bit integer."""
    if value < I64_MIN or value > I64_MAX:
        raise SegmentOverflowError(f"{what} {value} is outside the signed 64-bit range")
    return value

def check_u64(value: int, what: str = "volume") -> int:
    """Raise VolumeOverflowError unless ``value`` fits an unsigned 64-bit integer."""
    if value < 0 or value > U64_MAX:
        raise VolumeOverflowError(f"{what} {value} does not fit an unsigned 64-bit integer")
    return value

def checked_product(factors, what: str = "volume") -> int:
    """Multiply non-negative factors, failing as soon as the product leaves u64.

    Args:
        factors: Iterable of non-negative integers (per-axis cell counts)
        what: Label used in the error message

    Returns:
        int: The exact product

    Raises:
        VolumeOverflowError: If any partial product exceeds ``U64_MAX``
    """
    product = 1
    for factor in factors:
        product = check_u64(product * factor, what)
    return product

def checked_sum(values, what: str = "total volume") -> int:
    """Sum non-negative integers, failing as soon as the total leaves u64."""
    total = 0
    for value in values:
        total = check_u64(total + value, what)
    return total

def normalize_range(idx: int | slice) -> tuple[int, int]:
    """Convert an index or unit-step slice into inclusive ``(start, end)`` bounds.

    Args:
        idx: Integer coordinate or slice with explicit start and stop

    Returns:
        tuple: ``(start, end)`` with both ends included

    Examples:
        normalize_range(5) -> (5, 5)
        normalize_range(slice(10, 13)) -> (10, 12)

    Raises:
        ValidationError: If the slice is open-ended, stepped or empty
    """
    if isinstance(idx, slice):
        if idx.start is None or idx.stop is None:
            raise ValidationError("Slice must have start and stop")
        if idx.step not in (None, 1):
            raise ValidationError(f"Slice step must be 1, got {idx.step}")
        start = require_int(idx.start, "slice start")
        stop = require_int(idx.stop, "slice stop")
        if stop <= start:
            raise ValidationError(f"Slice {idx} is empty")
        return start, stop - 1
    value = require_int(idx, "index")
    return value, value
