"""
Input validation shared by the decomposition and segmentation functions.

All checks are eager: they run before any computation so callers never
receive partially built results.
"""

import math
import numbers

import numpy as np

from .exceptions import EmptyInputError, InvalidParameterError, ValidationError


def as_signal(values, name: str = "signal") -> np.ndarray:
    """
    Convert an array-like to a 1-D float array of finite samples.

    Args:
        values: Sequence of real values
        name: Name used in error messages

    Returns:
        Float64 numpy array

    Raises:
        EmptyInputError: If the sequence has no samples
        ValidationError: If the input is not 1-D or holds non-finite values
    """
    try:
        array = np.asarray(values, dtype=float)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name} must be numeric: {e}") from e

    if array.ndim != 1:
        raise ValidationError(
            f"{name} must be one-dimensional, got shape {array.shape}"
        )
    if array.size == 0:
        raise EmptyInputError(f"{name} is empty")
    if not np.all(np.isfinite(array)):
        raise ValidationError(f"{name} contains non-finite values")
    return array


def require_int(value, name: str, minimum: int) -> int:
    """Return ``value`` as an int, raising if it is not an integer >= ``minimum``."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidParameterError(f"{name} must be >= {minimum}, got {value}")
    return int(value)


def require_finite(value, name: str) -> float:
    """Return ``value`` as a float, raising if it is not a finite real number."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(f"{name} must be a real number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value}")
    return float(value)
