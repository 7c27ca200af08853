"""
Threshold-based change-point detection on a detail sub-band.

A change point is flagged where the magnitude of the band jumps up by more
than a threshold between consecutive samples. The difference is taken
between absolute values (``|y[i+1]| - |y[i]|``), not as the absolute value
of the difference, so only transitions from quiet to energetic regimes
count and sign flips alone do not.
"""

import logging
import math
import numbers

import numpy as np

from ..exceptions import InvalidParameterError
from ..models import Chunk, SegmentLabeling
from ..validation import as_signal

logger = logging.getLogger(__name__)


def _check_threshold(threshold) -> float:
    if isinstance(threshold, bool) or not isinstance(threshold, numbers.Real):
        raise InvalidParameterError(
            f"threshold must be a real number, got {threshold!r}"
        )
    if math.isnan(threshold) or threshold <= 0:
        raise InvalidParameterError(f"threshold must be > 0, got {threshold}")
    return float(threshold)


def find_change_points(y, threshold: float) -> np.ndarray:
    """
    Find the breakpoints of a detail band.

    Args:
        y: Detail band (1-D sequence of finite values)
        threshold: Minimum rise in magnitude; ``inf`` disables splitting

    Returns:
        Ascending breakpoint indices, each the last index of its chunk. The
        last index of ``y`` is always included.

    Raises:
        InvalidParameterError: If threshold <= 0 or NaN
        EmptyInputError: If ``y`` is empty
    """
    threshold = _check_threshold(threshold)
    y = as_signal(y, "band")

    magnitude = np.abs(y)
    rise = magnitude[1:] - magnitude[:-1]
    breakpoints = np.flatnonzero(rise > threshold)
    return np.append(breakpoints, len(y) - 1)


def split_at_change_points(y, threshold: float) -> list[Chunk]:
    """
    Split a detail band into contiguous chunks at its change points.

    Args:
        y: Detail band
        threshold: Minimum rise in magnitude

    Returns:
        Chunks in temporal order, covering the whole band
    """
    breakpoints = find_change_points(y, threshold)
    y = np.asarray(y, dtype=float)

    chunks = []
    start = 0
    for end in breakpoints:
        end = int(end)
        chunks.append(
            Chunk(start=start, length=end - start + 1, values=y[start : end + 1])
        )
        start = end + 1

    logger.debug(
        f"Split {len(y)} samples into {len(chunks)} chunks (threshold={threshold})"
    )
    return chunks


def detect_change_points(y, threshold: float) -> SegmentLabeling:
    """
    Label a detail band by chunk, with ids 1..K in temporal order.

    Args:
        y: Detail band
        threshold: Minimum rise in magnitude

    Returns:
        Integer labeling with the length of ``y``
    """
    breakpoints = find_change_points(y, threshold)
    lengths = np.diff(np.concatenate(([-1], breakpoints)))
    return np.repeat(np.arange(1, len(breakpoints) + 1, dtype=np.int64), lengths)
