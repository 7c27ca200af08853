"""
Segmentation from peak extents.

Every peak contributes its left and right half-prominence bounds to an
ordered boundary list that is closed by the last sample. Boundary k
(1-based) ends segment k; positions receive the smallest k whose boundary
is at or after them, so ids increase forward in time even when peak
extents overlap.
"""

import logging

import numpy as np

from ..exceptions import EmptyInputError, InvalidParameterError
from ..models import Peak, SegmentLabeling

logger = logging.getLogger(__name__)


def peak_extent_boundaries(peaks: list[Peak], signal_length: int) -> np.ndarray:
    """
    Build the boundary list: each peak's left then right bound, then the last index.

    Duplicates and overlaps are preserved in order.
    """
    boundaries = [
        bound
        for peak in sorted(peaks, key=lambda p: p.index)
        for bound in (peak.left_bound, peak.right_bound)
    ]
    boundaries.append(signal_length - 1)
    return np.asarray(boundaries, dtype=int)


def segment_by_peak_extents(peaks: list[Peak], signal_length: int) -> SegmentLabeling:
    """
    Convert an ordered list of peaks into a full-length segment labeling.

    Args:
        peaks: Peaks of the analyzed band
        signal_length: Length N of the analyzed band

    Returns:
        Integer labeling of length N with non-decreasing ids starting at 1

    Raises:
        EmptyInputError: If signal_length < 1
        InvalidParameterError: If a peak bound lies outside the signal
    """
    if signal_length < 1:
        raise EmptyInputError("Cannot segment an empty signal")
    for peak in peaks:
        if peak.right_bound >= signal_length:
            raise InvalidParameterError(
                f"Peak at {peak.index} extends to {peak.right_bound}, "
                f"beyond a signal of length {signal_length}"
            )

    boundaries = peak_extent_boundaries(peaks, signal_length)

    # Running maximum turns "smallest k with p <= boundary_k" into a sorted search
    reach = np.maximum.accumulate(boundaries)
    labels = np.searchsorted(reach, np.arange(signal_length), side="left") + 1

    logger.debug(
        f"Segmented {signal_length} samples with {len(peaks)} peaks "
        f"into {len(np.unique(labels))} segments"
    )
    return labels.astype(np.int64)
