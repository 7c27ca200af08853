"""
Peak detection on an approximation sub-band.

Peaks are local maxima that clear a minimum height, are separated by a
minimum number of samples (conflicts resolved in favour of the taller
peak), and are optionally capped in number. Each peak carries its
prominence and the bounds where the band first falls below half of that
prominence.
"""

import bisect
import logging

import numpy as np
import pandas as pd

from ..models import Peak
from ..validation import as_signal, require_finite, require_int

logger = logging.getLogger(__name__)


def find_candidates(x: np.ndarray) -> np.ndarray:
    """
    Find local maxima, collapsing plateaus to their leftmost index.

    A sample is a candidate when it is at least as high as each neighbour
    that exists. Every maximal run of equal samples holding a candidate
    collapses to the run's leftmost index, so a constant signal yields
    index 0.

    Args:
        x: 1-D float array

    Returns:
        Ascending array of candidate indices
    """
    not_below_left = np.ones(len(x), dtype=bool)
    not_below_right = np.ones(len(x), dtype=bool)
    not_below_left[1:] = x[1:] >= x[:-1]
    not_below_right[:-1] = x[:-1] >= x[1:]

    run_starts = np.concatenate(([0], np.flatnonzero(np.diff(x) != 0) + 1))
    run_of_sample = np.concatenate(([0], np.cumsum(np.diff(x) != 0)))
    candidate_runs = np.unique(run_of_sample[not_below_left & not_below_right])

    return run_starts[candidate_runs]


def _select_by_distance(
    indices: np.ndarray, heights: np.ndarray, min_distance: int
) -> np.ndarray:
    """Greedy selection in descending height; ties favour the lower index."""
    order = np.argsort(-heights, kind="stable")
    accepted: list[int] = []
    for idx in indices[order]:
        pos = bisect.bisect_left(accepted, idx)
        if pos > 0 and idx - accepted[pos - 1] < min_distance:
            continue
        if pos < len(accepted) and accepted[pos] - idx < min_distance:
            continue
        accepted.insert(pos, int(idx))
    return np.asarray(accepted, dtype=int)


def _tallest(indices: np.ndarray, x: np.ndarray, count: int) -> np.ndarray:
    """Keep the ``count`` tallest indices and return them in index order."""
    order = np.argsort(-x[indices], kind="stable")
    return np.sort(indices[order[:count]])


def peak_prominence(x: np.ndarray, index: int) -> float:
    """
    Height of the peak at ``index`` above the higher of its bounding troughs.

    Each side is scanned outward, past the peak's own plateau, until a
    sample of equal or greater height or the end of the sequence; the
    trough is the minimum of the scanned samples. A side blocked at once
    by such a sample has its trough at the peak height. A side that runs
    straight into the sequence edge is ignored.
    """
    height = x[index]

    off_plateau = np.flatnonzero(x[index + 1 :] != height)
    plateau_end = index + 1 + off_plateau[0] if off_plateau.size else len(x)

    blocked_left = np.flatnonzero(x[:index] >= height)
    left_start = blocked_left[-1] + 1 if blocked_left.size else 0
    left = x[left_start:index]

    blocked_right = np.flatnonzero(x[plateau_end:] >= height)
    right_stop = plateau_end + blocked_right[0] if blocked_right.size else len(x)
    right = x[plateau_end:right_stop]

    troughs = []
    for side, blocked in ((left, blocked_left.size), (right, blocked_right.size)):
        if side.size:
            troughs.append(side.min())
        elif blocked:
            troughs.append(height)
    if not troughs:
        return 0.0
    return float(height - max(troughs))


def peak_bounds(x: np.ndarray, index: int, prominence: float) -> tuple[int, int]:
    """
    Indices where the band first drops below ``height - prominence / 2``.

    The nearest sample strictly below the level on each side is returned;
    when a side never drops below it the bound is clipped to the sequence
    edge.
    """
    level = x[index] - prominence / 2.0

    below_left = np.flatnonzero(x[:index] < level)
    left = int(below_left[-1]) if below_left.size else 0

    below_right = np.flatnonzero(x[index + 1 :] < level)
    right = index + 1 + int(below_right[0]) if below_right.size else len(x) - 1

    return left, right


def find_peaks(
    x, min_height: float, min_distance: int, max_count: int | None
) -> list[Peak]:
    """
    Find peaks satisfying height, distance and count constraints.

    Args:
        x: Approximation band (1-D sequence of finite values)
        min_height: Candidates lower than this are discarded
        min_distance: Minimum index separation between retained peaks
        max_count: Maximum number of peaks kept (the tallest), None for no cap

    Returns:
        Peaks sorted by ascending index; empty if none qualifies

    Raises:
        InvalidParameterError: If min_height is not finite, min_distance < 0
            or max_count < 1
        EmptyInputError: If ``x`` is empty
    """
    min_height = require_finite(min_height, "min_height")
    min_distance = require_int(min_distance, "min_distance", 0)
    if max_count is not None:
        max_count = require_int(max_count, "max_count", 1)
    x = as_signal(x, "band")

    candidates = find_candidates(x)
    candidates = candidates[x[candidates] >= min_height]
    selected = _select_by_distance(candidates, x[candidates], min_distance)

    if max_count is not None and len(selected) > max_count:
        selected = _tallest(selected, x, max_count)

    peaks = []
    for index in selected:
        prominence = peak_prominence(x, index)
        left, right = peak_bounds(x, index, prominence)
        peaks.append(
            Peak(
                index=int(index),
                height=float(x[index]),
                prominence=prominence,
                left_bound=left,
                right_bound=right,
            )
        )

    if not peaks:
        logger.warning(f"No peaks reach height {min_height} in {len(x)} samples")
    else:
        logger.debug(
            f"Found {len(peaks)} peaks from {len(candidates)} candidates "
            f"(min_height={min_height}, min_distance={min_distance})"
        )
    return peaks


def peaks_to_frame(peaks: list[Peak]) -> pd.DataFrame:
    """
    Tabulate peaks for reporting.

    Args:
        peaks: Peaks as returned by find_peaks

    Returns:
        DataFrame with one row per peak
    """
    columns = ["index", "height", "prominence", "left_bound", "right_bound"]
    return pd.DataFrame([peak.model_dump() for peak in peaks], columns=columns)
