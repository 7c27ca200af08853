"""
Helpers for working with segment labelings.

A labeling holds one integer id per sample; ids form contiguous,
non-decreasing runs. These helpers summarize labelings for reporting and
check auxiliary sequences (such as a hand-made annotation) against them.
"""

import numpy as np
import pandas as pd

from ..constants import TrackColumns
from ..exceptions import DimensionMismatchError, EmptyInputError
from ..models import SegmentLabeling


def run_lengths(labels: SegmentLabeling) -> np.ndarray:
    """
    Lengths of the runs of equal ids, in temporal order.

    Args:
        labels: Segment labeling

    Returns:
        Integer array summing to ``len(labels)``
    """
    labels = np.asarray(labels)
    if labels.size == 0:
        return np.zeros(0, dtype=np.int64)
    starts = np.concatenate(([0], np.flatnonzero(np.diff(labels) != 0) + 1))
    return np.diff(np.append(starts, labels.size)).astype(np.int64)


def is_non_decreasing(labels: SegmentLabeling) -> bool:
    """Check that ids never decrease along the labeling."""
    return bool(np.all(np.diff(np.asarray(labels)) >= 0))


def segment_table(labels: SegmentLabeling) -> pd.DataFrame:
    """
    Summarize a labeling as one row per run.

    Args:
        labels: Segment labeling

    Returns:
        DataFrame with columns segment, start, end (inclusive) and length
    """
    labels = np.asarray(labels)
    lengths = run_lengths(labels)
    starts = np.cumsum(lengths) - lengths
    return pd.DataFrame(
        {
            TrackColumns.SEGMENT: labels[starts],
            "start": starts,
            "end": starts + lengths - 1,
            "length": lengths,
        }
    )


def check_same_length(reference, other, name: str = "annotation") -> None:
    """
    Raise if ``other`` does not have the length of ``reference``.

    Raises:
        DimensionMismatchError: If the lengths differ
    """
    if len(other) != len(reference):
        raise DimensionMismatchError(
            f"{name} has {len(other)} samples but the signal has {len(reference)}"
        )


def align_annotation(labels: SegmentLabeling, annotation) -> pd.DataFrame:
    """
    Pair a labeling with a hand-made annotation of the same track.

    The comparison itself is left to the reporting layer; this only checks
    that both sequences describe the same fixes.

    Args:
        labels: Segment labeling
        annotation: One annotation value per fix

    Returns:
        DataFrame with one row per fix

    Raises:
        EmptyInputError: If the labeling is empty
        DimensionMismatchError: If the annotation length differs
    """
    if len(labels) == 0:
        raise EmptyInputError("Cannot align an empty labeling")
    check_same_length(labels, annotation)
    return pd.DataFrame(
        {
            TrackColumns.SEGMENT: np.asarray(labels),
            TrackColumns.ANNOTATION: np.asarray(annotation),
        }
    )
