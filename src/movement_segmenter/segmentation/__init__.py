"""
Segmentation algorithms operating on wavelet sub-bands.

This package contains the two segmentation branches:
- peaks: peak detection with height, distance and prominence semantics
- extents: segmentation from peak half-prominence extents
- change_points: threshold-based change-point detection
- stitching: merging of chunks shorter than a minimum duration
- labeling: helpers for summarizing and aligning labelings
"""

from .change_points import (
    detect_change_points,
    find_change_points,
    split_at_change_points,
)
from .extents import peak_extent_boundaries, segment_by_peak_extents
from .labeling import (
    align_annotation,
    check_same_length,
    is_non_decreasing,
    run_lengths,
    segment_table,
)
from .peaks import find_candidates, find_peaks, peaks_to_frame
from .stitching import stitch_short_chunks

__all__ = [
    "align_annotation",
    "check_same_length",
    "detect_change_points",
    "find_candidates",
    "find_change_points",
    "find_peaks",
    "is_non_decreasing",
    "peak_extent_boundaries",
    "peaks_to_frame",
    "run_lengths",
    "segment_by_peak_extents",
    "segment_table",
    "split_at_change_points",
    "stitch_short_chunks",
]
