"""
Constants used throughout the Movement Segmenter package.

This module centralizes all magic numbers and commonly used values to improve
maintainability and clarity.
"""

from typing import Final


# === Wavelet Decomposition ===
class WaveletConstants:
    """Constants for the maximal overlap wavelet decomposition."""

    DEFAULT_FILTER: Final[str] = "la8"  # Least asymmetric, 8 taps
    DEFAULT_LEVELS: Final[int] = 6

    # Short filter names mapped to PyWavelets names
    FILTER_ALIASES: Final[dict[str, str]] = {
        "haar": "haar",
        "d4": "db2",
        "d6": "db3",
        "d8": "db4",
        "la8": "sym4",
        "la16": "sym8",
    }


# === Segmentation Defaults ===
class SegmentationDefaults:
    """Starting values for the segmentation parameters, tuned by inspection."""

    PEAK_LEVEL: Final[int] = 6
    MIN_PEAK_HEIGHT: Final[float] = 0.0
    MIN_PEAK_DISTANCE: Final[int] = 1

    CHANGE_LEVEL: Final[int] = 4
    CHANGE_THRESHOLD: Final[float] = 1.0
    MIN_SEGMENT_LENGTH: Final[int] = 500  # fixes


# === Track Columns ===
class TrackColumns:
    """Column names used for track input and segmentation output."""

    SPEED: Final[str] = "speed"
    FIX: Final[str] = "fix"
    SEGMENT: Final[str] = "segment"
    SIGNAL: Final[str] = "signal"
    PEAK_SEGMENT: Final[str] = "peak_segment"
    CHANGE_SEGMENT: Final[str] = "change_segment"
    STITCHED_SEGMENT: Final[str] = "stitched_segment"
    ANNOTATION: Final[str] = "annotation"


# === CSV Parsing ===
class CSVConstants:
    """Constants for CSV file parsing."""

    DEFAULT_SEPARATOR: Final[str] = ","
    DEFAULT_ENCODING: Final[str] = "utf-8"


# === Output Files ===
class OutputFiles:
    """File names written by the pipeline."""

    SEGMENTS: Final[str] = "segments.csv"
    PEAKS: Final[str] = "peaks.csv"
    BANDS: Final[str] = "bands.csv"
