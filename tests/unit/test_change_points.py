"""Unit tests for threshold-based change-point detection."""

import numpy as np
import pytest

from movement_segmenter.exceptions import EmptyInputError, InvalidParameterError
from movement_segmenter.segmentation import (
    detect_change_points,
    find_change_points,
    run_lengths,
    split_at_change_points,
)


class TestFindChangePoints:
    """Test breakpoint detection."""

    def test_single_rise(self, step_band: np.ndarray):
        """Test the step example."""
        assert list(find_change_points(step_band, 1.0)) == [2, 5]

    def test_difference_of_magnitudes(self):
        """Test that sign flips and drops are not change points."""
        y = np.array([0, 0, 3, -3, 0], dtype=float)

        assert list(find_change_points(y, 1.0)) == [1, 4]

    def test_rise_must_exceed_threshold(self):
        """Test that a rise equal to the threshold is not a change point."""
        y = np.array([0, 1, 1], dtype=float)

        assert list(find_change_points(y, 1.0)) == [2]

    def test_single_sample(self):
        """Test that a one-sample band has only the closing breakpoint."""
        assert list(find_change_points([3.0], 0.5)) == [0]


class TestDetectChangePoints:
    """Test change-point labeling."""

    def test_step_labels(self, step_band: np.ndarray):
        """Test labels of the step example."""
        assert list(detect_change_points(step_band, 1.0)) == [1, 1, 1, 2, 2, 2]

    def test_infinite_threshold_single_segment(self, random_signal: np.ndarray):
        """Test that an infinite threshold gives one segment."""
        labels = detect_change_points(random_signal, np.inf)

        assert np.all(labels == 1)
        assert len(labels) == len(random_signal)

    def test_segment_count_non_increasing(self, random_signal: np.ndarray):
        """Test that raising the threshold never adds segments."""
        band = np.diff(random_signal)
        counts = [
            len(run_lengths(detect_change_points(band, threshold)))
            for threshold in [0.1, 0.5, 1.0, 1.5, 2.0, 3.0, 5.0]
        ]

        assert counts[0] > 1
        assert all(a >= b for a, b in zip(counts, counts[1:]))

    def test_raising_threshold_only_removes_breakpoints(
        self, random_signal: np.ndarray
    ):
        """Test that breakpoints at a higher threshold are a subset."""
        band = np.diff(random_signal)

        low = set(find_change_points(band, 0.5))
        high = set(find_change_points(band, 1.5))

        assert high <= low

    @pytest.mark.parametrize("threshold", [0, -1.0, float("nan")])
    def test_invalid_threshold(self, step_band: np.ndarray, threshold: float):
        """Test that non-positive thresholds are rejected."""
        with pytest.raises(InvalidParameterError):
            detect_change_points(step_band, threshold)

    def test_empty_band(self):
        """Test that an empty band is rejected."""
        with pytest.raises(EmptyInputError):
            detect_change_points([], 1.0)


class TestSplitAtChangePoints:
    """Test splitting into chunks."""

    def test_step_chunks(self, step_band: np.ndarray):
        """Test chunks of the step example."""
        chunks = split_at_change_points(step_band, 1.0)

        assert [(c.start, c.length, c.end) for c in chunks] == [(0, 3, 2), (3, 3, 5)]
        assert list(chunks[1].values) == [2.0, 0.0, 0.0]

    def test_chunks_cover_band(self, random_signal: np.ndarray):
        """Test that chunks are contiguous and cover the band."""
        band = np.diff(random_signal)

        chunks = split_at_change_points(band, 1.0)

        assert chunks[0].start == 0
        assert chunks[-1].end == len(band) - 1
        assert sum(c.length for c in chunks) == len(band)
        for previous, current in zip(chunks, chunks[1:]):
            assert current.start == previous.end + 1

    def test_chunks_match_labels(self, random_signal: np.ndarray):
        """Test that chunk lengths equal the label run lengths."""
        band = np.diff(random_signal)

        chunks = split_at_change_points(band, 1.0)
        labels = detect_change_points(band, 1.0)

        assert [c.length for c in chunks] == list(run_lengths(labels))
