"""Unit tests for track loading."""

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from movement_segmenter.data import TrackDataLoader
from movement_segmenter.exceptions import DataLoadError
from movement_segmenter.settings import Settings


class TestTrackDataLoader:
    """Test loading a movement metric by column name."""

    def test_load_signal(self, track_file: Path, phase_signal: np.ndarray):
        """Test that the speed column is selected by name."""
        loader = TrackDataLoader(Settings())

        signal = loader.load_signal(track_file)

        assert signal == pytest.approx(phase_signal)

    def test_load_other_column(self, track_file: Path):
        """Test selecting another column."""
        loader = TrackDataLoader(Settings())

        signal = loader.load_signal(track_file, column="lat")

        assert signal[0] == pytest.approx(50.0)
        assert signal[-1] == pytest.approx(55.0)

    def test_configured_track_and_column(self, track_file: Path):
        """Test that the configured track file and column are used by default."""
        loader = TrackDataLoader(Settings(track_file=track_file, speed_column="lon"))

        signal = loader.load_signal()

        assert signal[0] == pytest.approx(10.0)

    def test_one_value_per_row(self, track_file: Path):
        """Test that the signal keeps one value per track row."""
        loader = TrackDataLoader(Settings())

        signal = loader.load_signal(track_file)

        assert len(signal) == len(loader.load_track(track_file))

    def test_custom_separator(self, tmp_path: Path):
        """Test reading a semicolon-separated track."""
        track_path = tmp_path / "track.csv"
        track_path.write_text("time;speed\n0;1.5\n1;2.5\n")

        signal = TrackDataLoader(Settings(csv_separator=";")).load_signal(track_path)

        assert list(signal) == [1.5, 2.5]

    def test_load_track(self, track_file: Path):
        """Test loading the full track table."""
        df = TrackDataLoader(Settings()).load_track(track_file)

        assert list(df.columns) == ["timestamp", "lon", "lat", "speed"]
        assert len(df) == 900

    def test_track_exists(self, track_file: Path, tmp_path: Path):
        """Test the existence check."""
        loader = TrackDataLoader(Settings())

        assert loader.track_exists(track_file)
        assert not loader.track_exists(tmp_path / "missing.csv")
        assert not loader.track_exists()


class TestTrackDataLoaderErrors:
    """Test load failures."""

    def test_missing_file(self, tmp_path: Path):
        """Test that a missing file raises DataLoadError."""
        with pytest.raises(DataLoadError):
            TrackDataLoader(Settings()).load_signal(tmp_path / "missing.csv")

    def test_no_track_configured(self):
        """Test that no path and no configured track raises DataLoadError."""
        with pytest.raises(DataLoadError):
            TrackDataLoader(Settings()).load_signal()

    def test_missing_column(self, track_file: Path):
        """Test that an absent column raises DataLoadError."""
        with pytest.raises(DataLoadError, match="ground_speed"):
            TrackDataLoader(Settings()).load_signal(track_file, column="ground_speed")

    def test_missing_values_rejected(self, tmp_path: Path):
        """Test that fixes without a numeric value are reported by row."""
        track_path = tmp_path / "gappy.csv"
        pd.DataFrame({"speed": [1.0, None, 3.0, "n/a", 5.0]}).to_csv(
            track_path, index=False
        )

        with pytest.raises(DataLoadError, match=r"2 missing .* \(rows 1, 3\)"):
            TrackDataLoader(Settings()).load_signal(track_path)

    def test_header_only_column(self, tmp_path: Path):
        """Test that a column without rows raises DataLoadError."""
        track_path = tmp_path / "header.csv"
        track_path.write_text("speed\n")

        with pytest.raises(DataLoadError, match="no values"):
            TrackDataLoader(Settings()).load_signal(track_path)

    def test_column_without_values(self, tmp_path: Path):
        """Test that a column with no numeric values raises DataLoadError."""
        track_path = tmp_path / "empty.csv"
        track_path.write_text("speed\nn/a\nn/a\n")

        with pytest.raises(DataLoadError):
            TrackDataLoader(Settings()).load_signal(track_path)
