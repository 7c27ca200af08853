"""
Track data loading functionality.

This module provides a clean interface for loading a recorded track and
selecting the movement metric to segment.
"""

import logging
from pathlib import Path
from typing import Protocol

import numpy as np
import pandas as pd

from ..constants import CSVConstants
from ..exceptions import DataLoadError
from ..settings import Settings

logger = logging.getLogger(__name__)


class TrackLoaderProtocol(Protocol):
    """Protocol for track loaders."""

    def load_signal(
        self, path: Path | None = None, column: str | None = None
    ) -> np.ndarray:
        """Load the movement metric of a track."""
        ...


class TrackDataLoader:
    """
    Handles loading of track data from delimited files.

    Columns are selected by name, never by position.
    """

    def __init__(self, settings: Settings):
        """
        Initialize the data loader.

        Args:
            settings: Application settings containing paths and column names
        """
        self.settings = settings
        self.logger = logging.getLogger(__name__)

    def _resolve_path(self, path: Path | None) -> Path:
        track_file = path if path is not None else self.settings.track_file
        if track_file is None:
            raise DataLoadError("No track file given and none configured")
        return Path(track_file)

    def load_track(self, path: Path | None = None) -> pd.DataFrame:
        """
        Load a track file.

        Args:
            path: Track file, defaults to the configured track_file

        Returns:
            DataFrame with one row per fix

        Raises:
            DataLoadError: If loading fails
        """
        track_file = self._resolve_path(path)
        if not track_file.exists():
            raise DataLoadError(f"Track file not found: {track_file}")

        try:
            self.logger.info(f"Loading track from {track_file}")
            df = pd.read_csv(
                track_file,
                sep=self.settings.csv_separator,
                encoding=CSVConstants.DEFAULT_ENCODING,
            )
        except Exception as e:
            raise DataLoadError(f"Failed to load track {track_file}: {e}") from e

        self.logger.info(f"Loaded {len(df)} fixes")
        return df

    def load_signal(
        self, path: Path | None = None, column: str | None = None
    ) -> np.ndarray:
        """
        Load the named movement metric of a track as a signal.

        Every track row yields one value, so fix indices match row
        positions.

        Args:
            path: Track file, defaults to the configured track_file
            column: Metric column, defaults to the configured speed_column

        Returns:
            Float array with one value per track row

        Raises:
            DataLoadError: If the column is absent, empty, or has missing or
                non-numeric values
        """
        column = column or self.settings.speed_column
        df = self.load_track(path)

        if column not in df.columns:
            raise DataLoadError(
                f"Column '{column}' not found; available: {list(df.columns)}"
            )

        values = pd.to_numeric(df[column], errors="coerce")
        if values.empty:
            raise DataLoadError(f"Column '{column}' has no values")

        missing = values.index[values.isna()]
        if len(missing):
            rows = ", ".join(str(row) for row in missing[:10])
            raise DataLoadError(
                f"Column '{column}' has {len(missing)} missing or non-numeric "
                f"fixes (rows {rows})"
            )

        return values.to_numpy(dtype=float)

    def track_exists(self, path: Path | None = None) -> bool:
        """
        Check if a track file exists.

        Args:
            path: Track file, defaults to the configured track_file

        Returns:
            True if the file exists, False otherwise
        """
        try:
            return self._resolve_path(path).exists()
        except DataLoadError:
            return False
