"""
Segmentation pipeline.

Runs the decomposition once and feeds the two independent branches:
- Branch A: approximation band -> peak detection -> peak-extent segments
- Branch B: detail band -> change points -> stitched segments

NOTE: Levels, heights and thresholds are never inferred here; they come
from the settings, chosen by inspecting the sub-bands of the track.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pandas as pd

from .constants import OutputFiles, TrackColumns
from .data import TrackDataLoader
from .decomposition import WaveletDecomposer
from .exceptions import MovementSegmenterError, ProcessingError
from .models import Chunk, Peak, SegmentLabeling, SubBandSet
from .segmentation import (
    check_same_length,
    detect_change_points,
    find_peaks,
    peaks_to_frame,
    segment_by_peak_extents,
    split_at_change_points,
    stitch_short_chunks,
)
from .settings import Settings, load_settings
from .validation import as_signal

logger = logging.getLogger(__name__)


@dataclass
class SegmentationResult:
    """
    Result of segmenting one signal.

    Attributes:
        signal: The analyzed movement metric
        bands: All approximation and detail sub-bands
        peaks: Peaks of the analyzed approximation band (branch A)
        peak_labels: Labeling from peak extents (branch A)
        chunks: Chunks of the analyzed detail band (branch B)
        change_labels: Labeling by change-point chunk (branch B, unstitched)
        stitched_labels: Labeling after stitching short chunks (branch B)
    """

    signal: np.ndarray
    bands: SubBandSet
    peaks: list[Peak]
    peak_labels: SegmentLabeling
    chunks: list[Chunk]
    change_labels: SegmentLabeling
    stitched_labels: SegmentLabeling

    def to_frame(self, annotation=None) -> pd.DataFrame:
        """
        Per-fix table of the signal and all labelings.

        Args:
            annotation: Optional hand-made labeling of the same fixes

        Returns:
            DataFrame with one row per fix

        Raises:
            DimensionMismatchError: If the annotation length differs
        """
        df = pd.DataFrame(
            {
                TrackColumns.FIX: np.arange(len(self.signal)),
                TrackColumns.SIGNAL: self.signal,
                TrackColumns.PEAK_SEGMENT: self.peak_labels,
                TrackColumns.CHANGE_SEGMENT: self.change_labels,
                TrackColumns.STITCHED_SEGMENT: self.stitched_labels,
            }
        )
        if annotation is not None:
            check_same_length(self.signal, annotation)
            df[TrackColumns.ANNOTATION] = np.asarray(annotation)
        return df

    def peaks_frame(self) -> pd.DataFrame:
        """Return the peaks as a DataFrame."""
        return peaks_to_frame(self.peaks)


class SegmentationPipeline:
    """
    Runs both segmentation branches over one signal.

    Each run is independent: nothing is carried over between calls to
    ``run``.
    """

    def __init__(self, settings: Settings):
        """
        Initialize the pipeline.

        Args:
            settings: Application settings
        """
        self.settings = settings
        self.decomposer = WaveletDecomposer(settings.decomposition.wavelet_filter)
        self.loader = TrackDataLoader(settings)
        self.logger = logging.getLogger(__name__)

    def run(self, signal) -> SegmentationResult:
        """
        Segment a signal with both branches.

        Args:
            signal: Movement metric, one value per fix

        Returns:
            SegmentationResult with the sub-bands, peaks and labelings

        Raises:
            ValidationError: If the signal or a parameter is invalid
            ProcessingError: If an unexpected error occurs
        """
        try:
            signal = as_signal(signal)
            self.logger.info(f"Segmenting {len(signal)} fixes")
            self.logger.info(f"Parameters: {self.settings.analysis_parameters()}")

            bands = self.decomposer.decompose(
                signal, self.settings.decomposition.levels
            )

            peaks, peak_labels = self._segment_by_peaks(bands)
            chunks, change_labels, stitched_labels = self._segment_by_change_points(
                bands
            )

            self.logger.info(
                f"Branch A: {len(peaks)} peaks, "
                f"{len(np.unique(peak_labels))} segments; "
                f"branch B: {len(chunks)} chunks, "
                f"{len(np.unique(stitched_labels))} stitched segments"
            )

            return SegmentationResult(
                signal=signal,
                bands=bands,
                peaks=peaks,
                peak_labels=peak_labels,
                chunks=chunks,
                change_labels=change_labels,
                stitched_labels=stitched_labels,
            )

        except MovementSegmenterError:
            raise
        except Exception as e:
            self.logger.error(f"Segmentation failed: {e}")
            raise ProcessingError(f"Segmentation failed: {e}") from e

    def _segment_by_peaks(
        self, bands: SubBandSet
    ) -> tuple[list[Peak], SegmentLabeling]:
        """Branch A: peaks of the chosen approximation band and their extents."""
        config = self.settings.peaks
        band = bands.approximation_band(config.level)
        peaks = find_peaks(
            band,
            min_height=config.min_height,
            min_distance=config.min_distance,
            max_count=config.max_count,
        )
        return peaks, segment_by_peak_extents(peaks, len(band))

    def _segment_by_change_points(
        self, bands: SubBandSet
    ) -> tuple[list[Chunk], SegmentLabeling, SegmentLabeling]:
        """Branch B: change points of the chosen detail band, then stitching."""
        config = self.settings.change_points
        band = bands.detail_band(config.level)
        chunks = split_at_change_points(band, config.threshold)
        change_labels = detect_change_points(band, config.threshold)
        stitched = stitch_short_chunks(chunks, config.min_segment_length)
        return chunks, change_labels, stitched

    def run_file(
        self, path: Path | None = None, column: str | None = None
    ) -> SegmentationResult:
        """
        Load a track and segment its movement metric.

        Args:
            path: Track file, defaults to the configured track_file
            column: Metric column, defaults to the configured speed_column

        Returns:
            SegmentationResult
        """
        signal = self.loader.load_signal(path, column)
        return self.run(signal)

    def save_results(
        self, result: SegmentationResult, output_dir: Path | None = None
    ) -> dict[str, Path]:
        """
        Write the per-fix segments, the peaks and the sub-bands to CSV files.

        Args:
            result: Result of ``run``
            output_dir: Target directory, defaults to the configured output_dir

        Returns:
            Mapping of output name to written file
        """
        output_dir = Path(output_dir or self.settings.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        sep = self.settings.csv_separator

        files = {
            "segments": output_dir / OutputFiles.SEGMENTS,
            "peaks": output_dir / OutputFiles.PEAKS,
            "bands": output_dir / OutputFiles.BANDS,
        }
        result.to_frame().to_csv(files["segments"], index=False, sep=sep)
        result.peaks_frame().to_csv(files["peaks"], index=False, sep=sep)
        result.bands.to_frame().to_csv(files["bands"], index=False, sep=sep)

        for name, path in files.items():
            self.logger.info(f"Saved {name} to {path}")
        return files


def run_pipeline(config_path: str, track_path: str | None = None) -> SegmentationResult:
    """
    Run the pipeline from a config file and save its outputs.

    Args:
        config_path: Path to the configuration YAML file
        track_path: Track file, overrides the configured track_file
    """
    settings = load_settings(Path(config_path))
    pipeline = SegmentationPipeline(settings)
    result = pipeline.run_file(Path(track_path) if track_path else None)
    pipeline.save_results(result)
    return result
