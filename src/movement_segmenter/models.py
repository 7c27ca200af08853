"""
Data models for the Movement Segmenter package.

This module defines all the core data structures used throughout the application,
ensuring type safety and data validation using Pydantic models.
"""

import math
from dataclasses import dataclass, field

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import SegmentationDefaults, WaveletConstants
from .exceptions import InvalidParameterError

# SegmentLabeling is a typed alias for a 1-D integer numpy array holding one
# segment id per sample. Ids form contiguous, non-decreasing runs.
SegmentLabeling = np.ndarray


class Peak(BaseModel):
    """A local maximum of a sub-band with its prominence and extent."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="Position of the local maximum")
    height: float = Field(..., description="Sample value at the peak")
    prominence: float = Field(
        ..., ge=0, description="Height above the higher of the two bounding troughs"
    )
    left_bound: int = Field(
        ..., ge=0, description="Left crossing of height - prominence / 2"
    )
    right_bound: int = Field(
        ..., ge=0, description="Right crossing of height - prominence / 2"
    )

    @model_validator(mode="after")
    def check_bounds_enclose_index(self) -> "Peak":
        """Validate that the bounds enclose the peak index."""
        if not self.left_bound <= self.index <= self.right_bound:
            raise ValueError(
                f"Bounds ({self.left_bound}, {self.right_bound}) "
                f"do not enclose peak index {self.index}"
            )
        return self

    @property
    def width(self) -> int:
        """Number of samples spanned by the half-prominence bounds."""
        return self.right_bound - self.left_bound + 1


@dataclass(frozen=True)
class Chunk:
    """A contiguous sub-range of a sequence produced by splitting at change points."""

    start: int
    length: int
    values: np.ndarray = field(repr=False)

    @property
    def end(self) -> int:
        """Inclusive index of the last sample of the chunk."""
        return self.start + self.length - 1


@dataclass(frozen=True)
class SubBandSet:
    """
    Approximation and detail sub-bands of one decomposition run.

    Attributes:
        wavelet: PyWavelets name of the filter used
        levels: Number of decomposition levels (L)
        approximation: Level (1..L) to low-frequency band
        detail: Level (1..L) to high-frequency band
    """

    wavelet: str
    levels: int
    approximation: dict[int, np.ndarray]
    detail: dict[int, np.ndarray]

    def __len__(self) -> int:
        return len(self.approximation[1]) if self.approximation else 0

    def _check_level(self, level: int) -> None:
        if not 1 <= level <= self.levels:
            raise InvalidParameterError(
                f"Level {level} is outside the decomposed range [1, {self.levels}]"
            )

    def approximation_band(self, level: int) -> np.ndarray:
        """Return the approximation band at ``level``."""
        self._check_level(level)
        return self.approximation[level]

    def detail_band(self, level: int) -> np.ndarray:
        """Return the detail band at ``level``."""
        self._check_level(level)
        return self.detail[level]

    def to_frame(self) -> pd.DataFrame:
        """Return all bands as columns of a DataFrame (one row per sample)."""
        columns: dict[str, np.ndarray] = {}
        for level in range(1, self.levels + 1):
            columns[f"approximation_{level}"] = self.approximation[level]
        for level in range(1, self.levels + 1):
            columns[f"detail_{level}"] = self.detail[level]
        return pd.DataFrame(columns)


class DecompositionConfig(BaseModel):
    """Configuration for the wavelet decomposition."""

    wavelet_filter: str = Field(
        WaveletConstants.DEFAULT_FILTER, description="Wavelet filter name"
    )
    levels: int = Field(
        WaveletConstants.DEFAULT_LEVELS, description="Number of decomposition levels"
    )

    @field_validator("levels")
    @classmethod
    def check_levels(cls, v: int) -> int:
        """Validate that at least one level is requested."""
        if v < 1:
            raise ValueError("levels must be at least 1")
        return v


class PeakDetectionConfig(BaseModel):
    """Configuration for peak detection on an approximation band."""

    level: int = Field(
        SegmentationDefaults.PEAK_LEVEL, description="Approximation band to analyze"
    )
    min_height: float = Field(
        SegmentationDefaults.MIN_PEAK_HEIGHT, description="Minimum peak height"
    )
    min_distance: int = Field(
        SegmentationDefaults.MIN_PEAK_DISTANCE,
        description="Minimum index separation between retained peaks",
    )
    max_count: int | None = Field(
        None, description="Cap on the number of retained peaks (None = unbounded)"
    )

    @field_validator("level")
    @classmethod
    def check_level(cls, v: int) -> int:
        """Validate the band level."""
        if v < 1:
            raise ValueError("level must be at least 1")
        return v

    @field_validator("min_height")
    @classmethod
    def check_min_height(cls, v: float) -> float:
        """Validate that the minimum height is finite."""
        if not math.isfinite(v):
            raise ValueError("min_height must be finite")
        return v

    @field_validator("min_distance")
    @classmethod
    def check_min_distance(cls, v: int) -> int:
        """Validate that the minimum distance is not negative."""
        if v < 0:
            raise ValueError("min_distance must be >= 0")
        return v

    @field_validator("max_count")
    @classmethod
    def check_max_count(cls, v: int | None) -> int | None:
        """Validate the peak cap."""
        if v is not None and v < 1:
            raise ValueError("max_count must be >= 1 or null")
        return v


class ChangePointConfig(BaseModel):
    """Configuration for change-point detection and stitching on a detail band."""

    level: int = Field(
        SegmentationDefaults.CHANGE_LEVEL, description="Detail band to analyze"
    )
    threshold: float = Field(
        SegmentationDefaults.CHANGE_THRESHOLD,
        description="Minimum jump in magnitude that marks a change point",
    )
    min_segment_length: int = Field(
        SegmentationDefaults.MIN_SEGMENT_LENGTH,
        description="Chunks shorter than this are stitched",
    )

    @field_validator("level", "min_segment_length")
    @classmethod
    def check_positive(cls, v: int, info) -> int:
        """Validate that levels and lengths are at least 1."""
        if v < 1:
            raise ValueError(f"{info.field_name} must be at least 1")
        return v

    @field_validator("threshold")
    @classmethod
    def check_threshold(cls, v: float) -> float:
        """Validate that the threshold is strictly positive."""
        if math.isnan(v) or v <= 0:
            raise ValueError("threshold must be > 0")
        return v
