"""
Shared pytest fixtures for Movement Segmenter tests.

This module provides reusable fixtures for:
- Small signals with known peaks, change points and chunks
- A synthetic three-phase speed track
- Settings configurations and config files
- Temporary track files
"""

from pathlib import Path

import numpy as np
import pandas as pd
import pytest
import yaml

from movement_segmenter.models import (
    ChangePointConfig,
    DecompositionConfig,
    PeakDetectionConfig,
)
from movement_segmenter.settings import Settings

# ============================================================================
# Data Fixtures - Small Signals
# ============================================================================


@pytest.fixture
def two_peak_signal() -> np.ndarray:
    """Two isolated spikes of height 5 at indices 3 and 7."""
    return np.array([0, 0, 0, 5, 0, 0, 0, 5, 0, 0, 0], dtype=float)


@pytest.fixture
def step_band() -> np.ndarray:
    """Detail band with a single rise in magnitude after index 2."""
    return np.array([0, 0, 0, 2, 0, 0], dtype=float)


@pytest.fixture
def chunk_lengths() -> list[int]:
    """Long, short, short, long chunk lengths."""
    return [600, 100, 50, 700]


@pytest.fixture
def random_signal() -> np.ndarray:
    """Reproducible noisy signal for property checks."""
    rng = np.random.default_rng(42)
    return np.cumsum(rng.normal(size=400))


# ============================================================================
# Data Fixtures - Tracks
# ============================================================================


@pytest.fixture
def phase_signal() -> np.ndarray:
    """
    Provide a three-phase speed profile with 900 fixes.

    Slow (0.5) for 300 fixes, fast (5.0) for 300 fixes, slow again for 300
    fixes, with a small deterministic ripple.
    """
    speed = np.concatenate([np.full(300, 0.5), np.full(300, 5.0), np.full(300, 0.5)])
    return speed + 0.05 * np.sin(np.arange(900))


@pytest.fixture
def track_file(tmp_path: Path, phase_signal: np.ndarray) -> Path:
    """Write the three-phase profile to a track CSV with extra columns."""
    track_path = tmp_path / "track.csv"
    pd.DataFrame(
        {
            "timestamp": np.arange(len(phase_signal)) * 3600,
            "lon": np.linspace(10.0, 20.0, len(phase_signal)),
            "lat": np.linspace(50.0, 55.0, len(phase_signal)),
            "speed": phase_signal,
        }
    ).to_csv(track_path, index=False)
    return track_path


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def analysis_settings(tmp_path: Path) -> Settings:
    """Settings tuned for the three-phase profile."""
    return Settings(
        output_dir=tmp_path / "output",
        decomposition=DecompositionConfig(wavelet_filter="haar", levels=3),
        peaks=PeakDetectionConfig(level=3, min_height=2.0, min_distance=50),
        change_points=ChangePointConfig(
            level=1, threshold=1.0, min_segment_length=50
        ),
    )


@pytest.fixture
def sample_config_dict() -> dict:
    """Provide a sample configuration dictionary."""
    return {
        "speed_column": "speed",
        "output_dir": "output",
        "decomposition": {"wavelet_filter": "haar", "levels": 3},
        "peaks": {"level": 3, "min_height": 2.0, "min_distance": 50},
        "change_points": {"level": 1, "threshold": 1.0, "min_segment_length": 50},
    }


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Create a temporary YAML config file path for testing."""
    return tmp_path / "config.yaml"


@pytest.fixture
def sample_config_file(temp_config_file: Path, sample_config_dict: dict) -> Path:
    """Create a temporary config file with sample data."""
    with open(temp_config_file, "w") as f:
        yaml.dump(sample_config_dict, f)
    return temp_config_file
