"""Movement Segmenter - wavelet sub-band segmentation of movement tracks."""

__version__ = "0.3.0"

from . import constants, data, decomposition, exceptions, models, segmentation
from .data import TrackDataLoader
from .decomposition import WaveletDecomposer, decompose
from .models import (
    ChangePointConfig,
    Chunk,
    DecompositionConfig,
    Peak,
    PeakDetectionConfig,
    SegmentLabeling,
    SubBandSet,
)
from .pipeline import SegmentationPipeline, SegmentationResult
from .segmentation import (
    detect_change_points,
    find_peaks,
    segment_by_peak_extents,
    split_at_change_points,
    stitch_short_chunks,
)


def get_version() -> str:
    """Get the current version of movement_segmenter."""
    return __version__


__all__ = [
    # Version
    "get_version",
    # Models
    "ChangePointConfig",
    "Chunk",
    "DecompositionConfig",
    "Peak",
    "PeakDetectionConfig",
    "SegmentLabeling",
    "SubBandSet",
    # Decomposition
    "WaveletDecomposer",
    "decompose",
    # Segmentation
    "detect_change_points",
    "find_peaks",
    "segment_by_peak_extents",
    "split_at_change_points",
    "stitch_short_chunks",
    # Data Layer
    "TrackDataLoader",
    # Pipeline
    "SegmentationPipeline",
    "SegmentationResult",
    # Modules
    "constants",
    "data",
    "decomposition",
    "exceptions",
    "models",
    "segmentation",
]
