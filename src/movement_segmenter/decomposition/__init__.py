"""
Multi-resolution decomposition.

This package produces the approximation and detail sub-bands the
segmentation algorithms operate on.
"""

from .modwt import (
    DecomposerProtocol,
    WaveletDecomposer,
    decompose,
    modwt,
    resolve_wavelet,
)

__all__ = [
    "DecomposerProtocol",
    "WaveletDecomposer",
    "decompose",
    "modwt",
    "resolve_wavelet",
]
