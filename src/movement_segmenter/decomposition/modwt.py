"""
Maximal overlap discrete wavelet transform (MODWT).

Unlike the decimated DWT, every MODWT band keeps the length of the input
signal, so a band position maps directly onto a fix of the track. The
pyramid algorithm uses the PyWavelets reconstruction filters of an
orthogonal wavelet rescaled by 1/sqrt(2) and circular boundary handling:

    W_j[t] = sum_l h_l V_{j-1}[(t - 2^(j-1) l) mod N]
    V_j[t] = sum_l g_l V_{j-1}[(t - 2^(j-1) l) mod N]

with V_0 = x. Energy is preserved:
sum(x^2) = sum_j sum(W_j^2) + sum(V_J^2).
"""

import logging
from typing import Protocol

import numpy as np
import pywt

from ..constants import WaveletConstants
from ..exceptions import InvalidParameterError
from ..models import SubBandSet
from ..validation import as_signal, require_int

logger = logging.getLogger(__name__)


class DecomposerProtocol(Protocol):
    """Protocol for sub-band decomposers."""

    def decompose(self, signal, levels: int) -> SubBandSet:
        """Decompose a signal into approximation and detail bands."""
        ...


def resolve_wavelet(wavelet_filter: str) -> pywt.Wavelet:
    """
    Look up an orthogonal wavelet by PyWavelets name or short alias.

    Args:
        wavelet_filter: Filter name, e.g. "haar", "db4", "sym4" or "la8"

    Returns:
        PyWavelets Wavelet object

    Raises:
        InvalidParameterError: If the name is unknown or the wavelet is not orthogonal
    """
    name = WaveletConstants.FILTER_ALIASES.get(wavelet_filter.lower(), wavelet_filter)
    try:
        wavelet = pywt.Wavelet(name)
    except ValueError as e:
        raise InvalidParameterError(f"Unknown wavelet filter: {wavelet_filter}") from e

    if not wavelet.orthogonal:
        raise InvalidParameterError(
            f"Wavelet filter {wavelet_filter} is not orthogonal"
        )
    return wavelet


def _circular_filter(values: np.ndarray, taps: np.ndarray, stride: int) -> np.ndarray:
    """Apply ``taps`` spaced ``stride`` samples apart with periodic wrap-around."""
    out = np.zeros_like(values)
    for l, coef in enumerate(taps):
        # np.roll(v, k)[t] == v[t - k]
        out += coef * np.roll(values, stride * l)
    return out


def modwt(signal, wavelet_filter: str, levels: int) -> SubBandSet:
    """
    Decompose a signal into MODWT approximation and detail bands.

    Args:
        signal: 1-D sequence of finite values
        wavelet_filter: Wavelet filter name (see resolve_wavelet)
        levels: Number of levels L

    Returns:
        SubBandSet with approximation and detail bands for levels 1..L

    Raises:
        InvalidParameterError: If levels < 1 or the filter is invalid
        EmptyInputError: If the signal is empty
    """
    levels = require_int(levels, "levels", 1)
    x = as_signal(signal)
    wavelet = resolve_wavelet(wavelet_filter)

    scaling = np.asarray(wavelet.rec_lo, dtype=float) / np.sqrt(2.0)
    detail_taps = np.asarray(wavelet.rec_hi, dtype=float) / np.sqrt(2.0)

    # Width of the equivalent filter at the deepest level
    filter_len = len(scaling)
    widest = (2**levels - 1) * (filter_len - 1) + 1
    if widest > len(x):
        logger.warning(
            f"Level {levels} filter ({widest} taps) is wider than the signal "
            f"({len(x)} samples); every coefficient wraps around the boundary"
        )

    approximation: dict[int, np.ndarray] = {}
    detail: dict[int, np.ndarray] = {}
    current = x
    for level in range(1, levels + 1):
        stride = 2 ** (level - 1)
        detail[level] = _circular_filter(current, detail_taps, stride)
        current = _circular_filter(current, scaling, stride)
        approximation[level] = current

    logger.debug(
        f"MODWT ({wavelet.name}) of {len(x)} samples into {levels} levels"
    )
    return SubBandSet(
        wavelet=wavelet.name,
        levels=levels,
        approximation=approximation,
        detail=detail,
    )


class WaveletDecomposer:
    """
    Produces approximation and detail sub-bands for one wavelet filter.

    The filter is checked when the decomposer is created, so a bad filter
    name fails before any track is loaded.
    """

    def __init__(self, wavelet_filter: str = WaveletConstants.DEFAULT_FILTER):
        """
        Initialize the decomposer.

        Args:
            wavelet_filter: Wavelet filter name or alias
        """
        self.wavelet_filter = wavelet_filter
        self.wavelet = resolve_wavelet(wavelet_filter)
        self.logger = logging.getLogger(__name__)

    def decompose(self, signal, levels: int) -> SubBandSet:
        """
        Decompose ``signal`` into ``levels`` levels.

        Args:
            signal: 1-D sequence of finite values
            levels: Number of levels L

        Returns:
            SubBandSet keyed 1..L
        """
        return modwt(signal, self.wavelet_filter, levels)


def decompose(signal, wavelet_filter: str, levels: int) -> SubBandSet:
    """Decompose ``signal`` with ``wavelet_filter`` into ``levels`` levels."""
    return modwt(signal, wavelet_filter, levels)
