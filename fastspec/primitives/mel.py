"""
Mel-scale filterbank.

Provides HTK mel conversions, triangular filterbank construction and
application of a filterbank to linear magnitude spectra.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache

import numpy as np

from fastspec.constants import HTK_MEL_BASE, HTK_MEL_FACTOR
from fastspec.exceptions import ConfigurationError, DataError

from ._validation import validate_frame_size, validate_positive

_logger = logging.getLogger(__name__)


def hz_to_mel(frequencies: np.ndarray | float) -> np.ndarray:
    """
    Convert Hz to mel scale.

    mel = 2595 * log10(1 + f / 700)

    Parameters
    ----------
    frequencies : np.ndarray or float
        Frequencies in Hz.

    Returns
    -------
    np.ndarray
        Frequencies in mel scale.
    """
    frequencies = np.asarray(frequencies, dtype=np.float64)
    return HTK_MEL_FACTOR * np.log10(1.0 + frequencies / HTK_MEL_BASE)


def mel_to_hz(mels: np.ndarray | float) -> np.ndarray:
    """
    Convert mel scale to Hz.

    f = 700 * (10^(mel / 2595) - 1)

    Parameters
    ----------
    mels : np.ndarray or float
        Frequencies in mel scale.

    Returns
    -------
    np.ndarray
        Frequencies in Hz.
    """
    mels = np.asarray(mels, dtype=np.float64)
    return HTK_MEL_BASE * (10.0 ** (mels / HTK_MEL_FACTOR) - 1.0)


@dataclass(frozen=True, eq=False)
class MelFilterBank:
    """Triangular mel filterbank.

    Attributes:
        num_filters: Number of mel bands (rows)
        sample_rate: Sample rate in Hz
        frame_size: FFT frame size the columns refer to
        weights: Read-only matrix of shape (num_filters, frame_size // 2 + 1)
        boundaries_hz: The num_filters + 2 triangle corner frequencies
    """

    num_filters: int
    sample_rate: float
    frame_size: int
    weights: np.ndarray = field(repr=False)
    boundaries_hz: np.ndarray = field(repr=False)

    @property
    def center_frequencies(self) -> np.ndarray:
        """Peak frequency of each filter in Hz."""
        return self.boundaries_hz[1:-1]


@lru_cache(maxsize=64)
def _compute_mel_weights(
    num_filters: int, sample_rate: float, frame_size: int
) -> tuple[np.ndarray, np.ndarray]:
    n_freqs = frame_size // 2 + 1

    mel_points = np.linspace(
        hz_to_mel(0.0), hz_to_mel(sample_rate / 2.0), num_filters + 2
    )
    hz_points = mel_to_hz(mel_points)

    # Shape: (num_filters, 1) for broadcasting with (1, n_freqs)
    f_lower = hz_points[:-2, np.newaxis]
    f_center = hz_points[1:-1, np.newaxis]
    f_upper = hz_points[2:, np.newaxis]
    freqs = (np.arange(n_freqs) * (sample_rate / frame_size))[np.newaxis, :]

    rising = (freqs - f_lower) / (f_center - f_lower)
    falling = (f_upper - freqs) / (f_upper - f_center)

    in_rise = (freqs >= f_lower) & (freqs <= f_center)
    in_fall = (freqs >= f_center) & (freqs <= f_upper)
    weights = np.where(in_rise, rising, np.where(in_fall, falling, 0.0))

    weights.flags.writeable = False
    hz_points.flags.writeable = False
    return weights, hz_points


def mel_filterbank(
    num_filters: int,
    sample_rate: float,
    frame_size: int,
) -> MelFilterBank:
    """
    Create a triangular mel filterbank.

    Boundary points are evenly spaced in mel between 0 Hz and the
    Nyquist frequency. Filter ``i`` rises linearly (in Hz) from
    boundary ``i`` to ``i + 1`` and falls back to zero at ``i + 2``,
    evaluated at the FFT bin frequencies ``j * sample_rate / frame_size``.

    Results are cached for repeated calls with identical parameters.

    Parameters
    ----------
    num_filters : int
        Number of mel bands. Must be in [1, frame_size // 2].
    sample_rate : float
        Sample rate in Hz.
    frame_size : int
        FFT size (power of two).

    Returns
    -------
    MelFilterBank

    Raises
    ------
    ConfigurationError
        If any parameter is out of range.
    """
    validate_frame_size(frame_size)
    validate_positive(sample_rate, "sample_rate")
    if (
        isinstance(num_filters, bool)
        or int(num_filters) != num_filters
        or not 1 <= num_filters <= frame_size // 2
    ):
        raise ConfigurationError(
            f"num_filters must be an integer in [1, {frame_size // 2}], "
            f"got {num_filters!r}"
        )

    weights, hz_points = _compute_mel_weights(
        int(num_filters), float(sample_rate), int(frame_size)
    )
    _logger.debug(
        "Built mel filterbank: %d filters, sr=%s, frame_size=%d",
        num_filters,
        sample_rate,
        frame_size,
    )
    return MelFilterBank(
        num_filters=int(num_filters),
        sample_rate=float(sample_rate),
        frame_size=int(frame_size),
        weights=weights,
        boundaries_hz=hz_points,
    )


def apply_mel(spectrum: np.ndarray, bank: MelFilterBank) -> np.ndarray:
    """
    Project a linear magnitude spectrum onto mel bands.

    Each output value is the dot product of the spectrum with one filter
    row. Spectra of N/2 bins (Nyquist dropped) and N/2 + 1 bins are both
    accepted; missing trailing bins contribute nothing.

    Parameters
    ----------
    spectrum : np.ndarray
        Magnitudes of shape (n_bins,) or (n_frames, n_bins).
    bank : MelFilterBank
        Filterbank from :func:`mel_filterbank`.

    Returns
    -------
    np.ndarray
        Mel magnitudes of shape (num_filters,) or (n_frames, num_filters).
    """
    spectrum = np.asarray(spectrum, dtype=np.float64)
    n_bins = spectrum.shape[-1]
    if n_bins > bank.weights.shape[1]:
        raise DataError(
            f"Spectrum has {n_bins} bins but the filterbank covers "
            f"{bank.weights.shape[1]}"
        )
    return spectrum @ bank.weights[:, :n_bins].T


def bin_frequencies(
    scale: str,
    frame_size: int,
    sample_rate: float,
    num_filters: int | None = None,
) -> np.ndarray:
    """
    Frequency in Hz represented by each intensity row.

    Parameters
    ----------
    scale : {'linear', 'mel'}
        Frequency scale of the rows.
    frame_size : int
        FFT size.
    sample_rate : float
        Sample rate in Hz.
    num_filters : int, optional
        Mel band count (required for ``scale='mel'``).

    Returns
    -------
    np.ndarray
        Linear bin frequencies (frame_size // 2 values) or mel filter
        center frequencies (num_filters values).
    """
    if scale == "linear":
        return np.arange(frame_size // 2) * (sample_rate / frame_size)
    if scale == "mel":
        if num_filters is None:
            raise ConfigurationError("num_filters is required for the mel scale")
        return mel_filterbank(num_filters, sample_rate, frame_size).center_frequencies
    raise ConfigurationError(f"Unknown scale: '{scale}'. Supported: 'linear', 'mel'")


__all__ = [
    "hz_to_mel",
    "mel_to_hz",
    "MelFilterBank",
    "mel_filterbank",
    "apply_mel",
    "bin_frequencies",
]
